# backend/wellclass/repositories/class_request_repository.py
import logging
from typing import List, Optional, cast

from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.class_request import ClassRequest
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ClassRequestRepository(BaseRepository[ClassRequest]):
    def __init__(self, db: Session):
        super().__init__(db, ClassRequest)
        self.logger = logging.getLogger(__name__)

    def list_class_requests(
        self,
        *,
        student_id: Optional[str] = None,
        modality: Optional[str] = None,
        only_active: bool = False,
    ) -> List[ClassRequest]:
        """Class requests matching the filters, newest first."""
        try:
            query = self.db.query(ClassRequest)
            if student_id:
                query = query.filter(ClassRequest.student_id == student_id)
            if modality:
                query = query.filter(ClassRequest.modality == modality)
            if only_active:
                query = query.filter(ClassRequest.is_active.is_(True))
            return cast(
                List[ClassRequest],
                query.order_by(ClassRequest.created_at.desc(), ClassRequest.id.desc()).all(),
            )
        except Exception as e:
            self.logger.error(f"Error listing class requests: {e}")
            raise RepositoryException(f"Failed to list class requests: {e}")
