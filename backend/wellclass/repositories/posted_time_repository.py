# backend/wellclass/repositories/posted_time_repository.py
import logging
from typing import List, Optional, cast

from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.posted_time import PostedTime
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PostedTimeRepository(BaseRepository[PostedTime]):
    def __init__(self, db: Session):
        super().__init__(db, PostedTime)
        self.logger = logging.getLogger(__name__)

    def list_posted_times(
        self,
        *,
        teacher_id: Optional[str] = None,
        modality: Optional[str] = None,
        only_available: bool = False,
    ) -> List[PostedTime]:
        """Posted times ordered by date, then start time."""
        try:
            query = self.db.query(PostedTime)
            if teacher_id:
                query = query.filter(PostedTime.teacher_id == teacher_id)
            if modality:
                query = query.filter(PostedTime.modality == modality)
            if only_available:
                query = query.filter(PostedTime.is_available.is_(True))
            return cast(
                List[PostedTime],
                query.order_by(PostedTime.date.asc(), PostedTime.start_time.asc()).all(),
            )
        except Exception as e:
            self.logger.error(f"Error listing posted times: {e}")
            raise RepositoryException(f"Failed to list posted times: {e}")
