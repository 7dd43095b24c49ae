# backend/wellclass/services/teacher_service.py
"""Public teacher directory: available profiles and single teacher lookups."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import Modality
from ..core.exceptions import NotFoundException
from ..models.teacher_profile import TeacherProfile
from ..repositories import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)


class TeacherService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.profile_repository = RepositoryFactory.create_teacher_profile_repository(db)

    @BaseService.measure_operation("list_teachers")
    def list_teachers(self, modality: Optional[Modality] = None) -> List[TeacherProfile]:
        return self.profile_repository.list_available(Modality(modality).value if modality else None)

    @BaseService.measure_operation("get_teacher")
    def get_teacher(self, teacher_id: str) -> TeacherProfile:
        """
        Profile of one teacher, available or not.

        Raises:
            NotFoundException: No teacher with that id, or the teacher has no profile yet
        """
        profile = self.profile_repository.get_by_user_id(teacher_id)
        if not profile or not profile.user or not profile.user.is_teacher:
            raise NotFoundException("Teacher not found")
        return profile
