# backend/wellclass/services/posted_time_service.py
"""Open time slots that teachers publish for students to browse."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import Modality
from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.posted_time import PostedTime
from ..principal import UserPrincipal
from ..repositories import RepositoryFactory
from ..schemas.posted_time import PostedTimeCreate
from .base import BaseService

logger = logging.getLogger(__name__)


class PostedTimeService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_posted_time_repository(db)

    @BaseService.measure_operation("create_posted_time")
    def create_posted_time(self, principal: UserPrincipal, data: PostedTimeCreate) -> PostedTime:
        if not principal.is_teacher:
            raise ForbiddenException("Only teachers can post available times")
        teacher_id = data.teacher_id or principal.user_id
        if teacher_id != principal.user_id:
            raise ForbiddenException("You can only post times for yourself")

        with self.transaction():
            posted = self.repository.create(
                teacher_id=teacher_id,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                modality=Modality(data.modality).value,
                price=data.price,
                description=data.description,
                contact_phone=data.contact_phone,
                contact_email=str(data.contact_email) if data.contact_email else None,
            )
        self.logger.info(f"Teacher {teacher_id} posted time {posted.id} on {posted.date}")
        return posted

    @BaseService.measure_operation("list_posted_times")
    def list_posted_times(
        self,
        principal: UserPrincipal,
        *,
        teacher_id: Optional[str] = None,
        modality: Optional[Modality] = None,
        only_available: bool = False,
    ) -> List[PostedTime]:
        """
        Posted times ordered by date.

        Teachers only see their own posts; students browse everyone's.
        """
        if principal.is_teacher:
            teacher_id = principal.user_id
        return self.repository.list_posted_times(
            teacher_id=teacher_id,
            modality=Modality(modality).value if modality else None,
            only_available=only_available,
        )

    @BaseService.measure_operation("delete_posted_time")
    def delete_posted_time(self, principal: UserPrincipal, posted_time_id: str) -> None:
        posted = self.repository.get_by_id(posted_time_id, load_relationships=False)
        if not posted:
            raise NotFoundException("Posted time not found")
        if posted.teacher_id != principal.user_id:
            raise ForbiddenException("You can only delete your own posted times")
        with self.transaction():
            self.repository.delete(posted_time_id)
        self.logger.info(f"Posted time {posted_time_id} deleted by {principal.user_id}")
