# backend/wellclass/repositories/teacher_profile_repository.py
"""Teacher profile repository, including the rating aggregate writes."""

from decimal import Decimal
import logging
from typing import List, Optional, cast

from sqlalchemy.orm import Session, joinedload

from ..core.enums import RoleName
from ..core.exceptions import RepositoryException
from ..models.teacher_profile import TeacherProfile
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TeacherProfileRepository(BaseRepository[TeacherProfile]):
    def __init__(self, db: Session):
        super().__init__(db, TeacherProfile)
        self.logger = logging.getLogger(__name__)

    def get_by_user_id(self, user_id: str) -> Optional[TeacherProfile]:
        try:
            return cast(
                Optional[TeacherProfile],
                self.db.query(TeacherProfile)
                .options(joinedload(TeacherProfile.user))
                .filter(TeacherProfile.user_id == user_id)
                .first(),
            )
        except Exception as e:
            self.logger.error(f"Error getting teacher profile for user {user_id}: {e}")
            raise RepositoryException(f"Failed to get teacher profile: {e}")

    def list_available(self, modality: Optional[str] = None) -> List[TeacherProfile]:
        """
        Bookable teacher profiles, best rated first.

        Specialties live in a JSON column, so the modality filter runs in
        Python to stay portable across dialects.
        """
        try:
            profiles = (
                self.db.query(TeacherProfile)
                .join(User, TeacherProfile.user_id == User.id)
                .options(joinedload(TeacherProfile.user))
                .filter(TeacherProfile.is_available.is_(True), User.role == RoleName.TEACHER.value)
                .order_by(TeacherProfile.rating.desc(), TeacherProfile.total_reviews.desc(), User.name)
                .all()
            )
        except Exception as e:
            self.logger.error(f"Error listing available teachers: {e}")
            raise RepositoryException(f"Failed to list teachers: {e}")
        if modality:
            profiles = [p for p in profiles if modality in (p.specialties or [])]
        return profiles

    def lock_for_update(self, user_id: str) -> Optional[TeacherProfile]:
        """
        Load the profile with ``SELECT ... FOR UPDATE``.

        SQLite has no row locks; the plain read is used there.
        """
        try:
            query = self.db.query(TeacherProfile).filter(TeacherProfile.user_id == user_id)
            if self.dialect_name != "sqlite":
                query = query.with_for_update()
            return cast(Optional[TeacherProfile], query.first())
        except Exception as e:
            self.logger.error(f"Error locking teacher profile for user {user_id}: {e}")
            raise RepositoryException(f"Failed to lock teacher profile: {e}")

    def update_rating_aggregate(self, profile: TeacherProfile, rating: Decimal, total_reviews: int) -> TeacherProfile:
        try:
            profile.rating = rating
            profile.total_reviews = total_reviews
            self.db.flush()
            return profile
        except Exception as e:
            self.logger.error(f"Error updating rating aggregate for profile {profile.id}: {e}")
            raise RepositoryException(f"Failed to update rating aggregate: {e}")
