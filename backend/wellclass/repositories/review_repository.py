# backend/wellclass/repositories/review_repository.py
"""
Repository for reviews.

Follows repository pattern: no business logic, DB-only operations.
"""

import logging
from typing import List, Optional, cast

from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.review import Review
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Data access for `Review`."""

    def __init__(self, db: Session):
        super().__init__(db, Review)
        self.logger = logging.getLogger(__name__)

    def exists_for_booking(self, booking_id: str) -> bool:
        return self.exists(booking_id=booking_id)

    def ratings_for_teacher(self, teacher_id: str) -> List[int]:
        """Every rating the teacher has received."""
        try:
            rows = self.db.query(Review.rating).filter(Review.teacher_id == teacher_id).all()
            return [int(row[0]) for row in rows]
        except Exception as e:
            self.logger.error(f"Error reading ratings for teacher {teacher_id}: {e}")
            raise RepositoryException(f"Failed to read ratings: {e}")

    def list_reviews(
        self,
        *,
        teacher_id: Optional[str] = None,
        booking_id: Optional[str] = None,
    ) -> List[Review]:
        try:
            query = self.db.query(Review)
            if teacher_id:
                query = query.filter(Review.teacher_id == teacher_id)
            if booking_id:
                query = query.filter(Review.booking_id == booking_id)
            return cast(List[Review], query.order_by(Review.created_at.desc(), Review.id.desc()).all())
        except Exception as e:
            self.logger.error(f"Error listing reviews: {e}")
            raise RepositoryException(f"Failed to list reviews: {e}")
