# backend/wellclass/services/review_service.py
"""
Review Service for Wellclass.

Records one review per completed booking and keeps the teacher's rating
aggregate in step. The aggregate is always recomputed from every stored
rating while the teacher profile row is locked, so concurrent reviews for
the same teacher cannot lose an update.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import (
    DuplicateReviewException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    RepositoryException,
    ValidationException,
)
from ..models.booking import BookingStatus
from ..models.review import Review
from ..models.teacher_profile import TeacherProfile
from ..principal import UserPrincipal
from ..repositories import RepositoryFactory
from .base import BaseService
from .ratings_math import compute_rating_aggregate

logger = logging.getLogger(__name__)


class ReviewService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_review_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)

    @BaseService.measure_operation("record_review")
    def record_review(
        self,
        principal: UserPrincipal,
        booking_id: str,
        rating: int,
        comment: Optional[str] = None,
    ) -> Review:
        """
        Submit a review for a completed booking.

        Raises:
            ValidationException: Rating outside 1..5 or comment too long
            ForbiddenException: Caller is not a student or not the booking's student
            NotFoundException: Unknown booking
            InvalidStateException: Booking is not COMPLETED
            DuplicateReviewException: Booking already has a review
        """
        if rating is None or isinstance(rating, bool) or not 1 <= int(rating) <= 5:
            raise ValidationException("Rating must be an integer between 1 and 5")
        comment = self._clean_comment(comment)

        if not principal.is_student:
            raise ForbiddenException("Only students can submit reviews")

        booking = self.booking_repository.get_by_id(booking_id, load_relationships=False)
        if not booking:
            raise NotFoundException("Booking not found")
        if booking.student_id != principal.user_id:
            raise ForbiddenException("You can only review your own booking")
        if booking.status != BookingStatus.COMPLETED:
            raise InvalidStateException(
                "Only completed bookings can be reviewed",
                current_status=booking.status,
            )
        if self.repository.exists_for_booking(booking_id):
            raise DuplicateReviewException(booking_id)

        try:
            with self.transaction():
                profile = self.teacher_profile_repository.lock_for_update(booking.teacher_id)
                review = self.repository.create(
                    booking_id=booking.id,
                    student_id=booking.student_id,
                    teacher_id=booking.teacher_id,
                    rating=int(rating),
                    comment=comment,
                )
                self._refresh_aggregate(booking.teacher_id, profile)
        except RepositoryException as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise DuplicateReviewException(booking_id) from exc
            raise

        self.logger.info(f"Review {review.id} recorded for booking {booking_id} (rating {review.rating})")
        return review

    @BaseService.measure_operation("list_reviews")
    def list_reviews(self, *, teacher_id: Optional[str] = None, booking_id: Optional[str] = None) -> List[Review]:
        """Reviews for a teacher or a booking, newest first."""
        if not teacher_id and not booking_id:
            raise ValidationException("teacher_id or booking_id is required")
        return self.repository.list_reviews(teacher_id=teacher_id, booking_id=booking_id)

    @BaseService.measure_operation("recompute_teacher_rating")
    def recompute_teacher_rating(self, teacher_id: str) -> TeacherProfile:
        """Rebuild the aggregate from stored reviews; safe to run any number of times."""
        with self.transaction():
            profile = self.teacher_profile_repository.lock_for_update(teacher_id)
            if not profile:
                raise NotFoundException("Teacher profile not found")
            self._refresh_aggregate(teacher_id, profile)
        return profile

    def _refresh_aggregate(self, teacher_id: str, profile: Optional[TeacherProfile]) -> None:
        if profile is None:
            self.logger.warning(f"Teacher {teacher_id} has no profile; rating aggregate not stored")
            return
        aggregate = compute_rating_aggregate(self.repository.ratings_for_teacher(teacher_id))
        self.teacher_profile_repository.update_rating_aggregate(profile, aggregate.rating, aggregate.total_reviews)
        self.logger.info(
            f"Teacher {teacher_id} rating recomputed: {aggregate.rating} over {aggregate.total_reviews} reviews"
        )

    def _clean_comment(self, comment: Optional[str]) -> Optional[str]:
        if comment is None:
            return None
        text = comment.strip()
        limit = settings.review_comment_max_length
        if len(text) > limit:
            raise ValidationException(f"Comment cannot exceed {limit} characters")
        return text or None
