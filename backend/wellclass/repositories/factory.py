# backend/wellclass/repositories/factory.py
"""
Repository factory.

Services obtain repositories through this factory so tests can swap an
implementation in one place.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .class_request_repository import ClassRequestRepository
    from .payment_repository import PaymentRepository
    from .posted_time_repository import PostedTimeRepository
    from .review_repository import ReviewRepository
    from .teacher_profile_repository import TeacherProfileRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """Creates repository instances bound to a session."""

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_payment_repository(db: Session) -> "PaymentRepository":
        from .payment_repository import PaymentRepository

        return PaymentRepository(db)

    @staticmethod
    def create_review_repository(db: Session) -> "ReviewRepository":
        from .review_repository import ReviewRepository

        return ReviewRepository(db)

    @staticmethod
    def create_teacher_profile_repository(db: Session) -> "TeacherProfileRepository":
        from .teacher_profile_repository import TeacherProfileRepository

        return TeacherProfileRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_posted_time_repository(db: Session) -> "PostedTimeRepository":
        from .posted_time_repository import PostedTimeRepository

        return PostedTimeRepository(db)

    @staticmethod
    def create_class_request_repository(db: Session) -> "ClassRequestRepository":
        from .class_request_repository import ClassRequestRepository

        return ClassRequestRepository(db)
