# backend/wellclass/repositories/__init__.py
"""
Repository layer for the Wellclass marketplace.

Usage:
    from wellclass.repositories import RepositoryFactory

    repository = RepositoryFactory.create_booking_repository(db)
    conflicts = repository.find_in_window(teacher_id, window_start, window_end)
"""

from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .class_request_repository import ClassRequestRepository
from .factory import RepositoryFactory
from .payment_repository import PaymentRepository
from .posted_time_repository import PostedTimeRepository
from .review_repository import ReviewRepository
from .teacher_profile_repository import TeacherProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "ClassRequestRepository",
    "IRepository",
    "PaymentRepository",
    "PostedTimeRepository",
    "RepositoryFactory",
    "ReviewRepository",
    "TeacherProfileRepository",
    "UserRepository",
]
