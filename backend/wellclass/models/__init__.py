# backend/wellclass/models/__init__.py
"""
SQLAlchemy models for the Wellclass marketplace.

Importing this package registers every mapped class on ``Base.metadata``.
"""

from .booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from .class_request import ClassRequest
from .payment import Payment, PaymentStatus
from .posted_time import PostedTime
from .review import Review
from .teacher_profile import TeacherProfile
from .user import User

__all__ = [
    "ACTIVE_BOOKING_STATUSES",
    "Booking",
    "BookingStatus",
    "ClassRequest",
    "Payment",
    "PaymentStatus",
    "PostedTime",
    "Review",
    "TeacherProfile",
    "User",
]
