# backend/wellclass/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from .auth import get_current_principal, require_student, require_teacher
from .database import get_db
from .services import (
    get_account_service,
    get_booking_service,
    get_class_request_service,
    get_payment_webhook_service,
    get_posted_time_service,
    get_review_service,
    get_stripe_service,
    get_teacher_service,
)

__all__ = [
    # Auth
    "get_current_principal",
    "require_student",
    "require_teacher",
    # Database
    "get_db",
    # Services
    "get_account_service",
    "get_booking_service",
    "get_class_request_service",
    "get_payment_webhook_service",
    "get_posted_time_service",
    "get_review_service",
    "get_stripe_service",
    "get_teacher_service",
]
