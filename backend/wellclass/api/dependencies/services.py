# backend/wellclass/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each factory builds a request-scoped service bound to the request's session.
The Stripe gateway holds no request state and is shared.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.account_service import AccountService
from ...services.booking_service import BookingService
from ...services.class_request_service import ClassRequestService
from ...services.payment_webhook_service import PaymentWebhookService
from ...services.posted_time_service import PostedTimeService
from ...services.review_service import ReviewService
from ...services.stripe_service import StripeService
from ...services.teacher_service import TeacherService
from .database import get_db


@lru_cache(maxsize=1)
def get_stripe_service() -> StripeService:
    return StripeService()


def get_booking_service(
    db: Session = Depends(get_db),
    stripe_service: StripeService = Depends(get_stripe_service),
) -> BookingService:
    return BookingService(db, stripe_service=stripe_service)


def get_payment_webhook_service(
    db: Session = Depends(get_db),
    stripe_service: StripeService = Depends(get_stripe_service),
) -> PaymentWebhookService:
    return PaymentWebhookService(db, stripe_service=stripe_service)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


def get_posted_time_service(db: Session = Depends(get_db)) -> PostedTimeService:
    return PostedTimeService(db)


def get_class_request_service(db: Session = Depends(get_db)) -> ClassRequestService:
    return ClassRequestService(db)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_teacher_service(db: Session = Depends(get_db)) -> TeacherService:
    return TeacherService(db)
