"""
Pydantic schemas for the Wellclass API.

Request models forbid unknown fields; response models are built from ORM rows.
"""

from .auth import Token, UserLogin, UserRegister, UserResponse
from .booking import BookingCheckoutResponse, BookingCreate, BookingListResponse, BookingResponse
from .class_request import ClassRequestCreate, ClassRequestListResponse, ClassRequestResponse, ClassRequestUpdate
from .messaging import WhatsAppLinkRequest, WhatsAppLinkResponse
from .payment import WebhookResponse
from .posted_time import PostedTimeCreate, PostedTimeListResponse, PostedTimeResponse
from .review import ReviewCreate, ReviewListResponse, ReviewResponse
from .teacher import TeacherListResponse, TeacherResponse

__all__ = [
    "BookingCheckoutResponse",
    "BookingCreate",
    "BookingListResponse",
    "BookingResponse",
    "ClassRequestCreate",
    "ClassRequestListResponse",
    "ClassRequestResponse",
    "ClassRequestUpdate",
    "PostedTimeCreate",
    "PostedTimeListResponse",
    "PostedTimeResponse",
    "ReviewCreate",
    "ReviewListResponse",
    "ReviewResponse",
    "TeacherListResponse",
    "TeacherResponse",
    "Token",
    "UserLogin",
    "UserRegister",
    "UserResponse",
    "WebhookResponse",
    "WhatsAppLinkRequest",
    "WhatsAppLinkResponse",
]
