# backend/wellclass/schemas/booking.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ..models.booking import BookingStatus
from ._strict_base import OptionalUtcDatetime, OrmResponseModel, StrictModel, StrictRequestModel, UtcDatetime


class BookingCreate(StrictRequestModel):
    """
    Request to book a lesson.

    student_id defaults to the caller; when present it must be the caller.
    """

    teacher_id: str = Field(..., min_length=1)
    student_id: Optional[str] = None
    scheduled_start: datetime
    duration_minutes: int = Field(..., ge=30, le=240, description="Lesson length in minutes")
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = Field(None, max_length=1000)


class BookingResponse(OrmResponseModel):
    id: str
    student_id: str
    teacher_id: str
    scheduled_start: UtcDatetime
    duration_minutes: int
    price: float
    notes: Optional[str] = None
    status: BookingStatus
    checkout_session_id: Optional[str] = None
    created_at: OptionalUtcDatetime = None
    confirmed_at: OptionalUtcDatetime = None
    completed_at: OptionalUtcDatetime = None
    cancelled_at: OptionalUtcDatetime = None


class BookingCheckoutResponse(StrictModel):
    booking: BookingResponse
    checkout_url: str
    checkout_session_id: str


class BookingListResponse(StrictModel):
    bookings: List[BookingResponse]
    total: int
