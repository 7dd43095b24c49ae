# backend/wellclass/schemas/class_request.py
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from ..core.enums import Modality
from ..utils.time_utils import parse_hhmm
from ._strict_base import OptionalUtcDatetime, OrmResponseModel, StrictModel, StrictRequestModel


def _normalize_clock(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return parse_hhmm(v).strftime("%H:%M")


class ClassRequestCreate(StrictRequestModel):
    student_id: Optional[str] = None
    modality: Modality
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = Field(None, description="HH:MM")
    duration_minutes: int = Field(60, ge=30, le=240)
    max_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=1000)
    contact_phone: Optional[str] = Field(None, max_length=20)
    contact_email: Optional[EmailStr] = None

    @field_validator("preferred_time")
    @classmethod
    def _valid_clock(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_clock(v)


class ClassRequestUpdate(StrictRequestModel):
    """Partial update; unknown fields are rejected by the strict base."""

    modality: Optional[Modality] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=30, le=240)
    max_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=1000)
    contact_phone: Optional[str] = Field(None, max_length=20)
    contact_email: Optional[EmailStr] = None
    is_active: Optional[bool] = None

    @field_validator("preferred_time")
    @classmethod
    def _valid_clock(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_clock(v)


class ClassRequestResponse(OrmResponseModel):
    id: str
    student_id: str
    modality: Modality
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = None
    duration_minutes: int
    max_price: Optional[float] = None
    description: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    is_active: bool
    created_at: OptionalUtcDatetime = None


class ClassRequestListResponse(StrictModel):
    class_requests: List[ClassRequestResponse]
    total: int
