# backend/wellclass/schemas/posted_time.py
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from ..core.enums import Modality
from ..utils.time_utils import parse_hhmm
from ._strict_base import OptionalUtcDatetime, OrmResponseModel, StrictModel, StrictRequestModel


class PostedTimeCreate(StrictRequestModel):
    teacher_id: Optional[str] = None
    date: date
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    modality: Modality
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = Field(None, max_length=1000)
    contact_phone: Optional[str] = Field(None, max_length=20)
    contact_email: Optional[EmailStr] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _valid_clock(cls, v: str) -> str:
        return parse_hhmm(v).strftime("%H:%M")

    @model_validator(mode="after")
    def _end_after_start(self) -> "PostedTimeCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class PostedTimeResponse(OrmResponseModel):
    id: str
    teacher_id: str
    date: date
    start_time: str
    end_time: str
    modality: Modality
    price: float
    description: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    is_available: bool
    created_at: OptionalUtcDatetime = None


class PostedTimeListResponse(StrictModel):
    posted_times: List[PostedTimeResponse]
    total: int
