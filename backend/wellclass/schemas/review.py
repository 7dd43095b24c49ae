# backend/wellclass/schemas/review.py
from typing import List, Optional

from pydantic import Field, field_validator

from ._strict_base import OrmResponseModel, StrictModel, StrictRequestModel, UtcDatetime


class ReviewCreate(StrictRequestModel):
    booking_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)

    @field_validator("comment")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v or None


class ReviewResponse(OrmResponseModel):
    id: str
    booking_id: str
    student_id: str
    teacher_id: str
    rating: int
    comment: Optional[str] = None
    created_at: UtcDatetime


class ReviewListResponse(StrictModel):
    reviews: List[ReviewResponse]
    total: int
