# backend/wellclass/schemas/auth.py
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from ..core.enums import Modality, RoleName
from ._strict_base import OrmResponseModel, StrictModel, StrictRequestModel


class UserRegister(StrictRequestModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=8, max_length=72)
    role: RoleName = RoleName.STUDENT
    phone: Optional[str] = Field(None, max_length=20)
    # Teacher-only profile fields
    bio: Optional[str] = Field(None, max_length=2000)
    specialties: List[Modality] = Field(default_factory=list)
    hourly_rate: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()


class UserLogin(StrictRequestModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(OrmResponseModel):
    id: str
    email: str
    name: str
    role: RoleName
    phone: Optional[str] = None


class Token(StrictModel):
    access_token: str
    token_type: str = "bearer"
