"""Strict schema baselines with forbidden extras by default."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict

from ..utils.time_utils import to_utc


def _optional_utc(value: Optional[datetime]) -> Optional[datetime]:
    return to_utc(value) if value is not None else None


# Naive values read back from SQLite are UTC; responses always carry an offset.
UtcDatetime = Annotated[datetime, AfterValidator(to_utc)]
OptionalUtcDatetime = Annotated[Optional[datetime], AfterValidator(_optional_utc)]


class StrictModel(BaseModel):
    """Neutral strict base for response DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Request DTO base that always forbids unexpected fields."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)


class OrmResponseModel(StrictModel):
    """Response DTO built straight from ORM rows."""

    model_config = ConfigDict(extra="forbid", from_attributes=True)
