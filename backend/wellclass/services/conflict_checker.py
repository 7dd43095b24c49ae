# backend/wellclass/services/conflict_checker.py
"""
Conflict Checker Service for Wellclass.

A candidate lesson conflicts with an active booking (PENDING or CONFIRMED)
of the same teacher when either:

- the booking starts inside the candidate's padded window
  ``[candidate_start - buffer, candidate_start + duration + buffer]``, or
- the candidate starts inside the booking's own padded window, so a long
  lesson that is already running blocks anything starting during it.

All bounds are inclusive. The check runs without locks; two requests that
race for the same teacher may both pass.
"""

from datetime import datetime, timedelta
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..models.booking import Booking
from ..repositories import RepositoryFactory
from ..repositories.booking_repository import BookingRepository
from ..utils.time_utils import to_utc
from .base import BaseService

logger = logging.getLogger(__name__)


class ConflictChecker(BaseService):
    """Detects booking conflicts for a teacher."""

    def __init__(
        self,
        db: Session,
        repository: Optional[BookingRepository] = None,
        buffer_minutes: Optional[int] = None,
    ):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.buffer = timedelta(
            minutes=settings.booking_buffer_minutes if buffer_minutes is None else buffer_minutes
        )

    def padded_window(self, candidate_start: datetime, duration_minutes: int) -> Tuple[datetime, datetime]:
        start = to_utc(candidate_start)
        return (
            start - self.buffer,
            start + timedelta(minutes=duration_minutes) + self.buffer,
        )

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(self, teacher_id: str, candidate_start: datetime, duration_minutes: int) -> List[Booking]:
        """Active bookings of the teacher that block the candidate lesson, earliest first."""
        start = to_utc(candidate_start)
        window_start, window_end = self.padded_window(start, duration_minutes)
        # Earliest start of a booking whose padded window could still reach the candidate
        lookback = start - timedelta(minutes=settings.booking_max_duration_minutes) - self.buffer
        nearby = self.repository.find_in_window(teacher_id, min(lookback, window_start), window_end)

        conflicts = [b for b in nearby if self._blocks(b, start, window_start, window_end)]
        if conflicts:
            self.logger.warning(
                f"Found {len(conflicts)} booking conflicts for teacher {teacher_id} "
                f"between {window_start.isoformat()} and {window_end.isoformat()}"
            )
        return conflicts

    def has_conflict(self, teacher_id: str, candidate_start: datetime, duration_minutes: int) -> bool:
        return bool(self.find_conflicts(teacher_id, candidate_start, duration_minutes))

    def _blocks(self, booking: Booking, start: datetime, window_start: datetime, window_end: datetime) -> bool:
        booked_start, booked_end = self.padded_window(booking.scheduled_start, booking.duration_minutes)
        existing_start = to_utc(booking.scheduled_start)
        return window_start <= existing_start <= window_end or booked_start <= start <= booked_end
