# backend/wellclass/repositories/booking_repository.py
"""
Booking repository.

Holds the booking queries used by the lifecycle manager, the conflict
checker and the payment webhook handler. No business rules live here.
"""

from datetime import datetime
import logging
from typing import List, Optional, Sequence, cast

from sqlalchemy.orm import Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus
from ..utils.time_utils import to_utc
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: Session):
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def find_in_window(
        self,
        teacher_id: str,
        window_start: datetime,
        window_end: datetime,
        statuses: Sequence[BookingStatus] = ACTIVE_BOOKING_STATUSES,
    ) -> List[Booking]:
        """
        Bookings for a teacher whose start lies in ``[window_start, window_end]``.

        Both bounds are inclusive.
        """
        try:
            return cast(
                List[Booking],
                self.db.query(Booking)
                .filter(
                    Booking.teacher_id == teacher_id,
                    Booking.status.in_([s.value for s in statuses]),
                    Booking.scheduled_start >= to_utc(window_start),
                    Booking.scheduled_start <= to_utc(window_end),
                )
                .order_by(Booking.scheduled_start)
                .all(),
            )
        except Exception as e:
            self.logger.error(f"Error getting bookings in window: {str(e)}")
            raise RepositoryException(f"Failed to get conflict bookings: {str(e)}")

    def get_by_checkout_session_id(self, session_id: str) -> Optional[Booking]:
        try:
            return cast(
                Optional[Booking],
                self.db.query(Booking).filter(Booking.checkout_session_id == session_id).first(),
            )
        except Exception as e:
            self.logger.error(f"Error getting booking by checkout session: {str(e)}")
            raise RepositoryException(f"Failed to get booking by checkout session: {str(e)}")

    def get_for_update(self, booking_id: str) -> Optional[Booking]:
        """Load a booking holding a row lock (no-op lock on SQLite)."""
        try:
            query = self.db.query(Booking).filter(Booking.id == booking_id)
            if self.dialect_name != "sqlite":
                query = query.with_for_update()
            return cast(Optional[Booking], query.first())
        except Exception as e:
            self.logger.error(f"Error locking booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to lock booking: {str(e)}")

    def list_bookings(
        self,
        *,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """Bookings matching the given filters, most recent lesson first."""
        try:
            query = self.db.query(Booking).options(
                joinedload(Booking.student),
                joinedload(Booking.teacher),
            )
            if teacher_id:
                query = query.filter(Booking.teacher_id == teacher_id)
            if student_id:
                query = query.filter(Booking.student_id == student_id)
            if status:
                query = query.filter(Booking.status == BookingStatus(status).value)
            return cast(List[Booking], query.order_by(Booking.scheduled_start.desc()).all())
        except Exception as e:
            self.logger.error(f"Error listing bookings: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}")

    def _apply_eager_loading(self, query):
        return query.options(joinedload(Booking.student), joinedload(Booking.teacher))
