# backend/wellclass/repositories/payment_repository.py
"""Append-only access to payment records."""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..models.payment import Payment
from ..utils.time_utils import to_utc
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self, db: Session):
        super().__init__(db, Payment)
        self.logger = logging.getLogger(__name__)

    def list_for_booking(self, booking_id: str) -> List[Payment]:
        """Every payment recorded against the booking, in arrival order."""
        return sorted(self.find_by(booking_id=booking_id), key=lambda p: (to_utc(p.created_at), p.id))
