# backend/wellclass/models/booking.py
"""
Booking model for the Wellclass marketplace.

A booking is a scheduled, priced lesson between one student and one
teacher. It is created PENDING while the student pays through hosted
checkout; payment events then confirm or cancel it. Status changes go
through ``wellclass.domain.booking_state`` so the lifecycle rules live in
one place.
"""

from datetime import datetime, timezone
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base

if TYPE_CHECKING:
    from ..domain.booking_state import Transition

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"  # Awaiting checkout
    CONFIRMED = "CONFIRMED"  # Paid
    COMPLETED = "COMPLETED"  # Lesson happened
    CANCELLED = "CANCELLED"  # Checkout expired or payment failed


ACTIVE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class Booking(Base):
    """
    Booking record between student and teacher.

    The checkout session id is stored so that payment-failure events, which
    do not carry booking metadata, can be traced back to the booking.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    student_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    teacher_id = Column(String(26), ForeignKey("users.id"), nullable=False)

    scheduled_start = Column(DateTime(timezone=True), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value, index=True)
    checkout_session_id = Column(String(255), nullable=True, index=True, comment="Stripe Checkout session id")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    student = relationship("User", foreign_keys=[student_id])
    teacher = relationship("User", foreign_keys=[teacher_id])
    payments = relationship(
        "Payment",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="Payment.created_at",
    )
    review = relationship("Review", back_populates="booking", uselist=False)

    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED')",
            name="ck_bookings_status",
        ),
        CheckConstraint(
            "duration_minutes >= 30 AND duration_minutes <= 240",
            name="ck_bookings_duration_range",
        ),
        CheckConstraint("price > 0", name="ck_bookings_price_positive"),
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.status:
            self.status = BookingStatus.PENDING.value

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id}: student={self.student_id}, "
            f"teacher={self.teacher_id}, start={self.scheduled_start}, "
            f"duration={self.duration_minutes}, status={self.status}>"
        )

    def apply(self, transition: "Transition") -> bool:
        """
        Write an applied transition onto the row and stamp the matching timestamp.

        Returns True when the status changed.
        """
        if not transition.changed:
            return False
        now = datetime.now(timezone.utc)
        self.status = transition.status.value
        if transition.status == BookingStatus.CONFIRMED:
            self.confirmed_at = now
        elif transition.status == BookingStatus.CANCELLED:
            self.cancelled_at = now
        elif transition.status == BookingStatus.COMPLETED:
            self.completed_at = now
        logger.info(f"Booking {self.id} moved {transition.previous.value} -> {transition.status.value}")
        return True

    def is_participant(self, user_id: str) -> bool:
        return user_id in (self.student_id, self.teacher_id)


Index(
    "ix_bookings_teacher_status_start",
    Booking.teacher_id,
    Booking.status,
    Booking.scheduled_start,
)
