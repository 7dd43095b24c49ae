"""
Payment records for Stripe Checkout.

A Payment row is an immutable outcome of one payment-provider event.
Retries and duplicate deliveries produce additional rows; existing rows
are never updated.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import ulid

from ..database import Base

if TYPE_CHECKING:
    from .booking import Booking


class PaymentStatus(str, Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Payment(Base):
    """Outcome of a checkout attempt for a booking."""

    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    booking_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    stripe_payment_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Stripe PaymentIntent id"
    )
    stripe_session_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Stripe Checkout session id"
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payments")

    __table_args__ = (
        CheckConstraint("status IN ('COMPLETED', 'FAILED')", name="ck_payments_status"),
        CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Payment(booking_id={self.booking_id}, amount={self.amount}, status={self.status})>"
