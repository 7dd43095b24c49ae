# backend/wellclass/services/payment_webhook_service.py
"""
Payment event handler for Stripe webhooks.

Every delivery is verified before anything is read. Verified events are
reduced to a typed ``PaymentEvent`` and dispatched; each branch commits
the booking transition and the payment row together or not at all.

Stripe retries deliveries, so handlers must tolerate repeats: status
changes are idempotent through the state machine, while each completed
checkout delivery appends its own payment row.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..domain.booking_state import BookingEvent
from ..models.booking import Booking
from ..models.payment import PaymentStatus
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories import RepositoryFactory
from .base import BaseService
from .booking_service import BookingService
from .stripe_service import StripeService

logger = logging.getLogger(__name__)


class PaymentEventKind(str, Enum):
    CHECKOUT_COMPLETED = "checkout.session.completed"
    CHECKOUT_EXPIRED = "checkout.session.expired"
    PAYMENT_FAILED = "payment_intent.payment_failed"
    UNHANDLED = "unhandled"


_KINDS_BY_TYPE = {kind.value: kind for kind in PaymentEventKind if kind is not PaymentEventKind.UNHANDLED}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _reference_id(value: Any) -> Optional[str]:
    """Stripe sends either an id string or an expanded object."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        ref = value.get("id")
        return ref if isinstance(ref, str) and ref else None
    return None


@dataclass(frozen=True)
class PaymentEvent:
    kind: PaymentEventKind
    event_type: str
    event_id: Optional[str] = None
    booking_id: Optional[str] = None
    checkout_session_id: Optional[str] = None
    payment_reference: Optional[str] = None
    amount_total_minor: Optional[int] = None

    @classmethod
    def from_stripe(cls, event: Dict[str, Any]) -> "PaymentEvent":
        event_type = str(event.get("type") or "")
        kind = _KINDS_BY_TYPE.get(event_type, PaymentEventKind.UNHANDLED)
        obj = _as_dict(_as_dict(event.get("data")).get("object"))
        metadata = _as_dict(obj.get("metadata"))

        if kind is PaymentEventKind.PAYMENT_FAILED:
            return cls(
                kind=kind,
                event_type=event_type,
                event_id=event.get("id"),
                booking_id=metadata.get("bookingId"),
                checkout_session_id=metadata.get("sessionId"),
                payment_reference=_reference_id(obj.get("id")),
            )

        if kind is PaymentEventKind.UNHANDLED:
            return cls(kind=kind, event_type=event_type, event_id=event.get("id"))

        amount_total = obj.get("amount_total")
        return cls(
            kind=kind,
            event_type=event_type,
            event_id=event.get("id"),
            booking_id=metadata.get("bookingId"),
            checkout_session_id=_reference_id(obj.get("id")),
            payment_reference=_reference_id(obj.get("payment_intent")),
            amount_total_minor=int(amount_total) if isinstance(amount_total, (int, float)) else None,
        )


@dataclass(frozen=True)
class WebhookAck:
    event_type: str
    handled: bool
    booking_id: Optional[str] = None
    received: bool = True


class PaymentWebhookService(BaseService):
    """Turns verified payment provider events into booking and payment state."""

    def __init__(
        self,
        db: Session,
        stripe_service: Optional[StripeService] = None,
        booking_service: Optional[BookingService] = None,
    ):
        super().__init__(db)
        self.stripe_service = stripe_service or StripeService()
        self.booking_service = booking_service or BookingService(db, stripe_service=self.stripe_service)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.payment_repository = RepositoryFactory.create_payment_repository(db)

    @BaseService.measure_operation("handle_payment_webhook")
    def handle_event(self, raw_payload: bytes, signature: Optional[str]) -> WebhookAck:
        """
        Verify, decode and apply one webhook delivery.

        Raises:
            WebhookAuthenticityException: The delivery is not from Stripe; nothing was read or written
        """
        event = PaymentEvent.from_stripe(self.stripe_service.construct_event(raw_payload, signature))
        self.logger.info(f"Processing webhook event {event.event_id}: {event.event_type}")

        if event.kind is PaymentEventKind.CHECKOUT_COMPLETED:
            ack = self._handle_checkout_completed(event)
        elif event.kind is PaymentEventKind.CHECKOUT_EXPIRED:
            ack = self._handle_checkout_expired(event)
        elif event.kind is PaymentEventKind.PAYMENT_FAILED:
            ack = self._handle_payment_failed(event)
        else:
            self.logger.info(f"Unhandled webhook event type: {event.event_type}")
            ack = WebhookAck(event_type=event.event_type, handled=False)

        prometheus_metrics.record_webhook_event(event.event_type, ack.handled)
        return ack

    def _handle_checkout_completed(self, event: PaymentEvent) -> WebhookAck:
        if not event.booking_id:
            self.logger.error(f"No booking ID in session metadata for {event.checkout_session_id}")
            return WebhookAck(event_type=event.event_type, handled=False)

        with self.transaction():
            booking = self._lock_booking(event.booking_id)
            if not booking:
                return WebhookAck(event_type=event.event_type, handled=False, booking_id=event.booking_id)

            self.booking_service.apply_payment_transition(booking, BookingEvent.PAYMENT_SUCCEEDED)
            amount = Decimal(event.amount_total_minor or 0) / 100
            self.payment_repository.create(
                booking_id=booking.id,
                amount=amount,
                status=PaymentStatus.COMPLETED.value,
                stripe_payment_id=event.payment_reference,
                stripe_session_id=event.checkout_session_id,
            )

        self.logger.info(f"Payment successful for booking {booking.id}")
        return WebhookAck(event_type=event.event_type, handled=True, booking_id=booking.id)

    def _handle_checkout_expired(self, event: PaymentEvent) -> WebhookAck:
        if not event.booking_id:
            self.logger.warning(f"Expired session {event.checkout_session_id} carries no booking ID")
            return WebhookAck(event_type=event.event_type, handled=False)

        with self.transaction():
            booking = self._lock_booking(event.booking_id)
            if not booking:
                return WebhookAck(event_type=event.event_type, handled=False, booking_id=event.booking_id)
            if event.checkout_session_id != booking.checkout_session_id:
                # Checkout was restarted; the booking's live session is still payable
                self.logger.info(
                    f"Ignoring expiry of replaced session {event.checkout_session_id} "
                    f"for booking {booking.id} (current {booking.checkout_session_id})"
                )
                return WebhookAck(event_type=event.event_type, handled=False, booking_id=booking.id)
            self.booking_service.apply_payment_transition(booking, BookingEvent.CHECKOUT_EXPIRED)

        self.logger.info(f"Checkout expired for booking {booking.id}")
        return WebhookAck(event_type=event.event_type, handled=True, booking_id=booking.id)

    def _handle_payment_failed(self, event: PaymentEvent) -> WebhookAck:
        with self.transaction():
            booking = self._find_failed_payment_booking(event)
            if not booking:
                self.logger.warning(
                    f"No booking found for failed payment {event.payment_reference} "
                    f"(session {event.checkout_session_id})"
                )
                return WebhookAck(event_type=event.event_type, handled=False)

            self.booking_service.apply_payment_transition(booking, BookingEvent.PAYMENT_FAILED)
            self.payment_repository.create(
                booking_id=booking.id,
                amount=booking.price,
                status=PaymentStatus.FAILED.value,
                stripe_payment_id=event.payment_reference,
            )

        self.logger.info(f"Payment failed for booking {booking.id}")
        return WebhookAck(event_type=event.event_type, handled=True, booking_id=booking.id)

    def _lock_booking(self, booking_id: str) -> Optional[Booking]:
        booking = self.booking_repository.get_for_update(booking_id)
        if not booking:
            self.logger.warning(f"Webhook references unknown booking {booking_id}")
        return booking

    def _find_failed_payment_booking(self, event: PaymentEvent) -> Optional[Booking]:
        """
        Resolve by checkout session first.

        A session that no booking holds any more belongs to a replaced
        checkout, so the booking id is only consulted when no session is named.
        """
        if event.checkout_session_id:
            booking = self.booking_repository.get_by_checkout_session_id(event.checkout_session_id)
            return self.booking_repository.get_for_update(booking.id) if booking else None
        if event.booking_id:
            return self.booking_repository.get_for_update(event.booking_id)
        return None
