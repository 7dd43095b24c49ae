"""Booking lifecycle transitions driven by payment and lesson events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wellclass.models.booking import BookingStatus


class BookingEvent(str, Enum):
    PAYMENT_SUCCEEDED = "PAYMENT_SUCCEEDED"
    CHECKOUT_EXPIRED = "CHECKOUT_EXPIRED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    LESSON_COMPLETED = "LESSON_COMPLETED"


class TransitionOutcome(str, Enum):
    APPLIED = "APPLIED"
    NOOP = "NOOP"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class Transition:
    previous: BookingStatus
    status: BookingStatus
    outcome: TransitionOutcome

    @property
    def changed(self) -> bool:
        return self.outcome is TransitionOutcome.APPLIED and self.status is not self.previous

    @property
    def rejected(self) -> bool:
        return self.outcome is TransitionOutcome.REJECTED


_TERMINAL_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})

_APPLIED: dict[tuple[BookingStatus, BookingEvent], BookingStatus] = {
    (BookingStatus.PENDING, BookingEvent.PAYMENT_SUCCEEDED): BookingStatus.CONFIRMED,
    (BookingStatus.PENDING, BookingEvent.CHECKOUT_EXPIRED): BookingStatus.CANCELLED,
    (BookingStatus.PENDING, BookingEvent.PAYMENT_FAILED): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingEvent.LESSON_COMPLETED): BookingStatus.COMPLETED,
}

_REJECTED = frozenset({(BookingStatus.PENDING, BookingEvent.LESSON_COMPLETED)})


def transition(current: BookingStatus | str, event: BookingEvent) -> Transition:
    """
    Resolve the next status for ``current`` on ``event``.

    Terminal statuses absorb every event. A CONFIRMED booking is never
    demoted by a late expiry or failure notice, so payment events only
    produce APPLIED or NOOP; REJECTED is reserved for completing a lesson
    that was never paid.
    """
    status = BookingStatus(current)
    if status in _TERMINAL_STATUSES:
        return Transition(previous=status, status=status, outcome=TransitionOutcome.NOOP)

    key = (status, event)
    if key in _APPLIED:
        return Transition(previous=status, status=_APPLIED[key], outcome=TransitionOutcome.APPLIED)
    if key in _REJECTED:
        return Transition(previous=status, status=status, outcome=TransitionOutcome.REJECTED)
    return Transition(previous=status, status=status, outcome=TransitionOutcome.NOOP)
