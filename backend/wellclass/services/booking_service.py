# backend/wellclass/services/booking_service.py
"""
Booking Service for Wellclass.

Owns the booking lifecycle:
- Creation with conflict detection and hosted checkout setup
- Restarting checkout for a booking that is still awaiting payment
- Applying payment and completion events through the state machine
- Participant-scoped reads
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import (
    BookingConflictException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    PaymentSetupException,
    RepositoryException,
    ServiceException,
    ValidationException,
)
from ..domain.booking_state import BookingEvent, Transition, transition
from ..models.booking import Booking, BookingStatus
from ..models.user import User
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..principal import UserPrincipal
from ..repositories import RepositoryFactory
from ..schemas.booking import BookingCreate
from ..utils.time_utils import to_utc
from .base import BaseService
from .conflict_checker import ConflictChecker
from .stripe_service import CheckoutHandle, StripeService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingCheckout:
    booking: Booking
    checkout_url: str
    checkout_session_id: str


def to_minor_units(price: Decimal) -> int:
    """Price in cents, rounded half-up."""
    return int((Decimal(price) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class BookingService(BaseService):
    """Booking lifecycle manager."""

    def __init__(
        self,
        db: Session,
        stripe_service: Optional[StripeService] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__(db)
        self.repository = RepositoryFactory.create_booking_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db, repository=self.repository)
        self.stripe_service = stripe_service or StripeService()

    @BaseService.measure_operation("create_booking")
    def create_booking(self, principal: UserPrincipal, data: BookingCreate) -> BookingCheckout:
        """
        Create a PENDING booking and open a hosted checkout for it.

        The booking is committed before the gateway is called. If checkout
        setup fails the booking is deleted again so no unpaid PENDING row
        keeps blocking the teacher's calendar.

        Raises:
            ForbiddenException: Caller is not a student or books for someone else
            ValidationException: Duration or price out of range
            NotFoundException: Teacher missing, not a teacher, or not available
            BookingConflictException: Another active booking is inside the buffered window
            PaymentSetupException: Checkout session could not be created
        """
        if not principal.is_student:
            raise ForbiddenException("Only students can create bookings")
        student_id = data.student_id or principal.user_id
        if student_id != principal.user_id:
            raise ForbiddenException("You can only create bookings for yourself")

        self._validate_booking_terms(data.duration_minutes, data.price)
        teacher = self._get_bookable_teacher(data.teacher_id)
        scheduled_start = to_utc(data.scheduled_start)

        self.log_operation(
            "create_booking",
            student_id=student_id,
            teacher_id=teacher.id,
            scheduled_start=scheduled_start.isoformat(),
            duration_minutes=data.duration_minutes,
        )

        with self.transaction():
            conflicts = self.conflict_checker.find_conflicts(teacher.id, scheduled_start, data.duration_minutes)
            if conflicts:
                raise BookingConflictException(
                    details={
                        "teacher_id": teacher.id,
                        "scheduled_start": scheduled_start.isoformat(),
                        "conflicting_booking_ids": [b.id for b in conflicts],
                    }
                )
            booking = self.repository.create(
                student_id=student_id,
                teacher_id=teacher.id,
                scheduled_start=scheduled_start,
                duration_minutes=data.duration_minutes,
                price=data.price,
                notes=data.notes,
                status=BookingStatus.PENDING.value,
            )

        try:
            handle = self._open_checkout(booking, teacher)
        except PaymentSetupException:
            self._discard_booking(booking.id)
            raise

        with self.transaction():
            booking.checkout_session_id = handle.session_id

        self.logger.info(f"Booking {booking.id} created, awaiting checkout {handle.session_id}")
        return BookingCheckout(booking=booking, checkout_url=handle.url, checkout_session_id=handle.session_id)

    @BaseService.measure_operation("restart_checkout")
    def restart_checkout(self, principal: UserPrincipal, booking_id: str) -> BookingCheckout:
        """
        Open a fresh checkout for a booking that is still PENDING.

        The new session id replaces the stored one. A gateway failure leaves
        the booking untouched.
        """
        booking = self.repository.get_by_id(booking_id)
        if not booking:
            raise NotFoundException("Booking not found")
        if booking.student_id != principal.user_id:
            raise ForbiddenException("You can only pay for your own bookings")
        if booking.status != BookingStatus.PENDING:
            raise InvalidStateException(
                f"Cannot start checkout for booking with status: {booking.status}",
                current_status=booking.status,
            )

        handle = self._open_checkout(booking, booking.teacher)
        with self.transaction():
            booking.checkout_session_id = handle.session_id

        self.logger.info(f"Booking {booking.id} checkout restarted with session {handle.session_id}")
        return BookingCheckout(booking=booking, checkout_url=handle.url, checkout_session_id=handle.session_id)

    @BaseService.measure_operation("list_bookings")
    def list_bookings(
        self,
        principal: UserPrincipal,
        *,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """
        Bookings visible to the caller, latest lesson first.

        Teachers only ever see their own bookings and students theirs; the
        opposite-side filter narrows further.
        """
        if principal.is_teacher:
            if teacher_id and teacher_id != principal.user_id:
                raise ForbiddenException("Teachers can only list their own bookings")
            return self.repository.list_bookings(teacher_id=principal.user_id, student_id=student_id, status=status)

        if student_id and student_id != principal.user_id:
            raise ForbiddenException("Students can only list their own bookings")
        return self.repository.list_bookings(student_id=principal.user_id, teacher_id=teacher_id, status=status)

    @BaseService.measure_operation("get_booking")
    def get_booking(self, principal: UserPrincipal, booking_id: str) -> Booking:
        booking = self.repository.get_by_id(booking_id)
        if not booking:
            raise NotFoundException("Booking not found")
        if not booking.is_participant(principal.user_id):
            raise ForbiddenException("You do not have access to this booking")
        return booking

    @BaseService.measure_operation("complete_booking")
    def complete_booking(self, booking_id: str, principal: Optional[UserPrincipal] = None) -> Booking:
        """
        Mark a paid lesson as taught.

        When a principal is given it must be the booking's teacher. Completing
        an already COMPLETED booking is a no-op.

        Raises:
            NotFoundException: Unknown booking
            ForbiddenException: Caller is not the booking's teacher
            InvalidStateException: Booking was never confirmed
        """
        with self.transaction():
            booking = self.repository.get_for_update(booking_id)
            if not booking:
                raise NotFoundException("Booking not found")
            if principal is not None and booking.teacher_id != principal.user_id:
                raise ForbiddenException("Only the booking's teacher can complete it")
            self.apply_payment_transition(booking, BookingEvent.LESSON_COMPLETED)
        return booking

    def apply_payment_transition(self, booking: Booking, event: BookingEvent) -> Transition:
        """
        Run ``event`` through the state machine and write the result onto the booking.

        Must be called inside the caller's transaction. Only a REJECTED
        transition raises; terminal and repeated events are no-ops.
        """
        result = transition(booking.status, event)
        prometheus_metrics.record_booking_transition(event.value, result.outcome.value)
        if result.rejected:
            raise InvalidStateException(
                f"Cannot apply {event.value} to booking with status: {result.previous.value}",
                current_status=result.previous.value,
            )
        if booking.apply(result):
            self.repository.flush()
        else:
            self.logger.info(f"Booking {booking.id}: {event.value} ignored in status {result.previous.value}")
        return result

    # Private helpers

    def _validate_booking_terms(self, duration_minutes: int, price: Decimal) -> None:
        min_duration = settings.booking_min_duration_minutes
        max_duration = settings.booking_max_duration_minutes
        if not min_duration <= duration_minutes <= max_duration:
            raise ValidationException(
                f"Duration must be between {min_duration} and {max_duration} minutes",
                details={"duration_minutes": duration_minutes},
            )
        if price is None or Decimal(price) <= 0:
            raise ValidationException("Price must be greater than zero", details={"price": str(price)})

    def _get_bookable_teacher(self, teacher_id: str) -> User:
        teacher = self.user_repository.get_by_id(teacher_id, load_relationships=False)
        if not teacher or not teacher.is_teacher:
            raise NotFoundException("Teacher not found")
        profile = self.teacher_profile_repository.get_by_user_id(teacher_id)
        if not profile or not profile.is_available:
            raise NotFoundException("Teacher not found")
        return teacher

    def _open_checkout(self, booking: Booking, teacher: User) -> CheckoutHandle:
        frontend = settings.frontend_url
        lesson_day = to_utc(booking.scheduled_start).strftime("%d/%m/%Y")
        try:
            return self.stripe_service.create_checkout_session(
                amount_minor_units=to_minor_units(booking.price),
                currency=settings.stripe_currency,
                product_name=f"Aula com {teacher.name}",
                description=f"Aula de {booking.duration_minutes} minutos em {lesson_day}",
                success_url=f"{frontend}/dashboard/aluno?success=true&booking_id={booking.id}",
                cancel_url=f"{frontend}/agendar/{booking.teacher_id}?cancelled=true",
                metadata={
                    "bookingId": booking.id,
                    "studentId": booking.student_id,
                    "teacherId": booking.teacher_id,
                },
            )
        except PaymentSetupException:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected checkout failure for booking {booking.id}: {str(e)}")
            raise PaymentSetupException(booking_id=booking.id) from e

    def _discard_booking(self, booking_id: str) -> None:
        """Compensating delete after checkout setup failed."""
        try:
            with self.transaction():
                self.repository.delete(booking_id)
            self.logger.warning(f"Deleted booking {booking_id} after checkout setup failed")
        except (RepositoryException, ServiceException) as e:
            self.logger.error(f"Failed to delete booking {booking_id} after checkout failure: {str(e)}")
