# backend/wellclass/routes/v1/bookings.py
"""
Bookings routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to BookingService.

Endpoints:
    POST /                      → Create booking and open checkout (student)
    GET /                       → List the caller's bookings
    GET /{booking_id}           → Booking detail (participants)
    POST /{booking_id}/checkout → Restart checkout for a PENDING booking (student)
    POST /{booking_id}/complete → Mark lesson as taught (booking's teacher)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.auth import get_current_principal, require_student, require_teacher
from ...api.dependencies.services import get_booking_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...models.booking import BookingStatus
from ...principal import UserPrincipal
from ...schemas.booking import BookingCheckoutResponse, BookingCreate, BookingListResponse, BookingResponse
from ...services.booking_service import BookingCheckout, BookingService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])


def _checkout_response(result: BookingCheckout) -> BookingCheckoutResponse:
    return BookingCheckoutResponse(
        booking=BookingResponse.model_validate(result.booking),
        checkout_url=result.checkout_url,
        checkout_session_id=result.checkout_session_id,
    )


@router.post("", response_model=BookingCheckoutResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    principal: UserPrincipal = Depends(require_student),
    service: BookingService = Depends(get_booking_service),
) -> BookingCheckoutResponse:
    """Create a PENDING booking and return the hosted checkout URL."""
    try:
        return _checkout_response(service.create_booking(principal, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=BookingListResponse)
def list_bookings(
    teacher_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    principal: UserPrincipal = Depends(get_current_principal),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    try:
        bookings = service.list_bookings(
            principal, teacher_id=teacher_id, student_id=student_id, status=status_filter
        )
    except DomainException as e:
        handle_domain_exception(e)
    return BookingListResponse(
        bookings=[BookingResponse.model_validate(b) for b in bookings],
        total=len(bookings),
    )


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    principal: UserPrincipal = Depends(get_current_principal),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        return BookingResponse.model_validate(service.get_booking(principal, booking_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{booking_id}/checkout", response_model=BookingCheckoutResponse)
def restart_checkout(
    booking_id: str,
    principal: UserPrincipal = Depends(require_student),
    service: BookingService = Depends(get_booking_service),
) -> BookingCheckoutResponse:
    try:
        return _checkout_response(service.restart_checkout(principal, booking_id))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
    booking_id: str,
    principal: UserPrincipal = Depends(require_teacher),
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    try:
        return BookingResponse.model_validate(service.complete_booking(booking_id, principal))
    except DomainException as e:
        handle_domain_exception(e)
