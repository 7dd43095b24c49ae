# backend/wellclass/core/exceptions.py
"""
Domain-specific exceptions for the Wellclass marketplace.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, NoReturn, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class BookingConflictException(ConflictException):
    """Raised when a booking falls inside another booking's buffered window."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "This time slot conflicts with an existing booking",
            code="BOOKING_CONFLICT",
            details=details or {},
        )


class DuplicateReviewException(ConflictException):
    """Raised when a booking already has a review."""

    def __init__(self, booking_id: str):
        super().__init__(
            message="Review already submitted for this booking",
            code="DUPLICATE_REVIEW",
            details={"booking_id": booking_id},
        )


class InvalidStateException(BusinessRuleException):
    """Raised when an action is not valid for the entity's current lifecycle state."""

    def __init__(self, message: str, *, current_status: Optional[str] = None):
        super().__init__(
            message=message,
            code="INVALID_STATE",
            details={"current_status": current_status} if current_status else {},
        )


class WebhookAuthenticityException(DomainException):
    """Raised when a payment provider event cannot be authenticated."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message=message, code="INVALID_SIGNATURE")


class PaymentSetupException(ServiceException):
    """Raised when the hosted checkout session cannot be created."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "Error processing payment", *, booking_id: Optional[str] = None):
        super().__init__(
            message=message,
            code="PAYMENT_SETUP_FAILED",
            details={"booking_id": booking_id} if booking_id else {},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    raise exc.to_http_exception()
