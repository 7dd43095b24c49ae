# backend/wellclass/routes/v1/reviews.py
"""
Reviews routes - API v1

Endpoints:
    POST /                              → Submit a review for a completed booking (student)
    GET /?teacher_id=...&booking_id=... → List reviews (public)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies.auth import require_student
from ...api.dependencies.services import get_review_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...principal import UserPrincipal
from ...schemas.review import ReviewCreate, ReviewListResponse, ReviewResponse
from ...services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews-v1"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def submit_review(
    payload: ReviewCreate,
    principal: UserPrincipal = Depends(require_student),
    service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    try:
        review = service.record_review(principal, payload.booking_id, payload.rating, payload.comment)
    except DomainException as e:
        handle_domain_exception(e)
    return ReviewResponse.model_validate(review)


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    teacher_id: Optional[str] = Query(None),
    booking_id: Optional[str] = Query(None),
    service: ReviewService = Depends(get_review_service),
) -> ReviewListResponse:
    """Public endpoint - no authentication required."""
    try:
        reviews = service.list_reviews(teacher_id=teacher_id, booking_id=booking_id)
    except DomainException as e:
        handle_domain_exception(e)
    return ReviewListResponse(reviews=[ReviewResponse.model_validate(r) for r in reviews], total=len(reviews))
