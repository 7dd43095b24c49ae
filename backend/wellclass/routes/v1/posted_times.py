# backend/wellclass/routes/v1/posted_times.py
"""
Posted times routes - API v1

Endpoints:
    POST /                  → Publish an open slot (teacher)
    GET /                   → Browse open slots
    DELETE /{posted_time_id} → Remove an own slot (teacher)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies.auth import get_current_principal, require_teacher
from ...api.dependencies.services import get_posted_time_service
from ...core.enums import Modality
from ...core.exceptions import DomainException, handle_domain_exception
from ...principal import UserPrincipal
from ...schemas.posted_time import PostedTimeCreate, PostedTimeListResponse, PostedTimeResponse
from ...services.posted_time_service import PostedTimeService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["posted-times-v1"])


@router.post("", response_model=PostedTimeResponse, status_code=status.HTTP_201_CREATED)
def create_posted_time(
    payload: PostedTimeCreate,
    principal: UserPrincipal = Depends(require_teacher),
    service: PostedTimeService = Depends(get_posted_time_service),
) -> PostedTimeResponse:
    try:
        return PostedTimeResponse.model_validate(service.create_posted_time(principal, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=PostedTimeListResponse)
def list_posted_times(
    teacher_id: Optional[str] = Query(None),
    modality: Optional[Modality] = Query(None),
    only_available: bool = Query(False),
    principal: UserPrincipal = Depends(get_current_principal),
    service: PostedTimeService = Depends(get_posted_time_service),
) -> PostedTimeListResponse:
    try:
        items = service.list_posted_times(
            principal, teacher_id=teacher_id, modality=modality, only_available=only_available
        )
    except DomainException as e:
        handle_domain_exception(e)
    return PostedTimeListResponse(
        posted_times=[PostedTimeResponse.model_validate(p) for p in items],
        total=len(items),
    )


@router.delete("/{posted_time_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_posted_time(
    posted_time_id: str,
    principal: UserPrincipal = Depends(require_teacher),
    service: PostedTimeService = Depends(get_posted_time_service),
) -> Response:
    try:
        service.delete_posted_time(principal, posted_time_id)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
