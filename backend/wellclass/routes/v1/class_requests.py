# backend/wellclass/routes/v1/class_requests.py
"""
Class requests routes - API v1

Endpoints:
    POST /              → Open a class request (student)
    GET /               → Browse class requests
    PATCH /{request_id} → Update an own request (student)
    DELETE /{request_id} → Remove an own request (student)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies.auth import get_current_principal, require_student
from ...api.dependencies.services import get_class_request_service
from ...core.enums import Modality
from ...core.exceptions import DomainException, handle_domain_exception
from ...principal import UserPrincipal
from ...schemas.class_request import (
    ClassRequestCreate,
    ClassRequestListResponse,
    ClassRequestResponse,
    ClassRequestUpdate,
)
from ...services.class_request_service import ClassRequestService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["class-requests-v1"])


@router.post("", response_model=ClassRequestResponse, status_code=status.HTTP_201_CREATED)
def create_class_request(
    payload: ClassRequestCreate,
    principal: UserPrincipal = Depends(require_student),
    service: ClassRequestService = Depends(get_class_request_service),
) -> ClassRequestResponse:
    try:
        return ClassRequestResponse.model_validate(service.create_class_request(principal, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("", response_model=ClassRequestListResponse)
def list_class_requests(
    student_id: Optional[str] = Query(None),
    modality: Optional[Modality] = Query(None),
    only_active: bool = Query(False),
    principal: UserPrincipal = Depends(get_current_principal),
    service: ClassRequestService = Depends(get_class_request_service),
) -> ClassRequestListResponse:
    try:
        items = service.list_class_requests(
            principal, student_id=student_id, modality=modality, only_active=only_active
        )
    except DomainException as e:
        handle_domain_exception(e)
    return ClassRequestListResponse(
        class_requests=[ClassRequestResponse.model_validate(r) for r in items],
        total=len(items),
    )


@router.patch("/{request_id}", response_model=ClassRequestResponse)
def update_class_request(
    request_id: str,
    payload: ClassRequestUpdate,
    principal: UserPrincipal = Depends(require_student),
    service: ClassRequestService = Depends(get_class_request_service),
) -> ClassRequestResponse:
    try:
        return ClassRequestResponse.model_validate(service.update_class_request(principal, request_id, payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_class_request(
    request_id: str,
    principal: UserPrincipal = Depends(require_student),
    service: ClassRequestService = Depends(get_class_request_service),
) -> Response:
    try:
        service.delete_class_request(principal, request_id)
    except DomainException as e:
        handle_domain_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
