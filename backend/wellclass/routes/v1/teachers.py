# backend/wellclass/routes/v1/teachers.py
"""
Teacher directory routes - API v1

Endpoints:
    GET /              → Available teachers, best rated first (public)
    GET /{teacher_id}  → One teacher's profile (public)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies.services import get_teacher_service
from ...core.enums import Modality
from ...core.exceptions import DomainException, handle_domain_exception
from ...schemas.teacher import TeacherListResponse, TeacherResponse
from ...services.teacher_service import TeacherService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["teachers-v1"])


@router.get("", response_model=TeacherListResponse)
def list_teachers(
    modality: Optional[Modality] = Query(None),
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherListResponse:
    try:
        profiles = service.list_teachers(modality)
    except DomainException as e:
        handle_domain_exception(e)
    return TeacherListResponse(
        teachers=[TeacherResponse.from_profile(p) for p in profiles],
        total=len(profiles),
    )


@router.get("/{teacher_id}", response_model=TeacherResponse)
def get_teacher(
    teacher_id: str,
    service: TeacherService = Depends(get_teacher_service),
) -> TeacherResponse:
    try:
        return TeacherResponse.from_profile(service.get_teacher(teacher_id))
    except DomainException as e:
        handle_domain_exception(e)
