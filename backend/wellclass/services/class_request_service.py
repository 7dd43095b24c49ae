# backend/wellclass/services/class_request_service.py
"""Open class requests that students publish for teachers to answer."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.enums import Modality
from ..core.exceptions import ForbiddenException, NotFoundException, ValidationException
from ..models.class_request import ClassRequest
from ..principal import UserPrincipal
from ..repositories import RepositoryFactory
from ..schemas.class_request import ClassRequestCreate, ClassRequestUpdate
from .base import BaseService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "modality",
        "preferred_date",
        "preferred_time",
        "duration_minutes",
        "max_price",
        "description",
        "contact_phone",
        "contact_email",
        "is_active",
    }
)


class ClassRequestService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_class_request_repository(db)

    @BaseService.measure_operation("create_class_request")
    def create_class_request(self, principal: UserPrincipal, data: ClassRequestCreate) -> ClassRequest:
        if not principal.is_student:
            raise ForbiddenException("Only students can create class requests")
        student_id = data.student_id or principal.user_id
        if student_id != principal.user_id:
            raise ForbiddenException("You can only create requests for yourself")

        with self.transaction():
            request = self.repository.create(
                student_id=student_id,
                modality=Modality(data.modality).value,
                preferred_date=data.preferred_date,
                preferred_time=data.preferred_time,
                duration_minutes=data.duration_minutes,
                max_price=data.max_price,
                description=data.description,
                contact_phone=data.contact_phone,
                contact_email=str(data.contact_email) if data.contact_email else None,
            )
        self.logger.info(f"Student {student_id} opened class request {request.id}")
        return request

    @BaseService.measure_operation("list_class_requests")
    def list_class_requests(
        self,
        principal: UserPrincipal,
        *,
        student_id: Optional[str] = None,
        modality: Optional[Modality] = None,
        only_active: bool = False,
    ) -> List[ClassRequest]:
        """
        Class requests, newest first.

        Students only see their own requests; teachers browse everyone's.
        """
        if principal.is_student:
            student_id = principal.user_id
        return self.repository.list_class_requests(
            student_id=student_id,
            modality=Modality(modality).value if modality else None,
            only_active=only_active,
        )

    @BaseService.measure_operation("update_class_request")
    def update_class_request(
        self, principal: UserPrincipal, request_id: str, data: ClassRequestUpdate
    ) -> ClassRequest:
        request = self._get_owned(principal, request_id)
        changes: Dict[str, Any] = {
            key: value for key, value in data.model_dump(exclude_unset=True).items() if key in UPDATABLE_FIELDS
        }
        if not changes:
            raise ValidationException("No updatable fields provided")
        if "modality" in changes:
            if changes["modality"] is None:
                raise ValidationException("modality cannot be empty")
            changes["modality"] = Modality(changes["modality"]).value
        if changes.get("duration_minutes", 0) is None:
            raise ValidationException("duration_minutes cannot be empty")
        if changes.get("contact_email") is not None:
            changes["contact_email"] = str(changes["contact_email"])
        if "is_active" in changes and changes["is_active"] is None:
            raise ValidationException("is_active cannot be empty")

        with self.transaction():
            updated = self.repository.update(request.id, **changes)
        self.logger.info(f"Class request {request_id} updated fields: {sorted(changes)}")
        return updated

    @BaseService.measure_operation("delete_class_request")
    def delete_class_request(self, principal: UserPrincipal, request_id: str) -> None:
        request = self._get_owned(principal, request_id)
        with self.transaction():
            self.repository.delete(request.id)
        self.logger.info(f"Class request {request_id} deleted by {principal.user_id}")

    def _get_owned(self, principal: UserPrincipal, request_id: str) -> ClassRequest:
        request = self.repository.get_by_id(request_id, load_relationships=False)
        if not request:
            raise NotFoundException("Class request not found")
        if request.student_id != principal.user_id:
            raise ForbiddenException("You can only change your own class requests")
        return request
