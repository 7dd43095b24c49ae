# backend/wellclass/services/account_service.py
"""
Account registration and password login.

Teachers get a TeacherProfile in the same transaction as their user row.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from ..auth import DUMMY_HASH_FOR_TIMING_ATTACK, create_access_token, get_password_hash, verify_password
from ..core.enums import RoleName
from ..core.exceptions import ConflictException, RepositoryException, UnauthorizedException, ValidationException
from ..models.user import User
from ..repositories import RepositoryFactory
from ..schemas.auth import UserLogin, UserRegister
from .base import BaseService

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.teacher_profile_repository = RepositoryFactory.create_teacher_profile_repository(db)

    @BaseService.measure_operation("register_user")
    def register(self, data: UserRegister) -> User:
        """
        Create a user, plus a teacher profile for TEACHER accounts.

        Raises:
            ValidationException: Teacher without specialties or a positive hourly rate
            ConflictException: Email already in use
        """
        email = str(data.email).strip().lower()
        specialties = []
        if data.role == RoleName.TEACHER:
            # De-duplicate while keeping the caller's order
            specialties = list(dict.fromkeys(s.value for s in data.specialties))
            if not specialties:
                raise ValidationException("Teachers must select at least one specialty")
            if data.hourly_rate is None or data.hourly_rate <= 0:
                raise ValidationException("Teachers must set a valid hourly rate")

        if self.user_repository.get_by_email(email):
            raise ConflictException("This email is already in use", code="EMAIL_IN_USE")

        hashed = get_password_hash(data.password)
        try:
            with self.transaction():
                user = self.user_repository.create(
                    email=email,
                    name=data.name.strip(),
                    role=data.role.value,
                    phone=data.phone,
                    hashed_password=hashed,
                )
                if data.role == RoleName.TEACHER:
                    self.teacher_profile_repository.create(
                        user_id=user.id,
                        bio=(data.bio or "").strip(),
                        specialties=specialties,
                        hourly_rate=data.hourly_rate,
                        is_available=True,
                    )
        except RepositoryException as exc:
            # Lost a race against another registration for the same email
            if self.user_repository.get_by_email(email):
                raise ConflictException("This email is already in use", code="EMAIL_IN_USE") from exc
            raise

        self.logger.info(f"Registered {user.role} account {user.id}")
        return user

    @BaseService.measure_operation("login")
    def login(self, data: UserLogin) -> Tuple[User, str]:
        """Check credentials and mint a bearer token carrying the user's id and role."""
        user = self.user_repository.get_by_email(str(data.email))
        if not user or not user.hashed_password:
            verify_password(data.password, DUMMY_HASH_FOR_TIMING_ATTACK)
            raise UnauthorizedException("Incorrect email or password", code="INVALID_CREDENTIALS")
        if not verify_password(data.password, user.hashed_password):
            raise UnauthorizedException("Incorrect email or password", code="INVALID_CREDENTIALS")

        token = create_access_token({"sub": user.id, "role": user.role})
        return user, token
