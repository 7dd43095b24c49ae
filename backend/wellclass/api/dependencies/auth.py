# backend/wellclass/api/dependencies/auth.py
"""
Authentication and authorization dependencies.

The bearer token is trusted as issued by the identity layer: the principal
is built from its claims alone, without a user lookup.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...auth import principal_from_token
from ...core.exceptions import ForbiddenException, UnauthorizedException
from ...principal import UserPrincipal

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserPrincipal:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Not authenticated", code="NOT_AUTHENTICATED")
    return principal_from_token(credentials.credentials)


def require_student(principal: UserPrincipal = Depends(get_current_principal)) -> UserPrincipal:
    if not principal.is_student:
        raise ForbiddenException("Only students can perform this action")
    return principal


def require_teacher(principal: UserPrincipal = Depends(get_current_principal)) -> UserPrincipal:
    if not principal.is_teacher:
        raise ForbiddenException("Only teachers can perform this action")
    return principal
