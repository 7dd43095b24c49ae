# backend/wellclass/routes/v1/auth.py
"""
Auth routes - API v1

Endpoints:
    POST /register → Create a student or teacher account
    POST /login    → Exchange credentials for a bearer token
"""

import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies.services import get_account_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...schemas.auth import Token, UserLogin, UserRegister, UserResponse
from ...services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-v1"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserRegister,
    service: AccountService = Depends(get_account_service),
) -> UserResponse:
    try:
        return UserResponse.model_validate(service.register(payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.post("/login", response_model=Token)
def login(
    payload: UserLogin,
    service: AccountService = Depends(get_account_service),
) -> Token:
    try:
        _, token = service.login(payload)
    except DomainException as e:
        handle_domain_exception(e)
    return Token(access_token=token)
