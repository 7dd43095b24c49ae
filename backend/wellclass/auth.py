from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from .core.config import settings
from .core.enums import RoleName
from .core.exceptions import UnauthorizedException
from .principal import UserPrincipal

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Valid bcrypt hash used when the user does not exist, so login timing does not reveal accounts
DUMMY_HASH_FOR_TIMING_ATTACK = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.V4ferVKnNaOuJi"


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Malformed hashes count as a mismatch.
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except ValueError as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    return str(pwd_context.hash(password))


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode; ``sub`` is the user id and ``role`` the user role
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    token = jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm)
    logger.info(f"Created access token for user: {data.get('sub')}")
    return str(token)


def decode_access_token(token: str) -> Dict[str, Any]:
    return cast(
        Dict[str, Any],
        jwt.decode(token, _secret_value(settings.secret_key), algorithms=[settings.algorithm]),
    )


def principal_from_token(token: str) -> UserPrincipal:
    """
    Turn a bearer token into a principal.

    Raises:
        UnauthorizedException: If the token is invalid, expired or lacks claims
    """
    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.info(f"Rejected access token: {str(e)}")
        raise UnauthorizedException("Could not validate credentials", code="INVALID_TOKEN")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in {r.value for r in RoleName}:
        raise UnauthorizedException("Could not validate credentials", code="INVALID_TOKEN")
    return UserPrincipal(user_id=str(user_id), role=RoleName(role))
