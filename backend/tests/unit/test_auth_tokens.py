from datetime import timedelta

import jwt
import pytest

from wellclass.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    principal_from_token,
    verify_password,
)
from wellclass.core.config import settings
from wellclass.core.enums import RoleName
from wellclass.core.exceptions import UnauthorizedException


class TestPasswords:
    def test_hash_round_trip(self):
        hashed = get_password_hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("s3cret-pass", "not-a-bcrypt-hash") is False


class TestPrincipalFromToken:
    def test_valid_token(self):
        token = create_access_token({"sub": "01HZX000000000000000000000", "role": "TEACHER"})

        principal = principal_from_token(token)

        assert principal.user_id == "01HZX000000000000000000000"
        assert principal.role is RoleName.TEACHER
        assert principal.is_teacher and not principal.is_student

    def test_token_carries_expiry(self):
        payload = decode_access_token(create_access_token({"sub": "u1", "role": "STUDENT"}))

        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token({"sub": "u1", "role": "STUDENT"}, expires_delta=timedelta(seconds=-5))

        with pytest.raises(UnauthorizedException) as exc_info:
            principal_from_token(token)

        assert exc_info.value.code == "INVALID_TOKEN"

    def test_foreign_signature(self):
        token = jwt.encode({"sub": "u1", "role": "STUDENT"}, "someone-elses-key", algorithm=settings.algorithm)

        with pytest.raises(UnauthorizedException):
            principal_from_token(token)

    @pytest.mark.parametrize("claims", [{"sub": "u1"}, {"role": "STUDENT"}, {"sub": "u1", "role": "ADMIN"}])
    def test_missing_or_unknown_claims(self, claims):
        with pytest.raises(UnauthorizedException) as exc_info:
            principal_from_token(create_access_token(claims))

        assert exc_info.value.code == "INVALID_TOKEN"

    def test_garbage(self):
        with pytest.raises(UnauthorizedException):
            principal_from_token("not.a.jwt")
