from decimal import Decimal

import pytest

from wellclass.auth import decode_access_token
from wellclass.core.enums import Modality, RoleName
from wellclass.core.exceptions import ConflictException, UnauthorizedException, ValidationException
from wellclass.models import TeacherProfile, User
from wellclass.schemas.auth import UserLogin, UserRegister
from wellclass.services.account_service import AccountService


@pytest.fixture
def account_service(db) -> AccountService:
    return AccountService(db)


class TestRegister:
    def test_student(self, db, account_service):
        user = account_service.register(
            UserRegister(email="Nina@Example.com", name=" Nina ", password="supersecret")
        )

        assert user.role == RoleName.STUDENT
        assert user.email == "nina@example.com"
        assert user.name == "Nina"
        assert user.hashed_password != "supersecret"
        assert db.query(TeacherProfile).count() == 0

    def test_teacher_gets_a_profile(self, db, account_service):
        user = account_service.register(
            UserRegister(
                email="otto@example.com",
                name="Otto",
                password="supersecret",
                role=RoleName.TEACHER,
                specialties=[Modality.YOGA, Modality.PILATES, Modality.YOGA],
                hourly_rate=Decimal("150.00"),
                bio="Yoga e pilates",
            )
        )

        profile = db.query(TeacherProfile).filter(TeacherProfile.user_id == user.id).one()
        assert profile.specialties == ["YOGA", "PILATES"]
        assert Decimal(profile.hourly_rate) == Decimal("150.00")
        assert profile.is_available is True
        assert profile.total_reviews == 0

    def test_teacher_needs_specialties(self, account_service):
        with pytest.raises(ValidationException):
            account_service.register(
                UserRegister(
                    email="otto@example.com",
                    name="Otto",
                    password="supersecret",
                    role=RoleName.TEACHER,
                    hourly_rate=Decimal("150.00"),
                )
            )

    def test_teacher_needs_a_rate(self, account_service):
        with pytest.raises(ValidationException):
            account_service.register(
                UserRegister(
                    email="otto@example.com",
                    name="Otto",
                    password="supersecret",
                    role=RoleName.TEACHER,
                    specialties=[Modality.YOGA],
                )
            )

    def test_duplicate_email(self, db, account_service, test_student):
        with pytest.raises(ConflictException) as exc_info:
            account_service.register(
                UserRegister(email="ANA.student@example.com", name="Ana 2", password="supersecret")
            )

        assert exc_info.value.code == "EMAIL_IN_USE"
        assert db.query(User).count() == 1


class TestLogin:
    def test_valid_credentials(self, account_service, test_teacher):
        user, token = account_service.login(UserLogin(email="carla.teacher@example.com", password="TestPassword123!"))

        claims = decode_access_token(token)
        assert user.id == test_teacher.id
        assert claims["sub"] == test_teacher.id
        assert claims["role"] == "TEACHER"

    def test_wrong_password(self, account_service, test_teacher):
        with pytest.raises(UnauthorizedException) as exc_info:
            account_service.login(UserLogin(email="carla.teacher@example.com", password="nope"))

        assert exc_info.value.code == "INVALID_CREDENTIALS"

    def test_unknown_email(self, account_service):
        with pytest.raises(UnauthorizedException):
            account_service.login(UserLogin(email="ghost@example.com", password="whatever"))
