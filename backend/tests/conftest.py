# backend/tests/conftest.py
"""
Pytest configuration.

Settings are driven by environment variables, so they are set BEFORE any
wellclass import. Every test gets a fresh in-memory SQLite schema.
"""

import os

# CRITICAL: Set test configuration BEFORE any app imports!
os.environ["CI"] = "1"  # never read backend/.env
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_wellclass"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_wellclass"
os.environ["STRIPE_WEBHOOK_SECRET_PLATFORM"] = ""
os.environ["FRONTEND_URL"] = "http://localhost:3000"

from datetime import datetime, timedelta, timezone
from decimal import Decimal
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wellclass.api.dependencies.database import get_db
from wellclass.api.dependencies.services import get_stripe_service
from wellclass.auth import create_access_token, get_password_hash
from wellclass.core.enums import Modality, RoleName
from wellclass.database import Base
from wellclass.main import app
from wellclass.models import Booking, BookingStatus, TeacherProfile, User
from wellclass.principal import UserPrincipal
from wellclass.services.stripe_service import StripeService

TEST_WEBHOOK_SECRET = "whsec_test_wellclass"
TEST_PASSWORD = "TestPassword123!"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # one shared in-memory database across threads
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False)


# ============================================================================
# Helper Functions
# ============================================================================


def _sign_payload(payload: bytes, secret: str = TEST_WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
    """Build a ``stripe-signature`` header the way Stripe signs deliveries."""
    ts = int(time.time()) if timestamp is None else timestamp
    signed = f"{ts}.{payload.decode('utf-8')}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={ts},v1={signature}"


def _stripe_event(event_type: str, obj: Dict[str, Any], event_id: str = "evt_test_1") -> bytes:
    return json.dumps(
        {"id": event_id, "object": "event", "type": event_type, "data": {"object": obj}}
    ).encode("utf-8")


def _principal_for(user: User) -> UserPrincipal:
    return UserPrincipal(user_id=user.id, role=RoleName(user.role))


def _auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def _checkout_session_mock(session_id: str = "cs_test_123") -> MagicMock:
    return MagicMock(id=session_id, url=f"https://checkout.stripe.com/c/pay/{session_id}")


# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture(scope="function")
def db() -> Session:
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def stripe_service() -> StripeService:
    return StripeService(api_key="sk_test_wellclass", webhook_secrets=[TEST_WEBHOOK_SECRET])


@pytest.fixture
def client(db: Session, stripe_service: StripeService):
    """Create a test client bound to the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_stripe_service] = lambda: stripe_service

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


# ============================================================================
# User fixtures
# ============================================================================


def _make_user(db: Session, email: str, name: str, role: RoleName) -> User:
    user = User(
        email=email,
        name=name,
        role=role.value,
        hashed_password=get_password_hash(TEST_PASSWORD),
    )
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def test_student(db: Session) -> User:
    student = _make_user(db, "ana.student@example.com", "Ana Souza", RoleName.STUDENT)
    db.commit()
    return student


@pytest.fixture
def other_student(db: Session) -> User:
    student = _make_user(db, "bruno.student@example.com", "Bruno Lima", RoleName.STUDENT)
    db.commit()
    return student


@pytest.fixture
def test_teacher(db: Session) -> User:
    teacher = _make_user(db, "carla.teacher@example.com", "Carla Mendes", RoleName.TEACHER)
    db.add(
        TeacherProfile(
            user_id=teacher.id,
            bio="Hatha and vinyasa yoga",
            specialties=[Modality.YOGA.value, Modality.MEDITATION.value],
            hourly_rate=Decimal("120.00"),
            is_available=True,
        )
    )
    db.commit()
    return teacher


@pytest.fixture
def other_teacher(db: Session) -> User:
    teacher = _make_user(db, "diego.teacher@example.com", "Diego Alves", RoleName.TEACHER)
    db.add(
        TeacherProfile(
            user_id=teacher.id,
            bio="Pilates",
            specialties=[Modality.PILATES.value],
            hourly_rate=Decimal("90.00"),
        )
    )
    db.commit()
    return teacher


# ============================================================================
# Booking fixtures
# ============================================================================

LESSON_DAY = datetime(2030, 3, 15, tzinfo=timezone.utc)


def _at(hour: int, minute: int = 0) -> datetime:
    return LESSON_DAY + timedelta(hours=hour, minutes=minute)


@pytest.fixture
def make_booking(db: Session, test_student: User, test_teacher: User) -> Callable[..., Booking]:
    """Insert a booking directly, bypassing checkout."""

    def _make(
        *,
        start: Optional[datetime] = None,
        duration_minutes: int = 60,
        status: BookingStatus = BookingStatus.PENDING,
        price: Decimal = Decimal("100.00"),
        student: Optional[User] = None,
        teacher: Optional[User] = None,
        checkout_session_id: Optional[str] = None,
    ) -> Booking:
        booking = Booking(
            student_id=(student or test_student).id,
            teacher_id=(teacher or test_teacher).id,
            scheduled_start=start or _at(10),
            duration_minutes=duration_minutes,
            price=price,
            status=status.value,
            checkout_session_id=checkout_session_id,
        )
        db.add(booking)
        db.commit()
        return booking

    return _make


# ============================================================================
# Helper fixtures
# ============================================================================


@pytest.fixture
def lesson_at() -> Callable[..., datetime]:
    """``lesson_at(10, 30)`` is 10:30 UTC on the shared lesson day."""
    return _at


@pytest.fixture
def sign_payload() -> Callable[..., str]:
    return _sign_payload


@pytest.fixture
def stripe_event() -> Callable[..., bytes]:
    return _stripe_event


@pytest.fixture
def principal_for() -> Callable[[User], UserPrincipal]:
    return _principal_for


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    return _auth_headers


@pytest.fixture
def mock_checkout():
    """Patch Stripe Checkout; each call returns a fresh session id."""
    counter = {"n": 0}

    def _create(**kwargs):
        counter["n"] += 1
        return _checkout_session_mock(f"cs_test_{counter['n']}")

    with patch("stripe.checkout.Session.create", side_effect=_create) as mocked:
        yield mocked
