# backend/wellclass/models/user.py
"""
User model for the Wellclass marketplace.

Both teachers and students are represented by this model, differentiated
by the role column. Teachers additionally own a TeacherProfile.
"""

import logging

from sqlalchemy import CheckConstraint, Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import RoleName
from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    """
    Account record for a student or a teacher.

    Attributes:
        id: ULID primary key
        email: Unique, lower-cased email address
        name: Display name
        hashed_password: Bcrypt hash; null for users provisioned by an external identity provider
        role: STUDENT or TEACHER
        phone: Optional contact phone
        image: Optional avatar URL
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=False)
    hashed_password = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default=RoleName.STUDENT.value)
    phone = Column(String(20), nullable=True)
    image = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    teacher_profile = relationship(
        "TeacherProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (CheckConstraint("role IN ('STUDENT', 'TEACHER')", name="ck_users_role"),)

    @property
    def is_teacher(self) -> bool:
        return self.role == RoleName.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role == RoleName.STUDENT

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email} ({self.role})>"
