# backend/wellclass/models/teacher_profile.py
"""
Teacher Profile model for the Wellclass marketplace.

A profile extends a TEACHER user with the data students browse (bio,
specialties, hourly rate) and carries the denormalized rating aggregate
that the review flow keeps in sync.
"""

import logging

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base

logger = logging.getLogger(__name__)


class TeacherProfile(Base):
    """
    Model representing a teacher's public profile.

    Attributes:
        id: Primary key
        user_id: Foreign key to users table (one-to-one relationship)
        bio: Free-text presentation
        specialties: List of Modality values the teacher offers
        hourly_rate: Reference price per hour
        is_available: Whether the teacher currently accepts bookings
        rating: Mean of all review ratings (0 when there are no reviews)
        total_reviews: Number of reviews

    Business Rules:
        - Each user can have at most one teacher profile
        - After every review submission (full recomputation, see ReviewService)
          rating * total_reviews equals the sum of the teacher's review ratings
          to within half a cent per review, since rating is stored at two decimals
    """

    __tablename__ = "teacher_profiles"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    bio = Column(Text, nullable=False, default="")
    specialties = Column(JSON, nullable=False, default=list)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    # Rating aggregate (recomputed on every review)
    rating = Column(Numeric(3, 2), nullable=False, default=0)
    total_reviews = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="teacher_profile")

    __table_args__ = (
        CheckConstraint("hourly_rate > 0", name="ck_teacher_profiles_rate_positive"),
        CheckConstraint("total_reviews >= 0", name="ck_teacher_profiles_reviews_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_teacher_profiles_rating_range"),
    )

    def __repr__(self) -> str:
        return (
            f"<TeacherProfile {self.id}: user={self.user_id}, "
            f"rating={self.rating}, reviews={self.total_reviews}>"
        )
