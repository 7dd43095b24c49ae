# backend/wellclass/models/review.py
"""
Review model.

Design notes:
- One review per booking, enforced by a unique constraint on booking_id
- Reviews are immutable once written
- teacher_id is denormalized from the booking so aggregation is a single-table read
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
import ulid

from ..database import Base


class Review(Base):
    """Per-booking review submitted by a student."""

    __tablename__ = "reviews"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))

    booking_id = Column(String(26), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    booking = relationship("Booking", back_populates="review")
    student = relationship("User", foreign_keys=[student_id])

    __table_args__ = (
        UniqueConstraint("booking_id", name="uq_reviews_booking"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        Index("idx_reviews_teacher", "teacher_id"),
        Index("idx_reviews_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Review {self.id}: booking={self.booking_id}, rating={self.rating}>"
