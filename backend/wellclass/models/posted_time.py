# backend/wellclass/models/posted_time.py
"""
Open time slots published by teachers.

A posted time advertises availability; students contact the teacher
directly and then book through the regular booking flow.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class PostedTime(Base):
    __tablename__ = "posted_times"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    teacher_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    modality = Column(String(20), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    contact_phone = Column(String(20), nullable=True)
    contact_email = Column(String(255), nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    teacher = relationship("User", foreign_keys=[teacher_id])

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_posted_times_price_positive"),
        CheckConstraint("end_time > start_time", name="ck_posted_times_time_order"),
    )

    def __repr__(self) -> str:
        return f"<PostedTime {self.id}: teacher={self.teacher_id}, {self.date} {self.start_time}-{self.end_time}>"
