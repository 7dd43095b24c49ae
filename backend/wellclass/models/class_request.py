# backend/wellclass/models/class_request.py
"""
Open class requests published by students.

Teachers browse requests and reach out to the student; a request carries no
commitment and is closed by flipping is_active.
"""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class ClassRequest(Base):
    __tablename__ = "class_requests"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    student_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    modality = Column(String(20), nullable=False)
    preferred_date = Column(Date, nullable=True)
    preferred_time = Column(String(5), nullable=True)  # HH:MM
    duration_minutes = Column(Integer, nullable=False, default=60)
    max_price = Column(Numeric(10, 2), nullable=True)
    description = Column(Text, nullable=True)
    contact_phone = Column(String(20), nullable=True)
    contact_email = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    student = relationship("User", foreign_keys=[student_id])

    __table_args__ = (
        CheckConstraint(
            "duration_minutes >= 30 AND duration_minutes <= 240",
            name="ck_class_requests_duration_range",
        ),
        CheckConstraint("max_price IS NULL OR max_price > 0", name="ck_class_requests_max_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<ClassRequest {self.id}: student={self.student_id}, modality={self.modality}>"
