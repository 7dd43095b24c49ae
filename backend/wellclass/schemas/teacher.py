from typing import List, Optional

from ..core.enums import Modality
from ..models.teacher_profile import TeacherProfile
from ._strict_base import StrictModel


class TeacherResponse(StrictModel):
    id: str
    name: str
    image: Optional[str] = None
    bio: str
    specialties: List[Modality]
    hourly_rate: float
    rating: float
    total_reviews: int
    is_available: bool

    @classmethod
    def from_profile(cls, profile: TeacherProfile) -> "TeacherResponse":
        """The teacher is addressed by user id; the profile id stays internal."""
        return cls(
            id=profile.user_id,
            name=profile.user.name,
            image=profile.user.image,
            bio=profile.bio or "",
            specialties=list(profile.specialties or []),
            hourly_rate=float(profile.hourly_rate),
            rating=float(profile.rating or 0),
            total_reviews=profile.total_reviews or 0,
            is_available=bool(profile.is_available),
        )


class TeacherListResponse(StrictModel):
    teachers: List[TeacherResponse]
    total: int
