from datetime import date
from decimal import Decimal

from pydantic import ValidationError
import pytest

from wellclass.core.enums import Modality
from wellclass.core.exceptions import ForbiddenException, NotFoundException
from wellclass.models import PostedTime
from wellclass.schemas.posted_time import PostedTimeCreate
from wellclass.services.posted_time_service import PostedTimeService


@pytest.fixture
def posted_time_service(db) -> PostedTimeService:
    return PostedTimeService(db)


def _slot(day: int = 20, start: str = "09:00", end: str = "10:00", modality: Modality = Modality.YOGA, **extra):
    return PostedTimeCreate(
        date=date(2030, 3, day),
        start_time=start,
        end_time=end,
        modality=modality,
        price=Decimal("80.00"),
        **extra,
    )


class TestPostedTimeSchema:
    def test_clock_is_normalized(self):
        slot = _slot(start="9:05", end=" 10:30 ")

        assert slot.start_time == "09:05"
        assert slot.end_time == "10:30"

    @pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("11:00", "10:00"), ("25:00", "26:00"), ("9h", "10h")])
    def test_rejects_bad_ranges(self, start, end):
        with pytest.raises(ValidationError):
            _slot(start=start, end=end)


class TestPostedTimeService:
    def test_teacher_posts_a_slot(self, db, posted_time_service, test_teacher, principal_for):
        posted = posted_time_service.create_posted_time(
            principal_for(test_teacher), _slot(contact_email="carla@example.com", description="Hatha")
        )

        assert posted.teacher_id == test_teacher.id
        assert posted.modality == "YOGA"
        assert posted.is_available is True
        assert posted.contact_email == "carla@example.com"
        assert db.query(PostedTime).count() == 1

    def test_students_cannot_post(self, posted_time_service, test_student, principal_for):
        with pytest.raises(ForbiddenException):
            posted_time_service.create_posted_time(principal_for(test_student), _slot())

    def test_cannot_post_for_another_teacher(self, posted_time_service, test_teacher, other_teacher, principal_for):
        with pytest.raises(ForbiddenException):
            posted_time_service.create_posted_time(principal_for(test_teacher), _slot(teacher_id=other_teacher.id))

    def test_listing(self, posted_time_service, test_teacher, other_teacher, test_student, principal_for):
        late = posted_time_service.create_posted_time(principal_for(test_teacher), _slot(day=22))
        early = posted_time_service.create_posted_time(principal_for(test_teacher), _slot(day=21))
        pilates = posted_time_service.create_posted_time(
            principal_for(other_teacher), _slot(day=21, start="14:00", end="15:00", modality=Modality.PILATES)
        )

        everyone = posted_time_service.list_posted_times(principal_for(test_student))
        assert [p.id for p in everyone] == [early.id, pilates.id, late.id]

        only_pilates = posted_time_service.list_posted_times(principal_for(test_student), modality=Modality.PILATES)
        assert [p.id for p in only_pilates] == [pilates.id]

        # Teachers see only their own posts, whatever filter they pass
        own = posted_time_service.list_posted_times(principal_for(test_teacher), teacher_id=other_teacher.id)
        assert [p.id for p in own] == [early.id, late.id]

    def test_only_available_filter(self, db, posted_time_service, test_teacher, test_student, principal_for):
        open_slot = posted_time_service.create_posted_time(principal_for(test_teacher), _slot(day=20))
        taken = posted_time_service.create_posted_time(principal_for(test_teacher), _slot(day=21))
        taken.is_available = False
        db.commit()

        listed = posted_time_service.list_posted_times(principal_for(test_student), only_available=True)

        assert [p.id for p in listed] == [open_slot.id]

    def test_delete_own_slot(self, db, posted_time_service, test_teacher, principal_for):
        posted = posted_time_service.create_posted_time(principal_for(test_teacher), _slot())

        posted_time_service.delete_posted_time(principal_for(test_teacher), posted.id)

        assert db.query(PostedTime).count() == 0

    def test_cannot_delete_someone_elses_slot(self, posted_time_service, test_teacher, other_teacher, principal_for):
        posted = posted_time_service.create_posted_time(principal_for(test_teacher), _slot())

        with pytest.raises(ForbiddenException):
            posted_time_service.delete_posted_time(principal_for(other_teacher), posted.id)

    def test_delete_unknown_slot(self, posted_time_service, test_teacher, principal_for):
        with pytest.raises(NotFoundException):
            posted_time_service.delete_posted_time(principal_for(test_teacher), "01HZZZZZZZZZZZZZZZZZZZZZZZ")
