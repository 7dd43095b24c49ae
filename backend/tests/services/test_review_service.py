"""
Review service tests: preconditions in order, one review per booking and
the teacher rating aggregate.
"""

from decimal import Decimal
from itertools import permutations
from unittest.mock import patch

import pytest

from wellclass.core.exceptions import (
    DuplicateReviewException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ValidationException,
)
from wellclass.models import BookingStatus, Review, TeacherProfile
from wellclass.repositories.review_repository import ReviewRepository
from wellclass.services.ratings_math import compute_rating_aggregate
from wellclass.services.review_service import ReviewService


@pytest.fixture
def review_service(db) -> ReviewService:
    return ReviewService(db)


def _profile(db, teacher) -> TeacherProfile:
    return db.query(TeacherProfile).filter(TeacherProfile.user_id == teacher.id).one()


class TestRecordReview:
    def test_completed_booking_accepts_one_review(
        self, db, review_service, make_booking, test_student, test_teacher, principal_for
    ):
        booking = make_booking(status=BookingStatus.COMPLETED)

        review = review_service.record_review(principal_for(test_student), booking.id, 5, "  Excelente aula!  ")

        assert review.rating == 5
        assert review.comment == "Excelente aula!"
        assert review.teacher_id == test_teacher.id
        assert review.student_id == test_student.id
        profile = _profile(db, test_teacher)
        assert Decimal(profile.rating) == Decimal("5.00")
        assert profile.total_reviews == 1

        with pytest.raises(DuplicateReviewException):
            review_service.record_review(principal_for(test_student), booking.id, 4)
        assert db.query(Review).count() == 1

    @pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CANCELLED])
    def test_only_completed_bookings(self, db, review_service, make_booking, test_student, principal_for, status):
        booking = make_booking(status=status)

        with pytest.raises(InvalidStateException):
            review_service.record_review(principal_for(test_student), booking.id, 4)
        assert db.query(Review).count() == 0

    def test_unknown_booking(self, review_service, test_student, principal_for):
        with pytest.raises(NotFoundException):
            review_service.record_review(principal_for(test_student), "01HZZZZZZZZZZZZZZZZZZZZZZZ", 4)

    def test_other_student(self, review_service, make_booking, other_student, principal_for):
        booking = make_booking(status=BookingStatus.COMPLETED)

        with pytest.raises(ForbiddenException):
            review_service.record_review(principal_for(other_student), booking.id, 4)

    def test_owner_check_precedes_status_check(self, review_service, make_booking, other_student, principal_for):
        booking = make_booking(status=BookingStatus.PENDING)

        with pytest.raises(ForbiddenException):
            review_service.record_review(principal_for(other_student), booking.id, 4)

    def test_teachers_cannot_review(self, review_service, make_booking, test_teacher, principal_for):
        booking = make_booking(status=BookingStatus.COMPLETED)

        with pytest.raises(ForbiddenException):
            review_service.record_review(principal_for(test_teacher), booking.id, 4)

    @pytest.mark.parametrize("rating", [0, 6, -1, None, True])
    def test_rating_range(self, review_service, make_booking, test_student, principal_for, rating):
        booking = make_booking(status=BookingStatus.COMPLETED)

        with pytest.raises(ValidationException):
            review_service.record_review(principal_for(test_student), booking.id, rating)

    def test_comment_too_long(self, review_service, make_booking, test_student, principal_for):
        booking = make_booking(status=BookingStatus.COMPLETED)

        with pytest.raises(ValidationException):
            review_service.record_review(principal_for(test_student), booking.id, 4, "x" * 1001)

    def test_blank_comment_is_stored_as_null(self, review_service, make_booking, test_student, principal_for):
        booking = make_booking(status=BookingStatus.COMPLETED)

        review = review_service.record_review(principal_for(test_student), booking.id, 3, "   ")

        assert review.comment is None

    def test_unique_constraint_backs_the_duplicate_check(
        self, db, review_service, make_booking, test_student, principal_for
    ):
        booking = make_booking(status=BookingStatus.COMPLETED)
        review_service.record_review(principal_for(test_student), booking.id, 5)

        # Simulates a concurrent submission that passed the existence check
        with patch.object(ReviewRepository, "exists_for_booking", return_value=False):
            with pytest.raises(DuplicateReviewException):
                review_service.record_review(principal_for(test_student), booking.id, 1)

        assert db.query(Review).count() == 1


class TestRatingAggregate:
    def test_rating_tracks_every_review(
        self, db, review_service, make_booking, test_student, test_teacher, principal_for, lesson_at
    ):
        ratings = [5, 4, 4, 2]
        seen = []
        for hour, rating in zip(range(8, 20, 3), ratings):
            booking = make_booking(start=lesson_at(hour), status=BookingStatus.COMPLETED)
            review_service.record_review(principal_for(test_student), booking.id, rating)
            seen.append(rating)

            profile = _profile(db, test_teacher)
            expected = compute_rating_aggregate(seen)
            assert Decimal(profile.rating) == expected.rating
            assert profile.total_reviews == len(seen)

        assert Decimal(_profile(db, test_teacher).rating) == Decimal("3.75")

    @pytest.mark.parametrize("order", list(permutations([5, 3, 1])))
    def test_insertion_order_does_not_matter(
        self, db, review_service, make_booking, test_student, test_teacher, principal_for, lesson_at, order
    ):
        for hour, rating in zip((8, 11, 14), order):
            booking = make_booking(start=lesson_at(hour), status=BookingStatus.COMPLETED)
            review_service.record_review(principal_for(test_student), booking.id, rating)

        profile = _profile(db, test_teacher)
        assert Decimal(profile.rating) == Decimal("3.00")
        assert profile.total_reviews == 3

    def test_reviews_of_other_teachers_do_not_count(
        self, db, review_service, make_booking, test_student, test_teacher, other_teacher, principal_for, lesson_at
    ):
        mine = make_booking(start=lesson_at(8), status=BookingStatus.COMPLETED)
        theirs = make_booking(start=lesson_at(8), status=BookingStatus.COMPLETED, teacher=other_teacher)

        review_service.record_review(principal_for(test_student), mine.id, 5)
        review_service.record_review(principal_for(test_student), theirs.id, 1)

        assert Decimal(_profile(db, test_teacher).rating) == Decimal("5.00")
        assert Decimal(_profile(db, other_teacher).rating) == Decimal("1.00")

    def test_recompute_repairs_a_drifted_aggregate(
        self, db, review_service, make_booking, test_student, test_teacher, principal_for
    ):
        booking = make_booking(status=BookingStatus.COMPLETED)
        review_service.record_review(principal_for(test_student), booking.id, 4)
        profile = _profile(db, test_teacher)
        profile.rating = Decimal("1.00")
        profile.total_reviews = 9
        db.commit()

        repaired = review_service.recompute_teacher_rating(test_teacher.id)

        assert Decimal(repaired.rating) == Decimal("4.00")
        assert repaired.total_reviews == 1

    def test_recompute_is_idempotent(self, review_service, make_booking, test_student, test_teacher, principal_for):
        booking = make_booking(status=BookingStatus.COMPLETED)
        review_service.record_review(principal_for(test_student), booking.id, 2)

        first = review_service.recompute_teacher_rating(test_teacher.id)
        first_values = (Decimal(first.rating), first.total_reviews)
        second = review_service.recompute_teacher_rating(test_teacher.id)

        assert (Decimal(second.rating), second.total_reviews) == first_values

    def test_recompute_without_profile(self, review_service, test_student):
        with pytest.raises(NotFoundException):
            review_service.recompute_teacher_rating(test_student.id)


class TestListReviews:
    def test_by_teacher_and_booking(
        self, review_service, make_booking, test_student, test_teacher, principal_for, lesson_at
    ):
        first = make_booking(start=lesson_at(8), status=BookingStatus.COMPLETED)
        second = make_booking(start=lesson_at(12), status=BookingStatus.COMPLETED)
        r1 = review_service.record_review(principal_for(test_student), first.id, 5)
        r2 = review_service.record_review(principal_for(test_student), second.id, 4)

        by_teacher = review_service.list_reviews(teacher_id=test_teacher.id)
        assert {r.id for r in by_teacher} == {r1.id, r2.id}
        assert [r.id for r in review_service.list_reviews(booking_id=second.id)] == [r2.id]

    def test_requires_a_filter(self, review_service):
        with pytest.raises(ValidationException):
            review_service.list_reviews()
