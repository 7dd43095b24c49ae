from decimal import Decimal

from wellclass.models import PaymentStatus, User
from wellclass.repositories import RepositoryFactory


class TestBaseRepository:
    def test_exact_match_helpers(self, db, test_student, other_student, test_teacher):
        users = RepositoryFactory.create_user_repository(db)

        students = users.find_by(role="STUDENT")

        assert {u.id for u in students} == {test_student.id, other_student.id}
        assert users.find_one_by(role="TEACHER").id == test_teacher.id
        assert users.find_one_by(email="nobody@example.com") is None
        assert users.count(role="STUDENT") == 2
        assert users.exists(email=test_teacher.email) is True

    def test_update_and_delete_missing_rows(self, db):
        users = RepositoryFactory.create_user_repository(db)

        assert users.update("01HZZZZZZZZZZZZZZZZZZZZZZZ", name="Ghost") is None
        assert users.delete("01HZZZZZZZZZZZZZZZZZZZZZZZ") is False
        assert db.query(User).count() == 0

    def test_get_by_email_ignores_case(self, db, test_student):
        users = RepositoryFactory.create_user_repository(db)

        assert users.get_by_email("  ANA.Student@Example.com ").id == test_student.id


class TestPaymentRepository:
    def test_lists_payments_per_booking(self, db, make_booking, lesson_at):
        first = make_booking(start=lesson_at(8))
        second = make_booking(start=lesson_at(14))
        payments = RepositoryFactory.create_payment_repository(db)

        failed = payments.create(booking_id=first.id, amount=Decimal("100.00"), status=PaymentStatus.FAILED.value)
        paid = payments.create(booking_id=first.id, amount=Decimal("100.00"), status=PaymentStatus.COMPLETED.value)
        payments.create(booking_id=second.id, amount=Decimal("100.00"), status=PaymentStatus.COMPLETED.value)
        db.commit()

        assert {p.id for p in payments.list_for_booking(first.id)} == {failed.id, paid.id}
        assert payments.list_for_booking("01HZZZZZZZZZZZZZZZZZZZZZZZ") == []
