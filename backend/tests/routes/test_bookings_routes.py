from wellclass.models import Booking, BookingStatus

BOOKINGS_URL = "/api/v1/bookings"


def _payload(teacher, lesson_at, **overrides):
    payload = {
        "teacher_id": teacher.id,
        "scheduled_start": lesson_at(10).isoformat(),
        "duration_minutes": 60,
        "price": "120.00",
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:
    def test_returns_checkout(self, client, db, test_student, test_teacher, auth_headers, lesson_at, mock_checkout):
        response = client.post(BOOKINGS_URL, json=_payload(test_teacher, lesson_at), headers=auth_headers(test_student))

        assert response.status_code == 201
        body = response.json()
        assert body["checkout_session_id"] == "cs_test_1"
        assert body["checkout_url"] == "https://checkout.stripe.com/c/pay/cs_test_1"
        assert body["booking"]["status"] == "PENDING"
        assert body["booking"]["student_id"] == test_student.id
        assert body["booking"]["price"] == 120.0
        assert db.query(Booking).count() == 1

    def test_duration_out_of_range(self, client, test_student, test_teacher, auth_headers, lesson_at, mock_checkout):
        response = client.post(
            BOOKINGS_URL,
            json=_payload(test_teacher, lesson_at, duration_minutes=29),
            headers=auth_headers(test_student),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
        mock_checkout.assert_not_called()

    def test_requires_authentication(self, client, test_teacher, lesson_at, mock_checkout):
        response = client.post(BOOKINGS_URL, json=_payload(test_teacher, lesson_at))

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    def test_rejects_garbage_token(self, client, test_teacher, lesson_at, mock_checkout):
        response = client.post(
            BOOKINGS_URL, json=_payload(test_teacher, lesson_at), headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    def test_teachers_cannot_book(self, client, test_teacher, other_teacher, auth_headers, lesson_at, mock_checkout):
        response = client.post(
            BOOKINGS_URL, json=_payload(other_teacher, lesson_at), headers=auth_headers(test_teacher)
        )

        assert response.status_code == 403

    def test_conflict(self, client, test_student, test_teacher, auth_headers, lesson_at, make_booking, mock_checkout):
        existing = make_booking(start=lesson_at(10), status=BookingStatus.CONFIRMED)

        response = client.post(
            BOOKINGS_URL,
            json=_payload(test_teacher, lesson_at, scheduled_start=lesson_at(10, 30).isoformat()),
            headers=auth_headers(test_student),
        )

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "BOOKING_CONFLICT"
        assert body["errors"]["conflicting_booking_ids"] == [existing.id]
        mock_checkout.assert_not_called()


class TestReadBookings:
    def test_participants_can_read(self, client, test_student, test_teacher, auth_headers, make_booking):
        booking = make_booking()

        for user in (test_student, test_teacher):
            response = client.get(f"{BOOKINGS_URL}/{booking.id}", headers=auth_headers(user))
            assert response.status_code == 200
            assert response.json()["id"] == booking.id

    def test_outsiders_cannot_read(self, client, other_student, auth_headers, make_booking):
        booking = make_booking()

        response = client.get(f"{BOOKINGS_URL}/{booking.id}", headers=auth_headers(other_student))

        assert response.status_code == 403

    def test_unknown_booking(self, client, test_student, auth_headers):
        response = client.get(f"{BOOKINGS_URL}/01HZZZZZZZZZZZZZZZZZZZZZZZ", headers=auth_headers(test_student))

        assert response.status_code == 404

    def test_list_with_status_filter(self, client, test_teacher, auth_headers, make_booking, lesson_at):
        confirmed = make_booking(start=lesson_at(8), status=BookingStatus.CONFIRMED)
        make_booking(start=lesson_at(12))

        response = client.get(BOOKINGS_URL, params={"status": "CONFIRMED"}, headers=auth_headers(test_teacher))

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["bookings"][0]["id"] == confirmed.id


class TestBookingActions:
    def test_restart_checkout(self, client, test_student, auth_headers, make_booking, mock_checkout):
        booking = make_booking(checkout_session_id="cs_old")

        response = client.post(f"{BOOKINGS_URL}/{booking.id}/checkout", headers=auth_headers(test_student))

        assert response.status_code == 200
        assert response.json()["checkout_session_id"] == "cs_test_1"

    def test_complete(self, client, test_teacher, auth_headers, make_booking):
        booking = make_booking(status=BookingStatus.CONFIRMED)

        response = client.post(f"{BOOKINGS_URL}/{booking.id}/complete", headers=auth_headers(test_teacher))

        assert response.status_code == 200
        assert response.json()["status"] == "COMPLETED"
        assert response.json()["completed_at"] is not None

    def test_complete_unpaid_booking(self, client, test_teacher, auth_headers, make_booking):
        booking = make_booking()

        response = client.post(f"{BOOKINGS_URL}/{booking.id}/complete", headers=auth_headers(test_teacher))

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_STATE"
