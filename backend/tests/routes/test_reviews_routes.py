from wellclass.models import BookingStatus

REVIEWS_URL = "/api/v1/reviews"


class TestReviewRoutes:
    def test_submit_and_list(self, client, test_student, test_teacher, auth_headers, make_booking):
        booking = make_booking(status=BookingStatus.COMPLETED)

        created = client.post(
            REVIEWS_URL,
            json={"booking_id": booking.id, "rating": 5, "comment": "Excelente aula"},
            headers=auth_headers(test_student),
        )

        assert created.status_code == 201
        assert created.json()["teacher_id"] == test_teacher.id

        listed = client.get(REVIEWS_URL, params={"teacher_id": test_teacher.id})
        assert listed.status_code == 200
        assert listed.json()["total"] == 1
        assert listed.json()["reviews"][0]["rating"] == 5

    def test_second_review_conflicts(self, client, test_student, auth_headers, make_booking):
        booking = make_booking(status=BookingStatus.COMPLETED)
        body = {"booking_id": booking.id, "rating": 4}

        assert client.post(REVIEWS_URL, json=body, headers=auth_headers(test_student)).status_code == 201
        response = client.post(REVIEWS_URL, json=body, headers=auth_headers(test_student))

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_REVIEW"

    def test_rating_out_of_range(self, client, test_student, auth_headers, make_booking):
        booking = make_booking(status=BookingStatus.COMPLETED)

        response = client.post(
            REVIEWS_URL, json={"booking_id": booking.id, "rating": 6}, headers=auth_headers(test_student)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_listing_needs_a_filter(self, client):
        response = client.get(REVIEWS_URL)

        assert response.status_code == 400
