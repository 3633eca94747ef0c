from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from bookings.models import Booking
from notifications.models import Notification
from posts.models import Post


@pytest.fixture
def host(db):
    return User.objects.create_user(
        username="host@example.com",
        email="host@example.com",
        password="password123",
        first_name="Hana",
        last_name="Host",
        role=User.HOST,
    )


@pytest.fixture
def guest(db):
    return User.objects.create_user(
        username="guest@example.com",
        email="guest@example.com",
        password="password123",
        first_name="Gus",
        last_name="Guest",
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        username="outsider@example.com",
        email="outsider@example.com",
        password="password123",
    )


@pytest.fixture
def post(host):
    return Post.objects.create(
        user=host,
        post_type=Post.EXPERIENCE,
        title="Sunrise on Mount Batur",
        description="Early start, great views",
        price_per_person=Decimal("50.00"),
    )


@pytest.fixture
def guest_client(guest):
    client = APIClient()
    client.force_authenticate(guest)
    return client


@pytest.fixture
def host_client(host):
    client = APIClient()
    client.force_authenticate(host)
    return client


def make_booking(guest, host, post, status=Booking.PENDING):
    return Booking.objects.create(
        guest=guest,
        host=host,
        post=post,
        post_type=post.post_type,
        post_title=post.title,
        number_of_people=2,
        total_amount=Decimal("100.00"),
        start_date="2026-11-01",
        status=status,
    )


@pytest.mark.django_db
def test_create_prices_per_person_and_notifies_host(guest_client, guest, host, post):
    response = guest_client.post(
        "/api/bookings/",
        {"post_id": post.id, "number_of_people": 3, "start_date": "2026-11-01"},
        format="json",
    )

    assert response.status_code == 201
    assert response.data["success"] is True
    data = response.data["data"]
    assert data["status"] == Booking.PENDING
    assert Decimal(data["total_amount"]) == Decimal("150.00")
    assert data["guest"]["email"] == guest.email
    assert data["post"]["id"] == post.id

    notification = Notification.objects.get(recipient=host)
    assert notification.title == "New Booking Request"
    assert notification.type == Notification.INFO
    assert notification.link == f"/bookings/{data['id']}"
    assert notification.metadata == {"post_id": post.id}


@pytest.mark.django_db
def test_create_requires_post_people_and_start_date(guest_client, post):
    response = guest_client.post("/api/bookings/", {"post_id": post.id}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "Post ID, number of people, and start date are required"
    assert not Booking.objects.exists()


@pytest.mark.django_db
def test_create_rejects_unknown_post(guest_client):
    response = guest_client.post(
        "/api/bookings/",
        {"post_id": 999, "number_of_people": 1, "start_date": "2026-11-01"},
        format="json",
    )

    assert response.status_code == 404
    assert response.data["message"] == "Post not found"


@pytest.mark.django_db
def test_create_rejects_inactive_post(guest_client, post):
    post.status = Post.INACTIVE
    post.save()

    response = guest_client.post(
        "/api/bookings/",
        {"post_id": post.id, "number_of_people": 1, "start_date": "2026-11-01"},
        format="json",
    )

    assert response.status_code == 400
    assert response.data["message"] == "This trip is not available for booking"


@pytest.mark.django_db
def test_host_cannot_book_own_post(host_client, post):
    response = host_client.post(
        "/api/bookings/",
        {"post_id": post.id, "number_of_people": 1, "start_date": "2026-11-01"},
        format="json",
    )

    assert response.status_code == 400
    assert response.data["message"] == "You cannot book your own trip"
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_end_date_before_start_date_is_rejected(guest_client, post):
    response = guest_client.post(
        "/api/bookings/",
        {
            "post_id": post.id,
            "number_of_people": 1,
            "start_date": "2026-11-05",
            "end_date": "2026-11-01",
        },
        format="json",
    )

    assert response.status_code == 400
    assert response.data["message"].startswith("end_date")


@pytest.mark.django_db
def test_host_accepts_pending_booking(host_client, guest, host, post):
    booking = make_booking(guest, host, post)

    response = host_client.patch(
        f"/api/bookings/{booking.id}/accept/",
        {"host_response": "See you there"},
        format="json",
    )

    assert response.status_code == 200
    booking.refresh_from_db()
    assert booking.status == Booking.ACCEPTED
    assert booking.host_response == "See you there"
    assert booking.responded_at is not None

    notification = Notification.objects.get(recipient=guest)
    assert notification.title == "Booking Accepted"
    assert notification.type == Notification.SUCCESS


@pytest.mark.django_db
def test_host_declines_with_default_response(host_client, guest, host, post):
    booking = make_booking(guest, host, post)

    response = host_client.patch(f"/api/bookings/{booking.id}/decline/", {}, format="json")

    assert response.status_code == 200
    assert response.data["data"]["status"] == Booking.DECLINED
    assert response.data["data"]["host_response"] == ""
    assert Notification.objects.get(recipient=guest).type == Notification.WARNING


@pytest.mark.django_db
def test_accepting_declined_booking_is_rejected(host_client, guest, host, post):
    booking = make_booking(guest, host, post, status=Booking.DECLINED)

    response = host_client.patch(f"/api/bookings/{booking.id}/accept/", {}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "Cannot accept a booking that is already declined"
    booking.refresh_from_db()
    assert booking.status == Booking.DECLINED
    assert not Notification.objects.exists()


@pytest.mark.django_db
def test_second_response_is_rejected(host_client, guest, host, post):
    booking = make_booking(guest, host, post)

    assert host_client.patch(f"/api/bookings/{booking.id}/accept/", {}, format="json").status_code == 200
    response = host_client.patch(f"/api/bookings/{booking.id}/decline/", {}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "Cannot decline a booking that is already accepted"


@pytest.mark.django_db
def test_only_host_may_respond(guest_client, guest, host, post):
    booking = make_booking(guest, host, post)

    response = guest_client.patch(f"/api/bookings/{booking.id}/accept/", {}, format="json")

    assert response.status_code == 403
    assert response.data["message"] == "You are not authorized to accept this booking"
    booking.refresh_from_db()
    assert booking.status == Booking.PENDING


@pytest.mark.django_db
def test_respond_to_unknown_booking(host_client):
    response = host_client.patch("/api/bookings/4242/decline/", {}, format="json")

    assert response.status_code == 404
    assert response.data["message"] == "Booking not found"


@pytest.mark.django_db
def test_detail_visible_to_guest_and_host_only(guest_client, host_client, outsider, guest, host, post):
    booking = make_booking(guest, host, post)
    url = f"/api/bookings/{booking.id}/"

    assert guest_client.get(url).status_code == 200
    assert host_client.get(url).status_code == 200

    client = APIClient()
    client.force_authenticate(outsider)
    response = client.get(url)
    assert response.status_code == 403
    assert response.data["success"] is False


@pytest.mark.django_db
def test_host_requests_include_summary_and_pagination(host_client, guest, host, post):
    make_booking(guest, host, post)
    make_booking(guest, host, post)
    make_booking(guest, host, post, status=Booking.ACCEPTED)
    make_booking(guest, host, post, status=Booking.DECLINED)

    response = host_client.get("/api/bookings/host/requests/", {"status": "pending", "limit": 1})

    assert response.status_code == 200
    assert len(response.data["data"]) == 1
    assert response.data["pagination"] == {"total": 2, "page": 1, "limit": 1, "total_pages": 2}
    assert response.data["summary"] == {"pending": 2, "accepted": 1, "declined": 1, "total": 4}


@pytest.mark.django_db
def test_unknown_status_filter_is_rejected(host_client):
    response = host_client.get("/api/bookings/host/requests/", {"status": "cancelled"})

    assert response.status_code == 400
    assert response.data["success"] is False


@pytest.mark.django_db
def test_guest_sees_only_their_bookings(guest_client, guest, host, outsider, post):
    mine = make_booking(guest, host, post)
    make_booking(outsider, host, post)

    response = guest_client.get("/api/bookings/guest/my-bookings/")

    assert [item["id"] for item in response.data["data"]] == [mine.id]
    assert response.data["pagination"]["total"] == 1


@pytest.mark.django_db
def test_page_past_the_end_is_empty_with_totals(host_client, guest, host, post):
    response = host_client.get("/api/bookings/host/requests/", {"page": 2})

    assert response.status_code == 200
    assert response.data["data"] == []
    assert response.data["pagination"] == {"total": 0, "page": 2, "limit": 10, "total_pages": 0}

    make_booking(guest, host, post)
    response = host_client.get("/api/bookings/host/requests/", {"page": 3, "limit": 1})

    assert response.status_code == 200
    assert response.data["data"] == []
    assert response.data["pagination"] == {"total": 1, "page": 3, "limit": 1, "total_pages": 1}


@pytest.mark.django_db
def test_booking_answered_concurrently_is_not_answered_twice(monkeypatch, host_client, guest, host, post):
    booking = make_booking(guest, host, post, status=Booking.DECLINED)
    # The row changed after the pending check was made.
    monkeypatch.setattr(Booking, "is_pending", property(lambda self: True))

    response = host_client.patch(f"/api/bookings/{booking.id}/accept/", {}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "Cannot accept a booking that is already declined"
    booking.refresh_from_db()
    assert booking.status == Booking.DECLINED
    assert not Notification.objects.filter(recipient=guest).exists()
