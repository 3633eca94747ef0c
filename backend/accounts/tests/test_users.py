import pytest
from rest_framework.test import APIClient

from accounts.models import User
from posts.models import Post
from reviews.models import Review


def make_user(email, **extra):
    return User.objects.create_user(username=email, email=email, password="password123", **extra)


@pytest.fixture
def guest(db):
    return make_user("guest@example.com", first_name="Gina", last_name="Guest")


@pytest.fixture
def guest_client(guest):
    client = APIClient()
    client.force_authenticate(guest)
    return client


@pytest.mark.django_db
def test_me_requires_authentication(guest_client, guest):
    assert APIClient().get("/api/users/me/").status_code == 401

    response = guest_client.get("/api/users/me/")
    assert response.status_code == 200
    assert response.data["data"]["email"] == guest.email


@pytest.mark.django_db
def test_profile_update_and_remove_avatar(guest_client, guest):
    response = guest_client.put(
        "/api/users/profile/",
        {"description": "Loves trains", "avatar_url": "https://example.com/me.png"},
        format="json",
    )
    assert response.status_code == 200
    assert response.data["data"]["description"] == "Loves trains"

    guest_client.patch("/api/users/profile/", {"remove_avatar": True}, format="json")
    guest.refresh_from_db()
    assert guest.avatar_url == ""


@pytest.mark.django_db
def test_location_is_range_checked(guest_client, guest):
    missing = guest_client.put("/api/users/location/", {"latitude": 10}, format="json")
    assert missing.status_code == 400
    assert missing.data["message"] == "longitude: Latitude and longitude are required"

    bad = guest_client.put("/api/users/location/", {"latitude": 91, "longitude": 0}, format="json")
    assert bad.status_code == 400
    assert bad.data["message"] == "latitude: Latitude must be between -90 and 90"

    ok = guest_client.put(
        "/api/users/location/",
        {"latitude": 27.7, "longitude": 85.3, "city": "Kathmandu", "country": "Nepal"},
        format="json",
    )
    assert ok.status_code == 200
    guest.refresh_from_db()
    assert guest.city == "Kathmandu"
    assert guest.location_updated_at is not None
    assert guest_client.get("/api/users/location/").data["data"]["latitude"] == 27.7


@pytest.mark.django_db
def test_public_profile_of_host_includes_reviews(guest):
    host = make_user("host@example.com", role=User.HOST)
    Post.objects.create(user=host, post_type=Post.TREK, title="Langtang", description="x")
    Post.objects.create(user=host, post_type=Post.PLAN, title="Pokhara", description="x")
    Post.objects.create(user=host, post_type=Post.PLAN, title="Old", description="x", status=Post.INACTIVE)
    Review.objects.create(reviewer=guest, host=host, rating=5, comment="Superb")

    response = APIClient().get(f"/api/users/profile/{host.id}/")

    assert response.status_code == 200
    data = response.data["data"]
    assert data["post_stats"] == {"total": 2, "experiences": 0, "services": 0, "treks": 1, "plans": 1}
    assert len(data["posts"]) == 2
    assert data["review_stats"]["average_rating"] == 5.0
    assert data["reviews"][0]["comment"] == "Superb"


@pytest.mark.django_db
def test_public_profile_of_guest_has_no_reviews(guest):
    response = APIClient().get(f"/api/users/profile/{guest.id}/")

    assert response.status_code == 200
    assert "reviews" not in response.data["data"]
    assert APIClient().get("/api/users/profile/9999/").status_code == 404


@pytest.mark.django_db
def test_top_rated_hosts_ranking_and_filters(guest):
    other_guest = make_user("second@example.com")
    alpine = make_user("alpine@example.com", role=User.HOST, city="Zermatt", country="Switzerland")
    coastal = make_user("coastal@example.com", role=User.HOST, city="Lisbon", country="Portugal")
    make_user("unreviewed@example.com", role=User.HOST)
    Post.objects.create(user=alpine, post_type=Post.TREK, title="Matterhorn", description="x")

    Review.objects.create(reviewer=guest, host=alpine, rating=5)
    Review.objects.create(reviewer=other_guest, host=alpine, rating=4)
    Review.objects.create(reviewer=guest, host=coastal, rating=3)

    client = APIClient()
    response = client.get("/api/users/top-rated/hosts/")

    assert response.status_code == 200
    ranked = response.data["data"]
    assert [host["email"] for host in ranked] == ["alpine@example.com", "coastal@example.com"]
    assert ranked[0]["average_rating"] == 4.5
    assert ranked[0]["review_count"] == 2
    assert ranked[0]["posts_by_type"] == {"trek": 1, "service": 0, "experience": 0}

    filtered = client.get("/api/users/top-rated/hosts/", {"min_rating": 4})
    assert [host["email"] for host in filtered.data["data"]] == ["alpine@example.com"]

    by_location = client.get("/api/users/top-rated/hosts/", {"location": "portugal"})
    assert [host["email"] for host in by_location.data["data"]] == ["coastal@example.com"]


@pytest.mark.django_db
def test_top_rated_hosts_validates_params():
    client = APIClient()

    bad_rating = client.get("/api/users/top-rated/hosts/", {"min_rating": 7})
    assert bad_rating.status_code == 400
    assert bad_rating.data["message"] == "min_rating: Invalid min_rating value. Must be between 0 and 5"

    bad_limit = client.get("/api/users/top-rated/hosts/", {"limit": 0})
    assert bad_limit.status_code == 400


@pytest.mark.django_db
def test_admin_endpoints_require_admin_role(guest_client, guest):
    assert guest_client.get("/api/users/admin/users/").status_code == 403

    admin = make_user("admin@example.com", role=User.ADMIN)
    client = APIClient()
    client.force_authenticate(admin)

    listing = client.get("/api/users/admin/users/")
    assert listing.status_code == 200
    assert listing.data["pagination"]["total"] == 2

    promoted = client.patch(f"/api/users/admin/users/{guest.id}/role/", {"role": "host"}, format="json")
    assert promoted.status_code == 200
    guest.refresh_from_db()
    assert guest.role == User.HOST

    invalid = client.patch(f"/api/users/admin/users/{guest.id}/role/", {"role": "owner"}, format="json")
    assert invalid.data["message"] == "role: Invalid role. Must be 'guest', 'host', or 'admin'"

    assert client.delete(f"/api/users/admin/users/{guest.id}/").status_code == 200
    assert not User.objects.filter(pk=guest.id).exists()
