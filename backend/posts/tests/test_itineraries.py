import pytest
from rest_framework.test import APIClient

from accounts.models import User
from posts.models import Post, Reaction


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
def itinerary(host):
    return Post.objects.create(
        user=host,
        post_type=Post.PLAN,
        title="Kyoto in Autumn",
        description="Temples and tea houses",
        city="Kyoto",
        country="Japan",
        price_per_person=120,
        difficulty="easy",
        tags=["culture", "food"],
        categories=["city"],
    )


@pytest.mark.django_db
def test_list_is_public_and_only_shows_active_plans(host, itinerary):
    Post.objects.create(user=host, post_type=Post.PLAN, title="Draft", description="x", status=Post.DRAFT)
    Post.objects.create(user=host, post_type=Post.TREK, title="Trek", description="x")

    response = APIClient().get("/api/itineraries/")

    assert response.status_code == 200
    assert response.data["success"] is True
    assert [item["title"] for item in response.data["data"]] == ["Kyoto in Autumn"]
    assert response.data["pagination"]["total"] == 1
    assert response.data["pagination"]["limit"] == 20


@pytest.mark.django_db
def test_list_filters_by_tags_and_price(host, itinerary):
    Post.objects.create(
        user=host,
        post_type=Post.PLAN,
        title="Patagonia",
        description="Glaciers",
        country="Chile",
        price_per_person=900,
        tags=["hiking"],
    )
    client = APIClient()

    by_tag = client.get("/api/itineraries/", {"tags": "hiking,diving"})
    assert [item["title"] for item in by_tag.data["data"]] == ["Patagonia"]

    by_price = client.get("/api/itineraries/", {"max_price": 500})
    assert [item["title"] for item in by_price.data["data"]] == ["Kyoto in Autumn"]

    by_country = client.get("/api/itineraries/", {"country": "jap"})
    assert [item["title"] for item in by_country.data["data"]] == ["Kyoto in Autumn"]


@pytest.mark.django_db
def test_create_requires_authentication_and_sets_owner(host):
    payload = {"title": "Lisbon weekend", "description": "Trams and pastries", "city": "Lisbon"}

    anonymous = APIClient().post("/api/itineraries/", payload, format="json")
    assert anonymous.status_code == 401

    client = APIClient()
    client.force_authenticate(host)
    response = client.post("/api/itineraries/", payload, format="json")

    assert response.status_code == 201
    post = Post.objects.get(pk=response.data["data"]["id"])
    assert post.user == host
    assert post.post_type == Post.PLAN


@pytest.mark.django_db
def test_create_without_description_is_rejected(host):
    client = APIClient()
    client.force_authenticate(host)

    response = client.post("/api/itineraries/", {"title": "No body"}, format="json")

    assert response.status_code == 400
    assert response.data["success"] is False
    assert response.data["message"].startswith("description")


@pytest.mark.django_db
def test_retrieve_rejects_other_post_types(host):
    trek = Post.objects.create(user=host, post_type=Post.TREK, title="Trek", description="x")

    response = APIClient().get(f"/api/itineraries/{trek.id}/")

    assert response.status_code == 400
    assert response.data["message"] == "This is not an itinerary"


@pytest.mark.django_db
def test_only_owner_may_update_or_delete(itinerary, guest, host):
    client = APIClient()
    client.force_authenticate(guest)

    response = client.patch(f"/api/itineraries/{itinerary.id}/", {"title": "Hijacked"}, format="json")
    assert response.status_code == 403
    assert client.delete(f"/api/itineraries/{itinerary.id}/").status_code == 403

    client.force_authenticate(host)
    response = client.patch(f"/api/itineraries/{itinerary.id}/", {"title": "Kyoto in Winter"}, format="json")
    assert response.status_code == 200
    itinerary.refresh_from_db()
    assert itinerary.title == "Kyoto in Winter"

    assert client.delete(f"/api/itineraries/{itinerary.id}/").status_code == 200
    assert not Post.objects.filter(pk=itinerary.id).exists()


@pytest.mark.django_db
def test_user_listing_hides_drafts_from_others(host, guest, itinerary):
    Post.objects.create(user=host, post_type=Post.PLAN, title="Secret", description="x", status=Post.DRAFT)

    public = APIClient().get(f"/api/itineraries/user/{host.id}/")
    assert public.data["pagination"]["total"] == 1

    client = APIClient()
    client.force_authenticate(host)
    own = client.get("/api/itineraries/my/")
    assert own.data["pagination"]["total"] == 2


@pytest.mark.django_db
def test_reaction_toggle_adds_updates_then_removes(itinerary, guest):
    client = APIClient()
    client.force_authenticate(guest)
    url = f"/api/itineraries/{itinerary.id}/react/"

    added = client.put(url, {"emoji": "❤️"}, format="json")
    assert added.data["data"]["action"] == "added"
    assert added.data["data"]["user_reaction"] == "❤️"

    updated = client.put(url, {"emoji": "🔥"}, format="json")
    assert updated.data["data"]["action"] == "updated"
    assert updated.data["data"]["reaction_counts"] == {"🔥": 1}

    removed = client.put(url, {"emoji": "🔥"}, format="json")
    assert removed.data["data"]["action"] == "removed"
    assert removed.data["data"]["total_reactions"] == 0
    assert not Reaction.objects.exists()


@pytest.mark.django_db
def test_reaction_requires_emoji(itinerary, guest):
    client = APIClient()
    client.force_authenticate(guest)

    response = client.put(f"/api/itineraries/{itinerary.id}/react/", {}, format="json")

    assert response.status_code == 400
    assert response.data["message"] == "emoji: Emoji is required"


@pytest.mark.django_db
def test_reactions_breakdown_is_public(itinerary, guest, host):
    Reaction.objects.create(post=itinerary, user=guest, emoji="👍", name="Gus Guest")
    Reaction.objects.create(post=itinerary, user=host, emoji="👍", name="Hana Host")

    response = APIClient().get(f"/api/itineraries/{itinerary.id}/reactions/")

    assert response.status_code == 200
    data = response.data["data"]
    assert data["total_reactions"] == 2
    assert data["reactions"]["👍"]["count"] == 2
    assert data["user_reaction"] is None
