import pytest
from rest_framework.test import APIClient

from accounts.models import User
from posts.models import Post


@pytest.fixture
def host(db):
    return User.objects.create_user(
        username="host@example.com",
        email="host@example.com",
        password="password123",
        role=User.HOST,
    )


@pytest.fixture
def listings(host):
    return [
        Post.objects.create(
            user=host, post_type=Post.PLAN, title="Paris food walk", description="Croissants",
            city="Paris", country="France", price_per_person=40, rating_average="4.50",
            categories=["food"],
        ),
        Post.objects.create(
            user=host, post_type=Post.EXPERIENCE, title="Seine kayaking", description="Paddle",
            city="Paris", country="France", price_per_person=80, rating_average="3.90",
        ),
        Post.objects.create(
            user=host, post_type=Post.TREK, title="Mont Blanc trek", description="Alpine",
            city="Chamonix", country="France", price_per_person=300, rating_average="4.90",
            difficulty="hard",
        ),
        Post.objects.create(
            user=host, post_type=Post.PLAN, title="Hidden Paris", description="Draft",
            city="Paris", country="France", status=Post.INACTIVE,
        ),
    ]


@pytest.mark.django_db
def test_search_matches_text_and_skips_inactive(listings):
    response = APIClient().get("/api/search/", {"q": "paris"})

    assert response.status_code == 200
    titles = {item["title"] for item in response.data["data"]}
    assert titles == {"Paris food walk", "Seine kayaking"}
    assert response.data["filters"]["q"] == "paris"


@pytest.mark.django_db
def test_search_filters_by_type_and_sorts_by_price(listings):
    client = APIClient()

    treks = client.get("/api/search/", {"type": "trek"})
    assert [item["title"] for item in treks.data["data"]] == ["Mont Blanc trek"]

    cheapest_first = client.get("/api/search/", {"sort_by": "price", "sort_order": "asc"})
    assert [item["title"] for item in cheapest_first.data["data"]] == [
        "Paris food walk",
        "Seine kayaking",
        "Mont Blanc trek",
    ]

    by_category = client.get("/api/search/", {"category": "food"})
    assert [item["title"] for item in by_category.data["data"]] == ["Paris food walk"]


@pytest.mark.django_db
def test_search_rejects_unknown_type(listings):
    response = APIClient().get("/api/search/", {"type": "cruise"})

    assert response.status_code == 400
    assert response.data["message"].startswith("type: Invalid type parameter")


@pytest.mark.django_db
def test_suggestions_require_query(listings):
    client = APIClient()

    assert client.get("/api/search/suggestions/").status_code == 400

    response = client.get("/api/search/suggestions/", {"q": "par"})
    assert response.status_code == 200
    assert {"text": "Paris food walk", "location": "Paris, France", "type": "itinerary"} in response.data["data"]
    assert all(item["text"] != "Mont Blanc trek" for item in response.data["data"])


@pytest.mark.django_db
def test_by_location_groups_results(listings):
    response = APIClient().get("/api/search/by-location/", {"location": "paris"})

    assert response.status_code == 200
    data = response.data["data"]
    assert [item["title"] for item in data["itineraries"]] == ["Paris food walk"]
    assert [item["title"] for item in data["experiences"]] == ["Seine kayaking"]
    assert response.data["summary"] == {"total": 2, "itineraries": 1, "experiences": 1}
