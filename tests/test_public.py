from datetime import timedelta

import pytest
from django.utils import timezone

from gallery import revalidation
from reviews.models import Restaurant

pytestmark = pytest.mark.django_db


@pytest.fixture
def places(make_restaurant):
    make_restaurant(slug="noodles", category="restaurant", cuisine_type="Thai", rating=5)
    make_restaurant(slug="boba", category="bubble_tea", cuisine_type=None, rating=3)
    make_restaurant(slug="beans", category="cafe", cuisine_type="Coffee", rating=4)
    # Distinct creation times, newest first
    now = timezone.now()
    for age, slug in enumerate(["noodles", "boba", "beans"]):
        Restaurant.objects.filter(slug=slug).update(created_at=now - timedelta(hours=age))


def listed(client, **params):
    response = client.get("/api/restaurants/", params)
    assert response.status_code == 200
    return [r["slug"] for r in response.json()]


def test_listing_is_newest_first(client, places):
    assert listed(client) == ["noodles", "boba", "beans"]


def test_filter_by_categories(client, places):
    assert listed(client, categories="cafe,bubble_tea") == ["boba", "beans"]
    assert listed(client, categories="cafe") == ["beans"]


def test_filter_by_cuisine_ignores_case(client, places):
    assert listed(client, cuisine="thai") == ["noodles"]
    assert listed(client, cuisine="THAI") == ["noodles"]


def test_filter_by_minimum_rating(client, places):
    assert listed(client, rating="4") == ["noodles", "beans"]
    assert listed(client, rating="5") == ["noodles"]


@pytest.mark.parametrize("rating", ["0", "9", "abc"])
def test_out_of_range_rating_filter_is_ignored(client, places, rating):
    assert len(listed(client, rating=rating)) == 3


def test_filters_combine(client, places):
    assert listed(client, categories="restaurant,cafe", rating="4", cuisine="coffee") == ["beans"]


def test_public_detail_includes_dishes(client, make_restaurant, make_dish):
    restaurant = make_restaurant()
    make_dish(restaurant, name="Pho")

    body = client.get("/api/restaurants/pho-real/").json()

    assert body["slug"] == "pho-real"
    assert [d["name"] for d in body["dishes"]] == ["Pho"]


def test_public_detail_unknown_slug(client):
    response = client.get("/api/restaurants/nowhere/")
    assert response.status_code == 404
    assert response.json() == {"error": "Restaurant not found"}


def test_home_page(client, places):
    response = client.get("/", {"categories": "cafe"})
    assert response.status_code == 200
    assert [r.slug for r in response.context["restaurants"]] == ["beans"]
    assert response.context["cuisine_types"] == ["Coffee", "Thai"]


def test_map_page_hands_markers_to_script(client, places):
    response = client.get("/map/")
    assert response.status_code == 200
    assert len(response.context["markers"]) == 3
    assert b'id="map-markers"' in response.content


def test_restaurant_page(client, make_restaurant, make_dish):
    restaurant = make_restaurant(tips="Ask for extra basil")
    make_dish(restaurant, name="Rare beef pho")

    response = client.get("/restaurant/pho-real/")

    assert response.status_code == 200
    assert b"Rare beef pho" in response.content
    assert b"Ask for extra basil" in response.content


def test_restaurant_page_unknown_slug(client):
    assert client.get("/restaurant/nowhere/").status_code == 404


# Caching and revalidation

def test_listing_is_served_from_cache_until_invalidated(client, make_restaurant):
    make_restaurant(slug="first")
    assert listed(client) == ["first"]

    # Written behind the handlers' back, so nothing is invalidated
    make_restaurant(slug="second")
    assert listed(client) == ["first"]

    revalidation.invalidate("/api/restaurants/")
    assert sorted(listed(client)) == ["first", "second"]


def test_invalidation_covers_every_query_string(client, make_restaurant):
    make_restaurant(slug="first", category="cafe")
    assert listed(client, categories="cafe") == ["first"]

    make_restaurant(slug="second", category="cafe")
    revalidation.invalidate("/api/restaurants/")
    assert sorted(listed(client, categories="cafe")) == ["first", "second"]


def test_cache_expires_on_its_own(client, make_restaurant, settings):
    settings.PUBLIC_PAGE_CACHE_SECONDS = 0
    make_restaurant(slug="first")
    assert listed(client) == ["first"]
    make_restaurant(slug="second")
    assert len(listed(client)) == 2


def test_admin_create_shows_up_on_next_request(client, admin_api, make_restaurant):
    from .conftest import restaurant_payload

    make_restaurant(slug="first")
    assert listed(client) == ["first"]
    assert client.get("/restaurant/second/").status_code == 404

    response = admin_api.post("/api/admin/restaurants/", restaurant_payload(slug="second"), format="json")
    assert response.status_code == 201

    assert sorted(listed(client)) == ["first", "second"]
    assert client.get("/restaurant/second/").status_code == 200


def test_admin_delete_removes_page(client, admin_api, make_restaurant):
    restaurant = make_restaurant()
    assert client.get("/restaurant/pho-real/").status_code == 200

    admin_api.delete(f"/api/admin/restaurants/{restaurant.pk}/")

    assert client.get("/restaurant/pho-real/").status_code == 404
    assert listed(client) == []


def test_invalidate_restaurant_pages_paths():
    paths = revalidation.invalidate_restaurant_pages("old", "new", "old", None)
    assert paths == [
        "/", "/map/", "/api/restaurants/",
        "/restaurant/old/", "/api/restaurants/old/",
        "/restaurant/new/", "/api/restaurants/new/",
    ]
