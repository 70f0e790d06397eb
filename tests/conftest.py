import pytest
from django.core.cache import cache
from django.test import Client
from rest_framework.test import APIClient

from authentication.tokens import create_admin_token
from gallery import revalidation
from reviews.models import Restaurant, Dish

ADMIN_PASSWORD = "correct horse battery staple"


@pytest.fixture(autouse=True)
def admin_password(settings):
    settings.ADMIN_PASSWORD = ADMIN_PASSWORD
    settings.ADMIN_COOKIE_SECURE = False
    return ADMIN_PASSWORD


@pytest.fixture(autouse=True)
def image_dir(settings, tmp_path):
    """Point the image storage at a throwaway directory."""
    location = tmp_path / "images"
    settings.STORAGES = {
        **settings.STORAGES,
        "images": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": str(location), "base_url": "/media/restaurant-images/"},
        },
    }
    return location


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_api(settings):
    client = APIClient()
    client.cookies[settings.ADMIN_COOKIE_NAME] = create_admin_token()
    return client


@pytest.fixture
def admin_pages(settings):
    client = Client()
    client.cookies[settings.ADMIN_COOKIE_NAME] = create_admin_token()
    return client


@pytest.fixture
def invalidated(monkeypatch):
    """Record every path handed to the page invalidation."""
    paths = []
    real_invalidate = revalidation.invalidate

    def record(path):
        paths.append(path)
        real_invalidate(path)

    monkeypatch.setattr(revalidation, "invalidate", record)
    return paths


def restaurant_payload(**overrides):
    data = {
        "name": "Pho Real",
        "slug": "pho-real",
        "category": "restaurant",
        "cuisine_type": "Vietnamese",
        "rating": 4,
        "review_text": "Rich broth, generous herbs.",
        "address": "123 Queen St W, Toronto",
        "latitude": 43.65,
        "longitude": -79.38,
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_restaurant(db):
    def make(**overrides):
        return Restaurant.objects.create(**restaurant_payload(**overrides))
    return make


@pytest.fixture
def make_dish(db):
    def make(restaurant, **overrides):
        fields = {
            "name": "Rare beef pho",
            "review_text": "Thin slices, cooked in the bowl.",
            "food_rating": 5,
            "service_rating": 4,
            "price_rating": 3,
        }
        fields.update(overrides)
        return Dish.objects.create(restaurant=restaurant, **fields)
    return make


@pytest.fixture
def store_blob(image_dir):
    """Write a file straight into the image storage and return its key."""
    def store(key, content=b"image-bytes"):
        image_dir.mkdir(parents=True, exist_ok=True)
        (image_dir / key).write_bytes(content)
        return key
    return store
