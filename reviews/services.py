"""
Admin mutations shared by the JSON API and the admin pages.

Every mutation invalidates the public pages that show the record. Deletes
remove the record's image blobs first (best effort) and report the keys that
could not be removed instead of failing; the record itself is only reported
deleted once the store confirms it.
"""

import logging

from rest_framework.exceptions import NotFound

from gallery import revalidation
from .blobs import blob_store
from .models import Restaurant, Dish
from .store import EntityStore

logger = logging.getLogger(__name__)

restaurants = EntityStore(Restaurant, "Restaurant not found", "A restaurant with this slug already exists")
dishes = EntityStore(Dish, "Dish not found", "This dish already exists")


def _remove_blobs(keys):
    if not keys:
        return []
    return blob_store.remove(keys)


def _dropped_keys(before, after):
    kept = set(after)
    return [key for key in before if key not in kept]


# Restaurants

def create_restaurant(fields):
    restaurant = restaurants.insert(fields)
    logger.info(f"Created restaurant {restaurant.pk} ({restaurant.slug})")
    revalidation.invalidate_restaurant_pages(restaurant.slug)
    return restaurant


def update_restaurant(restaurant, fields):
    old_slug = restaurant.slug
    old_keys = restaurant.blob_keys()

    restaurants.update(restaurant, fields)
    logger.info(f"Updated restaurant {restaurant.pk} ({', '.join(fields) or 'no fields'})")

    _remove_blobs(_dropped_keys(old_keys, restaurant.blob_keys()))
    revalidation.invalidate_restaurant_pages(old_slug, restaurant.slug)
    return restaurant


def delete_restaurant(restaurant):
    """Returns the blob keys that could not be removed."""
    keys = restaurant.blob_keys()
    for dish in restaurant.dishes.all():
        keys += dish.blob_keys()
    storage_errors = _remove_blobs(list(dict.fromkeys(keys)))

    restaurants.delete(restaurant)
    logger.info(f"Deleted restaurant {restaurant.slug}")

    revalidation.invalidate_restaurant_pages(restaurant.slug)
    return storage_errors


# Dishes

def create_dish(fields):
    fields = dict(fields)
    restaurant = restaurants.find(fields.pop('restaurant_id', None))
    if restaurant is None:
        raise NotFound("Restaurant not found")
    fields['restaurant'] = restaurant

    dish = dishes.insert(fields)
    logger.info(f"Created dish {dish.pk} for restaurant {restaurant.slug}")
    revalidation.invalidate_restaurant_pages(restaurant.slug)
    return dish


def update_dish(dish, fields):
    old_keys = dish.blob_keys()

    dishes.update(dish, fields)
    logger.info(f"Updated dish {dish.pk} ({', '.join(fields) or 'no fields'})")

    _remove_blobs(_dropped_keys(old_keys, dish.blob_keys()))
    revalidation.invalidate_restaurant_pages(dish.restaurant.slug)
    return dish


def delete_dish(dish):
    """Returns the blob keys that could not be removed."""
    slug = dish.restaurant.slug
    storage_errors = _remove_blobs(dish.blob_keys())

    dishes.delete(dish)
    logger.info(f"Deleted dish {dish.name} from {slug}")

    revalidation.invalidate_restaurant_pages(slug)
    return storage_errors
