"""
Public page caching with explicit invalidation.

Every public GET response is cached for PUBLIC_PAGE_CACHE_SECONDS. The cache
key embeds a per-path version, so invalidate(path) makes every cached variant
of that path (every query string) stale at once and the next request
recomputes it. Paths nobody invalidates simply expire.
"""

import hashlib
import logging
import time
from functools import wraps

from django.conf import settings
from django.core.cache import cache
from django.urls import reverse

logger = logging.getLogger(__name__)

VERSION_KEY_PREFIX = "public-page-version"
PAGE_KEY_PREFIX = "public-page"


def _version_key(path):
    return f"{VERSION_KEY_PREFIX}:{path}"


def path_version(path):
    return cache.get(_version_key(path), 0)


def page_cache_key(path, query_string=""):
    digest = hashlib.md5(f"{path}?{query_string}".encode()).hexdigest()
    return f"{PAGE_KEY_PREFIX}:{path_version(path)}:{digest}"


def invalidate(path):
    """Mark every cached variant of path as stale."""
    cache.set(_version_key(path), time.time_ns(), None)
    logger.debug("Invalidated %s", path)


def listing_paths():
    return [reverse("home"), reverse("map"), reverse("public-restaurant-list")]


def detail_paths(slug):
    return [
        reverse("restaurant_detail", kwargs={"slug": slug}),
        reverse("public-restaurant-detail", kwargs={"slug": slug}),
    ]


def invalidate_restaurant_pages(*slugs):
    """Invalidate the listing, the map and the detail page of each slug given."""
    paths = listing_paths()
    for slug in dict.fromkeys(s for s in slugs if s):
        paths += detail_paths(slug)
    for path in paths:
        invalidate(path)
    logger.info("Revalidated %d public path(s)", len(paths))
    return paths


def cached_public_page(view_func):
    """Cache successful GET responses of a public view under the revalidation scheme."""

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if request.method != "GET":
            return view_func(request, *args, **kwargs)

        key = page_cache_key(request.path, request.META.get("QUERY_STRING", ""))
        response = cache.get(key)
        if response is not None:
            return response

        response = view_func(request, *args, **kwargs)
        if response.status_code != 200:
            return response

        timeout = settings.PUBLIC_PAGE_CACHE_SECONDS
        if hasattr(response, "render") and callable(response.render):
            response.add_post_render_callback(lambda r: cache.set(key, r, timeout))
        else:
            cache.set(key, response, timeout)
        return response

    return _wrapped
