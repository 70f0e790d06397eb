from django import template

from reviews.blobs import blob_store

register = template.Library()


@register.filter
def blob_url(key):
    """Public URL of a stored image key."""
    if not key:
        return ''
    return blob_store.url(key)


@register.filter
def stars(rating):
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        return ''
    return '★' * rating + '☆' * (5 - rating)


@register.filter
def category_label(value):
    return {'restaurant': 'Restaurant', 'bubble_tea': 'Bubble Tea', 'cafe': 'Cafe'}.get(value, value)
