import logging
import os
import re
import time

from django.conf import settings
from rest_framework.exceptions import ValidationError

from .blobs import blob_store

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

MAX_NAME_LENGTH = 50

# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024

INVALID_TYPE_MESSAGE = "Invalid file type. Allowed: JPEG, PNG, WebP, GIF"


def max_image_bytes():
    return settings.IMAGE_UPLOAD_MAX_BYTES


def too_large_message():
    return f"File too large. Maximum size is {max_image_bytes() // (1024 * 1024)}MB"


def sanitize_filename(filename):
    stem, _ = os.path.splitext(os.path.basename(filename or ""))
    safe = re.sub(r"[^a-z0-9]+", "-", stem.lower()).strip("-")
    return safe[:MAX_NAME_LENGTH].strip("-") or "image"


def build_storage_key(filename, content_type, timestamp_ns=None):
    """
    <nanosecond timestamp>-<sanitised name>.<ext>

    The extension comes from the filename when it has a usable one, otherwise
    from the content type.
    """
    if timestamp_ns is None:
        timestamp_ns = time.time_ns()
    _, ext = os.path.splitext(filename or "")
    ext = re.sub(r"[^a-z0-9]", "", ext.lower())[:5] or ALLOWED_IMAGE_TYPES.get(content_type, "jpg")
    return f"{timestamp_ns}-{sanitize_filename(filename)}.{ext}"


def check_declared_length(content_length):
    """Reject an oversized multipart body before Django reads any of it."""
    try:
        length = int(content_length or 0)
    except (TypeError, ValueError):
        return
    if length > max_image_bytes() + MULTIPART_OVERHEAD_BYTES:
        raise ValidationError(too_large_message())


def validate_image(uploaded_file):
    if uploaded_file is None:
        raise ValidationError("No file provided")
    if uploaded_file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(INVALID_TYPE_MESSAGE)
    if uploaded_file.size > max_image_bytes():
        raise ValidationError(too_large_message())


def store_image(uploaded_file):
    """
    Validate and store one uploaded image, returning its storage key.

    Attaching the key to a restaurant or dish is a separate step; if that step
    fails the stored image is left behind.
    """
    validate_image(uploaded_file)
    key = build_storage_key(uploaded_file.name, uploaded_file.content_type)
    blob_store.put(key, uploaded_file, uploaded_file.content_type)
    logger.info(f"Stored image {key} ({uploaded_file.size} bytes)")
    return key
