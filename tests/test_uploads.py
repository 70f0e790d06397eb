import re

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from reviews import uploads
from reviews.uploads import build_storage_key, sanitize_filename

pytestmark = pytest.mark.django_db

UPLOAD_URL = "/api/admin/upload/"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def png(name="Photo.png", content=PNG, content_type="image/png"):
    return SimpleUploadedFile(name, content, content_type=content_type)


def test_upload_stores_image(admin_api, image_dir):
    response = admin_api.post(UPLOAD_URL, {"file": png()}, format="multipart")

    assert response.status_code == 200
    key = response.json()["path"]
    assert re.fullmatch(r"\d+-photo\.png", key)
    assert (image_dir / key).read_bytes() == PNG


def test_upload_without_file(admin_api):
    response = admin_api.post(UPLOAD_URL, {}, format="multipart")
    assert response.status_code == 400
    assert response.json() == {"error": "No file provided"}


def test_upload_rejects_type(admin_api, image_dir):
    response = admin_api.post(
        UPLOAD_URL, {"file": png("notes.pdf", b"%PDF-1.4", "application/pdf")}, format="multipart",
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Allowed: JPEG, PNG, WebP, GIF"}
    assert not image_dir.exists() or not any(image_dir.iterdir())


def test_upload_rejects_oversized_body(admin_api, image_dir):
    big = png("big.png", b"\x00" * (6 * 1024 * 1024))
    response = admin_api.post(UPLOAD_URL, {"file": big}, format="multipart")

    assert response.status_code == 400
    assert response.json() == {"error": "File too large. Maximum size is 5MB"}
    assert not image_dir.exists() or not any(image_dir.iterdir())


def test_upload_rejects_file_over_limit(admin_api, settings, image_dir):
    settings.IMAGE_UPLOAD_MAX_BYTES = 32
    response = admin_api.post(UPLOAD_URL, {"file": png()}, format="multipart")
    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large")
    assert not image_dir.exists() or not any(image_dir.iterdir())


def test_upload_never_overwrites(admin_api, monkeypatch, image_dir):
    monkeypatch.setattr(uploads, "build_storage_key", lambda name, content_type: "1-photo.png")
    assert admin_api.post(UPLOAD_URL, {"file": png()}, format="multipart").status_code == 200

    response = admin_api.post(UPLOAD_URL, {"file": png(content=b"other")}, format="multipart")

    assert response.status_code == 409
    assert (image_dir / "1-photo.png").read_bytes() == PNG


def test_upload_requires_admin(api_client):
    response = api_client.post(UPLOAD_URL, {"file": png()}, format="multipart")
    assert response.status_code == 401


@pytest.mark.parametrize("filename, expected", [
    ("My Lunch!!.JPG", "my-lunch"),
    ("../../etc/passwd", "passwd"),
    ("", "image"),
    ("___.png", "image"),
    ("a" * 80 + ".png", "a" * 50),
])
def test_sanitize_filename(filename, expected):
    assert sanitize_filename(filename) == expected


def test_storage_key_extension_falls_back_to_content_type():
    assert build_storage_key("snapshot", "image/webp", timestamp_ns=42) == "42-snapshot.webp"
    assert build_storage_key("Snap Shot.GIF", "image/gif", timestamp_ns=7) == "7-snap-shot.gif"
