import pytest

pytestmark = pytest.mark.django_db


def test_login_sets_cookie(api_client, admin_password, settings):
    response = api_client.post("/api/admin/login/", {"password": admin_password}, format="json")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    cookie = response.cookies[settings.ADMIN_COOKIE_NAME]
    assert cookie["httponly"]
    assert cookie["samesite"] == "Strict"
    assert cookie["path"] == "/"
    assert int(cookie["max-age"]) == 7 * 24 * 60 * 60


def test_login_with_wrong_password(api_client):
    response = api_client.post("/api/admin/login/", {"password": "wrong"}, format="json")
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid password"}
    assert "admin_token" not in response.cookies


def test_login_without_password(api_client):
    response = api_client.post("/api/admin/login/", {}, format="json")
    assert response.status_code == 401


def test_login_with_non_object_body(api_client):
    response = api_client.post("/api/admin/login/", ["password"], format="json")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request"}


def test_login_with_malformed_json(api_client):
    response = api_client.post("/api/admin/login/", "{nope", content_type="application/json")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_login_fails_when_no_password_is_configured(api_client, settings):
    settings.ADMIN_PASSWORD = ""
    response = api_client.post("/api/admin/login/", {"password": ""}, format="json")
    assert response.status_code == 401


def test_verify_reports_session(api_client, admin_api):
    assert api_client.get("/api/admin/verify/").json() == {"authenticated": False}
    assert admin_api.get("/api/admin/verify/").json() == {"authenticated": True}


def test_logout_clears_cookie(admin_api, settings):
    response = admin_api.post("/api/admin/logout/")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert response.cookies[settings.ADMIN_COOKIE_NAME].value == ""


def test_health_check(api_client):
    response = api_client.get("/api/health/")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"
