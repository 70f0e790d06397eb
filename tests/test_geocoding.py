import pytest
import requests

from authentication.exceptions import UpstreamFailure
from reviews import geocoding
from reviews.geocoding import AddressLookup

pytestmark = pytest.mark.django_db


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


@pytest.fixture
def upstream(monkeypatch):
    calls = []
    state = {"response": FakeResponse([])}

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        response = state["response"]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(geocoding.requests, "get", fake_get)

    def respond(response):
        state["response"] = response

    respond.calls = calls
    return respond


def test_search_maps_results(upstream):
    upstream(FakeResponse([
        {"display_name": "123 Queen St W, Toronto", "lat": "43.65", "lon": "-79.38", "importance": 0.5},
    ]))

    results = AddressLookup().search("123 Queen")

    assert results == [{"display_name": "123 Queen St W, Toronto", "lat": 43.65, "lon": -79.38}]
    params = upstream.calls[0]["params"]
    assert params["q"] == "123 Queen"
    assert params["limit"] == 5
    assert params["format"] == "json"
    assert upstream.calls[0]["headers"]["User-Agent"]


def test_search_caps_results(upstream):
    upstream(FakeResponse([{"display_name": str(i), "lat": "1", "lon": "2"} for i in range(8)]))
    assert len(AddressLookup().search("main street")) == 5


def test_short_query_skips_upstream(upstream):
    assert AddressLookup().search("ab") == []
    assert AddressLookup().search("   ") == []
    assert upstream.calls == []


@pytest.mark.parametrize("failure", [
    FakeResponse([], status_code=503),
    requests.ConnectionError("down"),
    requests.Timeout("slow"),
])
def test_upstream_failure(upstream, failure):
    upstream(failure)
    with pytest.raises(UpstreamFailure):
        AddressLookup().search("123 Queen")


def test_geocode_endpoint(admin_api, upstream):
    upstream(FakeResponse([{"display_name": "Somewhere", "lat": "1.5", "lon": "2.5"}]))
    response = admin_api.get("/api/admin/geocode/", {"q": "somewhere"})
    assert response.status_code == 200
    assert response.json() == [{"display_name": "Somewhere", "lat": 1.5, "lon": 2.5}]


def test_geocode_endpoint_upstream_failure(admin_api, upstream):
    upstream(requests.ConnectionError("down"))
    response = admin_api.get("/api/admin/geocode/", {"q": "somewhere"})
    assert response.status_code == 500
    assert response.json() == {"error": "Address lookup failed"}


def test_geocode_requires_admin(api_client, upstream):
    assert api_client.get("/api/admin/geocode/", {"q": "somewhere"}).status_code == 401
    assert upstream.calls == []


@pytest.mark.parametrize("payload", [
    [{"display_name": "Nowhere", "lat": "north", "lon": "1"}],
    [{"display_name": "Nowhere", "lat": None, "lon": "1"}],
    {"error": "Unable to geocode"},
])
def test_malformed_results_are_upstream_failure(upstream, payload):
    upstream(FakeResponse(payload))
    with pytest.raises(UpstreamFailure):
        AddressLookup().search("123 Queen")


def test_geocode_endpoint_malformed_results(admin_api, upstream):
    upstream(FakeResponse([{"display_name": "Nowhere", "lat": "north", "lon": "1"}]))
    response = admin_api.get("/api/admin/geocode/", {"q": "somewhere"})
    assert response.status_code == 500
    assert response.json() == {"error": "Address lookup failed"}
