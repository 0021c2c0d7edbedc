import pytest
from fastapi.testclient import TestClient

from conftest import fixed_clock
from core.config import Settings
from features.tides.exceptions.tide_exceptions import ApiError
from features.tides.services.worldtides_client import TideClient
from main import create_app


class QuotaClient(TideClient):
    async def fetch_tide_data(self, coordinate):
        raise ApiError("Quota exceeded")


@pytest.fixture
def app_settings(tmp_path):
    return Settings(use_mock_data=True, location_file=str(tmp_path / "saved_location.json"))


@pytest.fixture
def api(app_settings):
    client = TideClient.from_settings(app_settings, clock=fixed_clock)
    with TestClient(create_app(app_settings, client=client)) as test_client:
        yield test_client


def test_health(api):
    response = api.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_get_tides(api):
    response = api.get("/tides", params={"lat": -33.86, "lon": 151.21})
    assert response.status_code == 200

    body = response.json()
    assert body["status"] == 200
    assert len(body["samples"]) == 25
    assert [e["kind"] for e in body["extremes"]] == ["High", "Low", "High"]
    assert body["meta"]["source_name"] == "WorldTides"


def test_get_tides_requires_coordinates(api):
    assert api.get("/tides", params={"lat": 1.0}).status_code == 422


def test_get_chart(api):
    response = api.get("/tides/chart", params={"lat": -33.86, "lon": 151.21})
    assert response.status_code == 200

    body = response.json()
    assert min(body["normalized_heights"]) == pytest.approx(0.0)
    assert max(body["normalized_heights"]) == pytest.approx(1.0)
    assert len(body["extremes"]) == 3


def test_saved_location_lifecycle(api):
    assert api.get("/locations/saved").status_code == 404
    assert api.get("/tides/saved").status_code == 404

    location = {"name": "Sydney Harbour", "latitude": -33.86, "longitude": 151.21}
    response = api.put("/locations/saved", json=location)
    assert response.status_code == 200
    assert api.get("/locations/saved").json() == location

    response = api.get("/tides/saved")
    assert response.status_code == 200
    assert response.json()["meta"]["request_coordinate"] == {"latitude": -33.86, "longitude": 151.21}

    assert api.delete("/locations/saved").status_code == 204
    assert api.delete("/locations/saved").status_code == 404


def test_missing_key_is_bad_request(app_settings):
    client = TideClient(api_key=None, clock=fixed_clock)
    with TestClient(create_app(app_settings, client=client)) as api:
        response = api.get("/tides", params={"lat": -33.86, "lon": 151.21})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Error fetching tide data:")


def test_quota_exceeded_is_too_many_requests(app_settings):
    client = QuotaClient(api_key="secret-key", clock=fixed_clock)
    with TestClient(create_app(app_settings, client=client)) as api:
        response = api.get("/tides", params={"lat": -33.86, "lon": 151.21})
    assert response.status_code == 429
    assert response.json()["detail"] == "Error fetching tide data: API quota exceeded"


def test_unusable_base_url_does_not_leak_key(app_settings, caplog):
    client = TideClient(api_key="SECRET123", base_url="worldtides.info/api/v3", clock=fixed_clock)
    with TestClient(create_app(app_settings, client=client)) as api:
        response = api.get("/tides", params={"lat": -33.86, "lon": 151.21})
    assert response.status_code == 400
    assert "SECRET123" not in response.text
    assert "SECRET123" not in caplog.text
