import asyncio
import json
import logging
from typing import Any, Union

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from features.tides.services.worldtides_client import TideClient

FIXED_NOW = 1_700_000_000.0

def fixed_clock() -> float:
    return FIXED_NOW

def worldtides_body(**overrides: Any) -> dict:
    """A realistic WorldTides heights+extremes body."""
    body = {
        "status": 200,
        "call_count": 2,
        "copyright": "Tidal data retrieved from www.worldtides.info",
        "request_lat": -33.86,
        "request_lon": 151.21,
        "response_lat": -33.85,
        "response_lon": 151.233,
        "atlas": "TPXO",
        "heights": [
            {"dt": 1700000000, "date": "2023-11-14T22:13+0000", "height": 0.42},
            {"dt": 1700001800, "date": "2023-11-14T22:43+0000", "height": 0.57},
            {"dt": 1700003600, "date": "2023-11-14T23:13+0000", "height": 0.71}
        ],
        "extremes": [
            {"dt": 1700010000, "date": "2023-11-15T01:00+0000", "height": 0.83, "type": "High"},
            {"dt": 1700032000, "date": "2023-11-15T07:06+0000", "height": -0.61, "type": "Low"}
        ]
    }
    body.update(overrides)
    return body

class FakeWorldTides:
    """Local HTTP server answering like the WorldTides v3 endpoint."""

    def __init__(self) -> None:
        self.requests = []
        self.http_status = 200
        self.body: bytes = json.dumps(worldtides_body()).encode()
        self.delay = 0.0
        app = web.Application()
        app.router.add_get("/api/v3", self._handle)
        self.server = TestServer(app)

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append(request.rel_url)
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(status=self.http_status, body=self.body, content_type="application/json")

    def respond(self, payload: Union[dict, bytes, str], http_status: int = 200) -> None:
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        if isinstance(payload, str):
            payload = payload.encode()
        self.body = payload
        self.http_status = http_status

    @property
    def base_url(self) -> str:
        return str(self.server.make_url("/api/v3"))

@pytest.fixture
async def worldtides():
    fake = FakeWorldTides()
    await fake.server.start_server()
    yield fake
    await fake.server.close()

@pytest.fixture
def test_logger() -> logging.Logger:
    return logging.getLogger("tests.worldtides")

@pytest.fixture
def make_client(test_logger):
    def _make(**kwargs) -> TideClient:
        kwargs.setdefault("api_key", "secret-key")
        kwargs.setdefault("clock", fixed_clock)
        kwargs.setdefault("logger", test_logger)
        return TideClient(**kwargs)
    return _make
