import asyncio
import json
import logging
import math
import time
from datetime import datetime
from typing import Callable, Optional
from urllib.parse import urlencode

import aiohttp
from pydantic import ValidationError
from yarl import URL

from core.config import Settings
from features.tides.exceptions.tide_exceptions import (
    ApiError,
    DecodingError,
    InvalidRequest,
    InvalidResponse,
    ServerError,
    TransportFailure
)
from features.tides.models.tide_types import (
    Coordinate,
    TideExtreme,
    TideKind,
    TideMeta,
    TideReport,
    TideSample,
    WorldTidesResponse
)

HOUR_SECONDS = 3600.0
MOCK_SOURCE_NAME = "WorldTides"

def generate_mock_report(now: float, coordinate: Optional[Coordinate] = None) -> TideReport:
    """Build a synthetic one-day report anchored at ``now``.

    The curve is a single 12 hour sinusoid between 0.5 m and 2.5 m sampled
    hourly for 25 points. Extremes sit at fixed +6h, +12h and +18h offsets.
    """
    today = datetime.fromtimestamp(now).strftime("%Y-%m-%d")

    samples = [
        TideSample(
            timestamp=now + hour * HOUR_SECONDS,
            calendar_date=today,
            height_meters=math.sin(hour / 6 * math.pi) + 1.5
        )
        for hour in range(25)
    ]

    extremes = [
        TideExtreme(timestamp=now + 6 * HOUR_SECONDS, calendar_date=today, height_meters=2.5, kind=TideKind.HIGH),
        TideExtreme(timestamp=now + 12 * HOUR_SECONDS, calendar_date=today, height_meters=0.5, kind=TideKind.LOW),
        TideExtreme(timestamp=now + 18 * HOUR_SECONDS, calendar_date=today, height_meters=2.5, kind=TideKind.HIGH)
    ]

    return TideReport(
        status=200,
        samples=samples,
        extremes=extremes,
        meta=TideMeta(
            call_count=1,
            attribution=MOCK_SOURCE_NAME,
            request_coordinate=coordinate,
            response_coordinate=coordinate,
            source_name=MOCK_SOURCE_NAME
        )
    )

class TideClient:
    """Client for the WorldTides v3 heights and extremes API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://www.worldtides.info/api/v3",
        use_mock_data: bool = False,
        timeout: Optional[float] = 15.0,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        # Toggled by the host at startup (tests, previews, offline mode)
        self.use_mock_data = use_mock_data
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TideClient":
        """Create a client from application settings."""
        return cls(
            api_key=settings.resolve_api_key(),
            base_url=settings.worldtides_base_url,
            use_mock_data=settings.use_mock_data,
            timeout=settings.request_timeout,
            **kwargs
        )

    async def fetch_tide_data(self, coordinate: Coordinate) -> TideReport:
        """Get today's tide heights and extremes for a coordinate."""
        if self.use_mock_data:
            self._logger.info("Using mock tide data")
            return generate_mock_report(self._clock(), coordinate)

        url = self.build_request_url(coordinate)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url) as response:
                    http_status = response.status
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            detail = self._redact(str(e)) or type(e).__name__
            self._logger.error(
                f"Error fetching tide data for {coordinate.latitude},{coordinate.longitude}: {type(e).__name__}: {detail}"
            )
            raise TransportFailure(e, detail=detail) from e

        self._logger.debug(f"WorldTides response status code: {http_status}")
        report = self.parse_response(http_status, body)
        self._logger.info(
            f"Decoded tide data: {len(report.samples)} heights, {len(report.extremes)} extremes"
        )
        return report

    def build_request_url(self, coordinate: Coordinate) -> URL:
        """Encode the request target for a coordinate and today's date."""
        if not (math.isfinite(coordinate.latitude) and math.isfinite(coordinate.longitude)):
            raise InvalidRequest(f"Invalid coordinate {coordinate.latitude},{coordinate.longitude}")
        if not self.api_key:
            raise InvalidRequest("Missing WorldTides API key")

        try:
            base = URL(self.base_url)
        except ValueError as e:
            raise InvalidRequest("Invalid WorldTides base URL") from e
        if not base.is_absolute() or base.scheme not in ("http", "https"):
            raise InvalidRequest("Invalid WorldTides base URL")

        date_str = datetime.fromtimestamp(self._clock()).strftime("%Y-%m-%d")
        query = "heights&extremes&" + urlencode({
            "lat": repr(coordinate.latitude),
            "lon": repr(coordinate.longitude),
            "date": date_str,
            "days": 1
        })
        self._logger.info(f"Fetching tide data from: {self.base_url}?{query}")

        try:
            return URL(f"{self.base_url}?{query}&{urlencode({'key': self.api_key})}")
        except ValueError as e:
            raise InvalidRequest(self._redact(str(e))) from e

    def _redact(self, text: str) -> str:
        """Mask the API key wherever it appears in ``text``."""
        if not self.api_key:
            return text
        for secret in {self.api_key, urlencode({'k': self.api_key})[2:]}:
            text = text.replace(secret, "***")
        return text

    def parse_response(self, http_status: int, body: bytes) -> TideReport:
        """Validate a WorldTides response and decode it into a TideReport.

        The application-level ``status`` is checked before the transport status
        and before strict decoding, so error bodies surface the API's own message.
        """
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            status = payload.get("status")
            if isinstance(status, int) and not isinstance(status, bool) and status != 200:
                error = payload.get("error")
                if isinstance(error, str):
                    self._logger.warning(f"WorldTides returned status {status}: {error}")
                    raise ApiError(error)
                self._logger.warning(f"WorldTides returned status {status} without a message")
                raise ServerError(status)

        if not 200 <= http_status < 300:
            self._logger.error(f"Unexpected HTTP status from WorldTides: {http_status}")
            raise InvalidResponse(http_status)

        try:
            decoded = WorldTidesResponse.model_validate_json(body)
        except ValidationError as e:
            raw = body.decode("utf-8", errors="replace")
            self._logger.error(f"Could not decode tide data: {e}\nRaw response: {raw}")
            raise DecodingError(str(e)) from e

        return decoded.to_report()
