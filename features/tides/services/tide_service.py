import logging
from typing import Iterable, Optional
from fastapi import HTTPException

from features.tides.exceptions.tide_exceptions import (
    ApiError,
    InvalidRequest,
    NoDataAvailable,
    QuotaExceeded,
    TideClientError,
    TransportFailure
)
from features.tides.models.tide_types import Coordinate, TideChart, TideReport
from features.tides.services.worldtides_client import TideClient
from features.tides.utils import chart

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_PATTERNS = ("quota", "credit")

class TideService:
    """Service translating WorldTides client results for callers."""

    def __init__(
        self,
        client: TideClient,
        quota_patterns: Iterable[str] = DEFAULT_QUOTA_PATTERNS
    ) -> None:
        self.client = client
        self.quota_patterns = tuple(p.lower() for p in quota_patterns)

    async def get_tide_report(self, coordinate: Coordinate) -> TideReport:
        """Get today's tide report, classifying quota and empty responses."""
        try:
            report = await self.client.fetch_tide_data(coordinate)
        except ApiError as e:
            if self.is_quota_message(e.message):
                raise QuotaExceeded(e.message) from e
            raise

        if not report.samples:
            raise NoDataAvailable()
        return report

    async def get_tide_chart(self, coordinate: Coordinate, now: Optional[float] = None) -> TideChart:
        """Get a chart-ready view of today's tide report."""
        report = await self.get_tide_report(coordinate)
        return chart.build_chart(report, now)

    def is_quota_message(self, message: str) -> bool:
        text = message.lower()
        return any(pattern in text for pattern in self.quota_patterns)

def user_message(error: TideClientError) -> str:
    """Single user-visible message for a failed fetch."""
    return f"Error fetching tide data: {error.description}"

def to_http_exception(error: TideClientError) -> HTTPException:
    """Map a tide error onto the HTTP status returned to API callers."""
    if isinstance(error, InvalidRequest):
        status_code = 400
    elif isinstance(error, NoDataAvailable):
        status_code = 404
    elif isinstance(error, QuotaExceeded):
        status_code = 429
    elif isinstance(error, TransportFailure):
        status_code = 503
    else:
        status_code = 502

    logger.error(f"Tide request failed ({type(error).__name__}): {error.description}")
    return HTTPException(status_code=status_code, detail=user_message(error))
