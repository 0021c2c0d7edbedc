from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

class Coordinate(BaseModel):
    """Geographic point a tide report is requested for."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

class TideKind(str, Enum):
    HIGH = "High"
    LOW = "Low"

class TideSample(BaseModel):
    """One point on the continuous tide curve"""
    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(..., description="Epoch seconds")
    calendar_date: str = Field(..., description="Date string as reported by the source")
    height_meters: float = Field(..., description="Tide height in meters")

class TideExtreme(BaseModel):
    """Local maximum or minimum of the tide curve"""
    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(..., description="Epoch seconds")
    calendar_date: str = Field(..., description="Date string as reported by the source")
    height_meters: float = Field(..., description="Tide height in meters")
    kind: TideKind = Field(..., description="High or Low")

class TideMeta(BaseModel):
    """Optional provenance returned alongside the tide data"""
    model_config = ConfigDict(frozen=True)

    call_count: Optional[int] = None
    attribution: Optional[str] = None
    request_coordinate: Optional[Coordinate] = None
    response_coordinate: Optional[Coordinate] = None
    source_name: Optional[str] = None

class TideReport(BaseModel):
    """Normalized tide curve and extremes for one location and day."""
    model_config = ConfigDict(frozen=True)

    status: int = Field(..., description="Application status reported by the source")
    samples: List[TideSample] = Field(..., description="Chronological tide heights")
    extremes: List[TideExtreme] = Field(..., description="Chronological highs and lows")
    meta: Optional[TideMeta] = None

class TideChart(BaseModel):
    """Chart-ready view of a tide report"""
    samples: List[TideSample]
    normalized_heights: List[float] = Field(..., description="Heights scaled to [0, 1]")
    current_index: Optional[int] = Field(None, description="First sample at or after now")
    extremes: List[TideExtreme] = Field(..., description="Leading extremes for the summary")


# WorldTides v3 wire format

class WorldTidesHeight(BaseModel):
    model_config = ConfigDict(strict=True)

    dt: float
    date: str
    height: float

class WorldTidesExtreme(BaseModel):
    model_config = ConfigDict(strict=True)

    dt: float
    date: str
    height: float
    type: TideKind

class WorldTidesResponse(BaseModel):
    """Body of a successful WorldTides heights+extremes request."""
    model_config = ConfigDict(strict=True)

    status: int
    heights: List[WorldTidesHeight]
    extremes: List[WorldTidesExtreme]

    # Not always returned
    call_count: Optional[int] = None
    copyright: Optional[str] = None
    request_lat: Optional[float] = None
    request_lon: Optional[float] = None
    response_lat: Optional[float] = None
    response_lon: Optional[float] = None
    atlas: Optional[str] = None

    @model_validator(mode="after")
    def check_chronological(self) -> "WorldTidesResponse":
        for name, points in (("heights", self.heights), ("extremes", self.extremes)):
            if any(a.dt > b.dt for a, b in zip(points, points[1:])):
                raise ValueError(f"{name} are not in chronological order")
        return self

    def to_report(self) -> TideReport:
        """Convert the wire body into a TideReport."""
        meta = TideMeta(
            call_count=self.call_count,
            attribution=self.copyright,
            request_coordinate=_coordinate(self.request_lat, self.request_lon),
            response_coordinate=_coordinate(self.response_lat, self.response_lon),
            source_name=self.atlas
        )
        return TideReport(
            status=self.status,
            samples=[
                TideSample(timestamp=h.dt, calendar_date=h.date, height_meters=h.height)
                for h in self.heights
            ],
            extremes=[
                TideExtreme(
                    timestamp=e.dt,
                    calendar_date=e.date,
                    height_meters=e.height,
                    kind=e.type
                )
                for e in self.extremes
            ],
            meta=meta
        )

def _coordinate(lat: Optional[float], lon: Optional[float]) -> Optional[Coordinate]:
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)
