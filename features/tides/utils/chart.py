import time
from typing import List, Optional

from features.tides.models.tide_types import TideChart, TideExtreme, TideReport

def normalized_heights(report: TideReport) -> List[float]:
    """Scale sample heights to [0, 1] against the day's range."""
    heights = [s.height_meters for s in report.samples]
    if not heights:
        return []

    low, high = min(heights), max(heights)
    span = high - low
    if span == 0:
        # Flat curve
        return [0.0 for _ in heights]
    return [(h - low) / span for h in heights]

def current_sample_index(report: TideReport, now: float) -> Optional[int]:
    """Index of the first sample at or after ``now``, or None if the curve has ended."""
    return next(
        (i for i, s in enumerate(report.samples) if s.timestamp >= now),
        None
    )

def extremes_summary(report: TideReport, limit: int = 4) -> List[TideExtreme]:
    return list(report.extremes[:limit])

def build_chart(report: TideReport, now: Optional[float] = None) -> TideChart:
    now = time.time() if now is None else now
    return TideChart(
        samples=report.samples,
        normalized_heights=normalized_heights(report),
        current_index=current_sample_index(report, now),
        extremes=extremes_summary(report)
    )
