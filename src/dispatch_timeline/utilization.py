"""Layer 2: utilization of booked minutes against available minutes."""

from __future__ import annotations

from typing import Iterable, Sequence

from dispatch_timeline.intervals import total_minutes
from dispatch_timeline.types import Interval, UtilizationBand, UtilizationMetric

# Lower bounds, checked from the top. Fixed, not configurable.
_BANDS = (
    (100.0, UtilizationBand.FULL),
    (70.0, UtilizationBand.HIGH),
    (30.0, UtilizationBand.MODERATE),
)


def band_for(percentage: float) -> UtilizationBand:
    """<30 low, 30-69 moderate, 70-99 high, >=100 full."""
    for floor, band in _BANDS:
        if percentage >= floor:
            return band
    return UtilizationBand.LOW


def metric(booked_minutes: int, available_minutes: int) -> UtilizationMetric:
    """Build a metric from minute totals. Zero availability is 0%, never NaN."""
    if available_minutes <= 0:
        raw = 0.0
    else:
        raw = booked_minutes / available_minutes * 100
    return UtilizationMetric(
        booked_minutes=booked_minutes,
        available_minutes=available_minutes,
        percentage=min(100.0, max(0.0, raw)),
        raw_percentage=raw,
        band=band_for(raw),
    )


def utilization(
    booked: Sequence[Interval],
    available: Sequence[Interval],
) -> UtilizationMetric:
    """Utilization of one worker for one day."""
    return metric(total_minutes(booked), total_minutes(available))


def period_utilization(
    days: Iterable[tuple[Sequence[Interval], Sequence[Interval]]],
) -> UtilizationMetric:
    """Aggregate (booked, available) pairs over a period, e.g. a week."""
    booked_total = 0
    available_total = 0
    for booked, available in days:
        booked_total += total_minutes(booked)
        available_total += total_minutes(available)
    return metric(booked_total, available_total)
