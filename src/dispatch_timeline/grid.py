"""Layer 3: time-grid coordinate mapper.

Positions and widths are fractions of the visible window (0.0 = window
start, 1.0 = window end). Rasterizing to pixels is the caller's job; the
``to_pixels`` helper applies a ``GridConfig`` for convenience.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from dispatch_timeline.intervals import clip, same_day_leg
from dispatch_timeline.timeofday import format_time, minutes_of
from dispatch_timeline.types import GridPosition, Interval, TimeWindow


@dataclass(frozen=True)
class GridConfig:
    """Rendering constants for one grid. Immutable.

    hour_width: pixels per hour when rasterizing.
    snap_minutes: grid step for drag/drop and hit-testing.
    min_block_minutes: smallest visual width, so short jobs stay clickable.
    row_height: vertical offset per stack level in a worker lane.
    """

    hour_width: float = 80.0
    snap_minutes: int = 15
    min_block_minutes: int = 30
    row_height: float = 30.0


DEFAULT_GRID = GridConfig()


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def time_to_position(hour: int, minute: int, window: TimeWindow) -> float:
    """Fractional position of hour:minute, clamped to [0, 1]."""
    offset = (hour - window.start_hour) + minute / 60
    return _clamp(offset / window.total_hours)


def minutes_to_position(minutes: int, window: TimeWindow) -> float:
    hour, minute = divmod(minutes, 60)
    return time_to_position(hour, minute, window)


def duration_to_width(
    duration_minutes: int,
    window: TimeWindow,
    config: GridConfig = DEFAULT_GRID,
) -> float:
    """Fractional width of a duration, never below the minimum block width."""
    width = (duration_minutes / 60) / window.total_hours
    min_width = (config.min_block_minutes / 60) / window.total_hours
    return max(width, min_width)


def position_to_minutes(position: float, window: TimeWindow) -> int:
    """Inverse mapping for hit-testing, rounded to the nearest minute."""
    offset = round(_clamp(position) * window.total_hours * 60)
    return window.start_minute + offset


def position_to_time(position: float, window: TimeWindow) -> tuple[int, int]:
    """(hour, minute) at a fractional position inside the window.

    Position 1.0 in a window ending at midnight gives (24, 0), the same
    end-of-day value ``parse_time('24:00')`` accepts.
    """
    return divmod(position_to_minutes(position, window), 60)


def interval_to_grid(
    iv: Interval,
    window: TimeWindow,
    config: GridConfig = DEFAULT_GRID,
) -> GridPosition | None:
    """Placement of an interval's same-day leg, or None if it is off-grid.

    A block widened to the minimum width near the window end is shifted
    left so it still ends at or before 1.0.
    """
    visible = clip(
        same_day_leg(iv), Interval(window.start_minute, window.end_minute)
    )
    if visible is None:
        return None
    width = min(1.0, duration_to_width(visible.duration, window, config))
    left = min(minutes_to_position(visible.start, window), 1.0 - width)
    return GridPosition(left=left, width=width)


def to_pixels(
    fraction: float,
    window: TimeWindow,
    config: GridConfig = DEFAULT_GRID,
) -> float:
    """Rasterize a fraction of the window using the configured hour width."""
    return fraction * window.total_hours * config.hour_width


def hour_labels(window: TimeWindow) -> list[tuple[int, str, float]]:
    """(hour, '9:00 AM', position) for every hour boundary in the window."""
    return [
        (hour, format_time(hour * 60), time_to_position(hour, 0, window))
        for hour in range(window.start_hour, window.end_hour + 1)
    ]


def now_position(now: datetime | time, window: TimeWindow) -> float | None:
    """Position of the current-time indicator, None outside the window."""
    minutes = minutes_of(now)
    if not window.start_minute <= minutes <= window.end_minute:
        return None
    return minutes_to_position(minutes, window)
