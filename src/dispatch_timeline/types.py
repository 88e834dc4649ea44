"""Shared types: the canonical data model every layer speaks.

All times of day are integer minutes since local midnight. An ``Interval``
may end at 1440 (midnight at the end of the day); its start is always a
valid TimeOfDay in [0, 1440).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

MINUTES_PER_DAY = 1440


class InvalidTimeError(ValueError):
    """Raised when a time-of-day string cannot be parsed."""

    def __init__(self, value: object, reason: str = "unparsable") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid time {value!r} ({reason})")


@dataclass(frozen=True)
class Interval:
    """Half-open [start, end) time-of-day interval.

    ``end <= start`` denotes an overnight interval that crosses midnight;
    use ``duration`` rather than subtracting the fields.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start < MINUTES_PER_DAY:
            raise ValueError(f"start must be in [0, 1440), got {self.start}")
        if not 0 <= self.end <= MINUTES_PER_DAY:
            raise ValueError(f"end must be in [0, 1440], got {self.end}")

    @property
    def is_overnight(self) -> bool:
        return self.end <= self.start

    @property
    def duration(self) -> int:
        """Length in minutes. Overnight intervals wrap through midnight."""
        if self.is_overnight:
            return MINUTES_PER_DAY - self.start + self.end
        return self.end - self.start


@dataclass(frozen=True)
class TimeWindow:
    """Visible hour bounds of one grid view. Derived, never persisted."""

    start_hour: int
    end_hour: int

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"window must satisfy 0 <= start_hour < end_hour <= 24, "
                f"got {self.start_hour}-{self.end_hour}"
            )

    @property
    def total_hours(self) -> int:
        return self.end_hour - self.start_hour

    @property
    def start_minute(self) -> int:
        return self.start_hour * 60

    @property
    def end_minute(self) -> int:
        return self.end_hour * 60


@dataclass(frozen=True)
class WorkingHoursRule:
    """One recurring weekly shift. ``weekday`` follows ``date.weekday()`` (0=Mon)."""

    weekday: int
    interval: Interval

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise ValueError(f"weekday must be 0-6, got {self.weekday}")


@dataclass(frozen=True)
class AvailabilityException:
    """Date-specific override that fully supersedes the recurring rules.

    Either ``all_day_unavailable`` is set, or ``interval`` carries the
    replacement availability. With neither, the exception is only a note
    and the recurring rules still apply.
    """

    date: date
    all_day_unavailable: bool = False
    interval: Interval | None = None
    reason: str | None = None

    @property
    def overrides(self) -> bool:
        return self.all_day_unavailable or self.interval is not None


@dataclass(frozen=True)
class BookedInterval:
    """An already-scheduled job on one worker's day."""

    job_id: str
    title: str
    interval: Interval
    worker_id: str | None = None


class ConflictReason(str, Enum):
    NONE = "none"
    OUTSIDE_AVAILABILITY = "outside_availability"
    OVERLAPS_BOOKING = "overlaps_booking"


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of validating a candidate booking.

    ``needs_review`` marks the conservative overnight default: the candidate
    was not proven to conflict, the decision is deferred to the server.
    """

    schedulable: bool
    reason: ConflictReason
    conflicts: tuple[BookedInterval, ...] = ()
    needs_review: bool = False


@dataclass(frozen=True)
class GridPosition:
    """Resolution-independent placement: fractions of the window width."""

    left: float
    width: float

    @property
    def right(self) -> float:
        return self.left + self.width


class UtilizationBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    FULL = "full"


@dataclass(frozen=True)
class UtilizationMetric:
    """Booked vs available minutes for one worker over one period.

    ``percentage`` is clamped to [0, 100] for display; ``raw_percentage``
    keeps the unclamped ratio so over-booking can be alerted on.
    """

    booked_minutes: int
    available_minutes: int
    percentage: float
    raw_percentage: float
    band: UtilizationBand

    @property
    def over_booked(self) -> bool:
        return self.raw_percentage > 100
