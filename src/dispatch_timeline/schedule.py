"""Per-worker day schedule as supplied by the booked-intervals source.

The source is authoritative for bookings and worked-hours totals; this
module only derives display values from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Sequence

from dispatch_timeline.conflicts import OvernightPolicy, check
from dispatch_timeline.intervals import overlaps, same_day_leg
from dispatch_timeline.types import (
    AvailabilityException,
    BookedInterval,
    ConflictResult,
    Interval,
    UtilizationMetric,
)
from dispatch_timeline.utilization import utilization


class SlotStatus(str, Enum):
    BOOKED = "booked"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class WorkerDaySchedule:
    """One worker's resolved day: availability, bookings and totals."""

    worker_id: str
    date: date
    availability: tuple[Interval, ...] = ()
    booked: tuple[BookedInterval, ...] = ()
    weekly_hours_worked: float = 0.0
    weekly_hours_goal: float = 0.0
    daily_hours_worked: float = 0.0
    daily_hours_goal: float = 0.0
    exception: AvailabilityException | None = None

    @property
    def unavailable_all_day(self) -> bool:
        return self.exception is not None and self.exception.all_day_unavailable

    @property
    def exception_note(self) -> str | None:
        if self.exception is None:
            return None
        return self.exception.reason

    @property
    def weekly_progress(self) -> float:
        return hours_progress(self.weekly_hours_worked, self.weekly_hours_goal)

    @property
    def daily_progress(self) -> float:
        return hours_progress(self.daily_hours_worked, self.daily_hours_goal)

    @property
    def effective_availability(self) -> tuple[Interval, ...]:
        """Availability after an all-day exception, which empties the day."""
        if self.unavailable_all_day:
            return ()
        return self.availability

    def utilization(self) -> UtilizationMetric:
        return utilization(
            [same_day_leg(b.interval) for b in self.booked],
            self.effective_availability,
        )

    def check(
        self,
        candidate: Interval,
        *,
        policy: OvernightPolicy = OvernightPolicy.CONSERVATIVE,
        exclude_job_id: str | None = None,
    ) -> ConflictResult:
        return check(
            candidate, self.effective_availability, self.booked,
            policy=policy, exclude_job_id=exclude_job_id,
        )


def hours_progress(worked: float, goal: float) -> float:
    """Percentage of a worked-hours goal, clamped to [0, 100].

    A zero goal is treated as one hour so the bar never divides by zero.
    """
    percentage = (worked or 0.0) / (goal or 1.0) * 100
    return min(100.0, max(0.0, percentage))


def hourly_status(
    availability: Sequence[Interval],
    booked: Sequence[BookedInterval],
    start_hour: int = 6,
    end_hour: int = 22,
) -> list[tuple[int, SlotStatus, str]]:
    """(hour, status, label) for each hour cell in [start_hour, end_hour).

    A cell touched by any booking is booked (labelled with the first
    booking's title); otherwise available if any availability touches it.
    """
    cells: list[tuple[int, SlotStatus, str]] = []
    for hour in range(start_hour, end_hour):
        cell = Interval(hour * 60, hour * 60 + 60)
        clash = next(
            (b for b in booked if overlaps(same_day_leg(b.interval), cell)),
            None,
        )
        if clash is not None:
            cells.append((hour, SlotStatus.BOOKED, clash.title))
        elif any(overlaps(same_day_leg(slot), cell) for slot in availability):
            cells.append((hour, SlotStatus.AVAILABLE, "Available"))
        else:
            cells.append((hour, SlotStatus.UNAVAILABLE, "Unavailable"))
    return cells
