"""Slot search: free gaps in a day and the next bookable start.

Read-only: nothing here commits a booking. The search walks forward one
date at a time, like a forward walk through working time, trying starts
aligned to ``step`` minutes inside each availability interval.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Callable, Sequence

from dispatch_timeline.calendar import WorkerCalendar
from dispatch_timeline.conflicts import Booking, check, interval_of
from dispatch_timeline.intervals import same_day_leg, subtract
from dispatch_timeline.timeofday import minutes_of
from dispatch_timeline.types import Interval

BookingsFor = Callable[[date], Sequence[Booking]]

DEFAULT_STEP_MINUTES = 30
DEFAULT_DAYS_LIMIT = 14


def free_intervals(
    availability: Sequence[Interval],
    booked: Sequence[Booking],
) -> list[Interval]:
    """Availability minus bookings, sorted by start."""
    holes = [same_day_leg(interval_of(b)) for b in booked]
    free: list[Interval] = []
    for slot in availability:
        free.extend(subtract(slot, holes))
    return sorted(free, key=lambda iv: iv.start)


def _aligned(minutes: int, step: int) -> int:
    """Round up to the next multiple of ``step``."""
    return -(-minutes // step) * step


def next_available_slot(
    calendar: WorkerCalendar,
    bookings_for: BookingsFor,
    duration: int,
    search_start: datetime,
    *,
    step: int = DEFAULT_STEP_MINUTES,
    days_limit: int = DEFAULT_DAYS_LIMIT,
    exclude_job_id: str | None = None,
) -> datetime | None:
    """Earliest start strictly after ``search_start`` where a job fits.

    Only same-day placements are considered; a job never straddles
    midnight here. Returns None when nothing fits within ``days_limit``
    dates (the search start date included).
    """
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration}")
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    start_minutes = minutes_of(search_start)
    current = search_start.date()

    for day in range(days_limit):
        availability = calendar.availability_for_date(current)
        booked = bookings_for(current) if availability else ()

        for slot in availability:
            candidate_start = _aligned(slot.start, step)
            while candidate_start + duration <= slot.end:
                if day == 0 and candidate_start <= start_minutes:
                    candidate_start += step
                    continue
                candidate = Interval(candidate_start, candidate_start + duration)
                result = check(
                    candidate, availability, booked,
                    exclude_job_id=exclude_job_id,
                )
                if result.schedulable:
                    hour, minute = divmod(candidate_start, 60)
                    return datetime.combine(current, time(hour, minute))
                candidate_start += step

        current += timedelta(days=1)

    return None
