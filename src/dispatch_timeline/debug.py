"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Mapping, Sequence

from dispatch_timeline.intervals import same_day_leg

if TYPE_CHECKING:
    from dispatch_timeline.calendar import WorkerCalendar
    from dispatch_timeline.types import BookedInterval, Interval

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
LABEL_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# 24-hour timeline, each char = 30 minutes (48 chars per day)
CHARS_PER_DAY = 48
MINUTES_PER_CHAR = 30


def _header() -> str:
    hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    return f"{'':>16s}  {hours}"


def _paint(row: list[str], iv: Interval, char: str) -> None:
    leg = same_day_leg(iv)
    first = leg.start // MINUTES_PER_CHAR
    # A partially covered cell still shows the block.
    last = -(-leg.end // MINUTES_PER_CHAR)
    for i in range(first, min(last, CHARS_PER_DAY)):
        row[i] = char


def show_week(cal: WorkerCalendar, start: date, end: date) -> str:
    """Print ASCII view of a worker's availability for dates in [start, end).

    '.' = unavailable, '#' = available. Returns the string and also
    prints to stdout.
    """
    lines = [f"=== {cal.name} ===", _header()]
    current = start
    while current < end:
        label = f"{DAY_NAMES[current.weekday()]} {current.strftime('%d %b')}"
        row = list("." * CHARS_PER_DAY)
        for iv in cal.availability_for_date(current):
            _paint(row, iv, "#")
        lines.append(f"{label:>16s}  {''.join(row)}")
        current += timedelta(days=1)

    result = "\n".join(lines)
    print(result)
    return result


def show_day(
    calendars: Sequence[WorkerCalendar],
    d: date,
    bookings: Mapping[str, Sequence[BookedInterval]],
) -> str:
    """Print ASCII dispatch view of one day, one row per worker.

    Legend: '.' = unavailable, '-' = free, 'A'-'Z' = booked (by job).
    Bookings paint over availability so out-of-hours jobs stay visible.
    Returns the string and also prints to stdout.
    """
    job_labels: dict[str, str] = {}
    for cal in calendars:
        for booking in bookings.get(cal.worker_id, ()):
            if booking.job_id not in job_labels:
                idx = len(job_labels) % len(LABEL_CHARS)
                job_labels[booking.job_id] = LABEL_CHARS[idx]

    lines = [f"{DAY_NAMES[d.weekday()]} {d.isoformat()}", _header()]
    for cal in calendars:
        row = list("." * CHARS_PER_DAY)
        for iv in cal.availability_for_date(d):
            _paint(row, iv, "-")
        for booking in bookings.get(cal.worker_id, ()):
            _paint(row, booking.interval, job_labels[booking.job_id])
        lines.append(f"{cal.name[:16]:>16s}  {''.join(row)}")

    if job_labels:
        legend_parts = [f"{v}={k}" for k, v in job_labels.items()]
        lines.append(f"\nLegend: . = unavailable, - = free, {', '.join(legend_parts)}")

    result = "\n".join(lines)
    print(result)
    return result
