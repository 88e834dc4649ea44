"""Input validation for raw weekly-availability and exception rows.

Rows use the storage shape: ``day_of_week`` counts from Sunday (0-6) and
times are 'HH:MM' or 'HH:MM:SS' strings.
"""

from __future__ import annotations

from datetime import date

from dispatch_timeline.intervals import overlaps
from dispatch_timeline.timeofday import parse_time_or_none
from dispatch_timeline.types import Interval


def validate_weekly_rows(rows: list[dict]) -> list[str]:
    """Validate weekly rows. Returns list of error messages (empty = valid).

    Checks:
    - day_of_week is an int 0-6
    - start_time / end_time parse as times and differ
    - Same-day rows within one weekday do not overlap
    """
    errors: list[str] = []
    by_day: dict[int, list[Interval]] = {}

    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"Row {i}: expected an object, got {row!r}")
            continue

        day = row.get("day_of_week")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            errors.append(f"Row {i}: invalid day_of_week {day!r} (must be 0-6)")
            continue

        start = parse_time_or_none(row.get("start_time"))
        end = parse_time_or_none(row.get("end_time"))
        if start is None or end is None:
            errors.append(
                f"Row {i}: invalid time range "
                f"{row.get('start_time')!r}-{row.get('end_time')!r}"
            )
            continue
        if start == end or start == 1440:
            errors.append(f"Row {i}: empty time range {row['start_time']}")
            continue

        if end > start:
            by_day.setdefault(day, []).append(Interval(start, end))

    for day, intervals in by_day.items():
        intervals.sort(key=lambda iv: iv.start)
        for prev, curr in zip(intervals, intervals[1:]):
            if overlaps(prev, curr):
                errors.append(
                    f"Day {day}: overlapping periods "
                    f"{prev.start}-{prev.end} and {curr.start}-{curr.end}"
                )

    return errors


def validate_exception_rows(rows: list[dict]) -> list[str]:
    """Validate exception rows. Returns list of error messages.

    Checks:
    - date parses as an ISO date
    - is_available is a boolean
    - start_time and end_time are both given or both absent, and parse
    """
    errors: list[str] = []

    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"Exception {i}: expected an object, got {row!r}")
            continue

        try:
            date.fromisoformat(row.get("date"))
        except (ValueError, TypeError):
            errors.append(f"Exception {i}: invalid date {row.get('date')!r}")
            continue

        if not isinstance(row.get("is_available"), bool):
            errors.append(f"Exception {i}: 'is_available' must be boolean")

        start_raw, end_raw = row.get("start_time"), row.get("end_time")
        if (start_raw is None) != (end_raw is None):
            errors.append(
                f"Exception {i}: start_time and end_time must be given together"
            )
            continue
        if start_raw is None:
            continue

        start = parse_time_or_none(start_raw)
        end = parse_time_or_none(end_raw)
        if start is None or end is None:
            errors.append(
                f"Exception {i}: invalid time range {start_raw!r}-{end_raw!r}"
            )
        elif start == end or start == 1440:
            errors.append(f"Exception {i}: empty time range {start_raw}")

    return errors
