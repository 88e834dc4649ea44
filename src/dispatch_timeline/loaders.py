"""Boundary adapter: raw records and JSON files -> canonical types.

Every shape the data store or RPC layer produces is normalised here, so
the engine only ever sees ``types`` objects. Two modes:

- strict (JSON roster files): validation errors raise ValueError
- lenient (live records): malformed rows are logged and dropped, so a bad
  row renders as "unavailable" instead of breaking the view
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta, tzinfo
from pathlib import Path
from typing import Iterable

from dispatch_timeline.calendar import WorkerCalendar
from dispatch_timeline.intervals import same_day_leg
from dispatch_timeline.schedule import WorkerDaySchedule
from dispatch_timeline.schema import validate_exception_rows, validate_weekly_rows
from dispatch_timeline.timeofday import minutes_of, parse_time, parse_time_or_none
from dispatch_timeline.types import (
    MINUTES_PER_DAY,
    AvailabilityException,
    BookedInterval,
    Interval,
    InvalidTimeError,
    WorkingHoursRule,
)

logger = logging.getLogger(__name__)


def weekday_from_sunday(day_of_week: int) -> int:
    """Storage day (0=Sunday) to ``date.weekday()`` (0=Monday)."""
    return (day_of_week - 1) % 7


def _interval(start_raw: str, end_raw: str) -> Interval:
    """Strict: parse a start/end pair. End '00:00' after a start runs to midnight."""
    start = parse_time(start_raw)
    end = parse_time(end_raw)
    if start == MINUTES_PER_DAY or start == end:
        raise InvalidTimeError(f"{start_raw}-{end_raw}", "empty time range")
    return Interval(start, end)


def rule_from_row(row: dict) -> WorkingHoursRule:
    """Strict: one storage weekly row to a WorkingHoursRule."""
    return WorkingHoursRule(
        weekday=weekday_from_sunday(int(row["day_of_week"])),
        interval=_interval(row["start_time"], row["end_time"]),
    )


_TRUE = frozenset({"true", "t", "yes", "1"})
_FALSE = frozenset({"false", "f", "no", "0"})


def _flag(value: object) -> bool:
    """Storage boolean: a bool, 0/1, or a 'true'/'false' style string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def exception_from_row(row: dict) -> AvailabilityException:
    """Strict: one storage exception row to an AvailabilityException.

    is_available=False blocks the whole date, whatever times are set.
    is_available=True with times replaces the recurring rules.
    is_available=True without times is only a note.
    """
    d = date.fromisoformat(row["date"])
    reason = row.get("reason") or None
    if not _flag(row["is_available"]):
        return AvailabilityException(d, all_day_unavailable=True, reason=reason)
    if row.get("start_time") and row.get("end_time"):
        return AvailabilityException(
            d, interval=_interval(row["start_time"], row["end_time"]), reason=reason
        )
    return AvailabilityException(d, reason=reason)


def _lenient(rows: Iterable[dict], convert, kind: str, worker_id: str) -> list:
    parsed = []
    for row in rows or ():
        try:
            parsed.append(convert(row))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Dropping malformed %s row for worker %s: %s (%r)",
                kind, worker_id, e, row,
            )
    return parsed


def calendar_from_records(
    worker_id: str,
    weekly_rows: Iterable[dict] = (),
    exception_rows: Iterable[dict] = (),
    name: str | None = None,
) -> WorkerCalendar:
    """Lenient: build a WorkerCalendar from storage rows."""
    rules = _lenient(weekly_rows, rule_from_row, "weekly", worker_id)
    exceptions = _lenient(exception_rows, exception_from_row, "exception", worker_id)
    return WorkerCalendar(worker_id, rules, exceptions, name=name)


def calendar_from_working_hours(worker: dict) -> WorkerCalendar:
    """Lenient: the UI worker shape ``working_hours=[{start, end, day?}]``.

    A slot without ``day`` applies to every day of the week.
    """
    worker_id = str(worker.get("id", ""))
    rows: list[dict] = []
    for slot in worker.get("working_hours") or ():
        days = range(7) if slot.get("day") is None else (slot["day"],)
        rows.extend(
            {"day_of_week": day, "start_time": slot.get("start"), "end_time": slot.get("end")}
            for day in days
        )
    return calendar_from_records(worker_id, rows, name=worker.get("name"))


def _moment(value: object, tz: tzinfo | None) -> datetime:
    """Parse an ISO timestamp to naive business-local time."""
    if not isinstance(value, str):
        raise ValueError(f"expected an ISO timestamp, got {value!r}")
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is not None:
        if tz is None:
            raise TypeError(
                f"timestamp {value!r} is timezone-aware; "
                f"pass tz to convert it to business local time"
            )
        dt = dt.astimezone(tz).replace(tzinfo=None)
    return dt


def _booking_span(record: dict, tz: tzinfo | None) -> tuple[datetime, datetime]:
    if record.get("scheduled_at"):
        start = _moment(record["scheduled_at"], tz)
        duration = record.get("duration_minutes")
        if duration is None and record.get("duration_hours") is not None:
            duration = float(record["duration_hours"]) * 60
        if not isinstance(duration, (int, float)):
            raise ValueError(f"missing duration for scheduled_at {record['scheduled_at']}")
        return start, start + timedelta(minutes=int(duration))
    return _moment(record.get("start_time"), tz), _moment(record.get("end_time"), tz)


def booking_from_record(
    record: dict,
    tz: tzinfo | None = None,
    worker_id: str | None = None,
) -> BookedInterval | None:
    """Lenient: one job record to a BookedInterval, or None if malformed.

    Accepts ``start_time``/``end_time`` as ISO timestamps or plain times,
    or ``scheduled_at`` plus ``duration_minutes`` (or ``duration_hours``).
    Timezone-aware timestamps need ``tz``; without it the record is dropped.
    """
    job_id = str(record.get("job_id") or record.get("id") or "")
    title = record.get("title") or ""
    worker_id = worker_id or record.get("worker_id")

    plain_start = parse_time_or_none(record.get("start_time"))
    plain_end = parse_time_or_none(record.get("end_time"))
    try:
        if plain_start is not None and plain_end is not None:
            if plain_start == plain_end:
                raise ValueError(f"empty booking at {record['start_time']}")
            interval = Interval(plain_start, plain_end % MINUTES_PER_DAY)
        else:
            start, end = _booking_span(record, tz)
            if end <= start:
                raise ValueError(f"end {end} is not after start {start}")
            interval = Interval(minutes_of(start), minutes_of(end))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Dropping malformed booking %r: %s", job_id or record, e)
        return None

    return BookedInterval(job_id=job_id, title=title, interval=interval, worker_id=worker_id)


def schedule_from_record(
    worker_id: str,
    d: date,
    record: dict,
    tz: tzinfo | None = None,
) -> WorkerDaySchedule:
    """Lenient: the booked-intervals source's day record to a WorkerDaySchedule.

    Expected keys: daily_availability_slots, daily_schedule,
    weekly/daily_hours_worked/goal, daily_exception_reason,
    exception_start_time, exception_end_time. Missing data is zero
    availability, not an error.
    """
    availability = []
    for slot in record.get("daily_availability_slots") or ():
        try:
            availability.append(
                same_day_leg(_interval(slot["start_time"], slot["end_time"]))
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Dropping malformed availability slot for worker %s: %s", worker_id, e
            )

    booked = tuple(
        b for b in (
            booking_from_record(job, tz, worker_id)
            for job in record.get("daily_schedule") or ()
        )
        if b is not None
    )

    exception = None
    reason = record.get("daily_exception_reason")
    start_raw = record.get("exception_start_time")
    end_raw = record.get("exception_end_time")
    if start_raw and end_raw:
        try:
            exception = AvailabilityException(
                d, interval=_interval(start_raw, end_raw), reason=reason
            )
        except ValueError as e:
            logger.warning("Dropping malformed exception for worker %s: %s", worker_id, e)
            exception = AvailabilityException(d, all_day_unavailable=True, reason=reason)
    elif reason:
        exception = AvailabilityException(d, all_day_unavailable=True, reason=reason)

    return WorkerDaySchedule(
        worker_id=worker_id,
        date=d,
        availability=tuple(sorted(availability, key=lambda iv: iv.start)),
        booked=booked,
        weekly_hours_worked=float(record.get("weekly_hours_worked") or 0),
        weekly_hours_goal=float(record.get("weekly_hours_goal") or 0),
        daily_hours_worked=float(record.get("daily_hours_worked") or 0),
        daily_hours_goal=float(record.get("daily_hours_goal") or 0),
        exception=exception,
    )


def load_roster_json(path: str | Path) -> dict[str, WorkerCalendar]:
    """Load worker calendars from a JSON roster file. Strict.

    The JSON must have the roster format:
    {
        "workers": {
            "W-1": {
                "name": "...",
                "weekly": [{"day_of_week": 1, "start_time": "09:00", "end_time": "17:00"}],
                "exceptions": [{"date": "2025-01-07", "is_available": false}]
            },
            ...
        }
    }

    Raises ValueError if validation fails.
    """
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    calendars: dict[str, WorkerCalendar] = {}
    for worker_id, worker in data["workers"].items():
        weekly = worker.get("weekly", [])
        exceptions = worker.get("exceptions", [])

        errors = validate_weekly_rows(weekly)
        errors.extend(validate_exception_rows(exceptions))
        if errors:
            raise ValueError(
                f"Validation errors for {worker_id} in {path.name}:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )

        calendars[worker_id] = WorkerCalendar(
            worker_id,
            [rule_from_row(row) for row in weekly],
            [exception_from_row(row) for row in exceptions],
            name=worker.get("name"),
        )

    return calendars
