"""Boundary: TimeOfDay parsing, string/datetime <-> minutes since midnight."""

from __future__ import annotations

from datetime import datetime, time

from dispatch_timeline.types import MINUTES_PER_DAY, InvalidTimeError

INVALID_TIME_LABEL = "Invalid Time"


def _reject_aware(dt: datetime, name: str) -> None:
    """Reject timezone-aware datetimes."""
    if dt.tzinfo is not None:
        raise TypeError(
            f"{name} must be a naive datetime (no tzinfo), "
            f"got tzinfo={dt.tzinfo!r}. "
            f"All times are assumed to be in business local time."
        )


def parse_time(s: str) -> int:
    """Parse a time-of-day string to minutes since midnight.

    Accepts 'HH:MM', 'HH:MM:SS' (seconds are dropped) and 12-hour
    'h:MM AM' / 'h:MM PM'. '24:00' is end of day (1440).
    Raises InvalidTimeError for anything else.
    """
    if not isinstance(s, str):
        raise InvalidTimeError(s, "not a string")

    text = s.strip().upper()
    period = None
    if text.endswith(("AM", "PM")):
        period = text[-2:]
        text = text[:-2].strip()

    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise InvalidTimeError(s)

    hour, minute = int(parts[0]), int(parts[1])
    if len(parts) == 3 and int(parts[2]) > 59:
        raise InvalidTimeError(s, "second out of range")
    if minute > 59:
        raise InvalidTimeError(s, "minute out of range")

    if period is not None:
        if not 1 <= hour <= 12:
            raise InvalidTimeError(s, "hour out of range")
        if period == "PM" and hour != 12:
            hour += 12
        elif period == "AM" and hour == 12:
            hour = 0
    elif hour == 24 and minute == 0:
        return MINUTES_PER_DAY
    elif hour > 23:
        raise InvalidTimeError(s, "hour out of range")

    return hour * 60 + minute


def parse_time_or_none(s: object) -> int | None:
    """Lenient parse: None instead of raising on malformed input."""
    try:
        return parse_time(s)  # type: ignore[arg-type]
    except InvalidTimeError:
        return None


def minutes_of(value: datetime | time) -> int:
    """TimeOfDay of a naive datetime or time. Seconds are truncated."""
    if isinstance(value, datetime):
        _reject_aware(value, "value")
    elif value.tzinfo is not None:
        raise TypeError(f"value must be a naive time, got tzinfo={value.tzinfo!r}")
    return value.hour * 60 + value.minute


def to_time(minutes: int) -> time:
    """Minutes since midnight to a time object. 1440 maps to 00:00."""
    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    return time(hour, minute)


def format_time(minutes: int) -> str:
    """12-hour label, e.g. 540 -> '9:00 AM', 750 -> '12:30 PM'."""
    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    period = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {period}"


def format_time_label(s: str) -> str:
    """Display label for a raw time string. Never raises."""
    minutes = parse_time_or_none(s)
    if minutes is None:
        return INVALID_TIME_LABEL
    return format_time(minutes)


def format_duration(minutes: int) -> str:
    """Human duration: 45 -> '45m', 120 -> '2h', 90 -> '1h 30m'."""
    if minutes < 60:
        return f"{minutes}m"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"


def snap_to_grid(minutes: int, step: int = 15) -> int:
    """Round to the nearest multiple of ``step`` minutes (ties round up)."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return ((minutes + step // 2) // step) * step
