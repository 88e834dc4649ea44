"""Shared test fixtures and data loading for dispatch-timeline.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference week: Mon 2025-01-06 through Sun 2025-01-12.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from dispatch_timeline.timeofday import parse_time
from dispatch_timeline.types import BookedInterval, Interval

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
ROSTER_PATH = FIXTURES_DIR / "rosters.json"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
MINUTES_PER_DAY = _reference["minutes_per_day"]

# Day lookup:  DAYS["mon"] → {"date": date(...), "weekday": 0, "day_of_week": 1}
DAYS: dict[str, dict] = {}
for _d in _reference["days"]:
    DAYS[_d["name"]] = {
        "date": date.fromisoformat(_d["date"]),
        "weekday": _d["weekday"],
        "day_of_week": _d["day_of_week"],
    }

# Time lookup:  TIMES["08:00"] → 480
TIMES: dict[str, int] = {t["label"]: t["minutes"] for t in _reference["times"]}


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def day_date(day: str) -> date:
    """Date object for a named day."""
    return DAYS[day]["date"]


def dt(day: str, label: str) -> datetime:
    """Naive local datetime from day name and 'HH:MM'.

    >>> dt("mon", "09:00")
    datetime(2025, 1, 6, 9, 0)
    """
    return datetime.combine(day_date(day), datetime.min.time()) + timedelta(
        minutes=parse_time(label)
    )


def iv(pair: list[str]) -> Interval:
    """Convert ["08:00", "17:00"] to Interval(480, 1020)."""
    return Interval(parse_time(pair[0]), parse_time(pair[1]))


def ivs(pairs: list[list[str]]) -> list[Interval]:
    return [iv(p) for p in pairs]


def job(job_id: str, start: str, end: str, title: str | None = None,
        worker_id: str | None = None) -> BookedInterval:
    """A BookedInterval from plain 'HH:MM' labels."""
    return BookedInterval(
        job_id=job_id,
        title=title or f"Job {job_id}",
        interval=iv([start, end]),
        worker_id=worker_id,
    )


def booked_from_entries(entries: list[dict]) -> list[BookedInterval]:
    """Scenario booking entries {job_id, title, interval} to BookedIntervals."""
    return [
        BookedInterval(e["job_id"], e["title"], iv(e["interval"]))
        for e in entries
    ]


# ---------------------------------------------------------------------------
# Calendar factory
# ---------------------------------------------------------------------------
_rosters = None


def make_calendar(name: str):
    """Build a WorkerCalendar from rosters.json by worker id."""
    global _rosters
    if _rosters is None:
        from dispatch_timeline.loaders import load_roster_json

        _rosters = load_roster_json(ROSTER_PATH)
    return _rosters[name]


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def standard_calendar():
    return make_calendar("standard")


@pytest.fixture
def exceptions_calendar():
    return make_calendar("exceptions")


@pytest.fixture
def night_calendar():
    return make_calendar("night")


@pytest.fixture
def roster_path() -> Path:
    return ROSTER_PATH
