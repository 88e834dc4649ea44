#!/usr/bin/env python
"""Visual verification report for dispatch-timeline.

Run:  python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (day table, storage day_of_week mapping)
  2. Worker rosters (weekly rows + exceptions as tables, ASCII week)
  3. Availability and conflict scenarios  -- input/output tables
  4. A composed day board (window, lanes, stacking, utilization) + ASCII day
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from dispatch_timeline.board import build_day_board
from dispatch_timeline.conflicts import check
from dispatch_timeline.debug import show_day, show_week
from dispatch_timeline.loaders import load_roster_json
from dispatch_timeline.timeofday import format_duration, format_time, parse_time
from dispatch_timeline.types import BookedInterval, Interval
from dispatch_timeline.utilization import utilization


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")
_rosters = _load(FIXTURES / "rosters.json")
CALENDARS = load_roster_json(FIXTURES / "rosters.json")

DAYS = {d["name"]: date.fromisoformat(d["date"]) for d in _ref["days"]}
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
STORAGE_DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _iv(pair: list[str]) -> Interval:
    return Interval(parse_time(pair[0]), parse_time(pair[1]))


def _fmt_iv(interval: Interval) -> str:
    suffix = " (+1d)" if interval.is_overnight and interval.end else ""
    return f"{format_time(interval.start)}-{format_time(interval.end)}{suffix}"


def _fmt_ivs(intervals) -> str:
    return ", ".join(_fmt_iv(i) for i in intervals) or "(none)"


# ---------------------------------------------------------------------------
# Section 1: Reference Data
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")
    print(f"\n    Minutes/day:    {_ref['minutes_per_day']}")

    heading("Day Mapping")
    rows = []
    for d in _ref["days"]:
        rows.append([d["name"], d["date"], DAY_NAMES[d["weekday"]],
                     str(d["weekday"]), str(d["day_of_week"])])
    table(["Name", "Date", "Day", "weekday()", "Storage day_of_week"], rows)

    heading("Time Label / Minute Mapping")
    table(["Time", "Minutes"], [[t["label"], str(t["minutes"])] for t in _ref["times"]])


# ---------------------------------------------------------------------------
# Section 2: Worker Rosters
# ---------------------------------------------------------------------------
def section_rosters():
    banner("WORKER ROSTERS")

    for worker_id, config in _rosters["workers"].items():
        heading(f"Worker: {worker_id} ({config['name']})")

        rows = [
            [STORAGE_DAY_NAMES[r["day_of_week"]], r["start_time"], r["end_time"]]
            for r in config["weekly"]
        ]
        table(["Day", "Start", "End"], rows)

        exceptions = config.get("exceptions", [])
        if exceptions:
            print()
            rows = []
            for e in exceptions:
                if not e["is_available"]:
                    kind = "Unavailable all day"
                elif e.get("start_time"):
                    kind = f"Override {e['start_time']}-{e['end_time']}"
                else:
                    kind = "Note only"
                rows.append([e["date"], kind, e.get("reason") or ""])
            table(["Date", "Type", "Reason"], rows)
        else:
            print("    Exceptions: (none)")

        print()
        show_week(CALENDARS[worker_id], DAYS["mon"], DAYS["next_mon"])


# ---------------------------------------------------------------------------
# Section 3: Availability and Conflicts
# ---------------------------------------------------------------------------
def section_availability():
    banner("LAYER 1: AVAILABILITY RESOLVER")
    heading("Function: cal.availability_for_date(d) -> list[Interval]")

    rows = []
    for s in _load(SCENARIOS / "availability.json"):
        cal = CALENDARS[s["calendar"]]
        result = cal.availability_for_date(DAYS[s["day"]])
        ok = result == [_iv(p) for p in s["expected"]]
        rows.append([s["id"], s["calendar"], s["day"], _fmt_ivs(result),
                     "PASS" if ok else "FAIL"])
    table(["Scenario", "Calendar", "Day", "Availability", "Check"], rows)


def section_conflicts():
    banner("LAYER 2: CONFLICT DETECTOR")
    heading("Function: check(candidate, availability, booked) -> ConflictResult")

    rows = []
    for s in _load(SCENARIOS / "conflicts.json"):
        booked = [BookedInterval(b["job_id"], b["title"], _iv(b["interval"])) for b in s["booked"]]
        result = check(_iv(s["candidate"]), [_iv(p) for p in s["availability"]], booked)
        ok = result.schedulable is s["schedulable"] and result.reason.value == s["reason"]
        rows.append([
            s["id"],
            _fmt_iv(_iv(s["candidate"])),
            result.reason.value,
            ", ".join(c.job_id for c in result.conflicts),
            "PASS" if ok else "FAIL",
        ])
    table(["Scenario", "Candidate", "Reason", "Conflicts", "Check"], rows)


# ---------------------------------------------------------------------------
# Section 4: Day Board
# ---------------------------------------------------------------------------
def section_board():
    banner("LAYER 3: DAY BOARD")

    d = DAYS["mon"]
    calendars = [CALENDARS[w] for w in ("standard", "split_shift", "night", "late_close")]

    def booking(job_id, start, end, worker_id, title):
        return BookedInterval(job_id, title, _iv([start, end]), worker_id)

    bookings = [
        booking("J1", "09:00", "11:00", "standard", "Boiler service"),
        booking("J2", "10:00", "12:00", "standard", "Gutter clean"),
        booking("J3", "10:30", "11:00", "standard", "Quote visit"),
        booking("J4", "13:00", "14:30", "split_shift", "Survey"),
        booking("J5", "23:00", "02:00", "night", "Night call-out"),
        booking("J6", "18:00", "20:00", "late_close", "Evening install"),
    ]

    board = build_day_board(d, calendars, bookings)
    print(f"\n    Date:    {d.isoformat()}")
    print(f"    Window:  {board.window.start_hour:02d}:00-{board.window.end_hour:02d}:00")

    heading("Lanes")
    rows = []
    for lane in board.lanes:
        m = lane.utilization
        rows.append([
            lane.worker_id,
            _fmt_ivs(lane.availability),
            str(len(lane.blocks)),
            str(lane.depth),
            f"{m.percentage:.0f}% ({format_duration(m.booked_minutes)}/{format_duration(m.available_minutes)})",
            m.band.value,
        ])
    table(["Worker", "Availability", "Jobs", "Rows", "Utilization", "Band"], rows)

    heading("Blocks")
    rows = []
    for lane in board.lanes:
        for block in lane.blocks:
            pos = block.position
            rows.append([
                lane.worker_id, block.booking.job_id, _fmt_iv(block.booking.interval),
                str(block.stack_index),
                f"{pos.left:.3f}" if pos else "-",
                f"{pos.width:.3f}" if pos else "-",
            ])
    table(["Worker", "Job", "Time", "Row", "Left", "Width"], rows)

    print()
    by_worker: dict[str, list[BookedInterval]] = {}
    for b in bookings:
        by_worker.setdefault(b.worker_id, []).append(b)
    show_day(calendars, d, by_worker)

    heading("Overall Utilization")
    booked = [b.interval for b in bookings]
    available = [iv for lane in board.lanes for iv in lane.availability]
    m = utilization(booked, available)
    print(f"    {m.percentage:.1f}% ({m.band.value})")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    banner("DISPATCH-TIMELINE   --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")

    section_reference()
    section_rosters()
    section_availability()
    section_conflicts()
    section_board()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
