"""Tests for the ASCII development views."""

from __future__ import annotations

from conftest import day_date, job, make_calendar
from dispatch_timeline.debug import CHARS_PER_DAY, show_day, show_week


def _row(output: str, label: str) -> str:
    line = next(line for line in output.splitlines() if line.strip().startswith(label))
    return line[-CHARS_PER_DAY:]


def test_show_week(capsys):
    cal = make_calendar("standard")
    out = show_week(cal, day_date("mon"), day_date("next_mon"))
    assert capsys.readouterr().out.strip() == out.strip()
    assert out.splitlines()[0] == "=== Ana Standard ==="
    mon = _row(out, "Mon 06 Jan")
    # 09:00-17:00 is cells 18..33
    assert mon == "." * 18 + "#" * 16 + "." * 14
    assert _row(out, "Sat 11 Jan") == "." * CHARS_PER_DAY


def test_show_week_overnight(capsys):
    out = show_week(make_calendar("night"), day_date("tue"), day_date("wed"))
    tue = _row(out, "Tue 07 Jan")
    assert tue == "#" * 12 + "." * 32 + "#" * 4


def test_show_day(capsys):
    calendars = [make_calendar("standard"), make_calendar("split_shift")]
    bookings = {
        "standard": [job("J1", "10:00", "11:00")],
        "split_shift": [job("J2", "13:00", "13:15"), job("J1", "18:00", "19:00")],
    }
    out = show_day(calendars, day_date("mon"), bookings)
    capsys.readouterr()
    standard = _row(out, "Ana Standard")
    assert standard[18:20] == "--"
    assert standard[20:22] == "AA"
    split = _row(out, "Ben Split")
    assert split[16:24] == "-" * 8
    assert split[24:26] == ".."
    # A partly covered cell still shows the booking
    assert split[26] == "B"
    # Bookings outside availability stay visible
    assert split[36:38] == "AA"
    assert "Legend: . = unavailable, - = free, A=J1, B=J2" in out


def test_show_day_without_bookings(capsys):
    out = show_day([make_calendar("weekend")], day_date("mon"), {})
    capsys.readouterr()
    assert "Legend" not in out
    assert _row(out, "Hal Weekend") == "." * CHARS_PER_DAY
