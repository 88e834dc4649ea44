"""Tests for the canonical data model."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from dispatch_timeline.types import (
    AvailabilityException,
    BookedInterval,
    ConflictReason,
    ConflictResult,
    GridPosition,
    Interval,
    InvalidTimeError,
    UtilizationBand,
)


class TestInterval:

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            Interval(540, 600).start = 0

    def test_hashable(self):
        assert len({Interval(540, 600), Interval(540, 600)}) == 1

    @pytest.mark.parametrize(
        "start,end,overnight,duration",
        [(540, 1020, False, 480), (1320, 360, True, 480), (1080, 0, True, 360), (600, 600, True, 1440)],
        ids=["same_day", "overnight", "to_midnight", "full_wrap"],
    )
    def test_overnight_and_duration(self, start, end, overnight, duration):
        interval = Interval(start, end)
        assert interval.is_overnight is overnight
        assert interval.duration == duration


class TestException:

    def test_all_day_overrides(self):
        assert AvailabilityException(date(2025, 1, 7), all_day_unavailable=True).overrides

    def test_interval_overrides(self):
        assert AvailabilityException(date(2025, 1, 7), interval=Interval(600, 660)).overrides

    def test_note_does_not_override(self):
        assert not AvailabilityException(date(2025, 1, 7), reason="Training").overrides


class TestResults:

    def test_reason_values(self):
        assert ConflictReason.NONE.value == "none"
        assert ConflictReason("outside_availability") is ConflictReason.OUTSIDE_AVAILABILITY
        assert ConflictReason.OVERLAPS_BOOKING == "overlaps_booking"

    def test_result_defaults(self):
        result = ConflictResult(False, ConflictReason.OVERLAPS_BOOKING)
        assert result.conflicts == ()
        assert not result.needs_review

    def test_band_values(self):
        assert [b.value for b in UtilizationBand] == ["low", "moderate", "high", "full"]

    def test_grid_position_right(self):
        assert GridPosition(0.25, 0.5).right == pytest.approx(0.75)

    def test_booked_interval(self):
        b = BookedInterval("J1", "Survey", Interval(600, 660))
        assert b.worker_id is None


def test_invalid_time_error():
    err = InvalidTimeError("25:00", "hour out of range")
    assert isinstance(err, ValueError)
    assert err.value == "25:00"
    assert "hour out of range" in str(err)
