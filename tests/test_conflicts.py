"""Tests for the conflict detector and the overnight policy.

Test data loaded from: data/fixtures/scenarios/conflicts.json
"""

from __future__ import annotations

import logging

import pytest

from conftest import booked_from_entries, day_date, iv, ivs, job, load_scenarios, make_calendar
from dispatch_timeline.conflicts import SCHEDULABLE, OvernightPolicy, check, check_on_date
from dispatch_timeline.types import ConflictReason, Interval

_scenarios = load_scenarios("conflicts")


class TestSameDayCandidates:

    @pytest.mark.parametrize("spec", _scenarios, ids=lambda s: s["id"])
    def test_check(self, spec):
        result = check(
            iv(spec["candidate"]),
            ivs(spec["availability"]),
            booked_from_entries(spec["booked"]),
        )
        assert result.schedulable is spec["schedulable"], spec["notes"]
        assert result.reason is ConflictReason(spec["reason"])
        assert [c.job_id for c in result.conflicts] == spec["conflicts"]
        assert not result.needs_review

    def test_plain_intervals_as_bookings(self):
        result = check(Interval(600, 660), [Interval(540, 1020)], [Interval(630, 690)])
        assert result.reason is ConflictReason.OVERLAPS_BOOKING
        assert result.conflicts[0].interval == Interval(630, 690)

    def test_schedulable_constant(self):
        assert check(Interval(600, 660), [Interval(540, 1020)]) == SCHEDULABLE


class TestUnavailableAllDay:
    """A fully unavailable worker rejects every candidate, whatever the recurring hours."""

    @pytest.mark.parametrize("candidate", [["09:00", "10:00"], ["12:00", "13:00"], ["16:00", "17:00"]],
                             ids=["morning", "noon", "afternoon"])
    def test_any_candidate_outside(self, candidate):
        cal = make_calendar("exceptions")
        result = check_on_date(iv(candidate), cal, day_date("tue"))
        assert not result.schedulable
        assert result.reason is ConflictReason.OUTSIDE_AVAILABILITY

    def test_same_candidate_fine_on_normal_day(self):
        cal = make_calendar("exceptions")
        assert check_on_date(iv(["09:00", "10:00"]), cal, day_date("mon")).schedulable

    def test_override_window_applies(self):
        cal = make_calendar("exceptions")
        wed = day_date("wed")
        assert check_on_date(iv(["12:30", "13:30"]), cal, wed).schedulable
        assert not check_on_date(iv(["10:00", "11:00"]), cal, wed).schedulable


class TestExcludeJob:

    def test_moving_job_ignores_itself(self):
        booked = [job("J1", "10:00", "11:00"), job("J2", "13:00", "14:00")]
        candidate = iv(["10:30", "11:30"])
        avail = ivs([["09:00", "17:00"]])
        assert check(candidate, avail, booked).reason is ConflictReason.OVERLAPS_BOOKING
        assert check(candidate, avail, booked, exclude_job_id="J1").schedulable

    def test_other_jobs_still_conflict(self):
        booked = [job("J1", "10:00", "11:00"), job("J2", "11:00", "12:00")]
        result = check(iv(["10:30", "11:30"]), ivs([["09:00", "17:00"]]), booked,
                       exclude_job_id="J1")
        assert [c.job_id for c in result.conflicts] == ["J2"]


class TestOvernightConservative:
    """Default policy: overnight candidates are deferred, never schedulable here."""

    def test_not_schedulable_needs_review(self):
        result = check(iv(["22:00", "02:00"]), ivs([["00:00", "24:00"]]))
        assert not result.schedulable
        assert result.reason is ConflictReason.OUTSIDE_AVAILABILITY
        assert result.needs_review
        assert result.conflicts == ()

    def test_logged_as_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dispatch_timeline.conflicts"):
            check(iv(["23:00", "01:00"]), ivs([["22:00", "24:00"]]))
        assert "deferred" in caplog.text

    def test_ignores_next_day_data(self):
        result = check(
            iv(["22:00", "02:00"]),
            ivs([["20:00", "24:00"]]),
            policy=OvernightPolicy.CONSERVATIVE,
            next_day_availability=ivs([["00:00", "06:00"]]),
        )
        assert result.needs_review

    def test_genuine_conflict_is_not_review(self):
        result = check(iv(["10:00", "11:00"]), ivs([["09:00", "17:00"]]),
                       [job("J1", "10:00", "11:00")])
        assert not result.needs_review


class TestOvernightSplit:
    """Opt-in two-leg validation against each date's own data."""

    def test_both_legs_available(self):
        result = check(
            iv(["22:00", "02:00"]),
            ivs([["20:00", "24:00"]]),
            policy=OvernightPolicy.SPLIT,
            next_day_availability=ivs([["00:00", "06:00"]]),
        )
        assert result.schedulable
        assert not result.needs_review

    def test_next_day_leg_outside(self):
        result = check(
            iv(["22:00", "02:00"]),
            ivs([["20:00", "24:00"]]),
            policy=OvernightPolicy.SPLIT,
            next_day_availability=ivs([["01:00", "06:00"]]),
        )
        assert result.reason is ConflictReason.OUTSIDE_AVAILABILITY
        assert not result.needs_review

    def test_next_day_leg_booked(self):
        result = check(
            iv(["22:00", "02:00"]),
            ivs([["20:00", "24:00"]]),
            policy=OvernightPolicy.SPLIT,
            next_day_availability=ivs([["00:00", "06:00"]]),
            next_day_booked=[job("N1", "01:00", "03:00")],
        )
        assert result.reason is ConflictReason.OVERLAPS_BOOKING
        assert [c.job_id for c in result.conflicts] == ["N1"]

    def test_missing_next_day_falls_back(self):
        result = check(iv(["22:00", "02:00"]), ivs([["20:00", "24:00"]]),
                       policy=OvernightPolicy.SPLIT)
        assert result.needs_review

    def test_ends_at_midnight_single_leg(self):
        result = check(
            Interval(1320, 0),
            ivs([["20:00", "24:00"]]),
            policy=OvernightPolicy.SPLIT,
            next_day_availability=[],
        )
        assert result.schedulable

    def test_on_date_with_night_roster(self, night_calendar):
        result = check_on_date(iv(["23:00", "05:00"]), night_calendar, day_date("mon"),
                               policy=OvernightPolicy.SPLIT)
        assert result.schedulable

    def test_on_date_friday_night_into_saturday(self, night_calendar):
        result = check_on_date(iv(["22:00", "07:00"]), night_calendar, day_date("fri"),
                               policy=OvernightPolicy.SPLIT)
        assert result.reason is ConflictReason.OUTSIDE_AVAILABILITY

    def test_on_date_defaults_to_conservative(self, night_calendar):
        result = check_on_date(iv(["23:00", "05:00"]), night_calendar, day_date("mon"))
        assert result.needs_review
