"""Tests for the utilization calculator and its bands.

Test data loaded from: data/fixtures/scenarios/utilization.json
"""

from __future__ import annotations

import pytest

from conftest import ivs, load_scenarios
from dispatch_timeline.types import UtilizationBand
from dispatch_timeline.utilization import band_for, metric, period_utilization, utilization

_scenarios = load_scenarios("utilization")


@pytest.mark.parametrize("spec", _scenarios, ids=lambda s: s["id"])
def test_utilization(spec):
    m = utilization(ivs(spec["booked"]), ivs(spec["available"]))
    assert m.percentage == pytest.approx(spec["percentage"])
    assert m.raw_percentage == pytest.approx(spec["raw"])
    assert m.band is UtilizationBand(spec["band"])


@pytest.mark.parametrize(
    "pct,band",
    [
        (0.0, UtilizationBand.LOW),
        (29.99, UtilizationBand.LOW),
        (30.0, UtilizationBand.MODERATE),
        (69.99, UtilizationBand.MODERATE),
        (70.0, UtilizationBand.HIGH),
        (99.99, UtilizationBand.HIGH),
        (100.0, UtilizationBand.FULL),
        (180.0, UtilizationBand.FULL),
    ],
    ids=lambda v: str(v),
)
def test_band_thresholds(pct, band):
    assert band_for(pct) is band


def test_zero_available_is_zero_not_nan():
    m = metric(120, 0)
    assert m.percentage == 0.0
    assert m.raw_percentage == 0.0
    assert not m.over_booked


def test_over_booked_flag():
    m = metric(600, 480)
    assert m.over_booked
    assert m.percentage == 100.0


def test_period_aggregate():
    week = [
        (ivs([["09:00", "13:00"]]), ivs([["09:00", "17:00"]])),
        ([], ivs([["09:00", "17:00"]])),
        ([], []),
    ]
    m = period_utilization(week)
    assert m.booked_minutes == 240
    assert m.available_minutes == 960
    assert m.percentage == pytest.approx(25.0)
