"""Tests for overlap stacking in a worker lane.

Test data loaded from: data/fixtures/scenarios/layout.json
"""

from __future__ import annotations

import pytest

from conftest import job, load_scenarios
from dispatch_timeline.layout import lane_depth, stack_blocks

_scenarios = load_scenarios("layout")


def _bookings(spec: dict):
    return [job(job_id, start, end) for job_id, start, end in spec["blocks"]]


@pytest.mark.parametrize("spec", _scenarios, ids=lambda s: s["id"])
def test_stack_indices(spec):
    blocks = stack_blocks(_bookings(spec))
    assert {b.booking.job_id: b.stack_index for b in blocks} == spec["expected"]


@pytest.mark.parametrize("spec", _scenarios, ids=lambda s: s["id"])
def test_placement_order(spec):
    blocks = stack_blocks(_bookings(spec))
    assert [b.booking.job_id for b in blocks] == spec["order"]


@pytest.mark.parametrize("spec", _scenarios, ids=lambda s: s["id"])
def test_lane_depth(spec):
    assert lane_depth(stack_blocks(_bookings(spec))) == spec["depth"]


def test_offset_uses_row_height():
    blocks = stack_blocks([job("A", "09:00", "11:00"), job("B", "10:00", "12:00")], row_height=24.0)
    assert [b.offset for b in blocks] == [0.0, 24.0]


def test_default_row_height():
    blocks = stack_blocks([job("A", "09:00", "11:00"), job("B", "10:00", "12:00")])
    assert blocks[1].offset == 30.0


def test_repeatable():
    bookings = [job("A", "09:00", "12:00"), job("B", "10:00", "11:00"), job("C", "10:30", "11:30")]
    first = stack_blocks(bookings)
    for _ in range(5):
        assert stack_blocks(bookings) == first
