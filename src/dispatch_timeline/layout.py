"""Layer 3: overlap stacking for one worker lane.

Greedy single pass: each block's stack index is the number of blocks
already placed that overlap it. The result depends on the sort order
(start ascending, input order for ties); O(n^2).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from dispatch_timeline.grid import DEFAULT_GRID
from dispatch_timeline.intervals import overlaps, same_day_leg
from dispatch_timeline.types import BookedInterval


@dataclass(frozen=True)
class StackedBlock:
    """A booking with its vertical placement in the lane."""

    booking: BookedInterval
    stack_index: int
    offset: float


def stack_blocks(
    bookings: Sequence[BookedInterval],
    row_height: float = DEFAULT_GRID.row_height,
) -> list[StackedBlock]:
    """Assign stack indices; returns blocks in placement (sorted) order."""
    ordered = sorted(bookings, key=lambda b: same_day_leg(b.interval).start)
    placed: list[StackedBlock] = []
    for booking in ordered:
        leg = same_day_leg(booking.interval)
        index = sum(
            1 for other in placed
            if overlaps(leg, same_day_leg(other.booking.interval))
        )
        placed.append(StackedBlock(booking, index, index * row_height))
    return placed


def lane_depth(blocks: Sequence[StackedBlock]) -> int:
    """Number of stack rows the lane needs (0 for an empty lane)."""
    return max((b.stack_index for b in blocks), default=-1) + 1
