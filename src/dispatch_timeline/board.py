"""Reference composition: one day's dispatch board from the primitives.

This module shows how the engine's pieces compose into what a timeline
view renders: calendars resolve availability, the window selector sizes
the grid, the mapper places blocks, the stacker separates overlaps and
utilization summarizes each lane. It is a usage guide in code form, not
a rendering layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from dispatch_timeline.calendar import WorkerCalendar
from dispatch_timeline.clock import Clock
from dispatch_timeline.grid import DEFAULT_GRID, GridConfig, interval_to_grid, now_position
from dispatch_timeline.intervals import same_day_leg
from dispatch_timeline.layout import lane_depth, stack_blocks
from dispatch_timeline.types import (
    BookedInterval,
    GridPosition,
    Interval,
    TimeWindow,
    UtilizationMetric,
)
from dispatch_timeline.utilization import utilization
from dispatch_timeline.window import optimal_window


@dataclass(frozen=True)
class LaneBlock:
    """A booking placed on the board. None position means off-grid."""

    booking: BookedInterval
    stack_index: int
    top: float
    position: GridPosition | None


@dataclass
class WorkerLane:
    """One worker's row on the board."""

    worker_id: str
    name: str | None
    availability: list[Interval]
    availability_blocks: list[GridPosition]
    blocks: list[LaneBlock]
    utilization: UtilizationMetric
    depth: int
    height: float


@dataclass
class DayBoard:
    date: date
    window: TimeWindow
    lanes: list[WorkerLane] = field(default_factory=list)
    unassigned: list[BookedInterval] = field(default_factory=list)
    now_position: float | None = None


def build_day_board(
    d: date,
    calendars: Sequence[WorkerCalendar],
    bookings: Sequence[BookedInterval],
    config: GridConfig = DEFAULT_GRID,
    clock: Clock | None = None,
) -> DayBoard:
    """Lay out every worker's day on a shared grid.

    Bookings are routed to lanes by ``worker_id``; bookings without a
    known worker are returned as unassigned. Lanes keep calendar order.
    The now-indicator is placed only when ``clock`` reads the board's date.
    """
    by_worker: dict[str, list[BookedInterval]] = {cal.worker_id: [] for cal in calendars}
    unassigned: list[BookedInterval] = []
    for booking in bookings:
        if booking.worker_id in by_worker:
            by_worker[booking.worker_id].append(booking)
        else:
            unassigned.append(booking)

    availability = {cal.worker_id: cal.availability_for_date(d) for cal in calendars}
    window = optimal_window(
        [iv for ivs in availability.values() for iv in ivs],
        [b.interval for b in bookings],
    )

    lanes: list[WorkerLane] = []
    for cal in calendars:
        available = availability[cal.worker_id]
        booked = by_worker[cal.worker_id]
        stacked = stack_blocks(booked, config.row_height)
        blocks = [
            LaneBlock(
                booking=s.booking,
                stack_index=s.stack_index,
                top=s.offset,
                position=interval_to_grid(s.booking.interval, window, config),
            )
            for s in stacked
        ]
        shading = [
            pos for pos in (interval_to_grid(iv, window, config) for iv in available)
            if pos is not None
        ]
        lanes.append(WorkerLane(
            worker_id=cal.worker_id,
            name=cal.name,
            availability=available,
            availability_blocks=shading,
            blocks=blocks,
            utilization=utilization([same_day_leg(b.interval) for b in booked], available),
            depth=lane_depth(stacked),
            height=max(1, lane_depth(stacked)) * config.row_height,
        ))

    indicator = None
    if clock is not None:
        now = clock()
        if now.date() == d:
            indicator = now_position(now, window)

    return DayBoard(
        date=d,
        window=window,
        lanes=lanes,
        unassigned=unassigned,
        now_position=indicator,
    )
