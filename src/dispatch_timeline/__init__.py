"""dispatch-timeline: scheduling and availability-conflict engine for dispatch views."""

from dispatch_timeline.board import DayBoard, WorkerLane, build_day_board
from dispatch_timeline.calendar import WorkerCalendar
from dispatch_timeline.clock import NowTicker, fixed_clock, system_clock
from dispatch_timeline.conflicts import OvernightPolicy, check, check_on_date
from dispatch_timeline.grid import (
    DEFAULT_GRID,
    GridConfig,
    duration_to_width,
    interval_to_grid,
    position_to_time,
    time_to_position,
)
from dispatch_timeline.intervals import contains, merge, normalize, overlaps
from dispatch_timeline.layout import stack_blocks
from dispatch_timeline.loaders import calendar_from_records, load_roster_json
from dispatch_timeline.selection import RankedWorker, WorkerOption, mark_selectable
from dispatch_timeline.slots import next_available_slot
from dispatch_timeline.types import (
    AvailabilityException,
    BookedInterval,
    ConflictReason,
    ConflictResult,
    GridPosition,
    Interval,
    InvalidTimeError,
    TimeWindow,
    UtilizationBand,
    UtilizationMetric,
    WorkingHoursRule,
)
from dispatch_timeline.utilization import utilization
from dispatch_timeline.window import optimal_window

__all__ = [
    "AvailabilityException",
    "BookedInterval",
    "ConflictReason",
    "ConflictResult",
    "DEFAULT_GRID",
    "DayBoard",
    "GridConfig",
    "GridPosition",
    "Interval",
    "InvalidTimeError",
    "NowTicker",
    "OvernightPolicy",
    "RankedWorker",
    "TimeWindow",
    "UtilizationBand",
    "UtilizationMetric",
    "WorkerCalendar",
    "WorkerLane",
    "WorkerOption",
    "WorkingHoursRule",
    "build_day_board",
    "calendar_from_records",
    "check",
    "check_on_date",
    "contains",
    "duration_to_width",
    "fixed_clock",
    "interval_to_grid",
    "load_roster_json",
    "mark_selectable",
    "merge",
    "next_available_slot",
    "normalize",
    "optimal_window",
    "overlaps",
    "position_to_time",
    "stack_blocks",
    "system_clock",
    "time_to_position",
    "utilization",
]
