"""Layer 3: optimal window selector, the smallest grid covering a day."""

from __future__ import annotations

import logging
from typing import Iterable

from dispatch_timeline.intervals import same_day_leg
from dispatch_timeline.types import Interval, TimeWindow

logger = logging.getLogger(__name__)

BASELINE_START_HOUR = 7
BASELINE_END_HOUR = 19
PAD_HOURS = 1
MIN_START_HOUR = 6
MAX_END_HOUR = 22

DEFAULT_WINDOW = TimeWindow(BASELINE_START_HOUR, BASELINE_END_HOUR)


def _start_hour(iv: Interval) -> int:
    return iv.start // 60


def _end_hour(iv: Interval) -> int:
    # Overnight intervals run to midnight on this day's grid.
    return -(-same_day_leg(iv).end // 60)


def optimal_window(
    shifts: Iterable[Interval],
    jobs: Iterable[Interval] = (),
) -> TimeWindow:
    """Minimal padded window covering every shift and job of one day.

    earliest = min(7, earliest start) - 1, clamped to >= 6
    latest   = max(19, latest end) + 1, clamped to <= 22
    With no shifts and no jobs the fixed default 07:00-19:00 is returned.
    """
    intervals = list(shifts) + list(jobs)
    if not intervals:
        return DEFAULT_WINDOW

    earliest = min([BASELINE_START_HOUR] + [_start_hour(iv) for iv in intervals])
    latest = max([BASELINE_END_HOUR] + [_end_hour(iv) for iv in intervals])

    earliest = max(MIN_START_HOUR, earliest - PAD_HOURS)
    latest = min(MAX_END_HOUR, latest + PAD_HOURS)

    window = TimeWindow(earliest, latest)
    logger.debug(
        "Selected window %02d:00-%02d:00 for %d intervals",
        window.start_hour, window.end_hour, len(intervals),
    )
    return window
