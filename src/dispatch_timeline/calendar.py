"""Layer 1: WorkerCalendar, resolving a worker's effective availability.

Recurring weekly rules define the normal shifts. A date exception fully
supersedes them for that date. Nothing is cached: every query recomputes
from the rules, so callers may memoize on (worker_id, date) if they wish.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Iterator

from dispatch_timeline.intervals import normalize, split_overnight, total_minutes
from dispatch_timeline.types import AvailabilityException, Interval, WorkingHoursRule

logger = logging.getLogger(__name__)


class WorkerCalendar:
    """Horizon-free availability calendar for one worker.

    Rules are keyed by ``date.weekday()`` (0=Mon). Overnight rules
    (end <= start) contribute the part before midnight to their own
    weekday and carry the remainder over to the following day.
    """

    def __init__(
        self,
        worker_id: str,
        rules: Iterable[WorkingHoursRule] = (),
        exceptions: Iterable[AvailabilityException] = (),
        name: str | None = None,
    ) -> None:
        self.worker_id = worker_id
        self.name = name or worker_id

        # weekday -> intervals sorted by start
        self._rules: dict[int, list[Interval]] = {}
        for rule in rules:
            self._rules.setdefault(rule.weekday, []).append(rule.interval)
        for intervals in self._rules.values():
            intervals.sort(key=lambda iv: (iv.start, iv.end))

        # Later entries for the same date replace earlier ones
        self._exceptions: dict[date, AvailabilityException] = {}
        for exc in exceptions:
            self._exceptions[exc.date] = exc

    @property
    def rules(self) -> list[WorkingHoursRule]:
        return [
            WorkingHoursRule(weekday, iv)
            for weekday in sorted(self._rules)
            for iv in self._rules[weekday]
        ]

    @property
    def exceptions(self) -> list[AvailabilityException]:
        return [self._exceptions[d] for d in sorted(self._exceptions)]

    def exception_for(self, d: date) -> AvailabilityException | None:
        return self._exceptions.get(d)

    def availability_for_date(self, d: date) -> list[Interval]:
        """Effective availability: ordered, non-overlapping intervals.

        1. all-day unavailable exception -> []
        2. exception with a replacement interval -> [that interval] only
        3. otherwise the recurring rules for the weekday, plus carry-over
           from an overnight rule on the previous day
        """
        exc = self._exceptions.get(d)
        if exc is not None and exc.overrides:
            return self._resolve_exception(exc)
        return self._resolve_rules(d)

    def _resolve_rules(self, d: date) -> list[Interval]:
        periods: list[Interval] = []

        for iv in self._rules.get(d.weekday(), []):
            first, _ = split_overnight(iv)
            periods.append(first)

        prev_weekday = (d - timedelta(days=1)).weekday()
        for iv in self._rules.get(prev_weekday, []):
            _, second = split_overnight(iv)
            if second is not None:
                periods.append(second)

        return normalize(periods)

    def _resolve_exception(self, exc: AvailabilityException) -> list[Interval]:
        if exc.all_day_unavailable:
            logger.debug(
                "Worker %s unavailable all day on %s (%s)",
                self.worker_id, exc.date, exc.reason or "no reason",
            )
            return []
        # overrides guarantees a replacement interval here
        first, _ = split_overnight(exc.interval)  # type: ignore[arg-type]
        logger.debug(
            "Worker %s availability on %s overridden to %d-%d",
            self.worker_id, exc.date, first.start, first.end,
        )
        return [first]

    def is_available_on(self, d: date) -> bool:
        return bool(self.availability_for_date(d))

    def available_minutes(self, d: date) -> int:
        return total_minutes(self.availability_for_date(d))

    def availability_in_range(
        self, start: date, end: date
    ) -> Iterator[tuple[date, list[Interval]]]:
        """Yield (date, availability) for each date in [start, end)."""
        current = start
        while current < end:
            yield current, self.availability_for_date(current)
            current += timedelta(days=1)

    def available_minutes_between(self, start: date, end: date) -> int:
        """Total available minutes over the dates in [start, end)."""
        return sum(
            total_minutes(intervals)
            for _, intervals in self.availability_in_range(start, end)
        )
