"""Marks an externally ranked worker list as selectable or not.

The recommendation source scores and orders workers; that order is kept
as-is. This module only layers conflict detection on top. Fetching each
worker's day schedule is asynchronous I/O owned by the caller's source;
the marking itself is pure.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Protocol, Sequence

from dispatch_timeline.conflicts import OvernightPolicy
from dispatch_timeline.schedule import WorkerDaySchedule
from dispatch_timeline.types import ConflictReason, ConflictResult, Interval

logger = logging.getLogger(__name__)

NO_SCHEDULE = ConflictResult(False, ConflictReason.OUTSIDE_AVAILABILITY)


@dataclass(frozen=True)
class RankedWorker:
    """One opaque entry of the recommendation list."""

    worker_id: str
    name: str = ""
    score: float | None = None
    details: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkerOption:
    """A ranked worker with the outcome of checking the candidate against them."""

    worker: RankedWorker
    result: ConflictResult
    schedule: WorkerDaySchedule | None = None

    @property
    def selectable(self) -> bool:
        return self.result.schedulable


class ScheduleSource(Protocol):
    """The booked-intervals source: authoritative day schedules."""

    async def fetch_day(self, worker_id: str, d: date) -> WorkerDaySchedule: ...


def mark_selectable(
    ranked: Sequence[RankedWorker],
    schedules: Mapping[str, WorkerDaySchedule | None],
    candidate: Interval,
    *,
    policy: OvernightPolicy = OvernightPolicy.CONSERVATIVE,
    exclude_job_id: str | None = None,
) -> list[WorkerOption]:
    """Check ``candidate`` for every ranked worker, keeping the given order.

    A worker whose schedule is missing (not loaded, or the fetch failed)
    is not selectable.
    """
    options: list[WorkerOption] = []
    for worker in ranked:
        schedule = schedules.get(worker.worker_id)
        if schedule is None:
            options.append(WorkerOption(worker, NO_SCHEDULE))
            continue
        result = schedule.check(candidate, policy=policy, exclude_job_id=exclude_job_id)
        options.append(WorkerOption(worker, result, schedule))
    return options


async def fetch_schedules(
    source: ScheduleSource,
    worker_ids: Sequence[str],
    d: date,
) -> dict[str, WorkerDaySchedule | None]:
    """Fetch every worker's day concurrently. A failed fetch maps to None."""

    async def _one(worker_id: str) -> WorkerDaySchedule | None:
        try:
            return await source.fetch_day(worker_id, d)
        except Exception:
            logger.exception("Failed to fetch schedule for worker %s on %s", worker_id, d)
            return None

    results = await asyncio.gather(*(_one(w) for w in worker_ids))
    return dict(zip(worker_ids, results))
