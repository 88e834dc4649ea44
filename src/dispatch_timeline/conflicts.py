"""Layer 2: conflict detector deciding whether a candidate is schedulable.

Availability failure is reported before booking overlap, so user-facing
messages have a stable precedence. Overnight candidates follow an explicit
policy; the default defers them to the server as "needs review".
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Sequence, Union

from dispatch_timeline.intervals import contains, overlaps, same_day_leg, split_overnight
from dispatch_timeline.types import BookedInterval, ConflictReason, ConflictResult, Interval

if TYPE_CHECKING:
    from dispatch_timeline.calendar import WorkerCalendar

logger = logging.getLogger(__name__)

Booking = Union[Interval, BookedInterval]

SCHEDULABLE = ConflictResult(schedulable=True, reason=ConflictReason.NONE)


class OvernightPolicy(str, Enum):
    """How candidates that cross midnight are validated client-side.

    CONSERVATIVE: never schedulable here; flagged for server-side review.
    SPLIT: validate [start, 1440) and [0, end) against each date's own data.
    """

    CONSERVATIVE = "conservative"
    SPLIT = "split"


def interval_of(booking: Booking) -> Interval:
    if isinstance(booking, BookedInterval):
        return booking.interval
    return booking


def _as_booked(booking: Booking) -> BookedInterval:
    if isinstance(booking, BookedInterval):
        return booking
    return BookedInterval(job_id="", title="", interval=booking)


def _active(booked: Sequence[Booking], exclude_job_id: str | None) -> list[Booking]:
    if exclude_job_id is None:
        return list(booked)
    return [
        b for b in booked
        if not (isinstance(b, BookedInterval) and b.job_id == exclude_job_id)
    ]


def _check_leg(
    leg: Interval,
    availability: Sequence[Interval],
    booked: Sequence[Booking],
) -> ConflictResult:
    """Validate one same-day leg."""
    if not any(contains(slot, leg) for slot in availability):
        return ConflictResult(False, ConflictReason.OUTSIDE_AVAILABILITY)

    # Bookings that cross midnight only occupy their same-day leg here
    clashes = tuple(
        _as_booked(b) for b in booked
        if overlaps(same_day_leg(interval_of(b)), leg)
    )
    if clashes:
        return ConflictResult(False, ConflictReason.OVERLAPS_BOOKING, clashes)
    return SCHEDULABLE


def _needs_review(candidate: Interval) -> ConflictResult:
    logger.warning(
        "Overnight candidate %d-%d deferred to server-side validation",
        candidate.start, candidate.end,
    )
    return ConflictResult(
        schedulable=False,
        reason=ConflictReason.OUTSIDE_AVAILABILITY,
        needs_review=True,
    )


def check(
    candidate: Interval,
    availability: Sequence[Interval],
    booked: Sequence[Booking] = (),
    *,
    policy: OvernightPolicy = OvernightPolicy.CONSERVATIVE,
    next_day_availability: Sequence[Interval] | None = None,
    next_day_booked: Sequence[Booking] = (),
    exclude_job_id: str | None = None,
) -> ConflictResult:
    """Decide whether ``candidate`` can be booked.

    Same-day candidate: schedulable iff some availability interval contains
    it and no booking overlaps it.

    Overnight candidate (end <= start): under CONSERVATIVE it is reported as
    not schedulable with ``needs_review=True``. Under SPLIT both legs are
    validated independently; without ``next_day_availability`` the result
    falls back to the conservative one.

    ``exclude_job_id`` ignores that booking, for rescheduling a job in place.
    """
    booked = _active(booked, exclude_job_id)

    if not candidate.is_overnight:
        return _check_leg(candidate, availability, booked)

    if policy is OvernightPolicy.CONSERVATIVE or next_day_availability is None:
        return _needs_review(candidate)

    first, second = split_overnight(candidate)
    results = [_check_leg(first, availability, booked)]
    if second is not None:
        next_booked = _active(next_day_booked, exclude_job_id)
        results.append(_check_leg(second, next_day_availability, next_booked))

    for result in results:
        if result.reason is ConflictReason.OUTSIDE_AVAILABILITY:
            return result
    conflicts = tuple(c for result in results for c in result.conflicts)
    if conflicts:
        return ConflictResult(False, ConflictReason.OVERLAPS_BOOKING, conflicts)
    return SCHEDULABLE


def check_on_date(
    candidate: Interval,
    calendar: WorkerCalendar,
    d: date,
    booked: Sequence[Booking] = (),
    *,
    policy: OvernightPolicy = OvernightPolicy.CONSERVATIVE,
    next_day_booked: Sequence[Booking] = (),
    exclude_job_id: str | None = None,
) -> ConflictResult:
    """Resolve the worker's availability for ``d`` (and d+1) and check."""
    next_day_availability = None
    if candidate.is_overnight and policy is OvernightPolicy.SPLIT:
        next_day_availability = calendar.availability_for_date(d + timedelta(days=1))
    return check(
        candidate,
        calendar.availability_for_date(d),
        booked,
        policy=policy,
        next_day_availability=next_day_availability,
        next_day_booked=next_day_booked,
        exclude_job_id=exclude_job_id,
    )
