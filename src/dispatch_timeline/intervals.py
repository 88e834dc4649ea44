"""Layer 0: interval algebra on time-of-day intervals.

Pure functions. Callers reject zero or negative durations before reaching
this layer; overnight intervals are split with ``split_overnight`` first.
"""

from __future__ import annotations

from typing import Iterable

from dispatch_timeline.types import MINUTES_PER_DAY, Interval


def overlaps(a: Interval, b: Interval) -> bool:
    """True if the half-open intervals share at least one minute.

    Symmetric. A zero-length interval overlaps nothing, itself included.
    """
    if a.start == a.end or b.start == b.end:
        return False
    return a.start < b.end and a.end > b.start


def contains(outer: Interval, inner: Interval) -> bool:
    """True if ``inner`` lies entirely within ``outer``.

    A zero-length ``inner`` is only contained by an identical interval.
    """
    if inner.start == inner.end:
        return outer == inner
    return inner.start >= outer.start and inner.end <= outer.end


def merge(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort by start and fuse touching or overlapping intervals.

    Returns a new list; the input is not modified.
    """
    ordered = sorted(intervals, key=lambda iv: (iv.start, iv.end))
    merged: list[Interval] = []
    for iv in ordered:
        if merged and iv.start <= merged[-1].end:
            last = merged[-1]
            if iv.end > last.end:
                merged[-1] = Interval(last.start, iv.end)
        else:
            merged.append(iv)
    return merged


def normalize(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort by start; merge only if the list actually overlaps.

    Touching intervals in an otherwise clean list are kept as provided.
    """
    ordered = sorted(intervals, key=lambda iv: (iv.start, iv.end))
    for prev, curr in zip(ordered, ordered[1:]):
        if overlaps(prev, curr):
            return merge(ordered)
    return ordered


def split_overnight(iv: Interval) -> tuple[Interval, Interval | None]:
    """Decompose into (same-day leg, next-day leg).

    Same-day intervals return (iv, None). An overnight interval returns
    [start, 1440) and [0, end); the second leg is None when end == 0.
    """
    if not iv.is_overnight:
        return iv, None
    first = Interval(iv.start, MINUTES_PER_DAY)
    second = Interval(0, iv.end) if iv.end > 0 else None
    return first, second


def same_day_leg(iv: Interval) -> Interval:
    """The portion of ``iv`` that falls on its start date."""
    return split_overnight(iv)[0]


def clip(iv: Interval, bounds: Interval) -> Interval | None:
    """Intersection of two same-day intervals, or None if they do not overlap."""
    start = max(iv.start, bounds.start)
    end = min(iv.end, bounds.end)
    if start >= end:
        return None
    return Interval(start, end)


def subtract(base: Interval, holes: Iterable[Interval]) -> list[Interval]:
    """Portions of ``base`` not covered by any of ``holes``."""
    remaining = [base]
    for hole in merge(holes):
        next_remaining: list[Interval] = []
        for piece in remaining:
            if not overlaps(piece, hole):
                next_remaining.append(piece)
                continue
            if piece.start < hole.start:
                next_remaining.append(Interval(piece.start, hole.start))
            if hole.end < piece.end:
                next_remaining.append(Interval(hole.end, piece.end))
        remaining = next_remaining
    return remaining


def total_minutes(intervals: Iterable[Interval]) -> int:
    """Sum of durations. Overnight intervals count through midnight."""
    return sum(iv.duration for iv in intervals)
