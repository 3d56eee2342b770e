"""
Primitive operations on half-open time intervals.

All functions assume already-parsed, comparable instants. Parsing and
rejection of unreadable timestamps happen at the ingestion boundary.
"""

from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from models import TimeInterval


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Touching endpoints do not overlap: [9,10) and [10,11) are disjoint."""
    return a.start < b.end and b.start < a.end


def covers(container: TimeInterval, point: datetime) -> bool:
    return container.start <= point < container.end


def clamp_end(interval: TimeInterval, max_end: datetime) -> TimeInterval:
    return TimeInterval(start=interval.start, end=min(interval.end, max_end))


def clamp_start(interval: TimeInterval, min_start: datetime) -> TimeInterval:
    return TimeInterval(start=max(interval.start, min_start), end=interval.end)


def infer_end(
    start: datetime,
    explicit_end: Optional[datetime] = None,
    duration_minutes: Optional[int] = None,
    fallback_minutes: int = 30
) -> datetime:
    """
    Effective end of an event.

    Three tiers, in order: the stored end, start + stored duration,
    start + fallback. A duration of 0 counts as missing.
    """
    if explicit_end is not None:
        return explicit_end
    if duration_minutes:
        return start + timedelta(minutes=duration_minutes)
    return start + timedelta(minutes=fallback_minutes)


def to_wall_clock(instant: datetime, timezone: Optional[str] = None) -> datetime:
    """
    Naive local time for an instant.
    Aware instants are converted to `timezone` (or the system zone) first;
    naive ones are taken as already local.
    """
    if instant.tzinfo is None:
        return instant
    target = ZoneInfo(timezone) if timezone else None
    return instant.astimezone(target).replace(tzinfo=None)


def minutes_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 60
