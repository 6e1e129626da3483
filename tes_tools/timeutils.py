"""Timezone helpers and sampling-interval statistics for UTC fix timestamps."""

from __future__ import annotations

import statistics
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Iterable

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def tzinfo_from_name(tz_name: str) -> tzinfo:
    """Look up an IANA timezone.

    Raises:
        ValueError: If the name is unknown on this system.
    """

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"无效时区：{tz_name!r}。例如可用：UTC、America/New_York") from exc


def as_utc(dt: datetime) -> datetime:
    """Return dt in UTC. Naive datetimes are taken to already be UTC."""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_zone(dt: datetime, tz_name: str) -> datetime:
    """Show a fix timestamp in the named timezone."""

    return as_utc(dt).astimezone(tzinfo_from_name(tz_name))


@dataclass(frozen=True, slots=True)
class IntervalStats:
    """Gaps between consecutive fixes, in seconds."""

    count: int
    min_s: float
    median_s: float
    p95_s: float
    max_s: float


def interval_stats(timestamps: Iterable[datetime]) -> IntervalStats | None:
    """Summarise the logging interval.

    Timestamps are sorted first; returns None with fewer than two of them.
    """

    ordered = sorted(as_utc(t) for t in timestamps)
    gaps = sorted((b - a).total_seconds() for a, b in zip(ordered, ordered[1:]))
    if not gaps:
        return None
    return IntervalStats(
        count=len(gaps),
        min_s=gaps[0],
        median_s=statistics.median(gaps),
        p95_s=gaps[int(0.95 * (len(gaps) - 1))],
        max_s=gaps[-1],
    )
