"""Inspect decoded fixes and export a readable time series."""

from __future__ import annotations

import csv
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from tes_tools.geo import track_length_m
from tes_tools.models import GpsFix
from tes_tools.tes_io import TesSummary
from tes_tools.timeutils import IntervalStats, as_utc, interval_stats, to_zone


@dataclass(frozen=True, slots=True)
class InspectResult:
    """High-level .TES inspection result."""

    records: int
    bytes_total: int
    trailing_bytes: int
    start: datetime | None
    end: datetime | None
    intervals: IntervalStats | None
    min_lat: float | None
    max_lat: float | None
    min_lon: float | None
    max_lon: float | None
    min_altitude: int | None
    max_altitude: int | None
    markers: int
    duplicates_time: int
    track_length_m: float
    # raw_flags value -> count
    flags_histogram: dict[int, int] = field(default_factory=dict)


def inspect_fixes(fixes: Sequence[GpsFix], summary: TesSummary | None = None) -> InspectResult:
    """Inspect already-loaded fixes.

    Args:
        fixes: Decoded fixes in file order.
        summary: Optional load summary, used for the byte counts.
    """

    bytes_total = summary.bytes_total if summary is not None else 0
    trailing = summary.trailing_bytes if summary is not None else 0

    if not fixes:
        return InspectResult(
            records=0,
            bytes_total=bytes_total,
            trailing_bytes=trailing,
            start=None,
            end=None,
            intervals=None,
            min_lat=None,
            max_lat=None,
            min_lon=None,
            max_lon=None,
            min_altitude=None,
            max_altitude=None,
            markers=0,
            duplicates_time=0,
            track_length_m=0.0,
        )

    times = sorted(as_utc(f.timestamp) for f in fixes)
    dupe = 0
    for i in range(1, len(times)):
        if times[i] == times[i - 1]:
            dupe += 1

    lats = [f.latitude for f in fixes]
    lons = [f.longitude for f in fixes]
    alts = [f.altitude for f in fixes]
    return InspectResult(
        records=len(fixes),
        bytes_total=bytes_total,
        trailing_bytes=trailing,
        start=times[0],
        end=times[-1],
        intervals=interval_stats(times),
        min_lat=min(lats),
        max_lat=max(lats),
        min_lon=min(lons),
        max_lon=max(lons),
        min_altitude=min(alts),
        max_altitude=max(alts),
        markers=sum(1 for f in fixes if f.marker),
        duplicates_time=dupe,
        track_length_m=track_length_m(fixes),
        flags_histogram=dict(sorted(Counter(f.raw_flags for f in fixes).items())),
    )


READABLE_FIELDS = [
    "index",
    "time_local",
    "time_utc",
    "epoch_ms",
    "latitude",
    "longitude",
    "altitude",
    "marker",
    "raw_flags",
]


def readable_rows(fixes: Iterable[GpsFix], tz_name: str) -> list[dict[str, object]]:
    """Flatten fixes into dict rows (same columns as the readable CSV)."""

    rows: list[dict[str, object]] = []
    for i, fx in enumerate(fixes):
        rows.append(
            {
                "index": i,
                "time_local": to_zone(fx.timestamp, tz_name).isoformat(sep=" "),
                "time_utc": as_utc(fx.timestamp).isoformat(sep=" "),
                "epoch_ms": fx.epoch_ms,
                "latitude": fx.latitude,
                "longitude": fx.longitude,
                "altitude": fx.altitude,
                "marker": int(fx.marker),
                "raw_flags": fx.raw_flags,
            }
        )
    return rows


def export_readable_csv(fixes: Iterable[GpsFix], out_path: str | Path, tz_name: str) -> None:
    """Export fixes to a human-readable CSV.

    Output columns:
        - index: position in the .TES file
        - time_local / time_utc: ISO datetimes
        - epoch_ms, latitude, longitude, altitude
        - marker (0/1), raw_flags (the full flags word)
    """

    p = Path(out_path)
    with p.open("w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=READABLE_FIELDS)
        w.writeheader()
        w.writerows(readable_rows(fixes, tz_name))
