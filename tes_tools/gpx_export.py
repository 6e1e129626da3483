"""GPX export of decoded fixes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import gpxpy
import gpxpy.gpx

from tes_tools.models import GpsFix
from tes_tools.timeutils import as_utc

logger = logging.getLogger(__name__)


def build_gpx(fixes: Sequence[GpsFix], name: str | None = None) -> gpxpy.gpx.GPX:
    """Build a GPX document with one track segment.

    Marker fixes are additionally emitted as waypoints named "marker N", N being
    the 1-based marker count.
    """

    gpx = gpxpy.gpx.GPX()
    gpx_track = gpxpy.gpx.GPXTrack(name=name)
    gpx.tracks.append(gpx_track)
    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    marker_no = 0
    for fx in fixes:
        t = as_utc(fx.timestamp)
        # 高度单位未知，原样写入 elevation
        gpx_segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                latitude=fx.latitude,
                longitude=fx.longitude,
                elevation=fx.altitude,
                time=t,
            )
        )
        if fx.marker:
            marker_no += 1
            gpx.waypoints.append(
                gpxpy.gpx.GPXWaypoint(
                    latitude=fx.latitude,
                    longitude=fx.longitude,
                    elevation=fx.altitude,
                    time=t,
                    name=f"marker {marker_no}",
                )
            )
    return gpx


def export_gpx(fixes: Sequence[GpsFix], out_path: str | Path, name: str | None = None) -> None:
    """Write fixes to a GPX 1.1 file."""

    gpx = build_gpx(fixes, name=name)
    p = Path(out_path)
    p.write_text(gpx.to_xml(), encoding="utf-8")
    logger.debug("wrote %s track points, %s waypoints to %s", len(fixes), len(gpx.waypoints), p)
