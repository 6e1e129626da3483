"""Data models for decoded .TES records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

from tes_tools.timeutils import as_utc

RECORD_SIZE: Final[int] = 16
COORD_SCALE: Final[float] = 10_000_000.0
YEAR_BASE: Final[int] = 2000

# Bit 1 of the flags word is the only bit with known meaning.
MARKER_BIT: Final[int] = 0x2


@dataclass(slots=True)
class GpsFix:
    """A single fix from the logger.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        timestamp: UTC datetime, second resolution.
        altitude: Raw 16-bit altitude value. Units are unknown.
        marker: True if the marker button was pressed at this fix.
        raw_flags: All 16 bits of the record flags as read. Bit 0 might be a
            "first record" flag; the rest are undocumented.
    """

    latitude: float
    longitude: float
    timestamp: datetime
    altitude: int = 0
    marker: bool = False
    raw_flags: int = 0

    @property
    def epoch_ms(self) -> int:
        """Unix epoch milliseconds (naive timestamps count as UTC)."""

        return int(as_utc(self.timestamp).timestamp()) * 1000


DEFAULT_TZ: Final[str] = "UTC"
