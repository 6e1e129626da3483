"""Reading and writing of .TES track logs.

A .TES file is a flat sequence of 16-byte little-endian records, no header or
footer:

    offset  size  field
    0       2     flags (u16), bit 1 = marker
    2       4     packed UTC date (u32), see bitfields.DATE_FIELD_WIDTHS
    6       4     latitude (i32), 1e-7 degrees
    10      4     longitude (i32), 1e-7 degrees
    14      2     altitude (u16), units unknown
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator

from tes_tools.bitfields import DATE_FIELD_WIDTHS, pack_fields, unpack_fields
from tes_tools.models import COORD_SCALE, MARKER_BIT, RECORD_SIZE, YEAR_BASE, GpsFix
from tes_tools.timeutils import as_utc

logger = logging.getLogger(__name__)

_RECORD = struct.Struct("<HIiiH")


@dataclass(frozen=True, slots=True)
class TesSummary:
    """Quick summary of a decoded file."""

    bytes_total: int
    records: int
    trailing_bytes: int


def _decode_date(word: int) -> datetime:
    sec, minute, hour, day, month, year_offset = unpack_fields(word, DATE_FIELD_WIDTHS)
    # 非法日期（例如全零记录的 month=0/day=0）向上一级进位，不报错
    year = YEAR_BASE + year_offset + (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=UTC) + timedelta(
        days=day - 1, hours=hour, minutes=minute, seconds=sec
    )


def _encode_date(dt: datetime) -> int:
    t = as_utc(dt)
    return pack_fields(
        (t.second, t.minute, t.hour, t.day, t.month, t.year - YEAR_BASE),
        DATE_FIELD_WIDTHS,
    )


def _decode_position(value: int) -> float:
    return value / COORD_SCALE


def _encode_position(degrees: float) -> int:
    value = round(degrees * COORD_SCALE)
    return ((value + 0x8000_0000) & 0xFFFF_FFFF) - 0x8000_0000


def _decode_at(data: bytes | memoryview, offset: int) -> GpsFix:
    flags, date_word, lat, lon, alt = _RECORD.unpack_from(data, offset)
    return GpsFix(
        latitude=_decode_position(lat),
        longitude=_decode_position(lon),
        timestamp=_decode_date(date_word),
        altitude=alt,
        marker=(flags & MARKER_BIT) != 0,
        raw_flags=flags,
    )


def decode_record(data: bytes | bytearray | memoryview) -> GpsFix:
    """Decode exactly one 16-byte record.

    Raises:
        ValueError: If data is not exactly RECORD_SIZE bytes long.
    """

    if len(data) != RECORD_SIZE:
        raise ValueError(f"记录长度应为 {RECORD_SIZE} 字节，实际 {len(data)}")
    return _decode_at(data, 0)


def encode_record(fix: GpsFix) -> bytes:
    """Encode one fix into its 16-byte wire form.

    The marker bit of the flags is regenerated from ``fix.marker``; every other
    bit of ``fix.raw_flags`` is written unchanged.
    """

    if fix.marker:
        flags = fix.raw_flags | MARKER_BIT
    else:
        flags = fix.raw_flags & ~MARKER_BIT
    return _RECORD.pack(
        flags & 0xFFFF,
        _encode_date(fix.timestamp),
        _encode_position(fix.latitude),
        _encode_position(fix.longitude),
        int(fix.altitude) & 0xFFFF,
    )


def iter_fixes(data: bytes | bytearray | memoryview) -> Iterator[GpsFix]:
    """Yield fixes from an in-memory buffer in file order.

    Stops as soon as fewer than RECORD_SIZE bytes remain; a partial trailing
    record is ignored.
    """

    end = len(data) - len(data) % RECORD_SIZE
    for offset in range(0, end, RECORD_SIZE):
        yield _decode_at(data, offset)


def _read_all(source: bytes | bytearray | memoryview | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.read()


def decode_all(source: bytes | bytearray | memoryview | BinaryIO) -> list[GpsFix]:
    """Decode every complete record of a .TES byte stream.

    Args:
        source: Raw bytes, or a binary stream that is read to the end first.

    Returns:
        Fixes in file order. Empty input gives an empty list. Up to 15 dangling
        bytes at the end are dropped without complaint.

    Raises:
        OSError: Whatever the stream raises while being read; no partial result.
    """

    data = _read_all(source)
    fixes = list(iter_fixes(data))
    logger.debug("decoded %s records from %s bytes", len(fixes), len(data))
    return fixes


def encode_all(fixes: Iterable[GpsFix], sink: BinaryIO | None = None) -> bytes:
    """Encode fixes back to .TES bytes.

    Args:
        fixes: Fixes in the order they should appear in the file.
        sink: Optional binary stream; receives the whole buffer in a single write.

    Returns:
        The encoded bytes.

    Raises:
        OSError: Whatever the sink raises on write.
    """

    buf = bytearray()
    count = 0
    for fix in fixes:
        buf += encode_record(fix)
        count += 1
    data = bytes(buf)
    if sink is not None:
        sink.write(data)
    logger.debug("encoded %s records into %s bytes", count, len(data))
    return data


def load_tes(source: str | Path | BinaryIO) -> tuple[list[GpsFix], TesSummary]:
    """Load all fixes of a .TES file into memory.

    Args:
        source: File path, or an open binary stream.

    Returns:
        (fixes, summary)
    """

    if isinstance(source, (str, Path)):
        data = Path(source).read_bytes()
    else:
        data = _read_all(source)

    fixes = decode_all(data)
    summary = TesSummary(
        bytes_total=len(data),
        records=len(fixes),
        trailing_bytes=len(data) - len(fixes) * RECORD_SIZE,
    )
    if summary.trailing_bytes > 0:
        logger.info("文件末尾有 %s 字节不足一条记录，已忽略", summary.trailing_bytes)
    return fixes, summary


def save_tes(fixes: Iterable[GpsFix], target: str | Path | BinaryIO) -> int:
    """Write fixes as a .TES file.

    Args:
        fixes: Fixes to write.
        target: File path, or an open binary stream. An existing file is only
            replaced once every fix has been encoded.

    Returns:
        Number of bytes written.
    """

    if isinstance(target, (str, Path)):
        data = encode_all(fixes)
        Path(target).write_bytes(data)
    else:
        data = encode_all(fixes, target)
    return len(data)
