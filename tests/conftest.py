from __future__ import annotations

from pathlib import Path

import pytest

from tests._data import MARKER_RECORD, THREE_RECORDS


@pytest.fixture
def three_records() -> bytes:
    return THREE_RECORDS


@pytest.fixture
def tes_file(tmp_path: Path) -> Path:
    """Three plain fixes plus one marker fix, with 3 bytes of trailing junk."""

    p = tmp_path / "TRACK.TES"
    p.write_bytes(THREE_RECORDS + MARKER_RECORD + b"\xff\xff\xff")
    return p
