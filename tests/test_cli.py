from __future__ import annotations

import json
from pathlib import Path

import pytest

from tes_tools.cli import build_parser, main
from tes_tools.tes_io import load_tes


def test_inspect_prints_summary(tes_file: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["inspect", "--tes", str(tes_file)]) == 0
    out = capsys.readouterr().out
    assert "records=4, trailing_bytes=3" in out
    assert "markers=1" in out
    assert "0x0002: 1" in out


def test_inspect_json(tes_file: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["inspect", "--tes", str(tes_file), "--json"]) == 0
    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{") :])
    assert payload["records"] == 4
    assert payload["flags_histogram"] == {"0x0000": 3, "0x0002": 1}


def test_export_readable(tmp_path: Path, tes_file: Path):
    out = tmp_path / "readable.csv"
    assert main(["export-readable", "--tes", str(tes_file), "--out", str(out)]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1 + 4


def test_export_gpx(tmp_path: Path, tes_file: Path):
    out = tmp_path / "track.gpx"
    assert main(["export-gpx", "--tes", str(tes_file), "--out", str(out), "--name", "demo"]) == 0
    text = out.read_text(encoding="utf-8")
    assert "<trkpt" in text
    assert "marker 1" in text


def test_markers_lists_only_marked(tes_file: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["markers", "--tes", str(tes_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("3\t2017-11-06 12:11:35+00:00")


def test_set_marker_on_and_off(tmp_path: Path, tes_file: Path):
    out = tmp_path / "edited.TES"
    assert main(["set-marker", "--tes", str(tes_file), "--index", "0", "1", "--on", "--out", str(out)]) == 0
    fixes, summary = load_tes(out)
    assert [f.marker for f in fixes] == [True, True, False, True]
    assert summary.trailing_bytes == 0

    assert main(["set-marker", "--tes", str(out), "--index", "3", "--off", "--out", str(out)]) == 0
    fixes, _ = load_tes(out)
    assert [f.marker for f in fixes] == [True, True, False, False]
    assert [f.raw_flags & 0x2 for f in fixes] == [2, 2, 0, 0]


def test_set_marker_bad_index(tmp_path: Path, tes_file: Path):
    out = tmp_path / "edited.TES"
    assert main(["set-marker", "--tes", str(tes_file), "--index", "9", "--on", "--out", str(out)]) == 2
    assert not out.exists()


def test_missing_file_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["inspect", "--tes", str(tmp_path / "nope.TES")]) == 1
    assert "nope.TES" in capsys.readouterr().err


def test_set_marker_requires_on_or_off(tes_file: Path):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["set-marker", "--tes", str(tes_file), "--index", "0", "--out", "x"])
