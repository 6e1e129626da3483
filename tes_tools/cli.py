"""Command-line interface for tes_tools.

Run:
    python -m tes_tools inspect --tes TRACK.TES
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import asdict

from tes_tools.gpx_export import export_gpx
from tes_tools.inspect import export_readable_csv, inspect_fixes
from tes_tools.models import DEFAULT_TZ
from tes_tools.tes_io import load_tes, save_tes
from tes_tools.timeutils import to_zone

logger = logging.getLogger(__name__)


def _cmd_inspect(args: argparse.Namespace) -> int:
    fixes, summary = load_tes(args.tes)
    res = inspect_fixes(fixes, summary)

    print("### 文件大小")
    print(
        f"bytes={res.bytes_total}, records={res.records}, trailing_bytes={res.trailing_bytes}"
    )
    print()

    if res.start is not None and res.end is not None:
        print("### 时间范围（本地时区）")
        start = to_zone(res.start, args.tz)
        end = to_zone(res.end, args.tz)
        print(f"start={start.isoformat(sep=' ')}, end={end.isoformat(sep=' ')}")
        print()

    if res.intervals is not None:
        print("### 采样间隔（秒）")
        print(
            f"count={res.intervals.count}, min={res.intervals.min_s:.3f}, median={res.intervals.median_s:.3f}, "
            f"p95={res.intervals.p95_s:.3f}, max={res.intervals.max_s:.3f}"
        )
        print()

    print("### 经纬度范围（粗略）")
    print(f"lat=[{res.min_lat}, {res.max_lat}], lon=[{res.min_lon}, {res.max_lon}]")
    print(f"altitude=[{res.min_altitude}, {res.max_altitude}]")
    print(f"track_length={res.track_length_m / 1000.0:.3f} km")
    print()

    print("### 标记点 / 重复时间戳")
    print(f"markers={res.markers}, duplicates_time={res.duplicates_time}")
    print()

    print("### raw_flags 分布")
    for flags, count in res.flags_histogram.items():
        print(f"0x{flags:04x}: {count}")
    print()

    if args.json:
        import json

        payload = asdict(res)
        payload["flags_histogram"] = {f"0x{k:04x}": v for k, v in res.flags_histogram.items()}
        print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
    return 0


def _cmd_export_readable(args: argparse.Namespace) -> int:
    fixes, _ = load_tes(args.tes)
    export_readable_csv(fixes, args.out, args.tz)
    print(f"已导出：{args.out}（records={len(fixes)}）")
    return 0


def _cmd_export_gpx(args: argparse.Namespace) -> int:
    fixes, _ = load_tes(args.tes)
    export_gpx(fixes, args.out, name=args.name)
    print(f"已导出：{args.out}（records={len(fixes)}）")
    return 0


def _cmd_markers(args: argparse.Namespace) -> int:
    fixes, _ = load_tes(args.tes)
    hit = 0
    for i, fx in enumerate(fixes):
        if not fx.marker:
            continue
        hit += 1
        t = to_zone(fx.timestamp, args.tz)
        print(f"{i}\t{t.isoformat(sep=' ')}\t{fx.latitude:.7f}\t{fx.longitude:.7f}\t{fx.altitude}")
    print(f"标记点={hit} / 总记录={len(fixes)}", file=sys.stderr)
    return 0


def _cmd_set_marker(args: argparse.Namespace) -> int:
    fixes, _ = load_tes(args.tes)
    bad = [i for i in args.index if not 0 <= i < len(fixes)]
    if bad:
        print(f"记录下标越界：{bad}（共 {len(fixes)} 条记录）", file=sys.stderr)
        return 2

    for i in args.index:
        fixes[i].marker = args.marker
    written = save_tes(fixes, args.out)
    state = "设置" if args.marker else "清除"
    print(f"已{state} {len(set(args.index))} 个标记，写出：{args.out}（{written} 字节）")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""

    p = argparse.ArgumentParser(prog="tes_tools")
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="日志级别",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ins = sub.add_parser("inspect", help="分析 .TES 文件的记录数/时间范围/采样间隔/标记点等")
    p_ins.add_argument("--tes", type=str, required=True, help="输入 .TES 路径")
    p_ins.add_argument("--tz", type=str, default=DEFAULT_TZ, help="显示用时区（IANA），默认 UTC")
    p_ins.add_argument("--json", action="store_true", help="额外输出JSON（便于后处理）")
    p_ins.set_defaults(func=_cmd_inspect)

    p_exp = sub.add_parser("export-readable", help="导出可读时间的轨迹点CSV")
    p_exp.add_argument("--tes", type=str, required=True, help="输入 .TES 路径")
    p_exp.add_argument("--out", type=str, default="readable.csv", help="输出CSV路径")
    p_exp.add_argument("--tz", type=str, default=DEFAULT_TZ, help="时区（IANA）")
    p_exp.set_defaults(func=_cmd_export_readable)

    p_gpx = sub.add_parser("export-gpx", help="导出 GPX（轨迹 + 标记点航点）")
    p_gpx.add_argument("--tes", type=str, required=True, help="输入 .TES 路径")
    p_gpx.add_argument("--out", type=str, default="track.gpx", help="输出 GPX 路径")
    p_gpx.add_argument("--name", type=str, default=None, help="轨迹名称")
    p_gpx.set_defaults(func=_cmd_export_gpx)

    p_mk = sub.add_parser("markers", help="列出按过标记键的记录")
    p_mk.add_argument("--tes", type=str, required=True, help="输入 .TES 路径")
    p_mk.add_argument("--tz", type=str, default=DEFAULT_TZ, help="时区（IANA）")
    p_mk.set_defaults(func=_cmd_markers)

    p_sm = sub.add_parser("set-marker", help="设置/清除指定记录的标记位并重新写出 .TES")
    p_sm.add_argument("--tes", type=str, required=True, help="输入 .TES 路径")
    p_sm.add_argument("--index", type=int, nargs="+", required=True, help="记录下标（从0开始）")
    grp = p_sm.add_mutually_exclusive_group(required=True)
    grp.add_argument("--on", dest="marker", action="store_true", help="设置标记")
    grp.add_argument("--off", dest="marker", action="store_false", help="清除标记")
    p_sm.add_argument("--out", type=str, required=True, help="输出 .TES 路径（可与输入相同）")
    p_sm.set_defaults(func=_cmd_set_marker)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return int(args.func(args))
    except OSError as exc:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"读写文件失败：{exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
