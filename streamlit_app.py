from __future__ import annotations

import csv
import io
from pathlib import Path

import streamlit as st

from tes_tools.inspect import READABLE_FIELDS, inspect_fixes, readable_rows
from tes_tools.models import DEFAULT_TZ, GpsFix
from tes_tools.tes_io import TesSummary, load_tes
from tes_tools.timeutils import to_zone


def _hhmmss(seconds: float) -> str:
    s = int(round(max(0.0, seconds)))
    h = s // 3600
    m = (s % 3600) // 60
    sec = s % 60
    return f"{h:02d}:{m:02d}:{sec:02d}"


@st.cache_data(show_spinner=False)
def _load_bytes(data: bytes) -> tuple[list[GpsFix], TesSummary]:
    return load_tes(io.BytesIO(data))


def _rows_to_csv(rows: list[dict[str, object]]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=READABLE_FIELDS)
    w.writeheader()
    w.writerows(rows)
    return buf.getvalue()


def main() -> None:
    st.set_page_config(page_title=".TES 轨迹查看", layout="wide")
    st.title(".TES 轨迹查看：记录、标记点与地图")

    with st.sidebar:
        st.subheader("数据与时区")
        tz_name = st.text_input("时区（IANA）", value=DEFAULT_TZ)
        tes_path = st.text_input(".TES 路径", value="sample_data/TRACK.TES")
        uploaded = st.file_uploader("或直接上传 .TES 文件", type=["tes", "TES"])
        only_markers = st.checkbox("表格只显示标记点", value=False)

    if uploaded is not None:
        data = uploaded.getvalue()
        source_name = uploaded.name
    else:
        p = Path(tes_path)
        if not p.exists():
            st.error(f"找不到文件：{tes_path!r}。可以先运行 scripts/generate_sample_tes.py 生成示例数据。")
            return
        data = p.read_bytes()
        source_name = p.name

    try:
        fixes, summary = _load_bytes(data)
        res = inspect_fixes(fixes, summary)
        rows = readable_rows(fixes, tz_name)
    except Exception as exc:
        st.exception(exc)
        return

    st.subheader(f"汇总：{source_name}")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("记录数", str(res.records))
    c2.metric("标记点", str(res.markers))
    c3.metric("轨迹长度", f"{res.track_length_m / 1000.0:.2f} km")
    if res.start is not None and res.end is not None:
        c4.metric("时长", _hhmmss((res.end - res.start).total_seconds()))
        start = to_zone(res.start, tz_name)
        end = to_zone(res.end, tz_name)
        st.caption(f"时间范围：{start.isoformat(sep=' ')} ~ {end.isoformat(sep=' ')}")
    if res.trailing_bytes:
        st.warning(f"文件末尾有 {res.trailing_bytes} 字节不足一条记录，已忽略。")

    if fixes:
        st.subheader("地图")
        st.map(
            {
                "latitude": [f.latitude for f in fixes],
                "longitude": [f.longitude for f in fixes],
            }
        )

    with st.expander("raw_flags 分布", expanded=False):
        st.dataframe(
            [{"raw_flags": f"0x{k:04x}", "count": v} for k, v in res.flags_histogram.items()],
            use_container_width=True,
        )

    st.subheader("明细")
    shown = [r for r in rows if r["marker"]] if only_markers else rows
    st.dataframe(shown, use_container_width=True, height=520)
    st.download_button(
        "下载可读 CSV",
        data=_rows_to_csv(rows),
        file_name=f"{Path(source_name).stem}_readable.csv",
        mime="text/csv",
    )

    st.caption("说明：时间按记录中的 UTC 解码后换算到所选时区；高度单位未知，按原始数值显示。")


if __name__ == "__main__":
    main()
