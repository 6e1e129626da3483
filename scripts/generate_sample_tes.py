from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from tes_tools.models import GpsFix
from tes_tools.tes_io import save_tes


@dataclass(frozen=True, slots=True)
class Cluster:
    name: str
    lat: float
    lon: float


def generate_fixes(
    *,
    rows: int,
    seed: int,
    start_utc: datetime,
    clusters: list[Cluster],
    marker_rate: float,
) -> list[GpsFix]:
    """Generate a fake track with realistic-ish movement, as the logger would write it."""

    rng = random.Random(seed)
    cur = start_utc.replace(tzinfo=UTC, microsecond=0)
    cluster = rng.choice(clusters)
    lat, lon = cluster.lat, cluster.lon
    alt = rng.randint(10, 200)

    out: list[GpsFix] = []
    for i in range(rows):
        # Occasionally jump to another area (logger was switched off in between)
        if rng.random() < 0.01:
            cluster = rng.choice(clusters)
            lat, lon = cluster.lat, cluster.lon
            cur = cur + timedelta(minutes=rng.uniform(30, 90))

        # Walk: a few metres per second, 1-second logging interval
        lat += rng.uniform(-0.00005, 0.00005)
        lon += rng.uniform(-0.00005, 0.00005)
        alt = max(0, alt + rng.randint(-2, 2))
        cur = cur + timedelta(seconds=1)

        marker = rng.random() < marker_rate
        out.append(
            GpsFix(
                latitude=round(lat, 7),
                longitude=round(lon, 7),
                timestamp=cur.replace(microsecond=0),
                altitude=alt,
                marker=marker,
                # Device sets bit 0 on the first record of a log
                raw_flags=0x1 if i == 0 else 0x0,
            )
        )
    return out


def main() -> int:
    p = argparse.ArgumentParser(description="Generate a fake .TES track for demo/testing (privacy-safe).")
    p.add_argument("--out", type=str, default="sample_data/TRACK.TES", help="Output .TES path")
    p.add_argument("--rows", type=int, default=500, help="Number of records")
    p.add_argument("--seed", type=int, default=42, help="Random seed (reproducible)")
    p.add_argument("--marker-rate", type=float, default=0.01, help="Probability a record carries a marker")
    p.add_argument(
        "--start",
        type=str,
        default="2017-11-06 12:00:00",
        help="Start time in UTC, e.g. '2017-11-06 12:00:00'",
    )
    args = p.parse_args()

    start_utc = datetime.fromisoformat(args.start)
    clusters = [
        Cluster("florida_trail", 30.1793568, -82.6911552),
        Cluster("gainesville", 29.6516344, -82.3248262),
        Cluster("tallahassee", 30.4382559, -84.2807329),
    ]

    fixes = generate_fixes(
        rows=args.rows,
        seed=args.seed,
        start_utc=start_utc,
        clusters=clusters,
        marker_rate=args.marker_rate,
    )
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    written = save_tes(fixes, out_path)

    print(f"Generated: {out_path} (records={len(fixes)}, bytes={written}, seed={args.seed})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
