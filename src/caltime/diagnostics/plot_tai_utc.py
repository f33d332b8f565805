#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import date

import caltime
from caltime import TimeScale


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "caltime[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "caltime[diagnostics]"') from e


def tai_minus_utc(d: date) -> float:
    """TAI-UTC (seconds) at 00:00 UTC of a day."""
    utc = caltime.instant(d.year, d.month, d.day, scale=TimeScale.UTC)
    tai = caltime.utc_to_tai(utc)
    return (tai.total_nanos - utc.total_nanos) / 1e9


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot TAI-UTC (seconds) across the rate era and the leap-second era.")
    p.add_argument("--y0", type=int, default=1958, help="start year")
    p.add_argument("--y1", type=int, default=date.today().year + 1, help="end year")
    p.add_argument("--step", type=int, default=10, help="sampling step in days")
    p.add_argument("--out", default="tai_utc.png", help="output image filename")
    p.add_argument("--mark-leaps", action="store_true", help="draw a vertical line at every leap second")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    d0 = date(args.y0, 1, 1).toordinal()
    d1 = date(args.y1, 1, 1).toordinal()
    ords = np.arange(d0, d1, int(args.step), dtype=np.int64)
    days = [date.fromordinal(int(o)) for o in ords]
    xs = np.array([d.year + (d.timetuple().tm_yday - 0.5) / 365.25 for d in days], dtype=float)
    ys = np.array([tai_minus_utc(d) for d in days], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.step(xs, ys, where="post", linewidth=2, label="TAI - UTC")
    if args.mark_leaps:
        for d in caltime.leap_second_dates():
            if args.y0 <= d.year < args.y1:
                ax.axvline(d.year + d.timetuple().tm_yday / 365.25, color="0.7", linewidth=0.6)

    ax.set_title("TAI − UTC (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("TAI − UTC (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
