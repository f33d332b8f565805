#!/usr/bin/env python3
from __future__ import annotations

import argparse

import caltime


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print the leap-second table in force.")
    p.add_argument("--since", type=int, default=None, help="only rows from this year on")
    args = p.parse_args(argv)

    rows = caltime.leap_table()
    if args.since is not None:
        rows = [r for r in rows if r[0].year >= args.since]

    print(f"{'from (UTC)':<12} {'TAI-UTC':>7} {'step':>5} {'TAI seconds':>12}")
    prev = None
    for d, off, tai in rows:
        step = "" if prev is None else f"{off - prev:+d}"
        print(f"{d.isoformat():<12} {off:>7d} {step:>5} {tai:>12d}")
        prev = off
    print(f"{len(rows)} rows")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
