from __future__ import annotations

import argparse
from datetime import date
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INSTANT_RE = re.compile(r"^(-?\d{4,})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?$")


def _parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _parse_instant(s: str, scale):
    import caltime

    m = _INSTANT_RE.match(s.strip())
    if not m:
        raise SystemExit(f"Bad instant {s!r}; expected YYYY-MM-DDTHH:MM:SS[.fffffffff]")
    y, mo, d, hh, mm, ss = (int(g) for g in m.groups()[:6])
    frac = m.group(7) or ""
    nano = int(frac.ljust(9, "0")) if frac else 0
    return caltime.instant(y, mo, d, hh, mm, ss, nano, scale=scale)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_leap(argv: list[str]) -> int:
    return _run_module_main("caltime.diagnostics.leap_table", argv)


def cmd_tai2utc(argv: list[str]) -> int:
    import caltime
    from caltime import TimeScale

    p = argparse.ArgumentParser(prog="caltime tai2utc", description="TAI label -> UTC label (with validity).")
    p.add_argument("instant", help="YYYY-MM-DDTHH:MM:SS[.fffffffff] on the TAI scale")
    args = p.parse_args(argv)

    tai = _parse_instant(args.instant, TimeScale.TAI)
    conv = caltime.convert_with_validity(tai, TimeScale.UTC)
    print(f"{tai}  ->  {conv.instant}  [{conv.validity.value}]")
    return 0


def cmd_utc2tai(argv: list[str]) -> int:
    import caltime
    from caltime import TimeScale

    p = argparse.ArgumentParser(prog="caltime utc2tai", description="UTC label -> TAI label (with validity).")
    p.add_argument("instant", help="YYYY-MM-DDTHH:MM:SS[.fffffffff] on UTC; seconds may be 60")
    p.add_argument("--to", choices=["TAI", "TT", "UTC-SLS"], default="TAI", help="target scale")
    args = p.parse_args(argv)

    utc = _parse_instant(args.instant, TimeScale.UTC)
    conv = caltime.convert_with_validity(utc, TimeScale(args.to))
    print(f"{utc}  ->  {conv.instant}  [{conv.validity.value}]")
    return 0


def cmd_validity(argv: list[str]) -> int:
    import caltime
    from caltime import TimeScale

    p = argparse.ArgumentParser(prog="caltime validity", description="Classify a UTC label.")
    p.add_argument("instant", help="YYYY-MM-DDTHH:MM:SS[.fffffffff] on UTC; seconds may be 60")
    args = p.parse_args(argv)

    utc = _parse_instant(args.instant, TimeScale.UTC)
    print(caltime.validity(utc).value)
    return 0


def cmd_week(argv: list[str]) -> int:
    import caltime
    from caltime import WeekFields

    p = argparse.ArgumentParser(prog="caltime week", description="Localized week numbers of a date.")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--first-day", type=int, default=1, help="first day of week, 1=Monday .. 7=Sunday")
    p.add_argument("--min-days", type=int, default=4, help="minimal days in first week (1..7)")
    args = p.parse_args(argv)

    d = _parse_ymd(args.date)
    wf = WeekFields.of(args.first_day, args.min_days)
    for k, v in caltime.week_numbers(d, week_fields=wf).items():
        print(f"{k:14s} = {v}")
    return 0


def cmd_resolve(argv: list[str]) -> int:
    import caltime
    from caltime import ChronoField

    p = argparse.ArgumentParser(prog="caltime resolve", description="Resolve FIELD=VALUE pairs into a date.")
    p.add_argument("pairs", nargs="+", help="e.g. YEAR=2008 DAY_OF_YEAR=231")
    p.add_argument("--chronology", default="ISO")
    args = p.parse_args(argv)

    values = {}
    for pair in args.pairs:
        name, _, value = pair.partition("=")
        try:
            values[ChronoField[name.strip().upper()]] = int(value)
        except (KeyError, ValueError):
            raise SystemExit(f"Bad field assignment {pair!r}") from None
    print(caltime.resolve_fields(values, chronology=args.chronology))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # shorthand: `caltime YYYY-MM-DD` prints week numbers
    if argv and _DATE_RE.match(argv[0]):
        return cmd_week(argv)

    p = argparse.ArgumentParser(prog="caltime", description="Time scales, leap seconds and calendrical fields.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("leap", help="Print the leap-second table")
    sub.add_parser("tai2utc", help="Convert a TAI label to UTC")
    sub.add_parser("utc2tai", help="Convert a UTC label to TAI (or TT / UTC-SLS)")
    sub.add_parser("validity", help="Classify a UTC label (valid/ambiguous/invalid/possible)")
    sub.add_parser("week", help="Localized week numbers of a date")
    sub.add_parser("resolve", help="Resolve FIELD=VALUE pairs into a date")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["plot-tai-utc", "leap-table"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    commands = {
        "leap": cmd_leap,
        "tai2utc": cmd_tai2utc,
        "utc2tai": cmd_utc2tai,
        "validity": cmd_validity,
        "week": cmd_week,
        "resolve": cmd_resolve,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "diag":
        tool_map = {
            "plot-tai-utc": "caltime.diagnostics.plot_tai_utc",
            "leap-table": "caltime.diagnostics.leap_table",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
