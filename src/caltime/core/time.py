from __future__ import annotations
from datetime import date, datetime, timezone


SECONDS_PER_DAY = 86400
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_DAY = SECONDS_PER_DAY * NANOS_PER_SECOND

JDN_1970 = 2440588    # JDN of 1970-01-01
MJD_1970 = 40587      # MJD of 1970-01-01
RATA_DIE_1970 = 719163


def to_epoch_day(y: int, m: int, d: int) -> int:
    """Proleptic Gregorian (y, m, d) -> days since 1970-01-01. Any year, no datetime range limit."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn - JDN_1970


def from_epoch_day(ed: int) -> tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_epoch_day."""
    a = ed + JDN_1970 + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def mjd_of(d: date) -> int:
    return to_epoch_day(d.year, d.month, d.day) + MJD_1970


def date_of_mjd(mjd: int) -> date:
    return date(*from_epoch_day(mjd - MJD_1970))


def is_leap_year(y: int) -> bool:
    return (y % 4 == 0) and (y % 100 != 0 or y % 400 == 0)


def month_length(y: int, m: int) -> int:
    if m == 2:
        return 29 if is_leap_year(y) else 28
    return 30 if m in (4, 6, 9, 11) else 31


def split_nanos(total_nanos: int) -> tuple[int, int]:
    """Nanoseconds -> (seconds, nano-of-second) with floor semantics."""
    return divmod(total_nanos, NANOS_PER_SECOND)


def split_seconds(epoch_seconds: int) -> tuple[int, int]:
    """Epoch seconds -> (epoch day, second of day) with floor semantics."""
    return divmod(epoch_seconds, SECONDS_PER_DAY)


def epoch_seconds_of(dt: datetime) -> int:
    """Whole seconds of a datetime taken as a wall-clock label (naive) or converted to UTC (aware)."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    ed = to_epoch_day(dt.year, dt.month, dt.day)
    return ed * SECONDS_PER_DAY + dt.hour * 3600 + dt.minute * 60 + dt.second
