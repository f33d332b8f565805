from __future__ import annotations

"""
caltime.scales.early

TAI-UTC before the leap-second era (1961-01-01 .. 1972-01-01).

Between 1961 and 1972 UTC was steered with fractional steps and a rate
offset. The published relation is

    TAI - UTC = base + (MJD - ref_mjd) * daily_rate      [seconds]

with MJD the (fractional) UTC modified Julian date. The constants below are
the published BIH values and are reference data, not derived. Rates are
kept as exact Fractions; per second of UTC they are 15, 13 and 30 ns.
"""

from fractions import Fraction
from typing import Tuple

from ..core.time import MJD_1970, SECONDS_PER_DAY
from .intervals import IntervalEntry, IntervalTable

# (first MJD, base, ref MJD, daily rate)
EARLY_ROWS: Tuple[Tuple[int, str, int, str], ...] = (
    (37300, "1.4228180", 37300, "0.001296"),   # 1961-01-01
    (37512, "1.3728180", 37300, "0.001296"),   # 1961-08-01
    (37665, "1.8458580", 37665, "0.0011232"),  # 1962-01-01
    (38334, "1.9458580", 37665, "0.0011232"),  # 1963-11-01
    (38395, "3.2401300", 38761, "0.001296"),   # 1964-01-01
    (38486, "3.3401300", 38761, "0.001296"),   # 1964-04-01
    (38639, "3.4401300", 38761, "0.001296"),   # 1964-09-01
    (38761, "3.5401300", 38761, "0.001296"),   # 1965-01-01
    (38820, "3.6401300", 38761, "0.001296"),   # 1965-03-01
    (38942, "3.7401300", 38761, "0.001296"),   # 1965-07-01
    (39004, "3.8401300", 38761, "0.001296"),   # 1965-09-01
    (39126, "4.3131700", 39126, "0.002592"),   # 1966-01-01
    (39887, "4.2131700", 39126, "0.002592"),   # 1968-02-01
)

HANDOVER_MJD = 41317      # 1972-01-01, first day of whole-second offsets
HANDOVER_OFFSET = 10
PRE_1961_OFFSET = Fraction("1.422818")


def _secs(mjd: int) -> int:
    return (mjd - MJD_1970) * SECONDS_PER_DAY


def build_early_table() -> IntervalTable:
    entries = [
        IntervalEntry(
            start=_secs(mjd),
            offset=Fraction(base),
            rate=Fraction(rate) / SECONDS_PER_DAY,
            ref=_secs(ref),
        )
        for mjd, base, ref, rate in EARLY_ROWS
    ]
    entries.append(IntervalEntry(start=_secs(HANDOVER_MJD), offset=HANDOVER_OFFSET))
    default = IntervalEntry(start=_secs(EARLY_ROWS[0][0]), offset=PRE_1961_OFFSET)
    return IntervalTable(tuple(entries), default=default)


EARLY_UTC_TABLE = build_early_table()
