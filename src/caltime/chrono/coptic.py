from __future__ import annotations

"""
caltime.chrono.coptic

The Coptic (Alexandrian) calendar: twelve months of 30 days followed by an
epagomenal month of 5 days (6 in leap years). Every fourth year is a leap
year, those with ``year % 4 == 3``. Year 1 began on 284-08-29 (Julian).
"""

from typing import Tuple

from ..fields.chrono import ChronoField as F
from ..fields.ranges import ValueRange
from .base import Chronology

EPOCH_DAY_DIFFERENCE = 615558   # days from Coptic 0001-01-01 to 1970-01-01

_RANGES = {
    F.MONTH_OF_YEAR: ValueRange.of(1, 13),
    F.DAY_OF_MONTH: ValueRange.of(1, 5, 30),
    F.DAY_OF_YEAR: ValueRange.of(1, 365, 366),
    F.ALIGNED_WEEK_OF_MONTH: ValueRange.of(1, 1, 5),
    F.ALIGNED_WEEK_OF_YEAR: ValueRange.of(1, 53),
    F.PROLEPTIC_MONTH: ValueRange.of(F.YEAR.range().minimum * 13, F.YEAR.range().maximum * 13 + 12),
}


class CopticChronology(Chronology):
    name = "Coptic"
    months_per_year = 13

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return (year - 1) * 365 + year // 4 + (month - 1) * 30 + day - 1 - EPOCH_DAY_DIFFERENCE

    def _from_epoch_day(self, epoch_day: int) -> Tuple[int, int, int]:
        ed = epoch_day + EPOCH_DAY_DIFFERENCE
        year = (ed * 4 + 1463) // 1461
        doy0 = ed - ((year - 1) * 365 + year // 4)
        return year, doy0 // 30 + 1, doy0 % 30 + 1

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 3

    def month_length(self, year: int, month: int) -> int:
        if month == 13:
            return 6 if self.is_leap_year(year) else 5
        return 30

    def year_length(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def range(self, field: F) -> ValueRange:
        return _RANGES.get(field) or field.range()


COPTIC = CopticChronology()
