from __future__ import annotations
from typing import Tuple

from ..core import time as t
from .base import Chronology


class IsoChronology(Chronology):
    """Proleptic Gregorian calendar."""
    name = "ISO"
    months_per_year = 12

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        return t.to_epoch_day(year, month, day)

    def _from_epoch_day(self, epoch_day: int) -> Tuple[int, int, int]:
        return t.from_epoch_day(epoch_day)

    def is_leap_year(self, year: int) -> bool:
        return t.is_leap_year(year)

    def month_length(self, year: int, month: int) -> int:
        return t.month_length(year, month)

    def year_length(self, year: int) -> int:
        return 366 if t.is_leap_year(year) else 365


ISO = IsoChronology()
