from __future__ import annotations

"""
caltime.fields.iso

ISO-8601 specific fields: quarter-of-year, day-of-quarter and the
week-based year. Supported only by dates of the ISO chronology.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple

from ..core import time as t
from ..core.errors import UnsupportedFieldError
from .chrono import ChronoField as F
from .ranges import ValueRange
from .units import ChronoUnit

if TYPE_CHECKING:
    from .builder import DateTimeBuilder

_QUARTER_DAYS = (0, 90, 181, 273)   # day-of-year before each quarter, common year


def _is_iso(temporal: Any) -> bool:
    from ..chrono.iso import ISO
    return getattr(temporal, "chronology", None) is ISO


def week_based(year: int, month: int, day: int) -> Tuple[int, int]:
    """(week-based-year, week) of an ISO date."""
    ed = t.to_epoch_day(year, month, day)
    thursday = ed + 4 - ((ed + 3) % 7 + 1)
    wby = t.from_epoch_day(thursday)[0]
    return wby, (thursday - t.to_epoch_day(wby, 1, 1)) // 7 + 1


def weeks_in_year(wby: int) -> int:
    jan1 = (t.to_epoch_day(wby, 1, 1) + 3) % 7 + 1
    return 53 if jan1 == 4 or (jan1 == 3 and t.is_leap_year(wby)) else 52


def week_one_monday(wby: int) -> int:
    """Epoch day of the Monday starting week 1 (the week holding January 4)."""
    jan4 = t.to_epoch_day(wby, 1, 4)
    return jan4 - ((jan4 + 3) % 7)


@dataclass(frozen=True)
class IsoField:
    name: str
    base_unit: ChronoUnit
    range_unit: ChronoUnit
    outer: ValueRange

    def range(self) -> ValueRange:
        return self.outer

    def is_supported_by(self, temporal: Any) -> bool:
        return _is_iso(temporal) and temporal.is_supported(F.EPOCH_DAY)

    def _date_parts(self, temporal: Any) -> Tuple[int, int, int]:
        if not self.is_supported_by(temporal):
            raise UnsupportedFieldError(self, temporal)
        return temporal.get(F.YEAR), temporal.get(F.MONTH_OF_YEAR), temporal.get(F.DAY_OF_MONTH)

    def range_of(self, temporal: Any) -> ValueRange:
        y, m, _ = self._date_parts(temporal)
        if self is DAY_OF_QUARTER:
            q = (m - 1) // 3
            if q == 0:
                return ValueRange.of(1, 91 if t.is_leap_year(y) else 90)
            return ValueRange.of(1, 91 if q == 1 else 92)
        if self is WEEK_OF_WEEK_BASED_YEAR:
            return ValueRange.of(1, weeks_in_year(week_based(*self._date_parts(temporal))[0]))
        return self.outer

    def get_from(self, temporal: Any) -> int:
        y, m, d = self._date_parts(temporal)
        if self is QUARTER_OF_YEAR:
            return (m - 1) // 3 + 1
        if self is DAY_OF_QUARTER:
            q0 = (m - 1) // 3
            leap = 1 if q0 > 0 and t.is_leap_year(y) else 0
            return temporal.get(F.DAY_OF_YEAR) - _QUARTER_DAYS[q0] - leap
        wby, week = week_based(y, m, d)
        return week if self is WEEK_OF_WEEK_BASED_YEAR else wby

    def adjust_into(self, temporal: Any, value: int) -> Any:
        if self is WEEK_BASED_YEAR:
            self.outer.check_valid_value(value, self)
            _, week = week_based(*self._date_parts(temporal))
            week = min(week, weeks_in_year(value))
            dow = temporal.get(F.DAY_OF_WEEK)
            ed = week_one_monday(value) + (week - 1) * 7 + dow - 1
            return temporal.with_field(F.EPOCH_DAY, ed)
        self.range_of(temporal).check_valid_value(value, self)
        cur = self.get_from(temporal)
        if self is QUARTER_OF_YEAR:
            return temporal.plus((value - cur) * 3, ChronoUnit.MONTHS)
        if self is DAY_OF_QUARTER:
            return temporal.plus(value - cur, ChronoUnit.DAYS)
        return temporal.plus((value - cur) * 7, ChronoUnit.DAYS)

    def resolve(self, builder: "DateTimeBuilder", value: int) -> bool:
        from ..chrono.iso import ISO

        if builder.effective_chronology() is not ISO:
            return False
        if self in (QUARTER_OF_YEAR, DAY_OF_QUARTER):
            if not all(builder.contains(f) for f in (F.YEAR, QUARTER_OF_YEAR, DAY_OF_QUARTER)):
                return False
            y = builder.get_field_value(F.YEAR)
            q = QUARTER_OF_YEAR.outer.check_valid_value(builder.get_field_value(QUARTER_OF_YEAR), QUARTER_OF_YEAR)
            first = ISO.date(y, (q - 1) * 3 + 1, 1)
            doq = DAY_OF_QUARTER.range_of(first).check_valid_value(builder.get_field_value(DAY_OF_QUARTER), DAY_OF_QUARTER)
            builder.add_date(first.plus(doq - 1, ChronoUnit.DAYS))
            builder.remove_field_value(F.YEAR)
            builder.remove_field_value(QUARTER_OF_YEAR)
            builder.remove_field_value(DAY_OF_QUARTER)
            return True
        if not all(builder.contains(f) for f in (WEEK_BASED_YEAR, WEEK_OF_WEEK_BASED_YEAR, F.DAY_OF_WEEK)):
            return False
        wby = WEEK_BASED_YEAR.outer.check_valid_value(builder.get_field_value(WEEK_BASED_YEAR), WEEK_BASED_YEAR)
        week = ValueRange.of(1, weeks_in_year(wby)).check_valid_value(
            builder.get_field_value(WEEK_OF_WEEK_BASED_YEAR), WEEK_OF_WEEK_BASED_YEAR)
        dow = F.DAY_OF_WEEK.check_valid_value(builder.get_field_value(F.DAY_OF_WEEK))
        builder.add_date(ISO.date_epoch_day(week_one_monday(wby) + (week - 1) * 7 + dow - 1))
        builder.remove_field_value(WEEK_BASED_YEAR)
        builder.remove_field_value(WEEK_OF_WEEK_BASED_YEAR)
        builder.remove_field_value(F.DAY_OF_WEEK)
        return True

    def __str__(self) -> str:
        return self.name


QUARTER_OF_YEAR = IsoField("QuarterOfYear", ChronoUnit.QUARTER_YEARS, ChronoUnit.YEARS, ValueRange.of(1, 4))
DAY_OF_QUARTER = IsoField("DayOfQuarter", ChronoUnit.DAYS, ChronoUnit.QUARTER_YEARS, ValueRange.of(1, 90, 92))
WEEK_OF_WEEK_BASED_YEAR = IsoField("WeekOfWeekBasedYear", ChronoUnit.WEEKS, ChronoUnit.WEEK_BASED_YEARS, ValueRange.of(1, 52, 53))
WEEK_BASED_YEAR = IsoField("WeekBasedYear", ChronoUnit.WEEK_BASED_YEARS, ChronoUnit.FOREVER, F.YEAR.range())
