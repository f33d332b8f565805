from __future__ import annotations

"""
caltime.fields.weeks

Localized week definitions.

A WeekFields is a (first day of week, minimal days in first week) pair. Its
fields number days 1..7 from the first day of the week and number weeks
within a month or a year. A partial leading week with fewer than
``minimal_days`` days is week 0; otherwise it is week 1.

Get and set share one offset function, ``start_of_week_offset``. Setting
projects back to day 1 of the month/year, computes the offset and adds
``7 * week`` plus the day adjustment; no search is involved.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from ..core.errors import InvalidArgumentError
from .chrono import ChronoField as F
from .ranges import ValueRange
from .units import ChronoUnit

if TYPE_CHECKING:
    from .builder import DateTimeBuilder

MONDAY = 1
SUNDAY = 7

_DAY_OF_WEEK = "DayOfWeek"
_WEEK_OF_MONTH = "WeekOfMonth"
_WEEK_OF_YEAR = "WeekOfYear"


def localized_day_of_week(iso_dow: int, first_day_of_week: int) -> int:
    return (iso_dow - first_day_of_week) % 7 + 1


def compute_week(offset: int, day: int) -> int:
    return (7 + offset + (day - 1)) // 7


@dataclass(frozen=True)
class WeekFields:
    first_day_of_week: int
    minimal_days: int

    def __post_init__(self) -> None:
        F.DAY_OF_WEEK.check_valid_value(self.first_day_of_week)
        if not (1 <= self.minimal_days <= 7):
            raise InvalidArgumentError(f"minimal days in first week must be 1..7, got {self.minimal_days}")

    @staticmethod
    @lru_cache(maxsize=None)
    def of(first_day_of_week: int, minimal_days: int) -> "WeekFields":
        return WeekFields(first_day_of_week, minimal_days)

    def start_of_week_offset(self, day: int, dow: int) -> int:
        """
        Offset of the first week start relative to day 1, given that ``day``
        has localized day-of-week ``dow``. Positive when the leading partial
        week counts as week 1, zero or negative when it is week 0.
        """
        week_start = (day - dow) % 7
        offset = -week_start
        if week_start + 1 > self.minimal_days:
            # leading partial week is long enough to be week 1
            offset = 7 - week_start
        return offset

    def day_of_week(self) -> "WeekBasedField":
        return WeekBasedField(self, _DAY_OF_WEEK)

    def week_of_month(self) -> "WeekBasedField":
        return WeekBasedField(self, _WEEK_OF_MONTH)

    def week_of_year(self) -> "WeekBasedField":
        return WeekBasedField(self, _WEEK_OF_YEAR)

    def __str__(self) -> str:
        return f"WeekFields[{self.first_day_of_week},{self.minimal_days}]"


WeekFields.ISO = WeekFields.of(MONDAY, 4)
WeekFields.SUNDAY_START = WeekFields.of(SUNDAY, 1)


@dataclass(frozen=True)
class WeekBasedField:
    week_def: WeekFields
    kind: str

    @property
    def name(self) -> str:
        return f"{self.kind}{self.week_def}"

    @property
    def base_unit(self) -> ChronoUnit:
        return ChronoUnit.DAYS if self.kind == _DAY_OF_WEEK else ChronoUnit.WEEKS

    @property
    def range_unit(self) -> ChronoUnit:
        return {_DAY_OF_WEEK: ChronoUnit.WEEKS, _WEEK_OF_MONTH: ChronoUnit.MONTHS}.get(self.kind, ChronoUnit.YEARS)

    @property
    def _day_field(self) -> F:
        return F.DAY_OF_MONTH if self.kind == _WEEK_OF_MONTH else F.DAY_OF_YEAR

    def range(self) -> ValueRange:
        if self.kind == _DAY_OF_WEEK:
            return ValueRange.of(1, 7)
        if self.kind == _WEEK_OF_MONTH:
            return ValueRange.of(0, 1, 4, 6)
        return ValueRange.of(0, 1, 52, 54)

    def _ldow(self, temporal: Any) -> int:
        return localized_day_of_week(temporal.get(F.DAY_OF_WEEK), self.week_def.first_day_of_week)

    def _offset(self, temporal: Any) -> int:
        return self.week_def.start_of_week_offset(temporal.get(self._day_field), self._ldow(temporal))

    # ---- protocol ----

    def is_supported_by(self, temporal: Any) -> bool:
        if not temporal.is_supported(F.DAY_OF_WEEK):
            return False
        return self.kind == _DAY_OF_WEEK or temporal.is_supported(self._day_field)

    def range_of(self, temporal: Any) -> ValueRange:
        if self.kind == _DAY_OF_WEEK:
            return self.range()
        offset = self._offset(temporal)
        days = temporal.range(self._day_field)
        return ValueRange.of(compute_week(offset, days.minimum), compute_week(offset, days.maximum))

    def get_from(self, temporal: Any) -> int:
        if self.kind == _DAY_OF_WEEK:
            return self._ldow(temporal)
        return compute_week(self._offset(temporal), temporal.get(self._day_field))

    def adjust_into(self, temporal: Any, value: int) -> Any:
        self.range_of(temporal).check_valid_int_value(value, self)
        if self.kind == _DAY_OF_WEEK:
            return temporal.plus(value - self._ldow(temporal), ChronoUnit.DAYS)
        day1 = temporal.with_field(self._day_field, 1)
        return self._date_of(day1, value, self._ldow(temporal))

    def _date_of(self, day1: Any, week: int, ldow: int) -> Any:
        offset = self.week_def.start_of_week_offset(1, self._ldow(day1))
        return day1.plus(7 * week - offset + ldow - 8, ChronoUnit.DAYS)

    def resolve(self, builder: "DateTimeBuilder", value: int) -> bool:
        sow = self.week_def.first_day_of_week
        if self.kind == _DAY_OF_WEEK:
            ldow = self.range().check_valid_int_value(value, self)
            builder.remove_field_value(self)
            builder.add_field_value(F.DAY_OF_WEEK, (sow - 1 + ldow - 1) % 7 + 1)
            return True
        if not (builder.contains(F.DAY_OF_WEEK) and builder.contains(F.YEAR)):
            return False
        if self.kind == _WEEK_OF_MONTH and not builder.contains(F.MONTH_OF_YEAR):
            return False
        chrono = builder.effective_chronology()
        year = builder.get_field_value(F.YEAR)
        month = builder.get_field_value(F.MONTH_OF_YEAR) if self.kind == _WEEK_OF_MONTH else 1
        ldow = localized_day_of_week(F.DAY_OF_WEEK.check_valid_value(builder.get_field_value(F.DAY_OF_WEEK)), sow)
        day1 = chrono.date(year, month, 1)
        self.range_of(day1).check_valid_int_value(value, self)
        builder.add_date(self._date_of(day1, value, ldow))
        builder.remove_field_value(self)
        builder.remove_field_value(F.DAY_OF_WEEK)
        return True

    def __str__(self) -> str:
        return self.name
