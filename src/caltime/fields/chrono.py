from __future__ import annotations

"""
caltime.fields.chrono

The built-in field catalogue. Each member carries its data (display name,
base unit, range unit, outer range). Temporal objects handle these fields
directly; the protocol methods here just dispatch back to the temporal.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from .ranges import ValueRange
from .units import ChronoUnit as U

if TYPE_CHECKING:
    from .builder import DateTimeBuilder

YEAR_MIN = -999_999_999
YEAR_MAX = 999_999_999


class ChronoField(Enum):
    NANO_OF_SECOND = ("NanoOfSecond", U.NANOS, U.SECONDS, ValueRange.of(0, 999_999_999))
    NANO_OF_DAY = ("NanoOfDay", U.NANOS, U.DAYS, ValueRange.of(0, 86400 * 1_000_000_000 - 1))
    MILLI_OF_SECOND = ("MilliOfSecond", U.MILLIS, U.SECONDS, ValueRange.of(0, 999))
    MILLI_OF_DAY = ("MilliOfDay", U.MILLIS, U.DAYS, ValueRange.of(0, 86400 * 1000 - 1))
    SECOND_OF_MINUTE = ("SecondOfMinute", U.SECONDS, U.MINUTES, ValueRange.of(0, 59))
    SECOND_OF_DAY = ("SecondOfDay", U.SECONDS, U.DAYS, ValueRange.of(0, 86400 - 1))
    MINUTE_OF_HOUR = ("MinuteOfHour", U.MINUTES, U.HOURS, ValueRange.of(0, 59))
    MINUTE_OF_DAY = ("MinuteOfDay", U.MINUTES, U.DAYS, ValueRange.of(0, 24 * 60 - 1))
    HOUR_OF_AMPM = ("HourOfAmPm", U.HOURS, U.HALF_DAYS, ValueRange.of(0, 11))
    CLOCK_HOUR_OF_AMPM = ("ClockHourOfAmPm", U.HOURS, U.HALF_DAYS, ValueRange.of(1, 12))
    HOUR_OF_DAY = ("HourOfDay", U.HOURS, U.DAYS, ValueRange.of(0, 23))
    CLOCK_HOUR_OF_DAY = ("ClockHourOfDay", U.HOURS, U.DAYS, ValueRange.of(1, 24))
    AMPM_OF_DAY = ("AmPmOfDay", U.HALF_DAYS, U.DAYS, ValueRange.of(0, 1))
    DAY_OF_WEEK = ("DayOfWeek", U.DAYS, U.WEEKS, ValueRange.of(1, 7))
    ALIGNED_DAY_OF_WEEK_IN_MONTH = ("AlignedDayOfWeekInMonth", U.DAYS, U.WEEKS, ValueRange.of(1, 7))
    ALIGNED_DAY_OF_WEEK_IN_YEAR = ("AlignedDayOfWeekInYear", U.DAYS, U.WEEKS, ValueRange.of(1, 7))
    DAY_OF_MONTH = ("DayOfMonth", U.DAYS, U.MONTHS, ValueRange.of(1, 28, 31))
    DAY_OF_YEAR = ("DayOfYear", U.DAYS, U.YEARS, ValueRange.of(1, 365, 366))
    EPOCH_DAY = ("EpochDay", U.DAYS, U.FOREVER, ValueRange.of(-365_243_219_162, 365_241_780_471))
    ALIGNED_WEEK_OF_MONTH = ("AlignedWeekOfMonth", U.WEEKS, U.MONTHS, ValueRange.of(1, 4, 5))
    ALIGNED_WEEK_OF_YEAR = ("AlignedWeekOfYear", U.WEEKS, U.YEARS, ValueRange.of(1, 53))
    MONTH_OF_YEAR = ("MonthOfYear", U.MONTHS, U.YEARS, ValueRange.of(1, 12))
    PROLEPTIC_MONTH = ("ProlepticMonth", U.MONTHS, U.FOREVER, ValueRange.of(YEAR_MIN * 12, YEAR_MAX * 12 + 11))
    YEAR_OF_ERA = ("YearOfEra", U.YEARS, U.ERAS, ValueRange.of(1, YEAR_MAX, YEAR_MAX + 1))
    YEAR = ("Year", U.YEARS, U.FOREVER, ValueRange.of(YEAR_MIN, YEAR_MAX))
    ERA = ("Era", U.ERAS, U.FOREVER, ValueRange.of(0, 1))
    OFFSET_SECONDS = ("OffsetSeconds", U.SECONDS, U.FOREVER, ValueRange.of(-18 * 3600, 18 * 3600))

    def __init__(self, display: str, base_unit: U, range_unit: U, outer: ValueRange):
        self.display = display
        self.base_unit = base_unit
        self.range_unit = range_unit
        self._outer = outer

    def range(self) -> ValueRange:
        return self._outer

    @property
    def is_date_based(self) -> bool:
        return self.base_unit.is_date_based and self is not ChronoField.OFFSET_SECONDS

    @property
    def is_time_based(self) -> bool:
        return self.base_unit.is_time_based and self is not ChronoField.OFFSET_SECONDS

    def check_valid_value(self, value: int) -> int:
        return self._outer.check_valid_value(value, self)

    def check_valid_int_value(self, value: int) -> int:
        return self._outer.check_valid_int_value(value, self)

    # ---- protocol: dispatch back to the temporal ----

    def is_supported_by(self, temporal: Any) -> bool:
        return temporal.is_supported(self)

    def range_of(self, temporal: Any) -> ValueRange:
        return temporal.range(self)

    def get_from(self, temporal: Any) -> int:
        return temporal.get_long(self)

    def adjust_into(self, temporal: Any, value: int) -> Any:
        return temporal.with_field(self, value)

    def resolve(self, builder: "DateTimeBuilder", value: int) -> bool:
        # standard fields are merged by the chronology
        return False

    def __str__(self) -> str:
        return self.display


DATE_FIELDS = frozenset(f for f in ChronoField if f.is_date_based)
TIME_FIELDS = frozenset(f for f in ChronoField if f.is_time_based)
