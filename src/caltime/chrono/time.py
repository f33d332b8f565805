from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering

from ..core.errors import UnsupportedFieldError
from ..core.time import NANOS_PER_DAY, NANOS_PER_SECOND
from ..fields.base import Temporal
from ..fields.chrono import TIME_FIELDS, ChronoField as F
from ..fields.units import ChronoUnit

_UNIT_NANOS = {
    ChronoUnit.NANOS: 1,
    ChronoUnit.MICROS: 1000,
    ChronoUnit.MILLIS: 1_000_000,
    ChronoUnit.SECONDS: NANOS_PER_SECOND,
    ChronoUnit.MINUTES: 60 * NANOS_PER_SECOND,
    ChronoUnit.HOURS: 3600 * NANOS_PER_SECOND,
    ChronoUnit.HALF_DAYS: 43200 * NANOS_PER_SECOND,
}


@total_ordering
@dataclass(frozen=True)
class TimeOfDay(Temporal):
    hour: int = 0
    minute: int = 0
    second: int = 0
    nano: int = 0

    def __post_init__(self) -> None:
        F.HOUR_OF_DAY.check_valid_value(self.hour)
        F.MINUTE_OF_HOUR.check_valid_value(self.minute)
        F.SECOND_OF_MINUTE.check_valid_value(self.second)
        F.NANO_OF_SECOND.check_valid_value(self.nano)

    @classmethod
    def of_nano_of_day(cls, nano_of_day: int) -> "TimeOfDay":
        F.NANO_OF_DAY.check_valid_value(nano_of_day)
        secs, nano = divmod(nano_of_day, NANOS_PER_SECOND)
        h, rem = divmod(secs, 3600)
        m, s = divmod(rem, 60)
        return cls(h, m, s, nano)

    @property
    def second_of_day(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    @property
    def nano_of_day(self) -> int:
        return self.second_of_day * NANOS_PER_SECOND + self.nano

    def _supports(self, field: F) -> bool:
        return field in TIME_FIELDS

    def _get(self, field: F) -> int:
        h = self.hour
        if field is F.NANO_OF_SECOND:
            return self.nano
        if field is F.NANO_OF_DAY:
            return self.nano_of_day
        if field is F.MILLI_OF_SECOND:
            return self.nano // 1_000_000
        if field is F.MILLI_OF_DAY:
            return self.nano_of_day // 1_000_000
        if field is F.SECOND_OF_MINUTE:
            return self.second
        if field is F.SECOND_OF_DAY:
            return self.second_of_day
        if field is F.MINUTE_OF_HOUR:
            return self.minute
        if field is F.MINUTE_OF_DAY:
            return h * 60 + self.minute
        if field is F.HOUR_OF_AMPM:
            return h % 12
        if field is F.CLOCK_HOUR_OF_AMPM:
            return h % 12 or 12
        if field is F.HOUR_OF_DAY:
            return h
        if field is F.CLOCK_HOUR_OF_DAY:
            return h or 24
        if field is F.AMPM_OF_DAY:
            return h // 12
        raise UnsupportedFieldError(field, self)

    def _with(self, field: F, value: int) -> "TimeOfDay":
        field.check_valid_value(value)
        if field is F.NANO_OF_SECOND:
            return TimeOfDay(self.hour, self.minute, self.second, value)
        if field is F.NANO_OF_DAY:
            return TimeOfDay.of_nano_of_day(value)
        if field is F.MILLI_OF_SECOND:
            return TimeOfDay(self.hour, self.minute, self.second, value * 1_000_000)
        if field is F.MILLI_OF_DAY:
            return TimeOfDay.of_nano_of_day(value * 1_000_000)
        if field is F.SECOND_OF_MINUTE:
            return TimeOfDay(self.hour, self.minute, value, self.nano)
        if field is F.SECOND_OF_DAY:
            return TimeOfDay.of_nano_of_day(value * NANOS_PER_SECOND + self.nano)
        if field is F.MINUTE_OF_HOUR:
            return TimeOfDay(self.hour, value, self.second, self.nano)
        if field is F.MINUTE_OF_DAY:
            return TimeOfDay(value // 60, value % 60, self.second, self.nano)
        if field is F.HOUR_OF_AMPM:
            return self.plus(value - self.hour % 12, ChronoUnit.HOURS)
        if field is F.CLOCK_HOUR_OF_AMPM:
            return self.plus((value % 12) - self.hour % 12, ChronoUnit.HOURS)
        if field is F.HOUR_OF_DAY:
            return TimeOfDay(value, self.minute, self.second, self.nano)
        if field is F.CLOCK_HOUR_OF_DAY:
            return TimeOfDay(value % 24, self.minute, self.second, self.nano)
        if field is F.AMPM_OF_DAY:
            return self.plus((value - self.hour // 12) * 12, ChronoUnit.HOURS)
        raise UnsupportedFieldError(field, self)

    def plus(self, amount: int, unit: ChronoUnit) -> "TimeOfDay":
        """Wraps around midnight."""
        step = _UNIT_NANOS.get(unit)
        if step is None:
            raise UnsupportedFieldError(unit, self)
        return TimeOfDay.of_nano_of_day((self.nano_of_day + amount * step) % NANOS_PER_DAY)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self.nano_of_day < other.nano_of_day

    def __str__(self) -> str:
        s = f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        return f"{s}.{self.nano:09d}" if self.nano else s
