from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import total_ordering
from typing import NamedTuple

from .errors import InvalidArgumentError
from .time import (
    MJD_1970,
    NANOS_PER_DAY,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    epoch_seconds_of,
    from_epoch_day,
    split_nanos,
    split_seconds,
)


class TimeScale(Enum):
    TAI = "TAI"
    UTC = "UTC"
    UTC_SLS = "UTC-SLS"
    TT = "TT"

    @property
    def supports_leap_second(self) -> bool:
        return self is TimeScale.UTC


class Validity(Enum):
    VALID = "valid"
    AMBIGUOUS = "ambiguous"      # label occurs twice (pre-1972 repeat)
    INVALID = "invalid"          # label never occurs
    POSSIBLE = "possible"        # leap second not (yet) announced


@total_ordering
@dataclass(frozen=True)
class ScaleInstant:
    """
    An instant on one time scale.

    epoch_seconds counts labels of the scale from 1970-01-01T00:00:00 of that
    scale. On UTC a positive leap second is carried as leap=1 on the label
    23:59:59 of its day, so the ordering key is (epoch_seconds, leap, nano).
    """
    scale: TimeScale
    epoch_seconds: int
    nano: int = 0
    leap: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.nano < NANOS_PER_SECOND):
            raise InvalidArgumentError(f"nano out of range [0, 999999999]: {self.nano}")
        if self.leap not in (0, 1):
            raise InvalidArgumentError(f"leap must be 0 or 1, got {self.leap}")
        if self.leap:
            if not self.scale.supports_leap_second:
                raise InvalidArgumentError(f"{self.scale.value} has no leap seconds")
            if self.second_of_day != SECONDS_PER_DAY - 1:
                raise InvalidArgumentError("leap flag is only legal on the last second of a day")

    # ---- constructors ----

    @classmethod
    def of(cls, scale: TimeScale, epoch_seconds: int, nano_adjustment: int = 0, *, leap: int = 0) -> "ScaleInstant":
        carry, nano = split_nanos(int(nano_adjustment))
        return cls(scale, int(epoch_seconds) + carry, nano, int(leap))

    @classmethod
    def of_datetime(cls, dt: datetime, scale: TimeScale = TimeScale.UTC, *, leap: bool = False) -> "ScaleInstant":
        return cls(scale, epoch_seconds_of(dt), dt.microsecond * 1000, 1 if leap else 0)

    @classmethod
    def of_mjd(cls, scale: TimeScale, mjd: int, nano_of_day: int) -> "ScaleInstant":
        """nano_of_day in [86400e9, 86401e9) denotes the leap second of a UTC day."""
        if not (0 <= nano_of_day < NANOS_PER_DAY + NANOS_PER_SECOND):
            raise InvalidArgumentError(f"nano_of_day out of range: {nano_of_day}")
        base = (mjd - MJD_1970) * SECONDS_PER_DAY
        if nano_of_day >= NANOS_PER_DAY:
            return cls(scale, base + SECONDS_PER_DAY - 1, nano_of_day - NANOS_PER_DAY, 1)
        secs, nano = split_nanos(nano_of_day)
        return cls(scale, base + secs, nano)

    # ---- accessors ----

    @property
    def epoch_day(self) -> int:
        return split_seconds(self.epoch_seconds)[0]

    @property
    def mjd(self) -> int:
        return self.epoch_day + MJD_1970

    @property
    def second_of_day(self) -> int:
        return split_seconds(self.epoch_seconds)[1]

    @property
    def nano_of_day(self) -> int:
        return (self.second_of_day + self.leap) * NANOS_PER_SECOND + self.nano

    @property
    def total_nanos(self) -> int:
        """Nanoseconds since the scale epoch; ignores the leap flag."""
        return self.epoch_seconds * NANOS_PER_SECOND + self.nano

    def with_scale(self, scale: TimeScale) -> "ScaleInstant":
        return ScaleInstant(scale, self.epoch_seconds, self.nano, self.leap)

    def plus(self, seconds: int = 0, nanos: int = 0) -> "ScaleInstant":
        if self.scale.supports_leap_second:
            raise InvalidArgumentError("UTC arithmetic needs the leap-second table; use TimeScaleConverter.plus")
        return ScaleInstant.of(self.scale, self.epoch_seconds + seconds, self.nano + nanos)

    def minus(self, seconds: int = 0, nanos: int = 0) -> "ScaleInstant":
        return self.plus(-seconds, -nanos)

    def _key(self) -> tuple[int, int, int]:
        return (self.epoch_seconds, self.leap, self.nano)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ScaleInstant) or other.scale is not self.scale:
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        y, m, d = from_epoch_day(self.epoch_day)
        sod = self.second_of_day
        hh, rem = divmod(sod, 3600)
        mm, ss = divmod(rem, 60)
        ss += self.leap
        return f"{y:04d}-{m:02d}-{d:02d}T{hh:02d}:{mm:02d}:{ss:02d}.{self.nano:09d}({self.scale.value})"


class Conversion(NamedTuple):
    instant: ScaleInstant
    validity: Validity
