from __future__ import annotations

"""Julian-day style fields: a constant offset from the epoch day."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.time import JDN_1970, MJD_1970, RATA_DIE_1970
from .chrono import ChronoField as F
from .ranges import ValueRange
from .units import ChronoUnit

if TYPE_CHECKING:
    from .builder import DateTimeBuilder


@dataclass(frozen=True)
class JulianField:
    name: str
    offset: int    # field value of 1970-01-01

    base_unit = ChronoUnit.DAYS
    range_unit = ChronoUnit.FOREVER

    def range(self) -> ValueRange:
        r = F.EPOCH_DAY.range()
        return ValueRange.of(r.minimum + self.offset, r.maximum + self.offset)

    def is_supported_by(self, temporal: Any) -> bool:
        return temporal.is_supported(F.EPOCH_DAY)

    def range_of(self, temporal: Any) -> ValueRange:
        return self.range()

    def get_from(self, temporal: Any) -> int:
        return temporal.get_long(F.EPOCH_DAY) + self.offset

    def adjust_into(self, temporal: Any, value: int) -> Any:
        self.range().check_valid_value(value, self)
        return temporal.with_field(F.EPOCH_DAY, value - self.offset)

    def resolve(self, builder: "DateTimeBuilder", value: int) -> bool:
        chrono = builder.effective_chronology()
        self.range().check_valid_value(value, self)
        builder.add_date(chrono.date_epoch_day(value - self.offset))
        builder.remove_field_value(self)
        return True

    def __str__(self) -> str:
        return self.name


JULIAN_DAY = JulianField("JulianDay", JDN_1970)
MODIFIED_JULIAN_DAY = JulianField("ModifiedJulianDay", MJD_1970)
RATA_DIE = JulianField("RataDie", RATA_DIE_1970)
