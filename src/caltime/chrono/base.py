from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING, Dict, List, Tuple

from ..core.errors import CalendricalResolutionError, InvalidValueError, UnsupportedFieldError
from ..fields.base import Temporal
from ..fields.chrono import DATE_FIELDS, ChronoField as F
from ..fields.ranges import ValueRange
from ..fields.units import ChronoUnit

if TYPE_CHECKING:
    from ..fields.builder import DateTimeBuilder


class Chronology:
    """
    A calendar system.

    Subclasses provide the epoch-day mapping and the month structure; the
    field handling of ChronoDate and the standard field merge are shared.
    """
    name: str = ""
    months_per_year: int = 12

    # ---- hooks ----

    def _to_epoch_day(self, year: int, month: int, day: int) -> int:
        raise NotImplementedError

    def _from_epoch_day(self, epoch_day: int) -> Tuple[int, int, int]:
        raise NotImplementedError

    def is_leap_year(self, year: int) -> bool:
        raise NotImplementedError

    def month_length(self, year: int, month: int) -> int:
        raise NotImplementedError

    def range(self, field: F) -> ValueRange:
        return field.range()

    # ---- derived ----

    def year_length(self, year: int) -> int:
        return sum(self.month_length(year, m) for m in range(1, self.months_per_year + 1))

    def day_of_year(self, year: int, month: int, day: int) -> int:
        return self._to_epoch_day(year, month, day) - self._to_epoch_day(year, 1, 1) + 1

    def date(self, year: int, month: int, day: int) -> "ChronoDate":
        self.range(F.YEAR).check_valid_value(year, F.YEAR)
        self.range(F.MONTH_OF_YEAR).check_valid_value(month, F.MONTH_OF_YEAR)
        ml = self.month_length(year, month)
        ValueRange.of(1, ml).check_valid_value(day, F.DAY_OF_MONTH)
        return ChronoDate(self, year, month, day)

    def date_year_day(self, year: int, day_of_year: int) -> "ChronoDate":
        ValueRange.of(1, self.year_length(year)).check_valid_value(day_of_year, F.DAY_OF_YEAR)
        return self.date_epoch_day(self._to_epoch_day(year, 1, 1) + day_of_year - 1)

    def date_epoch_day(self, epoch_day: int) -> "ChronoDate":
        F.EPOCH_DAY.check_valid_value(epoch_day)
        return ChronoDate(self, *self._from_epoch_day(epoch_day))

    def resolve_previous_valid(self, year: int, month: int, day: int) -> "ChronoDate":
        return self.date(year, month, min(day, self.month_length(year, month)))

    def proleptic_year(self, era: int, year_of_era: int) -> int:
        return year_of_era if era == 1 else 1 - year_of_era

    # ---- standard field merge ----

    def resolve_date(self, builder: "DateTimeBuilder") -> bool:
        """
        Merge the built-in date fields present in ``builder``.

        Returns True when the builder changed. Fields that built a date are
        consumed; leftovers are cross-checked by the builder afterwards.
        """
        b = builder
        if b.contains(F.EPOCH_DAY):
            b.add_date(self.date_epoch_day(b.remove_field_value(F.EPOCH_DAY)))
            return True

        if b.contains(F.PROLEPTIC_MONTH):
            pm = F.PROLEPTIC_MONTH.check_valid_value(b.remove_field_value(F.PROLEPTIC_MONTH))
            y, m0 = divmod(pm, self.months_per_year)
            b.add_field_value(F.YEAR, y)
            b.add_field_value(F.MONTH_OF_YEAR, m0 + 1)
            return True

        if b.contains(F.YEAR_OF_ERA):
            yoe = F.YEAR_OF_ERA.check_valid_value(b.get_field_value(F.YEAR_OF_ERA))
            if b.contains(F.ERA):
                era = F.ERA.check_valid_value(b.remove_field_value(F.ERA))
                b.remove_field_value(F.YEAR_OF_ERA)
                b.add_field_value(F.YEAR, self.proleptic_year(era, yoe))
                return True
            if not b.contains(F.YEAR):
                b.remove_field_value(F.YEAR_OF_ERA)
                b.add_field_value(F.YEAR, self.proleptic_year(1, yoe))
                return True

        if not b.contains(F.YEAR):
            return False
        y = b.get_field_value(F.YEAR)

        if b.contains(F.MONTH_OF_YEAR):
            m = b.get_field_value(F.MONTH_OF_YEAR)
            if b.contains(F.DAY_OF_MONTH):
                d = self.date(y, m, b.get_field_value(F.DAY_OF_MONTH))
                return self._consume(b, d, F.YEAR, F.MONTH_OF_YEAR, F.DAY_OF_MONTH)
            if b.contains(F.ALIGNED_WEEK_OF_MONTH):
                aw = F.ALIGNED_WEEK_OF_MONTH.check_valid_value(b.get_field_value(F.ALIGNED_WEEK_OF_MONTH))
                first = self.date(y, m, 1).plus((aw - 1) * 7, ChronoUnit.DAYS)
                if b.contains(F.ALIGNED_DAY_OF_WEEK_IN_MONTH):
                    ad = F.ALIGNED_DAY_OF_WEEK_IN_MONTH.check_valid_value(b.get_field_value(F.ALIGNED_DAY_OF_WEEK_IN_MONTH))
                    d = first.plus(ad - 1, ChronoUnit.DAYS)
                    self._same_period(d, F.MONTH_OF_YEAR, m, F.ALIGNED_WEEK_OF_MONTH)
                    return self._consume(b, d, F.YEAR, F.MONTH_OF_YEAR, F.ALIGNED_WEEK_OF_MONTH, F.ALIGNED_DAY_OF_WEEK_IN_MONTH)
                if b.contains(F.DAY_OF_WEEK):
                    dow = F.DAY_OF_WEEK.check_valid_value(b.get_field_value(F.DAY_OF_WEEK))
                    d = first.plus((dow - first.get_long(F.DAY_OF_WEEK)) % 7, ChronoUnit.DAYS)
                    self._same_period(d, F.MONTH_OF_YEAR, m, F.ALIGNED_WEEK_OF_MONTH)
                    return self._consume(b, d, F.YEAR, F.MONTH_OF_YEAR, F.ALIGNED_WEEK_OF_MONTH, F.DAY_OF_WEEK)

        if b.contains(F.DAY_OF_YEAR):
            d = self.date_year_day(y, b.get_field_value(F.DAY_OF_YEAR))
            return self._consume(b, d, F.YEAR, F.DAY_OF_YEAR)

        if b.contains(F.ALIGNED_WEEK_OF_YEAR):
            aw = F.ALIGNED_WEEK_OF_YEAR.check_valid_value(b.get_field_value(F.ALIGNED_WEEK_OF_YEAR))
            first = self.date(y, 1, 1).plus((aw - 1) * 7, ChronoUnit.DAYS)
            if b.contains(F.ALIGNED_DAY_OF_WEEK_IN_YEAR):
                ad = F.ALIGNED_DAY_OF_WEEK_IN_YEAR.check_valid_value(b.get_field_value(F.ALIGNED_DAY_OF_WEEK_IN_YEAR))
                d = first.plus(ad - 1, ChronoUnit.DAYS)
                self._same_period(d, F.YEAR, y, F.ALIGNED_WEEK_OF_YEAR)
                return self._consume(b, d, F.YEAR, F.ALIGNED_WEEK_OF_YEAR, F.ALIGNED_DAY_OF_WEEK_IN_YEAR)
            if b.contains(F.DAY_OF_WEEK):
                dow = F.DAY_OF_WEEK.check_valid_value(b.get_field_value(F.DAY_OF_WEEK))
                d = first.plus((dow - first.get_long(F.DAY_OF_WEEK)) % 7, ChronoUnit.DAYS)
                self._same_period(d, F.YEAR, y, F.ALIGNED_WEEK_OF_YEAR)
                return self._consume(b, d, F.YEAR, F.ALIGNED_WEEK_OF_YEAR, F.DAY_OF_WEEK)
        return False

    @staticmethod
    def _same_period(d: "ChronoDate", field: F, expected: int, week_field: F) -> None:
        if d.get_long(field) != expected:
            raise CalendricalResolutionError(f"{week_field.name} runs past the end of the {field.name}", [week_field])

    @staticmethod
    def _consume(builder: "DateTimeBuilder", d: "ChronoDate", *fields: F) -> bool:
        builder.add_date(d)
        for f in fields:
            builder.remove_field_value(f)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __str__(self) -> str:
        return self.name


@total_ordering
@dataclass(frozen=True)
class ChronoDate(Temporal):
    """A date in some chronology; compare only within one chronology."""
    chronology: Chronology
    year: int
    month: int
    day: int

    # ---- protocol hooks ----

    def _supports(self, field: F) -> bool:
        return field in DATE_FIELDS

    @property
    def epoch_day(self) -> int:
        return self.chronology._to_epoch_day(self.year, self.month, self.day)

    @property
    def day_of_year(self) -> int:
        return self.chronology.day_of_year(self.year, self.month, self.day)

    @property
    def day_of_week(self) -> int:
        """ISO day-of-week, Monday=1 .. Sunday=7."""
        return (self.epoch_day + 3) % 7 + 1

    def _range(self, field: F) -> ValueRange:
        c = self.chronology
        if field is F.DAY_OF_MONTH:
            return ValueRange.of(1, c.month_length(self.year, self.month))
        if field is F.DAY_OF_YEAR:
            return ValueRange.of(1, c.year_length(self.year))
        if field is F.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, (c.month_length(self.year, self.month) - 1) // 7 + 1)
        if field is F.ALIGNED_WEEK_OF_YEAR:
            return ValueRange.of(1, (c.year_length(self.year) - 1) // 7 + 1)
        if field is F.YEAR_OF_ERA:
            hi = F.YEAR.range().maximum if self.year >= 1 else 1 - F.YEAR.range().minimum
            return ValueRange.of(1, hi)
        return c.range(field)

    def _get(self, field: F) -> int:
        if field is F.DAY_OF_WEEK:
            return self.day_of_week
        if field is F.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (self.day - 1) % 7 + 1
        if field is F.ALIGNED_DAY_OF_WEEK_IN_YEAR:
            return (self.day_of_year - 1) % 7 + 1
        if field is F.DAY_OF_MONTH:
            return self.day
        if field is F.DAY_OF_YEAR:
            return self.day_of_year
        if field is F.EPOCH_DAY:
            return self.epoch_day
        if field is F.ALIGNED_WEEK_OF_MONTH:
            return (self.day - 1) // 7 + 1
        if field is F.ALIGNED_WEEK_OF_YEAR:
            return (self.day_of_year - 1) // 7 + 1
        if field is F.MONTH_OF_YEAR:
            return self.month
        if field is F.PROLEPTIC_MONTH:
            return self.year * self.chronology.months_per_year + self.month - 1
        if field is F.YEAR_OF_ERA:
            return self.year if self.year >= 1 else 1 - self.year
        if field is F.YEAR:
            return self.year
        if field is F.ERA:
            return 1 if self.year >= 1 else 0
        raise UnsupportedFieldError(field, self)

    def _with(self, field: F, value: int) -> "ChronoDate":
        c = self.chronology
        c.range(field).check_valid_value(value, field)
        if field in (F.DAY_OF_WEEK, F.ALIGNED_DAY_OF_WEEK_IN_MONTH, F.ALIGNED_DAY_OF_WEEK_IN_YEAR):
            return self.plus(value - self._get(field), ChronoUnit.DAYS)
        if field in (F.ALIGNED_WEEK_OF_MONTH, F.ALIGNED_WEEK_OF_YEAR):
            return self.plus((value - self._get(field)) * 7, ChronoUnit.DAYS)
        if field is F.DAY_OF_MONTH:
            return c.date(self.year, self.month, value)
        if field is F.DAY_OF_YEAR:
            return c.date_year_day(self.year, value)
        if field is F.EPOCH_DAY:
            return c.date_epoch_day(value)
        if field is F.MONTH_OF_YEAR:
            return c.resolve_previous_valid(self.year, value, self.day)
        if field is F.PROLEPTIC_MONTH:
            return self.plus(value - self._get(field), ChronoUnit.MONTHS)
        if field is F.YEAR_OF_ERA:
            return c.resolve_previous_valid(c.proleptic_year(self._get(F.ERA), value), self.month, self.day)
        if field is F.YEAR:
            return c.resolve_previous_valid(value, self.month, self.day)
        if field is F.ERA:
            if value == self._get(F.ERA):
                return self
            return c.resolve_previous_valid(1 - self.year, self.month, self.day)
        raise UnsupportedFieldError(field, self)

    def plus(self, amount: int, unit: ChronoUnit) -> "ChronoDate":
        c = self.chronology
        if unit is ChronoUnit.DAYS:
            return c.date_epoch_day(self.epoch_day + amount) if amount else self
        if unit is ChronoUnit.WEEKS:
            return self.plus(amount * 7, ChronoUnit.DAYS)
        if unit is ChronoUnit.MONTHS:
            mpy = c.months_per_year
            y, m0 = divmod(self.year * mpy + self.month - 1 + amount, mpy)
            return c.resolve_previous_valid(y, m0 + 1, self.day)
        years = {
            ChronoUnit.YEARS: 1,
            ChronoUnit.DECADES: 10,
            ChronoUnit.CENTURIES: 100,
            ChronoUnit.MILLENNIA: 1000,
        }.get(unit)
        if years is not None:
            return c.resolve_previous_valid(self.year + amount * years, self.month, self.day)
        if unit is ChronoUnit.ERAS:
            return self._with(F.ERA, self._get(F.ERA) + amount)
        raise UnsupportedFieldError(unit, self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ChronoDate) or other.chronology is not self.chronology:
            return NotImplemented
        return self.epoch_day < other.epoch_day

    def __str__(self) -> str:
        s = f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        return s if self.chronology.name == "ISO" else f"{self.chronology.name} {s}"


@dataclass
class ChronologyRegistry:
    _chronologies: Dict[str, Chronology]

    def get(self, name: str) -> Chronology:
        if name not in self._chronologies:
            raise KeyError(f"Unknown chronology '{name}'. Available: {sorted(self._chronologies)}")
        return self._chronologies[name]

    def list(self) -> List[str]:
        return sorted(self._chronologies.keys())

    def register(self, name: str, chronology: Chronology, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._chronologies):
            raise KeyError(f"Chronology '{name}' already exists. Use overwrite=True to replace.")
        self._chronologies[name] = chronology
