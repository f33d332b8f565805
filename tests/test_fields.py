from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from caltime.chrono.iso import ISO
from caltime.chrono.time import TimeOfDay
from caltime.core.errors import InvalidArgumentError, InvalidValueError, UnsupportedFieldError
from caltime.fields.base import TemporalField
from caltime.fields.chrono import ChronoField as F
from caltime.fields.ranges import ValueRange
from caltime.fields.units import ChronoUnit


def test_value_range_forms():
    r = ValueRange.of(1, 28, 31)
    assert (r.minimum, r.maximum) == (1, 31)
    assert not r.is_fixed
    assert str(r) == "1 - 28/31"
    assert ValueRange.of(1, 7).is_fixed
    assert str(ValueRange.of(0, 1, 52, 54)) == "0/1 - 52/54"
    with pytest.raises(InvalidArgumentError):
        ValueRange.of(5, 1)
    with pytest.raises(InvalidArgumentError):
        ValueRange.of(1, 31, 28)


def test_value_range_checks():
    r = ValueRange.of(1, 12)
    assert r.check_valid_value(12, F.MONTH_OF_YEAR) == 12
    with pytest.raises(InvalidValueError) as ei:
        r.check_valid_value(13, F.MONTH_OF_YEAR)
    err = ei.value
    assert err.field is F.MONTH_OF_YEAR
    assert err.value == 13
    assert err.range == r
    assert isinstance(err, ValueError)
    assert "MONTH_OF_YEAR" in str(err)

    big = F.EPOCH_DAY.range()
    assert not big.is_int_value
    assert big.is_valid_value(10**10)
    with pytest.raises(InvalidValueError):
        big.check_valid_int_value(10**10, F.EPOCH_DAY)


def test_chrono_field_catalogue():
    assert F.DAY_OF_MONTH.base_unit is ChronoUnit.DAYS
    assert F.DAY_OF_MONTH.range_unit is ChronoUnit.MONTHS
    assert F.DAY_OF_MONTH.is_date_based and not F.DAY_OF_MONTH.is_time_based
    assert F.NANO_OF_DAY.is_time_based and not F.NANO_OF_DAY.is_date_based
    assert not F.OFFSET_SECONDS.is_date_based and not F.OFFSET_SECONDS.is_time_based
    assert str(F.DAY_OF_YEAR) == "DayOfYear"
    assert isinstance(F.YEAR, TemporalField)


def test_units():
    assert ChronoUnit.DAYS.is_date_based and not ChronoUnit.DAYS.is_time_based
    assert ChronoUnit.HOURS.is_time_based
    assert not ChronoUnit.SECONDS.is_duration_estimated
    assert ChronoUnit.MONTHS.is_duration_estimated
    assert ChronoUnit.DAYS.duration_seconds == 86400


def test_date_field_access():
    d = ISO.date(2008, 8, 18)
    assert d.get(F.DAY_OF_YEAR) == 231
    assert d.get(F.DAY_OF_WEEK) == 1
    assert d.get(F.ALIGNED_WEEK_OF_MONTH) == 3
    assert d.get(F.ALIGNED_DAY_OF_WEEK_IN_MONTH) == 4
    assert d.get(F.ALIGNED_WEEK_OF_YEAR) == 33
    assert d.get(F.ALIGNED_DAY_OF_WEEK_IN_YEAR) == 7
    assert d.get_long(F.PROLEPTIC_MONTH) == 2008 * 12 + 7
    assert d.get(F.ERA) == 1
    assert d.get_long(F.EPOCH_DAY) == 14109
    # dispatch through the field gives the same answer
    assert F.DAY_OF_MONTH.get_from(d) == 18
    assert F.DAY_OF_MONTH.is_supported_by(d)


def test_date_ranges():
    assert ISO.date(2008, 2, 10).range(F.DAY_OF_MONTH) == ValueRange.of(1, 29)
    assert ISO.date(2009, 2, 10).range(F.DAY_OF_MONTH) == ValueRange.of(1, 28)
    assert ISO.date(2009, 2, 10).range(F.ALIGNED_WEEK_OF_MONTH) == ValueRange.of(1, 4)
    assert ISO.date(2008, 6, 1).range(F.DAY_OF_YEAR) == ValueRange.of(1, 366)


def test_date_with_field():
    d = ISO.date(2009, 1, 31)
    assert d.with_field(F.MONTH_OF_YEAR, 2) == ISO.date(2009, 2, 28)
    assert d.with_field(F.DAY_OF_WEEK, 1) == ISO.date(2009, 1, 26)
    assert d.with_field(F.DAY_OF_YEAR, 60) == ISO.date(2009, 3, 1)
    assert d.with_field(F.YEAR, 2008) == ISO.date(2008, 1, 31)
    assert ISO.date(2008, 2, 29).with_field(F.YEAR, 2009) == ISO.date(2009, 2, 28)
    assert F.DAY_OF_MONTH.adjust_into(d, 1) == ISO.date(2009, 1, 1)
    with pytest.raises(InvalidValueError):
        ISO.date(2009, 2, 1).with_field(F.DAY_OF_MONTH, 29)


def test_date_plus():
    d = ISO.date(2008, 1, 31)
    assert d.plus(1, ChronoUnit.MONTHS) == ISO.date(2008, 2, 29)
    assert d.plus(13, ChronoUnit.MONTHS) == ISO.date(2009, 2, 28)
    assert d.plus(-1, ChronoUnit.DAYS) == ISO.date(2008, 1, 30)
    assert d.plus(2, ChronoUnit.WEEKS) == ISO.date(2008, 2, 14)
    assert d.minus(1, ChronoUnit.DECADES) == ISO.date(1998, 1, 31)
    with pytest.raises(UnsupportedFieldError):
        d.plus(1, ChronoUnit.HOURS)


def test_invalid_dates():
    with pytest.raises(InvalidValueError):
        ISO.date(2009, 2, 29)
    with pytest.raises(InvalidValueError):
        ISO.date(2009, 13, 1)
    with pytest.raises(InvalidValueError):
        ISO.date_year_day(2009, 366)


def test_unsupported_fields():
    d = ISO.date(2008, 8, 18)
    t = TimeOfDay(13, 5)
    assert not d.is_supported(F.HOUR_OF_DAY)
    assert not t.is_supported(F.DAY_OF_MONTH)
    assert not d.is_supported(None)
    with pytest.raises(UnsupportedFieldError) as ei:
        t.get(F.DAY_OF_MONTH)
    assert ei.value.field is F.DAY_OF_MONTH
    assert ei.value.target is t
    with pytest.raises(UnsupportedFieldError):
        d.with_field(F.NANO_OF_SECOND, 0)
    with pytest.raises(UnsupportedFieldError):
        d.range(F.OFFSET_SECONDS)


def test_time_of_day():
    t = TimeOfDay(13, 5, 7, 250_000_000)
    assert t.get(F.CLOCK_HOUR_OF_AMPM) == 1
    assert t.get(F.AMPM_OF_DAY) == 1
    assert t.get(F.MINUTE_OF_DAY) == 785
    assert t.get(F.MILLI_OF_SECOND) == 250
    assert t.get_long(F.NANO_OF_DAY) == 47107 * 1_000_000_000 + 250_000_000
    assert t.with_field(F.AMPM_OF_DAY, 0) == TimeOfDay(1, 5, 7, 250_000_000)
    assert t.with_field(F.CLOCK_HOUR_OF_DAY, 24) == TimeOfDay(0, 5, 7, 250_000_000)
    assert TimeOfDay(23, 30).plus(1, ChronoUnit.HOURS) == TimeOfDay(0, 30)
    assert TimeOfDay(0, 0).minus(1, ChronoUnit.NANOS) == TimeOfDay(23, 59, 59, 999_999_999)
    assert str(TimeOfDay(9, 5)) == "09:05:00"
    with pytest.raises(InvalidValueError):
        TimeOfDay(24, 0)


@dataclass(frozen=True)
class _DayOfDecade:
    """A user-defined field: days since the start of the decade, from 1."""
    name: str = "DayOfDecade"
    base_unit: ChronoUnit = ChronoUnit.DAYS
    range_unit: ChronoUnit = ChronoUnit.DECADES

    def range(self) -> ValueRange:
        return ValueRange.of(1, 3652, 3653)

    def _start(self, temporal: Any) -> Any:
        y = temporal.get(F.YEAR)
        return temporal.with_field(F.YEAR, y - y % 10).with_field(F.DAY_OF_YEAR, 1)

    def is_supported_by(self, temporal: Any) -> bool:
        return temporal.is_supported(F.EPOCH_DAY)

    def range_of(self, temporal: Any) -> ValueRange:
        return self.range()

    def get_from(self, temporal: Any) -> int:
        return temporal.get_long(F.EPOCH_DAY) - self._start(temporal).get_long(F.EPOCH_DAY) + 1

    def adjust_into(self, temporal: Any, value: int) -> Any:
        return self._start(temporal).plus(value - 1, ChronoUnit.DAYS)

    def resolve(self, builder: Any, value: int) -> bool:
        return False


def test_user_defined_field():
    field = _DayOfDecade()
    assert isinstance(field, TemporalField)
    d = ISO.date(2001, 1, 1)
    assert d.is_supported(field)
    assert d.get(field) == 367
    assert d.with_field(field, 1) == ISO.date(2000, 1, 1)
    assert not TimeOfDay(1).is_supported(field)
