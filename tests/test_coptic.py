from __future__ import annotations

import random

import pytest

from caltime.chrono.coptic import COPTIC
from caltime.chrono.iso import ISO
from caltime.core.errors import InvalidValueError
from caltime.fields.chrono import ChronoField as F
from caltime.fields.ranges import ValueRange
from caltime.fields.units import ChronoUnit


def test_epoch():
    d = COPTIC.date_epoch_day(0)
    assert d == COPTIC.date(1686, 4, 23)
    assert d.epoch_day == 0
    assert d.day_of_week == 4
    assert str(d) == "Coptic 1686-04-23"


def test_new_year():
    # 1 Thout falls on 11 September, or 12 September before a Gregorian leap year
    assert COPTIC.date(1725, 1, 1).epoch_day == ISO.date(2008, 9, 11).epoch_day
    assert COPTIC.date(1724, 1, 1).epoch_day == ISO.date(2007, 9, 12).epoch_day


def test_leap_years():
    assert COPTIC.is_leap_year(1687)
    assert COPTIC.is_leap_year(-1)
    assert not COPTIC.is_leap_year(1686)
    assert COPTIC.month_length(1687, 13) == 6
    assert COPTIC.month_length(1686, 13) == 5
    assert COPTIC.month_length(1686, 7) == 30
    assert COPTIC.year_length(1687) == 366
    assert COPTIC.date(1687, 13, 6).day_of_year == 366


def test_invalid_dates():
    with pytest.raises(InvalidValueError):
        COPTIC.date(1686, 13, 6)
    with pytest.raises(InvalidValueError):
        COPTIC.date(1686, 14, 1)
    with pytest.raises(InvalidValueError):
        COPTIC.date(1686, 1, 31)


def test_epoch_day_round_trip():
    random.seed(42)
    for _ in range(2000):
        ed = random.randint(-800_000, 800_000)
        d = COPTIC.date_epoch_day(ed)
        assert d.epoch_day == ed
        assert COPTIC.date(d.year, d.month, d.day) == d


def test_consecutive_days():
    d = COPTIC.date(1686, 12, 28)
    seen = [d]
    for _ in range(12):
        d = d.plus(1, ChronoUnit.DAYS)
        seen.append(d)
    assert [(x.month, x.day) for x in seen[2:9]] == [
        (12, 30), (13, 1), (13, 2), (13, 3), (13, 4), (13, 5), (1, 1)
    ]
    assert seen[8].year == 1687


def test_month_arithmetic():
    d = COPTIC.date(1686, 12, 30)
    assert d.plus(1, ChronoUnit.MONTHS) == COPTIC.date(1686, 13, 5)
    assert d.plus(2, ChronoUnit.MONTHS) == COPTIC.date(1687, 1, 30)
    assert COPTIC.date(1687, 13, 6).plus(1, ChronoUnit.YEARS) == COPTIC.date(1688, 13, 5)


def test_fields():
    d = COPTIC.date(1687, 13, 6)
    assert d.range(F.DAY_OF_MONTH) == ValueRange.of(1, 6)
    assert d.range(F.MONTH_OF_YEAR) == ValueRange.of(1, 13)
    assert d.get_long(F.PROLEPTIC_MONTH) == 1687 * 13 + 12
    assert d.with_field(F.MONTH_OF_YEAR, 1) == COPTIC.date(1687, 1, 6)
    assert d.with_field(F.YEAR, 1688) == COPTIC.date(1688, 13, 5)
    with pytest.raises(InvalidValueError):
        d.with_field(F.MONTH_OF_YEAR, 14)


def test_not_comparable_across_chronologies():
    with pytest.raises(TypeError):
        _ = COPTIC.date(1686, 4, 23) < ISO.date(1970, 1, 2)
    assert COPTIC.date(1686, 4, 23) != ISO.date(1970, 1, 1)
    assert COPTIC.date(1686, 4, 23) < COPTIC.date(1686, 4, 24)
