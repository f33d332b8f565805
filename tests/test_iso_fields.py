from __future__ import annotations

from datetime import date, timedelta

import pytest

from caltime.chrono.coptic import COPTIC
from caltime.chrono.iso import ISO
from caltime.core.errors import InvalidValueError, UnsupportedFieldError
from caltime.fields.builder import DateTimeBuilder
from caltime.fields.chrono import ChronoField as F
from caltime.fields.iso import (
    DAY_OF_QUARTER,
    QUARTER_OF_YEAR,
    WEEK_BASED_YEAR,
    WEEK_OF_WEEK_BASED_YEAR,
    weeks_in_year,
)
from caltime.fields.ranges import ValueRange


def test_quarter_fields():
    d = ISO.date(2008, 8, 18)
    assert d.get(QUARTER_OF_YEAR) == 3
    assert d.get(DAY_OF_QUARTER) == 49
    assert ISO.date(2008, 3, 31).get(DAY_OF_QUARTER) == 91
    assert ISO.date(2009, 3, 31).get(DAY_OF_QUARTER) == 90
    assert ISO.date(2009, 12, 31).get(DAY_OF_QUARTER) == 92


def test_quarter_ranges():
    assert ISO.date(2008, 2, 10).range(DAY_OF_QUARTER) == ValueRange.of(1, 91)
    assert ISO.date(2009, 2, 10).range(DAY_OF_QUARTER) == ValueRange.of(1, 90)
    assert ISO.date(2009, 5, 10).range(DAY_OF_QUARTER) == ValueRange.of(1, 91)
    assert ISO.date(2009, 11, 10).range(DAY_OF_QUARTER) == ValueRange.of(1, 92)


def test_week_based_year_matches_isocalendar():
    d = date(2004, 12, 1)
    while d < date(2011, 2, 1):
        iy, iw, _ = d.isocalendar()
        cd = ISO.date(d.year, d.month, d.day)
        assert cd.get(WEEK_BASED_YEAR) == iy, d
        assert cd.get(WEEK_OF_WEEK_BASED_YEAR) == iw, d
        d += timedelta(days=1)


def test_weeks_in_year():
    assert weeks_in_year(2004) == 53
    assert weeks_in_year(2009) == 53
    assert weeks_in_year(2008) == 52
    assert weeks_in_year(2015) == 53
    assert ISO.date(2010, 1, 3).range(WEEK_OF_WEEK_BASED_YEAR) == ValueRange.of(1, 53)


def test_adjust():
    d = ISO.date(2008, 8, 18)
    assert d.with_field(QUARTER_OF_YEAR, 1) == ISO.date(2008, 2, 18)
    assert d.with_field(DAY_OF_QUARTER, 1) == ISO.date(2008, 7, 1)
    assert d.with_field(WEEK_OF_WEEK_BASED_YEAR, 1) == ISO.date(2007, 12, 31)
    assert ISO.date(2009, 1, 1).with_field(WEEK_BASED_YEAR, 2010) == ISO.date(2010, 1, 7)
    # week 53 clamps to 52 in a short year
    assert ISO.date(2010, 1, 3).with_field(WEEK_BASED_YEAR, 2008) == ISO.date(2008, 12, 28)
    with pytest.raises(InvalidValueError):
        ISO.date(2009, 2, 10).with_field(DAY_OF_QUARTER, 91)


def test_resolve():
    b = DateTimeBuilder({F.YEAR: 2008, QUARTER_OF_YEAR: 3, DAY_OF_QUARTER: 49})
    assert b.build_date() == ISO.date(2008, 8, 18)
    b = DateTimeBuilder({WEEK_BASED_YEAR: 2009, WEEK_OF_WEEK_BASED_YEAR: 53, F.DAY_OF_WEEK: 7})
    assert b.build_date() == ISO.date(2010, 1, 3)
    with pytest.raises(InvalidValueError):
        DateTimeBuilder({WEEK_BASED_YEAR: 2008, WEEK_OF_WEEK_BASED_YEAR: 53, F.DAY_OF_WEEK: 1}).build_date()


def test_iso_only():
    c = COPTIC.date(1686, 4, 23)
    assert not c.is_supported(QUARTER_OF_YEAR)
    assert not c.is_supported(WEEK_BASED_YEAR)
    with pytest.raises(UnsupportedFieldError):
        c.get(QUARTER_OF_YEAR)
