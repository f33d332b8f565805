from __future__ import annotations

import pytest

from caltime.chrono.coptic import COPTIC
from caltime.chrono.iso import ISO
from caltime.chrono.time import TimeOfDay
from caltime.core.errors import InvalidValueError, UnsupportedFieldError
from caltime.fields.builder import DateTimeBuilder
from caltime.fields.julian import JULIAN_DAY, MODIFIED_JULIAN_DAY, RATA_DIE


def test_known_values():
    epoch = ISO.date(1970, 1, 1)
    assert epoch.get_long(JULIAN_DAY) == 2440588
    assert epoch.get_long(MODIFIED_JULIAN_DAY) == 40587
    assert epoch.get_long(RATA_DIE) == 719163
    assert ISO.date(2009, 1, 1).get_long(MODIFIED_JULIAN_DAY) == 54832
    assert ISO.date(1, 1, 1).get_long(RATA_DIE) == 1
    assert ISO.date(1858, 11, 17).get_long(MODIFIED_JULIAN_DAY) == 0
    assert ISO.date(2000, 1, 1).get_long(JULIAN_DAY) == 2451545


def test_adjust():
    d = ISO.date(2008, 8, 18)
    assert d.with_field(MODIFIED_JULIAN_DAY, 54832) == ISO.date(2009, 1, 1)
    assert d.with_field(JULIAN_DAY, 2440588) == ISO.date(1970, 1, 1)
    with pytest.raises(InvalidValueError):
        d.with_field(JULIAN_DAY, 10**15)


def test_any_epoch_day_chronology():
    c = COPTIC.date(1686, 4, 23)
    assert c.is_supported(JULIAN_DAY)
    assert c.get_long(JULIAN_DAY) == 2440588
    assert c.with_field(MODIFIED_JULIAN_DAY, 40588) == COPTIC.date(1686, 4, 24)


def test_not_supported_by_time():
    t = TimeOfDay(12)
    assert not t.is_supported(JULIAN_DAY)
    with pytest.raises(UnsupportedFieldError):
        t.get_long(JULIAN_DAY)


def test_resolve():
    assert DateTimeBuilder({MODIFIED_JULIAN_DAY: 54832}).build_date() == ISO.date(2009, 1, 1)
    assert DateTimeBuilder({RATA_DIE: 1}).build_date() == ISO.date(1, 1, 1)
    assert DateTimeBuilder({JULIAN_DAY: 2440588}, chronology=COPTIC).build_date() == COPTIC.date(1686, 4, 23)


def test_field_metadata():
    assert str(JULIAN_DAY) == "JulianDay"
    r = MODIFIED_JULIAN_DAY.range()
    assert r.minimum < 0 < r.maximum
