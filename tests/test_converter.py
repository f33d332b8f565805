from __future__ import annotations

import random
from datetime import date

import pytest

from caltime.api import instant
from caltime.core.errors import InvalidArgumentError
from caltime.core.time import mjd_of, to_epoch_day
from caltime.core.types import ScaleInstant, TimeScale, Validity
from caltime.scales.converter import TimeScaleConverter
from caltime.scales.leapseconds import LeapSecondRegistry, load_leap_seconds

TAI = TimeScale.TAI
UTC = TimeScale.UTC
SLS = TimeScale.UTC_SLS
TT = TimeScale.TT

S2009 = 1230768000          # 2009-01-01T00:00:00 as a 1970-based label
NS = 1_000_000_000


@pytest.fixture
def conv():
    return TimeScaleConverter(LeapSecondRegistry(load_leap_seconds()))


@pytest.fixture
def conv_negative():
    reg = LeapSecondRegistry(load_leap_seconds())
    reg.register_leap_second(mjd_of(date(2030, 6, 30)), -1)
    return TimeScaleConverter(reg)


def _utc(*args, **kw):
    return instant(*args, scale=UTC, **kw)


# ---------------------------------------------------------------------------
# Leap-second era
# ---------------------------------------------------------------------------

def test_offsets_around_2009(conv):
    assert conv.tai_offset(mjd_of(date(2008, 12, 31))) == 33
    assert conv.tai_offset(mjd_of(date(2009, 1, 1))) == 34
    assert conv.leap_second_adjustment(mjd_of(date(2008, 12, 31))) == 1


def test_tai_inside_leap_second(conv):
    tai = ScaleInstant(TAI, S2009 + 33, 500_000_000)
    utc = conv.tai_to_utc(tai)
    assert utc == ScaleInstant(UTC, S2009 - 1, 500_000_000, 1)
    assert str(utc) == "2008-12-31T23:59:60.500000000(UTC)"
    assert utc == _utc(2008, 12, 31, 23, 59, 60, 500_000_000)
    assert conv.validity(utc) is Validity.VALID
    assert conv.utc_to_tai(utc) == tai


def test_tai_at_leap_second_edges(conv):
    assert conv.tai_to_utc(ScaleInstant(TAI, S2009 + 33)) == _utc(2008, 12, 31, 23, 59, 60)
    assert conv.tai_to_utc(ScaleInstant(TAI, S2009 + 34)) == _utc(2009, 1, 1)
    assert conv.tai_to_utc(ScaleInstant(TAI, S2009 + 32, 500_000_000)) == _utc(2008, 12, 31, 23, 59, 59, 500_000_000)
    assert conv.utc_to_tai(_utc(2009, 1, 1)) == ScaleInstant(TAI, S2009 + 34)


def test_round_trip_leap_era(conv):
    random.seed(42)
    lo = to_epoch_day(1972, 1, 1) * 86400 + 10
    hi = to_epoch_day(2030, 1, 1) * 86400
    for _ in range(3000):
        tai = ScaleInstant(TAI, random.randint(lo, hi), random.randint(0, NS - 1))
        assert conv.utc_to_tai(conv.tai_to_utc(tai)) == tai


def test_round_trip_at_every_leap_second(conv):
    for t in conv.registry.snapshot.tai_seconds[1:]:
        for secs, nano in ((t - 2, 0), (t - 1, 0), (t - 1, 999_999_999), (t, 0), (t, 1)):
            tai = ScaleInstant(TAI, secs, nano)
            utc = conv.tai_to_utc(tai)
            assert conv.utc_to_tai(utc) == tai
            assert conv.validity(utc) is Validity.VALID
        assert conv.tai_to_utc(ScaleInstant(TAI, t - 1, 250_000_000)).leap == 1


def test_utc_is_monotonic(conv):
    random.seed(42)
    lo = to_epoch_day(1972, 1, 1) * 86400 + 10
    hi = to_epoch_day(2018, 1, 1) * 86400
    points = [random.randint(lo, hi) * NS + random.randint(0, NS - 1) for _ in range(1000)]
    for t in conv.registry.snapshot.tai_seconds[1:]:
        points += [(t - 1) * NS - 1, (t - 1) * NS, t * NS - 1, t * NS]
    points.sort()
    utcs = [conv.tai_to_utc(ScaleInstant.of(TAI, 0, p)) for p in points]
    for a, b in zip(utcs, utcs[1:]):
        assert a < b


def test_scale_mismatch_raises(conv):
    with pytest.raises(InvalidArgumentError):
        conv.tai_to_utc(_utc(2009, 1, 1))
    with pytest.raises(InvalidArgumentError):
        conv.utc_to_tai(ScaleInstant(TAI, 0))
    with pytest.raises(InvalidArgumentError):
        conv.validity(ScaleInstant(TAI, 0))


# ---------------------------------------------------------------------------
# 1961-1971
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "ymd, nanos",
    [
        ((1950, 1, 1), 1_422_818_000),
        ((1961, 1, 1), 1_422_818_000),
        ((1966, 1, 1), 4_313_170_000),
        ((1968, 2, 1), 6_185_682_000),
        ((1971, 12, 31), 9_889_650_000),
        ((1972, 1, 1), 10_000_000_000),
    ],
)
def test_early_offsets(conv, ymd, nanos):
    utc = _utc(*ymd)
    assert conv.utc_to_tai(utc).total_nanos - utc.total_nanos == nanos


def test_early_round_trip_within_a_nanosecond(conv):
    random.seed(42)
    lo = to_epoch_day(1960, 6, 1) * 86400 * NS
    hi = to_epoch_day(1972, 1, 1) * 86400 * NS
    checked = 0
    for _ in range(3000):
        tai = ScaleInstant.of(TAI, 0, random.randint(lo, hi))
        utc = conv.tai_to_utc(tai)
        if conv.validity(utc) is Validity.AMBIGUOUS:
            continue
        back = conv.utc_to_tai(utc)
        assert abs(back.total_nanos - tai.total_nanos) <= 1
        checked += 1
    assert checked > 2900


def test_early_utc_round_trip(conv):
    random.seed(7)
    lo = to_epoch_day(1961, 1, 1) * 86400 * NS
    hi = to_epoch_day(1972, 1, 1) * 86400 * NS
    for _ in range(2000):
        utc = ScaleInstant.of(UTC, 0, random.randint(lo, hi))
        if conv.validity(utc) is not Validity.VALID:
            continue
        back = conv.tai_to_utc(conv.utc_to_tai(utc))
        assert abs(back.total_nanos - utc.total_nanos) <= 1


def test_repeated_labels_second_pass(conv):
    # 1965-09-01: UTC stepped back by 0.1 s
    b = to_epoch_day(1965, 9, 1) * 86400
    before = conv.utc_to_tai(_utc(1965, 9, 1)).total_nanos
    second_pass = conv.tai_to_utc(ScaleInstant.of(TAI, 0, before - 50_000_000))
    assert abs(second_pass.total_nanos - (b * NS - 50_000_000)) <= 1
    assert conv.validity(second_pass) is Validity.AMBIGUOUS


@pytest.mark.parametrize(
    "label, expected",
    [
        ((1961, 7, 31, 23, 59, 59, 970_000_000), Validity.INVALID),
        ((1961, 7, 31, 23, 59, 59, 940_000_000), Validity.VALID),
        ((1963, 10, 31, 23, 59, 59, 950_000_000), Validity.AMBIGUOUS),
        ((1963, 12, 31, 23, 59, 59, 999_000_000), Validity.VALID),
        ((1965, 8, 31, 23, 59, 59, 910_000_000), Validity.AMBIGUOUS),
        ((1965, 8, 31, 23, 59, 59, 890_000_000), Validity.VALID),
        ((1968, 1, 31, 23, 59, 59, 910_000_000), Validity.INVALID),
        ((1968, 1, 31, 23, 59, 59, 890_000_000), Validity.VALID),
        ((1971, 12, 31, 23, 59, 59, 950_000_000), Validity.AMBIGUOUS),
        ((1971, 12, 31, 23, 59, 59, 850_000_000), Validity.VALID),
        ((2008, 12, 31, 23, 59, 59, 0), Validity.VALID),
        ((2008, 12, 31, 23, 59, 60, 0), Validity.VALID),
        ((2009, 12, 31, 23, 59, 60, 0), Validity.INVALID),
        ((2030, 6, 30, 23, 59, 60, 0), Validity.POSSIBLE),
        ((2030, 12, 31, 23, 59, 60, 0), Validity.POSSIBLE),
        ((2030, 6, 15, 23, 59, 60, 0), Validity.INVALID),
    ],
)
def test_validity(conv, label, expected):
    assert conv.validity(_utc(*label)) is expected


def test_negative_leap_second(conv_negative):
    c = conv_negative
    assert c.validity(_utc(2030, 6, 30, 23, 59, 59)) is Validity.INVALID
    assert c.validity(_utc(2030, 6, 30, 23, 59, 58)) is Validity.VALID
    assert c.validity(_utc(2030, 6, 30, 23, 59, 60)) is Validity.INVALID
    assert c.plus(_utc(2030, 6, 30, 23, 59, 58), 1) == _utc(2030, 7, 1)
    assert c.nanos_between(_utc(2030, 6, 30, 23, 59, 58), _utc(2030, 7, 1)) == NS


# ---------------------------------------------------------------------------
# UTC-SLS
# ---------------------------------------------------------------------------

def test_sls_inside_leap_second(conv):
    leap = _utc(2008, 12, 31, 23, 59, 60)
    sls = conv.utc_to_sls(leap)
    assert sls == ScaleInstant(SLS, S2009 - 1, 1_000_000)
    assert conv.sls_to_utc(sls) == leap
    assert conv.utc_to_sls(_utc(2009, 1, 1)) == ScaleInstant(SLS, S2009)
    # before the window the labels agree
    assert conv.utc_to_sls(_utc(2008, 12, 31, 23, 43, 20)) == _utc(2008, 12, 31, 23, 43, 20).with_scale(SLS)


def test_sls_whole_seconds_round_trip(conv):
    mjd = mjd_of(date(2008, 12, 31))
    for k in range(1000):
        utc = ScaleInstant.of_mjd(UTC, mjd, (85401 + k) * NS)
        assert conv.sls_to_utc(conv.utc_to_sls(utc)) == utc


def test_sls_negative_day_round_trip(conv_negative):
    mjd = mjd_of(date(2030, 6, 30))
    for k in range(1000):
        utc = ScaleInstant.of_mjd(UTC, mjd, (85399 + k) * NS)
        assert conv_negative.sls_to_utc(conv_negative.utc_to_sls(utc)) == utc


def test_sls_sub_second_within_a_nanosecond(conv):
    random.seed(42)
    mjd = mjd_of(date(2008, 12, 31))
    for _ in range(500):
        utc = ScaleInstant.of_mjd(UTC, mjd, random.randint(85401 * NS, 86401 * NS - 1))
        back = conv.sls_to_utc(conv.utc_to_sls(utc))
        diff = conv.utc_to_tai(back).total_nanos - conv.utc_to_tai(utc).total_nanos
        assert abs(diff) <= 1


def test_sls_is_monotonic(conv):
    mjd = mjd_of(date(2008, 12, 31))
    prev = None
    for k in range(0, 86401 * NS, 997 * NS // 3):
        s = conv.utc_to_sls(ScaleInstant.of_mjd(UTC, mjd, k))
        if prev is not None:
            assert prev < s
        prev = s


# ---------------------------------------------------------------------------
# TT, dispatch, arithmetic
# ---------------------------------------------------------------------------

def test_tt(conv):
    tai = ScaleInstant(TAI, S2009)
    tt = conv.convert(tai, TT)
    assert tt == ScaleInstant(TT, S2009 + 32, 184_000_000)
    assert conv.convert(tt, TAI) == tai
    assert conv.convert(_utc(2009, 1, 1), TT) == ScaleInstant(TT, S2009 + 66, 184_000_000)


def test_convert_identity_and_sls(conv):
    u = _utc(2008, 12, 31, 23, 59, 60)
    assert conv.convert(u, UTC) is u
    assert conv.convert(u, SLS) == conv.utc_to_sls(u)
    assert conv.convert(conv.convert(u, SLS), UTC) == u
    assert conv.convert(conv.convert(u, TT), UTC) == u


def test_resolve_reports_validity(conv):
    r = conv.resolve(_utc(2030, 6, 30, 23, 59, 60), TAI)
    assert r.validity is Validity.POSSIBLE
    r = conv.resolve(ScaleInstant(TAI, S2009 + 33, 1), UTC)
    assert r.instant.leap == 1
    assert r.validity is Validity.VALID
    assert conv.resolve(ScaleInstant(TAI, 0), TT).validity is Validity.VALID


def test_plus_across_leap_second(conv):
    a = _utc(2008, 12, 31, 23, 59, 59)
    assert conv.plus(a, 1) == _utc(2008, 12, 31, 23, 59, 60)
    assert conv.plus(a, 2) == _utc(2009, 1, 1)
    assert conv.minus(_utc(2009, 1, 1), 1) == _utc(2008, 12, 31, 23, 59, 60)
    assert conv.nanos_between(a, _utc(2009, 1, 1)) == 2 * NS
    assert conv.nanos_between(_utc(2009, 1, 1), _utc(2009, 1, 2)) == 86400 * NS
    assert conv.plus(ScaleInstant(TAI, 0), 0, -1) == ScaleInstant(TAI, -1, NS - 1)
