from __future__ import annotations

"""
caltime.scales.converter

TAI <-> UTC <-> UTC-SLS <-> TT.

All scales count seconds from their own 1970-01-01T00:00:00 label. TAI is
continuous; UTC labels days of 86400 s plus leap seconds (1972 onward) or
follows the rate-based offsets of 1961-1971 (see ``early``).

Conversions never raise for in-range instants. Where a UTC label occurs
twice or never, the result is still produced and ``validity`` says so.
"""

from fractions import Fraction
from typing import Optional

from ..core.errors import InvalidArgumentError
from ..core.time import NANOS_PER_SECOND, SECONDS_PER_DAY, date_of_mjd
from ..core.types import Conversion, ScaleInstant, TimeScale, Validity
from .early import EARLY_UTC_TABLE
from .intervals import IntervalEntry, IntervalTable
from .leapseconds import LeapSecondRegistry

TT_MINUS_TAI_NANOS = 32_184_000_000
SLS_WINDOW_SECONDS = 1000


def _solve_source(entry: IntervalEntry, target: Fraction) -> Fraction:
    """Source value u with u + entry.offset_at(u) == target (exact)."""
    if entry.is_constant:
        return target - entry.offset
    ref = entry.start if entry.ref is None else entry.ref
    return (target - entry.offset + entry.rate * ref) / (1 + entry.rate)


def _round_nanos(seconds: Fraction) -> int:
    return round(seconds * NANOS_PER_SECOND)


class TimeScaleConverter:
    def __init__(self, registry: LeapSecondRegistry, early: Optional[IntervalTable] = None):
        self.registry = registry
        self.early = EARLY_UTC_TABLE if early is None else early
        handover = self.early[-1]
        self._handover_utc = handover.start
        self._handover_tai = handover.target_start

    # ------------------------------------------------------------
    # TAI <-> UTC
    # ------------------------------------------------------------

    def _check(self, instant: ScaleInstant, scale: TimeScale) -> None:
        if instant.scale is not scale:
            raise InvalidArgumentError(f"expected a {scale.value} instant, got {instant.scale.value}")

    def tai_to_utc(self, tai: ScaleInstant) -> ScaleInstant:
        self._check(tai, TimeScale.TAI)
        t = Fraction(tai.total_nanos, NANOS_PER_SECOND)

        if t >= self._handover_tai:
            table = self.registry.snapshot
            entry = table.entry_from_target(t)
            utc_nanos = tai.total_nanos - int(entry.offset) * NANOS_PER_SECOND
            nxt = table.next_entry(entry)
            if nxt is not None and utc_nanos >= nxt.start * NANOS_PER_SECOND:
                # inside the inserted second: keep the day, flag 23:59:60
                nano = utc_nanos - nxt.start * NANOS_PER_SECOND
                return ScaleInstant(TimeScale.UTC, nxt.start - 1, nano, 1)
            return ScaleInstant.of(TimeScale.UTC, 0, utc_nanos)

        entry = self.early.entry_from_target(t)
        u = _solve_source(entry, t)
        nxt = self.early.next_entry(entry)
        if nxt is not None and u >= nxt.start:
            # repeated stretch of UTC: second pass uses the new offset
            u = _solve_source(nxt, t)
        return ScaleInstant.of(TimeScale.UTC, 0, _round_nanos(u))

    def utc_to_tai(self, utc: ScaleInstant) -> ScaleInstant:
        self._check(utc, TimeScale.UTC)
        if utc.epoch_seconds >= self._handover_utc:
            offset = int(self.registry.snapshot.entry_at(utc.epoch_seconds).offset)
            return ScaleInstant(TimeScale.TAI, utc.epoch_seconds + utc.leap + offset, utc.nano)

        u = Fraction(utc.total_nanos, NANOS_PER_SECOND) + utc.leap
        entry = self.early.entry_at(u)
        return ScaleInstant.of(TimeScale.TAI, 0, _round_nanos(u + entry.offset_at(u)))

    def validity(self, utc: ScaleInstant) -> Validity:
        self._check(utc, TimeScale.UTC)
        table = self.registry.snapshot
        mjd = utc.mjd

        if utc.leap:
            adj = table.adjustment(mjd)
            if adj == 1:
                return Validity.VALID
            last = table.last_mjd
            if adj == 0 and last is not None and mjd > last and date_of_mjd(mjd + 1).day == 1:
                return Validity.POSSIBLE
            return Validity.INVALID

        if utc.epoch_seconds >= self._handover_utc:
            if utc.second_of_day == SECONDS_PER_DAY - 1 and table.adjustment(mjd) == -1:
                return Validity.INVALID
            return Validity.VALID

        u = Fraction(utc.total_nanos, NANOS_PER_SECOND)
        entry = self.early.entry_at(u)
        nxt = self.early.next_entry(entry)
        if nxt is None:
            return Validity.VALID
        b = nxt.start
        step = nxt.offset_at(b) - entry.offset_at(b)
        if step > 0 and u >= b - step:
            return Validity.AMBIGUOUS
        if step < 0 and u >= b + step:
            return Validity.INVALID
        return Validity.VALID

    # ------------------------------------------------------------
    # UTC <-> UTC-SLS
    # ------------------------------------------------------------

    def utc_to_sls(self, utc: ScaleInstant) -> ScaleInstant:
        self._check(utc, TimeScale.UTC)
        mjd = utc.mjd
        nod = utc.nano_of_day
        adj = self.registry.adjustment(mjd)
        start = (SECONDS_PER_DAY + adj - SLS_WINDOW_SECONDS) * NANOS_PER_SECOND
        if adj != 0 and nod >= start:
            nod -= adj * ((nod - start) // SLS_WINDOW_SECONDS)
        return ScaleInstant.of(TimeScale.UTC_SLS, utc.epoch_day * SECONDS_PER_DAY, nod)

    def sls_to_utc(self, sls: ScaleInstant) -> ScaleInstant:
        self._check(sls, TimeScale.UTC_SLS)
        mjd = sls.mjd
        nod = sls.nano_of_day
        adj = self.registry.adjustment(mjd)
        start = (SECONDS_PER_DAY + adj - SLS_WINDOW_SECONDS) * NANOS_PER_SECOND
        if adj != 0 and nod >= start:
            nod = start + ((nod - start) * SLS_WINDOW_SECONDS) // (SLS_WINDOW_SECONDS - adj)
        return ScaleInstant.of_mjd(TimeScale.UTC, mjd, nod)

    # ------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------

    def _to_tai(self, instant: ScaleInstant) -> ScaleInstant:
        s = instant.scale
        if s is TimeScale.TAI:
            return instant
        if s is TimeScale.UTC:
            return self.utc_to_tai(instant)
        if s is TimeScale.UTC_SLS:
            return self.utc_to_tai(self.sls_to_utc(instant))
        return ScaleInstant.of(TimeScale.TAI, instant.epoch_seconds, instant.nano - TT_MINUS_TAI_NANOS)

    def _from_tai(self, tai: ScaleInstant, scale: TimeScale) -> ScaleInstant:
        if scale is TimeScale.TAI:
            return tai
        if scale is TimeScale.UTC:
            return self.tai_to_utc(tai)
        if scale is TimeScale.UTC_SLS:
            return self.utc_to_sls(self.tai_to_utc(tai))
        return ScaleInstant.of(TimeScale.TT, tai.epoch_seconds, tai.nano + TT_MINUS_TAI_NANOS)

    def convert(self, instant: ScaleInstant, scale: TimeScale) -> ScaleInstant:
        if instant.scale is scale:
            return instant
        if instant.scale is TimeScale.UTC and scale is TimeScale.UTC_SLS:
            return self.utc_to_sls(instant)
        if instant.scale is TimeScale.UTC_SLS and scale is TimeScale.UTC:
            return self.sls_to_utc(instant)
        return self._from_tai(self._to_tai(instant), scale)

    def resolve(self, instant: ScaleInstant, scale: TimeScale) -> Conversion:
        """Convert and report the validity of the UTC label involved (VALID if none)."""
        out = self.convert(instant, scale)
        if instant.scale is TimeScale.UTC:
            return Conversion(out, self.validity(instant))
        if scale is TimeScale.UTC:
            return Conversion(out, self.validity(out))
        return Conversion(out, Validity.VALID)

    # ------------------------------------------------------------
    # Registry lookups and arithmetic
    # ------------------------------------------------------------

    def tai_offset(self, mjd: int) -> int:
        return self.registry.tai_offset(mjd)

    def leap_second_adjustment(self, mjd: int) -> int:
        return self.registry.adjustment(mjd)

    def plus(self, instant: ScaleInstant, seconds: int = 0, nanos: int = 0) -> ScaleInstant:
        """Add elapsed SI time; for UTC this counts leap seconds."""
        tai = self._to_tai(instant)
        return self._from_tai(ScaleInstant.of(TimeScale.TAI, tai.epoch_seconds + seconds, tai.nano + nanos), instant.scale)

    def minus(self, instant: ScaleInstant, seconds: int = 0, nanos: int = 0) -> ScaleInstant:
        return self.plus(instant, -seconds, -nanos)

    def nanos_between(self, a: ScaleInstant, b: ScaleInstant) -> int:
        return self._to_tai(b).total_nanos - self._to_tai(a).total_nanos
