from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .chrono.base import ChronoDate, Chronology, ChronologyRegistry
from .core.time import SECONDS_PER_DAY, date_of_mjd, mjd_of, to_epoch_day
from .core.types import Conversion, ScaleInstant, TimeScale, Validity
from .fields.builder import DateTimeBuilder
from .fields.weeks import WeekFields
from .scales.converter import TimeScaleConverter
from .scales.leapseconds import LeapSecondRegistry, LeapSecondTable

_registry: Optional[LeapSecondRegistry] = None
_converter: Optional[TimeScaleConverter] = None
_chronologies: Optional[ChronologyRegistry] = None


def set_registry(reg: LeapSecondRegistry) -> None:
    global _registry, _converter
    _registry = reg
    _converter = TimeScaleConverter(reg)


def set_chronologies(reg: ChronologyRegistry) -> None:
    global _chronologies
    _chronologies = reg


def _reg() -> LeapSecondRegistry:
    if _registry is None:
        raise RuntimeError("Leap-second registry not initialized")
    return _registry


def _conv() -> TimeScaleConverter:
    if _converter is None:
        raise RuntimeError("Leap-second registry not initialized")
    return _converter


def _chronos() -> ChronologyRegistry:
    if _chronologies is None:
        raise RuntimeError("Chronology registry not initialized")
    return _chronologies


def leap_registry() -> LeapSecondRegistry:
    return _reg()


def converter() -> TimeScaleConverter:
    return _conv()


# ============================================================
# Instants
# ============================================================

def instant(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    nano: int = 0,
    *,
    scale: TimeScale = TimeScale.UTC,
) -> ScaleInstant:
    """Instant from a calendar label; second=60 selects the leap second of a UTC day."""
    leap = 1 if second == 60 else 0
    secs = to_epoch_day(year, month, day) * SECONDS_PER_DAY + hour * 3600 + minute * 60 + second - leap
    return ScaleInstant(scale, secs, nano, leap)


def from_datetime(dt: datetime, *, scale: TimeScale = TimeScale.UTC) -> ScaleInstant:
    return ScaleInstant.of_datetime(dt, scale)


# ============================================================
# Conversions
# ============================================================

def tai_to_utc(tai: ScaleInstant) -> ScaleInstant:
    return _conv().tai_to_utc(tai)


def utc_to_tai(utc: ScaleInstant) -> ScaleInstant:
    return _conv().utc_to_tai(utc)


def convert(inst: ScaleInstant, scale: TimeScale) -> ScaleInstant:
    return _conv().convert(inst, scale)


def convert_with_validity(inst: ScaleInstant, scale: TimeScale) -> Conversion:
    return _conv().resolve(inst, scale)


def validity(utc: ScaleInstant) -> Validity:
    return _conv().validity(utc)


def plus(inst: ScaleInstant, seconds: int = 0, nanos: int = 0) -> ScaleInstant:
    return _conv().plus(inst, seconds, nanos)


def nanos_between(a: ScaleInstant, b: ScaleInstant) -> int:
    return _conv().nanos_between(a, b)


# ============================================================
# Leap seconds
# ============================================================

def tai_offset(d: Union[date, int]) -> int:
    """TAI-UTC during a UTC day (date or MJD)."""
    return _reg().tai_offset(d if isinstance(d, int) else mjd_of(d))


def leap_second_adjustment(d: Union[date, int]) -> int:
    return _reg().adjustment(d if isinstance(d, int) else mjd_of(d))


def leap_second_dates() -> List[date]:
    """UTC days that end with a leap second."""
    return [date_of_mjd(m) for m in _reg().leap_second_dates()]


def register_leap_second(d: Union[date, int], adjustment: int = 1) -> LeapSecondTable:
    return _reg().register_leap_second(d if isinstance(d, int) else mjd_of(d), adjustment)


def leap_table() -> List[Tuple[date, int, int]]:
    """Rows (first day of new offset, TAI-UTC, TAI seconds at change)."""
    snap = _reg().snapshot
    return [
        (date_of_mjd(m + 1), off, tai)
        for m, off, tai in zip(snap.dates, snap.offsets, snap.tai_seconds)
    ]


# ============================================================
# Chronologies and fields
# ============================================================

def list_chronologies() -> List[str]:
    return _chronos().list()


def get_chronology(name: str) -> Chronology:
    return _chronos().get(name)


def register_chronology(name: str, chronology: Chronology, *, overwrite: bool = False) -> None:
    _chronos().register(name, chronology, overwrite=overwrite)


def resolve_fields(values: Mapping[Any, int], *, chronology: str = "ISO") -> ChronoDate:
    """Resolve raw field values (ChronoField or any TemporalField) into a date."""
    return DateTimeBuilder(dict(values), chronology=get_chronology(chronology)).build_date()


def week_numbers(d: date, *, week_fields: WeekFields = WeekFields.ISO) -> Dict[str, int]:
    cd = get_chronology("ISO").date(d.year, d.month, d.day)
    return {
        "day_of_week": cd.get(week_fields.day_of_week()),
        "week_of_month": cd.get(week_fields.week_of_month()),
        "week_of_year": cd.get(week_fields.week_of_year()),
    }

