"""caltime public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registries on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    instant,
    from_datetime,
    tai_to_utc,
    utc_to_tai,
    convert,
    convert_with_validity,
    validity,
    plus,
    nanos_between,
    tai_offset,
    leap_second_adjustment,
    leap_second_dates,
    register_leap_second,
    leap_table,
    list_chronologies,
    get_chronology,
    register_chronology,
    resolve_fields,
    week_numbers,
)
from .core.types import Conversion, ScaleInstant, TimeScale, Validity
from .fields.builder import DateTimeBuilder
from .fields.chrono import ChronoField
from .fields.units import ChronoUnit
from .fields.weeks import WeekFields

__all__ = [
    "instant",
    "from_datetime",
    "tai_to_utc",
    "utc_to_tai",
    "convert",
    "convert_with_validity",
    "validity",
    "plus",
    "nanos_between",
    "tai_offset",
    "leap_second_adjustment",
    "leap_second_dates",
    "register_leap_second",
    "leap_table",
    "list_chronologies",
    "get_chronology",
    "register_chronology",
    "resolve_fields",
    "week_numbers",
    "Conversion",
    "ScaleInstant",
    "TimeScale",
    "Validity",
    "DateTimeBuilder",
    "ChronoField",
    "ChronoUnit",
    "WeekFields",
]
