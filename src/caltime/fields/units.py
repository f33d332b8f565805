from __future__ import annotations
from enum import Enum
from fractions import Fraction
from typing import Optional

_YEAR_SECONDS = 31556952  # mean Gregorian year


class ChronoUnit(Enum):
    """Units of time with an estimated duration (exact only up to DAYS)."""
    NANOS = ("Nanos", Fraction(1, 1_000_000_000))
    MICROS = ("Micros", Fraction(1, 1_000_000))
    MILLIS = ("Millis", Fraction(1, 1000))
    SECONDS = ("Seconds", Fraction(1))
    MINUTES = ("Minutes", Fraction(60))
    HOURS = ("Hours", Fraction(3600))
    HALF_DAYS = ("HalfDays", Fraction(43200))
    DAYS = ("Days", Fraction(86400))
    WEEKS = ("Weeks", Fraction(7 * 86400))
    MONTHS = ("Months", Fraction(_YEAR_SECONDS, 12))
    QUARTER_YEARS = ("QuarterYears", Fraction(_YEAR_SECONDS, 4))
    YEARS = ("Years", Fraction(_YEAR_SECONDS))
    WEEK_BASED_YEARS = ("WeekBasedYears", Fraction(_YEAR_SECONDS))
    DECADES = ("Decades", Fraction(_YEAR_SECONDS * 10))
    CENTURIES = ("Centuries", Fraction(_YEAR_SECONDS * 100))
    MILLENNIA = ("Millennia", Fraction(_YEAR_SECONDS * 1000))
    ERAS = ("Eras", Fraction(_YEAR_SECONDS * 1_000_000_000))
    FOREVER = ("Forever", None)

    def __init__(self, display: str, duration: Optional[Fraction]):
        self.display = display
        self.duration_seconds = duration

    @property
    def is_duration_estimated(self) -> bool:
        return self.duration_seconds is None or self.duration_seconds > 86400

    @property
    def is_date_based(self) -> bool:
        return self.duration_seconds is None or self.duration_seconds >= 86400

    @property
    def is_time_based(self) -> bool:
        return not self.is_date_based

    def __str__(self) -> str:
        return self.display
