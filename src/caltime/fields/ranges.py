from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..core.errors import InvalidArgumentError, InvalidValueError

_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class ValueRange:
    """
    Outer bounds of a field.

    A range is advisory: every valid value lies inside it, but not every
    value inside it is valid for every date (e.g. day-of-month 31 in April).
    The minimum and maximum may themselves vary (smallest/largest).
    """
    min_smallest: int
    min_largest: int
    max_smallest: int
    max_largest: int

    def __post_init__(self) -> None:
        if self.min_smallest > self.min_largest:
            raise InvalidArgumentError("smallest minimum must not exceed largest minimum")
        if self.max_smallest > self.max_largest:
            raise InvalidArgumentError("smallest maximum must not exceed largest maximum")
        if self.min_largest > self.max_largest:
            raise InvalidArgumentError("minimum must not exceed maximum")

    @classmethod
    def of(cls, a: int, b: int, c: Optional[int] = None, d: Optional[int] = None) -> "ValueRange":
        """of(min, max) | of(min, max_smallest, max_largest) | of(min_s, min_l, max_s, max_l)"""
        if c is None:
            return cls(a, a, b, b)
        if d is None:
            return cls(a, a, b, c)
        return cls(a, b, c, d)

    @property
    def minimum(self) -> int:
        return self.min_smallest

    @property
    def maximum(self) -> int:
        return self.max_largest

    @property
    def is_fixed(self) -> bool:
        return self.min_smallest == self.min_largest and self.max_smallest == self.max_largest

    @property
    def is_int_value(self) -> bool:
        return self.minimum >= _INT_MIN and self.maximum <= _INT_MAX

    def is_valid_value(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def is_valid_int_value(self, value: int) -> bool:
        return self.is_int_value and self.is_valid_value(value)

    def check_valid_value(self, value: int, field: object = None) -> int:
        if not self.is_valid_value(value):
            raise InvalidValueError(field, value, self)
        return value

    def check_valid_int_value(self, value: int, field: object = None) -> int:
        if not self.is_valid_int_value(value):
            raise InvalidValueError(field, value, self)
        return int(value)

    def __str__(self) -> str:
        lo = str(self.min_smallest) if self.min_smallest == self.min_largest else f"{self.min_smallest}/{self.min_largest}"
        hi = str(self.max_smallest) if self.max_smallest == self.max_largest else f"{self.max_smallest}/{self.max_largest}"
        return f"{lo} - {hi}"
