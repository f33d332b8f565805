from __future__ import annotations

"""
caltime.fields.base

Double dispatch between temporal objects and fields.

A Temporal answers the built-in ChronoField members it supports itself
(fast path). Any other field is asked to do the work, receiving the
temporal as argument, and must build its answer from the temporal's own
public operations. Neither side needs to enumerate the other.
"""

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from ..core.errors import UnsupportedFieldError
from .chrono import ChronoField
from .ranges import ValueRange
from .units import ChronoUnit

if TYPE_CHECKING:
    from .builder import DateTimeBuilder

T = TypeVar("T", bound="Temporal")


@runtime_checkable
class TemporalField(Protocol):
    name: str
    base_unit: ChronoUnit
    range_unit: ChronoUnit

    def range(self) -> ValueRange: ...
    def is_supported_by(self, temporal: Any) -> bool: ...
    def range_of(self, temporal: Any) -> ValueRange: ...
    def get_from(self, temporal: Any) -> int: ...
    def adjust_into(self, temporal: Any, value: int) -> Any: ...
    def resolve(self, builder: "DateTimeBuilder", value: int) -> bool: ...


class Temporal:
    """Base for date-time objects; subclasses implement the underscore hooks."""

    def _supports(self, field: ChronoField) -> bool:
        raise NotImplementedError

    def _range(self, field: ChronoField) -> ValueRange:
        return field.range()

    def _get(self, field: ChronoField) -> int:
        raise NotImplementedError

    def _with(self: T, field: ChronoField, value: int) -> T:
        raise NotImplementedError

    def plus(self: T, amount: int, unit: ChronoUnit) -> T:
        raise NotImplementedError

    # ---- public protocol ----

    def is_supported(self, field: Any) -> bool:
        if isinstance(field, ChronoField):
            return self._supports(field)
        return field is not None and field.is_supported_by(self)

    def range(self, field: Any) -> ValueRange:
        if isinstance(field, ChronoField):
            if self._supports(field):
                return self._range(field)
            raise UnsupportedFieldError(field, self)
        return field.range_of(self)

    def get_long(self, field: Any) -> int:
        if isinstance(field, ChronoField):
            if self._supports(field):
                return self._get(field)
            raise UnsupportedFieldError(field, self)
        return field.get_from(self)

    def get(self, field: Any) -> int:
        """Like get_long, but the value must fit the field's (int) range."""
        return self.range(field).check_valid_int_value(self.get_long(field), field)

    def with_field(self: T, field: Any, value: int) -> T:
        if isinstance(field, ChronoField):
            if self._supports(field):
                return self._with(field, value)
            raise UnsupportedFieldError(field, self)
        return field.adjust_into(self, value)

    def minus(self: T, amount: int, unit: ChronoUnit) -> T:
        return self.plus(-amount, unit)
