from __future__ import annotations

from typing import Iterable, Optional


class CaltimeError(Exception):
    """Base error."""


class ConfigurationError(CaltimeError):
    """Raised when packaged or configured reference data cannot be loaded."""


class ConcurrentUpdateError(CaltimeError):
    """Raised when a leap-second registration lost a compare-and-swap race."""


class InvalidArgumentError(CaltimeError, ValueError):
    """Raised for malformed or retroactive leap-second registrations and bad parameters."""


class OutOfRangeError(CaltimeError, ValueError):
    """Raised when an interval table cannot answer a lookup."""


class SerializationError(CaltimeError):
    """Raised for unknown record tags or truncated binary streams."""


class DateTimeError(CaltimeError):
    """Base for field/value/resolution problems."""


class UnsupportedFieldError(DateTimeError):
    def __init__(self, field: object, target: object = None):
        self.field = field
        self.target = target
        name = getattr(field, "name", field)
        if target is None:
            msg = f"Unsupported field: {name}"
        else:
            msg = f"Unsupported field: {name} for {type(target).__name__}"
        super().__init__(msg)


class InvalidValueError(DateTimeError, ValueError):
    def __init__(self, field: object, value: int, valid_range: object = None, message: Optional[str] = None):
        self.field = field
        self.value = value
        self.range = valid_range
        if message is None:
            name = getattr(field, "name", field)
            message = f"Invalid value for {name} (valid values {valid_range}): {value}"
        super().__init__(message)


class CalendricalResolutionError(DateTimeError):
    def __init__(self, message: str, fields: Iterable[object] = ()):
        self.fields = tuple(fields)
        if self.fields:
            names = ", ".join(str(getattr(f, "name", f)) for f in self.fields)
            message = f"{message}: {names}"
        super().__init__(message)
