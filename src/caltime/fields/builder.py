from __future__ import annotations

"""
caltime.fields.builder

Accumulates raw field values and resolves them into a date and a time.

Resolution is a fixed-point loop: every non-standard field present gets its
``resolve`` hook called, then the chronology merges the standard date
fields; this repeats until a pass changes nothing. Time fields are merged
afterwards, and whatever remains is cross-checked against the result.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.errors import CalendricalResolutionError
from .chrono import ChronoField as F

if TYPE_CHECKING:
    from ..chrono.base import ChronoDate, Chronology
    from ..chrono.time import TimeOfDay


class DateTimeBuilder:
    def __init__(self, fields: Optional[Dict[Any, int]] = None, *, chronology: Optional["Chronology"] = None):
        self._fields: Dict[Any, int] = {}
        self.chronology: Optional["Chronology"] = chronology
        self.date: Optional["ChronoDate"] = None
        self.time: Optional["TimeOfDay"] = None
        self.offset: Optional[int] = None     # seconds east of UTC
        self.zone: Optional[str] = None
        for f, v in (fields or {}).items():
            self.add_field_value(f, v)

    # ---- raw field values ----

    def add_field_value(self, field: Any, value: int) -> "DateTimeBuilder":
        value = int(value)
        old = self._fields.get(field)
        if old is not None and old != value:
            raise CalendricalResolutionError(f"conflict found: {field.name} {old} differs from {value}", [field])
        self._fields[field] = value
        return self

    def get_field_value(self, field: Any) -> int:
        try:
            return self._fields[field]
        except KeyError:
            raise CalendricalResolutionError("field not present", [field]) from None

    def contains(self, field: Any) -> bool:
        return field in self._fields

    def remove_field_value(self, field: Any) -> int:
        """Remove and return the value; the field must be present."""
        value = self.get_field_value(field)
        del self._fields[field]
        return value

    def query_values(self) -> Dict[Any, int]:
        return dict(self._fields)

    @property
    def fields(self) -> List[Any]:
        return list(self._fields)

    # ---- resolved objects ----

    def add_date(self, date: "ChronoDate") -> bool:
        """Set the date slot; returns True if it changed."""
        if self.date is not None:
            if self.date != date:
                raise CalendricalResolutionError(f"conflict found: date {self.date} differs from {date}")
            return False
        self.date = date
        if self.chronology is None:
            self.chronology = date.chronology
        return True

    def add_time(self, time: "TimeOfDay") -> bool:
        if self.time is not None:
            if self.time != time:
                raise CalendricalResolutionError(f"conflict found: time {self.time} differs from {time}")
            return False
        self.time = time
        return True

    def effective_chronology(self) -> "Chronology":
        if self.chronology is None:
            from ..chrono.iso import ISO
            self.chronology = ISO
        return self.chronology

    # ---- resolution ----

    def resolve(self) -> "DateTimeBuilder":
        chrono = self.effective_chronology()
        changed = True
        while changed:
            changed = False
            for field in [f for f in self._fields if not isinstance(f, F)]:
                if field in self._fields and field.resolve(self, self._fields[field]):
                    changed = True
            if chrono.resolve_date(self):
                changed = True
        self._merge_time()
        self._cross_check()
        return self

    def _split(self, field: F, parts: List[tuple]) -> None:
        value = field.check_valid_value(self.remove_field_value(field))
        for target, divisor, modulus in parts:
            v = value // divisor
            self.add_field_value(target, v % modulus if modulus else v)

    def _merge_time(self) -> None:
        from ..chrono.time import TimeOfDay

        if self.contains(F.CLOCK_HOUR_OF_DAY):
            ch = F.CLOCK_HOUR_OF_DAY.check_valid_value(self.remove_field_value(F.CLOCK_HOUR_OF_DAY))
            self.add_field_value(F.HOUR_OF_DAY, 0 if ch == 24 else ch)
        if self.contains(F.CLOCK_HOUR_OF_AMPM):
            ch = F.CLOCK_HOUR_OF_AMPM.check_valid_value(self.remove_field_value(F.CLOCK_HOUR_OF_AMPM))
            self.add_field_value(F.HOUR_OF_AMPM, 0 if ch == 12 else ch)
        if self.contains(F.AMPM_OF_DAY) and self.contains(F.HOUR_OF_AMPM):
            ap = F.AMPM_OF_DAY.check_valid_value(self.remove_field_value(F.AMPM_OF_DAY))
            hap = F.HOUR_OF_AMPM.check_valid_value(self.remove_field_value(F.HOUR_OF_AMPM))
            self.add_field_value(F.HOUR_OF_DAY, ap * 12 + hap)
        if self.contains(F.NANO_OF_DAY):
            self._split(F.NANO_OF_DAY, [(F.SECOND_OF_DAY, 1_000_000_000, 0), (F.NANO_OF_SECOND, 1, 1_000_000_000)])
        if self.contains(F.MILLI_OF_DAY):
            self._split(F.MILLI_OF_DAY, [(F.SECOND_OF_DAY, 1000, 0), (F.MILLI_OF_SECOND, 1, 1000)])
        if self.contains(F.SECOND_OF_DAY):
            self._split(F.SECOND_OF_DAY, [(F.HOUR_OF_DAY, 3600, 0), (F.MINUTE_OF_HOUR, 60, 60), (F.SECOND_OF_MINUTE, 1, 60)])
        if self.contains(F.MINUTE_OF_DAY):
            self._split(F.MINUTE_OF_DAY, [(F.HOUR_OF_DAY, 60, 0), (F.MINUTE_OF_HOUR, 1, 60)])
        if self.contains(F.MILLI_OF_SECOND):
            ms = F.MILLI_OF_SECOND.check_valid_value(self.remove_field_value(F.MILLI_OF_SECOND))
            if self.contains(F.NANO_OF_SECOND):
                if self.get_field_value(F.NANO_OF_SECOND) // 1_000_000 != ms:
                    raise CalendricalResolutionError("conflict found", [F.MILLI_OF_SECOND, F.NANO_OF_SECOND])
            else:
                self.add_field_value(F.NANO_OF_SECOND, ms * 1_000_000)

        if self.contains(F.HOUR_OF_DAY):
            parts = [F.HOUR_OF_DAY, F.MINUTE_OF_HOUR, F.SECOND_OF_MINUTE, F.NANO_OF_SECOND]
            values = [self.remove_field_value(f) if self.contains(f) else 0 for f in parts]
            self.add_time(TimeOfDay(*values))

    def _cross_check(self) -> None:
        if self.contains(F.OFFSET_SECONDS):
            off = F.OFFSET_SECONDS.check_valid_value(self.remove_field_value(F.OFFSET_SECONDS))
            if self.offset is not None and self.offset != off:
                raise CalendricalResolutionError("conflict found: offset", [F.OFFSET_SECONDS])
            self.offset = off
        mismatched = []
        for field, value in list(self._fields.items()):
            for target in (self.date, self.time):
                if target is not None and target.is_supported(field):
                    if target.get_long(field) != value:
                        mismatched.append(field)
                    else:
                        del self._fields[field]
                    break
        if mismatched:
            raise CalendricalResolutionError("fields do not match the resolved date-time", mismatched)

    # ---- results ----

    def build_date(self) -> "ChronoDate":
        self.resolve()
        if self.date is None:
            raise CalendricalResolutionError("unable to build a date from the fields", self.fields)
        return self.date

    def build_time(self) -> "TimeOfDay":
        self.resolve()
        if self.time is None:
            raise CalendricalResolutionError("unable to build a time from the fields", self.fields)
        return self.time

    def __repr__(self) -> str:
        vals = ", ".join(f"{getattr(f, 'name', f)}={v}" for f, v in self._fields.items())
        parts = [vals] if vals else []
        for slot in ("date", "time", "offset", "zone"):
            v = getattr(self, slot)
            if v is not None:
                parts.append(f"{slot}={v}")
        return f"DateTimeBuilder({'; '.join(parts)})"
