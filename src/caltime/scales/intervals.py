from __future__ import annotations

"""
caltime.scales.intervals

Ordered, append-only tables of offset intervals.

An entry maps a *source* value (civil seconds since 1970) to a *target* value
(atomic seconds since 1970) through an offset that is either constant or
varies linearly with the source value:

    offset_at(x) = offset + rate * (x - ref)
    target(x)    = x + offset_at(x)

Lookups are binary searches over the start array (source side) or over the
precomputed target_start array (target side).
"""

from bisect import bisect_right
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Iterator, Optional, Tuple, Union

from ..core.errors import InvalidArgumentError, OutOfRangeError

Number = Union[int, Fraction]


@dataclass(frozen=True)
class IntervalEntry:
    start: int                       # inclusive, source seconds
    offset: Number                   # seconds, applies at ref
    rate: Fraction = Fraction(0)     # offset change per source second
    ref: Optional[int] = None        # defaults to start

    def offset_at(self, source: Number) -> Number:
        if not self.rate:
            return self.offset
        ref = self.start if self.ref is None else self.ref
        return self.offset + self.rate * (source - ref)

    @property
    def target_start(self) -> Number:
        return self.start + self.offset_at(self.start)

    @property
    def is_constant(self) -> bool:
        return not self.rate


@dataclass(frozen=True)
class IntervalTable:
    entries: Tuple[IntervalEntry, ...] = ()
    default: Optional[IntervalEntry] = None   # used before the first entry
    _starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)
    _targets: Tuple[Number, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = tuple(e.start for e in self.entries)
        for i in range(1, len(starts)):
            if not (starts[i] > starts[i - 1]):
                raise InvalidArgumentError(f"interval starts not strictly increasing at index {i}")
        object.__setattr__(self, "_starts", starts)
        object.__setattr__(self, "_targets", tuple(e.target_start for e in self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IntervalEntry]:
        return iter(self.entries)

    def __getitem__(self, i: int) -> IntervalEntry:
        return self.entries[i]

    @property
    def starts(self) -> Tuple[int, ...]:
        return self._starts

    @property
    def target_starts(self) -> Tuple[Number, ...]:
        return self._targets

    def end_of(self, entry: IntervalEntry) -> Optional[int]:
        nxt = self.next_entry(entry)
        return None if nxt is None else nxt.start

    def _pick(self, i: int, key: Number) -> IntervalEntry:
        # i is bisect_right(...) - 1; past the last start it stays on the last entry
        if i >= 0:
            return self.entries[i]
        if self.default is not None:
            return self.default
        if not self.entries:
            raise OutOfRangeError("empty interval table without default")
        raise OutOfRangeError(f"{key} is before the first interval and no default is set")

    def entry_at(self, source: Number) -> IntervalEntry:
        return self._pick(bisect_right(self._starts, source) - 1, source)

    def entry_from_target(self, target: Number) -> IntervalEntry:
        return self._pick(bisect_right(self._targets, target) - 1, target)

    def index_of(self, entry: IntervalEntry) -> int:
        """Index of a table entry; -1 for the default entry."""
        if entry is self.default:
            return -1
        i = bisect_right(self._starts, entry.start) - 1
        if i < 0 or self.entries[i] != entry:
            raise KeyError(f"entry not in table: {entry}")
        return i

    def next_entry(self, entry: IntervalEntry) -> Optional[IntervalEntry]:
        i = self.index_of(entry) + 1
        return self.entries[i] if i < len(self.entries) else None

    def appended(self, entry: IntervalEntry) -> "IntervalTable":
        if self.entries and not (entry.start > self._starts[-1]):
            raise InvalidArgumentError(
                f"entries are append-only: start {entry.start} is not after {self._starts[-1]}"
            )
        return replace(self, entries=self.entries + (entry,))
