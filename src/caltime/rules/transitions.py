from __future__ import annotations

"""
caltime.rules.transitions

Offset transitions and the rules that generate them, enough to evaluate
the UTC offset of a zone at an instant. All offsets are seconds east of UTC;
instants are UTC epoch seconds.
"""

from bisect import bisect_right
from dataclasses import dataclass
from enum import IntEnum
from functools import cached_property
from typing import Optional, Tuple

from ..chrono.iso import ISO
from ..core.errors import InvalidArgumentError
from ..core.time import SECONDS_PER_DAY, from_epoch_day
from ..fields.chrono import ChronoField as F
from ..fields.units import ChronoUnit
from ..scales.intervals import IntervalEntry, IntervalTable


class TimeDefinition(IntEnum):
    UTC = 0
    WALL = 1
    STANDARD = 2


@dataclass(frozen=True)
class OffsetTransition:
    epoch_second: int
    offset_before: int
    offset_after: int

    def __post_init__(self) -> None:
        F.OFFSET_SECONDS.check_valid_value(self.offset_before)
        F.OFFSET_SECONDS.check_valid_value(self.offset_after)
        if self.offset_before == self.offset_after:
            raise InvalidArgumentError("offsets must differ")

    @property
    def duration(self) -> int:
        return self.offset_after - self.offset_before

    @property
    def is_gap(self) -> bool:
        return self.offset_after > self.offset_before

    @property
    def is_overlap(self) -> bool:
        return self.offset_after < self.offset_before

    @property
    def local_before(self) -> int:
        """Local epoch seconds just before the transition (wall clock, old offset)."""
        return self.epoch_second + self.offset_before

    @property
    def local_after(self) -> int:
        return self.epoch_second + self.offset_after


@dataclass(frozen=True)
class OffsetTransitionRule:
    """
    Yearly rule such as "last Sunday of March at 01:00 UTC".

    day_of_month_indicator > 0 picks that day (or the next ``day_of_week``
    on or after it); < 0 counts back from the month end, -1 being the last
    day (or the previous ``day_of_week`` on or before it).
    """
    month: int
    day_of_month_indicator: int
    day_of_week: Optional[int]
    time_seconds: int                 # second of day, 86400 for end of day
    time_definition: TimeDefinition
    standard_offset: int
    offset_before: int
    offset_after: int

    def __post_init__(self) -> None:
        F.MONTH_OF_YEAR.check_valid_value(self.month)
        if not (-28 <= self.day_of_month_indicator <= 31) or self.day_of_month_indicator == 0:
            raise InvalidArgumentError(f"day-of-month indicator must be -28..31 excluding 0, got {self.day_of_month_indicator}")
        if self.day_of_week is not None:
            F.DAY_OF_WEEK.check_valid_value(self.day_of_week)
        if not (0 <= self.time_seconds <= SECONDS_PER_DAY):
            raise InvalidArgumentError(f"time must be within the day, got {self.time_seconds}")
        for off in (self.standard_offset, self.offset_before, self.offset_after):
            F.OFFSET_SECONDS.check_valid_value(off)

    def create_transition(self, year: int) -> OffsetTransition:
        dom = self.day_of_month_indicator
        if dom < 0:
            d = ISO.date(year, self.month, ISO.month_length(year, self.month) + 1 + dom)
            if self.day_of_week is not None:
                d = d.minus((d.day_of_week - self.day_of_week) % 7, ChronoUnit.DAYS)
        else:
            d = ISO.date(year, self.month, dom)
            if self.day_of_week is not None:
                d = d.plus((self.day_of_week - d.day_of_week) % 7, ChronoUnit.DAYS)
        local = d.epoch_day * SECONDS_PER_DAY + self.time_seconds
        if self.time_definition is TimeDefinition.UTC:
            epoch = local
        elif self.time_definition is TimeDefinition.STANDARD:
            epoch = local - self.standard_offset
        else:
            epoch = local - self.offset_before
        return OffsetTransition(epoch, self.offset_before, self.offset_after)


def _year_of(epoch_second: int) -> int:
    return from_epoch_day(epoch_second // SECONDS_PER_DAY)[0]


@dataclass(frozen=True)
class StandardRules:
    """
    Offset history of a zone.

    ``standard_offsets`` and ``wall_offsets`` each have one element more than
    their transition arrays (the offset before the first transition).
    ``last_rules`` extend the history past the last explicit transition.
    """
    standard_transitions: Tuple[int, ...]
    standard_offsets: Tuple[int, ...]
    savings_transitions: Tuple[int, ...]
    wall_offsets: Tuple[int, ...]
    last_rules: Tuple[OffsetTransitionRule, ...] = ()

    def __post_init__(self) -> None:
        if len(self.standard_offsets) != len(self.standard_transitions) + 1:
            raise InvalidArgumentError("standard_offsets must have one more element than standard_transitions")
        if len(self.wall_offsets) != len(self.savings_transitions) + 1:
            raise InvalidArgumentError("wall_offsets must have one more element than savings_transitions")
        for off in self.standard_offsets + self.wall_offsets:
            F.OFFSET_SECONDS.check_valid_value(off)

    @classmethod
    def fixed(cls, offset: int) -> "StandardRules":
        return cls((), (offset,), (), (offset,))

    @staticmethod
    def _table(transitions: Tuple[int, ...], offsets: Tuple[int, ...]) -> IntervalTable:
        entries = tuple(IntervalEntry(start=s, offset=o) for s, o in zip(transitions, offsets[1:]))
        first = transitions[0] if transitions else 0
        return IntervalTable(entries, default=IntervalEntry(start=first, offset=offsets[0]))

    @cached_property
    def _wall_table(self) -> IntervalTable:
        return self._table(self.savings_transitions, self.wall_offsets)

    @cached_property
    def _standard_table(self) -> IntervalTable:
        return self._table(self.standard_transitions, self.standard_offsets)

    @property
    def is_fixed_offset(self) -> bool:
        return not self.savings_transitions and not self.last_rules

    @property
    def transitions(self) -> Tuple[OffsetTransition, ...]:
        w = self.wall_offsets
        return tuple(
            OffsetTransition(s, w[i], w[i + 1])
            for i, s in enumerate(self.savings_transitions)
            if w[i] != w[i + 1]
        )

    def transitions_for_year(self, year: int) -> Tuple[OffsetTransition, ...]:
        return tuple(r.create_transition(year) for r in self.last_rules)

    def offset_at(self, epoch_second: int) -> int:
        if self.last_rules and (not self.savings_transitions or epoch_second > self.savings_transitions[-1]):
            year = _year_of(epoch_second + self.wall_offsets[-1])
            trans = self.transitions_for_year(year)
            for tr in trans:
                if epoch_second < tr.epoch_second:
                    return tr.offset_before
            return trans[-1].offset_after
        return int(self._wall_table.entry_at(epoch_second).offset)

    def standard_offset_at(self, epoch_second: int) -> int:
        return int(self._standard_table.entry_at(epoch_second).offset)

    def next_transition(self, epoch_second: int) -> Optional[OffsetTransition]:
        w = self.wall_offsets
        for i in range(bisect_right(self.savings_transitions, epoch_second), len(self.savings_transitions)):
            # entries that keep the wall offset are not transitions
            if w[i] != w[i + 1]:
                return OffsetTransition(self.savings_transitions[i], w[i], w[i + 1])
        if not self.last_rules:
            return None
        year = _year_of(epoch_second)
        for y in (year, year + 1):
            for tr in self.transitions_for_year(y):
                if tr.epoch_second > epoch_second:
                    return tr
        return None
