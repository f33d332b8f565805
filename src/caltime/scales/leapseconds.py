from __future__ import annotations

"""
caltime.scales.leapseconds

The leap-second registry: an IntervalTable of whole-second TAI-UTC offsets,
one row per change, plus a registry object that publishes immutable
snapshots with compare-and-swap.

Data file format (one change per line):

    # comment
    1972-01-01 10
    1972-07-01 11

The date is the first UTC day on which the new offset applies; the row is
keyed internally by the MJD of the day *before* (the leap second belongs to
the end of that day).

Search order for the data file:
  1) explicit ``source`` argument
  2) CALTIME_LEAP_SECONDS environment variable (path)
  3) packaged data (caltime/scales/data/leap_seconds.txt)
"""

import importlib.resources
import logging
import os
import threading
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from ..core.errors import ConcurrentUpdateError, ConfigurationError, InvalidArgumentError
from ..core.time import MJD_1970, SECONDS_PER_DAY, mjd_of
from .intervals import IntervalEntry, IntervalTable

log = logging.getLogger(__name__)

ENV_VAR = "CALTIME_LEAP_SECONDS"
PRE_TABLE_OFFSET = 10


@dataclass(frozen=True)
class LeapSecondEntry(IntervalEntry):
    """Constant offset in force from the midnight that ends day ``mjd``."""

    @classmethod
    def of(cls, mjd: int, offset: int) -> "LeapSecondEntry":
        return cls(start=(mjd + 1 - MJD_1970) * SECONDS_PER_DAY, offset=int(offset))

    @property
    def mjd(self) -> int:
        return self.start // SECONDS_PER_DAY + MJD_1970 - 1


_PRE_TABLE = IntervalEntry(start=(41317 - MJD_1970) * SECONDS_PER_DAY, offset=PRE_TABLE_OFFSET)


@dataclass(frozen=True)
class LeapSecondTable(IntervalTable):
    default: Optional[IntervalEntry] = _PRE_TABLE

    def __post_init__(self) -> None:
        super().__post_init__()
        offs = self.offsets
        for i in range(1, len(offs)):
            if abs(offs[i] - offs[i - 1]) != 1:
                raise InvalidArgumentError(
                    f"leap-second offsets must step by exactly 1 (row {i}: {offs[i - 1]} -> {offs[i]})"
                )

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[int, int]]) -> "LeapSecondTable":
        """rows: (mjd of the day ending with the change, new TAI-UTC)."""
        return cls(tuple(LeapSecondEntry.of(m, o) for m, o in rows))

    @property
    def dates(self) -> Tuple[int, ...]:
        return tuple(e.mjd for e in self.entries)

    @property
    def offsets(self) -> Tuple[int, ...]:
        return tuple(int(e.offset) for e in self.entries)

    @property
    def tai_seconds(self) -> Tuple[int, ...]:
        """TAI seconds (1970 epoch) at which each new offset begins."""
        return tuple(int(t) for t in self.target_starts)

    @property
    def last_mjd(self) -> Optional[int]:
        return self.entries[-1].mjd if self.entries else None

    def _row(self, mjd: int) -> int:
        start = (mjd + 1 - MJD_1970) * SECONDS_PER_DAY
        e = self.entry_at(start)
        return self.index_of(e) if e.start == start else -1

    def adjustment(self, mjd: int) -> int:
        """-1, 0 or +1: length change of the last minute of UTC day ``mjd``."""
        i = self._row(mjd)
        if i <= 0:
            return 0
        return int(self.entries[i].offset) - int(self.entries[i - 1].offset)

    def tai_offset(self, mjd: int) -> int:
        """TAI-UTC in force during UTC day ``mjd``."""
        return int(self.entry_at((mjd - MJD_1970) * SECONDS_PER_DAY).offset)

    def leap_second_dates(self) -> Tuple[int, ...]:
        """MJDs whose last minute carries a leap second (either sign)."""
        return tuple(e.mjd for e in self.entries[1:])

    def with_leap_second(self, mjd: int, adjustment: int) -> "LeapSecondTable":
        if adjustment not in (-1, 1):
            raise InvalidArgumentError(f"leap-second adjustment must be -1 or +1, got {adjustment}")
        if self._row(mjd) >= 0:
            if self.adjustment(mjd) == adjustment:
                return self
            raise InvalidArgumentError(f"leap second on MJD {mjd} already registered with a different adjustment")
        last = self.last_mjd
        if last is not None and mjd <= last:
            raise InvalidArgumentError(f"cannot register MJD {mjd} before the last registered change (MJD {last})")
        entry = LeapSecondEntry.of(mjd, self.tai_offset(mjd) + adjustment)
        return self.appended(entry)


class LeapSecondRegistry:
    """
    Holds the current LeapSecondTable.

    Readers take ``snapshot`` without locking. Writers derive a new snapshot
    and publish it with ``compare_and_set``; the lock only guards that swap.
    """

    def __init__(self, table: LeapSecondTable):
        self._snapshot = table
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> LeapSecondTable:
        return self._snapshot

    def compare_and_set(self, expected: LeapSecondTable, new: LeapSecondTable) -> bool:
        with self._lock:
            if self._snapshot is not expected:
                return False
            self._snapshot = new
            return True

    def register_leap_second(
        self, mjd: int, adjustment: int, *, expected: Optional[LeapSecondTable] = None
    ) -> LeapSecondTable:
        """
        Append a leap second at the end of UTC day ``mjd``.

        ``expected`` is the snapshot the caller based its decision on
        (defaults to the current one). Raises ConcurrentUpdateError when
        another writer published first; re-read and retry in that case.
        """
        base = self._snapshot if expected is None else expected
        new = base.with_leap_second(mjd, adjustment)
        if new is base:
            return base
        if not self.compare_and_set(base, new):
            log.info("leap-second registration for MJD %d lost a concurrent update", mjd)
            raise ConcurrentUpdateError(f"leap-second table changed while registering MJD {mjd}")
        log.info("registered leap second: MJD %d adjustment %+d (TAI-UTC now %d)", mjd, adjustment, new.offsets[-1])
        return new

    def tai_offset(self, mjd: int) -> int:
        return self._snapshot.tai_offset(mjd)

    def adjustment(self, mjd: int) -> int:
        return self._snapshot.adjustment(mjd)

    def leap_second_dates(self) -> Tuple[int, ...]:
        return self._snapshot.leap_second_dates()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def parse_leap_seconds(lines: Iterable[str], *, origin: str = "<data>") -> LeapSecondTable:
    rows: list[Tuple[int, int]] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(" ")
        if len(parts) != 2:
            raise ConfigurationError(f"{origin}:{lineno}: expected '<date> <offset>', got {line!r}")
        try:
            mjd = mjd_of(date.fromisoformat(parts[0])) - 1
            offset = int(parts[1])
        except ValueError as e:
            raise ConfigurationError(f"{origin}:{lineno}: malformed row {line!r}") from e
        if rows:
            prev_mjd, prev_off = rows[-1]
            if mjd <= prev_mjd:
                raise ConfigurationError(f"{origin}:{lineno}: rows not in ascending date order")
            if abs(offset - prev_off) != 1:
                raise ConfigurationError(f"{origin}:{lineno}: offset must change by exactly 1 ({prev_off} -> {offset})")
        rows.append((mjd, offset))
    if not rows:
        raise ConfigurationError(f"{origin}: no leap-second rows")
    return LeapSecondTable.from_rows(rows)


def _packaged_path():
    return importlib.resources.files("caltime") / "scales" / "data" / "leap_seconds.txt"


def load_leap_seconds(source: Union[str, Path, None] = None) -> LeapSecondTable:
    if source is None:
        env = os.environ.get(ENV_VAR, "").strip()
        if env:
            source = env
    if source is not None:
        path = Path(source).expanduser()
        origin = str(path)
    else:
        path = _packaged_path()
        origin = "caltime/scales/data/leap_seconds.txt"
    try:
        with path.open("r", encoding="utf-8") as f:
            table = parse_leap_seconds(f, origin=origin)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read leap-second data {origin}: {e}") from e
    log.debug("loaded %d leap-second rows from %s", len(table), origin)
    return table
