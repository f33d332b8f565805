from __future__ import annotations

from .chrono.base import ChronologyRegistry
from .chrono.coptic import COPTIC
from .chrono.iso import ISO
from .scales.leapseconds import LeapSecondRegistry, load_leap_seconds


def build_registry() -> LeapSecondRegistry:
    return LeapSecondRegistry(load_leap_seconds())


def build_chronologies() -> ChronologyRegistry:
    return ChronologyRegistry({ISO.name: ISO, COPTIC.name: COPTIC})
