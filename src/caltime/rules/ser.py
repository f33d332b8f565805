from __future__ import annotations

"""
caltime.rules.ser

Compact tagged binary records for offset data.

Every record starts with a one-byte tag:

    1  StandardRules
    2  OffsetTransition
    3  OffsetTransitionRule

Epoch seconds that are whole quarter hours between 1825 and 2300 take three
bytes; anything else is 0xFF followed by a big-endian signed 8-byte value.
Offsets that are whole quarter hours take one signed byte; anything else is
0x7F followed by a signed 4-byte seconds value.
"""

import io
import struct
from typing import BinaryIO, Union

from ..core.errors import SerializationError
from .transitions import OffsetTransition, OffsetTransitionRule, StandardRules, TimeDefinition

STANDARD_RULES = 1
OFFSET_TRANSITION = 2
OFFSET_TRANSITION_RULE = 3

_EPOCH_MIN = -4575744000     # 1825-01-01
_EPOCH_MAX = 10413792000     # 2300-01-01, exclusive
_MAX_OFFSET = 18 * 3600

Record = Union[StandardRules, OffsetTransition, OffsetTransitionRule]


def _read(stream: BinaryIO, n: int) -> bytes:
    b = stream.read(n)
    if len(b) != n:
        raise SerializationError(f"truncated stream: wanted {n} bytes, got {len(b)}")
    return b


def _read_int(stream: BinaryIO) -> int:
    return struct.unpack(">i", _read(stream, 4))[0]


# ---------------------------------------------------------------------------
# Field encodings
# ---------------------------------------------------------------------------

def write_epoch_sec(epoch_sec: int, out: BinaryIO) -> None:
    if _EPOCH_MIN <= epoch_sec < _EPOCH_MAX and epoch_sec % 900 == 0:
        store = (epoch_sec - _EPOCH_MIN) // 900
        out.write(bytes(((store >> 16) & 255, (store >> 8) & 255, store & 255)))
    else:
        out.write(b"\xff")
        out.write(struct.pack(">q", epoch_sec))


def read_epoch_sec(stream: BinaryIO) -> int:
    hi = _read(stream, 1)[0]
    if hi == 255:
        return struct.unpack(">q", _read(stream, 8))[0]
    mid, lo = _read(stream, 2)
    return ((hi << 16) + (mid << 8) + lo) * 900 + _EPOCH_MIN


def write_offset(offset_secs: int, out: BinaryIO) -> None:
    if not (-_MAX_OFFSET <= offset_secs <= _MAX_OFFSET):
        raise SerializationError(f"offset out of range: {offset_secs}")
    offset_byte = offset_secs // 900 if offset_secs % 900 == 0 else 127
    out.write(struct.pack(">b", offset_byte))
    if offset_byte == 127:
        out.write(struct.pack(">i", offset_secs))


def read_offset(stream: BinaryIO) -> int:
    offset_byte = struct.unpack(">b", _read(stream, 1))[0]
    return _read_int(stream) if offset_byte == 127 else offset_byte * 900


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def _write_rule(rule: OffsetTransitionRule, out: BinaryIO) -> None:
    time_secs = rule.time_seconds
    std = rule.standard_offset
    before_diff = rule.offset_before - std
    after_diff = rule.offset_after - std
    time_byte = time_secs // 3600 if time_secs % 3600 == 0 else 31
    std_byte = std // 900 + 128 if std % 900 == 0 else 255
    before_byte = before_diff // 1800 if before_diff in (0, 1800, 3600) else 3
    after_byte = after_diff // 1800 if after_diff in (0, 1800, 3600) else 3
    dow_byte = rule.day_of_week or 0
    packed = (
        (rule.month << 28)
        + ((rule.day_of_month_indicator + 32) << 22)
        + (dow_byte << 19)
        + (time_byte << 14)
        + (int(rule.time_definition) << 12)
        + (std_byte << 4)
        + (before_byte << 2)
        + after_byte
    )
    out.write(struct.pack(">I", packed))
    if time_byte == 31:
        out.write(struct.pack(">i", time_secs))
    if std_byte == 255:
        out.write(struct.pack(">i", std))
    if before_byte == 3:
        out.write(struct.pack(">i", rule.offset_before))
    if after_byte == 3:
        out.write(struct.pack(">i", rule.offset_after))


def _read_rule(stream: BinaryIO) -> OffsetTransitionRule:
    data = struct.unpack(">I", _read(stream, 4))[0]
    month = data >> 28
    dom = ((data >> 22) & 63) - 32
    dow_byte = (data >> 19) & 7
    time_byte = (data >> 14) & 31
    defn = (data >> 12) & 3
    std_byte = (data >> 4) & 255
    before_byte = (data >> 2) & 3
    after_byte = data & 3
    if defn > 2:
        raise SerializationError(f"unknown time definition {defn}")
    time_secs = _read_int(stream) if time_byte == 31 else time_byte * 3600
    std = _read_int(stream) if std_byte == 255 else (std_byte - 128) * 900
    before = _read_int(stream) if before_byte == 3 else std + before_byte * 1800
    after = _read_int(stream) if after_byte == 3 else std + after_byte * 1800
    return OffsetTransitionRule(
        month, dom, dow_byte or None, time_secs, TimeDefinition(defn), std, before, after
    )


def _write_standard(rules: StandardRules, out: BinaryIO) -> None:
    out.write(struct.pack(">i", len(rules.standard_transitions)))
    for s in rules.standard_transitions:
        write_epoch_sec(s, out)
    for o in rules.standard_offsets:
        write_offset(o, out)
    out.write(struct.pack(">i", len(rules.savings_transitions)))
    for s in rules.savings_transitions:
        write_epoch_sec(s, out)
    for o in rules.wall_offsets:
        write_offset(o, out)
    if len(rules.last_rules) > 255:
        raise SerializationError(f"too many last rules: {len(rules.last_rules)}")
    out.write(struct.pack(">B", len(rules.last_rules)))
    for r in rules.last_rules:
        _write_rule(r, out)


def _read_standard(stream: BinaryIO) -> StandardRules:
    n = _read_int(stream)
    if n < 0:
        raise SerializationError(f"negative transition count {n}")
    std_trans = tuple(read_epoch_sec(stream) for _ in range(n))
    std_offs = tuple(read_offset(stream) for _ in range(n + 1))
    n = _read_int(stream)
    if n < 0:
        raise SerializationError(f"negative transition count {n}")
    sav_trans = tuple(read_epoch_sec(stream) for _ in range(n))
    wall_offs = tuple(read_offset(stream) for _ in range(n + 1))
    k = _read(stream, 1)[0]
    last = tuple(_read_rule(stream) for _ in range(k))
    return StandardRules(std_trans, std_offs, sav_trans, wall_offs, last)


def write(record: Record, out: BinaryIO) -> None:
    if isinstance(record, StandardRules):
        out.write(bytes((STANDARD_RULES,)))
        _write_standard(record, out)
    elif isinstance(record, OffsetTransition):
        out.write(bytes((OFFSET_TRANSITION,)))
        write_epoch_sec(record.epoch_second, out)
        write_offset(record.offset_before, out)
        write_offset(record.offset_after, out)
    elif isinstance(record, OffsetTransitionRule):
        out.write(bytes((OFFSET_TRANSITION_RULE,)))
        _write_rule(record, out)
    else:
        raise SerializationError(f"cannot serialize {type(record).__name__}")


def read(stream: BinaryIO) -> Record:
    tag = _read(stream, 1)[0]
    if tag == STANDARD_RULES:
        return _read_standard(stream)
    if tag == OFFSET_TRANSITION:
        epoch = read_epoch_sec(stream)
        before = read_offset(stream)
        after = read_offset(stream)
        return OffsetTransition(epoch, before, after)
    if tag == OFFSET_TRANSITION_RULE:
        return _read_rule(stream)
    raise SerializationError(f"unknown record tag {tag}")


def dumps(record: Record) -> bytes:
    buf = io.BytesIO()
    write(record, buf)
    return buf.getvalue()


def loads(data: bytes) -> Record:
    return read(io.BytesIO(data))
