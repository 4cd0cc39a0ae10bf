"""Parsers for the scalar literals accepted in environment values.

Pure functions, no binding state. Each parser raises ``ValueError`` naming
the offending literal on malformed or out-of-range input.
"""

from __future__ import annotations

import re
import struct
from datetime import datetime, timedelta
from decimal import Decimal

from envbind.models.types import Bits

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Largest finite single-precision value.
_FLOAT32_MAX = struct.unpack("<f", b"\xff\xff\x7f\x7f")[0]

# Legacy octal: a leading zero followed by more digits ("0755").
_LEGACY_OCTAL_RE = re.compile(r"^0[0-7_]+$")

_DURATION_UNITS_NS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}
_DURATION_PART_RE = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_RE = re.compile(r"^[-+]?(?:(?:\d+\.?\d*|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+$")

_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<tz>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_bool(text: str) -> bool:
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal {text!r}")


def is_true(text: str | None) -> bool:
    """Case-insensitive truth test for annotation values; unparseable is false."""
    if text is None:
        return False
    try:
        return parse_bool(text.strip().lower())
    except ValueError:
        return False


def _parse_magnitude(text: str, original: str) -> int:
    if not text or text[0] in "+-" or text != text.strip():
        raise ValueError(f"invalid integer literal {original!r}")
    try:
        if _LEGACY_OCTAL_RE.match(text):
            return int("0o" + text[1:], 0)
        return int(text, 0)
    except ValueError:
        raise ValueError(f"invalid integer literal {original!r}") from None


def parse_int(text: str, bits: Bits | None = None) -> int:
    """Parse a signed integer, honouring ``0x``/``0o``/``0b`` and ``0NNN`` octal."""
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    value = _parse_magnitude(body, text)
    if negative:
        value = -value
    if bits is not None:
        low, high = bits.int_range()
        if not low <= value <= high:
            raise ValueError(f"integer literal {text!r} out of range for {bits.size}-bit field")
    return value


def parse_uint(text: str, bits: Bits | None = None) -> int:
    """Parse an unsigned integer; any sign, including ``-``, is rejected."""
    value = _parse_magnitude(text, text)
    _, high = (bits or Bits(64, signed=False)).int_range()
    if not 0 <= value <= high:
        raise ValueError(f"integer literal {text!r} out of range for unsigned field")
    return value


def parse_float(text: str, bits: Bits | None = None) -> float:
    if text != text.strip():
        raise ValueError(f"invalid float literal {text!r}")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"invalid float literal {text!r}") from None
    if bits is not None and bits.size == 32:
        if abs(value) > _FLOAT32_MAX and value not in (float("inf"), float("-inf")):
            raise ValueError(f"float literal {text!r} out of range for 32-bit field")
        value = struct.unpack("<f", struct.pack("<f", value))[0]
    return value


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    A bare ``"0"`` is accepted; every other number needs a unit
    (``ns``, ``us``/``µs``, ``ms``, ``s``, ``m``, ``h``). Sub-microsecond
    precision is truncated.
    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.match(text):
        raise ValueError(f"invalid duration {text!r}")
    total_ns = Decimal(0)
    for number, unit in _DURATION_PART_RE.findall(text):
        total_ns += Decimal(number) * _DURATION_UNITS_NS[unit]
    micros = int(total_ns / 1000)
    if text[0] == "-":
        micros = -micros
    try:
        return timedelta(microseconds=micros)
    except OverflowError:
        raise ValueError(f"invalid duration {text!r}: out of range") from None


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware ``datetime``."""
    match = _RFC3339_RE.match(text)
    if not match:
        raise ValueError(f"invalid RFC 3339 timestamp {text!r}")
    tz = match.group("tz")
    if tz in ("Z", "z"):
        tz = "+00:00"
    frac = match.group("frac")
    iso = f"{match.group('date')}T{match.group('time')}"
    if frac:
        iso += "." + frac[:6].ljust(6, "0")
    try:
        return datetime.fromisoformat(iso + tz)
    except ValueError as e:
        raise ValueError(f"invalid RFC 3339 timestamp {text!r}: {e}") from None
