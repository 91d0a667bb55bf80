"""Formatting and parsing of measured values with unit prefixes, plus hex dumps."""

from __future__ import annotations

import itertools
import math
import re
from enum import IntEnum

__all__ = ["Unit", "value_to_string", "string_to_value", "hex_dump", "hex_parse"]


class Unit(IntEnum):
    """The units understood by :func:`value_to_string` and :func:`string_to_value`."""

    VOLTS = 0
    DECIBEL = 1
    SECONDS = 2
    HERTZ = 3
    SAMPLES = 4
    COUNT = 5


_HEX_PAIR = re.compile(r"[0-9a-fA-F]{1,2}")


def _floor_log10(value: float) -> int:
    """Decimal exponent of ``value``; zero and non-finite values count as 0."""
    magnitude = abs(value)
    if magnitude == 0 or not math.isfinite(magnitude):
        return 0
    return math.floor(math.log10(magnitude))


def _bound(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def _digits(precision: int, computed: int) -> int:
    """Digits after the point: the request as is when it is not positive."""
    return precision if precision <= 0 else computed


def _render(scaled: float, suffix: str, fmt: str, digits: int) -> str:
    if digits < 0:
        digits = 6
    return f"{format(scaled, f'.{digits}{fmt}')} {suffix}"


def _prefixed(value: float, precision: int, fmt: str, suffixes: tuple[str, str, str, str]) -> str:
    base, kilo, mega, giga = suffixes
    log = _floor_log10(value)
    magnitude = abs(value)
    if magnitude < 1e3:
        return _render(value, base, fmt, _digits(precision, _bound(precision - 1 - log, precision)))
    if magnitude < 1e6:
        return _render(value / 1e3, kilo, fmt, _digits(precision, precision + 2 - log))
    if magnitude < 1e9:
        return _render(value / 1e6, mega, fmt, _digits(precision, precision + 5 - log))
    return _render(value / 1e9, giga, fmt, _digits(precision, max(0, precision + 8 - log)))


def value_to_string(value: float, unit: Unit, precision: int = -1) -> str:
    """Render ``value`` with a fitting unit prefix.

    ``precision`` is the number of significant digits, 0 for an integer and
    a negative number for automatic formatting.
    """
    fmt = "g" if precision < 0 else "f"
    magnitude = abs(value)

    if unit == Unit.VOLTS:
        log = _floor_log10(value)
        if magnitude < 1e-3:
            return _render(value / 1e-6, "µV", fmt, _digits(precision, _bound(precision - 7 - log, precision)))
        if magnitude < 1.0:
            return _render(value / 1e-3, "mV", fmt, _digits(precision, precision - 4 - log))
        return _render(value, "V", fmt, _digits(precision, max(0, precision - 1 - log)))

    if unit == Unit.DECIBEL:
        log = _floor_log10(value)
        return _render(value, "dB", fmt, _digits(precision, _bound(precision - 1 - log, precision)))

    if unit == Unit.SECONDS:
        log = _floor_log10(value)
        if magnitude < 1e-9:
            return _render(value / 1e-12, "ps", fmt, _digits(precision, _bound(precision - 13 - log, precision)))
        if magnitude < 1e-6:
            return _render(value / 1e-9, "ns", fmt, _digits(precision, precision - 10 - log))
        if magnitude < 1e-3:
            return _render(value / 1e-6, "µs", fmt, _digits(precision, precision - 7 - log))
        if magnitude < 1.0:
            return _render(value / 1e-3, "ms", fmt, _digits(precision, precision - 4 - log))
        if magnitude < 60:
            return _render(value, "s", fmt, _digits(precision, precision - 1 - log))
        if magnitude < 3600:
            minutes = value / 60
            return _render(minutes, "min", fmt, _digits(precision, precision - 1 - _floor_log10(minutes)))
        hours = value / 3600
        return _render(hours, "h", fmt, _digits(precision, max(0, precision - 1 - _floor_log10(hours))))

    if unit == Unit.HERTZ:
        return _prefixed(value, precision, fmt, ("Hz", "kHz", "MHz", "GHz"))

    if unit == Unit.SAMPLES:
        return _prefixed(value, precision, fmt, ("S", "kS", "MS", "GS"))

    return ""


def _split_number(text: str) -> int:
    """Length of the leading numeric part of ``text``."""
    size = len(text)
    index = 1 if text[0] == "-" else 0
    decimal_found = False
    exponent_found = False
    while index < size:
        character = text[index]
        if character.isdecimal():
            pass
        elif character == "." and not decimal_found and not exponent_found:
            decimal_found = True
        elif character == "e" and not exponent_found:
            exponent_found = True
            if index + 1 < size and text[index + 1] == "-":
                index += 1
        else:
            break
        index += 1
    return index


_PREFIXES = {
    Unit.VOLTS: (("µ", 1e-6), ("m", 1e-3)),
    Unit.DECIBEL: (),
    Unit.SECONDS: (("p", 1e-12), ("n", 1e-9), ("µ", 1e-6), ("min", 60.0), ("m", 1e-3), ("h", 3600.0)),
    Unit.HERTZ: (("k", 1e3), ("M", 1e6), ("G", 1e9)),
    Unit.SAMPLES: (("k", 1e3), ("M", 1e6), ("G", 1e9)),
}


def string_to_value(text: str, unit: Unit) -> float:
    """Parse a value with an optional unit prefix, the inverse of :func:`value_to_string`.

    Raises ValueError when the text holds no number or the unit is not supported.
    """
    if not text:
        raise ValueError("empty value")
    split = _split_number(text)
    number = text[:split]
    try:
        value = float(number)
    except ValueError:
        raise ValueError(f"no number in {text!r}") from None

    if unit not in _PREFIXES:
        raise ValueError(f"unsupported unit {unit!r}")
    suffix = text[split:].strip()
    for prefix, factor in _PREFIXES[unit]:
        if suffix.startswith(prefix):
            return value * factor
    return value


def hex_dump(data: bytes) -> str:
    """Return the bytes as lower-case hex, each byte preceded by a space."""
    return "".join(f" {byte:02x}" for byte in data)


def hex_parse(dump: str, length: int | None = None) -> bytes:
    """Decode a hex dump made by :func:`hex_dump`.

    Spaces are ignored; decoding stops at the first malformed pair, at the end
    of the text, or after ``length`` bytes.
    """
    compact = dump.replace(" ", "")
    indices = itertools.count() if length is None else range(length)
    result = bytearray()
    for index in indices:
        pair = compact[index * 2 : index * 2 + 2]
        if not _HEX_PAIR.fullmatch(pair):
            break
        result.append(int(pair, 16))
    return bytes(result)