"""Serialisation of parsed JSON values back to text.

Values are the plain Python structures the reader produces: ``None`` for
an undefined value (which writes nothing), ``str`` for quoted strings,
:class:`~marquee.variant.RawJson` for tokens written verbatim, ``bool``,
``int``, ``float``, ``list`` and ``dict``.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from marquee.variant import RawJson

__all__ = [
    "escape_char",
    "format_float",
    "to_json",
    "to_pretty_json",
    "measure_length",
    "measure_pretty_length",
]

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "\b": "b",
    "\f": "f",
    "\n": "n",
    "\r": "r",
    "\t": "t",
}

_POSITIVE_EXPONENTIATION_THRESHOLD = 1e7
_NEGATIVE_EXPONENTIATION_THRESHOLD = 1e-5

_POSITIVE_POWERS = [1e1, 1e2, 1e4, 1e8, 1e16, 1e32, 1e64, 1e128, 1e256]
_NEGATIVE_POWERS = [1e-1, 1e-2, 1e-4, 1e-8, 1e-16, 1e-32, 1e-64, 1e-128, 1e-256]
_NEGATIVE_POWERS_PLUS_ONE = [
    1e0, 1e-1, 1e-3, 1e-7, 1e-15, 1e-31, 1e-63, 1e-127, 1e-255,
]

_MAX_INDENT_LEVEL = 15
_TAB_SIZE = 2


def escape_char(char: str) -> str | None:
    """Return the letter that follows ``\\`` when ``char`` must be escaped, else ``None``."""
    return _ESCAPES.get(char)


def _normalize(value: float) -> tuple[float, int]:
    powers_of_ten = 0
    index = len(_POSITIVE_POWERS) - 1
    bit = 1 << index

    if value >= _POSITIVE_EXPONENTIATION_THRESHOLD:
        while index >= 0:
            if value >= _POSITIVE_POWERS[index]:
                value *= _NEGATIVE_POWERS[index]
                powers_of_ten += bit
            bit >>= 1
            index -= 1

    if 0 < value <= _NEGATIVE_EXPONENTIATION_THRESHOLD:
        while index >= 0:
            if value < _NEGATIVE_POWERS_PLUS_ONE[index]:
                value *= _POSITIVE_POWERS[index]
                powers_of_ten -= bit
            bit >>= 1
            index -= 1

    return value, powers_of_ten


def format_float(value: float) -> str:
    """Format a number with up to nine significant decimals.

    Numbers of at least ``1e7`` or at most ``1e-5`` use an exponent; NaN and
    infinities are written as ``NaN`` and ``Infinity``.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"

    sign = ""
    if value < 0.0:
        sign = "-"
        value = -value
    if math.isinf(value):
        return sign + "Infinity"

    value, exponent = _normalize(value)

    integral = int(value)
    max_decimal = 1_000_000_000
    places = 9
    tmp = integral
    while tmp >= 10:
        max_decimal //= 10
        places -= 1
        tmp //= 10

    remainder = (value - integral) * max_decimal
    decimal = int(remainder)
    remainder -= decimal
    decimal += int(remainder * 2)
    if decimal >= max_decimal:
        decimal = 0
        integral += 1
        if exponent and integral >= 10:
            exponent += 1
            integral = 1

    while decimal % 10 == 0 and places > 0:
        decimal //= 10
        places -= 1

    parts = [sign, str(integral)]
    if places:
        parts.append("." + str(decimal).zfill(places))
    if exponent < 0:
        parts.append(f"e-{-exponent}")
    elif exponent > 0:
        parts.append(f"e{exponent}")
    return "".join(parts)


def _quote(text: str) -> str:
    escaped = []
    for char in text:
        special = escape_char(char)
        escaped.append("\\" + special if special else char)
    return '"' + "".join(escaped) + '"'


def _tokens(value: Any) -> Iterator[str]:
    if value is None:
        return
    if isinstance(value, RawJson):
        yield str(value)
    elif isinstance(value, str):
        yield _quote(value)
    elif isinstance(value, bool):
        yield "true" if value else "false"
    elif isinstance(value, int):
        yield str(value)
    elif isinstance(value, float):
        yield format_float(value)
    elif isinstance(value, (list, tuple)):
        yield "["
        for position, item in enumerate(value):
            if position:
                yield ","
            yield from _tokens(item)
        yield "]"
    elif isinstance(value, dict):
        yield "{"
        for position, (key, item) in enumerate(value.items()):
            if position:
                yield ","
            yield _quote(str(key))
            yield ":"
            yield from _tokens(item)
        yield "}"
    else:
        raise TypeError(f"cannot serialise {type(value).__name__} to JSON")


def to_json(value: Any) -> str:
    """Serialise ``value`` as compact JSON text."""
    return "".join(_tokens(value))


class _Prettifier:
    """Re-indents compact JSON text one character at a time."""

    def __init__(self) -> None:
        self._out: list[str] = []
        self._level = 0
        self._at_line_start = True
        self._previous = ""
        self._in_string = False

    def _emit(self, text: str) -> None:
        for char in text:
            if self._at_line_start:
                self._out.append(" " * (self._level * _TAB_SIZE))
            self._out.append(char)
            self._at_line_start = char == "\n"

    def _in_empty_block(self) -> bool:
        return self._previous in ("{", "[")

    def _indent_if_needed(self) -> None:
        if self._in_empty_block():
            self._level = min(self._level + 1, _MAX_INDENT_LEVEL)
            self._emit("\r\n")

    def _unindent_if_needed(self) -> None:
        if not self._in_empty_block():
            self._level = max(self._level - 1, 0)
            self._emit("\r\n")

    def feed(self, char: str) -> None:
        if self._in_string:
            if char == '"' and self._previous != "\\":
                self._in_string = False
            self._emit(char)
        elif char in "{[":
            self._indent_if_needed()
            self._emit(char)
        elif char in "}]":
            self._unindent_if_needed()
            self._emit(char)
        elif char == ":":
            self._emit(": ")
        elif char == ",":
            self._emit(",\r\n")
        elif char == '"':
            self._in_string = True
            self._indent_if_needed()
            self._emit(char)
        else:
            self._indent_if_needed()
            self._emit(char)
        self._previous = char

    def text(self) -> str:
        return "".join(self._out)


def to_pretty_json(value: Any) -> str:
    """Serialise ``value`` as indented JSON with CRLF line breaks."""
    prettifier = _Prettifier()
    for char in to_json(value):
        prettifier.feed(char)
    return prettifier.text()


def measure_length(value: Any) -> int:
    """Return the size in UTF-8 bytes of the compact serialisation."""
    return len(to_json(value).encode("utf-8"))


def measure_pretty_length(value: Any) -> int:
    """Return the size in UTF-8 bytes of the indented serialisation."""
    return len(to_pretty_json(value).encode("utf-8"))