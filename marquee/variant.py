"""Loose conversions between parsed JSON values and Python scalars.

A parsed document is made of plain Python values: ``None`` for a missing
value, ``str`` for a quoted string, :class:`RawJson` for an unquoted token
that has not been interpreted yet, ``bool``, ``int``, ``float``, ``list``
and ``dict``.  The functions here read such a value as the type the
caller wants, falling back to a neutral result instead of raising.
"""

from __future__ import annotations

import math
from typing import Any

from marquee.numbers import is_float_text, is_integer_text, parse_float, parse_integer

__all__ = [
    "RawJson",
    "as_integer",
    "as_float",
    "as_bool",
    "as_string",
    "is_integer",
    "is_float",
    "is_boolean",
    "is_string",
    "value_or",
]


class RawJson(str):
    """Unquoted JSON text kept as written, such as ``42``, ``true`` or ``null``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"RawJson({str.__repr__(self)})"


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_integer(value: Any) -> int:
    """Read ``value`` as an integer; text is parsed leniently, other kinds give 0."""
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if _is_text(value):
        return parse_integer(str(value))
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return 0


def as_float(value: Any) -> float:
    """Read ``value`` as a float; text is parsed leniently, other kinds give 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if _is_text(value):
        return parse_float(str(value))
    return 0.0


def as_bool(value: Any) -> bool:
    """Read ``value`` as a boolean: true when its integer reading is non-zero."""
    return as_integer(value) != 0


def as_string(value: Any) -> str | None:
    """Return the text of a string or raw token, or ``None`` for anything else.

    The raw token ``null`` reads as ``None``.
    """
    if isinstance(value, RawJson):
        return None if value == "null" else str(value)
    if isinstance(value, str):
        return value
    return None


def is_integer(value: Any) -> bool:
    """Tell whether ``value`` holds an integer or integer-looking raw token."""
    if isinstance(value, RawJson):
        return is_integer_text(str(value))
    return isinstance(value, int) and not isinstance(value, bool)


def is_float(value: Any) -> bool:
    """Tell whether ``value`` holds a number or number-looking raw token."""
    if isinstance(value, RawJson):
        return is_float_text(str(value))
    return _is_number(value)


def is_boolean(value: Any) -> bool:
    """Tell whether ``value`` is a bool or the raw token ``true``/``false``."""
    if isinstance(value, RawJson):
        return value in ("true", "false")
    return isinstance(value, bool)


def is_string(value: Any) -> bool:
    """Tell whether ``value`` is a quoted string or the raw token ``null``."""
    if isinstance(value, RawJson):
        return value == "null"
    return isinstance(value, str)


def value_or(value: Any, default: Any) -> Any:
    """Return ``value`` read as the type of ``default``, or ``default`` itself.

    Strings fall back only when the value has no text; integers accept any
    numeric value; other types need a value of a matching kind.
    """
    if isinstance(default, str):
        text = as_string(value)
        return default if text is None else text
    if isinstance(default, bool):
        return as_bool(value) if is_boolean(value) else default
    if isinstance(default, int):
        return as_integer(value) if is_float(value) else default
    if isinstance(default, float):
        return as_float(value) if is_float(value) else default
    if isinstance(default, list):
        return value if isinstance(value, list) else default
    if isinstance(default, dict):
        return value if isinstance(value, dict) else default
    raise TypeError(f"unsupported default type: {type(default).__name__}")