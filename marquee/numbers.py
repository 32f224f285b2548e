"""Lenient number recognition and parsing for JSON scalar text.

These helpers accept the loose number syntax used by the JSON reader:
leading signs, missing digits, trailing garbage and the special words
``true``, ``NaN`` and ``Infinity``.
"""

from __future__ import annotations

import math
import re

_MANTISSA_MAX = (1 << 52) - 1
_MANTISSA_LIMIT = _MANTISSA_MAX // 10
_EXPONENT_MAX = 308

_INTEGER_RE = re.compile(r"[+-]?[0-9]*")
_FLOAT_RE = re.compile(
    r"NaN|[+-]?(?:Infinity|(?=.)[0-9]*(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?)",
    re.DOTALL,
)
_FLOAT_PARTS_RE = re.compile(
    r"([0-9]*)(?:\.([0-9]*))?(?:[eE]([+-]?)([0-9]*))?"
)
_INTEGER_PARTS_RE = re.compile(r"([+-]?)([0-9]*)")


def is_integer_text(text: str | None) -> bool:
    """Tell whether ``text`` is an optional sign followed only by digits."""
    if text is None:
        return False
    return _INTEGER_RE.fullmatch(text) is not None


def is_float_text(text: str | None) -> bool:
    """Tell whether ``text`` looks like a floating point number."""
    if text is None:
        return False
    return _FLOAT_RE.fullmatch(text) is not None


def _binary_power_of_ten(index: int, negative: bool) -> float:
    exponent = 1 << index
    return float(f"1e-{exponent}" if negative else f"1e{exponent}")


def _make_float(mantissa: float, exponent: int) -> float:
    negative = exponent < 0
    remaining = abs(exponent)
    index = 0
    while remaining:
        if remaining & 1:
            mantissa *= _binary_power_of_ten(index, negative)
        remaining >>= 1
        index += 1
    return mantissa


def parse_float(text: str | None) -> float:
    """Parse the leading number in ``text``; unparsable input gives 0.0.

    Digits beyond what a 52-bit mantissa holds are dropped, and exponents
    past 308 give infinity (or zero for negative exponents).
    """
    if text is None:
        return 0.0

    negative = text[:1] == "-"
    rest = text[1:] if text[:1] in ("-", "+") else text

    if rest.startswith("t"):
        return 1.0
    if rest[:1] in ("n", "N"):
        return math.nan
    if rest[:1] in ("i", "I"):
        return -math.inf if negative else math.inf

    whole, fraction, exp_sign, exp_digits = _FLOAT_PARTS_RE.match(rest).groups()

    mantissa = 0
    offset = 0
    for digit in whole:
        if mantissa < _MANTISSA_LIMIT:
            mantissa = mantissa * 10 + int(digit)
        else:
            offset += 1
    for digit in fraction or "":
        if mantissa < _MANTISSA_LIMIT:
            mantissa = mantissa * 10 + int(digit)
            offset -= 1

    exponent = int(exp_digits) if exp_digits else 0
    if exponent + offset > _EXPONENT_MAX:
        if exp_sign == "-":
            return -0.0 if negative else 0.0
        return -math.inf if negative else math.inf
    if exp_sign == "-":
        exponent = -exponent

    result = _make_float(float(mantissa), exponent + offset)
    return -result if negative else result


def parse_integer(text: str | None) -> int:
    """Parse the leading integer in ``text``; unparsable input gives 0."""
    if text is None:
        return 0
    if text.startswith("t"):
        return 1
    sign, digits = _INTEGER_PARTS_RE.match(text).groups()
    value = int(digits) if digits else 0
    return -value if sign == "-" else value