"""Equality between parsed JSON values and plain Python values."""

from __future__ import annotations

from typing import Any

from marquee.variant import (
    RawJson,
    as_bool,
    as_float,
    as_integer,
    as_string,
    is_boolean,
    is_float,
    is_integer,
    is_string,
)

__all__ = ["values_equal"]


def _is_variant_only(value: Any) -> bool:
    return value is None or isinstance(value, (RawJson, list, dict))


def _variants_equal(left: Any, right: Any) -> bool:
    if is_boolean(left) and is_boolean(right):
        return as_bool(left) == as_bool(right)
    if is_integer(left) and is_integer(right):
        return as_integer(left) == as_integer(right)
    if is_float(left) and is_float(right):
        return as_float(left) == as_float(right)
    if isinstance(left, list) and isinstance(right, list):
        return left is right
    if isinstance(left, dict) and isinstance(right, dict):
        return left is right
    if is_string(left) and is_string(right):
        return as_string(left) == as_string(right)
    return False


def values_equal(left: Any, right: Any) -> bool:
    """Compare a parsed value ``left`` with ``right``.

    When ``right`` is a plain ``bool``, ``int``, ``float`` or ``str``, ``left``
    is read as that type and the results are compared.  When ``right`` is
    itself a parsed value (a raw token, list, dict or ``None``) the two are
    compared by kind: booleans, integers, numbers, then containers (which
    are equal only when they are the same object), then strings.
    """
    if _is_variant_only(right):
        return _variants_equal(left, right)
    if isinstance(right, bool):
        return as_bool(left) == right
    if isinstance(right, int):
        return as_integer(left) == right
    if isinstance(right, float):
        return as_float(left) == right
    if isinstance(right, str):
        text = as_string(left)
        return text is not None and text == right
    return False