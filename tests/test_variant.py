import math

import pytest

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
    value_or,
)


def test_raw_json_keeps_text():
    raw = RawJson("123")
    assert str(raw) == "123"
    assert repr(raw) == "RawJson('123')"


@pytest.mark.parametrize("value", [None, [], {}])
def test_as_integer_of_non_scalar_is_zero(value):
    assert as_integer(value) == 0


def test_as_integer_from_raw_and_string():
    assert as_integer(RawJson("42")) == 42
    assert as_integer("-17") == -17
    assert as_integer(RawJson("true")) == 1


def test_as_integer_from_bool_and_float():
    assert as_integer(True) == 1
    assert as_integer(False) == 0
    assert as_integer(7.9) == 7
    assert as_integer(-7.9) == -7


def test_as_float_from_kinds():
    assert as_float(RawJson("3.5")) == 3.5
    assert as_float(2) == 2.0
    assert as_float(True) == 1.0
    assert as_float(None) == 0.0
    assert math.isnan(as_float(RawJson("NaN")))
    assert as_float(RawJson("-Infinity")) == -math.inf


def test_as_bool():
    assert as_bool(RawJson("true")) is True
    assert as_bool(RawJson("false")) is False
    assert as_bool(5) is True
    assert as_bool(None) is False


def test_as_string():
    assert as_string("hello") == "hello"
    assert as_string(RawJson("abc")) == "abc"
    assert as_string(RawJson("null")) is None
    assert as_string(12) is None
    assert as_string(None) is None


def test_is_integer():
    assert is_integer(5)
    assert not is_integer(True)
    assert not is_integer(5.5)
    assert is_integer(RawJson("-12"))
    assert not is_integer(RawJson("1.5"))
    assert not is_integer("12")


def test_is_float():
    assert is_float(1.5)
    assert is_float(3)
    assert not is_float(False)
    assert is_float(RawJson("1e5"))
    assert is_float(RawJson("NaN"))
    assert is_float(RawJson("-Infinity"))
    assert not is_float(RawJson("abc"))
    assert not is_float("1.5")


def test_is_boolean():
    assert is_boolean(True)
    assert is_boolean(RawJson("true"))
    assert is_boolean(RawJson("false"))
    assert not is_boolean(RawJson("1"))
    assert not is_boolean(1)


def test_is_string():
    assert is_string("x")
    assert is_string(RawJson("null"))
    assert not is_string(RawJson("x"))
    assert not is_string(None)


def test_value_or_string():
    assert value_or("abc", "fallback") == "abc"
    assert value_or(None, "fallback") == "fallback"
    assert value_or(RawJson("null"), "fallback") == "fallback"


def test_value_or_integer_accepts_any_number():
    assert value_or(RawJson("42"), 0) == 42
    assert value_or(9.7, 0) == 9
    assert value_or("42", -1) == -1
    assert value_or(None, -1) == -1


def test_value_or_bool_and_float():
    assert value_or(RawJson("true"), False) is True
    assert value_or(3, False) is False
    assert value_or(RawJson("2.5"), 0.0) == 2.5
    assert value_or([], 0.5) == 0.5


def test_value_or_containers():
    items = [1, 2]
    mapping = {"a": 1}
    assert value_or(items, []) is items
    assert value_or(mapping, {}) is mapping
    assert value_or(mapping, []) == []


def test_value_or_rejects_unknown_default():
    with pytest.raises(TypeError):
        value_or(1, object())