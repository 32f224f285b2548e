import math

import pytest

from marquee.parser import parse, parse_object
from marquee.variant import RawJson
from marquee.writer import (
    escape_char,
    format_float,
    measure_length,
    measure_pretty_length,
    to_json,
    to_pretty_json,
)


def _strip_layout(text):
    return text.replace(" ", "").replace("\r", "").replace("\n", "")


@pytest.mark.parametrize(
    "char, expected",
    [('"', '"'), ("\\", "\\"), ("\b", "b"), ("\f", "f"), ("\n", "n"), ("\r", "r"), ("\t", "t")],
)
def test_escape_char_special(char, expected):
    assert escape_char(char) == expected


@pytest.mark.parametrize("char", ["a", "/", "0", " "])
def test_escape_char_plain(char):
    assert escape_char(char) is None


def test_format_float_special_values():
    assert format_float(math.nan) == "NaN"
    assert format_float(math.inf) == "Infinity"
    assert format_float(-math.inf) == "-Infinity"


def test_format_float_simple():
    assert format_float(3.14) == "3.14"
    assert format_float(-0.5) == "-0.5"
    assert format_float(0.0) == "0"


def test_format_float_uses_exponent_for_large():
    assert format_float(1e7) == "1e7"
    assert "e" not in format_float(9999.5)


def test_format_float_uses_negative_exponent_for_small():
    assert format_float(1e-7) == "1e-7"


@pytest.mark.parametrize(
    "number", [1.5, 123.456, 0.001, 12345678.9, 2.5e-9, 6.02e23, -42.125, 1e300]
)
def test_format_float_round_trip(number):
    assert float(format_float(number)) == pytest.approx(number, rel=1e-8)


def test_to_json_scalars():
    assert to_json(True) == "true"
    assert to_json(False) == "false"
    assert to_json(-5) == "-5"
    assert to_json(42) == "42"
    assert to_json(None) == ""


def test_to_json_string_escapes():
    assert to_json('a"b\\c\n') == '"a\\"b\\\\c\\n"'


def test_to_json_raw_written_verbatim():
    assert to_json(RawJson("null")) == "null"
    assert to_json([RawJson("1"), "x"]) == '[1,"x"]'


def test_to_json_containers():
    assert to_json({"a": 1, "b": [True, "s"]}) == '{"a":1,"b":[true,"s"]}'
    assert to_json([]) == "[]"
    assert to_json({}) == "{}"


def test_to_json_rejects_unknown_type():
    with pytest.raises(TypeError):
        to_json(object())


@pytest.mark.parametrize(
    "text",
    [
        '{"a":1,"b":[true,false,null],"c":{"d":"x"}}',
        "[1,2,[3,[4]],{}]",
        '{"name":"Tab\\tbed","n":-12.5}',
    ],
)
def test_parse_then_serialise_round_trip(text):
    assert to_json(parse(text)) == text


def test_serialise_then_parse_round_trip():
    data = {"city": "Ba", "list": ["x", "y"], "nested": {"k": "v"}}
    assert parse_object(to_json(data)) == data


def test_pretty_worked_example():
    assert to_pretty_json({"a": 1}) == '{\r\n  "a": 1\r\n}'


def test_pretty_empty_containers_stay_compact():
    assert to_pretty_json({}) == "{}"
    assert to_pretty_json([]) == "[]"


def test_pretty_matches_compact_without_layout():
    data = {"a": [1, 2, {"b": "c"}], "d": {"e": True}}
    assert _strip_layout(to_pretty_json(data)) == to_json(data)


def test_pretty_nested_indentation_grows():
    lines = to_pretty_json({"a": {"b": 1}}).split("\r\n")
    assert lines[2].startswith("    ")
    assert lines[-1] == "}"


def test_measure_length_matches_text():
    data = {"a": [1, "two", 3.5]}
    assert measure_length(data) == len(to_json(data))
    assert measure_pretty_length(data) == len(to_pretty_json(data))


def test_measure_length_counts_utf8_bytes():
    assert measure_length("é") == len('"é"'.encode("utf-8"))
    assert measure_pretty_length([]) == 2