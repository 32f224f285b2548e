"""A forgiving JSON reader.

It accepts single or double quoted strings, unquoted tokens, ``/* */`` and
``//`` comments, and leaves unquoted scalars as :class:`RawJson` tokens to be
interpreted later.  Input may be a ``str``, ``bytes`` or a readable stream;
streams are consumed one character at a time and nothing past the parsed
value is read.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from typing import Any

from marquee.variant import RawJson

__all__ = [
    "DEFAULT_NESTING_LIMIT",
    "JsonParseError",
    "unescape_char",
    "parse",
    "parse_object",
    "parse_array",
]

DEFAULT_NESTING_LIMIT = 10

_END = "\0"
_UNESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}
_QUOTES = ("'", '"')


class JsonParseError(ValueError):
    """Raised when the input is not a value of the expected shape."""


def unescape_char(char: str) -> str:
    """Return the character that ``\\`` followed by ``char`` stands for."""
    return _UNESCAPES.get(char, char)


def _can_be_in_unquoted(char: str) -> bool:
    return (
        "0" <= char <= "9"
        or "_" <= char <= "z"
        or "A" <= char <= "Z"
        or char in "+-."
    ) and char != _END


def _stream_chars(stream: Any) -> Iterator[str]:
    decoder = None
    while True:
        chunk = stream.read(1)
        if not chunk:
            return
        if isinstance(chunk, (bytes, bytearray)):
            if decoder is None:
                decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
            yield from decoder.decode(bytes(chunk))
        else:
            yield from chunk


def _chars_of(source: Any) -> Iterator[str]:
    if isinstance(source, str):
        return iter(source)
    if isinstance(source, (bytes, bytearray)):
        return iter(bytes(source).decode("utf-8", errors="replace"))
    if hasattr(source, "read"):
        return _stream_chars(source)
    raise TypeError(f"cannot parse JSON from {type(source).__name__}")


class _Reader:
    """One character of lookahead over a character iterator; ``\\0`` marks the end."""

    def __init__(self, chars: Iterator[str]) -> None:
        self._chars = chars
        self._current: str | None = None
        self._next: str | None = None

    def _read(self) -> str:
        return next(self._chars, _END)

    def current(self) -> str:
        if self._current is None:
            self._current = self._read()
        return self._current

    def peek(self) -> str:
        self.current()
        if self._next is None:
            self._next = self._read()
        return self._next

    def move(self) -> None:
        self._current = self._next
        self._next = None


class _Parser:
    def __init__(self, source: Any, nesting_limit: int) -> None:
        if nesting_limit < 0:
            raise ValueError("nesting_limit must not be negative")
        self._reader = _Reader(_chars_of(source))
        self._nesting_limit = nesting_limit

    def _skip_spaces_and_comments(self) -> None:
        reader = self._reader
        while True:
            char = reader.current()
            if char in " \t\r\n":
                reader.move()
                continue
            if char != "/":
                return
            following = reader.peek()
            if following == "*":
                reader.move()
                while True:
                    reader.move()
                    if reader.current() == _END:
                        return
                    if reader.current() == "*" and reader.peek() == "/":
                        reader.move()
                        reader.move()
                        break
            elif following == "/":
                while True:
                    reader.move()
                    if reader.current() == _END:
                        return
                    if reader.current() == "\n":
                        break
            else:
                return

    def _eat(self, char: str) -> bool:
        self._skip_spaces_and_comments()
        if self._reader.current() != char:
            return False
        self._reader.move()
        return True

    def parse_value(self) -> Any:
        if self._nesting_limit == 0:
            raise JsonParseError("nesting limit exceeded")
        self._nesting_limit -= 1
        try:
            self._skip_spaces_and_comments()
            char = self._reader.current()
            if char == "[":
                return self.parse_array()
            if char == "{":
                return self.parse_object()
            return self._parse_scalar()
        finally:
            self._nesting_limit += 1

    def parse_array(self) -> list[Any]:
        result: list[Any] = []
        if not self._eat("["):
            raise JsonParseError("expected '['")
        if self._eat("]"):
            return result
        while True:
            result.append(self.parse_value())
            if self._eat("]"):
                return result
            if not self._eat(","):
                raise JsonParseError("expected ',' or ']' in array")

    def parse_object(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if not self._eat("{"):
            raise JsonParseError("expected '{'")
        if self._eat("}"):
            return result
        while True:
            key = self._parse_string()
            if not self._eat(":"):
                raise JsonParseError("expected ':' after object key")
            result[key] = self.parse_value()
            if self._eat("}"):
                return result
            if not self._eat(","):
                raise JsonParseError("expected ',' or '}' in object")

    def _parse_string(self) -> str:
        reader = self._reader
        self._skip_spaces_and_comments()
        char = reader.current()
        parts: list[str] = []
        if char in _QUOTES:
            reader.move()
            stop = char
            while True:
                char = reader.current()
                if char == _END:
                    break
                reader.move()
                if char == stop:
                    break
                if char == "\\":
                    char = unescape_char(reader.current())
                    if char == _END:
                        break
                    reader.move()
                parts.append(char)
        else:
            while _can_be_in_unquoted(char):
                reader.move()
                parts.append(char)
                char = reader.current()
        return "".join(parts)

    def _parse_scalar(self) -> str:
        quoted = self._reader.current() in _QUOTES
        text = self._parse_string()
        return text if quoted else RawJson(text)


def parse(source: Any, nesting_limit: int = DEFAULT_NESTING_LIMIT) -> Any:
    """Parse any JSON value; the top-level value counts towards ``nesting_limit``."""
    return _Parser(source, nesting_limit).parse_value()


def parse_object(
    source: Any, nesting_limit: int = DEFAULT_NESTING_LIMIT
) -> dict[str, Any]:
    """Parse a JSON object, raising :class:`JsonParseError` on malformed input."""
    return _Parser(source, nesting_limit).parse_object()


def parse_array(source: Any, nesting_limit: int = DEFAULT_NESTING_LIMIT) -> list[Any]:
    """Parse a JSON array, raising :class:`JsonParseError` on malformed input."""
    return _Parser(source, nesting_limit).parse_array()