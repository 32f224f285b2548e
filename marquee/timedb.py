"""Current time for a position from the TimeZoneDB service.

Besides fetching the time, this module names days and months and
formats clock parts the way the marquee display shows them.
"""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import Iterable
from datetime import datetime
from typing import BinaryIO

from marquee.parser import JsonParseError, parse_object
from marquee.variant import as_integer

__all__ = [
    "TimeDBError",
    "TimeDB",
    "day_name",
    "month_name",
    "am_pm",
    "zero_pad",
    "extract_timestamp",
]

log = logging.getLogger(__name__)

# Indexed by datetime.weekday(), where Monday is 0.
_DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "Maj", "Jun",
    "Jul", "Aug", "Sep", "Okt", "Nov", "Dec",
)


class TimeDBError(RuntimeError):
    """Raised when the time could not be fetched or read from the reply."""


def day_name(moment: datetime) -> str:
    """Return the English name of the day of the week of ``moment``."""
    return _DAY_NAMES[moment.weekday()]


def month_name(moment: datetime) -> str:
    """Return the short display name of the month of ``moment``."""
    return _MONTH_NAMES[moment.month - 1]


def am_pm(moment: datetime) -> str:
    """Return ``"PM"`` from noon onwards and ``"AM"`` before."""
    return "PM" if moment.hour >= 12 else "AM"


def zero_pad(number: int) -> str:
    """Prefix numbers below ten with a ``0``."""
    return f"0{number}" if number < 10 else str(number)


def _braced_text(chars: Iterable[str]) -> str:
    """Keep only the characters from each ``{`` up to the next ``}``."""
    kept: list[str] = []
    recording = False
    for char in chars:
        if char == "{":
            recording = True
        if recording:
            kept.append(char)
        if char == "}":
            recording = False
    return "".join(kept)


def extract_timestamp(body: str) -> int:
    """Return the ``timestamp`` of the last JSON object in a reply.

    Everything outside braces is dropped and parsing starts at the last
    ``{``.  A missing, zero or unreadable timestamp raises
    :class:`TimeDBError`.
    """
    text = _braced_text(body)
    start = text.rfind("{")
    tail = text[start:] if start >= 0 else ""
    try:
        root = parse_object(tail)
    except JsonParseError as exc:
        raise TimeDBError("could not parse the time zone reply") from exc
    timestamp = as_integer(root.get("timestamp"))
    if timestamp == 0:
        raise TimeDBError("the time zone reply holds no timestamp")
    return timestamp


class TimeDB:
    """Asks the TimeZoneDB service for the current time at a position."""

    SERVER = "api.timezonedb.com"
    PORT = 80
    TIMEOUT = 10.0

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key
        self.lat = ""
        self.lon = ""
        self.updated_at: float | None = None

    def update_config(self, api_key: str, lat: str, lon: str) -> None:
        self.api_key = api_key
        self.lat = lat
        self.lon = lon

    def request_line(self) -> str:
        return (
            f"GET /v2.1/get-time-zone?key={self.api_key}&format=json"
            f"&by=position&lat={self.lat}&lng={self.lon} HTTP/1.1"
        )

    def read_time(self, stream: BinaryIO) -> int:
        """Read a whole reply from ``stream`` and return its Unix timestamp."""
        data = stream.read()
        body = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        self.updated_at = time.monotonic()
        log.debug("time zone reply: %s", body)
        return extract_timestamp(body)

    def get_time(self) -> int:
        """Fetch the current Unix time at the configured position."""
        log.info("getting time data for %s,%s", self.lat, self.lon)
        request = "\r\n".join(
            (
                self.request_line(),
                f"Host: {self.SERVER}",
                "User-Agent: ArduinoWiFi/1.1",
                "Connection: close",
                "",
                "",
            )
        )
        try:
            connection = socket.create_connection(
                (self.SERVER, self.PORT), timeout=self.TIMEOUT
            )
        except OSError as exc:
            log.warning("connection for time data failed")
            raise TimeDBError("connection for time data failed") from exc
        with connection, connection.makefile("rb") as stream:
            connection.sendall(request.encode("utf-8"))
            return self.read_time(stream)