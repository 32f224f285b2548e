"""Current conditions from the OpenWeatherMap group endpoint.

Values are kept as the text the service sent, the way a scrolling
display uses them.  Derived readings such as rounded numbers, compass
points and display glyphs are computed on demand.
"""

from __future__ import annotations

import logging
import math
import socket
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterable

from marquee.numbers import parse_float, parse_integer
from marquee.parser import JsonParseError, parse_object
from marquee.variant import value_or
from marquee.writer import measure_length

__all__ = [
    "WeatherError",
    "Weather",
    "OpenWeatherMapClient",
    "round_value",
    "direction_text",
    "weather_icon",
    "week_day",
]

log = logging.getLogger(__name__)

MAX_CITIES = 5
_STATUS_MAX = 32
_END_OF_HEADERS = b"\r\n\r\n"
_MIN_DATA_LENGTH = 150

_COMPASS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
_WEEK_DAYS = ("Nedela", "Pondelok", "Utorok", "Streda", "Stvrtok", "Piatok", "Sobota")

_ICONS: dict[int, str] = {
    800: "B", 801: "Y", 802: "H", 803: "H", 804: "Y",
    **dict.fromkeys((200, 201, 202, 210, 211, 212, 221, 230, 231, 232), "0"),
    **dict.fromkeys((300, 301, 302, 310, 311, 312, 313, 314, 321), "R"),
    **dict.fromkeys((500, 501, 502, 503, 504, 511, 520, 521, 522, 531), "R"),
    **dict.fromkeys((600, 601, 602, 611, 612, 615, 616, 620, 621, 622), "W"),
    **dict.fromkeys((701, 711, 721, 731, 741, 751, 761, 762, 771, 781), "M"),
}

MISSING_KEY_MESSAGE = "Prosím poskytnite API kľúč pre počasie."
CONNECTION_FAILED_MESSAGE = "Pripojenie pre údaje o počasí zlyhalo"
BAD_STATUS_MESSAGE = "Chyba údajov o počasí: "
INVALID_RESPONSE_MESSAGE = "Neplatná odpoveď"
PARSE_FAILED_MESSAGE = "Analýza údajov o počasí zlyhala!"


class WeatherError(RuntimeError):
    """Raised when weather data could not be fetched or understood."""


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _trunc_mod(numerator: int, denominator: int) -> int:
    return numerator - denominator * _trunc_div(numerator, denominator)


def round_value(value: str) -> str:
    """Round a numeric text half up (truncating toward zero) and return it as text."""
    number = parse_float(value) + 0.5
    if not math.isfinite(number):
        return "0"
    return str(int(number))


def direction_text(degrees: int) -> str:
    """Return the 16-point compass name for a bearing in degrees."""
    sector = math.floor(degrees / 22.5 + 0.5)
    return _COMPASS[sector % 16]


def weather_icon(weather_id: int) -> str:
    """Return the display glyph for an OpenWeatherMap condition id."""
    return _ICONS.get(weather_id, ")")


def week_day(epoch: int, offset: float) -> str:
    """Return the day name for ``epoch`` shifted by ``offset`` hours; epoch 0 gives ''."""
    if epoch == 0:
        return ""
    day = _trunc_mod(_trunc_div(epoch + 3600 * int(offset), 86400) + 4, 7)
    return _WEEK_DAYS[day] if 0 <= day < 7 else ""


@dataclass
class Weather:
    """Conditions for one city, as text taken from the service reply."""

    lat: str = ""
    lon: str = ""
    dt: str = ""
    city: str = ""
    country: str = ""
    temp: str = ""
    humidity: str = ""
    condition: str = ""
    wind: str = ""
    weather_id: str = ""
    description: str = ""
    icon: str = ""
    pressure: str = ""
    direction: str = ""
    high: str = ""
    low: str = ""
    time_zone: str = ""

    @property
    def temp_rounded(self) -> str:
        return round_value(self.temp)

    @property
    def humidity_rounded(self) -> str:
        return round_value(self.humidity)

    @property
    def wind_rounded(self) -> str:
        return round_value(self.wind)

    @property
    def direction_rounded(self) -> str:
        return round_value(self.direction)

    @property
    def direction_text(self) -> str:
        return direction_text(parse_integer(self.direction_rounded))

    @property
    def high_rounded(self) -> str:
        return round_value(self.high)

    @property
    def low_rounded(self) -> str:
        return round_value(self.low)

    @property
    def time_zone_hours(self) -> int:
        """The UTC offset in whole hours, truncated toward zero."""
        return _trunc_div(parse_integer(self.time_zone), 3600)

    @property
    def glyph(self) -> str:
        return weather_icon(parse_integer(self.weather_id))

    def week_day(self, offset: float) -> str:
        """Return the day name of this reading's time shifted by ``offset`` hours."""
        return week_day(parse_integer(self.dt), offset)


def _lookup(root: Any, *path: Any) -> Any:
    node = root
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or step >= len(node):
                return None
        elif not isinstance(node, dict) or step not in node:
            return None
        node = node[step]
    return node


def _text(root: Any, *path: Any) -> str:
    return value_or(_lookup(root, *path), "")


def _weather_from(entry: Any) -> Weather:
    return Weather(
        lat=_text(entry, "coord", "lat"),
        lon=_text(entry, "coord", "lon"),
        dt=_text(entry, "dt"),
        city=_text(entry, "name"),
        country=_text(entry, "sys", "country"),
        temp=_text(entry, "main", "temp"),
        humidity=_text(entry, "main", "humidity"),
        condition=_text(entry, "weather", 0, "main"),
        wind=_text(entry, "wind", "speed"),
        weather_id=_text(entry, "weather", 0, "id"),
        description=_text(entry, "weather", 0, "description"),
        icon=_text(entry, "weather", 0, "icon"),
        pressure=_text(entry, "main", "pressure"),
        direction=_text(entry, "wind", "deg"),
        high=_text(entry, "main", "temp_max"),
        low=_text(entry, "main", "temp_min"),
        time_zone=_text(entry, "sys", "timezone"),
    )


def _read_status(stream: BinaryIO) -> str:
    data = bytearray()
    while len(data) < _STATUS_MAX:
        byte = stream.read(1)
        if not byte or byte == b"\r":
            break
        data += byte
    return data.decode("utf-8", errors="replace")


def _skip_past(stream: BinaryIO, marker: bytes) -> bool:
    window = b""
    while True:
        byte = stream.read(1)
        if not byte:
            return False
        window = (window + byte)[-len(marker):]
        if window == marker:
            return True


class OpenWeatherMapClient:
    """Fetches current conditions for a list of city ids."""

    SERVER = "api.openweathermap.org"
    PORT = 80
    TIMEOUT = 10.0

    def __init__(self, api_key: str, city_ids: Iterable[int], is_metric: bool) -> None:
        self.city_ids = ""
        self.units = ""
        self.weathers: list[Weather] = [Weather() for _ in range(MAX_CITIES)]
        self.cached = False
        self.error = ""
        self.update_city_id_list(city_ids)
        self.api_key = api_key
        self.set_metric(is_metric)

    def update_weather_api_key(self, api_key: str) -> None:
        self.api_key = api_key

    def update_city_id_list(self, city_ids: Iterable[int]) -> None:
        """Keep the positive ids, comma separated, in their given order."""
        self.city_ids = ",".join(str(city) for city in city_ids if city > 0)

    def set_metric(self, is_metric: bool) -> None:
        self.units = "metric" if is_metric else "imperial"

    @property
    def is_metric(self) -> bool:
        return self.units == "metric"

    def request_line(self) -> str:
        return (
            f"GET /data/2.5/group?id={self.city_ids}&units={self.units}"
            f"&cnt=1&APPID={self.api_key} HTTP/1.1"
        )

    def _fail(self, message: str) -> WeatherError:
        self.error = message
        log.warning(message)
        return WeatherError(message)

    def process_response(self, stream: BinaryIO) -> list[Weather]:
        """Read an HTTP reply from ``stream`` and update the stored conditions."""
        self.cached = False
        self.error = ""

        status = _read_status(stream)
        if status != "HTTP/1.1 200 OK":
            raise self._fail(BAD_STATUS_MESSAGE + status)
        if not _skip_past(stream, _END_OF_HEADERS):
            raise self._fail(INVALID_RESPONSE_MESSAGE)

        try:
            root = parse_object(stream)
        except JsonParseError as exc:
            raise self._fail(PARSE_FAILED_MESSAGE) from exc

        if measure_length(root) <= _MIN_DATA_LENGTH:
            self.cached = True
            raise self._fail(value_or(root.get("message"), ""))

        count = min(parse_integer(_text(root, "cnt")), MAX_CITIES)
        for index in range(count):
            weather = _weather_from(_lookup(root, "list", index))
            if self.is_metric:
                weather.wind = f"{parse_float(weather.wind) * 3.6:.2f}"
            else:
                weather.pressure = f"{parse_float(weather.pressure) * 0.0295301:.2f}"
            self.weathers[index] = weather
            log.debug("weather for %s: %s", weather.city, weather)
        return self.weathers[:count]

    def update_weather(self) -> list[Weather]:
        """Fetch fresh conditions from the service."""
        if self.api_key == "":
            raise self._fail(MISSING_KEY_MESSAGE)
        self.cached = False
        self.error = ""
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
            raise self._fail(CONNECTION_FAILED_MESSAGE) from exc
        with connection, connection.makefile("rb") as stream:
            connection.sendall(request.encode("utf-8"))
            return self.process_response(stream)