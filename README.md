# marquee

This package covers the data side of a scrolling LED marquee clock. It
fetches the current weather from OpenWeatherMap and the local time from
TimeZoneDB. It also holds the device settings and the small, forgiving
JSON reader and writer that the other modules use.

The package needs only the standard library.

## Modules

| Module             | Contents                                                               |
|--------------------|------------------------------------------------------------------------|
| `marquee.numbers`  | `is_integer_text`, `is_float_text`, `parse_integer`, `parse_float`     |
| `marquee.variant`  | `RawJson`, `as_integer`, `as_float`, `as_bool`, `as_string`, `is_integer`, `is_float`, `is_boolean`, `is_string`, `value_or` |
| `marquee.compare`  | `values_equal`                                                         |
| `marquee.parser`   | `parse`, `parse_object`, `parse_array`, `unescape_char`, `JsonParseError`, `DEFAULT_NESTING_LIMIT` |
| `marquee.writer`   | `to_json`, `to_pretty_json`, `measure_length`, `measure_pretty_length`, `format_float`, `escape_char` |
| `marquee.weather`  | `OpenWeatherMapClient`, `Weather`, `WeatherError`, `round_value`, `direction_text`, `weather_icon`, `week_day` |
| `marquee.timedb`   | `TimeDB`, `TimeDBError`, `day_name`, `month_name`, `am_pm`, `zero_pad`, `extract_timestamp` |
| `marquee.settings` | `Settings`, with `to_dict`, `from_dict` and `display_is_scheduled`     |

## JSON

The reader accepts more than strict JSON:

- strings in single or double quotes,
- unquoted words,
- `/* block */` and `// line` comments.

Its input can be a `str`, `bytes` or a readable stream. A stream is read one
character at a time, and nothing after the parsed value is consumed. Nesting
depth is limited, and the default limit is `DEFAULT_NESTING_LIMIT` (10).

A parsed document uses plain Python values. Quoted text becomes `str`, and an
unquoted token such as `42`, `true` or `null` stays a `RawJson` string. The
functions in `marquee.variant` read those values as the type you need. When a
value cannot be read that way they return a neutral result instead of raising.

```python
from marquee.parser import parse_object
from marquee.variant import as_integer
from marquee.writer import to_json, to_pretty_json

root = parse_object("{cnt: 1, /* comment */ 'name': 'Dallas'}", 10)
count = as_integer(root["cnt"])   # 1

print(to_json(root))          # {"cnt":1,"name":"Dallas"}
print(to_pretty_json(root))   # indented, with CRLF line breaks
```

Input that cannot be read raises `JsonParseError`, which is a subclass of
`ValueError`.

`to_json` writes `None` as nothing at all and writes `RawJson` exactly as it
is. It formats floats with `format_float`, which gives up to nine significant
decimals and switches to an exponent at `1e7` and above or at `1e-5` and below.
`measure_length` and `measure_pretty_length` return the size of the output in
UTF-8 bytes.

`values_equal(left, right)` compares a parsed value with either a plain Python
value or another parsed value.

## Weather

```python
from marquee.weather import OpenWeatherMapClient, WeatherError

client = OpenWeatherMapClient(api_key="placeholder", city_ids=[5304391], is_metric=False)
print(client.request_line())

try:
    for weather in client.update_weather():
        print(weather.city, weather.temp_rounded, weather.direction_text, weather.glyph)
except WeatherError as exc:
    print("no weather:", exc, client.cached)
```

The client keeps only the positive city ids, in the order you give them.
`update_weather` connects to the service over HTTP and returns the list of
`Weather` readings.

`process_response(stream)` handles a reply you already have, given as a binary
stream such as a captured response opened with `open(path, "rb")`.

Any failure raises `WeatherError` and stores the message in `client.error`.
Failures include:

- a missing API key,
- a failed connection,
- an HTTP status other than `200 OK`,
- a reply without a header terminator,
- a reply that cannot be parsed.

If the reply is too short to hold any data, the client sets `client.cached` and
raises the service's own message.

A `Weather` keeps each field as the text the service sent. It adds these
derived properties:

- `temp_rounded`, `humidity_rounded`, `wind_rounded`, `direction_rounded`,
  `high_rounded` and `low_rounded`,
- `direction_text`, the 16-point compass name,
- `time_zone_hours`,
- `glyph`, the display character for the condition id.

It also has the method `week_day(offset)`, which returns a Slovak day name.

In metric mode the client converts wind speed from m/s to km/h. In imperial
mode it converts pressure from millibars to inches of mercury. Both values are
written with two decimals.

You can also call the helpers directly:

- `round_value("71.6")` gives `"72"`.
- `direction_text(30)` gives `"NNE"`.
- `weather_icon(800)` gives `"B"`.
- `week_day(epoch, offset)` gives the day name.

## Time

```python
from datetime import datetime
from marquee.timedb import TimeDB, day_name, month_name, am_pm, zero_pad

timedb = TimeDB(api_key="placeholder")
timedb.update_config("placeholder", "32.77", "-96.79")
print(timedb.request_line())
epoch = timedb.get_time()

moment = datetime(2024, 5, 3, 14, 5)
print(day_name(moment), month_name(moment), am_pm(moment), zero_pad(moment.minute))
# Friday Maj PM 05
```

`get_time` returns the current Unix time at the configured position. It raises
`TimeDBError` in three cases:

- the connection fails,
- the reply cannot be parsed,
- the reply has no non-zero `timestamp`.

`read_time(stream)` does the same work on a reply you supply.
`extract_timestamp(body)` takes the timestamp from the last JSON object in a
reply body.

## Settings

`Settings` is a dataclass. Its defaults are the values the device uses on first
start. It covers:

- API keys and city ids,
- units and the 12/24-hour clock,
- scroll speed, display intensity, rotation and panel count,
- web interface options,
- the times the display turns on and off.

The constructor rejects values outside the allowed ranges, and it rejects
on and off times that are neither blank nor `HH:MM`. In both cases it raises
`ValueError`.

```python
from marquee.settings import Settings

settings = Settings.from_dict({"minutes_between_data_refresh": 30})
stored = settings.to_dict()
print(settings.display_is_scheduled())   # True: both on and off times are set
```

`from_dict` raises `ValueError` for keys it does not know. Any key you leave
out keeps its default.

## What the package does not do

The package only fetches, reads and formats data. It does not:

- drive an LED matrix or render scrolling text,
- serve a web configuration interface,
- save settings to disk,
- provide a command-line program.