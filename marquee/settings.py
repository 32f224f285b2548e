"""Default configuration of the marquee display and its validation."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any

__all__ = ["Settings"]

DEFAULT_WWW_PASSWORD = "password"

_CLOCK_RE = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


def _default_city_ids() -> list[int]:
    return [5304391]


@dataclass
class Settings:
    """Settings used on first start; later changed through the web interface."""

    timedb_key: str = ""
    api_key: str = ""
    city_ids: list[int] = field(default_factory=_default_city_ids)
    marquee_message: str = ""
    is_metric: bool = False
    is_24hour: bool = False
    is_pm: bool = True
    webserver_port: int = 80
    webserver_enabled: bool = True
    is_basic_auth: bool = False
    www_username: str = "admin"
    www_password: str = DEFAULT_WWW_PASSWORD
    minutes_between_data_refresh: int = 15
    minutes_between_scrolling: int = 1
    display_scroll_speed: int = 25
    flash_on_seconds: bool = True
    display_intensity: int = 1
    number_of_horizontal_displays: int = 4
    number_of_vertical_displays: int = 1
    led_rotation: int = 3
    time_display_turns_on: str = "06:30"
    time_display_turns_off: str = "23:00"
    enable_ota: bool = True
    ota_password: str = ""
    theme_color: str = "blue-grey"

    def __post_init__(self) -> None:
        self.city_ids = list(self.city_ids)
        if not 0 <= self.display_intensity <= 15:
            raise ValueError("display_intensity must be between 0 and 15")
        if not 0 <= self.led_rotation <= 3:
            raise ValueError("led_rotation must be between 0 and 3")
        if not 1 <= self.minutes_between_scrolling <= 10:
            raise ValueError("minutes_between_scrolling must be between 1 and 10")
        if not 1 <= self.number_of_horizontal_displays <= 16:
            raise ValueError("number_of_horizontal_displays must be between 1 and 16")
        if self.number_of_vertical_displays < 1:
            raise ValueError("number_of_vertical_displays must be at least 1")
        if self.minutes_between_data_refresh < 1:
            raise ValueError("minutes_between_data_refresh must be at least 1")
        for name in ("time_display_turns_on", "time_display_turns_off"):
            value = getattr(self, name)
            if value and _CLOCK_RE.fullmatch(value) is None:
                raise ValueError(f"{name} must be blank or HH:MM in 24 hour format")

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Build settings from a dictionary; missing keys keep their defaults."""
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown settings: {', '.join(unknown)}")
        return cls(**data)

    def display_is_scheduled(self) -> bool:
        """Tell whether the display turns on and off by time; both times must be set."""
        return bool(self.time_display_turns_on) and bool(self.time_display_turns_off)