import pytest

from marquee.settings import Settings


def test_defaults_from_source():
    settings = Settings()
    assert settings.city_ids == [5304391]
    assert settings.webserver_port == 80
    assert settings.time_display_turns_on == "06:30"
    assert settings.time_display_turns_off == "23:00"
    assert settings.theme_color == "blue-grey"
    assert settings.is_metric is False


def test_round_trip_through_dict():
    original = Settings(api_key="placeholder", city_ids=[1, 2], is_metric=True)
    restored = Settings.from_dict(original.to_dict())
    assert restored == original


def test_to_dict_copies_city_list():
    settings = Settings()
    data = settings.to_dict()
    data["city_ids"].append(7)
    assert settings.city_ids == [5304391]


def test_from_dict_missing_keys_use_defaults():
    settings = Settings.from_dict({"display_intensity": 7})
    assert settings.display_intensity == 7
    assert settings.led_rotation == Settings().led_rotation


def test_from_dict_unknown_key_raises():
    with pytest.raises(ValueError):
        Settings.from_dict({"no_such_setting": 1})


@pytest.mark.parametrize(
    "changes",
    [
        {"display_intensity": 16},
        {"display_intensity": -1},
        {"led_rotation": 4},
        {"minutes_between_scrolling": 11},
        {"number_of_horizontal_displays": 17},
        {"time_display_turns_on": "25:00"},
        {"time_display_turns_off": "7pm"},
    ],
)
def test_invalid_values_raise(changes):
    with pytest.raises(ValueError):
        Settings(**changes)


def test_display_is_scheduled_by_default():
    assert Settings().display_is_scheduled() is True


@pytest.mark.parametrize(
    "on, off",
    [("", "23:00"), ("06:30", ""), ("", "")],
)
def test_display_not_scheduled_when_a_time_is_blank(on, off):
    settings = Settings(time_display_turns_on=on, time_display_turns_off=off)
    assert settings.display_is_scheduled() is False