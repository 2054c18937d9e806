import pytest

from errors import InvalidObservation
from models import WeatherObservation, round1, to_display_temp


def test_from_owm_parses_current_weather(weather_payload):
    obs = WeatherObservation.from_owm(weather_payload(temp=21.5, humidity=55, wind=4.2, clouds=30,
                                                      description="few clouds", name="Lyon"))
    assert obs.temp == 21.5
    assert obs.humidity == 55
    assert obs.wind_speed == 4.2
    assert obs.clouds == 30
    assert obs.precipitation == 0
    assert obs.rain_reported is False
    assert obs.description == "few clouds"
    assert obs.city == "Lyon"
    assert obs.country == "FR"


def test_from_owm_reads_rain_volume(weather_payload):
    obs = WeatherObservation.from_owm(weather_payload(rain=2.5))
    assert obs.precipitation == 2.5
    assert obs.rain_reported is True


def test_from_owm_falls_back_to_three_hour_rain(weather_payload):
    payload = weather_payload()
    payload["rain"] = {"3h": 1.2}
    assert WeatherObservation.from_owm(payload).precipitation == 1.2


def test_from_owm_rejects_missing_fields(weather_payload):
    payload = weather_payload()
    del payload["wind"]
    del payload["clouds"]
    with pytest.raises(InvalidObservation) as excinfo:
        WeatherObservation.from_owm(payload)
    assert excinfo.value.missing == ["wind.speed", "clouds.all"]


def test_from_owm_rejects_non_numeric_fields(weather_payload):
    payload = weather_payload(temp="n/a")
    payload["rain"] = {"1h": "heavy"}
    with pytest.raises(InvalidObservation) as excinfo:
        WeatherObservation.from_owm(payload)
    assert excinfo.value.missing == ["main.temp", "rain"]


def test_from_owm_accepts_zero_values(weather_payload):
    obs = WeatherObservation.from_owm(weather_payload(temp=0, humidity=0, wind=0, clouds=0))
    assert obs.temp == 0


def test_round1_rounds_half_up():
    assert round1(8.25) == 8.3
    assert round1(2.2) == 2.2


def test_to_display_temp():
    assert to_display_temp(24.0) == 24.0
    assert to_display_temp(24.0, "imperial") == 75.2
    assert to_display_temp(None, "imperial") is None
