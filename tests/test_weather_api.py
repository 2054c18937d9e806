import types

import pytest
import requests

import weather_api as wa
from errors import WeatherNotFound, WeatherUnavailable

from conftest import make_payload


class FakeResponse:
    def __init__(self, json_data, status_code=200):
        self._json = json_data
        self.status_code = status_code

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


def make_requests_get_stub(store, status_code=200):
    def _get(url, params=None, timeout=30, **kwargs):
        params = params or {}
        store.append({"url": url, "params": dict(params), "timeout": timeout})
        if status_code != 200:
            return FakeResponse({"message": "error"}, status_code=status_code)
        if "/geo/1.0/direct" in url:
            if params.get("q") == "Nowhere":
                return FakeResponse([])
            return FakeResponse([{"name": "Paris", "lat": 48.8566, "lon": 2.3522, "country": "FR"}])
        if "/data/2.5/find" in url:
            return FakeResponse({"list": [make_payload(name="Versailles")]})
        if "/data/2.5/forecast" in url:
            return FakeResponse({"city": {"name": params.get("q"), "country": "FR"},
                                 "list": [make_payload(dt_txt="2024-03-10 12:00:00")]})
        if "/data/2.5/weather" in url:
            return FakeResponse(make_payload(name=params.get("q", "Coords")))
        return FakeResponse({}, status_code=404)
    return _get


@pytest.fixture(autouse=True)
def api_env(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    monkeypatch.delenv("OWM_BASE_URL", raising=False)
    monkeypatch.delenv("WEATHER_TIMEOUT", raising=False)


def test_current_weather_is_metric_and_keyed(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    data = wa.fetch_current_weather("Lyon")
    assert data["name"] == "Lyon"
    assert calls[0]["url"] == "https://api.openweathermap.org/data/2.5/weather"
    assert calls[0]["params"]["units"] == "metric"
    assert calls[0]["params"]["appid"] == "test-key"
    assert calls[0]["timeout"] == 10


def test_base_url_and_timeout_from_environment(monkeypatch):
    calls = []
    monkeypatch.setenv("OWM_BASE_URL", "http://localhost:9000/")
    monkeypatch.setenv("WEATHER_TIMEOUT", "2.5")
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    wa.fetch_weather_by_coords(1.0, 2.0)
    assert calls[0]["url"] == "http://localhost:9000/data/2.5/weather"
    assert calls[0]["params"]["lat"] == 1.0
    assert calls[0]["timeout"] == 2.5


def test_forecast_returns_list(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    data = wa.fetch_forecast("Paris")
    assert data["city"]["name"] == "Paris"
    assert data["list"][0]["dt_txt"] == "2024-03-10 12:00:00"


def test_not_found_maps_to_weather_not_found(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls, status_code=404)))
    with pytest.raises(WeatherNotFound) as excinfo:
        wa.fetch_current_weather("Atlantis")
    assert excinfo.value.query == "Atlantis"


def test_server_error_maps_to_unavailable(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls, status_code=503)))
    with pytest.raises(WeatherUnavailable):
        wa.fetch_forecast("Paris")


def test_network_error_maps_to_unavailable(monkeypatch):
    def boom(url, params=None, timeout=30):
        raise requests.ConnectionError("connection refused")
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=boom))
    with pytest.raises(WeatherUnavailable):
        wa.fetch_current_weather("Paris")


def test_missing_api_key(monkeypatch):
    calls = []
    monkeypatch.delenv("WEATHER_API_KEY")
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    with pytest.raises(WeatherUnavailable):
        wa.fetch_current_weather("Paris")
    assert calls == []


def test_geocode_city(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    assert wa.geocode_city("paris") == {"name": "Paris", "lat": 48.8566, "lon": 2.3522, "country": "FR"}
    with pytest.raises(WeatherNotFound):
        wa.geocode_city("Nowhere")


def test_find_nearby_requests_thirty(monkeypatch):
    calls = []
    monkeypatch.setattr(wa, "requests", types.SimpleNamespace(get=make_requests_get_stub(calls)))
    results = wa.find_nearby(48.8566, 2.3522)
    assert results[0]["name"] == "Versailles"
    assert calls[0]["params"]["cnt"] == 30


def test_fetch_many_isolates_failures_and_keeps_order():
    def fetch(item):
        if item == "bad":
            raise WeatherUnavailable("nope")
        return item.upper()

    assert wa.fetch_many(["a", "bad", "c"], fetch) == ["A", None, "C"]
    assert wa.fetch_many([], fetch) == []


def test_fetch_many_propagates_programming_errors():
    def fetch(item):
        raise KeyError(item)

    with pytest.raises(KeyError):
        wa.fetch_many(["a"], fetch)
