import pytest
from app import create_app


# Builds an OpenWeatherMap-shaped payload; defaults score a perfect 10.
def make_payload(temp=24.0, humidity=40, wind=3.0, clouds=10, rain=None, description="clear sky",
                 name="Testville", country="FR", lat=48.0, lon=2.0, dt_txt=None):
    payload = {
        "coord": {"lat": lat, "lon": lon},
        "weather": [{"description": description, "icon": "01d"}],
        "main": {"temp": temp, "feels_like": temp, "humidity": humidity, "pressure": 1012},
        "wind": {"speed": wind},
        "clouds": {"all": clouds},
        "sys": {"country": country},
        "name": name,
    }
    if rain is not None:
        payload["rain"] = {"1h": rain}
    if dt_txt is not None:
        payload["dt_txt"] = dt_txt
    return payload


@pytest.fixture()
def weather_payload():
    return make_payload


# Creates the Flask app with a dummy API key; upstream calls are monkeypatched per test.
@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    app = create_app()
    app.config.update(TESTING=True)
    yield app

@pytest.fixture()
def client(app):
    return app.test_client()
