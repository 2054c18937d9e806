import logging
import os
from concurrent.futures import ThreadPoolExecutor

import requests
from requests import RequestException

from errors import TravelWeatherError, WeatherNotFound, WeatherUnavailable

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org"
CURRENT_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"
FIND_PATH = "/data/2.5/find"
GEO_PATH = "/geo/1.0/direct"

DEFAULT_TIMEOUT = 10
MAX_WORKERS = 8


def _api_key():
    key = (os.environ.get("WEATHER_API_KEY") or "").strip()
    if not key:
        raise WeatherUnavailable("WEATHER_API_KEY is not configured.")
    return key


def _base_url():
    return (os.environ.get("OWM_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")


def _timeout():
    try:
        return float(os.environ.get("WEATHER_TIMEOUT", DEFAULT_TIMEOUT))
    except ValueError:
        return DEFAULT_TIMEOUT


# Performs a GET against the provider and maps failures onto the package's error taxonomy.
def _get(path: str, params: dict, query: str):
    url = f"{_base_url()}{path}"
    params = dict(params, appid=_api_key())
    logger.debug("GET %s (%s)", path, query)
    try:
        response = requests.get(url, params=params, timeout=_timeout())
    except RequestException as e:
        logger.warning("Weather request for %s failed: %s", query, e)
        raise WeatherUnavailable(f"Weather request failed: {e}") from e

    if response.status_code == 404:
        raise WeatherNotFound(query)
    try:
        response.raise_for_status()
    except RequestException as e:
        logger.warning("Weather provider returned HTTP %s for %s", response.status_code, query)
        raise WeatherUnavailable(f"Weather provider error: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise WeatherUnavailable(f"Weather provider returned invalid JSON: {e}") from e


# Current conditions for a city name. Always metric: scoring is calibrated for Celsius.
def fetch_current_weather(city: str, lang: str = "en"):
    return _get(CURRENT_PATH, {"q": city, "units": "metric", "lang": lang}, query=city)


def fetch_weather_by_coords(lat: float, lon: float, lang: str = "en"):
    return _get(CURRENT_PATH, {"lat": lat, "lon": lon, "units": "metric", "lang": lang}, query=f"{lat},{lon}")


# 5-day / 3-hour forecast. The `list` entries arrive in ascending time order.
def fetch_forecast(city: str, lang: str = "en"):
    return _get(FORECAST_PATH, {"q": city, "units": "metric", "lang": lang}, query=city)


def geocode_city(city: str):
    """
    Resolve a city name to its first geocoding match.
    Returns a dict with name, lat, lon and country; raises WeatherNotFound when nothing matches.
    """
    results = _get(GEO_PATH, {"q": city, "limit": 1}, query=city) or []
    if not results:
        raise WeatherNotFound(city)
    first = results[0]
    return {
        "name": first.get("name") or city,
        "lat": first["lat"],
        "lon": first["lon"],
        "country": first.get("country"),
    }


# Cities the provider reports around a point, each entry carrying its own current weather.
def find_nearby(lat: float, lon: float, count: int = 30):
    data = _get(FIND_PATH, {"lat": lat, "lon": lon, "cnt": count, "units": "metric"}, query=f"{lat},{lon}")
    return (data or {}).get("list") or []


def fetch_many(items, fetch, max_workers: int = MAX_WORKERS):
    """
    Run `fetch(item)` for every item concurrently and return results in input order.
    A failing item yields None in its slot instead of aborting the batch.
    """
    items = list(items)
    if not items:
        return []

    def _safe(item):
        try:
            return fetch(item)
        except TravelWeatherError as e:
            logger.warning("Enrichment failed for %r: %s", item, e)
            return None

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as pool:
        return list(pool.map(_safe, items))
