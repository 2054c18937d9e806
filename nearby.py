import logging
import math

import weather_api
from errors import InvalidObservation, TravelWeatherError, WeatherUnavailable
from models import NearbyCity, WeatherObservation, round1
from scoring import calculate_travel_score

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371
MAX_DISTANCE_KM = 100
SEARCH_COUNT = 30
MAX_RESULTS = 5
MIN_DISTANCE_KM = 1

# name, country code, lat, lon
FALLBACK_CITIES = (
    ("Paris", "FR", 48.8566, 2.3522),
    ("Versailles", "FR", 48.8049, 2.1204),
    ("London", "GB", 51.5074, -0.1278),
    ("Oxford", "GB", 51.7520, -1.2577),
    ("Brighton", "GB", 50.8225, -0.1372),
    ("Amsterdam", "NL", 52.3676, 4.9041),
    ("Rotterdam", "NL", 51.9244, 4.4777),
    ("Utrecht", "NL", 52.0907, 5.1214),
    ("The Hague", "NL", 52.0705, 4.3007),
    ("Brussels", "BE", 50.8503, 4.3517),
    ("Antwerp", "BE", 51.2194, 4.4025),
    ("Berlin", "DE", 52.5200, 13.4050),
    ("Potsdam", "DE", 52.3906, 13.0645),
    ("Munich", "DE", 48.1351, 11.5820),
    ("Vienna", "AT", 48.2082, 16.3738),
    ("Bratislava", "SK", 48.1486, 17.1077),
    ("Copenhagen", "DK", 55.6761, 12.5683),
    ("Malmo", "SE", 55.6050, 13.0038),
    ("Madrid", "ES", 40.4168, -3.7038),
    ("Toledo", "ES", 39.8628, -4.0273),
    ("Barcelona", "ES", 41.3851, 2.1734),
    ("Rome", "IT", 41.9028, 12.4964),
    ("Milan", "IT", 45.4642, 9.1900),
    ("Bergamo", "IT", 45.6983, 9.6773),
    ("New York", "US", 40.7128, -74.0060),
    ("Newark", "US", 40.7357, -74.1724),
    ("San Francisco", "US", 37.7749, -122.4194),
    ("Oakland", "US", 37.8044, -122.2712),
    ("San Jose", "US", 37.3382, -121.8863),
    ("Tokyo", "JP", 35.6762, 139.6503),
    ("Yokohama", "JP", 35.4437, 139.6380),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points given in decimal degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _norm(name):
    return (name or "").strip().lower()


def _scored(city: NearbyCity, observation: WeatherObservation) -> NearbyCity:
    score = calculate_travel_score(observation)
    city.temp = observation.temp
    city.description = observation.description
    city.travel_score = score.rating
    city.recommendation = score.recommendation
    return city


# Primary path: the provider's own "find" search around the resolved origin.
def _nearby_from_provider(origin: dict, excluded: set) -> list:
    candidates = []
    for entry in weather_api.find_nearby(origin["lat"], origin["lon"], count=SEARCH_COUNT):
        coord = entry.get("coord") or {}
        country = (entry.get("sys") or {}).get("country")
        name = entry.get("name")
        if "lat" not in coord or "lon" not in coord:
            continue
        if country != origin["country"] or _norm(name) in excluded:
            continue
        distance = haversine_km(origin["lat"], origin["lon"], coord["lat"], coord["lon"])
        if distance > MAX_DISTANCE_KM:
            continue
        candidates.append((distance, name, country, coord, entry))

    candidates.sort(key=lambda item: item[0])

    results = []
    for distance, name, country, coord, entry in candidates[:MAX_RESULTS]:
        city = NearbyCity(name=name, country=country, lat=coord["lat"], lon=coord["lon"],
                          distance_km=round1(distance))
        try:
            _scored(city, WeatherObservation.from_owm(entry))
        except InvalidObservation as e:
            logger.debug("Unscored nearby city %s: %s", name, e)
        results.append(city)
    return results


def _fallback_origin(city_name: str, origin):
    if origin is not None:
        return origin
    for name, country, lat, lon in FALLBACK_CITIES:
        if _norm(name) == _norm(city_name):
            return {"name": name, "country": country, "lat": lat, "lon": lon}
    observation = WeatherObservation.from_owm(weather_api.fetch_current_weather(city_name))
    if observation.lat is None or observation.lon is None:
        raise WeatherUnavailable(f"No coordinates reported for {city_name}")
    return {"name": observation.city or city_name, "country": observation.country,
            "lat": observation.lat, "lon": observation.lon}


# Fallback path: curated cities, same country first, each fetched individually.
def _nearby_from_catalog(origin: dict, excluded: set) -> list:
    same_country, other_country = [], []
    for name, country, lat, lon in FALLBACK_CITIES:
        if _norm(name) in excluded:
            continue
        distance = haversine_km(origin["lat"], origin["lon"], lat, lon)
        if distance < MIN_DISTANCE_KM or distance > MAX_DISTANCE_KM:
            continue
        city = NearbyCity(name=name, country=country, lat=lat, lon=lon, distance_km=round1(distance))
        bucket = same_country if country == origin.get("country") else other_country
        bucket.append((distance, city))

    same_country.sort(key=lambda item: item[0])
    other_country.sort(key=lambda item: item[0])
    picked = [city for _, city in same_country + other_country][:MAX_RESULTS]

    def _fetch(city):
        payload = weather_api.fetch_weather_by_coords(city.lat, city.lon)
        return _scored(city, WeatherObservation.from_owm(payload))

    return [city for city in weather_api.fetch_many(picked, _fetch) if city is not None]


def get_nearest_cities(city_name: str) -> list:
    """
    Up to five cities within 100 km of `city_name`, nearest first, each with a travel score.

    The provider search is tried first; the curated list is used when it fails or comes back
    empty. The query city itself is never returned.
    """
    excluded = {_norm(city_name)}
    origin = None
    try:
        origin = weather_api.geocode_city(city_name)
        excluded.add(_norm(origin["name"]))
        results = _nearby_from_provider(origin, excluded)
        if results:
            return results
        logger.info("Provider returned no nearby cities for %s, using curated list", city_name)
    except TravelWeatherError as e:
        logger.info("Nearby search for %s failed (%s), using curated list", city_name, e)

    origin = _fallback_origin(city_name, origin)
    excluded.add(_norm(origin["name"]))
    return _nearby_from_catalog(origin, excluded)
