"""
Destination recommendations and multi-city comparison.

Candidates come from a small curated catalog and are ranked by their live travel score.
"""
import logging
from datetime import datetime
from typing import Optional

import weather_api
from errors import TravelWeatherError
from models import Destination, WeatherObservation
from scoring import calculate_travel_score

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 8
UNAVAILABLE = "Weather data unavailable"

CLIMATE_WEIGHT = 3
ACTIVITY_WEIGHT = 2
SEASON_WEIGHT = 2

DESTINATIONS = (
    Destination("Miami", "USA", "tropical", (24, 30),
                ("beach", "water sports", "nightlife"), (11, 12, 1, 2, 3, 4), ("warm", "humid", "sunny")),
    Destination("Denver", "USA", "continental", (15, 25),
                ("hiking", "skiing", "mountains"), (6, 7, 8, 9), ("mild", "dry", "mountains")),
    Destination("Seattle", "USA", "oceanic", (12, 22),
                ("culture", "coffee", "nature"), (6, 7, 8, 9), ("cool", "rainy", "green")),
    Destination("Barcelona", "Spain", "mediterranean", (18, 28),
                ("beach", "culture", "food"), (5, 6, 9, 10), ("warm", "sunny", "coastal")),
    Destination("Tokyo", "Japan", "humid subtropical", (15, 25),
                ("culture", "food", "technology"), (3, 4, 10, 11), ("seasonal", "varied", "urban")),
    Destination("Reykjavik", "Iceland", "subarctic", (8, 15),
                ("northern lights", "geothermal", "nature"), (6, 7, 8), ("cold", "unique", "adventure")),
    Destination("Dubai", "UAE", "desert", (20, 35),
                ("luxury", "shopping", "desert"), (11, 12, 1, 2, 3), ("hot", "dry", "luxury")),
    Destination("Paris", "France", "oceanic", (15, 25),
                ("culture", "food", "romance"), (4, 5, 6, 9, 10), ("mild", "romantic", "cultural")),
)


def current_month() -> int:
    return datetime.now().month


def match_score(destination: Destination, climate: Optional[str], activities, month: int) -> int:
    score = 0
    if climate and climate in destination.climate:
        score += CLIMATE_WEIGHT
    score += ACTIVITY_WEIGHT * sum(1 for activity in activities if activity in destination.activities)
    if month in destination.best_months:
        score += SEASON_WEIGHT
    return score


def match_destinations(preferences: dict, catalog=DESTINATIONS) -> list:
    """
    Return up to eight catalog entries matching any of climate, activities or season.

    The match score only gates inclusion; candidates keep catalog order and the
    first eight are taken without ranking by match strength.
    """
    climate = preferences.get("climate")
    activities = preferences.get("activities") or []
    month = preferences.get("current_month") or current_month()

    matches = [dest for dest in catalog if match_score(dest, climate, activities, month) > 0]
    return matches[:MAX_CANDIDATES]


def _enrich(destination: Destination, preferences: dict, units: str) -> dict:
    entry = destination.to_dict()
    try:
        observation = WeatherObservation.from_owm(weather_api.fetch_current_weather(destination.city))
    except TravelWeatherError as e:
        logger.warning("No live weather for %s: %s", destination.city, e)
        entry.update(travelScore=None, recommendation=UNAVAILABLE)
        return entry

    score = calculate_travel_score(observation, preferences)
    snapshot = observation.snapshot(units)
    entry.update(
        currentWeather={
            "temp": snapshot["temp"],
            "description": snapshot["description"],
            "humidity": snapshot["humidity"],
        },
        travelScore=score.rating,
        recommendation=score.recommendation,
    )
    return entry


def get_smart_recommendations(preferences: dict, units: str = "metric") -> list:
    """
    Match catalog destinations, enrich each with live weather concurrently, and rank them
    by travel score (highest first, missing scores last).
    """
    candidates = match_destinations(preferences)
    logger.info("Enriching %d candidate destinations", len(candidates))
    enriched = weather_api.fetch_many(candidates, lambda dest: _enrich(dest, preferences, units))
    enriched.sort(key=lambda entry: entry["travelScore"] or 0, reverse=True)
    return enriched


def _compare_one(city: str, preferences: Optional[dict], units: str) -> dict:
    observation = WeatherObservation.from_owm(weather_api.fetch_current_weather(city))
    score = calculate_travel_score(observation, preferences)
    return {
        "city": city,
        "score": score.rating,
        "temp": observation.snapshot(units)["temp"],
        "conditions": observation.description,
        "recommendation": score.recommendation,
    }


def compare_destinations(cities, preferences: Optional[dict] = None, units: str = "metric") -> list:
    cities = list(cities)
    results = weather_api.fetch_many(cities, lambda city: _compare_one(city, preferences, units))
    comparison = [
        result if result is not None else {"city": city, "error": "Data unavailable"}
        for city, result in zip(cities, results)
    ]
    comparison.sort(key=lambda entry: entry.get("score") or 0, reverse=True)
    return comparison
