"""
Travel score calculation.

Every sub-score is assigned from a fixed threshold band (never interpolated), and the overall
score is their weighted sum. Thresholds assume Celsius and metres per second.
"""
from typing import Optional

from models import TravelScore, WeatherObservation

DEFAULT_TEMP_MIN = 18
DEFAULT_TEMP_MAX = 28

WEIGHTS = {
    "temperature": 0.35,
    "humidity": 0.20,
    "wind_speed": 0.15,
    "cloudiness": 0.15,
    "precipitation": 0.15,
}

# (lower bound inclusive, text), checked top-down
RECOMMENDATION_BANDS = (
    (9, "Perfect conditions! Ideal time to visit."),
    (8, "Excellent conditions for travel."),
    (7, "Very good weather conditions."),
    (6, "Good conditions for most activities."),
    (5, "Acceptable conditions, plan accordingly."),
    (4, "Fair conditions, some activities may be affected."),
    (3, "Below average conditions, consider alternatives."),
)
POOR_CONDITIONS = "Poor conditions, not recommended for travel."


def _preferred_range(preferences: Optional[dict]):
    preferences = preferences or {}
    temp_min = preferences.get("temp_min") or DEFAULT_TEMP_MIN
    temp_max = preferences.get("temp_max") or DEFAULT_TEMP_MAX
    return temp_min, temp_max


def score_temperature(temp: float, temp_min: float, temp_max: float) -> int:
    if temp_min <= temp <= temp_max:
        return 10
    if temp_min - 5 <= temp <= temp_max + 5:
        return 7
    if temp_min - 10 <= temp <= temp_max + 10:
        return 4
    return 2


def score_humidity(humidity: float) -> int:
    if humidity < 50:
        return 10
    if humidity < 65:
        return 8
    if humidity < 80:
        return 5
    return 3


def score_wind(wind_speed: float) -> int:
    if wind_speed < 5:
        return 10
    if wind_speed < 10:
        return 7
    if wind_speed < 15:
        return 4
    return 2


def score_cloudiness(clouds: float) -> int:
    if clouds < 20:
        return 10
    if clouds < 50:
        return 7
    if clouds < 80:
        return 5
    return 3


def score_precipitation(precipitation: float) -> int:
    if precipitation == 0:
        return 10
    if precipitation < 1:
        return 6
    if precipitation < 3:
        return 3
    return 1


def recommendation_text(score: float) -> str:
    for lower_bound, text in RECOMMENDATION_BANDS:
        if score >= lower_bound:
            return text
    return POOR_CONDITIONS


def calculate_travel_score(observation: WeatherObservation, preferences: Optional[dict] = None) -> TravelScore:
    """
    Score an observation on a 0-10 scale.

    `preferences` may carry `temp_min` / `temp_max` (Celsius); falsy values fall back to 18 / 28.
    The recommendation is derived from the unrounded overall score.
    """
    temp_min, temp_max = _preferred_range(preferences)

    sub_scores = {
        "temperature": score_temperature(observation.temp, temp_min, temp_max),
        "humidity": score_humidity(observation.humidity),
        "wind_speed": score_wind(observation.wind_speed),
        "cloudiness": score_cloudiness(observation.clouds),
        "precipitation": score_precipitation(observation.precipitation),
    }
    overall = sum(sub_scores[name] * weight for name, weight in WEIGHTS.items())

    return TravelScore(
        overall=overall,
        recommendation=recommendation_text(overall),
        **sub_scores,
    )


# Activity suggestions; several rules can fire for one observation.
def best_activities(observation: WeatherObservation) -> list:
    temp = observation.temp
    rain = observation.precipitation
    clouds = observation.clouds
    activities = []

    if 20 <= temp <= 30 and rain == 0:
        activities += ["outdoor dining", "sightseeing", "beach"]
    if 15 <= temp <= 25:
        activities += ["hiking", "cycling", "photography"]
    if clouds < 30 and rain == 0:
        activities += ["outdoor activities", "picnics"]
    if rain > 0 or clouds > 70:
        activities += ["museums", "indoor attractions", "shopping"]
    if temp < 10:
        activities += ["winter sports", "cozy cafes", "indoor entertainment"]
    return activities


def weather_warnings(observation: WeatherObservation) -> list:
    warnings = []
    if observation.temp > 35:
        warnings.append("Extreme heat - stay hydrated")
    if observation.temp < 0:
        warnings.append("Freezing temperatures - dress warmly")
    if observation.wind_speed > 15:
        warnings.append("Strong winds - be cautious outdoors")
    if observation.precipitation > 5:
        warnings.append("Heavy rain - bring rain gear")
    return warnings


def analyze_best_travel_time(observation: WeatherObservation, preferences: Optional[dict] = None) -> dict:
    score = calculate_travel_score(observation, preferences)
    return {
        "score": score.rating,
        "recommendation": score.recommendation,
        "details": score.to_dict()["scores"],
        "bestFor": best_activities(observation),
        "warnings": weather_warnings(observation),
    }
