import logging
import os
from datetime import datetime, timezone

from dotenv import load_dotenv
from flask import Flask, jsonify, request

import weather_api
import forecast as forecast_service
import nearby as nearby_service
import packing as packing_service
import recommendations as recommendation_service
from errors import InvalidObservation, InvalidQuery, WeatherNotFound, WeatherUnavailable
from models import WeatherObservation
from scoring import analyze_best_travel_time, calculate_travel_score

load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_UNITS = ("metric", "imperial")
MIN_COMPARE = 2
MAX_COMPARE = 5
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# Query-string helpers: absent values fall back to the default, malformed ones raise InvalidQuery (-> 400).
def _float_arg(name, default=None):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidQuery(f"'{name}' must be a number.")


def _int_arg(name, default=None):
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidQuery(f"'{name}' must be an integer.")


def _list_arg(name):
    raw = request.args.get(name) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _units_arg():
    units = (request.args.get("units") or "metric").strip().lower()
    if units not in SUPPORTED_UNITS:
        raise InvalidQuery(f"'units' must be one of: {', '.join(SUPPORTED_UNITS)}.")
    return units


def _preferences():
    return {
        "temp_min": _float_arg("tempMin"),
        "temp_max": _float_arg("tempMax"),
    }


def _trip_details(default_duration):
    duration = _int_arg("duration", default_duration)
    if duration < 1:
        raise InvalidQuery("'duration' must be at least 1 day.")
    return {
        "duration": duration,
        "activities": _list_arg("activities"),
        "style": request.args.get("style") or "casual",
    }


def _current_observation(city):
    return WeatherObservation.from_owm(weather_api.fetch_current_weather(city))


def _configure_logging(level_name):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


# App factory: configuration, logging and error handlers, then the routes.
def create_app():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["WEATHER_API_KEY"] = os.environ.get("WEATHER_API_KEY", "")
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO")
    app.config["WEATHER_TIMEOUT"] = os.environ.get("WEATHER_TIMEOUT", str(weather_api.DEFAULT_TIMEOUT))
    app.json.sort_keys = False

    _configure_logging(app.config["LOG_LEVEL"])
    if not app.config["WEATHER_API_KEY"]:
        logger.warning("WEATHER_API_KEY is not set; upstream weather calls will fail.")

    @app.errorhandler(WeatherNotFound)
    def handle_not_found(error):
        return jsonify(error="City not found"), 404

    @app.errorhandler(WeatherUnavailable)
    def handle_unavailable(error):
        logger.error("Weather provider unavailable: %s", error)
        return jsonify(error="Weather service unavailable"), 502

    @app.errorhandler(InvalidObservation)
    def handle_invalid_observation(error):
        logger.error("Malformed weather data: %s", error)
        return jsonify(error="Malformed weather data", missing=error.missing), 502

    @app.errorhandler(InvalidQuery)
    def handle_bad_request(error):
        return jsonify(error=str(error)), 400

    @app.route("/api", methods=["GET"])
    def api_index():
        return jsonify(
            message="Weather Travel API",
            version="1.0.0",
            endpoints={
                "recommendations": "/api/analytics/recommendations",
                "city": "/api/analytics/city/<city>",
                "compare": "/api/analytics/compare?cities=a,b",
                "forecast": "/api/analytics/forecast/<city>",
                "nearby": "/api/analytics/nearby-cities/<city>",
                "packing": "/api/analytics/packing/<city>",
            },
            health="/health",
        )

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(status="OK", message="Server is running")

    # Catalog matches enriched with live scores.
    @app.route("/api/analytics/recommendations", methods=["GET"])
    def recommendations():
        units = _units_arg()
        preferences = _preferences()
        preferences.update(
            climate=(request.args.get("climate") or "").strip() or None,
            activities=_list_arg("activities"),
            current_month=_int_arg("month", recommendation_service.current_month()),
        )
        if not 1 <= preferences["current_month"] <= 12:
            raise InvalidQuery("'month' must be between 1 and 12.")

        results = recommendation_service.get_smart_recommendations(preferences, units=units)
        return jsonify(success=True, count=len(results), recommendations=results)

    @app.route("/api/analytics/city/<city>", methods=["GET"])
    def city_analysis(city):
        units = _units_arg()
        preferences = _preferences()
        observation = _current_observation(city)
        score = calculate_travel_score(observation, preferences)
        return jsonify(
            city=city,
            currentWeather=observation.snapshot(units),
            travelScore=score.to_dict(),
            # analysis is always against the default 18-28 C range
            analysis=analyze_best_travel_time(observation),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.route("/api/analytics/compare", methods=["GET"])
    def compare():
        units = _units_arg()
        cities = _list_arg("cities")
        if len(cities) < MIN_COMPARE:
            return jsonify(error="Please provide at least 2 cities to compare"), 400
        if len(cities) > MAX_COMPARE:
            return jsonify(error="Maximum 5 cities can be compared at once"), 400

        comparison = recommendation_service.compare_destinations(cities, _preferences(), units=units)
        return jsonify(success=True, comparison=comparison, winner=comparison[0])

    # 5-day forecast grouped per day, with the best day picked by average travel score.
    @app.route("/api/analytics/forecast/<city>", methods=["GET"])
    def forecast(city):
        units = _units_arg()
        preferences = _preferences()
        payload = weather_api.fetch_forecast(city)
        try:
            current = _current_observation(city)
        except (WeatherUnavailable, InvalidObservation) as e:
            logger.warning("No live reading for %s, today keeps forecast conditions: %s", city, e)
            current = None

        summaries = forecast_service.aggregate_forecast(current, payload.get("list") or [], preferences)
        best = forecast_service.best_day(summaries)
        city_block = payload.get("city") or {}
        return jsonify(
            success=True,
            city=city_block.get("name", city),
            country=city_block.get("country"),
            units=units,
            dailyForecasts=[summary.to_dict(units) for summary in summaries],
            bestDay=best.to_dict(units) if best else None,
        )

    @app.route("/api/analytics/nearby-cities/<city>", methods=["GET"])
    def nearby_cities(city):
        units = _units_arg()
        results = nearby_service.get_nearest_cities(city)
        return jsonify(success=True, city=city, count=len(results), cities=[c.to_dict(units) for c in results])

    # Full packing list; `mode=minimal` truncates the full list instead of using the carry-on generator.
    @app.route("/api/analytics/packing/<city>", methods=["GET"])
    def packing_list(city):
        mode = (request.args.get("mode") or "full").strip().lower()
        if mode not in ("full", "minimal"):
            raise InvalidQuery("'mode' must be 'full' or 'minimal'.")
        trip_details = _trip_details(default_duration=7)
        observation = _current_observation(city)
        packing = packing_service.generate_packing_list(observation, trip_details, mode=mode)
        return jsonify(
            success=True,
            city=city,
            tripDetails=trip_details,
            packingList=packing.to_dict(),
            destinationTips=packing_service.destination_tips(city, observation),
        )

    @app.route("/api/analytics/packing/<city>/minimal", methods=["GET"])
    def minimal_packing_list(city):
        duration = _trip_details(default_duration=3)["duration"]
        observation = _current_observation(city)
        packing = packing_service.generate_minimal_list(observation, duration)
        return jsonify(
            success=True,
            city=city,
            duration=duration,
            packingList=packing.to_dict(),
            note="Carry-on only packing list",
        )

    @app.route("/api/analytics/packing/<city>/checklist", methods=["GET"])
    def packing_checklist(city):
        trip_details = _trip_details(default_duration=7)
        observation = _current_observation(city)
        packing = packing_service.generate_packing_list(observation, trip_details)
        return jsonify(success=True, city=city, checklist=packing_service.packing_checklist(packing))

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
