"""Exceptions raised by the weather client and the scoring engine."""


class TravelWeatherError(Exception):
    """Base exception for every error raised by this package."""


class WeatherNotFound(TravelWeatherError):
    """Raised when the weather provider has no data for the requested city (HTTP 404)."""

    def __init__(self, query):
        self.query = query
        super().__init__(f"City not found: {query}")


class WeatherUnavailable(TravelWeatherError):
    """Raised on network errors, timeouts, 5xx responses or a missing API key."""


class InvalidObservation(TravelWeatherError):
    """Raised when a weather payload lacks a numeric field the scoring engine needs."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__("Weather observation is missing or non-numeric: " + ", ".join(self.missing))


class InvalidQuery(TravelWeatherError):
    """Raised when a request parameter is malformed or out of range (HTTP 400)."""
