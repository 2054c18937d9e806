import math
from dataclasses import dataclass, field
from typing import Optional

from errors import InvalidObservation


# JS-style rounding to one decimal (half away from zero for positives), used for every exposed score.
def round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


# Converts a Celsius reading for display; scoring always stays in Celsius.
def to_display_temp(celsius: Optional[float], units: str = "metric") -> Optional[float]:
    if celsius is None:
        return None
    if units == "imperial":
        return round1(celsius * 9 / 5 + 32)
    return celsius


@dataclass(frozen=True)
class WeatherObservation:
    temp: float
    humidity: float
    wind_speed: float
    clouds: float
    precipitation: float = 0.0
    rain_reported: bool = False
    feels_like: Optional[float] = None
    pressure: Optional[float] = None
    description: str = ""
    icon: str = ""
    lat: Optional[float] = None
    lon: Optional[float] = None
    city: Optional[str] = None
    country: Optional[str] = None
    timestamp: Optional[str] = None

    @classmethod
    def from_owm(cls, payload: dict) -> "WeatherObservation":
        """
        Build an observation from an OpenWeatherMap `weather`, `forecast` list item or `find` entry.
        Raises InvalidObservation when temperature, humidity, wind speed or cloud cover is absent
        or not numeric, or when a reported rain amount is not numeric.
        """
        payload = payload or {}
        main = payload.get("main") or {}
        wind = payload.get("wind") or {}
        clouds = payload.get("clouds") or {}

        required = {
            "main.temp": main.get("temp"),
            "main.humidity": main.get("humidity"),
            "wind.speed": wind.get("speed"),
            "clouds.all": clouds.get("all"),
        }
        rain = payload.get("rain")
        if isinstance(rain, dict):
            required["rain"] = rain.get("1h") or rain.get("3h") or 0.0

        values, invalid = {}, []
        for name, value in required.items():
            try:
                values[name] = float(value)
            except (TypeError, ValueError):
                invalid.append(name)
        if invalid:
            raise InvalidObservation(invalid)

        weather = (payload.get("weather") or [{}])[0]
        coord = payload.get("coord") or {}
        sys_block = payload.get("sys") or {}

        return cls(
            temp=values["main.temp"],
            humidity=values["main.humidity"],
            wind_speed=values["wind.speed"],
            clouds=values["clouds.all"],
            precipitation=values.get("rain", 0.0),
            rain_reported=rain is not None,
            feels_like=main.get("feels_like"),
            pressure=main.get("pressure"),
            description=weather.get("description", ""),
            icon=weather.get("icon", ""),
            lat=coord.get("lat"),
            lon=coord.get("lon"),
            city=payload.get("name"),
            country=sys_block.get("country"),
            timestamp=payload.get("dt_txt"),
        )

    def snapshot(self, units: str = "metric") -> dict:
        return {
            "temp": to_display_temp(self.temp, units),
            "feelsLike": to_display_temp(self.feels_like, units),
            "humidity": self.humidity,
            "pressure": self.pressure,
            "windSpeed": self.wind_speed,
            "cloudiness": self.clouds,
            "description": self.description,
            "icon": self.icon,
        }


@dataclass(frozen=True)
class TravelScore:
    temperature: int
    humidity: int
    wind_speed: int
    cloudiness: int
    precipitation: int
    overall: float
    recommendation: str

    @property
    def rating(self) -> float:
        return round1(self.overall)

    def to_dict(self) -> dict:
        return {
            "scores": {
                "temperature": self.temperature,
                "humidity": self.humidity,
                "windSpeed": self.wind_speed,
                "cloudiness": self.cloudiness,
                "precipitation": self.precipitation,
                "overall": self.overall,
            },
            "rating": self.rating,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class Destination:
    city: str
    country: str
    climate: str
    optimal_temp: tuple
    activities: tuple
    best_months: tuple
    tags: tuple

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "country": self.country,
            "climate": self.climate,
            "optimalTemp": {"min": self.optimal_temp[0], "max": self.optimal_temp[1]},
            "activities": list(self.activities),
            "bestMonths": list(self.best_months),
            "tags": list(self.tags),
        }


@dataclass
class ForecastSample:
    date: str
    temp: float
    description: str
    humidity: float
    wind_speed: float
    travel_score: float
    recommendation: str

    def to_dict(self, units: str = "metric") -> dict:
        return {
            "date": self.date,
            "temp": to_display_temp(self.temp, units),
            "description": self.description,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "travelScore": self.travel_score,
            "recommendation": self.recommendation,
        }


@dataclass
class DailyForecastSummary:
    date: str
    avg_temp: float
    avg_travel_score: float
    conditions: str
    recommendation: str
    hourly_data: list = field(default_factory=list)

    def to_dict(self, units: str = "metric") -> dict:
        return {
            "date": self.date,
            "avgTemp": to_display_temp(self.avg_temp, units),
            "avgTravelScore": self.avg_travel_score,
            "conditions": self.conditions,
            "recommendation": self.recommendation,
            "hourlyData": [sample.to_dict(units) for sample in self.hourly_data],
        }


@dataclass
class NearbyCity:
    name: str
    country: str
    lat: float
    lon: float
    distance_km: float
    temp: Optional[float] = None
    description: str = ""
    travel_score: Optional[float] = None
    recommendation: Optional[str] = None

    def to_dict(self, units: str = "metric") -> dict:
        return {
            "name": self.name,
            "country": self.country,
            "lat": self.lat,
            "lon": self.lon,
            "distanceKm": self.distance_km,
            "temp": to_display_temp(self.temp, units),
            "description": self.description,
            "travelScore": self.travel_score,
            "recommendation": self.recommendation,
        }


@dataclass
class PackingList:
    clothing: list = field(default_factory=list)
    weather_gear: list = field(default_factory=list)
    activity_gear: list = field(default_factory=list)
    essentials: dict = field(default_factory=dict)
    tips: list = field(default_factory=list)
    quantities: dict = field(default_factory=dict)
    mode: str = "full"

    def to_dict(self) -> dict:
        return {
            "clothing": list(self.clothing),
            "weatherGear": list(self.weather_gear),
            "activityGear": [dict(entry) for entry in self.activity_gear],
            "essentials": {key: list(items) for key, items in self.essentials.items()},
            "tips": list(self.tips),
            "quantities": dict(self.quantities),
            "mode": self.mode,
        }
