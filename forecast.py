import logging
from datetime import datetime, timezone
from typing import Optional

from models import DailyForecastSummary, ForecastSample, WeatherObservation, round1
from scoring import calculate_travel_score, recommendation_text

logger = logging.getLogger(__name__)


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _sample(observation: WeatherObservation, stamp: str, preferences: Optional[dict]) -> ForecastSample:
    score = calculate_travel_score(observation, preferences)
    return ForecastSample(
        date=stamp,
        temp=observation.temp,
        description=observation.description,
        humidity=observation.humidity,
        wind_speed=observation.wind_speed,
        travel_score=score.rating,
        recommendation=score.recommendation,
    )


# Builds the synthetic "right now" sample that leads today's group.
def _current_sample(current: WeatherObservation, today: str, preferences: Optional[dict]) -> ForecastSample:
    stamp = current.timestamp or f"{today} {datetime.now(timezone.utc).strftime('%H:%M:%S')}"
    return _sample(current, stamp, preferences)


def aggregate_forecast(current: Optional[WeatherObservation], forecast_list, preferences: Optional[dict] = None,
                       today: Optional[str] = None) -> list:
    """
    Collapse 3-hour forecast entries into one summary per calendar day.

    `forecast_list` holds raw provider entries, each with a `"YYYY-MM-DD HH:MM:SS"` `dt_txt`.
    Days come out in the order they first appear; no sorting is applied.
    Averages are rounded only once, at the end. The representative condition is the sample
    at index n // 2, except for today, where the live `current` reading leads the group and
    supplies the condition.
    """
    today = today or utc_today()

    groups = {}
    for entry in forecast_list or []:
        stamp = entry["dt_txt"]
        observation = WeatherObservation.from_owm(entry)
        groups.setdefault(stamp.split(" ")[0], []).append(_sample(observation, stamp, preferences))

    summaries = []
    for day, samples in groups.items():
        conditions = samples[len(samples) // 2].description
        if day == today and current is not None:
            samples.insert(0, _current_sample(current, today, preferences))
            conditions = current.description

        avg_temp = sum(sample.temp for sample in samples) / len(samples)
        avg_score = round1(sum(sample.travel_score for sample in samples) / len(samples))

        summaries.append(DailyForecastSummary(
            date=day,
            avg_temp=round1(avg_temp),
            avg_travel_score=avg_score,
            conditions=conditions,
            recommendation=recommendation_text(avg_score),
            hourly_data=samples,
        ))

    logger.debug("Aggregated %d forecast entries into %d days", len(forecast_list or []), len(summaries))
    return summaries


# Strictly-greater comparison keeps the earlier day on ties.
def best_day(summaries) -> Optional[DailyForecastSummary]:
    best = None
    for summary in summaries:
        if best is None or summary.avg_travel_score > best.avg_travel_score:
            best = summary
    return best
