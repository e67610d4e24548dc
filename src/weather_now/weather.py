# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
weather.py — Fetch current weather conditions from Open-Meteo.

Open-Meteo is free and requires no API key. We ask for the
current_weather block only and return it as a flat dict.

API docs: https://open-meteo.com/en/docs
"""

import logging
from datetime import datetime, timezone

from weather_now.errors import MissingWeatherDataError
from weather_now.utils import DEFAULT_POLICY, RetryPolicy, fetch_json, with_retry

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


def degrees_to_compass(degrees: float) -> str:
    """Convert a wind bearing in degrees to a 16-point compass label.

    Args:
        degrees: Wind direction in degrees (0–360, where 0 = North).

    Returns:
        Compass label such as 'N', 'NNE', 'NW', etc.
    """
    compass = [
        "N", "NNE", "NE", "ENE",
        "E", "ESE", "SE", "SSE",
        "S", "SSW", "SW", "WSW",
        "W", "WNW", "NW", "NNW",
    ]
    # Each segment is 360/16 = 22.5 degrees wide
    index = round(degrees / 22.5) % 16
    return compass[index]


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string, e.g. '2026-10-19T08:00:00.123+00:00'."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def fetch_current_weather(
    latitude: float,
    longitude: float,
    policy: RetryPolicy = DEFAULT_POLICY,
    logger: logging.Logger | None = None,
) -> dict:
    """Fetch the current weather for a coordinate pair.

    Args:
        latitude: Location latitude in decimal degrees.
        longitude: Location longitude in decimal degrees.
        policy: Retry bounds and per-attempt timeout.
        logger: Logger for retry warnings.

    Returns:
        Dict with temperature (°C), wind_speed (km/h), wind_direction
        (degrees) and timestamp (ISO-8601, when the data was fetched).

    Raises:
        MissingWeatherDataError: If the response has no current_weather block.
        WeatherError: If the request fails (see utils.fetch_json).
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
    }

    def _call():
        return fetch_json(OPEN_METEO_URL, params=params, timeout=policy.timeout)

    data = with_retry(_call, label="Open-Meteo forecast API", policy=policy, logger=logger)

    return _parse_current(data)


def _parse_current(data: dict) -> dict:
    current = data.get("current_weather") if isinstance(data, dict) else None
    if not current:
        raise MissingWeatherDataError("Response has no current_weather block.")

    try:
        return {
            "temperature": current["temperature"],
            "wind_speed": current["windspeed"],
            "wind_direction": current["winddirection"],
            "timestamp": utc_timestamp(),
        }
    except KeyError as e:
        raise MissingWeatherDataError(f"current_weather is missing {e}") from e
