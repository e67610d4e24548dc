# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geocode.py — Look up coordinates for a city name using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

import logging

from weather_now.errors import LocationNotFoundError
from weather_now.utils import DEFAULT_POLICY, RetryPolicy, fetch_json, with_retry

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


def geocode(
    place: str,
    policy: RetryPolicy = DEFAULT_POLICY,
    logger: logging.Logger | None = None,
) -> dict:
    """Look up coordinates for a place name using Open-Meteo Geocoding.

    Args:
        place: Human-readable place name, e.g. 'Delhi' or 'New York'.
        policy: Retry bounds and per-attempt timeout.
        logger: Logger for retry warnings.

    Returns:
        Dict with keys: name (str), country (str), latitude (float),
        longitude (float), and admin1 (str or None) for the region.

    Raises:
        LocationNotFoundError: If no results are found for the place name.
        WeatherError: If the request fails (see utils.fetch_json).
    """
    params = {"name": place, "count": 1}

    def _call():
        return fetch_json(GEOCODING_URL, params=params, timeout=policy.timeout)

    data = with_retry(
        _call, label=f"Geocoding API for '{place}'", policy=policy, logger=logger
    )

    results = data.get("results") if isinstance(data, dict) else None
    if not results:
        raise LocationNotFoundError(f'Location "{place}" not found.')

    result = results[0]
    return {
        "name": result.get("name") or place,
        "country": result.get("country") or "",
        "admin1": result.get("admin1"),
        "latitude": result["latitude"],
        "longitude": result["longitude"],
    }
