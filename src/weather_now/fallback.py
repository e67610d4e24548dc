# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
fallback.py — Current weather from WeatherAPI.com, used when Open-Meteo
cannot be reached.

Requires a free API key from https://www.weatherapi.com/ exported as
WEATHER_API_KEY. The response is normalised into the same result shape
as the primary path so it can be rendered identically.
"""

import logging
import os
from urllib.parse import quote, quote_plus

import requests

from weather_now.errors import MissingCredentialError, WeatherError
from weather_now.report import render_report
from weather_now.utils import DEFAULT_TIMEOUT_SECONDS, fetch_json
from weather_now.weather import utc_timestamp

log = logging.getLogger(__name__)

ALT_API_URL = "https://api.weatherapi.com/v1/current.json"
API_KEY_ENV = "WEATHER_API_KEY"
SIGNUP_URL = "https://www.weatherapi.com/"
SOURCE_NAME = "WeatherAPI"

# Placeholder some setups leave in their shell profile
_PLACEHOLDER_KEY = "YOUR_API_KEY_HERE"


def get_api_key(api_key: str | None = None) -> str:
    """Return the explicit key, or the one from the environment.

    Raises:
        MissingCredentialError: If neither is set.
    """
    key = api_key or os.environ.get(API_KEY_ENV, "")
    key = key.strip()
    if not key or key == _PLACEHOLDER_KEY:
        raise MissingCredentialError(f"{API_KEY_ENV} is not set.")
    return key


def redact_key(message: str, key: str) -> str:
    """Blank out the key, raw or URL-encoded, from an error message.

    requests puts the full URL, key included, into its messages.
    """
    for form in {key, quote_plus(key), quote(key, safe="")}:
        message = message.replace(form, "***")
    return message


def fetch_from_alternative_provider(
    city: str,
    api_key: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    logger: logging.Logger | None = None,
) -> dict | None:
    """Fetch and print current weather for a city from WeatherAPI.com.

    Makes a single request; nothing is retried.

    Args:
        city: Place name, passed to the provider as-is.
        api_key: Provider key. Defaults to $WEATHER_API_KEY.
        timeout: Request deadline in seconds.
        logger: Destination for the report and any failure messages.

    Returns:
        Result dict (location, weather, timestamp, source), or None if the
        key is missing or the request failed.
    """
    logger = logger or log
    logger.info("🔄 Trying alternative weather provider...")

    try:
        key = get_api_key(api_key)
    except MissingCredentialError:
        logger.info("ℹ️  To use alternative provider, get a free API key from %s", SIGNUP_URL)
        logger.info("ℹ️  Then set it as: export %s=your_key_here", API_KEY_ENV)
        return None

    params = {"key": key, "q": city, "aqi": "no"}
    try:
        data = fetch_json(ALT_API_URL, params=params, timeout=timeout)
        result = _normalize(data)
    except (
        WeatherError,
        requests.exceptions.RequestException,
        KeyError,
        TypeError,
        AttributeError,
    ) as e:
        logger.error("❌ Alternative provider also failed: %s", redact_key(str(e), key))
        return None

    for line in render_report(result):
        logger.info(line)
    return result


def _normalize(data: dict) -> dict:
    """Map WeatherAPI field names onto the result shape."""
    location = data["location"]
    current = data["current"]
    condition = current.get("condition")
    timestamp = utc_timestamp()
    return {
        "location": {
            "name": location["name"],
            "country": location.get("country", ""),
            "latitude": location.get("lat"),
            "longitude": location.get("lon"),
        },
        "weather": {
            "temperature": current["temp_c"],
            "wind_speed": current["wind_kph"],
            "wind_direction": current.get("wind_degree"),
            "humidity": current.get("humidity"),
            "conditions": condition.get("text") if isinstance(condition, dict) else None,
            "timestamp": timestamp,
        },
        "timestamp": timestamp,
        "source": SOURCE_NAME,
    }
