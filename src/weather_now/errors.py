# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
errors.py — Exception types raised by the weather-now clients.

Every error carries an optional ``code`` naming the socket-level cause
(e.g. 'ECONNREFUSED') so the lookup can decide whether the primary
service is unreachable or simply returned something unusable.
"""


class WeatherError(Exception):
    """Base class for all weather-now errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


class HttpStatusError(WeatherError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"HTTP {status}: {body[:100]}")
        self.status = status


class JsonParseError(WeatherError, ValueError):
    """The response body is not valid JSON."""


class FetchConnectionError(WeatherError):
    """The connection failed before a response arrived."""


class RequestTimeoutError(WeatherError):
    """No response within the per-attempt deadline."""

    def __init__(self, message: str):
        super().__init__(message, code="ETIMEDOUT")


class LocationNotFoundError(WeatherError, ValueError):
    """The geocoding API returned no match for the place name."""


class MissingWeatherDataError(WeatherError):
    """The forecast response has no current weather block."""


class MissingCredentialError(WeatherError):
    """The alternative provider needs an API key that is not set."""
