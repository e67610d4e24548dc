# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
lookup.py — City name in, current weather out.

A lookup walks a small linear state machine:

    CHECK_NETWORK → GEOCODE → FORECAST → REPORT → DONE
          │            │          │
          └────────────┴──────────┴──→ FALLBACK → DONE

Each step returns an Outcome and the next state comes from TRANSITIONS,
so the network-check failure and the unreachable-service failure reach
the alternative provider through the same kind of table entry.
"""

import logging
from enum import Enum

from weather_now.diagnostics import check_network_connectivity
from weather_now.errors import LocationNotFoundError, MissingWeatherDataError
from weather_now.fallback import fetch_from_alternative_provider
from weather_now.geocode import geocode
from weather_now.report import NETWORK_TIPS, SERVICE_UNAVAILABLE_TIPS, render_report
from weather_now.utils import DEFAULT_POLICY, RetryPolicy, error_code
from weather_now.weather import fetch_current_weather

log = logging.getLogger(__name__)

PRIMARY_SOURCE = "Open-Meteo"

# Error codes meaning "Open-Meteo cannot be reached", as opposed to
# "Open-Meteo answered with something unusable".
UNREACHABLE_CODES = frozenset({"ETIMEDOUT", "ECONNREFUSED", "ECONNRESET"})


class State(Enum):
    CHECK_NETWORK = "check_network"
    GEOCODE = "geocode"
    FORECAST = "forecast"
    REPORT = "report"
    FALLBACK = "fallback"
    DONE = "done"


class Outcome(Enum):
    OK = "ok"
    UNREACHABLE = "unreachable"
    NOT_FOUND = "not_found"
    NO_DATA = "no_data"
    FAILED = "failed"


TRANSITIONS = {
    (State.CHECK_NETWORK, Outcome.OK): State.GEOCODE,
    (State.CHECK_NETWORK, Outcome.UNREACHABLE): State.FALLBACK,
    (State.GEOCODE, Outcome.OK): State.FORECAST,
    (State.GEOCODE, Outcome.NOT_FOUND): State.DONE,
    (State.GEOCODE, Outcome.UNREACHABLE): State.FALLBACK,
    (State.GEOCODE, Outcome.FAILED): State.DONE,
    (State.FORECAST, Outcome.OK): State.REPORT,
    (State.FORECAST, Outcome.NO_DATA): State.DONE,
    (State.FORECAST, Outcome.UNREACHABLE): State.FALLBACK,
    (State.FORECAST, Outcome.FAILED): State.DONE,
    (State.REPORT, Outcome.OK): State.DONE,
    (State.FALLBACK, Outcome.OK): State.DONE,
    (State.FALLBACK, Outcome.FAILED): State.DONE,
}


def next_state(state: State, outcome: Outcome, use_fallback: bool = True) -> State:
    """Look up the transition; FALLBACK collapses to DONE when disabled."""
    target = TRANSITIONS[(state, outcome)]
    if target is State.FALLBACK and not use_fallback:
        return State.DONE
    return target


def is_unreachable(exc: BaseException) -> bool:
    """True for timeout / refused / reset failures of the primary service."""
    code = getattr(exc, "code", None) or error_code(exc)
    return code in UNREACHABLE_CODES


class WeatherLookup:
    """One run of the state machine for a single city."""

    def __init__(
        self,
        city: str,
        use_fallback: bool = True,
        policy: RetryPolicy | None = None,
        logger: logging.Logger | None = None,
    ):
        self.city = city
        self.use_fallback = use_fallback
        self.policy = policy or DEFAULT_POLICY
        self.log = logger or log
        self.location: dict | None = None
        self.weather: dict | None = None
        self.result: dict | None = None
        self.visited: list[State] = []
        self._steps = {
            State.CHECK_NETWORK: self._check_network,
            State.GEOCODE: self._geocode,
            State.FORECAST: self._forecast,
            State.REPORT: self._report,
            State.FALLBACK: self._fallback,
        }

    def run(self) -> dict | None:
        state = State.CHECK_NETWORK
        while state is not State.DONE:
            self.visited.append(state)
            outcome = self._steps[state]()
            new_state = next_state(state, outcome, self.use_fallback)
            self.log.debug("%s --%s--> %s", state.value, outcome.value, new_state.value)
            state = new_state
        return self.result

    def _check_network(self) -> Outcome:
        if check_network_connectivity(logger=self.log):
            return Outcome.OK
        self.log.error("❌ Network diagnostics failed. Please check your internet connection.")
        for line in NETWORK_TIPS:
            self.log.info(line)
        return Outcome.UNREACHABLE

    def _geocode(self) -> Outcome:
        self.log.info("📡 Fetching location data...")
        try:
            self.location = geocode(self.city, policy=self.policy, logger=self.log)
        except LocationNotFoundError:
            self.log.error("❌ City not found. Try another name.")
            return Outcome.NOT_FOUND
        except Exception as e:
            return self._primary_failure(e)

        loc = self.location
        self.log.info(
            "📍 Located: %s, %s (%s, %s)",
            loc["name"], loc["country"], loc["latitude"], loc["longitude"],
        )
        return Outcome.OK

    def _forecast(self) -> Outcome:
        self.log.info("📡 Fetching weather data...")
        try:
            self.weather = fetch_current_weather(
                self.location["latitude"],
                self.location["longitude"],
                policy=self.policy,
                logger=self.log,
            )
        except MissingWeatherDataError:
            self.log.error("❌ Weather data not available.")
            return Outcome.NO_DATA
        except Exception as e:
            return self._primary_failure(e)
        return Outcome.OK

    def _report(self) -> Outcome:
        self.result = {
            "location": {
                "name": self.location["name"],
                "country": self.location["country"],
                "latitude": self.location["latitude"],
                "longitude": self.location["longitude"],
            },
            "weather": self.weather,
            "timestamp": self.weather["timestamp"],
            "source": PRIMARY_SOURCE,
        }
        for line in render_report(self.result):
            self.log.info(line)
        return Outcome.OK

    def _fallback(self) -> Outcome:
        self.log.info("🔄 Attempting to use alternative provider...")
        try:
            self.result = fetch_from_alternative_provider(
                self.city, timeout=self.policy.timeout, logger=self.log
            )
        except Exception:
            self.log.exception("❌ Alternative provider crashed.")
            self.result = None
        return Outcome.OK if self.result is not None else Outcome.FAILED

    def _primary_failure(self, exc: Exception) -> Outcome:
        self.log.error("❌ Failed to fetch weather data from %s.", PRIMARY_SOURCE)
        self.log.error("   Error: %s", exc)
        if not is_unreachable(exc):
            return Outcome.FAILED
        for line in SERVICE_UNAVAILABLE_TIPS:
            self.log.info(line)
        return Outcome.UNREACHABLE


def get_weather(
    city: str,
    use_fallback: bool = True,
    *,
    policy: RetryPolicy | None = None,
    logger: logging.Logger | None = None,
) -> dict | None:
    """Fetch, print and return the current weather for a city.

    Never raises: every failure is logged and turned into None.

    Args:
        city: Place name, e.g. 'Delhi'.
        use_fallback: Try WeatherAPI.com when Open-Meteo is unreachable.
        policy: Retry bounds and per-attempt timeout for Open-Meteo calls.
            Defaults to DEFAULT_POLICY.
        logger: Destination for all user-facing output.

    Returns:
        Dict with location, weather, timestamp and source, or None.
    """
    logger = logger or log
    logger.info("🌤  Fetching weather for: %s", city)
    try:
        return WeatherLookup(city, use_fallback, policy=policy, logger=logger).run()
    except Exception:
        logger.exception("❌ Unexpected error while fetching weather for %s", city)
        return None
