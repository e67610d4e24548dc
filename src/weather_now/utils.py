# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
utils.py — Shared HTTP helpers: JSON fetching and retry logic.

fetch_json() makes exactly one GET request and translates every failure
into an exception from weather_now.errors. with_retry() wraps any such
call and re-attempts the transient ones according to a RetryPolicy.
"""

import errno
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests

from weather_now.errors import (
    FetchConnectionError,
    HttpStatusError,
    JsonParseError,
    RequestTimeoutError,
)

log = logging.getLogger(__name__)

USER_AGENT = "weather-now/0.1"
DEFAULT_MAX_RETRIES = 3
DEFAULT_TIMEOUT_SECONDS = 10.0

# Connection error codes worth another attempt
RETRYABLE_CODES = frozenset({"ETIMEDOUT", "ECONNRESET"})

_ERRNO_CODES = {
    errno.ECONNRESET: "ECONNRESET",
    errno.ECONNREFUSED: "ECONNREFUSED",
    errno.ETIMEDOUT: "ETIMEDOUT",
    errno.EHOSTUNREACH: "EHOSTUNREACH",
    errno.ENETUNREACH: "ENETUNREACH",
}

_CLASS_CODES = (
    (ConnectionResetError, "ECONNRESET"),
    (ConnectionRefusedError, "ECONNREFUSED"),
    (TimeoutError, "ETIMEDOUT"),
)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounds and delays used by with_retry().

    Attributes:
        max_retries: Retries allowed after the first attempt.
        timeout: Per-attempt deadline in seconds.
        backoff_step: Seconds added to the delay for each retry already used.
        timeout_delay: Flat delay in seconds after a read timeout.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    backoff_step: float = 1.0
    timeout_delay: float = 1.0

    def backoff(self, retries_left: int) -> float:
        """Delay before the next attempt, given the retries still available.

        With the default of 3 retries this yields 1s, 2s, then 3s.
        """
        return self.backoff_step * (self.max_retries + 1 - retries_left)


DEFAULT_POLICY = RetryPolicy()


def error_code(exc: BaseException) -> str | None:
    """Find the socket-level cause of a connection failure.

    requests wraps the original OSError several layers deep (in args,
    in urllib3's ``reason`` attribute and in the exception chain), so
    all of those are searched.

    Args:
        exc: The exception raised by requests (or any other exception).

    Returns:
        A code such as 'ECONNRESET', or None if no known cause was found.
    """
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, OSError):
            if current.errno in _ERRNO_CODES:
                return _ERRNO_CODES[current.errno]
            for cls, code in _CLASS_CODES:
                if isinstance(current, cls):
                    return code

        pending.extend(a for a in current.args if isinstance(a, BaseException))
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.append(current.__cause__)
        pending.append(current.__context__)
    return None


def fetch_json(
    url: str,
    params: dict | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """Perform a single GET request and decode the JSON body.

    Args:
        url: Endpoint URL.
        params: Query string parameters.
        timeout: Deadline in seconds for connecting and for reading.

    Returns:
        The decoded JSON value.

    Raises:
        HttpStatusError: If the status code is outside 200-299.
        JsonParseError: If the body is not valid JSON.
        FetchConnectionError: If the connection failed (including a
            connect timeout, reported with code 'ETIMEDOUT').
        RequestTimeoutError: If the server did not answer in time.
    """
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    try:
        r = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.exceptions.ConnectTimeout as e:
        raise FetchConnectionError(f"Connection timed out: {e}", code="ETIMEDOUT") from e
    except requests.exceptions.Timeout as e:
        raise RequestTimeoutError(f"No response within {timeout}s") from e
    except requests.exceptions.ConnectionError as e:
        raise FetchConnectionError(str(e), code=error_code(e)) from e

    if not 200 <= r.status_code < 300:
        raise HttpStatusError(r.status_code, r.text)

    try:
        return r.json()
    except ValueError as e:
        raise JsonParseError(f"Invalid JSON: {r.text[:100]}") from e


def with_retry(
    fn: Callable[[], Any],
    *,
    label: str = "API call",
    policy: RetryPolicy = DEFAULT_POLICY,
    logger: logging.Logger | None = None,
) -> Any:
    """Call fn, retrying transient network failures.

    Retryable connection errors (see RETRYABLE_CODES) wait
    policy.backoff(retries_left) seconds; read timeouts wait a flat
    policy.timeout_delay. HTTP status and JSON errors are never retried.

    Args:
        fn: Zero-argument callable to invoke (wrap args in a closure).
        label: Human-readable name for the call, used in warning messages.
        policy: Retry bounds and delays.
        logger: Logger for retry warnings. Defaults to this module's logger.

    Returns:
        The return value of fn on success.

    Raises:
        FetchConnectionError: Non-retryable, or retries exhausted.
        RequestTimeoutError: Timed out on every attempt.
        WeatherError: Anything else fn raised, unchanged.
    """
    logger = logger or log
    retries_left = policy.max_retries
    while True:
        try:
            return fn()
        except RequestTimeoutError as e:
            if retries_left <= 0:
                raise RequestTimeoutError(f"{label}: request timeout after retries") from e
            logger.warning("⚠️  Timeout, %d retries left...", retries_left)
            time.sleep(policy.timeout_delay)
        except FetchConnectionError as e:
            if retries_left <= 0 or e.code not in RETRYABLE_CODES:
                raise
            logger.warning(
                "⚠️  %s failed (%s), %d retries left...", label, e.code, retries_left
            )
            time.sleep(policy.backoff(retries_left))
        retries_left -= 1
