# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the optional TOML settings file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
Without a settings file every value falls back to DEFAULTS, so the
tool works out of the box. The API key is never read from here; it
comes from the WEATHER_API_KEY environment variable.
"""

import copy
import tomllib
from pathlib import Path

from weather_now.utils import RetryPolicy


DEFAULT_CONFIG_PATH = Path("weather_now.toml")

DEFAULTS = {
    "retry": {
        "max_retries": 3,
        "timeout_seconds": 10.0,
        "backoff_step_seconds": 1.0,
        "timeout_delay_seconds": 1.0,
    },
    "fallback": {
        "enabled": True,
    },
    "log": {
        "path": "logs/weather_now.log",
        "level": "INFO",
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(path: Path = DEFAULT_CONFIG_PATH, required: bool = False) -> dict:
    """Load settings from a TOML file, layered over DEFAULTS.

    Args:
        path: Path to the TOML settings file.
        required: If True, a missing file is an error instead of
            meaning "use the defaults".

    Returns:
        Nested dict with 'retry', 'fallback' and 'log' sections.

    Raises:
        FileNotFoundError: If required is True and the file does not exist.
        ValueError: If the file is not valid TOML or a value has the wrong
            type or range.
    """
    config = copy.deepcopy(DEFAULTS)

    if not path.exists():
        if required:
            raise FileNotFoundError(f"Config file not found: {path}")
        return config

    with open(path, "rb") as f:
        user = tomllib.load(f)

    for section, values in config.items():
        overrides = user.get(section, {})
        if not isinstance(overrides, dict):
            raise ValueError(f"Config section [{section}] must be a table")
        for key in values:
            if key in overrides:
                values[key] = overrides[key]

    _validate(config)
    return config


def _validate(config: dict) -> None:
    """Check value types and ranges.

    Expected config schema::

        [retry]
        max_retries           = <int>    # retries after the first attempt, >= 0
        timeout_seconds       = <float>  # per-attempt deadline, > 0
        backoff_step_seconds  = <float>  # delay growth per retry, >= 0
        timeout_delay_seconds = <float>  # delay after a read timeout, >= 0

        [fallback]
        enabled = <bool>   # try WeatherAPI.com when Open-Meteo is unreachable

        [log]
        path  = <str>      # log file; empty string disables file logging
        level = <str>      # DEBUG, INFO, WARNING, ERROR or CRITICAL

    Raises:
        ValueError: Naming the first offending key.
    """
    retry = config["retry"]
    max_retries = retry["max_retries"]
    if isinstance(max_retries, bool) or not isinstance(max_retries, int) or max_retries < 0:
        raise ValueError("[retry].max_retries must be a non-negative integer")

    for key in ("timeout_seconds", "backoff_step_seconds", "timeout_delay_seconds"):
        value = retry[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"[retry].{key} must be a non-negative number")
    if retry["timeout_seconds"] == 0:
        raise ValueError("[retry].timeout_seconds must be greater than zero")

    if not isinstance(config["fallback"]["enabled"], bool):
        raise ValueError("[fallback].enabled must be true or false")

    log = config["log"]
    if not isinstance(log["path"], str):
        raise ValueError("[log].path must be a string")
    if not isinstance(log["level"], str) or log["level"].upper() not in LOG_LEVELS:
        raise ValueError(f"[log].level must be one of {', '.join(LOG_LEVELS)}")


def retry_policy_from_config(config: dict) -> RetryPolicy:
    """Build the RetryPolicy described by the [retry] section."""
    retry = config["retry"]
    return RetryPolicy(
        max_retries=retry["max_retries"],
        timeout=float(retry["timeout_seconds"]),
        backoff_step=float(retry["backoff_step_seconds"]),
        timeout_delay=float(retry["timeout_delay_seconds"]),
    )
