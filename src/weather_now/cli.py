# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for weather-now.

Commands:
  weather-now <city>     — fetch and print current weather
  weather-now --test     — check that the Open-Meteo API is reachable
  weather-now --help     — show usage

Two entry points share this module. `weather-now` is lenient: it always
exits 0 once it has run (printing usage when no city is given).
`weather-now-strict` exits 1 when no city is given or the command fails,
which suits shell scripts.
"""

import argparse
import sys
from pathlib import Path

from weather_now.config import DEFAULT_CONFIG_PATH, load_config, retry_policy_from_config
from weather_now.diagnostics import probe_connection
from weather_now.logging_config import setup_logging
from weather_now.lookup import get_weather

EXAMPLES = """\
Examples:
  weather-now Delhi
  weather-now "New York"
  weather-now London
  weather-now --test"""


def build_parser(prog: str = "weather-now") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Weather CLI - Get current weather for any city using Open-Meteo",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "city",
        nargs="*",
        help="City name; several words are joined, e.g. New York",
    )
    parser.add_argument("--test", action="store_true", help="Test API connectivity")
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Do not try the alternative provider (WeatherAPI.com) on failure",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        default=None,
        help=f"Settings file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    return parser


def run(argv: list[str] | None = None, strict: bool = False, prog: str = "weather-now") -> int:
    """Parse arguments, run the command and return the exit code."""
    parser = build_parser(prog)
    args = parser.parse_args(argv)

    city = " ".join(args.city).strip()
    if not city and not args.test:
        parser.print_usage(sys.stdout)
        print(EXAMPLES)
        return 1 if strict else 0

    try:
        if args.config is not None:
            config = load_config(args.config, required=True)
        else:
            config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    setup_logging(config["log"]["level"], config["log"]["path"])
    policy = retry_policy_from_config(config)

    if args.test:
        ok = probe_connection()
        return 1 if strict and not ok else 0

    use_fallback = config["fallback"]["enabled"] and not args.no_fallback
    result = get_weather(city, use_fallback=use_fallback, policy=policy)
    return 1 if strict and result is None else 0


def main(argv: list[str] | None = None) -> None:
    raise SystemExit(run(argv, strict=False))


def main_strict(argv: list[str] | None = None) -> None:
    raise SystemExit(run(argv, strict=True, prog="weather-now-strict"))


if __name__ == "__main__":
    main()
