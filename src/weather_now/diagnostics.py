# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
diagnostics.py — Network checks run before, or instead of, a lookup.

check_network_connectivity() tells "no internet" apart from "Open-Meteo
is misbehaving" by resolving both API hostnames. probe_connection()
backs the --test flag with a single bounded request to the status page.
Neither function raises: problems are logged and reported as False.
"""

import logging
import socket

import requests

from weather_now.utils import USER_AGENT

log = logging.getLogger(__name__)

DIAGNOSTIC_HOSTS = ("geocoding-api.open-meteo.com", "api.open-meteo.com")
STATUS_URL = "https://api.open-meteo.com/v1/status"
PROBE_TIMEOUT_SECONDS = 5.0


def resolve_host(host: str) -> list[str]:
    """Return the sorted, de-duplicated addresses a hostname resolves to."""
    infos = socket.getaddrinfo(host, 443, proto=socket.IPPROTO_TCP)
    return sorted({info[4][0] for info in infos})


def check_network_connectivity(
    hosts: tuple[str, ...] = DIAGNOSTIC_HOSTS,
    logger: logging.Logger | None = None,
) -> bool:
    """Resolve every host via DNS.

    Args:
        hosts: Hostnames that must all resolve.
        logger: Destination for progress and failure messages.

    Returns:
        True if every host resolved, False on the first failure.
    """
    logger = logger or log
    logger.info("🔍 Running network diagnostics...")

    resolved = {}
    for host in hosts:
        try:
            resolved[host] = resolve_host(host)
        except (OSError, UnicodeError) as e:
            logger.error("❌ DNS resolution failed for %s: %s", host, e)
            return False

    logger.info("✅ DNS resolution successful:")
    for host, addresses in resolved.items():
        logger.info("   %s → %s", host, ", ".join(addresses))
    return True


def probe_connection(
    timeout: float = PROBE_TIMEOUT_SECONDS,
    logger: logging.Logger | None = None,
) -> bool:
    """Check that the Open-Meteo API answers at all.

    timeout bounds the connect and each read of the response separately;
    either one running past it abandons the request.

    Returns:
        True for a 2xx answer, False for any other status or a network error.
    """
    logger = logger or log
    logger.info("🧪 Testing API connectivity...")
    try:
        r = requests.get(STATUS_URL, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("❌ Cannot reach Open-Meteo API: %s", e)
        return False

    if 200 <= r.status_code < 300:
        logger.info("✅ Open-Meteo API is reachable")
        return True
    logger.warning("⚠️  API returned status: %s", r.status_code)
    return False
