# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_diagnostics.py — Unit tests for the DNS check and the API probe.

socket.getaddrinfo and requests.get are mocked — no real lookups.
"""

import logging
import socket
from unittest.mock import MagicMock, patch

import requests

from weather_now.diagnostics import (
    DIAGNOSTIC_HOSTS,
    STATUS_URL,
    check_network_connectivity,
    probe_connection,
    resolve_host,
)


def _addrinfo(*addresses) -> list:
    return [
        (socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", (addr, 443))
        for addr in addresses
    ]


# ---------------------------------------------------------------------------
# resolve_host / check_network_connectivity
# ---------------------------------------------------------------------------

@patch("weather_now.diagnostics.socket.getaddrinfo")
def test_resolve_host_deduplicates_addresses(mock_getaddrinfo):
    mock_getaddrinfo.return_value = _addrinfo("5.9.1.1", "1.2.3.4", "5.9.1.1")
    assert resolve_host("api.open-meteo.com") == ["1.2.3.4", "5.9.1.1"]


@patch("weather_now.diagnostics.socket.getaddrinfo")
def test_check_network_true_when_both_hosts_resolve(mock_getaddrinfo, caplog):
    mock_getaddrinfo.return_value = _addrinfo("1.2.3.4")

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert check_network_connectivity() is True

    looked_up = [c.args[0] for c in mock_getaddrinfo.call_args_list]
    assert looked_up == list(DIAGNOSTIC_HOSTS)
    assert "DNS resolution successful" in caplog.text
    assert "api.open-meteo.com → 1.2.3.4" in caplog.text


@patch("weather_now.diagnostics.socket.getaddrinfo")
def test_check_network_false_on_resolution_failure(mock_getaddrinfo, caplog):
    mock_getaddrinfo.side_effect = socket.gaierror(-2, "Name or service not known")

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert check_network_connectivity() is False

    assert "DNS resolution failed" in caplog.text
    assert "Name or service not known" in caplog.text


@patch("weather_now.diagnostics.socket.getaddrinfo")
def test_check_network_false_when_second_host_fails(mock_getaddrinfo):
    mock_getaddrinfo.side_effect = [_addrinfo("1.2.3.4"), socket.gaierror(-3, "Temporary failure")]
    assert check_network_connectivity() is False


@patch("weather_now.diagnostics.socket.getaddrinfo")
def test_check_network_logs_to_injected_logger(mock_getaddrinfo):
    mock_getaddrinfo.side_effect = OSError("boom")
    logger = MagicMock()

    assert check_network_connectivity(logger=logger) is False
    logger.error.assert_called_once()


# ---------------------------------------------------------------------------
# probe_connection
# ---------------------------------------------------------------------------

@patch("weather_now.diagnostics.requests.get")
def test_probe_reachable(mock_get, caplog):
    mock_get.return_value = MagicMock(status_code=200)

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert probe_connection() is True

    args, kwargs = mock_get.call_args
    assert args[0] == STATUS_URL
    assert kwargs["timeout"] == 5.0
    assert "reachable" in caplog.text


@patch("weather_now.diagnostics.requests.get")
def test_probe_bad_status(mock_get, caplog):
    mock_get.return_value = MagicMock(status_code=502)

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert probe_connection() is False

    assert "API returned status: 502" in caplog.text


@patch("weather_now.diagnostics.requests.get")
def test_probe_network_error(mock_get, caplog):
    mock_get.side_effect = requests.exceptions.ConnectTimeout("timed out")

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert probe_connection(timeout=1) is False

    assert "Cannot reach Open-Meteo API" in caplog.text


@patch("weather_now.diagnostics.requests.get")
def test_probe_read_timeout_is_reported(mock_get, caplog):
    mock_get.side_effect = requests.exceptions.ReadTimeout("read timed out. (read timeout=5.0)")

    with caplog.at_level(logging.INFO, logger="weather_now"):
        assert probe_connection() is False

    assert mock_get.call_args.kwargs["timeout"] == 5.0
    assert "Cannot reach Open-Meteo API" in caplog.text
