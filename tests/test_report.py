# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for report.py rendering."""

from weather_now.report import location_label, render_report


def _make_result(**weather_extra) -> dict:
    weather = {"temperature": 25, "wind_speed": 10, "wind_direction": 180}
    weather.update(weather_extra)
    return {
        "location": {"name": "Delhi", "country": "India"},
        "weather": weather,
        "source": "Open-Meteo",
    }


def test_report_contains_core_lines():
    text = "\n".join(render_report(_make_result()))
    assert "Weather in Delhi, India" in text
    assert "25°C" in text
    assert "10 km/h" in text
    assert "180° (S)" in text
    assert "Data source: Open-Meteo" in text


def test_report_skips_optional_lines_when_absent():
    text = "\n".join(render_report(_make_result()))
    assert "Humidity" not in text
    assert "Conditions" not in text


def test_report_includes_humidity_and_conditions_when_present():
    text = "\n".join(render_report(_make_result(humidity=80, conditions="Partly cloudy")))
    assert "💧 Humidity: 80%" in text
    assert "Partly cloudy" in text


def test_report_without_wind_direction():
    text = "\n".join(render_report(_make_result(wind_direction=None)))
    assert "Wind Direction" not in text


def test_location_label_without_country():
    assert location_label({"name": "Atlantis", "country": ""}) == "Atlantis"
