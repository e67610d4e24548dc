# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
report.py — Text rendering for weather results and troubleshooting hints.

All rendering functions return lists of lines ready to log or print,
so the primary and the alternative provider share one visual style.
"""

from weather_now.weather import degrees_to_compass


NETWORK_TIPS = [
    "💡 Troubleshooting tips:",
    "   1. Check if you're connected to the internet",
    "   2. Try: ping api.open-meteo.com",
    "   3. Check firewall settings",
    "   4. Try using a different network (mobile hotspot)",
]

SERVICE_UNAVAILABLE_TIPS = [
    "💡 The Open-Meteo API might be temporarily unavailable.",
    "   This could be due to:",
    "   • API service maintenance",
    "   • Network restrictions in your region",
    "   • Firewall blocking the connection",
]


def location_label(location: dict) -> str:
    """'Name, Country', skipping an empty country."""
    parts = [location.get("name", "?")]
    if location.get("country"):
        parts.append(location["country"])
    return ", ".join(parts)


def render_report(result: dict) -> list[str]:
    """Render a weather result as the lines shown to the user.

    Args:
        result: Dict with 'location', 'weather' and 'source' keys, as
            returned by lookup.get_weather or the alternative provider.

    Returns:
        List of display lines. Humidity and conditions are included only
        when the provider supplied them.
    """
    weather = result["weather"]
    lines = [
        "",
        f"🌤 Weather in {location_label(result['location'])}:",
        f"🌡  Temperature: {weather['temperature']}°C",
        f"💨 Wind: {weather['wind_speed']} km/h",
    ]
    direction = weather.get("wind_direction")
    if direction is not None:
        lines.append(f"🧭 Wind Direction: {direction}° ({degrees_to_compass(direction)})")
    if weather.get("humidity") is not None:
        lines.append(f"💧 Humidity: {weather['humidity']}%")
    if weather.get("conditions"):
        lines.append(f"☁️  Conditions: {weather['conditions']}")
    lines.append(f"✅ Data source: {result.get('source', 'unknown')}")
    return lines
