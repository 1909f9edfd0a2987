"""
Weather code normalization.

Maps provider classification codes onto the internal icon vocabulary and
human-readable condition text. Lookups are exact; anything unmapped falls
back to a generic cloud icon and "Unknown".
"""

from __future__ import annotations

from kiawah_concierge.domain.models import DEFAULT_WEATHER_ICON

UNKNOWN_CONDITION = "Unknown"

# WMO code -> (day icon, night icon)
WMO_ICONS: dict[int, tuple[str, str]] = {
    0: ("sun.max.fill", "moon.fill"),  # Clear sky
    1: ("sun.max.fill", "moon.fill"),  # Mainly clear
    2: ("cloud.sun.fill", "cloud.moon.fill"),  # Partly cloudy
    3: ("cloud.fill", "cloud.fill"),  # Overcast
    45: ("cloud.fog.fill", "cloud.fog.fill"),
    48: ("cloud.fog.fill", "cloud.fog.fill"),
    51: ("cloud.drizzle.fill", "cloud.drizzle.fill"),
    53: ("cloud.drizzle.fill", "cloud.drizzle.fill"),
    55: ("cloud.drizzle.fill", "cloud.drizzle.fill"),
    56: ("cloud.sleet.fill", "cloud.sleet.fill"),  # Freezing drizzle
    57: ("cloud.sleet.fill", "cloud.sleet.fill"),
    61: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    63: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    65: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    66: ("cloud.sleet.fill", "cloud.sleet.fill"),  # Freezing rain
    67: ("cloud.sleet.fill", "cloud.sleet.fill"),
    71: ("snowflake", "snowflake"),
    73: ("snowflake", "snowflake"),
    75: ("snowflake", "snowflake"),
    77: ("snowflake", "snowflake"),  # Snow grains
    80: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),  # Rain showers
    81: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    82: ("cloud.sun.rain.fill", "cloud.moon.rain.fill"),
    85: ("cloud.snow.fill", "cloud.snow.fill"),
    86: ("cloud.snow.fill", "cloud.snow.fill"),
    95: ("cloud.bolt.fill", "cloud.bolt.fill"),
    96: ("cloud.bolt.rain.fill", "cloud.bolt.rain.fill"),  # Thunderstorm with hail
    99: ("cloud.bolt.rain.fill", "cloud.bolt.rain.fill"),
}

WMO_CONDITIONS: dict[int, str] = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Icy Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Light Showers",
    81: "Showers",
    82: "Heavy Showers",
    85: "Light Snow Showers",
    86: "Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm",
    99: "Thunderstorm",
}

# OpenWeatherMap icon code (e.g. "10d") -> icon
OWM_ICONS: dict[str, str] = {
    "01d": "sun.max.fill",
    "01n": "moon.fill",
    "02d": "cloud.sun.fill",
    "02n": "cloud.moon.fill",
    "03d": "cloud.fill",
    "03n": "cloud.fill",
    "04d": "smoke.fill",
    "04n": "smoke.fill",
    "09d": "cloud.drizzle.fill",
    "09n": "cloud.drizzle.fill",
    "10d": "cloud.sun.rain.fill",
    "10n": "cloud.moon.rain.fill",
    "11d": "cloud.bolt.fill",
    "11n": "cloud.bolt.fill",
    "13d": "snowflake",
    "13n": "snowflake",
    "50d": "cloud.fog.fill",
    "50n": "cloud.fog.fill",
}


def icon_for_wmo(code: int, *, is_day: bool = True) -> str:
    """Icon for a WMO weather code."""
    icons = WMO_ICONS.get(code)
    if icons is None:
        return DEFAULT_WEATHER_ICON
    return icons[0] if is_day else icons[1]


def condition_for_wmo(code: int) -> str:
    """Condition text for a WMO weather code."""
    return WMO_CONDITIONS.get(code, UNKNOWN_CONDITION)


def icon_for_owm(icon_code: str) -> str:
    """Icon for an OpenWeatherMap icon code."""
    return OWM_ICONS.get(icon_code, DEFAULT_WEATHER_ICON)
