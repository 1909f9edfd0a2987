"""
Open-Meteo weather adapter (canonical variant).

One request returns current conditions, hourly and daily blocks. The daily
block also carries sunrise/sunset, so this adapter owns both the weather
and the sun-times slices. Moon phase is computed locally for "now".
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.config.settings import Settings, WeatherSettings
from kiawah_concierge.domain.errors import DecodeError
from kiawah_concierge.domain.models import (
    CurrentConditions,
    DayForecast,
    HourForecast,
    Slice,
    SunTimes,
    WeatherSnapshot,
)
from kiawah_concierge.domain.moon import calculate_moon_phase
from kiawah_concierge.domain.weather_codes import condition_for_wmo, icon_for_wmo
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.utils.numbers import round_half_away, to_number
from kiawah_concierge.utils.timefmt import (
    OPEN_METEO_TIME_FORMAT,
    parse_local,
    reformat_local,
    truncate_to_hour,
)

logger = get_logger(__name__)

SOURCE_NAME = "open_meteo"

CURRENT_FIELDS = "temperature_2m,weather_code,is_day"
HOURLY_FIELDS = "temperature_2m,weather_code,precipitation_probability"
DAILY_FIELDS = (
    "temperature_2m_max,temperature_2m_min,weather_code,precipitation_probability_max,sunrise,sunset"
)


def build_params(settings: Settings) -> dict[str, Any]:
    """Query parameters for the forecast endpoint."""
    return {
        "latitude": settings.rental.latitude,
        "longitude": settings.rental.longitude,
        "current": CURRENT_FIELDS,
        "hourly": HOURLY_FIELDS,
        "daily": DAILY_FIELDS,
        "temperature_unit": settings.weather.temperature_unit,
        "timezone": settings.rental.timezone,
        "forecast_days": settings.weather.forecast_days,
    }


def _as_list(block: dict[str, Any], key: str) -> list[Any]:
    value = block.get(key)
    return value if isinstance(value, list) else []


def _as_code(value: Any) -> int | None:
    number = to_number(value)
    if number is None or number != int(number):
        return None
    return int(number)


# =============================================================================
# Blocks
# =============================================================================


def parse_current(block: Any) -> tuple[int, int, bool]:
    """Temperature, weather code and day flag; ``(0, 0, True)`` when absent."""
    if not isinstance(block, dict):
        return 0, 0, True
    temperature = to_number(block.get("temperature_2m"))
    code = _as_code(block.get("weather_code"))
    is_day = _as_code(block.get("is_day"))
    return (
        round_half_away(temperature) if temperature is not None else 0,
        code if code is not None else 0,
        (is_day if is_day is not None else 1) == 1,
    )


def parse_daily(block: Any, zone: tzinfo, limit: int) -> list[DayForecast]:
    """
    Daily forecast entries, in source order.

    Only the first ``limit`` positions present in every array are read;
    positions with a bad date or a null value are skipped.
    """
    if not isinstance(block, dict):
        return []

    columns = [
        _as_list(block, "time"),
        _as_list(block, "temperature_2m_max"),
        _as_list(block, "temperature_2m_min"),
        _as_list(block, "weather_code"),
        _as_list(block, "precipitation_probability_max"),
        _as_list(block, "sunrise"),
        _as_list(block, "sunset"),
    ]
    count = min(limit, *(len(column) for column in columns))

    days: list[DayForecast] = []
    for times, highs, lows, codes, precips, sunrises, sunsets in zip(*(c[:count] for c in columns)):
        try:
            day = date.fromisoformat(times) if isinstance(times, str) else None
        except ValueError:
            day = None
        high, low, precip = to_number(highs), to_number(lows), to_number(precips)
        code = _as_code(codes)
        if day is None or None in (high, low, precip, code):
            continue
        if not isinstance(sunrises, str) or not isinstance(sunsets, str):
            continue

        days.append(
            DayForecast(
                date=day,
                high=round_half_away(high),
                low=round_half_away(low),
                icon=icon_for_wmo(code, is_day=True),
                condition=condition_for_wmo(code),
                precip_chance=round_half_away(precip),
                sunrise=reformat_local(sunrises, OPEN_METEO_TIME_FORMAT, zone),
                sunset=reformat_local(sunsets, OPEN_METEO_TIME_FORMAT, zone),
            )
        )
    return days


def parse_hourly(
    block: Any,
    now: datetime,
    zone: tzinfo,
    *,
    limit: int = 8,
    day_start_hour: int = 6,
    day_end_hour: int = 20,
) -> list[HourForecast]:
    """
    Upcoming hours, starting with the current one.

    An entry is kept when its hour is not earlier than the current hour in
    ``zone``. Collection stops after ``limit`` kept entries.
    """
    if not isinstance(block, dict) or limit <= 0:
        return []

    current_hour = truncate_to_hour(now.astimezone(zone))
    hours: list[HourForecast] = []
    for times, temps, codes, precips in zip(
        _as_list(block, "time"),
        _as_list(block, "temperature_2m"),
        _as_list(block, "weather_code"),
        _as_list(block, "precipitation_probability"),
    ):
        when = parse_local(times, OPEN_METEO_TIME_FORMAT, zone) if isinstance(times, str) else None
        temperature, precip = to_number(temps), to_number(precips)
        code = _as_code(codes)
        if when is None or None in (temperature, precip, code):
            continue
        if truncate_to_hour(when) < current_hour:
            continue

        is_day = day_start_hour <= when.hour < day_end_hour
        hours.append(
            HourForecast(
                time=when,
                temperature=round_half_away(temperature),
                icon=icon_for_wmo(code, is_day=is_day),
                condition=condition_for_wmo(code),
                precip_chance=round_half_away(precip),
            )
        )
        if len(hours) >= limit:
            break
    return hours


def parse_open_meteo(
    payload: Any,
    now: datetime,
    zone: tzinfo,
    settings: WeatherSettings | None = None,
) -> tuple[WeatherSnapshot, SunTimes]:
    """
    Normalize an Open-Meteo forecast body.

    Raises:
        DecodeError: The body is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Open-Meteo body is not a JSON object", source=SOURCE_NAME)
    settings = settings or WeatherSettings()

    temperature, code, is_day = parse_current(payload.get("current"))
    daily = parse_daily(payload.get("daily"), zone, settings.forecast_days)
    hourly = parse_hourly(
        payload.get("hourly"),
        now,
        zone,
        limit=settings.hourly_limit,
        day_start_hour=settings.day_start_hour,
        day_end_hour=settings.day_end_hour,
    )

    current = CurrentConditions(
        temperature=temperature,
        low=daily[0].low if daily else 0,
        condition=condition_for_wmo(code),
        icon=icon_for_wmo(code, is_day=is_day),
    )
    sun_times = SunTimes(sunrise=daily[0].sunrise, sunset=daily[0].sunset) if daily else SunTimes.default()

    snapshot = WeatherSnapshot(
        current=current,
        daily=tuple(daily),
        hourly=tuple(hourly),
        moon_phase=calculate_moon_phase(now),
    )
    return snapshot, sun_times


class OpenMeteoWeatherAdapter(SourceAdapter):
    """Fetches Open-Meteo and owns the weather and sun-times slices."""

    name = SOURCE_NAME
    slices = (Slice.WEATHER, Slice.SUN_TIMES)

    async def load(self) -> dict[Slice, Any]:
        payload = await self._http.get_json(
            self._settings.endpoints.open_meteo_url,
            build_params(self._settings),
            source=self.name,
        )
        snapshot, sun_times = await self.parse_off_loop(
            parse_open_meteo, payload, self.now(), self.zone, self._settings.weather
        )
        logger.info(
            f"Open-Meteo: {snapshot.current.temperature}° {snapshot.current.condition}, "
            f"{len(snapshot.daily)} days, {len(snapshot.hourly)} hours, moon={snapshot.moon_phase.name}"
        )
        return {Slice.WEATHER: snapshot, Slice.SUN_TIMES: sun_times}
