"""
OpenWeatherMap weather adapter (legacy variant).

The 5-day / 3-hour forecast is bucketed into local calendar days. There is
no hourly output and no moon phase; sun times come from the separate
sun-times adapter in this variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from typing import Any

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.config.settings import Settings
from kiawah_concierge.domain.errors import ConfigurationError, DecodeError
from kiawah_concierge.domain.models import CurrentConditions, DayForecast, Slice, WeatherSnapshot
from kiawah_concierge.domain.weather_codes import UNKNOWN_CONDITION, icon_for_owm
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.ports.event_bus import EventBusPort
from kiawah_concierge.ports.http import HttpClientPort
from kiawah_concierge.ports.state_store import StateStorePort
from kiawah_concierge.utils.numbers import round_half_away, to_number

logger = get_logger(__name__)

SOURCE_NAME = "openweathermap"

# Free tier returns 40 samples (5 days x 8)
MAX_SAMPLES = 40
NOON_HOUR = 12


@dataclass(frozen=True, slots=True)
class _Sample:
    when: datetime
    temp: float
    temp_min: float
    temp_max: float
    pop: float
    icon: str
    description: str


def _parse_sample(entry: Any, zone: tzinfo) -> _Sample | None:
    if not isinstance(entry, dict):
        return None
    timestamp = to_number(entry.get("dt"))
    main = entry.get("main")
    if timestamp is None or not isinstance(main, dict):
        return None

    temp = to_number(main.get("temp"))
    temp_min = to_number(main.get("temp_min"))
    temp_max = to_number(main.get("temp_max"))
    if None in (temp, temp_min, temp_max):
        return None

    weather = entry.get("weather")
    first = weather[0] if isinstance(weather, list) and weather and isinstance(weather[0], dict) else {}
    icon = first.get("icon") if isinstance(first.get("icon"), str) else ""
    description = first.get("description") if isinstance(first.get("description"), str) else ""

    try:
        when = datetime.fromtimestamp(timestamp, UTC).astimezone(zone)
    except (OverflowError, OSError, ValueError):
        return None

    pop = to_number(entry.get("pop"))
    return _Sample(
        when=when,
        temp=temp,
        temp_min=temp_min,
        temp_max=temp_max,
        pop=pop if pop is not None else 0.0,
        icon=icon,
        description=description,
    )


def _condition(description: str) -> str:
    return description.title() if description else UNKNOWN_CONDITION


def _representative(samples: list[_Sample]) -> _Sample:
    """The local 12:00 sample, else the sample closest to noon."""
    for sample in samples:
        if sample.when.hour == NOON_HOUR and sample.when.minute == 0:
            return sample
    return min(samples, key=lambda s: abs((s.when.hour * 60 + s.when.minute) - NOON_HOUR * 60))


def parse_openweathermap(payload: Any, zone: tzinfo, days: int = 5) -> WeatherSnapshot:
    """
    Normalize an OpenWeatherMap forecast body.

    Raises:
        DecodeError: The body has no usable ``list`` of samples.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("list"), list):
        raise DecodeError("OpenWeatherMap body has no forecast list", source=SOURCE_NAME)

    samples = [s for s in (_parse_sample(e, zone) for e in payload["list"][:MAX_SAMPLES]) if s is not None]
    if not samples:
        raise DecodeError("OpenWeatherMap forecast list has no usable samples", source=SOURCE_NAME)

    buckets: dict[date, list[_Sample]] = {}
    for sample in samples:
        buckets.setdefault(sample.when.date(), []).append(sample)

    daily: list[DayForecast] = []
    for day in sorted(buckets)[:days]:
        members = buckets[day]
        noon = _representative(members)
        daily.append(
            DayForecast(
                date=day,
                high=round_half_away(max(s.temp_max for s in members)),
                low=round_half_away(min(s.temp_min for s in members)),
                icon=icon_for_owm(noon.icon),
                condition=_condition(noon.description),
                precip_chance=round_half_away(max(s.pop for s in members) * 100),
            )
        )

    first = samples[0]
    current = CurrentConditions(
        temperature=round_half_away(first.temp),
        low=daily[0].low if daily else 0,
        condition=_condition(first.description),
        icon=icon_for_owm(first.icon),
    )
    return WeatherSnapshot(current=current, daily=tuple(daily), hourly=(), moon_phase=None)


class OpenWeatherMapAdapter(SourceAdapter):
    """Fetches the OpenWeatherMap 5-day forecast and owns the weather slice."""

    name = SOURCE_NAME
    slices = (Slice.WEATHER,)

    def __init__(
        self,
        settings: Settings,
        http: HttpClientPort,
        store: StateStorePort,
        event_bus: EventBusPort,
        **kwargs: Any,
    ):
        if not settings.weather.openweathermap_api_key:
            raise ConfigurationError(
                "OpenWeatherMap variant needs an API key (OPENWEATHER_API_KEY)",
                source=SOURCE_NAME,
            )
        super().__init__(settings, http, store, event_bus, **kwargs)

    async def load(self) -> dict[Slice, Any]:
        params = {
            "lat": self._settings.rental.latitude,
            "lon": self._settings.rental.longitude,
            "units": "imperial",
            "appid": self._settings.weather.openweathermap_api_key,
        }
        payload = await self._http.get_json(self._settings.endpoints.openweathermap_url, params, source=self.name)
        snapshot = await self.parse_off_loop(
            parse_openweathermap, payload, self.zone, self._settings.weather.legacy_forecast_days
        )
        logger.info(
            f"OpenWeatherMap: {snapshot.current.temperature}° {snapshot.current.condition}, "
            f"{len(snapshot.daily)} days"
        )
        return {Slice.WEATHER: snapshot}
