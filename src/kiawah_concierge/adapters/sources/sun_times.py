"""
Sunrise-sunset adapter (legacy variant).

In the canonical variant sun times come from the Open-Meteo daily block
instead, and this adapter is not wired.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.domain.errors import DecodeError, SourceUnavailableError
from kiawah_concierge.domain.models import Slice, SunTimes
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.utils.timefmt import display_time, parse_iso_instant

logger = get_logger(__name__)

SOURCE_NAME = "sun_times"


def format_instant(value: Any, zone: tzinfo) -> str | None:
    """ISO-8601 instant as local "h:mm AM"; None if it does not parse."""
    parsed = parse_iso_instant(value)
    return display_time(parsed.astimezone(zone)) if parsed else None


def parse_sun_times(payload: Any, zone: tzinfo) -> SunTimes:
    """
    Normalize a sunrise-sunset body (requested with ``formatted=0``).

    Raises:
        SourceUnavailableError: ``status`` is not OK or ``results`` is missing.
        DecodeError: The timestamps do not parse.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Sun times body is not a JSON object", source=SOURCE_NAME)

    status = payload.get("status")
    results = payload.get("results")
    if status != "OK" or not isinstance(results, dict):
        raise SourceUnavailableError(f"Sun times unavailable (status={status!r})", source=SOURCE_NAME)

    sunrise = format_instant(results.get("sunrise"), zone)
    sunset = format_instant(results.get("sunset"), zone)
    if sunrise is None or sunset is None:
        raise DecodeError(
            "Sun times carry unparseable timestamps",
            source=SOURCE_NAME,
            details={"sunrise": results.get("sunrise"), "sunset": results.get("sunset")},
        )
    return SunTimes(sunrise=sunrise, sunset=sunset)


class SunTimesAdapter(SourceAdapter):
    """Fetches sunrise-sunset and owns the sun-times slice."""

    name = SOURCE_NAME
    slices = (Slice.SUN_TIMES,)

    async def load(self) -> dict[Slice, Any]:
        params = {
            "lat": self._settings.rental.latitude,
            "lng": self._settings.rental.longitude,
            "formatted": 0,
        }
        payload = await self._http.get_json(self._settings.endpoints.sunrise_sunset_url, params, source=self.name)
        sun_times = await self.parse_off_loop(parse_sun_times, payload, self.zone)
        logger.info(f"Sun times: sunrise {sun_times.sunrise}, sunset {sun_times.sunset}")
        return {Slice.SUN_TIMES: sun_times}
