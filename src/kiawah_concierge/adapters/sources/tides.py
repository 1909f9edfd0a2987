"""
NOAA tide predictions adapter.

Fetches today's high/low predictions for the configured station. NOAA
answers errors with HTTP 200 and an ``error`` object instead of
``predictions``; the adapter treats that as semantic absence.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.config.settings import Settings
from kiawah_concierge.domain.errors import DecodeError, SourceUnavailableError
from kiawah_concierge.domain.models import Slice, TideEvent, TideType
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.utils.numbers import parse_float
from kiawah_concierge.utils.timefmt import NOAA_TIME_FORMAT, reformat_local

logger = get_logger(__name__)

SOURCE_NAME = "tides"


def station_today(now: datetime, zone: tzinfo) -> str:
    """Today's date in the station's local time, as ``yyyyMMdd``."""
    return now.astimezone(zone).strftime("%Y%m%d")


def build_params(settings: Settings, today: str) -> dict[str, Any]:
    """Query parameters for the datagetter endpoint."""
    return {
        "begin_date": today,
        "end_date": today,
        "station": settings.rental.tide_station,
        "product": "predictions",
        "datum": settings.tides.datum,
        "time_zone": settings.tides.time_zone,
        "interval": settings.tides.interval,
        "units": settings.tides.units,
        "format": "json",
        "application": settings.tides.application,
    }


def parse_tide_predictions(payload: Any, zone: tzinfo | None = None) -> list[TideEvent]:
    """
    Tide events in source order.

    A body without ``predictions`` yields no events. Predictions whose
    ``t``, ``v`` or ``type`` is not a string are skipped.
    """
    if not isinstance(payload, dict):
        return []
    predictions = payload.get("predictions")
    if not isinstance(predictions, list):
        return []

    events: list[TideEvent] = []
    for prediction in predictions:
        if not isinstance(prediction, dict):
            continue
        time, value, code = prediction.get("t"), prediction.get("v"), prediction.get("type")
        if not (isinstance(time, str) and isinstance(value, str) and isinstance(code, str)):
            continue
        events.append(
            TideEvent(
                time=reformat_local(time, NOAA_TIME_FORMAT, zone),
                type=TideType.from_code(code),
                height=f"{parse_float(value):.1f} ft",
            )
        )
    return events


def upstream_error_message(payload: Any) -> str | None:
    """The ``error.message`` NOAA sends in place of predictions, if any."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class TideAdapter(SourceAdapter):
    """Fetches NOAA predictions and owns the tides slice."""

    name = SOURCE_NAME
    slices = (Slice.TIDES,)

    async def load(self) -> dict[Slice, Any]:
        today = station_today(self.now(), self.zone)
        payload = await self._http.get_json(
            self._settings.endpoints.tides_url,
            build_params(self._settings, today),
            source=self.name,
        )
        if not isinstance(payload, dict):
            raise DecodeError("Tide body is not a JSON object", source=self.name)
        if not isinstance(payload.get("predictions"), list):
            message = upstream_error_message(payload)
            if message:
                logger.error(f"NOAA error for station {self._settings.rental.tide_station}: {message}")
            raise SourceUnavailableError(
                f"No predictions in response (keys: {sorted(payload)})",
                source=self.name,
                details={"upstream_message": message} if message else None,
            )

        events = await self.parse_off_loop(parse_tide_predictions, payload, self.zone)
        logger.info(f"Tides: {len(events)} events for {today}")
        return {Slice.TIDES: tuple(events)}
