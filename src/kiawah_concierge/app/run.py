"""
Entry points for concierge commands.

Each command sets up the environment, wires the engine and runs one
fetch-all cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Load .env file BEFORE importing settings
from dotenv import load_dotenv

for env_path in [
    Path.cwd() / ".env",  # Current working directory
    Path(__file__).parent.parent.parent.parent / ".env",  # Project root
]:
    if env_path.exists():
        load_dotenv(env_path)
        break
else:
    load_dotenv()  # Fallback: search default locations

from kiawah_concierge.adapters.http.client import HttpClient  # noqa: E402
from kiawah_concierge.adapters.messaging.event_bus import InMemoryEventBus  # noqa: E402
from kiawah_concierge.adapters.sources.base import Clock, SourceAdapter, utc_now  # noqa: E402
from kiawah_concierge.adapters.sources.open_meteo import OpenMeteoWeatherAdapter  # noqa: E402
from kiawah_concierge.adapters.sources.openweathermap import OpenWeatherMapAdapter  # noqa: E402
from kiawah_concierge.adapters.sources.property import PropertyAdapter  # noqa: E402
from kiawah_concierge.adapters.sources.sun_times import SunTimesAdapter  # noqa: E402
from kiawah_concierge.adapters.sources.tides import TideAdapter  # noqa: E402
from kiawah_concierge.config.settings import Settings, WeatherVariant, get_settings  # noqa: E402
from kiawah_concierge.domain.errors import ConfigurationError  # noqa: E402
from kiawah_concierge.domain.events import FetchFailed  # noqa: E402
from kiawah_concierge.observability.logging import get_logger, setup_logging  # noqa: E402
from kiawah_concierge.ports.event_bus import EventBusPort  # noqa: E402
from kiawah_concierge.ports.http import HttpClientPort  # noqa: E402
from kiawah_concierge.services.aggregator import Aggregator, FetchCycleReport  # noqa: E402
from kiawah_concierge.services.state_store import StateStore  # noqa: E402

logger = get_logger(__name__)


@dataclass(slots=True)
class Engine:
    """Wired store and aggregator for one settings instance."""

    settings: Settings
    store: StateStore
    aggregator: Aggregator
    event_bus: EventBusPort


def build_adapters(
    settings: Settings,
    store: StateStore,
    http: HttpClientPort,
    event_bus: EventBusPort,
    *,
    clock: Clock = utc_now,
) -> list[SourceAdapter]:
    """
    Adapters for the configured weather variant.

    open_meteo: property, Open-Meteo (weather + sun times), tides.
    openweathermap: property, OpenWeatherMap (weather), sunrise-sunset, tides.
    """
    adapters: list[SourceAdapter] = [PropertyAdapter(settings, http, store, event_bus, clock=clock)]
    if settings.weather.variant == "openweathermap":
        adapters.append(OpenWeatherMapAdapter(settings, http, store, event_bus, clock=clock))
        adapters.append(SunTimesAdapter(settings, http, store, event_bus, clock=clock))
    else:
        adapters.append(OpenMeteoWeatherAdapter(settings, http, store, event_bus, clock=clock))
    adapters.append(TideAdapter(settings, http, store, event_bus, clock=clock))
    return adapters


def build_engine(
    settings: Settings,
    http: HttpClientPort,
    event_bus: EventBusPort | None = None,
    *,
    clock: Clock = utc_now,
) -> Engine:
    """Wire event bus, store, adapters and aggregator."""
    bus = event_bus or InMemoryEventBus()
    store = StateStore(bus)
    adapters = build_adapters(settings, store, http, bus, clock=clock)
    return Engine(settings=settings, store=store, aggregator=Aggregator(adapters, bus), event_bus=bus)


def load_settings(env: str, variant: WeatherVariant | None = None) -> Settings:
    """Settings for ``env`` with an optional weather-variant override."""
    settings = get_settings(env)
    if variant is not None and variant != settings.weather.variant:
        weather = settings.weather.model_copy(update={"variant": variant})
        settings = settings.model_copy(update={"weather": weather})
    return settings


async def _log_failure(event: FetchFailed) -> None:
    logger.debug(f"FetchFailed: source={event.source} code={event.error_code}")


async def run_once(settings: Settings) -> tuple[Engine, FetchCycleReport]:
    """Run one fetch-all cycle against the real endpoints."""
    async with HttpClient(settings.http) as http:
        engine = build_engine(settings, http)
        engine.event_bus.subscribe(FetchFailed, _log_failure)
        await engine.event_bus.start()
        try:
            report = await engine.aggregator.fetch_all()
        finally:
            await engine.event_bus.stop()
        logger.debug(f"HTTP stats: {http.get_stats()}")
    return engine, report


def _prepare(env: str, variant: WeatherVariant | None) -> Settings | None:
    settings = load_settings(env, variant)
    setup_logging(settings)

    errors = settings.validate_config()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        return None

    logger.info(
        f"env={env} | rental={settings.rental.name} ({settings.rental.latitude}, {settings.rental.longitude}) "
        f"| weather={settings.weather.variant} | station={settings.rental.tide_station}"
    )
    return settings


async def run_cycle(env: str = "development", *, variant: WeatherVariant | None = None) -> int:
    """
    Run one fetch-all cycle and log a summary.

    Returns:
        Exit code: 0 = every source succeeded, 1 = at least one failed,
        2 = configuration error.
    """
    settings = _prepare(env, variant)
    if settings is None:
        return 2

    try:
        _, report = await run_once(settings)
    except ConfigurationError as e:
        logger.error(f"Config error: {e.message}")
        return 2

    return 0 if report.all_succeeded else 1


async def run_dump(env: str = "development", *, variant: WeatherVariant | None = None) -> int:
    """Run one fetch-all cycle and print the store contents."""
    settings = _prepare(env, variant)
    if settings is None:
        return 2

    try:
        engine, report = await run_once(settings)
    except ConfigurationError as e:
        logger.error(f"Config error: {e.message}")
        return 2

    from kiawah_concierge.ui.dump import render_store

    render_store(engine.store, report, settings)
    return 0 if report.all_succeeded else 1
