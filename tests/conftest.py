import pytest
from datetime import UTC, datetime

from kiawah_concierge.adapters.messaging.event_bus import InMemoryEventBus
from kiawah_concierge.config.settings import Settings
from kiawah_concierge.services.state_store import StateStore
from tests.mocks.adapters import FakeHttpClient

# 2024-06-01 09:30 in Charleston (EDT, UTC-4)
FIXED_NOW = datetime(2024, 6, 1, 13, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep unit tests independent of the developer's shell and .env."""
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("CONCIERGE_ENV", raising=False)
    return True


@pytest.fixture
def settings() -> Settings:
    """Default settings (canonical Open-Meteo variant)."""
    return Settings()


@pytest.fixture
def legacy_settings() -> Settings:
    """Settings for the OpenWeatherMap + sunrise-sunset variant."""
    s = Settings()
    weather = s.weather.model_copy(update={"variant": "openweathermap", "openweathermap_api_key": "k" * 32})
    return s.model_copy(update={"weather": weather})


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def store(event_bus) -> StateStore:
    return StateStore(event_bus)


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def clock():
    """Fixed clock for adapters."""
    return lambda: FIXED_NOW
