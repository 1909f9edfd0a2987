"""
Settings management using Pydantic.

Loads configuration from YAML files and environment variables.
Environment variables override YAML values.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

WeatherVariant = Literal["open_meteo", "openweathermap"]


class RentalSettings(BaseModel):
    """Where the property is. Threaded through every source adapter."""

    name: str = "Kiawah Island"
    latitude: float = Field(default=32.6082, ge=-90, le=90)
    longitude: float = Field(default=-80.0848, ge=-180, le=180)
    timezone: str = "America/New_York"
    tide_station: str = "8667062"


class EndpointSettings(BaseModel):
    """External endpoints."""

    property_feed_url: str = "https://n8n.srv1321920.hstgr.cloud/webhook/kiawah-data"
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    openweathermap_url: str = "https://api.openweathermap.org/data/2.5/forecast"
    sunrise_sunset_url: str = "https://api.sunrise-sunset.org/json"
    tides_url: str = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"
    qr_code_url: str = "https://api.qrserver.com/v1/create-qr-code/"


class WeatherSettings(BaseModel):
    """Weather source selection and shaping."""

    variant: WeatherVariant = "open_meteo"
    forecast_days: int = Field(default=7, ge=1, le=16)
    legacy_forecast_days: int = Field(default=5, ge=1, le=5)
    hourly_limit: int = Field(default=8, ge=0)
    # Local hours in [day_start_hour, day_end_hour) get day icons
    day_start_hour: int = Field(default=6, ge=0, le=23)
    day_end_hour: int = Field(default=20, ge=1, le=24)
    temperature_unit: str = "fahrenheit"
    openweathermap_api_key: str = ""


class TideSettings(BaseModel):
    """NOAA datagetter query shape."""

    datum: str = "MLLW"
    time_zone: str = "lst_ldt"
    interval: str = "hilo"
    units: str = "english"
    application: str = "KiawahConcierge"


class HttpSettings(BaseModel):
    """HTTP transport settings."""

    # None keeps aiohttp's default timeouts
    timeout_seconds: float | None = None
    user_agent: str = "KiawahConcierge/1.0"


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    file_enabled: bool = False
    log_dir: str = "logs"
    json_enabled: bool = False
    json_file: str = "logs/concierge_json.jsonl"
    json_max_bytes: int = 10_000_000
    json_backup_count: int = 3


class Settings(BaseSettings):
    """
    Main settings container.

    Loads from YAML file based on environment, then applies env var overrides.
    """

    env: str = Field(default="development", alias="CONCIERGE_ENV")

    rental: RentalSettings = Field(default_factory=RentalSettings)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    tides: TideSettings = Field(default_factory=TideSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {
        "env_prefix": "CONCIERGE_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # CONCIERGE_* variables win over values loaded from YAML
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def validate_config(self) -> list[str]:
        """
        Check cross-field constraints that a single field validator cannot.

        Returns:
            List of validation error messages. Empty list means all validations passed.
        """
        errors = []

        if self.weather.day_start_hour >= self.weather.day_end_hour:
            errors.append("weather.day_start_hour must be before weather.day_end_hour")

        if self.weather.variant == "openweathermap" and not self.weather.openweathermap_api_key:
            errors.append("weather.openweathermap_api_key is required for the openweathermap variant")

        if not self.rental.tide_station:
            errors.append("rental.tide_station is required")

        try:
            from zoneinfo import ZoneInfo

            ZoneInfo(self.rental.timezone)
        except (KeyError, ValueError):
            errors.append(f"rental.timezone is not a known zone: {self.rental.timezone!r}")

        for name, url in self.endpoints.model_dump().items():
            if not str(url).startswith(("http://", "https://")):
                errors.append(f"endpoints.{name} must be an http(s) URL")

        return errors

    @classmethod
    def from_yaml(cls, env: str = "development") -> Settings:
        """
        Load settings from config.yaml.

        If config.yaml is absent, default.yaml is merged with <env>.yaml.
        """
        config_dir = Path(__file__).parent
        yaml_file = config_dir / "config.yaml"

        data: dict = {}
        if yaml_file.exists():
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            default_file = config_dir / "default.yaml"
            env_file = config_dir / f"{env}.yaml"

            if default_file.exists():
                with open(default_file, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}

            if env_file.exists():
                with open(env_file, encoding="utf-8") as f:
                    env_data = yaml.safe_load(f) or {}
                data = _deep_merge(data, env_data)

        # API keys never live in the YAML file
        if os.getenv("OPENWEATHER_API_KEY"):
            data.setdefault("weather", {})
            data["weather"]["openweathermap_api_key"] = os.getenv("OPENWEATHER_API_KEY")

        data["env"] = env

        _warn_unknown_keys(data, cls)

        return cls(**data)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts, override wins on conflicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _collect_all_keys(data: dict, prefix: str = "") -> set[str]:
    """Recursively collect all keys from a nested dict in dot notation."""
    keys = set()
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        keys.add(full_key)
        if isinstance(value, dict):
            keys.update(_collect_all_keys(value, full_key))
    return keys


def _collect_model_fields(model_class: type[BaseModel], prefix: str = "") -> set[str]:
    """Recursively collect all field names from a Pydantic model in dot notation."""
    fields = set()
    for field_name, field_info in model_class.model_fields.items():
        full_key = f"{prefix}.{field_name}" if prefix else field_name
        fields.add(full_key)
        if field_info.alias:
            fields.add(f"{prefix}.{field_info.alias}" if prefix else field_info.alias)

        annotation = field_info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            fields.update(_collect_model_fields(annotation, full_key))

    return fields


def _warn_unknown_keys(data: dict, model_class: type[BaseModel]) -> None:
    """Warn about YAML keys that don't match any model field (likely typos)."""
    unknown_keys = _collect_all_keys(data) - _collect_model_fields(model_class)

    if unknown_keys:
        logger.warning(
            f"Unknown configuration keys found (will be ignored due to extra='ignore'): {sorted(unknown_keys)}. "
            f"This may indicate typos in config.yaml or outdated config keys."
        )


@lru_cache(maxsize=4)
def get_settings(env: str | None = None) -> Settings:
    """Get cached settings instance."""
    resolved_env = env or os.getenv("CONCIERGE_ENV", "development")
    return Settings.from_yaml(env=resolved_env)
