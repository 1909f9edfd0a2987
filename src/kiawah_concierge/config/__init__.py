"""Configuration: pydantic settings loaded from config.yaml and the environment."""

from kiawah_concierge.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
