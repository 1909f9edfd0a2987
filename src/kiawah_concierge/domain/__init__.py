"""
Domain Layer: Core entities, lookup tables and pure derivations.

This layer has NO external dependencies (no HTTP types, no provider payloads).
All types here are canonical and used throughout the application.
"""

from kiawah_concierge.domain.errors import (
    ConciergeError,
    ConfigurationError,
    DecodeError,
    SliceOwnershipError,
    SourceError,
    SourceUnavailableError,
    TransportError,
)
from kiawah_concierge.domain.events import (
    DomainEvent,
    FetchCycleCompleted,
    FetchFailed,
    SliceUpdated,
)
from kiawah_concierge.domain.models import (
    Category,
    CurrentConditions,
    DayForecast,
    DiningSection,
    DiningVenue,
    GoogleReview,
    GuestProfile,
    HeroImage,
    HourForecast,
    HowDoICard,
    MoonPhase,
    Place,
    PropertySnapshot,
    SettleInCard,
    Slice,
    SunTimes,
    TideEvent,
    TideType,
    WeatherSnapshot,
    WifiCredentials,
)

__all__ = [
    # Enums
    "Slice",
    "TideType",
    # Models
    "GuestProfile",
    "WifiCredentials",
    "HeroImage",
    "Place",
    "Category",
    "GoogleReview",
    "DiningVenue",
    "DiningSection",
    "SettleInCard",
    "HowDoICard",
    "PropertySnapshot",
    "CurrentConditions",
    "DayForecast",
    "HourForecast",
    "MoonPhase",
    "SunTimes",
    "WeatherSnapshot",
    "TideEvent",
    # Events
    "DomainEvent",
    "SliceUpdated",
    "FetchFailed",
    "FetchCycleCompleted",
    # Errors
    "ConciergeError",
    "SourceError",
    "TransportError",
    "DecodeError",
    "SourceUnavailableError",
    "ConfigurationError",
    "SliceOwnershipError",
]
