"""
Canonical Domain Models.

Every entity is an immutable snapshot. A successful fetch replaces the
snapshot of its slice wholesale; nothing here is ever merged or mutated.
Provider wire formats are mapped onto these types inside the source adapters.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from urllib.parse import urlencode

# =============================================================================
# ENUMS
# =============================================================================


class Slice(str, Enum):
    """Named subsets of the shared state, each owned by exactly one adapter."""

    PROPERTY = "PROPERTY"
    WEATHER = "WEATHER"
    SUN_TIMES = "SUN_TIMES"
    TIDES = "TIDES"


class TideType(str, Enum):
    """Tide classification."""

    HIGH = "High"
    LOW = "Low"

    @classmethod
    def from_code(cls, code: str) -> TideType:
        """NOAA tags highs with "H"; everything else is a low."""
        return cls.HIGH if code == "H" else cls.LOW


# =============================================================================
# PROPERTY
# =============================================================================


@dataclass(frozen=True, slots=True)
class WifiCredentials:
    """Property WiFi network."""

    ssid: str = ""
    passphrase: str = ""

    def qr_code_url(self, service_url: str, size: int = 300) -> str:
        """Build the QR image URL for a standard WIFI: config URI."""
        payload = f"WIFI:S:{self.ssid};T:WPA;P:{self.passphrase};;"
        query = urlencode({"size": f"{size}x{size}", "data": payload})
        return f"{service_url}?{query}"


@dataclass(frozen=True, slots=True)
class HeroImage:
    """Raw hero image bytes as fetched."""

    content: bytes
    content_type: str = ""


@dataclass(frozen=True, slots=True)
class GuestProfile:
    """Guest-facing identity of the stay."""

    guest_name: str = "Guest"
    hero_image_url: str = ""
    hero_image: HeroImage | None = None
    wifi: WifiCredentials = field(default_factory=WifiCredentials)


@dataclass(frozen=True, slots=True)
class Place:
    """A local recommendation."""

    name: str
    description: str
    address: str
    image_url: str
    category: str | None = None
    place_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True, slots=True)
class Category:
    """Places sharing a category tag."""

    name: str
    icon: str
    places: tuple[Place, ...]

    @property
    def cover_image_url(self) -> str:
        return self.places[0].image_url if self.places else ""


@dataclass(frozen=True, slots=True)
class GoogleReview:
    """Single third-party review."""

    author_name: str
    rating: int
    text: str
    relative_time: str
    author_photo: str | None = None

    @property
    def review_id(self) -> str:
        return f"{self.author_name}-{self.rating}"


@dataclass(frozen=True, slots=True)
class DiningVenue:
    """Rich dining venue record."""

    id: str
    name: str
    location: str
    cuisines: tuple[str, ...]
    price: str
    meal_times: tuple[str, ...]
    short_description: str
    hero_image: str
    logo_image: str
    hours: str
    reservation_phone: str
    attire: str
    reservation_required: bool | None = None
    google_rating: float | None = None
    google_review_count: int | None = None
    google_reviews: tuple[GoogleReview, ...] | None = None


# Venues without a location are shown under this heading
UNLOCATED_VENUES_LABEL = "Around the Island"


@dataclass(frozen=True, slots=True)
class DiningSection:
    """Optional dining payload of the property feed."""

    title: str
    intro: str
    hero_image: str
    venues: tuple[DiningVenue, ...]

    def venues_by_location(
        self, location_order: tuple[str, ...] | None = None
    ) -> list[tuple[str, tuple[DiningVenue, ...]]]:
        """
        Group venues by location.

        Preferred locations come first, then any other named location in
        first-appearance order, then venues without a location.
        """
        if location_order is None:
            from kiawah_concierge.domain.catalog import DINING_LOCATION_ORDER

            location_order = DINING_LOCATION_ORDER

        grouped: dict[str, list[DiningVenue]] = {}
        for venue in self.venues:
            grouped.setdefault(venue.location, []).append(venue)

        result: list[tuple[str, tuple[DiningVenue, ...]]] = []
        for location in location_order:
            if grouped.get(location):
                result.append((location, tuple(grouped[location])))

        for location, venues in grouped.items():
            if location and location not in location_order:
                result.append((location, tuple(venues)))

        if grouped.get(""):
            result.append((UNLOCATED_VENUES_LABEL, tuple(grouped[""])))

        return result


@dataclass(frozen=True, slots=True)
class SettleInCard:
    """Static house-information card."""

    title: str
    icon: str
    content: str


@dataclass(frozen=True, slots=True)
class HowDoICard:
    """Static appliance how-to card."""

    title: str
    icon: str
    instructions: str


@dataclass(frozen=True, slots=True)
class PropertySnapshot:
    """Everything the property feed produces in one fetch."""

    profile: GuestProfile = field(default_factory=GuestProfile)
    places: tuple[Place, ...] = ()
    categories: tuple[Category, ...] = ()
    dining: DiningSection | None = None
    settle_in_cards: tuple[SettleInCard, ...] = ()
    how_do_i_cards: tuple[HowDoICard, ...] = ()

    @classmethod
    def default(cls) -> PropertySnapshot:
        return cls()


# =============================================================================
# WEATHER & ENVIRONMENT
# =============================================================================


DEFAULT_WEATHER_ICON = "cloud.fill"


@dataclass(frozen=True, slots=True)
class CurrentConditions:
    """Conditions right now."""

    temperature: int = 0
    low: int = 0
    condition: str = ""
    icon: str = DEFAULT_WEATHER_ICON


@dataclass(frozen=True, slots=True)
class DayForecast:
    """One calendar day of forecast."""

    date: date
    high: int
    low: int
    icon: str
    condition: str
    precip_chance: int
    sunrise: str = "--"
    sunset: str = "--"


@dataclass(frozen=True, slots=True)
class HourForecast:
    """One forecast hour."""

    time: datetime
    temperature: int
    icon: str
    condition: str
    precip_chance: int


@dataclass(frozen=True, slots=True)
class MoonPhase:
    """Position in the lunar cycle (0 = new, 0.5 = full)."""

    phase: float = 0.0
    name: str = "—"
    icon: str = "moon.fill"

    @property
    def illumination_percent(self) -> int:
        illumination = (1 - math.cos(self.phase * 2 * math.pi)) / 2
        return round(illumination * 100)


@dataclass(frozen=True, slots=True)
class SunTimes:
    """Display-formatted sunrise/sunset."""

    sunrise: str = "--"
    sunset: str = "--"

    @classmethod
    def default(cls) -> SunTimes:
        return cls()


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    """Everything a weather adapter produces in one fetch."""

    current: CurrentConditions = field(default_factory=CurrentConditions)
    daily: tuple[DayForecast, ...] = ()
    hourly: tuple[HourForecast, ...] = ()
    moon_phase: MoonPhase | None = field(default_factory=MoonPhase)

    @classmethod
    def default(cls) -> WeatherSnapshot:
        return cls()


@dataclass(frozen=True, slots=True)
class TideEvent:
    """One high or low tide."""

    time: str
    type: TideType
    height: str


def default_slice_value(slice_: Slice) -> object:
    """Initial value of a slice before any successful fetch."""
    if slice_ is Slice.PROPERTY:
        return PropertySnapshot.default()
    if slice_ is Slice.WEATHER:
        return WeatherSnapshot.default()
    if slice_ is Slice.SUN_TIMES:
        return SunTimes.default()
    return ()
