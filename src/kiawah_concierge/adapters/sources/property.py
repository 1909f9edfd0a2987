"""
Property feed adapter.

Decodes the rental webhook payload (guest profile, WiFi, places, optional
dining section), derives the category list and attaches the static house
cards. Writes ``Slice.PROPERTY``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.domain.catalog import HOW_DO_I_CARDS, SETTLE_IN_CARDS, build_categories
from kiawah_concierge.domain.errors import DecodeError, SourceError
from kiawah_concierge.domain.models import (
    DiningSection,
    DiningVenue,
    GoogleReview,
    GuestProfile,
    Place,
    PropertySnapshot,
    Slice,
    WifiCredentials,
)
from kiawah_concierge.observability.logging import get_logger

logger = get_logger(__name__)

SOURCE_NAME = "property"


# =============================================================================
# Wire schema
# =============================================================================


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PlaceWire(_Wire):
    name: str
    type: str | None = None
    description: str
    address: str
    image_url: str = Field(alias="imageURL")


class GoogleReviewWire(BaseModel):
    # Reviews come straight from Google and keep its snake_case keys
    model_config = ConfigDict(extra="ignore")

    author_name: str
    author_photo: str | None = None
    rating: int
    text: str
    relative_time: str


class DiningVenueWire(_Wire):
    id: str
    name: str
    location: str
    cuisines: list[str]
    price: str
    meal_times: list[str]
    short_description: str
    hero_image: str
    logo_image: str
    hours: str
    reservation_required: bool | None = None
    reservation_phone: str
    attire: str
    google_rating: float | None = None
    google_review_count: int | None = None
    google_reviews: list[GoogleReviewWire] | None = None


class DiningSectionWire(_Wire):
    title: str
    intro: str
    hero_image: str
    venues: list[DiningVenueWire]


class RentalDataWire(_Wire):
    guest_name: str
    hero_image: str
    wifi_ssid: str = Field(alias="wifiSSID")
    wifi_pass: str = Field(alias="wifiPass")
    places: list[PlaceWire]
    dining: DiningSectionWire | None = None


# =============================================================================
# Mapping
# =============================================================================


def _to_venue(wire: DiningVenueWire) -> DiningVenue:
    reviews = None
    if wire.google_reviews is not None:
        reviews = tuple(
            GoogleReview(
                author_name=r.author_name,
                rating=r.rating,
                text=r.text,
                relative_time=r.relative_time,
                author_photo=r.author_photo,
            )
            for r in wire.google_reviews
        )
    return DiningVenue(
        id=wire.id,
        name=wire.name,
        location=wire.location,
        cuisines=tuple(wire.cuisines),
        price=wire.price,
        meal_times=tuple(wire.meal_times),
        short_description=wire.short_description,
        hero_image=wire.hero_image,
        logo_image=wire.logo_image,
        hours=wire.hours,
        reservation_phone=wire.reservation_phone,
        attire=wire.attire,
        reservation_required=wire.reservation_required,
        google_rating=wire.google_rating,
        google_review_count=wire.google_review_count,
        google_reviews=reviews,
    )


def parse_property_payload(payload: Any) -> PropertySnapshot:
    """
    Normalize a decoded property feed body.

    The hero image is not fetched here; ``profile.hero_image`` is None.

    Raises:
        DecodeError: The payload does not match the feed schema.
    """
    if not isinstance(payload, dict):
        raise DecodeError("Property feed body is not a JSON object", source=SOURCE_NAME)
    try:
        wire = RentalDataWire.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Property feed does not match schema: {e.error_count()} error(s)",
            source=SOURCE_NAME,
            details={"errors": [err["loc"] for err in e.errors()]},
        ) from e

    places = tuple(
        Place(
            name=p.name,
            description=p.description,
            address=p.address,
            image_url=p.image_url,
            category=p.type,
        )
        for p in wire.places
    )

    dining = None
    if wire.dining is not None:
        dining = DiningSection(
            title=wire.dining.title,
            intro=wire.dining.intro,
            hero_image=wire.dining.hero_image,
            venues=tuple(_to_venue(v) for v in wire.dining.venues),
        )

    return PropertySnapshot(
        profile=GuestProfile(
            guest_name=wire.guest_name,
            hero_image_url=wire.hero_image,
            wifi=WifiCredentials(ssid=wire.wifi_ssid, passphrase=wire.wifi_pass),
        ),
        places=places,
        categories=tuple(build_categories(places)),
        dining=dining,
        settle_in_cards=SETTLE_IN_CARDS,
        how_do_i_cards=HOW_DO_I_CARDS,
    )


def _is_fetchable(url: str) -> bool:
    return url.startswith(("http://", "https://"))


# =============================================================================
# Adapter
# =============================================================================


class PropertyAdapter(SourceAdapter):
    """Fetches the rental webhook and owns the property slice."""

    name = SOURCE_NAME
    slices = (Slice.PROPERTY,)

    async def load(self) -> dict[Slice, Any]:
        payload = await self._http.get_json(self._settings.endpoints.property_feed_url, source=self.name)
        snapshot = await self.parse_off_loop(parse_property_payload, payload)

        url = snapshot.profile.hero_image_url
        if url and _is_fetchable(url):
            try:
                image = await self._http.get_bytes(url, source=self.name)
            except SourceError as e:
                # The rest of the profile stays valid without the image
                logger.warning(f"Hero image unavailable, continuing without it: {e.message}")
            else:
                snapshot = replace(snapshot, profile=replace(snapshot.profile, hero_image=image))

        logger.info(
            f"Property feed: guest={snapshot.profile.guest_name!r}, "
            f"{len(snapshot.places)} places in {len(snapshot.categories)} categories, "
            f"dining={'yes' if snapshot.dining else 'no'}"
        )
        return {Slice.PROPERTY: snapshot}
