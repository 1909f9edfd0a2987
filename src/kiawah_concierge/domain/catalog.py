"""
Static catalog data and category derivation.

Lookup tables and instructional content live here as plain data so they
can be edited (or externalized) without touching control flow.
"""

from __future__ import annotations

from collections.abc import Iterable

from kiawah_concierge.domain.models import Category, HowDoICard, Place, SettleInCard

# =============================================================================
# Categories
# =============================================================================

CATEGORY_ORDER: tuple[str, ...] = ("Dining", "Activities", "Golf", "Shopping", "Medical")

DEFAULT_CATEGORY = "Other"

CATEGORY_ICONS: dict[str, str] = {
    "dining": "fork.knife",
    "activities": "figure.hiking",
    "golf": "figure.golf",
    "shopping": "bag.fill",
    "medical": "cross.case.fill",
}

DEFAULT_CATEGORY_ICON = "mappin.circle.fill"


def icon_for(category: str) -> str:
    """Icon for a category name (case-insensitive, never fails)."""
    return CATEGORY_ICONS.get(category.lower(), DEFAULT_CATEGORY_ICON)


def group_places(places: Iterable[Place]) -> dict[str, list[Place]]:
    """
    Group places by category tag, case-insensitively.

    Each group is keyed by the first spelling of its tag seen, in
    first-appearance order.
    """
    names: dict[str, str] = {}
    grouped: dict[str, list[Place]] = {}
    for place in places:
        tag = place.category or DEFAULT_CATEGORY
        name = names.setdefault(tag.lower(), tag)
        grouped.setdefault(name, []).append(place)
    return grouped


def build_categories(
    places: Iterable[Place],
    order: tuple[str, ...] = CATEGORY_ORDER,
) -> list[Category]:
    """
    Derive the ordered category list.

    Preferred categories come first, named as in ``order`` and matched
    case-insensitively against the source tags. Tags outside the preferred
    order follow in grouping order. Empty groups never produce a category.
    """
    grouped = {tag.lower(): (tag, members) for tag, members in group_places(places).items()}

    categories: list[Category] = []
    for name in order:
        _, members = grouped.pop(name.lower(), (name, []))
        if members:
            categories.append(Category(name=name, icon=icon_for(name), places=tuple(members)))

    for tag, members in grouped.values():
        if members:
            categories.append(Category(name=tag, icon=icon_for(tag), places=tuple(members)))

    return categories


# =============================================================================
# Dining
# =============================================================================

DINING_LOCATION_ORDER: tuple[str, ...] = (
    "The Sanctuary",
    "The Ocean Course Clubhouse",
    "Turtle Point Clubhouse",
    "Cougar Point Clubhouse",
    "Osprey Point Clubhouse",
    "Night Heron Park",
    "The Treehouse Activity Center",
)

# =============================================================================
# Instructional cards
# =============================================================================

SETTLE_IN_CARDS: tuple[SettleInCard, ...] = (
    SettleInCard(
        title="Check Out Instructions",
        icon="door.right.hand.open",
        content=(
            "Check out by 10 AM. Please strip all beds and start the dishwasher. "
            "Take trash to the bins at the end of the driveway. "
            "Leave keys on the kitchen counter."
        ),
    ),
    SettleInCard(
        title="Emergency Info",
        icon="phone.fill",
        content=(
            "Property Manager: (843) 555-1234\n"
            "After Hours Emergency: (843) 555-5678\n"
            "Kiawah Island Security: (843) 768-5566\n"
            "Alarm Code: 1234"
        ),
    ),
    SettleInCard(
        title="Parking & Gate Code",
        icon="car.fill",
        content=(
            "Main Gate Code: #4521\n"
            "Park in the driveway only — max 2 vehicles.\n"
            "Guest passes available at the gate house for visitors."
        ),
    ),
    SettleInCard(
        title="Trash & Recycling",
        icon="trash.fill",
        content=(
            "Trash pickup is Tuesday morning. Bins are in the garage — "
            "roll them to the curb by 7 AM Monday night.\n"
            "Blue bin: recycling. Green bin: trash.\n"
            "No glass in recycling."
        ),
    ),
    SettleInCard(
        title="Pool & Hot Tub",
        icon="figure.pool.swim",
        content=(
            "Pool hours: 8 AM – 10 PM\n"
            "Hot tub: replace cover after each use.\n"
            "Heater controls are on the back wall panel near the outdoor shower.\n"
            "No glass near the pool area."
        ),
    ),
)

HOW_DO_I_CARDS: tuple[HowDoICard, ...] = (
    HowDoICard(
        title="Thermostat",
        icon="thermometer.medium",
        instructions=(
            "The Ecobee thermostat is in the main hallway.\n\n"
            "• Tap the screen to wake it up\n"
            "• Swipe up/down to adjust temperature\n"
            "• The system is set to auto — it will heat or cool as needed\n"
            "• Please keep between 68°–76° to avoid excessive energy use\n"
            "• If the screen is blank, check the breaker labeled 'HVAC' in the garage panel"
        ),
    ),
    HowDoICard(
        title="Ceiling Fans",
        icon="fan.fill",
        instructions=(
            "Each ceiling fan has a small remote control mounted on the wall nearby.\n\n"
            "• Top button: Fan on/off\n"
            "• Middle buttons: Speed (low / medium / high)\n"
            "• Bottom button: Light on/off\n"
            "• If a remote doesn't work, try replacing the battery (CR2032) — "
            "spares are in the kitchen junk drawer"
        ),
    ),
    HowDoICard(
        title="Smart Door Lock",
        icon="lock.fill",
        instructions=(
            "The front door uses a Schlage smart lock.\n\n"
            "• Your entry code is the last 4 digits of your phone number + 00\n"
            "• Press the Schlage button, then enter your code\n"
            "• To lock: just press the Schlage button once\n"
            "• If the lock beeps 3 times, batteries are low — replacements are under the kitchen sink\n"
            "• The deadbolt can always be turned manually from inside"
        ),
    ),
    HowDoICard(
        title="TV & Apple TV",
        icon="appletv.fill",
        instructions=(
            "Each TV is controlled by the Apple TV remote (the small silver one).\n\n"
            "• Press any button to wake the TV\n"
            "• Use the touch surface on the remote to navigate\n"
            "• Press Menu to go back\n"
            "• For streaming apps: select from the home screen or use the dock buttons in this app\n"
            "• Volume is controlled by the TV remote (the larger black remote)"
        ),
    ),
    HowDoICard(
        title="Washer & Dryer",
        icon="washer.fill",
        instructions=(
            "The washer and dryer are in the laundry room off the kitchen.\n\n"
            "• Washer: Turn the dial to 'Normal', press Start\n"
            "• Dryer: Turn the dial to 'Auto Dry', press Start\n"
            "• Detergent pods are on the shelf above the washer\n"
            "• Please clean the dryer lint trap after each use\n"
            "• If the washer won't start, make sure the door is fully closed until it clicks"
        ),
    ),
    HowDoICard(
        title="Grill",
        icon="flame.fill",
        instructions=(
            "The gas grill is on the back deck.\n\n"
            "• Open the propane tank valve (turn counter-clockwise)\n"
            "• Open the grill lid before lighting\n"
            "• Turn burner knobs to 'High' and press the igniter button\n"
            "• Allow 10 minutes to preheat\n"
            "• When done: turn all burners off, then close the propane valve\n"
            "• Please brush the grates after use — brush is hanging on the side"
        ),
    ),
)
