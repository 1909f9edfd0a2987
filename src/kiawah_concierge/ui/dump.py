"""
Developer dump of the state store.

Prints every slice as rich tables after a fetch-all cycle. This is an
inspection aid, not the TV presentation layer.
"""

from __future__ import annotations

from dataclasses import replace

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kiawah_concierge.config.settings import Settings
from kiawah_concierge.domain.models import (
    PropertySnapshot,
    Slice,
    SunTimes,
    TideEvent,
    TideType,
    WeatherSnapshot,
    WifiCredentials,
)
from kiawah_concierge.ports.state_store import StateStorePort
from kiawah_concierge.services.aggregator import FetchCycleReport


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - 1)] + "…"


def _mask(passphrase: str) -> str:
    return "*" * len(passphrase) if passphrase else "-"


def _cycle_panel(report: FetchCycleReport) -> Panel:
    body = Text()
    for name, ok in report.results.items():
        body.append(f"{name}: ", style="bold")
        body.append("ok\n" if ok else "failed\n", style="green" if ok else "red")
    body.append(f"Duration: {report.duration_seconds:.2f}s", style="dim")
    return Panel(body, title="Fetch cycle", border_style="blue", box=box.ROUNDED)


def _property_panel(snapshot: PropertySnapshot, version: int, qr_service_url: str) -> Panel:
    profile = snapshot.profile
    header = Text()
    header.append("Guest: ", style="bold")
    header.append(f"{profile.guest_name}\n")
    header.append("Hero image: ", style="bold")
    if profile.hero_image is not None:
        header.append(f"{len(profile.hero_image.content)} bytes ({profile.hero_image.content_type or '?'})\n")
    else:
        header.append(f"not loaded {_truncate(profile.hero_image_url, 60) or '-'}\n", style="dim")
    header.append("WiFi: ", style="bold")
    header.append(f"{profile.wifi.ssid or '-'} / {_mask(profile.wifi.passphrase)}\n")
    if profile.wifi != WifiCredentials():
        masked = replace(profile.wifi, passphrase=_mask(profile.wifi.passphrase))
        header.append("WiFi QR: ", style="bold")
        header.append(_truncate(masked.qr_code_url(qr_service_url), 120) + "\n", style="dim")

    categories = Table(box=box.MINIMAL_DOUBLE_HEAD, expand=True)
    categories.add_column("Category", style="bold")
    categories.add_column("Icon")
    categories.add_column("Places", justify="right")
    categories.add_column("First place")
    for category in snapshot.categories:
        categories.add_row(
            category.name,
            category.icon,
            str(len(category.places)),
            _truncate(category.places[0].name, 40),
        )
    if not snapshot.categories:
        categories.add_row("-", "-", "-", "-")

    parts: list = [header, categories]
    if snapshot.dining is not None:
        dining = Table(box=box.MINIMAL_DOUBLE_HEAD, expand=True, title=snapshot.dining.title)
        dining.add_column("Location", style="bold")
        dining.add_column("Venues")
        for location, venues in snapshot.dining.venues_by_location():
            dining.add_row(location, _truncate(", ".join(v.name for v in venues), 80))
        parts.append(dining)

    cards = Text()
    cards.append(f"Settle-in cards: {len(snapshot.settle_in_cards)}  ", style="dim")
    cards.append(f"How-do-I cards: {len(snapshot.how_do_i_cards)}", style="dim")
    parts.append(cards)

    return Panel(Group(*parts), title=f"Property (v{version})", border_style="green", box=box.ROUNDED)


def _weather_panel(snapshot: WeatherSnapshot, sun: SunTimes, version: int) -> Panel:
    current = snapshot.current
    header = Text()
    header.append("Now: ", style="bold")
    header.append(f"{current.temperature}° (low {current.low}°) {current.condition or '-'} [{current.icon}]\n")
    header.append("Sun: ", style="bold")
    header.append(f"rise {sun.sunrise}, set {sun.sunset}\n")
    if snapshot.moon_phase is not None:
        moon = snapshot.moon_phase
        header.append("Moon: ", style="bold")
        header.append(f"{moon.name} ({moon.phase:.3f}, {moon.illumination_percent}% lit)\n")

    daily = Table(box=box.MINIMAL_DOUBLE_HEAD, expand=True)
    daily.add_column("Date", style="bold")
    daily.add_column("Hi/Lo", justify="right")
    daily.add_column("Condition")
    daily.add_column("Precip", justify="right")
    daily.add_column("Sunrise/Sunset")
    for day in snapshot.daily:
        daily.add_row(
            day.date.strftime("%a %b %d"),
            f"{day.high}°/{day.low}°",
            f"{day.condition} [{day.icon}]",
            f"{day.precip_chance}%",
            f"{day.sunrise} / {day.sunset}",
        )
    if not snapshot.daily:
        daily.add_row("-", "-", "-", "-", "-")

    parts: list = [header, daily]
    if snapshot.hourly:
        hourly = Table(box=box.MINIMAL_DOUBLE_HEAD, expand=True)
        hourly.add_column("Hour", style="bold")
        hourly.add_column("Temp", justify="right")
        hourly.add_column("Condition")
        hourly.add_column("Precip", justify="right")
        for hour in snapshot.hourly:
            hourly.add_row(
                hour.time.strftime("%I %p").lstrip("0"),
                f"{hour.temperature}°",
                f"{hour.condition} [{hour.icon}]",
                f"{hour.precip_chance}%",
            )
        parts.append(hourly)

    return Panel(Group(*parts), title=f"Weather (v{version})", border_style="cyan", box=box.ROUNDED)


def _tides_panel(events: tuple[TideEvent, ...], version: int) -> Panel:
    t = Table(box=box.MINIMAL_DOUBLE_HEAD, expand=True)
    t.add_column("Time", style="bold")
    t.add_column("Type")
    t.add_column("Height", justify="right")
    for event in events:
        style = "blue" if event.type is TideType.HIGH else "yellow"
        t.add_row(event.time, Text(event.type.value, style=style), event.height)
    if not events:
        t.add_row("-", "-", "-")
    return Panel(t, title=f"Tides (v{version})", border_style="magenta", box=box.ROUNDED)


def render_store(
    store: StateStorePort,
    report: FetchCycleReport,
    settings: Settings,
    *,
    console: Console | None = None,
) -> None:
    """Print the cycle outcome and every slice."""
    console = console or Console()
    console.print(_cycle_panel(report))
    console.print(
        _property_panel(store.get(Slice.PROPERTY), store.version(Slice.PROPERTY), settings.endpoints.qr_code_url)
    )
    console.print(
        _weather_panel(store.get(Slice.WEATHER), store.get(Slice.SUN_TIMES), store.version(Slice.WEATHER))
    )
    console.print(_tides_panel(store.get(Slice.TIDES), store.version(Slice.TIDES)))
