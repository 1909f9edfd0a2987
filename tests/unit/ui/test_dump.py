"""Unit tests for the rich store dump."""

import pytest
from rich.console import Console

from kiawah_concierge.domain.models import GuestProfile, PropertySnapshot, Slice, TideEvent, TideType, WifiCredentials
from kiawah_concierge.services.aggregator import FetchCycleReport
from kiawah_concierge.ui.dump import render_store

pytestmark = pytest.mark.unit


def _render(store, settings, report=None) -> str:
    console = Console(record=True, width=140, color_system=None)
    render_store(store, report or FetchCycleReport(results={"property": False}), settings, console=console)
    return console.export_text()


class TestRenderStore:
    def test_defaults_render(self, store, settings):
        text = _render(store, settings)

        assert "property: failed" in text
        assert "Guest: Guest" in text
        assert "Property (v0)" in text
        assert "Tides (v0)" in text

    @pytest.mark.asyncio
    async def test_passphrase_is_masked(self, store, settings):
        profile = GuestProfile(guest_name="Smith Family", wifi=WifiCredentials(ssid="Kiawah", passphrase="SandDollar42"))
        await store.claim(Slice.PROPERTY, "property").commit(PropertySnapshot(profile=profile))
        await store.claim(Slice.TIDES, "tides").commit((TideEvent("6:12 AM", TideType.HIGH, "5.9 ft"),))

        text = _render(store, settings, FetchCycleReport(results={"property": True, "tides": True}))

        assert "Smith Family" in text
        assert "Kiawah / ************" in text
        assert "SandDollar42" not in text
        assert "6:12 AM" in text and "5.9 ft" in text
