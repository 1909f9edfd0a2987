"""Unit tests for the Open-Meteo weather adapter."""

from datetime import UTC, date, datetime, timedelta

import pytest

from kiawah_concierge.adapters.sources.open_meteo import (
    OpenMeteoWeatherAdapter,
    build_params,
    parse_daily,
    parse_hourly,
    parse_open_meteo,
)
from kiawah_concierge.config.settings import WeatherSettings
from kiawah_concierge.domain.errors import DecodeError
from kiawah_concierge.domain.models import Slice, SunTimes, WeatherSnapshot
from kiawah_concierge.utils.timefmt import get_zone, truncate_to_hour
from tests.conftest import FIXED_NOW

pytestmark = pytest.mark.unit

NY = get_zone("America/New_York")


def hourly_block(start: str = "2024-06-01T00:00", hours: int = 24) -> dict:
    first = datetime.fromisoformat(start)
    times = [(first + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]
    return {
        "time": times,
        "temperature_2m": [70.0 + i * 0.5 for i in range(hours)],
        "weather_code": [0] * hours,
        "precipitation_probability": [10] * hours,
    }


def daily_block(days: int = 7) -> dict:
    dates = [(date(2024, 6, 1) + timedelta(days=i)).isoformat() for i in range(days)]
    return {
        "time": dates,
        "temperature_2m_max": [88.4 + i for i in range(days)],
        "temperature_2m_min": [72.5 + i for i in range(days)],
        "weather_code": [2, 61, 3, 0, 95, 80, 1][:days],
        "precipitation_probability_max": [20, 80, 10, 0, 60, 40, 5][:days],
        "sunrise": [f"{d}T06:12" for d in dates],
        "sunset": [f"{d}T20:24" for d in dates],
    }


def payload() -> dict:
    return {
        "current": {"temperature_2m": 81.5, "weather_code": 2, "is_day": 1},
        "hourly": hourly_block(),
        "daily": daily_block(),
    }


class TestHourly:
    def test_at_most_eight_none_in_past(self):
        hours = parse_hourly(hourly_block(), FIXED_NOW, NY)

        current_hour = truncate_to_hour(FIXED_NOW.astimezone(NY))
        assert len(hours) == 8
        assert all(truncate_to_hour(h.time) >= current_hour for h in hours)
        # 09:30 local: the 09:00 hour still counts as current
        assert hours[0].time.hour == 9
        assert [h.time.hour for h in hours] == list(range(9, 17))

    def test_day_night_window(self):
        late = datetime(2024, 6, 2, 0, 30, tzinfo=UTC)  # 20:30 local
        hours = parse_hourly(hourly_block(), late, NY)

        assert [h.time.hour for h in hours] == [20, 21, 22, 23]
        assert all(h.icon == "moon.fill" for h in hours)

    def test_day_icons_between_six_and_twenty(self):
        early = datetime(2024, 6, 1, 9, 0, tzinfo=UTC)  # 05:00 local
        hours = parse_hourly(hourly_block(), early, NY)
        assert hours[0].time.hour == 5 and hours[0].icon == "moon.fill"
        assert hours[1].time.hour == 6 and hours[1].icon == "sun.max.fill"

    def test_malformed_entries_are_skipped(self):
        block = hourly_block()
        block["time"][10] = "garbage"
        block["temperature_2m"][11] = None

        hours = parse_hourly(block, FIXED_NOW, NY)

        assert 10 not in [h.time.hour for h in hours]
        assert 11 not in [h.time.hour for h in hours]
        assert len(hours) == 8

    def test_rounding_half_away_from_zero(self):
        hours = parse_hourly(hourly_block(), FIXED_NOW, NY)
        # 09:00 temperature is 70 + 9 * 0.5 = 74.5
        assert hours[0].temperature == 75

    def test_limit_zero(self):
        assert parse_hourly(hourly_block(), FIXED_NOW, NY, limit=0) == []


class TestDaily:
    def test_seven_days_with_display_sun_times(self):
        days = parse_daily(daily_block(), NY, 7)

        assert len(days) == 7
        assert days[0].date == date(2024, 6, 1)
        assert days[0].high == 88
        assert days[0].low == 73
        assert days[0].sunrise == "6:12 AM"
        assert days[0].sunset == "8:24 PM"
        assert days[1].condition == "Light Rain"
        assert days[1].icon == "cloud.sun.rain.fill"

    def test_shortest_array_bounds_the_days(self):
        block = daily_block()
        block["sunset"] = block["sunset"][:3]
        assert len(parse_daily(block, NY, 7)) == 3

    def test_bad_date_and_null_entries_skipped(self):
        block = daily_block()
        block["time"][1] = "June 2nd"
        block["temperature_2m_max"][2] = None

        days = parse_daily(block, NY, 7)

        assert [d.date.day for d in days] == [1, 4, 5, 6, 7]

    def test_unparseable_sun_time_kept_raw(self):
        block = daily_block()
        block["sunrise"][0] = "dawn"
        assert parse_daily(block, NY, 7)[0].sunrise == "dawn"


class TestParseOpenMeteo:
    def test_full_payload(self):
        weather, sun = parse_open_meteo(payload(), FIXED_NOW, NY)

        assert weather.current.temperature == 82
        assert weather.current.low == 73
        assert weather.current.condition == "Partly Cloudy"
        assert weather.current.icon == "cloud.sun.fill"
        assert len(weather.daily) == 7
        assert len(weather.hourly) == 8
        assert weather.moon_phase is not None
        assert sun == SunTimes("6:12 AM", "8:24 PM")

    def test_missing_current_block(self):
        body = payload()
        del body["current"]

        weather, _ = parse_open_meteo(body, FIXED_NOW, NY)

        assert weather.current.temperature == 0
        assert weather.current.condition == "Clear"
        assert weather.current.icon == "sun.max.fill"

    def test_night_current_icon(self):
        body = payload()
        body["current"]["is_day"] = 0
        weather, _ = parse_open_meteo(body, FIXED_NOW, NY)
        assert weather.current.icon == "cloud.moon.fill"

    def test_empty_blocks_give_defaults(self):
        weather, sun = parse_open_meteo({}, FIXED_NOW, NY)
        assert weather.daily == ()
        assert weather.hourly == ()
        assert weather.current.low == 0
        assert sun == SunTimes.default()

    def test_custom_limits(self):
        settings = WeatherSettings(forecast_days=3, hourly_limit=2)
        weather, _ = parse_open_meteo(payload(), FIXED_NOW, NY, settings)
        assert len(weather.daily) == 3
        assert len(weather.hourly) == 2

    @pytest.mark.parametrize("body", [[], "text", None, 3])
    def test_non_object_is_decode_error(self, body):
        with pytest.raises(DecodeError):
            parse_open_meteo(body, FIXED_NOW, NY)


class TestAdapter:
    @pytest.mark.asyncio
    async def test_commits_weather_and_sun_times(self, settings, store, event_bus, fake_http, clock):
        fake_http.route(settings.endpoints.open_meteo_url, payload())
        adapter = OpenMeteoWeatherAdapter(settings, fake_http, store, event_bus, clock=clock)

        assert await adapter.refresh() is True

        weather = store.get(Slice.WEATHER)
        assert isinstance(weather, WeatherSnapshot)
        assert weather.current.temperature == 82
        assert store.get(Slice.SUN_TIMES) == SunTimes("6:12 AM", "8:24 PM")
        assert store.version(Slice.WEATHER) == 1
        assert store.version(Slice.SUN_TIMES) == 1

    @pytest.mark.asyncio
    async def test_request_parameters(self, settings, store, event_bus, fake_http, clock):
        fake_http.route(settings.endpoints.open_meteo_url, payload())
        adapter = OpenMeteoWeatherAdapter(settings, fake_http, store, event_bus, clock=clock)

        await adapter.refresh()

        params = fake_http.params_for(settings.endpoints.open_meteo_url)
        assert params == build_params(settings)
        assert params["latitude"] == 32.6082
        assert params["longitude"] == -80.0848
        assert params["timezone"] == "America/New_York"
        assert params["forecast_days"] == 7
        assert params["temperature_unit"] == "fahrenheit"
        assert "precipitation_probability_max" in params["daily"]

    @pytest.mark.asyncio
    async def test_failure_leaves_slices_at_default(self, settings, store, event_bus, fake_http, clock):
        adapter = OpenMeteoWeatherAdapter(settings, fake_http, store, event_bus, clock=clock)

        assert await adapter.refresh() is False

        assert store.get(Slice.WEATHER) == WeatherSnapshot.default()
        assert store.get(Slice.SUN_TIMES) == SunTimes.default()
        assert store.version(Slice.WEATHER) == 0
