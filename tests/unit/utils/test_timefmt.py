"""Unit tests for display-time and numeric helpers."""

from datetime import UTC, datetime

import pytest

from kiawah_concierge.utils.numbers import parse_float, round_half_away, to_number
from kiawah_concierge.utils.timefmt import (
    NOAA_TIME_FORMAT,
    OPEN_METEO_TIME_FORMAT,
    display_time,
    get_zone,
    parse_iso_instant,
    reformat_local,
    truncate_to_hour,
)

pytestmark = pytest.mark.unit

NY = get_zone("America/New_York")


class TestDisplayTime:
    @pytest.mark.parametrize(
        "hour, minute, expected",
        [(6, 12, "6:12 AM"), (0, 5, "12:05 AM"), (12, 0, "12:00 PM"), (20, 7, "8:07 PM")],
    )
    def test_twelve_hour_without_leading_zero(self, hour, minute, expected):
        assert display_time(datetime(2024, 6, 1, hour, minute)) == expected

    def test_reformat_open_meteo(self):
        assert reformat_local("2024-06-01T06:12", OPEN_METEO_TIME_FORMAT, NY) == "6:12 AM"

    def test_reformat_noaa(self):
        assert reformat_local("2024-06-01 18:45", NOAA_TIME_FORMAT, NY) == "6:45 PM"

    def test_reformat_keeps_raw_on_failure(self):
        assert reformat_local("sometime", NOAA_TIME_FORMAT, NY) == "sometime"


class TestIsoInstant:
    def test_fractional_seconds_with_offset(self):
        parsed = parse_iso_instant("2024-06-01T10:12:34.500+00:00")
        assert parsed == datetime(2024, 6, 1, 10, 12, 34, 500000, tzinfo=UTC)

    def test_plain_seconds_with_z(self):
        parsed = parse_iso_instant("2024-06-01T10:12:34Z")
        assert parsed == datetime(2024, 6, 1, 10, 12, 34, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["", "2024-06-01", "not a time", None, 12])
    def test_invalid(self, value):
        assert parse_iso_instant(value) is None


def test_truncate_to_hour():
    assert truncate_to_hour(datetime(2024, 6, 1, 9, 59, 59, 1)) == datetime(2024, 6, 1, 9)


class TestNumbers:
    @pytest.mark.parametrize(
        "value, expected", [(2.5, 3), (-2.5, -3), (2.4, 2), (-2.4, -2), (0.5, 1), (71.0, 71)]
    )
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected

    @pytest.mark.parametrize("value", [None, True, "1.0", [], float("nan")])
    def test_to_number_rejects_non_numbers(self, value):
        assert to_number(value) is None

    def test_to_number_accepts_ints_and_floats(self):
        assert to_number(3) == 3.0
        assert to_number(3.5) == 3.5

    def test_parse_float(self):
        assert parse_float("1.23") == 1.23
        assert parse_float("n/a") == 0.0
