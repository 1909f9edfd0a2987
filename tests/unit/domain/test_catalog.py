"""Unit tests for category derivation and the static catalog."""

import pytest

from kiawah_concierge.domain.catalog import (
    CATEGORY_ORDER,
    DEFAULT_CATEGORY_ICON,
    HOW_DO_I_CARDS,
    SETTLE_IN_CARDS,
    build_categories,
    group_places,
    icon_for,
)
from kiawah_concierge.domain.models import Place

pytestmark = pytest.mark.unit


def make_place(name: str, category: str | None) -> Place:
    return Place(
        name=name,
        description=f"{name} description",
        address="1 Sea Pines Dr",
        image_url=f"https://img.example.com/{name}.jpg",
        category=category,
    )


class TestIconFor:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Dining", "fork.knife"),
            ("dining", "fork.knife"),
            ("DINING", "fork.knife"),
            ("Activities", "figure.hiking"),
            ("golf", "figure.golf"),
            ("Shopping", "bag.fill"),
            ("mEdIcAl", "cross.case.fill"),
        ],
    )
    def test_known_names_case_insensitive(self, name, expected):
        assert icon_for(name) == expected

    @pytest.mark.parametrize("name", ["Other", "Beaches", "", "dining "])
    def test_unknown_names_fall_back(self, name):
        assert icon_for(name) == DEFAULT_CATEGORY_ICON


class TestGroupPlaces:
    def test_missing_tag_becomes_other(self):
        grouped = group_places([make_place("a", None), make_place("b", "Golf")])
        assert list(grouped) == ["Other", "Golf"]
        assert [p.name for p in grouped["Other"]] == ["a"]

    def test_keeps_first_appearance_order(self):
        grouped = group_places(
            [make_place("a", "Golf"), make_place("b", "Dining"), make_place("c", "Golf")]
        )
        assert list(grouped) == ["Golf", "Dining"]
        assert [p.name for p in grouped["Golf"]] == ["a", "c"]

    def test_tags_compare_case_insensitively(self):
        grouped = group_places([make_place("a", "Beach"), make_place("b", "BEACH"), make_place("c", None)])
        assert list(grouped) == ["Beach", "Other"]
        assert [p.name for p in grouped["Beach"]] == ["a", "b"]


class TestBuildCategories:
    def test_preferred_order_skips_absent_categories(self):
        places = [make_place("g", "Golf"), make_place("s", "Shopping"), make_place("d", "Dining")]

        categories = build_categories(places)

        assert [c.name for c in categories] == ["Dining", "Golf", "Shopping"]
        assert all(c.places for c in categories)

    def test_match_is_case_insensitive_and_uses_preferred_name(self):
        categories = build_categories([make_place("d", "dining")])

        assert [c.name for c in categories] == ["Dining"]
        assert categories[0].icon == "fork.knife"

    def test_unknown_categories_appended_in_grouping_order(self):
        places = [
            make_place("b", "Beaches"),
            make_place("m", "Medical"),
            make_place("o", None),
            make_place("a", "Activities"),
        ]

        categories = build_categories(places)

        assert [c.name for c in categories] == ["Activities", "Medical", "Beaches", "Other"]
        assert categories[-1].icon == DEFAULT_CATEGORY_ICON

    def test_differently_cased_tags_share_one_category(self):
        places = [
            make_place("a", "Dining"),
            make_place("b", "dining"),
            make_place("c", "Beach"),
            make_place("d", "beach"),
        ]

        categories = build_categories(places)

        assert [c.name for c in categories] == ["Dining", "Beach"]
        assert [[p.name for p in c.places] for c in categories] == [["a", "b"], ["c", "d"]]

    def test_preferred_name_wins_over_source_casing(self):
        places = [make_place("a", "golf"), make_place("b", "GOLF")]

        categories = build_categories(places)

        assert [c.name for c in categories] == ["Golf"]
        assert [p.name for p in categories[0].places] == ["a", "b"]

    def test_no_places_no_categories(self):
        assert build_categories([]) == []

    def test_cover_image_is_first_place_image(self):
        categories = build_categories([make_place("first", "Golf"), make_place("second", "Golf")])
        assert categories[0].cover_image_url == "https://img.example.com/first.jpg"

    def test_default_order(self):
        assert CATEGORY_ORDER == ("Dining", "Activities", "Golf", "Shopping", "Medical")


def test_static_cards_present():
    assert len(SETTLE_IN_CARDS) == 5
    assert len(HOW_DO_I_CARDS) == 6
    assert SETTLE_IN_CARDS[0].title == "Check Out Instructions"
    assert all(card.title and card.icon and card.content for card in SETTLE_IN_CARDS)
    assert all(card.title and card.icon and card.instructions for card in HOW_DO_I_CARDS)
