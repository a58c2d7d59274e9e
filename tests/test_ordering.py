"""Tests for category and zone ordering."""

from rate_report.models import ShippingCategory
from rate_report.ordering import (
    NOT_FOUND,
    compare_categories,
    compare_zones,
    rank,
    sort_categories,
    sort_zones,
)


def category(locale, speed):
    return ShippingCategory(key=f"{locale}-{speed}", locale=locale, speed=speed)


def titles(categories):
    return [f"{c.locale}/{c.speed}" for c in categories]


class TestRank:
    def test_known_values(self):
        assert rank("domestic", ["domestic", "international"]) == 0
        assert rank("international", ["domestic", "international"]) == 1

    def test_unknown_value(self):
        assert rank("mars", ["domestic", "international"]) == NOT_FOUND == -1


class TestSortCategories:
    def test_locale_then_speed(self):
        shuffled = [
            category("international", "expedited"),
            category("domestic", "next day"),
            category("international", "standard"),
            category("domestic", "standard"),
            category("domestic", "expedited"),
            category("domestic", "economy"),
        ]
        assert titles(sort_categories(shuffled)) == [
            "domestic/standard",
            "domestic/economy",
            "domestic/expedited",
            "domestic/next day",
            "international/standard",
            "international/expedited",
        ]

    def test_every_domestic_before_any_international(self):
        shuffled = [
            category("international", "standard"),
            category("domestic", "next day"),
            category("international", "economy"),
            category("domestic", "economy"),
        ]
        locales = [c.locale for c in sort_categories(shuffled)]
        assert locales == ["domestic", "domestic", "international", "international"]

    def test_custom_orderings(self):
        shuffled = [category("domestic", "standard"), category("international", "standard")]
        result = sort_categories(shuffled, locale_ordering=["international", "domestic"])
        assert titles(result) == ["international/standard", "domestic/standard"]

    def test_empty_locale_ordering_is_not_replaced_by_defaults(self):
        # every locale ranks NOT_FOUND, so input order is kept
        shuffled = [category("international", "standard"), category("domestic", "standard")]
        result = sort_categories(shuffled, locale_ordering=[])
        assert titles(result) == ["international/standard", "domestic/standard"]

    def test_empty_speed_ordering_is_not_replaced_by_defaults(self):
        shuffled = [category("domestic", "next day"), category("domestic", "standard")]
        result = sort_categories(shuffled, speed_ordering=[])
        assert titles(result) == ["domestic/next day", "domestic/standard"]

    def test_unknown_locale_sorts_first(self):
        shuffled = [
            category("international", "standard"),
            category("domestic", "standard"),
            category("mars", "standard"),
        ]
        assert titles(sort_categories(shuffled))[0] == "mars/standard"

    def test_unknown_speed_sorts_first_within_locale(self):
        shuffled = [category("domestic", "standard"), category("domestic", "freight")]
        assert titles(sort_categories(shuffled)) == ["domestic/freight", "domestic/standard"]

    def test_two_unknown_locales_compare_equal(self):
        a = category("mars", "next day")
        b = category("venus", "standard")
        assert compare_categories(a, b) == 0
        # Stable sort keeps input order for ties
        assert titles(sort_categories([a, b])) == ["mars/next day", "venus/standard"]


class TestSortZones:
    def test_numeric_zones_sort_numerically(self):
        assert sort_zones({"10", "2", "1", "9"}) == ["1", "2", "9", "10"]

    def test_two_before_ten(self):
        assert compare_zones("2", "10") < 0
        assert compare_zones("10", "2") > 0

    def test_alphabetic_zones_sort_lexicographically(self):
        assert sort_zones({"C", "A", "B"}) == ["A", "B", "C"]

    def test_case_sensitive(self):
        assert sort_zones({"a", "B"}) == ["B", "a"]

    def test_mixed_falls_back_to_string_order(self):
        assert compare_zones("10", "A") < 0
        assert compare_zones("A", "2") > 0

    def test_equal_zones(self):
        assert compare_zones("3", "3") == 0
        assert compare_zones("A", "A") == 0
