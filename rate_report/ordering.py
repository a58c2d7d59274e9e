"""Presentation ordering for rate categories and zones.

Categories follow fixed reference sequences for locale and speed. Zones are
strings that may be numeric ("1", "10") or alphabetic ("A"); numeric zones are
compared as numbers so "2" comes before "10".
"""

from functools import cmp_to_key
from typing import Iterable, Optional, Sequence

from rate_report.models import ShippingCategory
from rate_report.utils.normalization import parse_zone_number

LOCALE_ORDERING = ["domestic", "international"]
SPEED_ORDERING = ["standard", "economy", "expedited", "next day"]

# Rank of a value missing from its reference sequence
NOT_FOUND = -1


def rank(value: str, ordering: Sequence[str]) -> int:
    """Position of value in ordering, or NOT_FOUND."""
    try:
        return list(ordering).index(value)
    except ValueError:
        return NOT_FOUND


def compare_categories(
    a: ShippingCategory,
    b: ShippingCategory,
    locale_ordering: Sequence[str] = LOCALE_ORDERING,
    speed_ordering: Sequence[str] = SPEED_ORDERING,
) -> int:
    """Order by locale rank, then by speed rank within a locale.

    Unknown values rank as NOT_FOUND, ahead of every known value. Two
    different unknown locales compare equal without looking at speed.
    """
    if a.locale != b.locale:
        return rank(a.locale, locale_ordering) - rank(b.locale, locale_ordering)
    return rank(a.speed, speed_ordering) - rank(b.speed, speed_ordering)


def sort_categories(
    categories: Iterable[ShippingCategory],
    locale_ordering: Optional[Sequence[str]] = None,
    speed_ordering: Optional[Sequence[str]] = None,
) -> list[ShippingCategory]:
    """Return categories in report order. Ties keep their input order."""
    if locale_ordering is None:
        locale_ordering = LOCALE_ORDERING
    if speed_ordering is None:
        speed_ordering = SPEED_ORDERING
    return sorted(
        categories,
        key=cmp_to_key(
            lambda a, b: compare_categories(a, b, locale_ordering, speed_ordering)
        ),
    )


def compare_zones(a: str, b: str) -> int:
    """Numeric comparison when both zones are numbers, otherwise plain string order."""
    num_a = parse_zone_number(a)
    num_b = parse_zone_number(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)

    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def sort_zones(zones: Iterable[str]) -> list[str]:
    return sorted(zones, key=cmp_to_key(compare_zones))
