"""Render shipping categories into rectangular sheet tables."""

import logging
from typing import Iterable, Optional

from rate_report.errors import SheetTitleConflictError, SheetTitleTooLongError
from rate_report.models import RenderedTable, ShippingCategory
from rate_report.ordering import sort_categories, sort_zones
from rate_report.utils.normalization import init_cap

logger = logging.getLogger(__name__)

MISSING_RATE = "N/A"
WEIGHT_COLUMN_WIDTH = 15
ZONE_COLUMN_WIDTH = 30
MAX_SHEET_TITLE_LENGTH = 31


def sheet_title(category: ShippingCategory) -> str:
    """E.g. "Domestic Next Day Rates"."""
    return init_cap(f"{category.locale} {category.speed} Rates")


def render_category(
    category: ShippingCategory,
    weight_width: int = WEIGHT_COLUMN_WIDTH,
    zone_width: int = ZONE_COLUMN_WIDTH,
) -> RenderedTable:
    """Build the sheet table for one category.

    Rows follow the category's weight tier order; columns follow the sorted
    zones. A tier without a rate for a zone gets MISSING_RATE in that cell.
    """
    zones = sort_zones(category.zones)

    rows = [["Start Weight", "End Weight"] + [f"Zone {zone}" for zone in zones]]
    for tier in category.weight_tiers.values():
        rows.append(
            [tier.start_weight, tier.end_weight]
            + [tier.zone_rates.get(zone, MISSING_RATE) for zone in zones]
        )

    return RenderedTable(
        title=sheet_title(category),
        rows=rows,
        column_widths=[weight_width, weight_width] + [zone_width] * len(zones),
    )


def build_report(
    categories: Iterable[ShippingCategory],
    locale_ordering: Optional[list[str]] = None,
    speed_ordering: Optional[list[str]] = None,
    weight_width: int = WEIGHT_COLUMN_WIDTH,
    zone_width: int = ZONE_COLUMN_WIDTH,
) -> list[RenderedTable]:
    """Render every category, in report order.

    Raises:
        SheetTitleConflictError: If two categories render to the same title,
            e.g. raw speeds "standard" and "standardintl" under one locale.
        SheetTitleTooLongError: If a title is longer than Excel allows.
    """
    tables = []
    seen_titles = {}

    for category in sort_categories(categories, locale_ordering, speed_ordering):
        table = render_category(category, weight_width, zone_width)
        if len(table.title) > MAX_SHEET_TITLE_LENGTH:
            raise SheetTitleTooLongError(
                f"Sheet title '{table.title}' for category '{category.key}' is "
                f"{len(table.title)} characters (limit {MAX_SHEET_TITLE_LENGTH})"
            )
        # Excel sheet names are case-insensitive
        title_key = table.title.lower()
        if title_key in seen_titles:
            raise SheetTitleConflictError(
                f"Categories '{seen_titles[title_key]}' and '{category.key}' "
                f"both render to sheet '{table.title}'"
            )
        seen_titles[title_key] = category.key
        tables.append(table)
        logger.debug(
            f"Rendered '{table.title}': {len(table.data_rows)} weight tiers, "
            f"{len(category.zones)} zones"
        )

    return tables
