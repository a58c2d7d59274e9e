"""Aggregation of flat rate rows into the category / weight tier / zone model.

Rows are folded in source order in a single pass:
1. Skip rows with any null field
2. Find or create the category for (locale, speed)
3. Record the zone on the category
4. Find or create the weight tier for (start weight, end weight)
5. Record the rate, refusing a second rate for the same zone

Weight tiers are never re-sorted here. Their order is the order the rows
arrive in, so the row source must deliver rows sorted by weight.
"""

import logging
from typing import Iterable

from rate_report.errors import DuplicateRateError
from rate_report.models import RateRecord, ShippingCategory, WeightTier
from rate_report.utils.normalization import normalize_locale, normalize_speed
from rate_report.validation import missing_fields

logger = logging.getLogger(__name__)


class RateAggregator:
    """Builds shipping categories from rate records."""

    def __init__(self):
        self._categories: dict[str, ShippingCategory] = {}
        self.rows_seen = 0
        self.rows_skipped = 0

    @property
    def categories(self) -> dict[str, ShippingCategory]:
        """Categories keyed by raw category key, in first-seen order."""
        return self._categories

    def add(self, record: RateRecord) -> bool:
        """Fold one record into the model.

        Returns:
            True if the record was used, False if it was skipped for null fields.

        Raises:
            DuplicateRateError: If the record's weight tier already has a rate
                for its zone.
        """
        self.rows_seen += 1

        missing = missing_fields(record)
        if missing:
            self.rows_skipped += 1
            logger.debug(f"Skipping rate row with null {', '.join(missing)}: {record}")
            return False

        category = self._get_or_create_category(record)
        category.zones.add(record.zone)

        tier = category.weight_tiers.get(record.weight_tier_key)
        if tier is None:
            tier = WeightTier(
                start_weight=record.start_weight,
                end_weight=record.end_weight,
            )
            category.weight_tiers[record.weight_tier_key] = tier

        if record.zone in tier.zone_rates:
            raise DuplicateRateError(
                category_key=category.key,
                weight_tier_key=tier.key,
                zone=record.zone,
                existing_rate=tier.zone_rates[record.zone],
                new_rate=record.rate,
            )

        tier.zone_rates[record.zone] = record.rate
        return True

    def add_all(self, records: Iterable[RateRecord]) -> dict[str, ShippingCategory]:
        """Fold every record and return the finished categories."""
        for record in records:
            self.add(record)

        logger.info(
            f"Aggregated {self.rows_seen - self.rows_skipped} rate rows into "
            f"{len(self._categories)} categories ({self.rows_skipped} skipped)"
        )
        return self._categories

    def _get_or_create_category(self, record: RateRecord) -> ShippingCategory:
        key = record.category_key
        category = self._categories.get(key)
        if category is None:
            category = ShippingCategory(
                key=key,
                locale=normalize_locale(record.locale),
                speed=normalize_speed(record.shipping_speed),
            )
            self._categories[key] = category
            logger.debug(f"New category {key!r} -> {category.locale} / {category.speed}")
        return category


def aggregate_rates(records: Iterable[RateRecord]) -> dict[str, ShippingCategory]:
    """Aggregate records in one call. See RateAggregator.add for the rules."""
    return RateAggregator().add_all(records)
