"""Data classes for shipping rate records and the aggregated report model."""

from dataclasses import dataclass, field
from typing import Optional


# Columns every rate row must carry for the report, in query order
RATE_FIELDS = (
    "locale",
    "shipping_speed",
    "start_weight",
    "end_weight",
    "zone",
    "rate",
)


def _as_text(value) -> Optional[str]:
    """Keep numeric database values in their textual form."""
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class RateRecord:
    """One flat row from the rates table. Any field may be missing."""
    locale: Optional[str] = None
    shipping_speed: Optional[str] = None
    start_weight: Optional[str] = None
    end_weight: Optional[str] = None
    zone: Optional[str] = None
    rate: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "RateRecord":
        """Build a record from a mapping-like database row."""
        return cls(**{name: _as_text(row[name]) for name in RATE_FIELDS})

    @property
    def category_key(self) -> str:
        return f"{self.locale}-{self.shipping_speed}"

    @property
    def weight_tier_key(self) -> str:
        return f"{self.start_weight}-{self.end_weight}"


@dataclass
class WeightTier:
    """A (start weight, end weight) band and its rate per zone."""
    start_weight: str
    end_weight: str
    zone_rates: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.start_weight}-{self.end_weight}"


@dataclass
class ShippingCategory:
    """A (locale, speed) combination; becomes one sheet of the report.

    ``key`` is built from the raw source values, while ``locale`` and ``speed``
    hold the normalized display values.
    """
    key: str
    locale: str
    speed: str
    zones: set[str] = field(default_factory=set)
    weight_tiers: dict[str, WeightTier] = field(default_factory=dict)


@dataclass
class RenderedTable:
    """A rectangular sheet of strings, header row first."""
    title: str
    rows: list[list[str]]
    column_widths: list[int] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> list[list[str]]:
        return self.rows[1:]
