"""Seed data loader for a local rates database.

Loads rate rows from a YAML seed file into a SQLite rates table, for demos and
local runs without access to the reporting server.

Seed file layout:

    client_id: 1240
    rates:
      - locale: Domestic
        shipping_speed: standard
        start_weight: "0"
        end_weight: "1"
        zones: {"1": "5.00", "2": "6.50"}

Each entry expands to one row per zone. A zone mapped to null becomes a row
with a null rate, which the report skips.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from rate_report.database import RateDatabase
from rate_report.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path("data/seed/sample_rates.yaml")


def _text(value) -> Optional[str]:
    return None if value is None else str(value)


def load_rate_seed(db: RateDatabase, seed_path: Optional[Path] = None) -> dict:
    """Load rate rows from a YAML seed file.

    Args:
        db: Local SQLite rates database. The table is created if needed.
        seed_path: Path to the YAML seed file. Defaults to data/seed/sample_rates.yaml.

    Returns:
        Dict with counts: tiers_loaded, rows_loaded.
    """
    seed_path = seed_path or DEFAULT_SEED_PATH
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")

    with open(seed_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if "client_id" not in data:
        raise ConfigError(f"Seed file {seed_path} has no client_id")
    client_id = int(data["client_id"])

    db.migrate()

    tiers_loaded = 0
    rows_loaded = 0
    for entry in data.get("rates", []):
        for zone, rate in (entry.get("zones") or {}).items():
            db.insert_rate(
                client_id=client_id,
                locale=_text(entry.get("locale")),
                shipping_speed=_text(entry.get("shipping_speed")),
                start_weight=_text(entry.get("start_weight")),
                end_weight=_text(entry.get("end_weight")),
                zone=_text(zone),
                rate=_text(rate),
                commit=False,
            )
            rows_loaded += 1
        tiers_loaded += 1
        logger.debug(
            f"Loaded tier {entry.get('start_weight')}-{entry.get('end_weight')} "
            f"for {entry.get('locale')} / {entry.get('shipping_speed')}"
        )

    db.conn.commit()
    logger.info(
        f"Seed complete: {rows_loaded} rate rows ({tiers_loaded} tiers) "
        f"for client {client_id}"
    )

    return {
        "client_id": client_id,
        "tiers_loaded": tiers_loaded,
        "rows_loaded": rows_loaded,
    }
