"""Tests for the rate seed loader."""

from pathlib import Path

import pytest

from rate_report.database import RateDatabase
from rate_report.errors import ConfigError
from rate_report.seed import load_rate_seed

SAMPLE_SEED = Path(__file__).parent.parent / "data" / "seed" / "sample_rates.yaml"


@pytest.fixture
def db(tmp_path):
    db = RateDatabase(tmp_path / "seed.db")
    yield db
    db.close()


class TestLoadRateSeed:
    def test_expands_one_row_per_zone(self, db, tmp_path):
        seed_file = tmp_path / "rates.yaml"
        seed_file.write_text(
            "client_id: 5\n"
            "rates:\n"
            "  - {locale: Domestic, shipping_speed: Standard, start_weight: '0', end_weight: '1',\n"
            "     zones: {'1': '5.00', '2': '6.50'}}\n"
            "  - {locale: Domestic, shipping_speed: Standard, start_weight: '1', end_weight: '2',\n"
            "     zones: {'1': '7.00'}}\n"
        )
        counts = load_rate_seed(db, seed_file)

        assert counts == {"client_id": 5, "tiers_loaded": 2, "rows_loaded": 3}
        records = db.fetch_rates(5)
        assert [(r.start_weight, r.zone, r.rate) for r in records] == [
            ("0", "1", "5.00"),
            ("0", "2", "6.50"),
            ("1", "1", "7.00"),
        ]

    def test_null_rate_loaded_as_null(self, db, tmp_path):
        seed_file = tmp_path / "rates.yaml"
        seed_file.write_text(
            "client_id: 5\n"
            "rates:\n"
            "  - {locale: Domestic, shipping_speed: Economy, start_weight: '0', end_weight: '1',\n"
            "     zones: {'3': null}}\n"
        )
        load_rate_seed(db, seed_file)
        assert db.fetch_rates(5)[0].rate is None

    def test_missing_file(self, db, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_rate_seed(db, tmp_path / "nope.yaml")

    def test_missing_client_id(self, db, tmp_path):
        seed_file = tmp_path / "rates.yaml"
        seed_file.write_text("rates: []\n")
        with pytest.raises(ConfigError):
            load_rate_seed(db, seed_file)

    def test_sample_seed_file(self, db):
        counts = load_rate_seed(db, SAMPLE_SEED)
        assert counts["client_id"] == 1240
        assert db.count_rates(1240) == counts["rows_loaded"]
