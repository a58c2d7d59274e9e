"""Database access for shipping rates.

Reads the rates table either from a PostgreSQL server or from a local SQLite
file. The SQLite schema below is used for local runs and tests.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from rate_report.config import ConnectionSettings
from rate_report.models import RATE_FIELDS, RateRecord

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS rates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    client_id INTEGER NOT NULL,
    locale TEXT,
    shipping_speed TEXT,
    start_weight TEXT,
    end_weight TEXT,
    zone TEXT,
    rate TEXT
);

CREATE INDEX IF NOT EXISTS idx_rates_client ON rates(client_id);
"""

# Rows must come back ordered by weight: weight tiers keep the row order.
RATES_QUERY = (
    f"SELECT {', '.join(RATE_FIELDS)} FROM rates "
    "WHERE client_id = {param} "
    "ORDER BY CAST(start_weight AS NUMERIC)"
)


class RateDatabase:
    """Connection manager and queries for the rates table.

    Use as a context manager (or call close()) so the connection is released
    whether or not the query succeeds.
    """

    def __init__(
        self,
        db_path: Optional[str | Path] = None,
        settings: Optional[ConnectionSettings] = None,
    ):
        self.settings = settings or ConnectionSettings()
        if db_path is None:
            db_path = self.settings.db_path
        self.db_path = Path(db_path) if db_path else None
        self._conn = None

    @property
    def is_sqlite(self) -> bool:
        return self.db_path is not None

    @property
    def conn(self):
        if self._conn is None:
            if self.is_sqlite:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(str(self.db_path))
                self._conn.row_factory = sqlite3.Row
            else:
                self._conn = self._connect_postgres()
        return self._conn

    def _connect_postgres(self):
        s = self.settings
        if not s.host or not s.database:
            raise ConnectionError(
                "No rates database configured. Set DB_HOST and DB_NAME, "
                "or RATES_DB_PATH / --db for a local SQLite file."
            )

        import psycopg2
        import psycopg2.extras

        logger.info(f"Connecting to {s.host}:{s.port}/{s.database}")
        return psycopg2.connect(
            host=s.host,
            user=s.user,
            password=s.password,
            dbname=s.database,
            port=s.port,
            cursor_factory=psycopg2.extras.RealDictCursor,
        )

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def _param(self) -> str:
        return "?" if self.is_sqlite else "%s"

    def migrate(self):
        """Create the rates table if it doesn't exist. SQLite only."""
        if not self.is_sqlite:
            raise RuntimeError("migrate() only manages local SQLite databases")
        self.conn.executescript(SCHEMA_SQL)
        self.conn.commit()

    def insert_rate(
        self,
        client_id: int,
        locale: Optional[str] = None,
        shipping_speed: Optional[str] = None,
        start_weight: Optional[str] = None,
        end_weight: Optional[str] = None,
        zone: Optional[str] = None,
        rate: Optional[str] = None,
        commit: bool = True,
    ) -> int:
        """Insert a rate row and return its id."""
        p = self._param
        cur = self.conn.cursor()
        cur.execute(
            f"""INSERT INTO rates (client_id, {', '.join(RATE_FIELDS)})
            VALUES ({p}, {p}, {p}, {p}, {p}, {p}, {p})""",
            (client_id, locale, shipping_speed, start_weight, end_weight, zone, rate),
        )
        if commit:
            self.conn.commit()
        return cur.lastrowid

    def fetch_rates(self, client_id: int) -> list[RateRecord]:
        """Fetch every rate row for a client, ordered by start weight."""
        cur = self.conn.cursor()
        try:
            cur.execute(RATES_QUERY.format(param=self._param), (client_id,))
            rows = cur.fetchall()
        finally:
            cur.close()

        records = [RateRecord.from_row(row) for row in rows]
        logger.info(f"Fetched {len(records)} rate rows for client {client_id}")
        return records

    def count_rates(self, client_id: Optional[int] = None) -> int:
        cur = self.conn.cursor()
        try:
            if client_id is None:
                cur.execute("SELECT COUNT(*) FROM rates")
            else:
                cur.execute(
                    f"SELECT COUNT(*) FROM rates WHERE client_id = {self._param}",
                    (client_id,),
                )
            row = cur.fetchone()
        finally:
            cur.close()
        return list(row.values())[0] if isinstance(row, dict) else row[0]
