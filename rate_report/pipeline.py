"""Pipeline orchestrator for the shipping rate report.

Fetch rows → aggregate into categories → order → render one table per
category → write the workbook. Any failure stops the run; nothing is written
unless every step before the write succeeded.
"""

import logging
from pathlib import Path
from typing import Optional

from rate_report.aggregation import RateAggregator
from rate_report.config import ReportLayout
from rate_report.database import RateDatabase
from rate_report.export import WorkbookExporter
from rate_report.models import RenderedTable
from rate_report.render import build_report

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Builds the rate workbook for one client."""

    def __init__(self, db: RateDatabase, layout: Optional[ReportLayout] = None):
        self.db = db
        self.layout = layout or ReportLayout()
        self.aggregator = RateAggregator()

    def build_tables(self, client_id: Optional[int] = None) -> list[RenderedTable]:
        """Run every step except the file write.

        Raises:
            DuplicateRateError: If the source holds two rates for one cell.
            SheetTitleConflictError: If two categories share a sheet title.
        """
        client_id = self.layout.client_id if client_id is None else client_id
        logger.info(f"=== Building rate report for client {client_id} ===")

        records = self.db.fetch_rates(client_id)

        self.aggregator = RateAggregator()
        categories = self.aggregator.add_all(records)

        return build_report(
            categories.values(),
            locale_ordering=self.layout.locale_ordering,
            speed_ordering=self.layout.speed_ordering,
            weight_width=self.layout.weight_column_width,
            zone_width=self.layout.zone_column_width,
        )

    def run(
        self,
        client_id: Optional[int] = None,
        output_path: Optional[str | Path] = None,
    ) -> dict:
        """Generate the workbook.

        Returns:
            Summary dict with row counts, sheet titles and the output path.
        """
        tables = self.build_tables(client_id)

        exporter = WorkbookExporter(output_path or self.layout.output_path)
        path = exporter.write(tables)

        result = {
            "status": "completed",
            "rows_fetched": self.aggregator.rows_seen,
            "rows_skipped": self.aggregator.rows_skipped,
            "categories": len(self.aggregator.categories),
            "sheets": [t.title for t in tables],
            "output_path": path,
        }
        logger.info(
            f"=== Completed rate report: {len(tables)} sheets from "
            f"{result['rows_fetched']} rows ({result['rows_skipped']} skipped) ==="
        )
        return result
