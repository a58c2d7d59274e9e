"""Export rendered rate tables to an Excel workbook.

The workbook is saved to a temporary file beside the target and moved into
place once complete, so a failed run never leaves a partial report behind.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from rate_report.errors import ReportError
from rate_report.models import RenderedTable

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = Path("output/report.xlsx")


class WorkbookExporter:
    """Writes one worksheet per rendered table."""

    def __init__(self, output_path: Optional[str | Path] = None):
        self.output_path = Path(output_path) if output_path else DEFAULT_OUTPUT_PATH

    def build_workbook(self, tables: list[RenderedTable]) -> Workbook:
        """Build the in-memory workbook. Sheet order follows the table order."""
        if not tables:
            raise ReportError("No rate categories to export")

        wb = Workbook()
        # Drop the default "Sheet" so the first sheet is the first category
        wb.remove(wb.active)

        for table in tables:
            ws = wb.create_sheet(title=table.title)
            for row in table.rows:
                ws.append(row)

            for i, width in enumerate(table.column_widths, 1):
                ws.column_dimensions[get_column_letter(i)].width = width

        return wb

    def write(self, tables: list[RenderedTable]) -> Path:
        """Write the workbook to output_path.

        Returns:
            Path to the generated workbook.
        """
        wb = self.build_workbook(tables)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = None
        try:
            with tempfile.NamedTemporaryFile(
                delete=False, dir=self.output_path.parent, suffix=".xlsx"
            ) as tmp:
                temp_file = Path(tmp.name)
            wb.save(temp_file)
            os.replace(temp_file, self.output_path)
        except Exception:
            if temp_file is not None and temp_file.exists():
                temp_file.unlink()
            raise
        finally:
            wb.close()

        logger.info(f"Exported {len(tables)} rate sheets to {self.output_path}")
        return self.output_path
