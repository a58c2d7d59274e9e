"""Tests for the workbook exporter."""

from pathlib import Path

import pytest
from openpyxl import load_workbook

from rate_report.errors import ReportError
from rate_report.export import WorkbookExporter
from rate_report.models import RenderedTable


@pytest.fixture
def tables():
    return [
        RenderedTable(
            title="Domestic Standard Rates",
            rows=[
                ["Start Weight", "End Weight", "Zone 1", "Zone 2"],
                ["0", "1", "5.00", "6.50"],
                ["1", "2", "7.00", "N/A"],
            ],
            column_widths=[15, 15, 30, 30],
        ),
        RenderedTable(
            title="International Standard Rates",
            rows=[
                ["Start Weight", "End Weight", "Zone A"],
                ["0", "1", "21.00"],
            ],
            column_widths=[15, 15, 30],
        ),
    ]


@pytest.fixture
def output_path(tmp_path):
    return tmp_path / "output" / "report.xlsx"


class TestWorkbookExporter:
    def test_writes_one_sheet_per_table(self, tables, output_path):
        path = WorkbookExporter(output_path).write(tables)
        assert path == output_path
        assert path.exists()

        wb = load_workbook(path)
        assert wb.sheetnames == ["Domestic Standard Rates", "International Standard Rates"]

    def test_cell_values(self, tables, output_path):
        WorkbookExporter(output_path).write(tables)

        ws = load_workbook(output_path)["Domestic Standard Rates"]
        values = [list(row) for row in ws.iter_rows(values_only=True)]
        assert values == tables[0].rows

    def test_rates_stay_text(self, tables, output_path):
        WorkbookExporter(output_path).write(tables)

        ws = load_workbook(output_path)["Domestic Standard Rates"]
        assert ws["C2"].value == "5.00"
        assert ws["A2"].value == "0"

    def test_column_widths(self, tables, output_path):
        WorkbookExporter(output_path).write(tables)

        ws = load_workbook(output_path)["Domestic Standard Rates"]
        assert ws.column_dimensions["A"].width == 15
        assert ws.column_dimensions["C"].width == 30

    def test_creates_output_directory(self, tables, tmp_path):
        path = tmp_path / "a" / "b" / "report.xlsx"
        WorkbookExporter(path).write(tables)
        assert path.exists()

    def test_no_temp_files_left(self, tables, output_path):
        WorkbookExporter(output_path).write(tables)
        assert [p.name for p in output_path.parent.iterdir()] == ["report.xlsx"]

    def test_empty_tables_raise(self, output_path):
        with pytest.raises(ReportError):
            WorkbookExporter(output_path).write([])
        assert not output_path.exists()

    def test_failed_save_leaves_no_file(self, tables, output_path, monkeypatch):
        from openpyxl import Workbook

        def broken_save(self, filename):
            with open(filename, "wb") as f:
                f.write(b"partial")
            raise OSError("disk full")

        monkeypatch.setattr(Workbook, "save", broken_save)

        with pytest.raises(OSError):
            WorkbookExporter(output_path).write(tables)
        assert not output_path.exists()
        assert list(output_path.parent.iterdir()) == []

    def test_default_path(self):
        assert WorkbookExporter().output_path == Path("output/report.xlsx")
