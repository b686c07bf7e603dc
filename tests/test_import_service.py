"""Tests for ImportService spreadsheet import/export."""

import csv

import openpyxl
import pytest

from conneks.models.wire_record import WireRecord
from conneks.services.import_service import (
    ImportService,
    RecordImportError,
    export_header,
    export_row,
)


def schedule_row(**cells):
    """Build a 22-column template row from {column_index: value}."""
    row = [""] * 22
    for key, value in cells.items():
        row[int(key.lstrip("c"))] = value
    return row


HEADER = ["WIRE #"] + [f"COL{i}" for i in range(1, 22)]


@pytest.fixture
def rows():
    return [
        HEADER,
        schedule_row(c0="W1", c1="DATA", c3="ROOM1", c5="SW-A", c7="P3", c8="junk", c12="PP-1"),
        schedule_row(c5="orphan device"),
        schedule_row(c0="W2", c15="12", c17="BLUE", c18="spare", c19="T1", c21="T3"),
    ]


class TestRecordsFromRows:
    """Tests for row-to-record mapping."""

    def test_column_mapping(self, rows):
        records = ImportService.records_from_rows(rows)

        first = records[0]
        assert first.wire_number == "W1"
        assert first.signal_type == "DATA"
        assert first.device_a_room == "ROOM1"
        assert first.device_a_name == "SW-A"
        assert first.device_a_port == "P3"
        assert first.device_b_name == "PP-1"

    def test_unused_column_ignored(self, rows):
        records = ImportService.records_from_rows(rows)

        assert "junk" not in records[0].to_dict().values()

    def test_rows_without_wire_number_dropped(self, rows):
        records = ImportService.records_from_rows(rows)

        assert [r.wire_number for r in records] == ["W1", "W2"]

    def test_detail_columns(self, rows):
        second = ImportService.records_from_rows(rows)[1]

        assert second.length == "12"
        assert second.color == "BLUE"
        assert second.remarks == "spare"
        assert second.tag1 == "T1"
        assert second.tag2 == ""
        assert second.tag3 == "T3"

    def test_short_and_empty_rows(self):
        records = ImportService.records_from_rows([HEADER, ["W9", "CTRL"], [], ()])

        assert len(records) == 1
        assert records[0].signal_type == "CTRL"
        assert records[0].tag3 == ""

    def test_numeric_cells_normalized(self):
        records = ImportService.records_from_rows([HEADER, [101.0, None, 2.5]])

        assert records[0].wire_number == "101"
        assert records[0].signal_type == ""
        assert records[0].device_a_dwg == "2.5"

    def test_no_header(self):
        records = ImportService.records_from_rows([["W1"]], has_header=False)

        assert [r.wire_number for r in records] == ["W1"]


class TestLoadFile:
    """Tests for reading schedule files."""

    def test_csv(self, tmp_path, rows):
        path = tmp_path / "schedule.csv"
        with open(path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(rows)

        records = ImportService.load_file(path)

        assert [r.wire_number for r in records] == ["W1", "W2"]
        assert records[0].device_b_name == "PP-1"

    def test_xlsx(self, tmp_path, rows):
        path = tmp_path / "schedule.xlsx"
        wb = openpyxl.Workbook()
        ws = wb.active
        for row in rows:
            ws.append([value if value != "" else None for value in row])
        ws.append([None] * 22)
        wb.save(path)

        records = ImportService.load_file(path)

        assert [r.wire_number for r in records] == ["W1", "W2"]
        assert records[1].length == "12"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "schedule.txt"
        path.write_text("W1\n")

        with pytest.raises(RecordImportError):
            ImportService.load_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RecordImportError):
            ImportService.load_file(tmp_path / "missing.csv")

    def test_corrupt_xlsx(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip file")

        with pytest.raises(RecordImportError) as exc_info:
            ImportService.load_file(path)

        assert exc_info.value.__cause__ is not None


class TestExport:
    """Tests for writing schedule files."""

    @pytest.fixture
    def records(self):
        return [
            WireRecord(
                wire_number="W1",
                signal_type="VID",
                device_a_name="SW-A",
                device_a_port="P3",
                device_b_room="ROOM2",
                device_b_name="PP-1",
                length="15",
                tag2="T2",
            ),
            WireRecord(wire_number="W2", remarks="spare"),
        ]

    def test_export_layout_matches_import_columns(self, records):
        header = export_header()
        row = export_row(records[0])

        assert len(header) == len(row) == 22
        assert header[0] == "WIRE #"
        assert header[8] == ""
        assert row[8] == ""
        assert row[5] == "SW-A"
        assert row[12] == "PP-1"

    @pytest.mark.parametrize("suffix", [".csv", ".xlsx"])
    def test_export_reimports_unchanged(self, tmp_path, records, suffix):
        path = tmp_path / f"out{suffix}"

        assert ImportService.save_file(records, path) == 2
        assert ImportService.load_file(path) == records

    def test_excel_sheet_name(self, tmp_path, records):
        path = tmp_path / "out.xlsx"
        ImportService.to_excel(records, path)

        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ["WireList"]
        assert wb.active["A1"].font.bold

    def test_unsupported_export_suffix(self, tmp_path, records):
        with pytest.raises(ValueError):
            ImportService.save_file(records, tmp_path / "out.json")
