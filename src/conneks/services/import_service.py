"""Import/export service for cable schedule spreadsheets.

Reads .xlsx (openpyxl) and .csv files into WireRecords using the fixed
column layout of the schedule template, and writes records back out in
the same layout so exported files re-import unchanged. This service only
produces records: callers bring them into the store through
HistoryManager.import_records() so the import is undoable.
"""

from __future__ import annotations

import csv
import zipfile
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from ..models.constants import FIELD_LABELS, IMPORT_COLUMN_MAP
from ..models.wire_record import WireRecord, record_from_row
from ..utils.debug_trace import get_logger, log_perf

logger = get_logger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}
SHEET_NAME = "WireList"

HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")


class RecordImportError(Exception):
    """A schedule file could not be read."""


def _export_width() -> int:
    return max(IMPORT_COLUMN_MAP) + 1


def export_header() -> list[str]:
    """Header row in import column positions (unused columns blank)."""
    header = [""] * _export_width()
    for index, field_name in IMPORT_COLUMN_MAP.items():
        header[index] = FIELD_LABELS[field_name]
    return header


def export_row(record: WireRecord) -> list[str]:
    """Record values in import column positions."""
    row = [""] * _export_width()
    for index, field_name in IMPORT_COLUMN_MAP.items():
        row[index] = getattr(record, field_name)
    return row


class ImportService:
    """Converts between schedule spreadsheets and WireRecords.

    All methods are static as the service is stateless.
    """

    @staticmethod
    def records_from_rows(rows: Iterable[Sequence[Any]], has_header: bool = True) -> list[WireRecord]:
        """Map table rows to records.

        Args:
            rows: Table rows, header first
            has_header: Skip the first row

        Returns:
            Records in row order; rows without a wire number are dropped
        """
        records: list[WireRecord] = []
        skipped = 0
        for row_idx, row in enumerate(rows):
            if has_header and row_idx == 0:
                continue
            if not row:
                skipped += 1
                continue
            record = record_from_row(row)
            if not record.wire_number:
                skipped += 1
                continue
            records.append(record)
        if skipped:
            logger.debug(f"Skipped {skipped} row(s) without a wire number")
        return records

    @staticmethod
    def from_csv(path: Path | str) -> list[WireRecord]:
        """Read records from a CSV schedule.

        Raises:
            RecordImportError: If the file cannot be read
        """
        try:
            with open(path, newline="", encoding="utf-8-sig") as csvfile:
                return ImportService.records_from_rows(csv.reader(csvfile))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise RecordImportError(f"Error importing CSV {path}: {e}") from e

    @staticmethod
    def from_excel(path: Path | str) -> list[WireRecord]:
        """Read records from the first worksheet of an Excel workbook.

        Raises:
            RecordImportError: If the workbook cannot be read
        """
        try:
            wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError, ValueError) as e:
            raise RecordImportError(f"Error importing Excel {path}: {e}") from e

        try:
            ws = wb.worksheets[0]
            return ImportService.records_from_rows(ws.iter_rows(values_only=True))
        finally:
            wb.close()

    @staticmethod
    @log_perf
    def load_file(path: Path | str) -> list[WireRecord]:
        """Read records from a .xlsx or .csv file, chosen by suffix.

        Raises:
            RecordImportError: If the file type is unsupported or unreadable
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix in EXCEL_SUFFIXES:
            records = ImportService.from_excel(path)
        elif suffix in CSV_SUFFIXES:
            records = ImportService.from_csv(path)
        else:
            raise RecordImportError(f"Unsupported file type: {path.suffix or path.name}")
        logger.info(f"Imported {len(records)} records from {path.name}")
        return records

    @staticmethod
    def to_csv(records: Sequence[WireRecord], path: Path | str) -> int:
        """Write records to a CSV schedule.

        Returns:
            Number of records written
        """
        with open(path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(export_header())
            for record in records:
                writer.writerow(export_row(record))
        return len(records)

    @staticmethod
    def to_excel(records: Sequence[WireRecord], path: Path | str) -> int:
        """Write records to an Excel workbook with a single WireList sheet.

        Returns:
            Number of records written
        """
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = SHEET_NAME

        for col, header in enumerate(export_header(), 1):
            cell = ws.cell(1, col, header)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL

        for row_idx, record in enumerate(records, 2):
            for col, value in enumerate(export_row(record), 1):
                if value:
                    ws.cell(row_idx, col, value)

        # Auto-adjust column widths
        for col in ws.columns:
            max_length = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        wb.save(path)
        return len(records)

    @staticmethod
    def save_file(records: Sequence[WireRecord], path: Path | str) -> int:
        """Write records to .xlsx or .csv, chosen by suffix.

        Raises:
            ValueError: If the file type is unsupported
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix in EXCEL_SUFFIXES:
            count = ImportService.to_excel(records, path)
        elif suffix in CSV_SUFFIXES:
            count = ImportService.to_csv(records, path)
        else:
            raise ValueError(f"Unsupported file type: {path.suffix or path.name}")
        logger.info(f"Exported {count} records to {path.name}")
        return count
