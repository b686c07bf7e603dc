"""Service layer for business logic.

Services are stateless transforms over WireRecords. They never mutate the
record store; edits go through HistoryManager so they can be undone.

Services:
- LabelService: Label text lines and font size tier for one record
- LayoutService: Label slots and fixed-capacity pages for a print batch
- ImportService: Spreadsheet (.xlsx/.csv) import and export
"""

from .import_service import ImportService, RecordImportError
from .label_service import LabelService, LabelText
from .layout_service import InvalidConfigurationError, LabelSlot, LayoutService, Page

__all__ = [
    "ImportService",
    "InvalidConfigurationError",
    "LabelService",
    "LabelSlot",
    "LabelText",
    "LayoutService",
    "Page",
    "RecordImportError",
]
