"""Data model for cable schedule records.

Contains the WireRecord frozen dataclass and helpers for converting records
to and from plain dicts and spreadsheet rows.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from .constants import FIELD_NAMES, IMPORT_COLUMN_MAP, SIDE_FIELDS, Side


@dataclass(frozen=True)
class WireRecord:
    """One cable/wire schedule entry.

    Immutable: edits produce a new record via with_field(). Every field is a
    string; empty string means "not set".
    """

    wire_number: str
    signal_type: str = ""

    # Device A (source)
    device_a_dwg: str = ""
    device_a_room: str = ""  # Location A1
    device_a_rack: str = ""  # Location A2
    device_a_name: str = ""
    device_a_conn: str = ""
    device_a_port: str = ""

    # Device B (destination)
    device_b_dwg: str = ""
    device_b_room: str = ""  # Location B1
    device_b_rack: str = ""  # Location B2
    device_b_name: str = ""
    device_b_conn: str = ""
    device_b_port: str = ""

    # Details
    length: str = ""
    wire_type: str = ""
    color: str = ""
    tag1: str = ""
    tag2: str = ""
    tag3: str = ""
    remarks: str = ""

    def side_value(self, side: Side, part: str) -> str:
        """Get a per-side field ('location_1', 'location_2', 'device', 'connector', 'port')."""
        return getattr(self, SIDE_FIELDS[Side(side)][part])

    def with_field(self, field_name: str, value: str) -> WireRecord:
        """Return a copy with one field changed.

        Raises:
            KeyError: If field_name is not a record field.
        """
        if field_name not in FIELD_NAMES:
            raise KeyError(field_name)
        return replace(self, **{field_name: _clean(value)})

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def to_row(self) -> list[str]:
        """Values in DEFAULT_FIELDS order (export layout)."""
        return [getattr(self, name) for name in FIELD_NAMES]

    @property
    def has_content(self) -> bool:
        """True if any field other than the wire number is set."""
        return any(getattr(self, name) for name in FIELD_NAMES[1:])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WireRecord:
        """Build a record from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: _clean(value) for key, value in data.items() if key in known}
        values.setdefault("wire_number", "")
        return cls(**values)


def _clean(value: Any) -> str:
    """Normalize a cell value to a stripped string (None -> '')."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Spreadsheets hand back 12.0 for a cell typed as 12
        value = int(value)
    return str(value).strip()


def record_from_row(row: Sequence[Any]) -> WireRecord:
    """Map a spreadsheet row to a record by fixed column index.

    Short rows are padded; cells past the last mapped column are ignored.
    """
    values: dict[str, str] = {}
    for index, field_name in IMPORT_COLUMN_MAP.items():
        values[field_name] = _clean(row[index]) if index < len(row) else ""
    return WireRecord(**values)


def empty_record(wire_number: str) -> WireRecord:
    """Create a blank record with the given identifier."""
    return WireRecord(wire_number=wire_number)
