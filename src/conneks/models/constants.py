# ==============================================================================
# Record Field Configuration
# ==============================================================================

from enum import Enum

# (field name, column header, required) in display/export order
DEFAULT_FIELDS: list[tuple[str, str, bool]] = [
    ("wire_number", "WIRE #", True),
    ("signal_type", "SIGNAL TYPE", False),
    # Device A (source)
    ("device_a_dwg", "DEV A DWG", False),
    ("device_a_room", "LOC A1", False),
    ("device_a_rack", "LOC A2", False),
    ("device_a_name", "DEV A NAME", True),
    ("device_a_conn", "DEV A CONN", False),
    ("device_a_port", "DEV A PORT", False),
    # Device B (destination)
    ("device_b_dwg", "DEV B DWG", False),
    ("device_b_room", "LOC B1", False),
    ("device_b_rack", "LOC B2", False),
    ("device_b_name", "DEV B NAME", True),
    ("device_b_conn", "DEV B CONN", False),
    ("device_b_port", "DEV B PORT", False),
    # Details
    ("length", "LENGTH", False),
    ("wire_type", "WIRE TYPE", False),
    ("color", "COLOR", False),
    ("tag1", "TAG 1", False),
    ("tag2", "TAG 2", False),
    ("tag3", "TAG 3", False),
    ("remarks", "REMARKS", False),
]

FIELD_NAMES: tuple[str, ...] = tuple(name for name, _label, _required in DEFAULT_FIELDS)
FIELD_LABELS: dict[str, str] = {name: label for name, label, _required in DEFAULT_FIELDS}

# Spreadsheet column index -> field name for imports.
# Column 8 (I) is unused in the schedule template and is skipped.
IMPORT_COLUMN_MAP: dict[int, str] = {
    0: "wire_number",
    1: "signal_type",
    2: "device_a_dwg",
    3: "device_a_room",
    4: "device_a_rack",
    5: "device_a_name",
    6: "device_a_conn",
    7: "device_a_port",
    9: "device_b_dwg",
    10: "device_b_room",
    11: "device_b_rack",
    12: "device_b_name",
    13: "device_b_conn",
    14: "device_b_port",
    15: "length",
    16: "wire_type",
    17: "color",
    18: "remarks",
    19: "tag1",
    20: "tag2",
    21: "tag3",
}

# Dropdown reference lists for the grid editors
SIGNAL_TYPES = ["VID", "AUD", "CTRL", "DATA", "POWER", "RF", "FIBER", "OTHER"]
CONNECTOR_TYPES = ["RJ45", "HDMI", "XLR-M", "XLR-F", "VGA", "USB", "SC/APC", "LC/PC", "DVI", "N/A"]

# New records are numbered from here (C-1001, C-1002, ...)
NEW_WIRE_PREFIX = "C-"
NEW_WIRE_BASE = 1000


class Side(str, Enum):
    """Cable end selector."""

    A = "A"
    B = "B"


# Per-side field names used by the label builder
SIDE_FIELDS: dict[Side, dict[str, str]] = {
    Side.A: {
        "location_1": "device_a_room",
        "location_2": "device_a_rack",
        "device": "device_a_name",
        "connector": "device_a_conn",
        "port": "device_a_port",
    },
    Side.B: {
        "location_1": "device_b_room",
        "location_2": "device_b_rack",
        "device": "device_b_name",
        "connector": "device_b_conn",
        "port": "device_b_port",
    },
}


# ==============================================================================
# History Configuration
# ==============================================================================

# Maximum number of undo frames to retain
MAX_UNDO_DEPTH = 20


# ==============================================================================
# Label Stock Configuration
# ==============================================================================


class StockMode(str, Enum):
    """Physical label stock.

    SHEET: multi-slot grid per page, skippable start offset.
    ROLL: continuous thermal roll, one record's copies per page.
    """

    SHEET = "sheet"
    ROLL = "roll"


# Slots per sheet on the default sheet stock (4 columns x 8 rows)
SHEET_CAPACITY = 32
SHEET_COLUMNS = 4

# Copies printed per record (any positive value)
DEFAULT_QUANTITY = 2

# (minimum exclusive line length, font size in points), longest first.
# Anything not longer than the last threshold uses DEFAULT_FONT_SIZE.
FONT_SIZE_TIERS: list[tuple[int, int]] = [
    (40, 7),
    (34, 8),
    (24, 9),
    (22, 10),
    (18, 12),
]
DEFAULT_FONT_SIZE = 14

PREVIEW_PLACEHOLDER = "Select a cable to preview."


# ==============================================================================
# Persistence
# ==============================================================================

STORAGE_KEY = "conneks.data.v1"
