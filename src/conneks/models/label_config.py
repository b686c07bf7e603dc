"""Label printing and grid display configuration.

Single configuration records replace the per-view toggle state of the
editor: PrintOptions for label text, LabelConfig for stock layout, and
ColumnVisibility for grid columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from .constants import DEFAULT_QUANTITY, SHEET_CAPACITY, StockMode


@dataclass(frozen=True)
class PrintOptions:
    """Optional fields included in printed label lines."""

    location_1: bool = True
    location_2: bool = True
    port: bool = True


@dataclass(frozen=True)
class LabelConfig:
    """Stock layout configuration for a print batch.

    Attributes:
        stock_mode: SHEET or ROLL stock.
        quantity_per_record: Copies of each record's label.
        start_offset: Already-used slots to skip on the first sheet (sheet mode only).
        sheet_capacity: Slots per physical sheet (sheet mode only).
        print_options: Which optional fields appear on the label.
    """

    stock_mode: StockMode = StockMode.SHEET
    quantity_per_record: int = DEFAULT_QUANTITY
    start_offset: int = 0
    sheet_capacity: int = SHEET_CAPACITY
    print_options: PrintOptions = field(default_factory=PrintOptions)

    @property
    def page_capacity(self) -> int:
        """Slots per page: sheet size, or one record's copies on roll stock."""
        if self.stock_mode == StockMode.ROLL:
            return self.quantity_per_record
        return self.sheet_capacity

    @property
    def effective_start_offset(self) -> int:
        """Roll stock always starts at the first slot."""
        if self.stock_mode == StockMode.ROLL:
            return 0
        return self.start_offset


@dataclass(frozen=True)
class ColumnVisibility:
    """Show/hide flags for optional grid columns."""

    signal: bool = True
    page_number: bool = True
    location_1: bool = True
    location_2: bool = True
    port: bool = True
    length: bool = True
    cable_type: bool = True
    color: bool = True
    remarks: bool = True
    tag1: bool = True
    tag2: bool = True
    tag3: bool = True

    def hidden_fields(self) -> set[str]:
        """Record field names whose columns are hidden."""
        hidden: set[str] = set()
        for flag in fields(self):
            if not getattr(self, flag.name):
                hidden.update(COLUMN_FLAG_FIELDS[flag.name])
        return hidden


# Column flag -> record fields controlled by it
COLUMN_FLAG_FIELDS: dict[str, tuple[str, ...]] = {
    "signal": ("signal_type",),
    "page_number": ("device_a_dwg", "device_b_dwg"),
    "location_1": ("device_a_room", "device_b_room"),
    "location_2": ("device_a_rack", "device_b_rack"),
    "port": ("device_a_port", "device_b_port"),
    "length": ("length",),
    "cable_type": ("wire_type",),
    "color": ("color",),
    "remarks": ("remarks",),
    "tag1": ("tag1",),
    "tag2": ("tag2",),
    "tag3": ("tag3",),
}
