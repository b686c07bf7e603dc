"""Sidebar for the editor window.

Live label preview, label print options, stock layout settings, column
show/hide toggles, and record stats.
"""

from __future__ import annotations

import tkinter as tk
from collections.abc import Callable
from tkinter import ttk
from typing import TYPE_CHECKING

from ...models.constants import SHEET_CAPACITY, StockMode
from ...services.label_service import LabelService

if TYPE_CHECKING:
    from ...models.wire_record import WireRecord
    from ...settings import AppSettings

# Column toggle labels, in sidebar order
COLUMN_TOGGLE_LABELS: list[tuple[str, str]] = [
    ("signal", "Signal"),
    ("page_number", "Page #"),
    ("location_1", "Location 1"),
    ("location_2", "Location 2"),
    ("port", "Ports"),
    ("length", "Length"),
    ("cable_type", "Cable Type"),
    ("color", "Color"),
    ("remarks", "Remarks"),
    ("tag1", "Tag 1"),
    ("tag2", "Tag 2"),
    ("tag3", "Tag 3"),
]

MAX_QUANTITY = 10


class Sidebar(ttk.Frame):
    """Left-hand settings and preview panel."""

    def _section(self, title: str) -> ttk.LabelFrame:
        frame = ttk.LabelFrame(self, text=title, padding=8)
        frame.pack(fill=tk.X, pady=(0, 10))
        return frame

    def _create_widgets(self) -> None:
        """Create sidebar widgets."""
        preview_frame = self._section("Live Label Preview")
        self.preview_text = tk.Text(
            preview_frame,
            width=32,
            height=4,
            font=("Consolas", 10, "bold"),
            wrap=tk.NONE,
            relief=tk.SOLID,
            borderwidth=1,
        )
        self.preview_text.pack(fill=tk.X)
        self.preview_font_label = ttk.Label(preview_frame, text="")
        self.preview_font_label.pack(anchor=tk.W, pady=(4, 0))

        options_frame = self._section("Label Print Options")
        for text, var in (
            ("Location 1", self._settings.print_location_1_var),
            ("Location 2", self._settings.print_location_2_var),
            ("Port", self._settings.print_port_var),
        ):
            ttk.Checkbutton(
                options_frame, text=text, variable=var, command=self._on_print_options_changed
            ).pack(anchor=tk.W)

        stock_frame = self._section("Label Stock")
        for text, mode in (("Sheet", StockMode.SHEET), ("Roll", StockMode.ROLL)):
            ttk.Radiobutton(
                stock_frame,
                text=text,
                value=mode.value,
                variable=self._settings.stock_mode_var,
                command=self._on_stock_mode_changed,
            ).pack(anchor=tk.W)

        qty_row = ttk.Frame(stock_frame)
        qty_row.pack(fill=tk.X, pady=(4, 0))
        ttk.Label(qty_row, text="Copies per cable:").pack(side=tk.LEFT)
        ttk.Spinbox(
            qty_row, from_=1, to=MAX_QUANTITY, width=4, textvariable=self._settings.quantity_var
        ).pack(side=tk.RIGHT)

        offset_row = ttk.Frame(stock_frame)
        offset_row.pack(fill=tk.X, pady=(4, 0))
        ttk.Label(offset_row, text="Start at slot:").pack(side=tk.LEFT)
        self.offset_spinbox = ttk.Spinbox(
            offset_row,
            from_=0,
            to=SHEET_CAPACITY - 1,
            width=4,
            textvariable=self._settings.start_offset_var,
        )
        self.offset_spinbox.pack(side=tk.RIGHT)

        columns_frame = self._section("Show / Hide Columns")
        for name, text in COLUMN_TOGGLE_LABELS:
            ttk.Checkbutton(
                columns_frame,
                text=text,
                variable=self._settings.column_vars[name],
                command=self._on_columns_changed,
            ).pack(anchor=tk.W)

        stats_frame = self._section("Stats")
        self.stats_label = ttk.Label(stats_frame, text="Total Cables: 0")
        self.stats_label.pack(anchor=tk.W)

    def _on_print_options_changed(self) -> None:
        self.update_preview(self._selected)

    def _on_stock_mode_changed(self) -> None:
        # Offset only applies to sheet stock
        state = "normal" if self._settings.stock_mode == StockMode.SHEET else "disabled"
        self.offset_spinbox.configure(state=state)

    def _on_columns_changed(self) -> None:
        if self._on_columns_toggled:
            self._on_columns_toggled()

    def update_preview(self, record: WireRecord | None) -> None:
        """Show the label text for the selected record."""
        self._selected = record
        options = self._settings.print_options

        self.preview_text.configure(state=tk.NORMAL)
        self.preview_text.delete("1.0", tk.END)
        self.preview_text.insert("1.0", LabelService.preview_text(record, options))
        self.preview_text.configure(state=tk.DISABLED)

        if record is None:
            self.preview_font_label.configure(text="")
        else:
            label = LabelService.build_label(record, options)
            self.preview_font_label.configure(text=f"Font size: {label.font_size_tier}")

    def update_stats(self, total: int) -> None:
        self.stats_label.configure(text=f"Total Cables: {total}")

    def __init__(
        self,
        parent: tk.Widget,
        settings: AppSettings,
        on_columns_toggled: Callable[[], None] | None = None,
    ):
        """Initialize the sidebar.

        Args:
            parent: Parent widget
            settings: Shared settings (Tk variables)
            on_columns_toggled: Called when a column toggle changes
        """
        super().__init__(parent, padding=10)
        self._settings = settings
        self._on_columns_toggled = on_columns_toggled
        self._selected: WireRecord | None = None

        self._create_widgets()
        self.update_preview(None)
