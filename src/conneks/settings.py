import tkinter as tk
from dataclasses import dataclass, fields

from .models.constants import DEFAULT_QUANTITY, SHEET_CAPACITY, StockMode
from .models.label_config import ColumnVisibility, LabelConfig, PrintOptions


@dataclass
class AppSettings:
    """Editor settings backed by Tk variables.

    The window binds checkboxes and spinboxes to these variables; the core
    only ever sees the plain dataclasses built by the properties below.
    """

    def __init__(self):
        # Label print options
        self.print_location_1_var = tk.BooleanVar(value=True)
        self.print_location_2_var = tk.BooleanVar(value=True)
        self.print_port_var = tk.BooleanVar(value=True)

        # Stock layout
        self.stock_mode_var = tk.StringVar(value=StockMode.SHEET.value)
        self.quantity_var = tk.IntVar(value=DEFAULT_QUANTITY)
        self.start_offset_var = tk.IntVar(value=0)

        # Column toggles, one variable per ColumnVisibility flag
        self.column_vars: dict[str, tk.BooleanVar] = {
            flag.name: tk.BooleanVar(value=True) for flag in fields(ColumnVisibility)
        }

    @property
    def print_options(self) -> PrintOptions:
        """Get current label print options."""
        return PrintOptions(
            location_1=self.print_location_1_var.get(),
            location_2=self.print_location_2_var.get(),
            port=self.print_port_var.get(),
        )

    @property
    def stock_mode(self) -> StockMode:
        """Get selected stock mode (falls back to sheet)."""
        try:
            return StockMode(self.stock_mode_var.get())
        except ValueError:
            return StockMode.SHEET

    @staticmethod
    def _int_value(var: tk.IntVar, default: int) -> int:
        # Spinboxes let the user type anything
        try:
            return var.get()
        except tk.TclError:
            return default

    @property
    def label_config(self) -> LabelConfig:
        """Get current stock layout configuration."""
        return LabelConfig(
            stock_mode=self.stock_mode,
            quantity_per_record=self._int_value(self.quantity_var, DEFAULT_QUANTITY),
            start_offset=self._int_value(self.start_offset_var, 0),
            sheet_capacity=SHEET_CAPACITY,
            print_options=self.print_options,
        )

    @property
    def column_visibility(self) -> ColumnVisibility:
        """Get current column show/hide flags."""
        return ColumnVisibility(**{name: var.get() for name, var in self.column_vars.items()})
