"""Main window for the cable schedule editor.

Uses tksheet for the record grid. Every change made here (cell edits,
add, clone, delete, clear, import) goes through the HistoryManager so it
can be undone; the grid is then repopulated from the store.
"""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

from tksheet import Sheet, num2alpha

from ...data.history import HistoryManager, SnapshotError
from ...models.constants import CONNECTOR_TYPES, SIGNAL_TYPES
from ...services.import_service import ImportService, RecordImportError
from ...services.layout_service import InvalidConfigurationError, LayoutService
from ...settings import AppSettings
from ...utils.debug_trace import get_logger, perf_timer
from .layout_preview import LayoutPreviewDialog
from .sidebar import Sidebar

logger = get_logger(__name__)

# (field name, header, width) in grid order
GRID_COLUMNS: list[tuple[str, str, int]] = [
    ("wire_number", "WIRE#", 90),
    ("signal_type", "SIG", 80),
    # A side
    ("device_a_dwg", "A PAGE#", 70),
    ("device_a_room", "A LOCATION 1", 100),
    ("device_a_rack", "A LOCATION 2", 100),
    ("device_a_name", "A DEVICE", 120),
    ("device_a_conn", "A CONNECTOR", 100),
    ("device_a_port", "A PORT", 90),
    # B side
    ("device_b_dwg", "B PAGE#", 70),
    ("device_b_room", "B LOCATION 1", 100),
    ("device_b_rack", "B LOCATION 2", 100),
    ("device_b_name", "B DEVICE", 120),
    ("device_b_conn", "B CONNECTOR", 100),
    ("device_b_port", "B PORT", 90),
    # Details
    ("length", "LEN", 70),
    ("wire_type", "CBL TYPE", 100),
    ("color", "COLOR", 80),
    ("remarks", "RMRKS", 120),
    ("tag1", "TAG 1", 80),
    ("tag2", "TAG 2", 80),
    ("tag3", "TAG 3", 80),
]
COLUMN_FIELDS = [name for name, _header, _width in GRID_COLUMNS]
COL_WIRE_NUMBER = COLUMN_FIELDS.index("wire_number")

SPREADSHEET_FILETYPES = [
    ("Excel workbooks", "*.xlsx"),
    ("CSV files", "*.csv"),
    ("All files", "*.*"),
]


class EditorWindow(ttk.Frame):
    """Record grid with toolbar and sidebar.

    Features:
    - Toolbar: search, add, clone, import/export, delete, clear, undo/redo
    - Left sidebar: live label preview, print and stock options, column toggles
    - Grid: tksheet table of all records
    """

    # --- Grid ---

    def _populate_sheet(self) -> None:
        """Reload grid data from the store."""
        self._suppress_notifications = True
        try:
            with perf_timer("populate_sheet", row_count=len(self._history.store)):
                data = [[getattr(record, name) for name in COLUMN_FIELDS] for record in self._history.store]
                self.sheet.set_sheet_data(data, reset_col_positions=False, redraw=False)
                self.sheet.set_index_data([str(i + 1) for i in range(len(data))])
                self._apply_filter()
        finally:
            self._suppress_notifications = False

    def _apply_filter(self) -> None:
        """Show only rows containing the search text (case-insensitive)."""
        needle = self.search_var.get().strip().lower()
        if not needle:
            self.sheet.display_rows("all", redraw=True)
            return
        rows = [
            idx
            for idx, record in enumerate(self._history.store)
            if any(needle in value.lower() for value in record.to_row())
        ]
        self.sheet.display_rows(rows=rows, all_displayed=False, redraw=True)

    def _apply_column_visibility(self) -> None:
        hidden = self._settings.column_visibility.hidden_fields()
        hide = {idx for idx, name in enumerate(COLUMN_FIELDS) if name in hidden}
        show = set(range(len(COLUMN_FIELDS))) - hide
        self.sheet.show_columns(columns=show, redraw=False)
        if hide:
            self.sheet.hide_columns(columns=hide, data_indexes=True, redraw=False)
        self.sheet.redraw()

    def _selected_indices(self) -> list[int]:
        """Selected record indices (data order, sorted)."""
        selected = self.sheet.get_selected_rows(get_cells_as_rows=True)
        if not selected:
            return []
        indices = {self.sheet.displayed_row_to_data(display_idx) for display_idx in selected}
        return sorted(idx for idx in indices if idx is not None and idx < len(self._history.store))

    def _on_selection_changed(self, event=None) -> None:
        indices = self._selected_indices()
        record = self._history.store[indices[0]] if indices else None
        self.sidebar.update_preview(record)

    def _on_sheet_modified(self, event) -> None:
        """Route grid cell edits through the history manager.

        The sheet already shows the new values; they are read back and
        committed as one undo step.
        """
        if self._suppress_notifications:
            return

        cells = getattr(event, "cells", None)
        if not cells:
            return

        # tksheet v7 structure: {'table': {(row, col): old_value}, 'header': {}, 'index': {}}
        table_cells = cells.get("table", {})
        if not table_cells:
            return

        def commit_edits():
            with self._history.edit_session("Edit cells") as session:
                for (data_idx, col), _old_value in table_cells.items():
                    if data_idx is None or data_idx >= len(self._history.store) or col >= len(COLUMN_FIELDS):
                        continue
                    new_value = self.sheet.get_cell_data(data_idx, col)
                    session.set_field(data_idx, COLUMN_FIELDS[col], new_value or "")

        self._run_mutation(commit_edits)

        # Normalized values (stripped text) go back into the grid
        self._populate_sheet()
        self._on_selection_changed()

    # --- History ---

    def _on_history_changed(self, history: HistoryManager) -> None:
        self._populate_sheet()
        self.sidebar.update_stats(len(history.store))
        self._on_selection_changed()
        self._update_undo_buttons()

    def _update_undo_buttons(self) -> None:
        undo_desc = self._history.get_undo_description()
        redo_desc = self._history.get_redo_description()
        self.undo_btn.configure(state="normal" if self._history.can_undo() else "disabled")
        self.redo_btn.configure(state="normal" if self._history.can_redo() else "disabled")
        self.undo_btn.configure(text=f"Undo {undo_desc}" if undo_desc else "Undo")
        self.redo_btn.configure(text=f"Redo {redo_desc}" if redo_desc else "Redo")

    def _run_mutation(self, action) -> None:
        """Run a history mutation, reporting failures instead of raising into Tk."""
        try:
            action()
        except SnapshotError as e:
            logger.error(str(e))
            messagebox.showerror("Edit failed", str(e), parent=self)

    def _on_undo(self, event=None) -> str:
        self._history.undo()
        return "break"

    def _on_redo(self, event=None) -> str:
        self._history.redo()
        return "break"

    # --- Actions ---

    def _on_add(self) -> None:
        self._run_mutation(self._history.add_record)
        if len(self._history.store):
            self.sheet.see(len(self._history.store) - 1, COL_WIRE_NUMBER)

    def _on_clone(self) -> None:
        indices = self._selected_indices()
        if not indices:
            return
        self._run_mutation(lambda: self._history.clone_record(indices[0]))

    def _on_delete(self) -> None:
        indices = self._selected_indices()
        if not indices:
            return
        self._run_mutation(lambda: self._history.delete_records(indices))
        self.sheet.deselect()

    def _on_clear(self) -> None:
        if not len(self._history.store):
            return
        if messagebox.askyesno("Clear", "Are you sure you want to delete all records?", parent=self):
            self._run_mutation(self._history.clear)

    def _on_import(self) -> None:
        file_path = filedialog.askopenfilename(
            parent=self,
            title="Import Cable Schedule",
            filetypes=[("Spreadsheets", "*.xlsx *.csv")] + SPREADSHEET_FILETYPES,
        )
        if not file_path:
            return

        try:
            records = ImportService.load_file(file_path)
        except RecordImportError as e:
            logger.error(str(e))
            messagebox.showerror("Import failed", str(e), parent=self)
            return

        replace = False
        if len(self._history.store):
            answer = messagebox.askyesnocancel(
                "Import",
                f"Replace the current {len(self._history.store)} records?\n\n"
                "Yes replaces them, No appends the imported records.",
                parent=self,
            )
            if answer is None:
                return
            replace = answer

        self._run_mutation(lambda: self._history.import_records(records, replace=replace))

    def _on_export(self) -> None:
        file_path = filedialog.asksaveasfilename(
            parent=self,
            title="Export Cable Schedule",
            initialfile="CableSchedule.xlsx",
            defaultextension=".xlsx",
            filetypes=SPREADSHEET_FILETYPES,
        )
        if not file_path:
            return
        try:
            ImportService.save_file(self._history.store.records, Path(file_path))
        except (OSError, ValueError) as e:
            logger.error(f"Export failed: {e}")
            messagebox.showerror("Export failed", str(e), parent=self)

    def _on_print_layout(self) -> None:
        config = self._settings.label_config
        selected = self._selected_indices()
        store = self._history.store
        # Print the selection if there is one, else everything
        records = [store[idx] for idx in selected] if selected else store.records
        try:
            pages = LayoutService.layout_for_config(records, config)
        except InvalidConfigurationError as e:
            messagebox.showerror("Print layout", str(e), parent=self)
            return
        LayoutPreviewDialog(self, LayoutService.render_pages(pages, config.print_options), config)

    # --- Widgets ---

    def _create_toolbar(self, parent: ttk.Frame) -> None:
        header = ttk.Frame(parent, padding=(10, 8))
        header.pack(fill=tk.X)

        ttk.Label(header, text="CONNEKS", font=("TkDefaultFont", 12, "bold")).pack(side=tk.LEFT)
        ttk.Label(header, text="Cable Management Utility").pack(side=tk.LEFT, padx=(6, 0))

        actions = ttk.Frame(header)
        actions.pack(side=tk.RIGHT)

        search = ttk.Entry(actions, textvariable=self.search_var, width=24)
        search.pack(side=tk.LEFT, padx=(0, 8))
        self.search_var.trace_add("write", lambda *_args: self._apply_filter())

        for text, command in (
            ("+ Add", self._on_add),
            ("Clone", self._on_clone),
            ("Export", self._on_export),
            ("Import", self._on_import),
            ("Delete", self._on_delete),
            ("Clear", self._on_clear),
            ("Print Layout", self._on_print_layout),
        ):
            ttk.Button(actions, text=text, command=command).pack(side=tk.LEFT, padx=2)

        self.undo_btn = ttk.Button(actions, text="Undo", command=self._on_undo, width=18)
        self.undo_btn.pack(side=tk.LEFT, padx=(8, 2))
        self.redo_btn = ttk.Button(actions, text="Redo", command=self._on_redo, width=18)
        self.redo_btn.pack(side=tk.LEFT, padx=2)

    def _create_sheet(self, parent: ttk.Frame) -> None:
        self.sheet = Sheet(
            parent,
            headers=[header for _name, header, _width in GRID_COLUMNS],
            show_row_index=True,
        )
        self.sheet.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        self.sheet.enable_bindings()
        # Row structure and undo belong to the history manager, not the sheet
        self.sheet.disable_bindings(
            "undo",
            "rc_insert_row",
            "rc_delete_row",
            "rc_insert_column",
            "rc_delete_column",
            "column_drag_and_drop",
            "row_drag_and_drop",
            "sort_cells",
            "sort_row",
            "sort_column",
            "sort_rows",
            "sort_columns",
        )

        self.sheet.set_column_widths([width for _name, _header, width in GRID_COLUMNS])
        self.sheet.row_index(50)
        self.sheet.readonly_columns([COL_WIRE_NUMBER])

        dropdowns = {
            "signal_type": SIGNAL_TYPES,
            "device_a_conn": CONNECTOR_TYPES,
            "device_b_conn": CONNECTOR_TYPES,
        }
        for field_name, values in dropdowns.items():
            col = COLUMN_FIELDS.index(field_name)
            self.sheet.dropdown(self.sheet.span(num2alpha(col)), values=[""] + values)

        self.sheet.bind("<<SheetModified>>", self._on_sheet_modified)
        self.sheet.bind("<<SheetSelect>>", self._on_selection_changed)

    def _create_widgets(self) -> None:
        """Create all window widgets."""
        self.sidebar = Sidebar(self, self._settings, on_columns_toggled=self._apply_column_visibility)
        self.sidebar.pack(side=tk.LEFT, fill=tk.Y)

        main = ttk.Frame(self)
        main.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self._create_toolbar(main)
        self._create_sheet(main)

    def _bind_keys(self) -> None:
        toplevel = self.winfo_toplevel()
        for sequence in ("<Control-z>", "<Control-Z>"):
            toplevel.bind(sequence, self._on_undo)
        for sequence in ("<Control-y>", "<Control-Y>"):
            toplevel.bind(sequence, self._on_redo)

    def __init__(self, parent: tk.Widget, history: HistoryManager, settings: AppSettings):
        """Initialize the editor window.

        Args:
            parent: Parent widget (usually the root window)
            history: History manager owning the record store
            settings: Shared settings (Tk variables)
        """
        super().__init__(parent)
        self._history = history
        self._settings = settings
        self._suppress_notifications = False
        self.search_var = tk.StringVar()

        self._create_widgets()
        self._bind_keys()

        self._history.add_observer(self._on_history_changed)
        self._on_history_changed(self._history)
        self._apply_column_visibility()

    def destroy(self) -> None:
        self._history.remove_observer(self._on_history_changed)
        super().destroy()

