import tkinter as tk
from tkinter import ttk

from .data.history import HistoryManager
from .data.persistence import JsonFileStore, KeyValueStore, load_records, save_records
from .data.record_store import RecordStore
from .settings import AppSettings
from .utils.debug_trace import get_logger, setup_debug_logging
from .views.editor.window import EditorWindow

logger = get_logger(__name__)


def get_version():
    """Get version from package metadata."""
    try:
        from importlib.metadata import version

        return version("conneks")
    except Exception:
        return "Development"


class ConneksApp:
    """Main application for the CONNEKS cable schedule editor."""

    def _setup_styles(self):
        """Configure ttk styles for the application."""
        style = ttk.Style()
        style.configure("TButton", padding=4)
        style.configure("TLabel", padding=2)

    def _on_records_changed(self, history: HistoryManager) -> None:
        """Persist the record list after every edit, undo and redo."""
        try:
            save_records(self.storage, history.store.records)
        except OSError as e:
            logger.error(f"Could not save records: {e}")

    def on_closing(self):
        """Handle application shutdown."""
        self._on_records_changed(self.history)
        self.root.destroy()

    def __init__(self, storage: KeyValueStore | None = None):
        self.root = tk.Tk()
        self.root.title(f"CONNEKS - Cable Management Utility ({get_version()})")
        self.root.geometry("1400x800")
        self.root.minsize(900, 500)
        self._setup_styles()

        self.storage = storage if storage is not None else JsonFileStore()
        records = load_records(self.storage)
        logger.info(f"Loaded {len(records)} records")

        self.history = HistoryManager(RecordStore(records))
        self.history.add_observer(self._on_records_changed)

        self.settings = AppSettings()
        self.window = EditorWindow(self.root, self.history, self.settings)
        self.window.pack(fill=tk.BOTH, expand=True)

        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)

    def run(self):
        """Run the CONNEKS application."""
        self.root.mainloop()


def main() -> None:
    """Entry point for the application."""
    setup_debug_logging(debug=False)
    app = ConneksApp()
    app.run()


def main_dev() -> None:
    """Entry point for debug mode (console logging)."""
    setup_debug_logging(debug=True)
    app = ConneksApp()
    app.run()


if __name__ == "__main__":
    main()
