"""Print layout preview dialog.

Draws each laid-out page as a grid of label slots so the batch can be
checked before it is sent to the print surface.
"""

from __future__ import annotations

import tkinter as tk
from collections.abc import Sequence
from tkinter import ttk
from typing import TYPE_CHECKING

from ...models.constants import SHEET_COLUMNS, StockMode

if TYPE_CHECKING:
    from ...models.label_config import LabelConfig
    from ...services.label_service import LabelText

SLOT_WIDTH = 180
SLOT_HEIGHT = 70
SLOT_GAP = 6
# Canvas points per label point, so tiers stay distinguishable on screen
FONT_SCALE = 0.8


class LayoutPreviewDialog(tk.Toplevel):
    """Page-by-page view of rendered label slots."""

    def _columns(self, page_len: int) -> int:
        if self._config.stock_mode == StockMode.ROLL:
            return 1
        return min(SHEET_COLUMNS, page_len)

    def _draw_page(self) -> None:
        self.canvas.delete("all")
        if not self._pages:
            self.canvas.create_text(20, 20, anchor=tk.NW, text="No labels to print.")
            self.page_label.configure(text="")
            return

        page = self._pages[self._page_idx]
        columns = self._columns(len(page))
        for slot_idx, label in enumerate(page):
            row, col = divmod(slot_idx, columns)
            x0 = SLOT_GAP + col * (SLOT_WIDTH + SLOT_GAP)
            y0 = SLOT_GAP + row * (SLOT_HEIGHT + SLOT_GAP)
            fill = "#ffffff" if label else "#eeeeee"
            self.canvas.create_rectangle(x0, y0, x0 + SLOT_WIDTH, y0 + SLOT_HEIGHT, fill=fill, outline="#999999")
            if label is None:
                continue
            size = max(1, round(label.font_size * FONT_SCALE))
            line_height = SLOT_HEIGHT / len(label.lines)
            for line_idx, line in enumerate(label.lines):
                self.canvas.create_text(
                    x0 + 4,
                    y0 + line_idx * line_height + 2,
                    anchor=tk.NW,
                    text=line,
                    font=("Consolas", size, "bold"),
                )

        rows = (len(page) + columns - 1) // columns
        width = SLOT_GAP + columns * (SLOT_WIDTH + SLOT_GAP)
        height = SLOT_GAP + rows * (SLOT_HEIGHT + SLOT_GAP)
        self.canvas.configure(scrollregion=(0, 0, width, height))
        self.page_label.configure(text=f"Page {self._page_idx + 1} of {len(self._pages)}")

    def _go(self, delta: int) -> None:
        if not self._pages:
            return
        self._page_idx = max(0, min(len(self._pages) - 1, self._page_idx + delta))
        self._draw_page()

    def _create_widgets(self) -> None:
        """Create dialog widgets."""
        nav = ttk.Frame(self, padding=5)
        nav.pack(fill=tk.X)
        ttk.Button(nav, text="< Prev", command=lambda: self._go(-1)).pack(side=tk.LEFT)
        ttk.Button(nav, text="Next >", command=lambda: self._go(1)).pack(side=tk.LEFT, padx=(5, 0))
        self.page_label = ttk.Label(nav, text="")
        self.page_label.pack(side=tk.LEFT, padx=10)
        ttk.Label(nav, text=self._summary).pack(side=tk.RIGHT)

        frame = ttk.Frame(self)
        frame.pack(fill=tk.BOTH, expand=True)
        self.canvas = tk.Canvas(frame, background="#cccccc")
        scrollbar = ttk.Scrollbar(frame, orient=tk.VERTICAL, command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

    def __init__(
        self,
        parent: tk.Widget,
        pages: Sequence[Sequence[LabelText | None]],
        config: LabelConfig,
    ):
        """Initialize the preview dialog.

        Args:
            parent: Parent widget
            pages: Rendered pages (LayoutService.render_pages output)
            config: Layout configuration the pages were built with
        """
        super().__init__(parent)
        self.title("Print Layout")
        self.transient(parent)
        self.geometry("800x600")

        self._pages = list(pages)
        self._config = config
        self._page_idx = 0
        labels = sum(1 for page in self._pages for slot in page if slot is not None)
        self._summary = f"{config.stock_mode.value.title()} stock, {labels} labels"

        self._create_widgets()
        self._draw_page()
