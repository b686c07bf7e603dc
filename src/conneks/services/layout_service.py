"""Page layout service: label slots and pages for a print batch.

The flat slot sequence is built first, then cut into pages:

    [empty] * start_offset + [r1] * qty + [r2] * qty + ...

Pages are consecutive chunks of page_capacity slots; the last page is
padded with empty slots. Sheet and roll stock run the same algorithm with
different capacity/offset settings (see LabelConfig).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.label_config import LabelConfig, PrintOptions
from ..models.wire_record import WireRecord
from ..utils.debug_trace import get_logger, perf_timer
from .label_service import LabelService, LabelText

logger = get_logger(__name__)


class InvalidConfigurationError(ValueError):
    """Layout parameters are out of range."""


@dataclass(frozen=True)
class LabelSlot:
    """One printable position on the stock; record is None for a blank slot."""

    record: WireRecord | None = None

    @property
    def is_empty(self) -> bool:
        return self.record is None


EMPTY_SLOT = LabelSlot()

# A page is an immutable, fixed-length run of slots
Page = tuple[LabelSlot, ...]


class LayoutService:
    """Maps records onto fixed-capacity pages.

    All methods are static as the service is stateless.
    """

    @staticmethod
    def _validate(quantity_per_record: int, start_offset: int, page_capacity: int) -> None:
        if page_capacity <= 0:
            raise InvalidConfigurationError(f"Page capacity must be positive, got {page_capacity}")
        if quantity_per_record <= 0:
            raise InvalidConfigurationError(
                f"Quantity per record must be positive, got {quantity_per_record}"
            )
        if start_offset < 0:
            raise InvalidConfigurationError(f"Start offset must not be negative, got {start_offset}")

    @staticmethod
    def build_slots(
        records: Sequence[WireRecord],
        quantity_per_record: int,
        start_offset: int = 0,
    ) -> list[LabelSlot]:
        """Build the flat slot sequence (no page padding).

        Returns:
            start_offset blank slots followed by each record repeated
            quantity_per_record times, in record order
        """
        slots = [EMPTY_SLOT] * start_offset
        for record in records:
            slots.extend([LabelSlot(record)] * quantity_per_record)
        return slots

    @staticmethod
    def layout(
        records: Sequence[WireRecord],
        quantity_per_record: int,
        start_offset: int,
        page_capacity: int,
    ) -> list[Page]:
        """Partition records into pages.

        Args:
            records: Records in print order
            quantity_per_record: Copies of each record (>= 1)
            start_offset: Blank slots before the first record (>= 0)
            page_capacity: Slots per page (>= 1)

        Returns:
            Pages in order. No records means no pages, whatever the offset.

        Raises:
            InvalidConfigurationError: If any parameter is out of range
        """
        LayoutService._validate(quantity_per_record, start_offset, page_capacity)
        if not records:
            return []

        with perf_timer("layout", row_count=len(records)):
            slots = LayoutService.build_slots(records, quantity_per_record, start_offset)
            pages: list[Page] = []
            for start in range(0, len(slots), page_capacity):
                chunk = slots[start : start + page_capacity]
                chunk.extend([EMPTY_SLOT] * (page_capacity - len(chunk)))
                pages.append(tuple(chunk))

        logger.debug(f"Laid out {len(slots)} slots on {len(pages)} page(s) of {page_capacity}")
        return pages

    @staticmethod
    def layout_for_config(records: Sequence[WireRecord], config: LabelConfig) -> list[Page]:
        """Lay out records using the capacity/offset rules of the configured stock.

        Raises:
            InvalidConfigurationError: If the configuration is out of range, or the
                start offset does not fall on the first sheet
        """
        if config.effective_start_offset >= config.page_capacity > 0:
            raise InvalidConfigurationError(
                f"Start offset {config.start_offset} must be less than sheet capacity "
                f"{config.page_capacity}"
            )
        return LayoutService.layout(
            records,
            quantity_per_record=config.quantity_per_record,
            start_offset=config.effective_start_offset,
            page_capacity=config.page_capacity,
        )

    @staticmethod
    def render_page(page: Page, options: PrintOptions) -> list[LabelText | None]:
        """Turn a page into print-surface content (None for blank slots)."""
        rendered: list[LabelText | None] = []
        cache: dict[WireRecord, LabelText] = {}
        for slot in page:
            if slot.record is None:
                rendered.append(None)
                continue
            if slot.record not in cache:
                cache[slot.record] = LabelService.build_label(slot.record, options)
            rendered.append(cache[slot.record])
        return rendered

    @staticmethod
    def render_pages(pages: Sequence[Page], options: PrintOptions) -> list[list[LabelText | None]]:
        """render_page() for every page."""
        return [LayoutService.render_page(page, options) for page in pages]

    @staticmethod
    def count_labels(pages: Sequence[Page]) -> int:
        """Number of non-blank slots across pages."""
        return sum(1 for page in pages for slot in page if not slot.is_empty)
