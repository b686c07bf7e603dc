"""Label text service: printed lines and font sizing for one record.

Builds the per-side text lines for a cable label and picks a font size
tier from their length. Pure functions, no state.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models.constants import DEFAULT_FONT_SIZE, FONT_SIZE_TIERS, PREVIEW_PLACEHOLDER, Side
from ..models.label_config import PrintOptions
from ..models.wire_record import WireRecord


@dataclass(frozen=True)
class LabelText:
    """Ready-to-render content of one label.

    Attributes:
        lines: Four lines in A, B, A, B order (both ends readable on wrap-around stock)
        font_size: Font size in points for every line
    """

    lines: tuple[str, str, str, str]
    font_size: int

    @property
    def font_size_tier(self) -> str:
        """Font size as a CSS-style string, e.g. '9pt'."""
        return f"{self.font_size}pt"

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class LabelService:
    """Builds label text from records.

    All methods are static as the service is stateless.
    """

    @staticmethod
    def build_line(record: WireRecord, side: Side | str, options: PrintOptions) -> str:
        """Build the printed line for one end of a cable.

        Parts, in order: wire number, location 1, location 2, device name,
        port. Optional parts are included only when their flag is set; the
        device name is always included. Empty parts are dropped.

        Args:
            record: The record to print
            side: Side.A or Side.B
            options: Print option flags

        Returns:
            Parts joined by single spaces
        """
        side = Side(side)
        parts = [record.wire_number]
        if options.location_1:
            parts.append(record.side_value(side, "location_1"))
        if options.location_2:
            parts.append(record.side_value(side, "location_2"))
        parts.append(record.side_value(side, "device"))
        if options.port:
            parts.append(record.side_value(side, "port"))
        return " ".join(part for part in parts if part)

    @staticmethod
    def font_size_for(line_a: str, line_b: str) -> int:
        """Pick a font size from the longer of the two side lines.

        Longer text gets a smaller size. Text that still does not fit at the
        smallest size is clipped by the label, never wrapped or truncated here.
        """
        max_len = max(len(line_a), len(line_b))
        for threshold, size in FONT_SIZE_TIERS:
            if max_len > threshold:
                return size
        return DEFAULT_FONT_SIZE

    @staticmethod
    def font_size_tier(line_a: str, line_b: str) -> str:
        """Font size as a '<n>pt' string."""
        return f"{LabelService.font_size_for(line_a, line_b)}pt"

    @staticmethod
    def build_label(record: WireRecord, options: PrintOptions) -> LabelText:
        """Build the four-line label body and its font size."""
        line_a = LabelService.build_line(record, Side.A, options)
        line_b = LabelService.build_line(record, Side.B, options)
        return LabelText(
            lines=(line_a, line_b, line_a, line_b),
            font_size=LabelService.font_size_for(line_a, line_b),
        )

    @staticmethod
    def preview_text(record: WireRecord | None, options: PrintOptions) -> str:
        """Text for the live preview box (placeholder when nothing is selected)."""
        if record is None:
            return PREVIEW_PLACEHOLDER
        return LabelService.build_label(record, options).text
