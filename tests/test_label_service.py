"""Tests for LabelService line building and font sizing."""

import pytest

from conneks.models.constants import PREVIEW_PLACEHOLDER, Side
from conneks.models.label_config import PrintOptions
from conneks.models.wire_record import WireRecord
from conneks.services.label_service import LabelService


@pytest.fixture
def record():
    return WireRecord(
        wire_number="W1",
        device_a_room="",
        device_a_rack="RACK1",
        device_a_name="SW-A",
        device_a_conn="RJ45",
        device_a_port="P3",
        device_b_room="ROOM2",
        device_b_rack="",
        device_b_name="PP-1",
        device_b_port="12",
    )


class TestBuildLine:
    """Tests for LabelService.build_line."""

    def test_empty_fields_omitted(self, record):
        line = LabelService.build_line(record, Side.A, PrintOptions())

        assert line == "W1 RACK1 SW-A P3"

    def test_side_b(self, record):
        line = LabelService.build_line(record, Side.B, PrintOptions())

        assert line == "W1 ROOM2 PP-1 12"

    def test_side_as_string(self, record):
        assert LabelService.build_line(record, "B", PrintOptions()) == "W1 ROOM2 PP-1 12"

    def test_flags_off(self, record):
        options = PrintOptions(location_1=False, location_2=False, port=False)

        assert LabelService.build_line(record, Side.A, options) == "W1 SW-A"
        assert LabelService.build_line(record, Side.B, options) == "W1 PP-1"

    def test_device_always_included(self, record):
        options = PrintOptions(location_1=False, location_2=False, port=False)
        line = LabelService.build_line(record, Side.A, options)

        assert "SW-A" in line

    def test_connector_not_printed(self, record):
        assert "RJ45" not in LabelService.build_line(record, Side.A, PrintOptions())

    def test_identifier_only(self):
        bare = WireRecord(wire_number="C-1001")

        assert LabelService.build_line(bare, Side.A, PrintOptions()) == "C-1001"


class TestFontSize:
    """Tests for the text-fit tiers."""

    @pytest.mark.parametrize(
        "length, expected",
        [
            (0, 14),
            (18, 14),
            (19, 12),
            (22, 12),
            (23, 10),
            (24, 10),
            (25, 9),
            (34, 9),
            (35, 8),
            (40, 8),
            (41, 7),
            (120, 7),
        ],
    )
    def test_tiers(self, length, expected):
        assert LabelService.font_size_for("x" * length, "") == expected

    def test_longer_line_wins(self):
        assert LabelService.font_size_tier("x" * 20, "x" * 25) == "9pt"
        assert LabelService.font_size_tier("x" * 25, "x" * 20) == "9pt"

    def test_monotone_non_increasing(self):
        sizes = [LabelService.font_size_for("x" * n, "") for n in range(60)]

        assert sizes == sorted(sizes, reverse=True)


class TestBuildLabel:
    """Tests for the four-line label body."""

    def test_alternating_sides(self, record):
        label = LabelService.build_label(record, PrintOptions())

        assert label.lines == (
            "W1 RACK1 SW-A P3",
            "W1 ROOM2 PP-1 12",
            "W1 RACK1 SW-A P3",
            "W1 ROOM2 PP-1 12",
        )
        assert label.font_size == 14
        assert label.font_size_tier == "14pt"

    def test_preview_text(self, record):
        text = LabelService.preview_text(record, PrintOptions())

        assert text.splitlines() == list(LabelService.build_label(record, PrintOptions()).lines)

    def test_preview_placeholder(self):
        assert LabelService.preview_text(None, PrintOptions()) == PREVIEW_PLACEHOLDER
        assert PREVIEW_PLACEHOLDER == "Select a cable to preview."
