"""Tests for LayoutService pagination."""

import pytest

from conneks.models.constants import StockMode
from conneks.models.label_config import LabelConfig, PrintOptions
from conneks.models.wire_record import WireRecord
from conneks.services.layout_service import (
    EMPTY_SLOT,
    InvalidConfigurationError,
    LabelSlot,
    LayoutService,
)


@pytest.fixture
def r1():
    return WireRecord(wire_number="W1", device_a_name="SW-A", device_b_name="PP-1")


@pytest.fixture
def r2():
    return WireRecord(wire_number="W2", device_a_name="SW-B", device_b_name="PP-2")


def slot_ids(page):
    return [None if slot.is_empty else slot.record.wire_number for slot in page]


class TestLayout:
    """Tests for LayoutService.layout."""

    def test_offset_and_quantity_across_pages(self, r1, r2):
        pages = LayoutService.layout([r1, r2], quantity_per_record=2, start_offset=1, page_capacity=4)

        assert len(pages) == 2
        assert slot_ids(pages[0]) == [None, "W1", "W1", "W2"]
        assert slot_ids(pages[1]) == ["W2", None, None, None]

    def test_every_page_is_full_length(self, r1, r2):
        pages = LayoutService.layout([r1, r2] * 5, quantity_per_record=3, start_offset=7, page_capacity=32)

        assert all(len(page) == 32 for page in pages)

    def test_slot_count_matches_inputs(self, r1, r2):
        records = [r1, r2, r1]
        pages = LayoutService.layout(records, quantity_per_record=2, start_offset=5, page_capacity=4)

        # 5 blanks + 6 labels = 11 slots -> 3 pages of 4
        assert LayoutService.count_labels(pages) == 6
        assert len(pages) == 3
        assert slot_ids(pages[0]) == [None] * 4
        assert slot_ids(pages[1]) == [None, "W1", "W1", "W2"]

    def test_empty_records_yield_no_pages(self):
        assert LayoutService.layout([], quantity_per_record=2, start_offset=0, page_capacity=32) == []

    def test_empty_records_with_offset_yield_no_pages(self):
        assert LayoutService.layout([], quantity_per_record=1, start_offset=10, page_capacity=32) == []

    def test_exact_multiple_has_no_extra_page(self, r1, r2):
        pages = LayoutService.layout([r1, r2], quantity_per_record=2, start_offset=0, page_capacity=4)

        assert len(pages) == 1
        assert slot_ids(pages[0]) == ["W1", "W1", "W2", "W2"]

    def test_record_order_preserved(self, r1, r2):
        pages = LayoutService.layout([r2, r1], quantity_per_record=1, start_offset=0, page_capacity=32)

        assert slot_ids(pages[0])[:2] == ["W2", "W1"]

    def test_deterministic(self, r1, r2):
        first = LayoutService.layout([r1, r2], 2, 3, 4)
        second = LayoutService.layout([r1, r2], 2, 3, 4)

        assert first == second

    @pytest.mark.parametrize(
        "qty, offset, capacity",
        [(2, 0, 0), (2, 0, -1), (0, 0, 32), (-1, 0, 32), (1, -1, 32)],
    )
    def test_invalid_configuration_raises(self, r1, qty, offset, capacity):
        with pytest.raises(InvalidConfigurationError):
            LayoutService.layout([r1], qty, offset, capacity)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            LayoutService.layout([], 0, 0, 32)

    def test_build_slots(self, r1):
        slots = LayoutService.build_slots([r1], quantity_per_record=2, start_offset=1)

        assert slots == [EMPTY_SLOT, LabelSlot(r1), LabelSlot(r1)]


class TestLayoutForConfig:
    """Tests for stock-mode driven layout."""

    def test_sheet_mode_uses_sheet_capacity(self, r1):
        config = LabelConfig(stock_mode=StockMode.SHEET, quantity_per_record=2, start_offset=3)

        pages = LayoutService.layout_for_config([r1], config)

        assert len(pages) == 1
        assert len(pages[0]) == 32
        assert slot_ids(pages[0])[:5] == [None, None, None, "W1", "W1"]

    def test_roll_mode_one_page_per_record(self, r1, r2):
        config = LabelConfig(stock_mode=StockMode.ROLL, quantity_per_record=3)

        pages = LayoutService.layout_for_config([r1, r2], config)

        assert [slot_ids(page) for page in pages] == [["W1"] * 3, ["W2"] * 3]

    def test_roll_mode_ignores_start_offset(self, r1):
        config = LabelConfig(stock_mode=StockMode.ROLL, quantity_per_record=2, start_offset=5)

        pages = LayoutService.layout_for_config([r1], config)

        assert slot_ids(pages[0]) == ["W1", "W1"]

    def test_sheet_offset_past_first_sheet_raises(self, r1):
        config = LabelConfig(stock_mode=StockMode.SHEET, start_offset=32)

        with pytest.raises(InvalidConfigurationError):
            LayoutService.layout_for_config([r1], config)

    def test_last_slot_offset_allowed(self, r1):
        config = LabelConfig(stock_mode=StockMode.SHEET, quantity_per_record=2, start_offset=31)

        pages = LayoutService.layout_for_config([r1], config)

        assert len(pages) == 2
        assert slot_ids(pages[0])[31] == "W1"
        assert slot_ids(pages[1])[0] == "W1"


class TestRender:
    """Tests for print-surface rendering."""

    def test_render_page_blank_slots_are_none(self, r1):
        pages = LayoutService.layout([r1], quantity_per_record=1, start_offset=1, page_capacity=3)

        rendered = LayoutService.render_page(pages[0], PrintOptions())

        assert rendered[0] is None
        assert rendered[1].lines == ("W1 SW-A", "W1 PP-1", "W1 SW-A", "W1 PP-1")
        assert rendered[2] is None

    def test_render_pages_follows_page_structure(self, r1, r2):
        pages = LayoutService.layout([r1, r2], 2, 0, 3)

        rendered = LayoutService.render_pages(pages, PrintOptions())

        assert [len(page) for page in rendered] == [3, 3]
        assert rendered[1][0].lines[0] == "W2 SW-B"
        assert rendered[1][2] is None

    def test_count_labels(self, r1, r2):
        pages = LayoutService.layout([r1, r2], 3, 2, 4)

        assert LayoutService.count_labels(pages) == 6
