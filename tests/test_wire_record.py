"""Tests for the WireRecord model."""

import dataclasses

import pytest

from conneks.models.constants import FIELD_NAMES, Side
from conneks.models.wire_record import WireRecord, empty_record, record_from_row


class TestWireRecord:
    """Tests for WireRecord behavior."""

    def test_defaults_empty(self):
        record = empty_record("C-1001")

        assert record.wire_number == "C-1001"
        assert all(getattr(record, name) == "" for name in FIELD_NAMES[1:])
        assert not record.has_content

    def test_frozen(self):
        record = WireRecord(wire_number="W1")

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.color = "RED"

    def test_with_field_returns_copy(self):
        record = WireRecord(wire_number="W1")
        updated = record.with_field("color", "  RED ")

        assert updated.color == "RED"
        assert record.color == ""
        assert updated.has_content

    def test_with_field_unknown_raises(self):
        with pytest.raises(KeyError):
            WireRecord(wire_number="W1").with_field("colour", "RED")

    def test_side_value(self):
        record = WireRecord(
            wire_number="W1",
            device_a_room="R1",
            device_a_rack="K1",
            device_b_name="PP-1",
            device_b_conn="HDMI",
        )

        assert record.side_value(Side.A, "location_1") == "R1"
        assert record.side_value(Side.A, "location_2") == "K1"
        assert record.side_value("B", "device") == "PP-1"
        assert record.side_value(Side.B, "connector") == "HDMI"

    def test_dict_round_trip(self):
        record = WireRecord(wire_number="W1", device_a_port="P3", tag3="X")

        assert WireRecord.from_dict(record.to_dict()) == record

    def test_to_row_field_order(self):
        record = WireRecord(wire_number="W1", remarks="last")
        row = record.to_row()

        assert len(row) == len(FIELD_NAMES)
        assert row[0] == "W1"
        assert row[-1] == "last"

    def test_record_from_row_pads_short_rows(self):
        record = record_from_row(["W1", "VID"])

        assert record.wire_number == "W1"
        assert record.signal_type == "VID"
        assert record.remarks == ""
