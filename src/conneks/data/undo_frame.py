"""Undo frame for storing snapshots of the record list.

A single UndoFrame captures the full record list before a change, allowing
undo/redo operations to restore previous states.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models.constants import MAX_UNDO_DEPTH

if TYPE_CHECKING:
    from ..models.wire_record import WireRecord

__all__ = ["MAX_UNDO_DEPTH", "UndoFrame"]


@dataclass
class UndoFrame:
    """Snapshot of the record list at one point in the edit timeline.

    Attributes:
        records: Structurally independent copy of the store contents, in order.
        description: Human-readable description of the change (for menu display).
    """

    records: tuple[WireRecord, ...] = field(default_factory=tuple)
    description: str = ""

    def __repr__(self) -> str:
        return f"UndoFrame({self.description!r}, {len(self.records)} records)"
