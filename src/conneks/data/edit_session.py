"""Edit session helper for batching field edits into one undo step.

EditSession accumulates field changes per record index. Nothing touches
the store until the session exits, when HistoryManager snapshots the
record list once and applies every pending change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.constants import FIELD_NAMES

if TYPE_CHECKING:
    from .history import HistoryManager


class EditSession:
    """Accumulator for changes to records.

    Usage:
        with history.edit_session("Paste") as session:
            session.set_field(0, "device_a_name", "SW-A")
            session.set_field(0, "device_a_port", "P3")
        # One undo frame is pushed on exit
    """

    def __init__(self, history: HistoryManager, description: str):
        """Initialize an edit session.

        Args:
            history: The HistoryManager being edited.
            description: Human-readable description for undo menu.
        """
        self._history = history
        self._description = description
        self._pending: dict[int, dict[str, str]] = {}

    @property
    def description(self) -> str:
        return self._description

    @property
    def pending(self) -> dict[int, dict[str, str]]:
        """Pending changes: record index -> {field_name: value}."""
        return self._pending

    def set_field(self, index: int, field_name: str, value: str) -> None:
        """Queue a change to one field of one record.

        Raises:
            KeyError: If field_name is not a record field.
            IndexError: If index is outside the record list.
        """
        if field_name not in FIELD_NAMES:
            raise KeyError(field_name)
        if not 0 <= index < len(self._history.store):
            raise IndexError(f"Record index out of range: {index}")
        self._pending.setdefault(index, {})[field_name] = value

    def get_effective_value(self, index: int, field_name: str) -> str:
        """Pending value if set, else the current stored value."""
        pending = self._pending.get(index, {})
        if field_name in pending:
            return pending[field_name]
        return getattr(self._history.store[index], field_name)

    def has_pending_changes(self) -> bool:
        """True if at least one queued value differs from the stored one."""
        store = self._history.store
        for index, changes in self._pending.items():
            current = store[index]
            for field_name, value in changes.items():
                if current.with_field(field_name, value) != current:
                    return True
        return False
