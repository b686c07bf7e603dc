"""History manager: snapshot-based undo/redo over the record store.

Every mutating operation follows the same sequence:
1. Validate arguments (nothing is touched on failure)
2. Snapshot the current record list onto the undo stack
3. Apply the mutation to the store
4. Notify observers

Undo/redo swap whole snapshots. Any fresh mutation clears the redo stack,
so history is strictly linear.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Generator, Iterable, Sequence
from contextlib import contextmanager

from ..models.constants import NEW_WIRE_BASE, NEW_WIRE_PREFIX
from ..models.wire_record import WireRecord, empty_record
from ..utils.debug_trace import get_logger
from .edit_session import EditSession
from .record_store import RecordStore
from .undo_frame import MAX_UNDO_DEPTH, UndoFrame

logger = get_logger(__name__)


class SnapshotError(RuntimeError):
    """The record list could not be copied; the mutation was not applied."""


class HistoryManager:
    """Owns a RecordStore and records its history.

    Usage:
        history = HistoryManager(RecordStore())
        history.add_record()
        history.set_field(0, "device_a_name", "SW-A")

        history.undo()
        history.redo()

    Attributes:
        undo_stack: Past snapshots, most recent last (capped at max_depth).
        redo_stack: Future snapshots, next redo first.
    """

    def __init__(self, store: RecordStore | None = None, max_depth: int = MAX_UNDO_DEPTH):
        """Initialize the history manager.

        Args:
            store: Store to manage (a new empty one if omitted)
            max_depth: Maximum number of undo frames retained
        """
        if max_depth < 1:
            raise ValueError("History depth must be positive")
        self.store = store if store is not None else RecordStore()
        self.max_depth = max_depth

        self.undo_stack: list[UndoFrame] = []
        self.redo_stack: list[UndoFrame] = []

        # Observer callbacks - called with this manager after every change
        self._observers: list[Callable[[HistoryManager], None]] = []

        # Current edit session (for nested check)
        self._current_session: EditSession | None = None

    # --- Snapshots ---

    def _take_snapshot(self, description: str) -> UndoFrame:
        """Copy the current record list into a frame without touching the stacks."""
        try:
            records = tuple(copy.deepcopy(self.store.records))
        except (TypeError, copy.Error, RecursionError) as e:
            raise SnapshotError(f"Could not snapshot records for {description!r}: {e}") from e
        return UndoFrame(records=records, description=description)

    def snapshot_before_mutation(self, description: str = "") -> None:
        """Push a copy of the current record list onto the undo stack.

        Must run before the mutation it guards. The copy is made before
        either stack is touched, so a failed copy leaves history intact.

        Raises:
            SnapshotError: If the record list cannot be copied
        """
        frame = self._take_snapshot(description)

        self.undo_stack.append(frame)
        # Limit undo stack depth (oldest dropped first)
        while len(self.undo_stack) > self.max_depth:
            self.undo_stack.pop(0)

        # New edit invalidates redo history
        self.redo_stack.clear()

    def _restore(self, frame: UndoFrame) -> None:
        self.store.replace_all(frame.records)

    # --- Observers ---

    def add_observer(self, callback: Callable[[HistoryManager], None]) -> None:
        """Register a callback run after every mutation, undo and redo."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[HistoryManager], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in list(self._observers):
            callback(self)

    # --- Mutations ---

    def _commit(self, description: str, apply: Callable[[], object]) -> None:
        """Snapshot, apply, notify."""
        self.snapshot_before_mutation(description)
        apply()
        logger.debug(f"{description}: {len(self.store)} records, {len(self.undo_stack)} undo frames")
        self._notify_observers()

    def _next_wire_number(self) -> str:
        used = self.store.wire_numbers()
        number = NEW_WIRE_BASE + len(self.store) + 1
        while f"{NEW_WIRE_PREFIX}{number}" in used:
            number += 1
        return f"{NEW_WIRE_PREFIX}{number}"

    def _unique_clone_id(self, wire_number: str) -> str:
        used = self.store.wire_numbers()
        suffix = 1
        while f"{wire_number}-{suffix}" in used:
            suffix += 1
        return f"{wire_number}-{suffix}"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.store):
            raise IndexError(f"Record index out of range: {index}")

    def add_record(self, record: WireRecord | None = None) -> WireRecord:
        """Append a record (a blank one with the next free C-number if omitted).

        Returns:
            The record that was appended
        """
        if record is None:
            record = empty_record(self._next_wire_number())
        self._commit("Add record", lambda: self.store.append(record))
        return record

    def delete_records(self, indices: Iterable[int]) -> int:
        """Delete records at the given positions.

        Returns:
            Number of records deleted (0 means nothing changed and no undo frame)
        """
        doomed = {idx for idx in indices if 0 <= idx < len(self.store)}
        if not doomed:
            return 0
        self._commit(f"Delete {len(doomed)} record(s)", lambda: self.store.remove_indices(doomed))
        return len(doomed)

    def delete_where(self, predicate: Callable[[WireRecord], bool], description: str = "Delete") -> int:
        """Delete every record matching predicate.

        Returns:
            Number of records deleted
        """
        doomed = [idx for idx, record in enumerate(self.store) if predicate(record)]
        if not doomed:
            return 0
        self._commit(description, lambda: self.store.remove_indices(doomed))
        return len(doomed)

    def delete_by_wire_number(self, wire_number: str) -> int:
        """Delete all records carrying the given identifier."""
        return self.delete_where(
            lambda record: record.wire_number == wire_number,
            description=f"Delete {wire_number}",
        )

    def clear(self) -> bool:
        """Delete all records.

        Returns:
            True if the store had records
        """
        if not len(self.store):
            return False
        self._commit("Clear all", lambda: self.store.replace_all([]))
        return True

    def clone_record(self, index: int) -> WireRecord:
        """Insert a copy of a record directly after it, with a unique identifier.

        Returns:
            The new record
        """
        self._check_index(index)
        source = self.store[index]
        clone = source.with_field("wire_number", self._unique_clone_id(source.wire_number))
        self._commit(f"Clone {source.wire_number}", lambda: self.store.insert(index + 1, clone))
        return clone

    def import_records(self, records: Sequence[WireRecord], replace: bool = False) -> int:
        """Bring imported records into the store as one undoable step.

        Args:
            records: Pre-mapped records, in file order
            replace: Replace the whole store instead of appending

        Returns:
            Number of records imported
        """
        records = list(records)
        if not records and not (replace and len(self.store)):
            return 0
        if replace:
            self._commit(f"Import {len(records)} records", lambda: self.store.replace_all(records))
        else:
            self._commit(f"Import {len(records)} records", lambda: self.store.extend(records))
        return len(records)

    def set_field(self, index: int, field_name: str, value: str) -> bool:
        """Change one field of one record.

        Returns:
            True if the value changed (an undo frame was pushed)
        """
        self._check_index(index)
        current = self.store[index]
        updated = current.with_field(field_name, value)
        if updated == current:
            return False
        self._commit(f"Edit {field_name}", lambda: self.store.set_record(index, updated))
        return True

    # --- Edit Session ---

    @contextmanager
    def edit_session(self, description: str = "") -> Generator[EditSession, None, None]:
        """Context manager for several field edits committed as one undo step.

        Changes are applied only if the block exits normally and at least
        one value actually changed.

        Args:
            description: Human-readable description for undo menu

        Yields:
            EditSession for accumulating changes
        """
        if self._current_session is not None:
            raise RuntimeError("Cannot nest edit_session calls")

        session = EditSession(self, description)
        self._current_session = session
        try:
            yield session
        finally:
            self._current_session = None

        if session.has_pending_changes():
            self._commit(description, lambda: self._apply_session(session))

    def _apply_session(self, session: EditSession) -> None:
        for index, changes in session.pending.items():
            record = self.store[index]
            for field_name, value in changes.items():
                record = record.with_field(field_name, value)
            self.store.set_record(index, record)

    # --- Undo/Redo ---

    def undo(self) -> bool:
        """Restore the previous record list.

        Returns:
            True if undo was performed (False on an empty undo stack)
        """
        if not self.undo_stack:
            return False

        # Copy current first so a failed snapshot changes nothing
        current = self._take_snapshot(self.undo_stack[-1].description)
        frame = self.undo_stack.pop()
        self.redo_stack.insert(0, current)
        self._restore(frame)

        logger.debug(f"Undo {frame.description!r}: {len(self.store)} records")
        self._notify_observers()
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone change.

        Returns:
            True if redo was performed (False on an empty redo stack)
        """
        if not self.redo_stack:
            return False

        current = self._take_snapshot(self.redo_stack[0].description)
        frame = self.redo_stack.pop(0)
        self.undo_stack.append(current)
        self._restore(frame)

        logger.debug(f"Redo {frame.description!r}: {len(self.store)} records")
        self._notify_observers()
        return True

    def get_undo_description(self) -> str | None:
        """Get description of next undo action."""
        if self.undo_stack:
            return self.undo_stack[-1].description
        return None

    def get_redo_description(self) -> str | None:
        """Get description of next redo action."""
        if self.redo_stack:
            return self.redo_stack[0].description
        return None

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return len(self.undo_stack) > 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return len(self.redo_stack) > 0
