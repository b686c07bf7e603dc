"""Ordered record collection owned by the history manager.

RecordStore is a plain container: it knows nothing about undo. Editing
code must go through HistoryManager, which snapshots the store before
calling any of the mutating methods here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from ..models.wire_record import WireRecord


class RecordStore:
    """Ordered, mutable sequence of WireRecords.

    Order is meaningful: it is both the grid display order and the print
    order. Records are immutable values, so copies of the list never share
    mutable state with the store.
    """

    def __init__(self, records: Iterable[WireRecord] = ()):
        self._records: list[WireRecord] = list(records)

    # --- Read access ---

    @property
    def records(self) -> list[WireRecord]:
        """Copy of the current record list."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WireRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> WireRecord:
        return self._records[index]

    def wire_numbers(self) -> set[str]:
        """Set of identifiers currently in use."""
        return {record.wire_number for record in self._records}

    def index_of(self, wire_number: str) -> int | None:
        """Index of the first record with the given identifier, or None."""
        for idx, record in enumerate(self._records):
            if record.wire_number == wire_number:
                return idx
        return None

    # --- Mutation (HistoryManager only) ---

    def append(self, record: WireRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[WireRecord]) -> None:
        self._records.extend(records)

    def insert(self, index: int, record: WireRecord) -> None:
        self._records.insert(index, record)

    def remove_indices(self, indices: Iterable[int]) -> int:
        """Remove records at the given positions.

        Returns:
            Number of records removed
        """
        doomed = set(indices)
        kept = [record for idx, record in enumerate(self._records) if idx not in doomed]
        removed = len(self._records) - len(kept)
        self._records = kept
        return removed

    def remove_where(self, predicate: Callable[[WireRecord], bool]) -> int:
        """Remove every record matching predicate.

        Returns:
            Number of records removed
        """
        kept = [record for record in self._records if not predicate(record)]
        removed = len(self._records) - len(kept)
        self._records = kept
        return removed

    def replace_all(self, records: Iterable[WireRecord]) -> None:
        self._records = list(records)

    def set_record(self, index: int, record: WireRecord) -> None:
        self._records[index] = record
