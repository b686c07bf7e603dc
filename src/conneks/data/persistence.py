"""Key-value persistence for the record list.

Provides an abstract key-value store and implementations backed by a JSON
file and by memory. The editor saves the record list after every change
and loads it once at startup; history is never persisted.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..models.constants import STORAGE_KEY
from ..models.wire_record import WireRecord
from ..utils.debug_trace import get_logger

logger = get_logger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".conneks"


class KeyValueStore(ABC):
    """Abstract base class for persistence backends."""

    @abstractmethod
    def load(self, key: str) -> Any | None:
        """Return the value stored under key, or None if absent."""

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""


class MemoryStore(KeyValueStore):
    """In-memory store (tests, and sessions that should not touch disk)."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


class JsonFileStore(KeyValueStore):
    """Store backed by one JSON file per key inside a directory.

    Writes go to a temporary file that replaces the target, so a crash
    mid-save never leaves a truncated file behind.
    """

    def __init__(self, directory: Path | str = DEFAULT_DATA_DIR):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def load(self, key: str) -> Any | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            return None

    def save(self, key: str, value: Any) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2)
        os.replace(tmp_path, path)


def load_records(store: KeyValueStore, key: str = STORAGE_KEY) -> list[WireRecord]:
    """Load the saved record list (empty if nothing valid is stored)."""
    data = store.load(key)
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning(f"Ignoring stored {key!r}: expected a list, got {type(data).__name__}")
        return []
    return [WireRecord.from_dict(item) for item in data if isinstance(item, dict)]


def save_records(
    store: KeyValueStore, records: Sequence[WireRecord], key: str = STORAGE_KEY
) -> None:
    """Save the record list."""
    store.save(key, [record.to_dict() for record in records])
