"""
Append-only store of completed games.

Design constraint:
- Only `append` mutates; it validates first and is serialized by a lock
- Readers get tuple snapshots, never a reference to internal storage
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from darts_types import GameId
from records.errors import ValidationError
from records.schema import GameHistory, validate_record


class RecordStore:
    """Completed games in append order."""

    def __init__(self, records: Iterable[GameHistory] = ()) -> None:
        """Initialize the store, appending any initial records in order."""
        self._lock = threading.Lock()
        self._records: list[GameHistory] = []
        self._ids: set[GameId] = set()
        for record in records:
            self.append(record)

    def append(self, record: GameHistory) -> None:
        """Validate and append one record.

        Raises:
            ValidationError: If the record is invalid or its id is already
                stored. The store is left unchanged.
        """
        validate_record(record)
        with self._lock:
            if record.id in self._ids:
                raise ValidationError(f"duplicate game id {record.id!r}")
            self._records.append(record)
            self._ids.add(record.id)

    def all(self) -> tuple[GameHistory, ...]:
        """Return a snapshot of every record in append order."""
        with self._lock:
            return tuple(self._records)

    def get(self, game_id: str) -> GameHistory | None:
        """Return the record with the given id, if stored."""
        with self._lock:
            for record in self._records:
                if record.id == game_id:
                    return record
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
