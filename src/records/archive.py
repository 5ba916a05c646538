"""
TOML archive of completed games.

The archive is one `[[games]]` table per record, in append order. Loading
is tolerant: a record that fails decoding or validation is reported in
`ArchiveLoad.rejected` and the remaining records are still loaded.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from records.codec import record_from_table, record_to_table
from records.errors import ValidationError
from records.schema import GameHistory
from records.store import RecordStore
from toml_io import TomlValue, load_toml, save_toml

GAMES_KEY = "games"


@dataclass(frozen=True, slots=True)
class RejectedRecord:
    """An archive entry that could not be stored.

    Attributes:
        index: 0-based position in the archive's games array.
        reason: Validation message.
    """

    index: int
    reason: str


@dataclass(frozen=True, slots=True)
class ArchiveLoad:
    """Result of reading an archive."""

    store: RecordStore
    rejected: tuple[RejectedRecord, ...]


def load_archive(path: Path) -> ArchiveLoad:
    """Read an archive file into a fresh store.

    Args:
        path: Archive path; a missing file is an empty archive.

    Returns:
        The populated store and any rejected entries.

    Raises:
        ValueError: If the file is not a TOML games archive at all.
    """
    store = RecordStore()
    rejected = import_records(path, store)
    return ArchiveLoad(store=store, rejected=rejected)


def import_records(
    path: Path, store: RecordStore
) -> tuple[RejectedRecord, ...]:
    """Append every record of an archive file to an existing store.

    Entries whose id is already stored are rejected like invalid ones.

    Returns:
        Rejected entries with their index in the file.

    Raises:
        ValueError: If the file is not a TOML games archive at all.
    """
    if not path.exists():
        return ()

    _, games = _read_games(path)
    rejected: list[RejectedRecord] = []
    for index, entry in enumerate(games):
        if not isinstance(entry, dict):
            rejected.append(RejectedRecord(index, "entry is not a table"))
            continue
        try:
            store.append(record_from_table(entry))
        except ValidationError as exc:
            rejected.append(RejectedRecord(index, str(exc)))
    return tuple(rejected)


def save_archive(path: Path, records: Iterable[GameHistory]) -> None:
    """Write records to an archive file, replacing its contents."""
    games: list[TomlValue] = [record_to_table(record) for record in records]
    save_toml(path, {GAMES_KEY: games})


def append_archive(path: Path, records: Iterable[GameHistory]) -> None:
    """Append records to an archive file without touching its entries.

    Entries already in the file are written back exactly as read, including
    ones that failed validation when the archive was loaded.

    Raises:
        ValueError: If the file exists but is not a TOML games archive.
    """
    data: dict[str, TomlValue] = {}
    games: list[TomlValue] = []
    if path.exists():
        data, games = _read_games(path)
    games.extend(record_to_table(record) for record in records)
    data[GAMES_KEY] = games
    save_toml(path, data)


def _read_games(
    path: Path,
) -> tuple[dict[str, TomlValue], list[TomlValue]]:
    """Load an archive file and its raw games array."""
    data = load_toml(path)
    games = data.get(GAMES_KEY, [])
    if not isinstance(games, list):
        raise ValueError(f"Archive key {GAMES_KEY!r} must be an array.")
    return data, games
