"""
Diagnostic event log stored as TOML.

Each event is an `event_NNNN` table in events.toml with monotonic
numbering. Events record data problems found while reading the archive
or resolving standings; they never stop a command.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path

from records.archive import RejectedRecord
from records.errors import RankingInconsistencyError
from toml_io import TomlValue, load_toml, save_toml

_EVENT_KEY = re.compile(r"event_(\d+)")


def append_event(path: Path, event: dict[str, TomlValue]) -> str:
    """Append an event to an events file with stable numbering.

    Args:
        path: events.toml path; created when missing.
        event: Event payload to append.

    Returns:
        Key the event was stored under, e.g. "event_0003".
    """
    data = load_toml(path) if path.exists() else {}
    key = _next_event_key(data)
    data[key] = event
    save_toml(path, data)
    return key


def _next_event_key(data: Mapping[str, TomlValue]) -> str:
    """Return the key after the highest numbered event in data.

    Keys that are not `event_` plus digits are ignored.
    """
    numbers = [0]
    for key in data:
        match = _EVENT_KEY.fullmatch(key)
        if match is not None:
            numbers.append(int(match.group(1)))
    return f"event_{max(numbers) + 1:04d}"


def rejected_record_event(
    archive: Path, rejected: RejectedRecord
) -> dict[str, TomlValue]:
    """Build an event for an archive entry that failed validation."""
    return {
        "event": "rejected_record",
        "archive": archive.as_posix(),
        "index": rejected.index,
        "reason": rejected.reason,
        "logged_utc": _now(),
    }


def ranking_inconsistency_event(
    error: RankingInconsistencyError,
) -> dict[str, TomlValue]:
    """Build an event for a winner that disagrees with legs won."""
    leaders: list[TomlValue] = list(error.leader_ids)
    return {
        "event": "ranking_inconsistency",
        "game_id": error.game_id,
        "recorded_winner_id": error.recorded_winner_id,
        "leader_ids": leaders,
        "message": str(error),
        "logged_utc": _now(),
    }


def _now() -> str:
    """Return the current UTC time in ISO format."""
    return datetime.now(UTC).isoformat()
