"""
Filtered and sorted views over game records.

All functions are pure: they take any sequence of records and return a
new tuple without touching the store they came from.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from darts_types import ALL_GAMES, GAME_TYPES, GameTypeFilter
from records.schema import GameHistory, parse_completed_at


def filter_by_type(
    records: Sequence[GameHistory], game_type: GameTypeFilter
) -> tuple[GameHistory, ...]:
    """Keep records of one game type, or all of them for "all".

    Args:
        records: Input records.
        game_type: A game type or "all".

    Returns:
        Matching records in input order.

    Raises:
        ValueError: If game_type is not a known filter value.
    """
    if game_type == ALL_GAMES:
        return tuple(records)
    if game_type not in GAME_TYPES:
        raise ValueError(f"unknown game type filter: {game_type!r}")
    return tuple(record for record in records if record.game_type == game_type)


def sort_by_recency(
    records: Sequence[GameHistory],
) -> tuple[GameHistory, ...]:
    """Order records most recent first by completedAt.

    Records with identical timestamps keep their input order.

    Raises:
        MalformedTimestampError: If any completedAt cannot be parsed.
    """
    # Parse every key up front so a bad record fails before sorting.
    keyed: list[tuple[datetime, GameHistory]] = [
        (parse_completed_at(record.completed_at, record.id), record)
        for record in records
    ]
    # list.sort stays stable with reverse=True.
    keyed.sort(key=lambda pair: pair[0], reverse=True)
    return tuple(record for _, record in keyed)


def recent_games(
    records: Sequence[GameHistory], limit: int
) -> tuple[GameHistory, ...]:
    """Return the `limit` most recently completed records."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    return sort_by_recency(records)[:limit]


def find_game(
    records: Sequence[GameHistory], game_id: str
) -> GameHistory | None:
    """Return the record with the given id, or None."""
    for record in records:
        if record.id == game_id:
            return record
    return None
