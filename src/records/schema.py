"""
Immutable shape of a completed darts game and its statistics payload.

Records are created once by the live game engine, validated on append,
and never mutated afterwards. Nested mappings are exposed as read-only
views so a record cannot be changed through its fields.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from types import MappingProxyType

from darts_types import GAME_TYPES, GameId, GameType, PlayerId
from records.errors import MalformedTimestampError, ValidationError


@dataclass(frozen=True, slots=True)
class Player:
    """A participant as recorded in one game."""

    id: PlayerId
    name: str
    avatar_color: str


@dataclass(frozen=True, slots=True)
class GameRules:
    """Match format.

    Attributes:
        best_of: Number of legs in the match; positive and odd.
    """

    best_of: int

    @property
    def legs_to_win(self) -> int:
        """Return the number of legs that decides the match."""
        return self.best_of // 2 + 1


@dataclass(frozen=True, slots=True)
class PlayerStats:
    """Raw per-player counters for one game.

    `highest_checkout` is None when the player never finished a leg.
    """

    darts_thrown: int
    average_per_turn: float
    highest_turn: int
    highest_checkout: int | None
    doubles_hit: int
    triples_hit: int


@dataclass(frozen=True, slots=True)
class Statistics:
    """Per-player statistics keyed by player id."""

    player_stats: Mapping[PlayerId, PlayerStats]

    def __post_init__(self) -> None:
        # Freeze the mapping so callers only ever see a read-only view.
        object.__setattr__(
            self, "player_stats", MappingProxyType(dict(self.player_stats))
        )


@dataclass(frozen=True, slots=True)
class GameHistory:
    """Root record of a completed game."""

    id: GameId
    game_type: GameType
    players: tuple[Player, ...]
    winner_id: PlayerId
    legs_won: Mapping[PlayerId, int]
    rules: GameRules
    statistics: Statistics
    completed_at: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(
            self, "legs_won", MappingProxyType(dict(self.legs_won))
        )

    def player_ids(self) -> tuple[PlayerId, ...]:
        """Return player ids in recorded order."""
        return tuple(player.id for player in self.players)

    def legs_for(self, player_id: PlayerId) -> int:
        """Return legs won by a player, 0 when the player has no entry."""
        return self.legs_won.get(player_id, 0)


def parse_completed_at(value: str, game_id: str | None = None) -> datetime:
    """Parse an ISO-8601 completion timestamp.

    Args:
        value: Timestamp string, e.g. "2025-01-05T15:04:05.120Z".
        game_id: Optional record id used in the error message.

    Returns:
        Timezone-aware datetime; naive values are taken as UTC.

    Raises:
        MalformedTimestampError: If the value cannot be parsed or has no
            time component.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise MalformedTimestampError(value, game_id) from exc
    if _is_date_only(value):
        raise MalformedTimestampError(value, game_id)
    # Mixing naive and aware datetimes cannot be ordered.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _is_date_only(value: str) -> bool:
    """Return True when value is a bare calendar date like "2025-01-05"."""
    try:
        _ = date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_record(record: GameHistory) -> None:
    """Check the invariants a record must satisfy before it is stored.

    Args:
        record: Candidate record.

    Raises:
        ValidationError: On unknown game type, fewer than two players,
            duplicate player ids, a winner outside the player list, an
            invalid best-of, negative counters, or a malformed timestamp.
    """
    game_id = record.id
    if not game_id:
        raise ValidationError("game id must be a non-empty string")
    if record.game_type not in GAME_TYPES:
        raise ValidationError(
            f"game {game_id!r}: unknown game type {record.game_type!r}"
        )

    ids = record.player_ids()
    if len(ids) < 2:
        raise ValidationError(
            f"game {game_id!r}: needs at least 2 players, got {len(ids)}"
        )
    seen: set[PlayerId] = set()
    for player_id in ids:
        if player_id in seen:
            raise ValidationError(
                f"game {game_id!r}: duplicate player id {player_id!r}"
            )
        seen.add(player_id)
    if record.winner_id not in seen:
        raise ValidationError(
            f"game {game_id!r}: winner {record.winner_id!r} is not a player"
        )

    best_of = record.rules.best_of
    if best_of < 1 or best_of % 2 == 0:
        raise ValidationError(
            f"game {game_id!r}: best_of must be a positive odd int, "
            f"got {best_of}"
        )

    for player_id, legs in record.legs_won.items():
        if legs < 0:
            raise ValidationError(
                f"game {game_id!r}: negative legs won for {player_id!r}"
            )

    for player_id, stats in record.statistics.player_stats.items():
        _validate_stats(game_id, player_id, stats)

    _ = parse_completed_at(record.completed_at, game_id)


def _validate_stats(
    game_id: str, player_id: PlayerId, stats: PlayerStats
) -> None:
    """Reject negative counters and a non-finite average."""
    if not math.isfinite(stats.average_per_turn):
        raise ValidationError(
            f"game {game_id!r}: non-finite average_per_turn for {player_id!r}"
        )
    counters = {
        "darts_thrown": stats.darts_thrown,
        "average_per_turn": stats.average_per_turn,
        "highest_turn": stats.highest_turn,
        "doubles_hit": stats.doubles_hit,
        "triples_hit": stats.triples_hit,
    }
    if stats.highest_checkout is not None:
        counters["highest_checkout"] = stats.highest_checkout
    for name, value in counters.items():
        if value < 0:
            raise ValidationError(
                f"game {game_id!r}: negative {name} for {player_id!r}"
            )
