"""
Wire codec between GameHistory records and TOML-compatible tables.

Wire keys are camelCase as produced by the live game engine:
id, gameType, players[{id, name, avatarColor}], winnerId, legsWon,
rules{bestOf}, statistics{playerStats{<id>: {...}}}, completedAt.
An absent highestCheckout is an omitted key.
"""

from __future__ import annotations

from typing import cast

from darts_types import GAME_TYPES, GameId, GameType, PlayerId
from records.errors import ValidationError
from records.schema import (
    GameHistory,
    GameRules,
    Player,
    PlayerStats,
    Statistics,
)
from toml_io import TomlValue


def record_to_table(game: GameHistory) -> dict[str, TomlValue]:
    """Encode a record into its wire table."""
    players: list[TomlValue] = [
        {"id": p.id, "name": p.name, "avatarColor": p.avatar_color}
        for p in game.players
    ]
    legs_won: dict[str, TomlValue] = {
        player_id: legs for player_id, legs in game.legs_won.items()
    }
    player_stats: dict[str, TomlValue] = {
        player_id: _stats_to_table(stats)
        for player_id, stats in game.statistics.player_stats.items()
    }
    return {
        "id": game.id,
        "gameType": game.game_type,
        "players": players,
        "winnerId": game.winner_id,
        "legsWon": legs_won,
        "rules": {"bestOf": game.rules.best_of},
        "statistics": {"playerStats": player_stats},
        "completedAt": game.completed_at,
    }


def record_from_table(table: dict[str, TomlValue]) -> GameHistory:
    """Decode a wire table into a record.

    Only shapes and types are checked here; semantic invariants are
    enforced when the record is appended to a store.

    Raises:
        ValidationError: On missing keys or values of the wrong type.
    """
    game_type = _get_str(table, "gameType", "game")
    if game_type not in GAME_TYPES:
        raise ValidationError(f"unknown game type {game_type!r}")

    players_raw = table.get("players")
    if not isinstance(players_raw, list):
        raise ValidationError("Missing array key: players")
    players = tuple(
        _player_from_table(_as_table(item, f"players[{idx}]"))
        for idx, item in enumerate(players_raw)
    )

    legs_table = _get_table(table, "legsWon", "game")
    legs_won = {
        PlayerId(player_id): _require_int(value, f"legsWon.{player_id}")
        for player_id, value in legs_table.items()
    }

    rules_table = _get_table(table, "rules", "game")
    statistics_table = _get_table(table, "statistics", "game")
    stats_table = _get_table(statistics_table, "playerStats", "statistics")
    player_stats = {
        PlayerId(player_id): _stats_from_table(
            _as_table(value, f"playerStats.{player_id}")
        )
        for player_id, value in stats_table.items()
    }

    return GameHistory(
        id=GameId(_get_str(table, "id", "game")),
        game_type=cast(GameType, game_type),
        players=players,
        winner_id=PlayerId(_get_str(table, "winnerId", "game")),
        legs_won=legs_won,
        rules=GameRules(best_of=_get_int(rules_table, "bestOf", "rules")),
        statistics=Statistics(player_stats=player_stats),
        completed_at=_get_str(table, "completedAt", "game"),
    )


def _stats_to_table(stats: PlayerStats) -> dict[str, TomlValue]:
    """Encode one player's statistics, omitting an absent checkout."""
    data: dict[str, TomlValue] = {
        "dartsThrown": stats.darts_thrown,
        "averagePerTurn": stats.average_per_turn,
        "highestTurn": stats.highest_turn,
        "doublesHit": stats.doubles_hit,
        "triplesHit": stats.triples_hit,
    }
    if stats.highest_checkout is not None:
        data["highestCheckout"] = stats.highest_checkout
    return data


def _stats_from_table(table: dict[str, TomlValue]) -> PlayerStats:
    """Decode one player's statistics."""
    checkout = table.get("highestCheckout")
    return PlayerStats(
        darts_thrown=_get_int(table, "dartsThrown", "playerStats"),
        average_per_turn=_get_float(table, "averagePerTurn", "playerStats"),
        highest_turn=_get_int(table, "highestTurn", "playerStats"),
        highest_checkout=(
            None
            if checkout is None
            else _require_int(checkout, "playerStats.highestCheckout")
        ),
        doubles_hit=_get_int(table, "doublesHit", "playerStats"),
        triples_hit=_get_int(table, "triplesHit", "playerStats"),
    )


def _player_from_table(table: dict[str, TomlValue]) -> Player:
    """Decode one player entry."""
    return Player(
        id=PlayerId(_get_str(table, "id", "player")),
        name=_get_str(table, "name", "player"),
        avatar_color=_get_str(table, "avatarColor", "player"),
    )


def _as_table(value: TomlValue, where: str) -> dict[str, TomlValue]:
    """Narrow a value to a table or raise."""
    if not isinstance(value, dict):
        raise ValidationError(f"Expected table at {where}")
    return value


def _require_int(value: TomlValue, where: str) -> int:
    """Narrow a value to an int, rejecting bools."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Expected int at {where}")
    return value


def _get_table(
    table: dict[str, TomlValue], key: str, where: str
) -> dict[str, TomlValue]:
    """Fetch a required subtable."""
    value = table.get(key)
    if not isinstance(value, dict):
        raise ValidationError(f"Missing table key: {where}.{key}")
    return value


def _get_str(table: dict[str, TomlValue], key: str, where: str) -> str:
    """Fetch a required string."""
    value = table.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"Missing string key: {where}.{key}")
    return value


def _get_int(table: dict[str, TomlValue], key: str, where: str) -> int:
    """Fetch a required int; bools are not ints on the wire."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Missing int key: {where}.{key}")
    return value


def _get_float(table: dict[str, TomlValue], key: str, where: str) -> float:
    """Fetch a required float; ints are coerced."""
    value = table.get(key)
    if isinstance(value, bool):
        raise ValidationError(f"Missing float key: {where}.{key}")
    if isinstance(value, int):
        return float(value)
    if not isinstance(value, float):
        raise ValidationError(f"Missing float key: {where}.{key}")
    return value
