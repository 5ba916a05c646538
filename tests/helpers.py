"""Record builders shared by the test modules."""

from __future__ import annotations

from darts_types import GameId, GameType, PlayerId
from records.schema import (
    GameHistory,
    GameRules,
    Player,
    PlayerStats,
    Statistics,
)


def make_player(player_id: str, name: str, color: str = "#00ff88") -> Player:
    """Return a Player with a default avatar color."""
    return Player(id=PlayerId(player_id), name=name, avatar_color=color)


def make_stats(
    darts_thrown: int = 30,
    average_per_turn: float = 45.0,
    highest_turn: int = 100,
    highest_checkout: int | None = None,
    doubles_hit: int = 2,
    triples_hit: int = 3,
) -> PlayerStats:
    """Return PlayerStats with plausible defaults."""
    return PlayerStats(
        darts_thrown=darts_thrown,
        average_per_turn=average_per_turn,
        highest_turn=highest_turn,
        highest_checkout=highest_checkout,
        doubles_hit=doubles_hit,
        triples_hit=triples_hit,
    )


def make_game(
    game_id: str = "g1",
    game_type: GameType = "501",
    players: tuple[Player, ...] | None = None,
    winner_id: str = "a",
    legs_won: dict[str, int] | None = None,
    best_of: int = 5,
    player_stats: dict[str, PlayerStats] | None = None,
    completed_at: str = "2025-01-05T15:04:00Z",
) -> GameHistory:
    """Return a two-player game (Ann beats Bo 3-1) unless overridden."""
    if players is None:
        players = (make_player("a", "Ann"), make_player("b", "Bo", "#3399ff"))
    if legs_won is None:
        legs_won = {"a": 3, "b": 1}
    if player_stats is None:
        player_stats = {"a": make_stats(), "b": make_stats()}
    return GameHistory(
        id=GameId(game_id),
        game_type=game_type,
        players=players,
        winner_id=PlayerId(winner_id),
        legs_won={PlayerId(k): v for k, v in legs_won.items()},
        rules=GameRules(best_of=best_of),
        statistics=Statistics(
            player_stats={PlayerId(k): v for k, v in player_stats.items()}
        ),
        completed_at=completed_at,
    )
