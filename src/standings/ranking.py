"""
Final standings and winner resolution for one game.

The recorded winner is consumed, never recomputed. When it disagrees with
the legs-won order the disagreement is returned as a diagnostic and the
standings are still produced from legs won.
"""

from __future__ import annotations

from dataclasses import dataclass

from darts_types import PlayerId
from records.errors import RankingInconsistencyError
from records.schema import GameHistory, Player


@dataclass(frozen=True, slots=True)
class Standing:
    """One row of the final standings.

    Attributes:
        rank: 1-based position in the standings.
        player: Player at this position.
        legs_won: Legs won in the game (0 when unrecorded).
    """

    rank: int
    player: Player
    legs_won: int


@dataclass(frozen=True, slots=True)
class FinalStandings:
    """Standings plus winner resolution for display."""

    standings: tuple[Standing, ...]
    winner: Player | None
    inconsistency: RankingInconsistencyError | None

    def is_consistent(self) -> bool:
        """Return True when the recorded winner tops the standings."""
        return self.inconsistency is None


def rank_players(game: GameHistory) -> tuple[Standing, ...]:
    """Order players by legs won, most first.

    Ties keep the order of the game's player list, and ranks are
    positional, so tied players get consecutive ranks.
    """
    ordered = sorted(
        game.players, key=lambda player: game.legs_for(player.id), reverse=True
    )
    return tuple(
        Standing(
            rank=index + 1, player=player, legs_won=game.legs_for(player.id)
        )
        for index, player in enumerate(ordered)
    )


def is_winner(game: GameHistory, player_id: str) -> bool:
    """Return True iff player_id is the recorded winner."""
    return player_id == game.winner_id


def winner_of(game: GameHistory) -> Player | None:
    """Return the recorded winner's Player, or None if not among players."""
    for player in game.players:
        if player.id == game.winner_id:
            return player
    return None


def check_winner(game: GameHistory) -> RankingInconsistencyError | None:
    """Compare the recorded winner with the legs-won leaders.

    Returns:
        None when the recorded winner is the sole player with the most
        legs, otherwise the inconsistency (not raised).
    """
    if not game.players:
        return RankingInconsistencyError(game.id, game.winner_id, ())
    best = max(game.legs_for(player.id) for player in game.players)
    leaders: tuple[PlayerId, ...] = tuple(
        player.id for player in game.players if game.legs_for(player.id) == best
    )
    if leaders == (game.winner_id,):
        return None
    return RankingInconsistencyError(game.id, game.winner_id, leaders)


def resolve_standings(game: GameHistory) -> FinalStandings:
    """Rank players and resolve the winner in one pass for display."""
    return FinalStandings(
        standings=rank_players(game),
        winner=winner_of(game),
        inconsistency=check_winner(game),
    )
