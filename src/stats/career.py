"""
Per-player aggregates across many games.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from darts_types import PlayerId
from records.schema import GameHistory, PlayerStats


@dataclass(frozen=True, slots=True)
class PlayerCareer:
    """Aggregated results for one player id.

    Attributes:
        player_id: Player identity shared across games.
        name: Name from the last game the player appears in.
        games_played: Games the player took part in.
        wins: Games where the player is the recorded winner.
        darts_thrown: Total darts over games with stats.
        average_per_turn: Dart-weighted mean of per-game averages.
        highest_turn: Best single turn over all games.
        highest_checkout: Best checkout, None if never checked out.
    """

    player_id: PlayerId
    name: str
    games_played: int
    wins: int
    darts_thrown: int
    average_per_turn: float
    highest_turn: int
    highest_checkout: int | None

    def losses(self) -> int:
        """Return games played but not won."""
        return self.games_played - self.wins

    def win_rate(self) -> float:
        """Return win rate across all games."""
        # Avoid division by zero for a player with no games.
        if self.games_played == 0:
            return 0.0
        return float(self.wins) / float(self.games_played)


@dataclass(slots=True)
class _Tally:
    """Mutable accumulator used while scanning games."""

    name: str
    games_played: int = 0
    wins: int = 0
    stats: list[PlayerStats] = field(default_factory=list)


def career_stats(records: Sequence[GameHistory]) -> tuple[PlayerCareer, ...]:
    """Aggregate every player across the given games.

    Games without a stats entry for a player still count toward games
    played and wins.

    Returns:
        One PlayerCareer per player id, most games first, then by name.
    """
    tallies: dict[PlayerId, _Tally] = {}
    for game in records:
        for player in game.players:
            tally = tallies.get(player.id)
            if tally is None:
                tally = _Tally(name=player.name)
                tallies[player.id] = tally
            tally.name = player.name
            tally.games_played += 1
            if player.id == game.winner_id:
                tally.wins += 1
            stats = game.statistics.player_stats.get(player.id)
            if stats is not None:
                tally.stats.append(stats)

    careers = [
        _to_career(player_id, tally) for player_id, tally in tallies.items()
    ]
    careers.sort(key=lambda career: (-career.games_played, career.name))
    return tuple(careers)


def _to_career(player_id: PlayerId, tally: _Tally) -> PlayerCareer:
    """Reduce a tally to its aggregate values."""
    darts = np.asarray([s.darts_thrown for s in tally.stats], dtype=np.int64)
    averages = np.asarray(
        [s.average_per_turn for s in tally.stats], dtype=np.float64
    )
    turns = np.asarray([s.highest_turn for s in tally.stats], dtype=np.int64)
    checkouts = [
        s.highest_checkout
        for s in tally.stats
        if s.highest_checkout is not None
    ]

    total_darts = int(darts.sum())
    if averages.size == 0:
        average = 0.0
    elif total_darts > 0:
        # Games with more darts thrown weigh more.
        average = float(np.average(averages, weights=darts))
    else:
        average = float(averages.mean())

    return PlayerCareer(
        player_id=player_id,
        name=tally.name,
        games_played=tally.games_played,
        wins=tally.wins,
        darts_thrown=total_darts,
        average_per_turn=average,
        highest_turn=int(turns.max()) if turns.size else 0,
        highest_checkout=max(checkouts) if checkouts else None,
    )
