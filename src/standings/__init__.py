"""
Standings and winner resolution.
"""

from standings.ranking import (
    FinalStandings,
    Standing,
    check_winner,
    is_winner,
    rank_players,
    resolve_standings,
    winner_of,
)

__all__ = [
    "FinalStandings",
    "Standing",
    "check_winner",
    "is_winner",
    "rank_players",
    "resolve_standings",
    "winner_of",
]
