"""
Statistics presentation and aggregation.
"""

from stats.career import PlayerCareer, career_stats
from stats.summary import (
    NO_VALUE,
    DisplayStats,
    round_half_away,
    summarize,
    summarize_game,
)

__all__ = [
    "NO_VALUE",
    "DisplayStats",
    "PlayerCareer",
    "career_stats",
    "round_half_away",
    "summarize",
    "summarize_game",
]
