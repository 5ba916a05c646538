"""
Query views over game records.
"""

from query.engine import (
    filter_by_type,
    find_game,
    recent_games,
    sort_by_recency,
)

__all__ = ["filter_by_type", "find_game", "recent_games", "sort_by_recency"]
