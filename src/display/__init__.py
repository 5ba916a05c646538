"""
Display labels for history views.
"""

from display.labels import (
    NO_WINNER,
    GameRow,
    format_completed_at,
    format_completed_date,
    game_row,
    game_type_label,
    opponents_label,
)

__all__ = [
    "NO_WINNER",
    "GameRow",
    "format_completed_at",
    "format_completed_date",
    "game_row",
    "game_type_label",
    "opponents_label",
]
