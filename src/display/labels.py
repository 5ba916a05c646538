"""
Text labels for history views.

Every label is derived from the record on demand; nothing here is stored.
"""

from __future__ import annotations

from dataclasses import dataclass

from darts_types import GameTypeFilter
from records.schema import GameHistory, parse_completed_at
from standings.ranking import winner_of

NO_WINNER = "No winner"


@dataclass(frozen=True, slots=True)
class GameRow:
    """One line of the history list."""

    game_id: str
    label: str
    completed: str
    player_count: int
    best_of: int
    winner_name: str | None

    def details(self) -> str:
        """Return the "2 players • Best of 3" detail text."""
        return f"{self.player_count} players • Best of {self.best_of}"


def game_type_label(game_type: GameTypeFilter) -> str:
    """Return the display name of a game type or filter value."""
    if game_type == "all":
        return "All Games"
    if game_type == "cricket":
        return "Cricket"
    return game_type


def format_completed_at(completed_at: str) -> str:
    """Format a timestamp like "Jan 5, 2025, 03:04 PM".

    Raises:
        MalformedTimestampError: If the timestamp cannot be parsed.
    """
    moment = parse_completed_at(completed_at)
    return f"{moment:%b} {moment.day}, {moment.year}, {moment:%I:%M %p}"


def format_completed_date(completed_at: str) -> str:
    """Format a timestamp as a short date like "1/5/2025"."""
    moment = parse_completed_at(completed_at)
    return f"{moment.month}/{moment.day}/{moment.year}"


def opponents_label(game: GameHistory) -> str:
    """Return the "vs N player(s)" text used for recent games."""
    return f"vs {len(game.players) - 1} player(s)"


def game_row(game: GameHistory) -> GameRow:
    """Build the history list row for a game."""
    winner = winner_of(game)
    return GameRow(
        game_id=game.id,
        label=game_type_label(game.game_type),
        completed=format_completed_at(game.completed_at),
        player_count=len(game.players),
        best_of=game.rules.best_of,
        winner_name=winner.name if winner is not None else None,
    )
