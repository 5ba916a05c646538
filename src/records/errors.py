"""
Error kinds raised or reported by the history core.
"""

from __future__ import annotations


class HistoryError(Exception):
    """Base class for all game history errors."""


class ValidationError(HistoryError):
    """A record violates the GameHistory invariants."""


class MalformedTimestampError(ValidationError):
    """A completedAt value is not a valid ISO-8601 date-time."""

    def __init__(self, value: str, game_id: str | None = None) -> None:
        self.value = value
        self.game_id = game_id
        where = f" in game {game_id!r}" if game_id is not None else ""
        super().__init__(f"malformed completedAt{where}: {value!r}")


class RankingInconsistencyError(HistoryError):
    """Recorded winner disagrees with the legs-won ranking.

    Non-fatal: ranking code returns instances of this error for diagnostics
    instead of raising it.
    """

    def __init__(
        self,
        game_id: str,
        recorded_winner_id: str,
        leader_ids: tuple[str, ...],
    ) -> None:
        self.game_id = game_id
        self.recorded_winner_id = recorded_winner_id
        self.leader_ids = leader_ids
        leaders = ", ".join(leader_ids) or "<none>"
        super().__init__(
            f"game {game_id!r}: recorded winner {recorded_winner_id!r} "
            f"is not the sole legs-won leader ({leaders})"
        )
