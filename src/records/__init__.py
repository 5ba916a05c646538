"""
Completed game records: schema, validation, store and archive.
"""

from records.errors import (
    HistoryError,
    MalformedTimestampError,
    RankingInconsistencyError,
    ValidationError,
)
from records.schema import (
    GameHistory,
    GameRules,
    Player,
    PlayerStats,
    Statistics,
    parse_completed_at,
    validate_record,
)
from records.store import RecordStore

__all__ = [
    "GameHistory",
    "GameRules",
    "HistoryError",
    "MalformedTimestampError",
    "Player",
    "PlayerStats",
    "RankingInconsistencyError",
    "RecordStore",
    "Statistics",
    "ValidationError",
    "parse_completed_at",
    "validate_record",
]
