"""
Core type aliases shared across the history modules.

Hard requirements:
- No Any
- Identifiers are NewType wrappers over str
- The game type is a closed Literal enumeration
"""

from __future__ import annotations

from typing import Final, Literal, NewType, TypeAlias

# Strongly-typed string wrappers for identifiers.
PlayerId = NewType("PlayerId", str)
GameId = NewType("GameId", str)

GameType: TypeAlias = Literal["501", "301", "cricket"]
GameTypeFilter: TypeAlias = GameType | Literal["all"]

# Ordered as the history filter tabs present them.
GAME_TYPES: Final[tuple[GameType, ...]] = ("501", "301", "cricket")
ALL_GAMES: Final = "all"
