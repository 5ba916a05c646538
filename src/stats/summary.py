"""
Display-ready per-player statistics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from darts_types import PlayerId
from records.schema import GameHistory, PlayerStats

NO_VALUE: Final[str] = "-"


@dataclass(frozen=True, slots=True)
class DisplayStats:
    """Per-player statistics rendered as display strings."""

    darts_thrown: str
    average_per_turn: str
    highest_turn: str
    highest_checkout: str
    doubles_hit: str
    triples_hit: str


def round_half_away(value: float, places: int = 1) -> str:
    """Round to a fixed number of decimals, halves away from zero.

    Rounds the shortest decimal repr of the float, so 2.25 gives "2.3"
    even though its binary value is slightly below 2.25.
    """
    if not math.isfinite(value):
        return str(value)
    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    # quantize fails when the result needs more digits than the context.
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + places + 2)
        # Decimal ROUND_HALF_UP rounds ties away from zero.
        return str(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def summarize(stats: PlayerStats, placeholder: str = NO_VALUE) -> DisplayStats:
    """Render one player's raw counters for display.

    Args:
        stats: Raw counters.
        placeholder: Text shown for an absent checkout.

    Returns:
        DisplayStats with the average at one decimal place.
    """
    checkout = (
        placeholder
        if stats.highest_checkout is None
        else str(stats.highest_checkout)
    )
    return DisplayStats(
        darts_thrown=str(stats.darts_thrown),
        average_per_turn=round_half_away(stats.average_per_turn, places=1),
        highest_turn=str(stats.highest_turn),
        highest_checkout=checkout,
        doubles_hit=str(stats.doubles_hit),
        triples_hit=str(stats.triples_hit),
    )


def summarize_game(
    game: GameHistory, placeholder: str = NO_VALUE
) -> dict[PlayerId, DisplayStats]:
    """Summarize every player that has a stats entry, in player order.

    Players without an entry are skipped rather than shown as zeros.
    """
    summaries: dict[PlayerId, DisplayStats] = {}
    for player in game.players:
        stats = game.statistics.player_stats.get(player.id)
        if stats is None:
            continue
        summaries[player.id] = summarize(stats, placeholder)
    return summaries
