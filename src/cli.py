"""
Command-line entrypoints.

Commands:
- list: completed games, most recent first, optionally by game type
- show: final standings and player statistics for one game
- summary: totals, recent activity and per-player career stats
- import: append the games of another archive file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from config import HistoryConfig, load_config
from darts_types import ALL_GAMES, GAME_TYPES, GameTypeFilter
from display.labels import (
    NO_WINNER,
    format_completed_at,
    format_completed_date,
    game_row,
    game_type_label,
    opponents_label,
)
from events import (
    append_event,
    ranking_inconsistency_event,
    rejected_record_event,
)
from paths import DataPaths
from query.engine import filter_by_type, recent_games, sort_by_recency
from records.archive import (
    RejectedRecord,
    append_archive,
    import_records,
    load_archive,
)
from records.schema import GameHistory
from records.store import RecordStore
from standings.ranking import resolve_standings
from stats.career import career_stats
from stats.summary import round_half_away, summarize_game


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="darts-history")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List completed games")
    list_parser.add_argument(
        "--type",
        dest="game_type",
        choices=(ALL_GAMES, *GAME_TYPES),
        default=ALL_GAMES,
        help="Only show games of this type",
    )

    show_parser = subparsers.add_parser("show", help="Show one game")
    show_parser.add_argument("game_id", help="Id of the game to show")

    summary_parser = subparsers.add_parser(
        "summary", help="Show totals and player careers"
    )

    import_parser = subparsers.add_parser(
        "import", help="Append games from another archive file"
    )
    import_parser.add_argument(
        "source", type=Path, help="Path to a TOML games archive"
    )

    for sub in (list_parser, show_parser, summary_parser, import_parser):
        _add_config_arg(sub)
    return parser


def _add_config_arg(parser: argparse.ArgumentParser) -> None:
    """Attach the optional --config argument to a subcommand."""
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to TOML config",
    )


def _load_store(paths: DataPaths) -> RecordStore | None:
    """Load the archive, logging entries that fail validation.

    Returns:
        The loaded store, or None when the archive file is unreadable.
    """
    try:
        loaded = load_archive(paths.archive_toml)
    except ValueError as exc:
        print(
            f"error: cannot read {paths.archive_toml}: {exc}", file=sys.stderr
        )
        return None
    _report_rejected(paths, paths.archive_toml, loaded.rejected)
    return loaded.store


def _report_rejected(
    paths: DataPaths, source: Path, rejected: tuple[RejectedRecord, ...]
) -> None:
    """Record rejected entries in the event log and on stderr."""
    for entry in rejected:
        append_event(paths.events_toml, rejected_record_event(source, entry))
        print(
            f"warning: skipped game #{entry.index} in {source}: {entry.reason}",
            file=sys.stderr,
        )


def _list(store: RecordStore, game_type: GameTypeFilter) -> int:
    """Print the filtered history list."""
    games = sort_by_recency(filter_by_type(store.all(), game_type))
    print(f"Game History ({game_type_label(game_type)})")
    if not games:
        print("No games found")
        print("Play some games to see your history here!")
        return 0
    for game in games:
        row = game_row(game)
        line = f"[{row.game_id}] {row.label}  {row.completed}  {row.details()}"
        if row.winner_name is not None:
            line += f"  winner: {row.winner_name}"
        print(line)
    return 0


def _show(
    store: RecordStore, paths: DataPaths, cfg: HistoryConfig, game_id: str
) -> int:
    """Print standings and statistics for one game."""
    game = store.get(game_id)
    if game is None:
        print(f"error: game not found: {game_id}", file=sys.stderr)
        return 1

    print(f"{game_type_label(game.game_type)} Game")
    print(format_completed_at(game.completed_at))
    print()

    final = resolve_standings(game)
    if final.inconsistency is not None:
        append_event(
            paths.events_toml, ranking_inconsistency_event(final.inconsistency)
        )
        print(f"warning: {final.inconsistency}", file=sys.stderr)

    print("Final Standings")
    for standing in final.standings:
        marker = " (winner)" if standing.player.id == game.winner_id else ""
        print(
            f"  {standing.rank}. {standing.player.name}{marker}"
            f"  {standing.legs_won} legs"
        )
    print()
    _print_player_stats(game, cfg.placeholder)
    return 0


def _print_player_stats(game: GameHistory, placeholder: str) -> None:
    """Print the per-player statistics block."""
    print("Player Statistics")
    summaries = summarize_game(game, placeholder)
    for player in game.players:
        display = summaries.get(player.id)
        if display is None:
            continue
        print(f"  {player.name}")
        print(f"    Darts Thrown:     {display.darts_thrown}")
        print(f"    Average (3 darts): {display.average_per_turn}")
        print(f"    Highest Turn:     {display.highest_turn}")
        print(f"    Highest Checkout: {display.highest_checkout}")
        print(f"    Doubles Hit:      {display.doubles_hit}")
        print(f"    Triples Hit:      {display.triples_hit}")


def _summary(store: RecordStore, cfg: HistoryConfig) -> int:
    """Print totals, recent games and career stats."""
    records = store.all()
    print(f"Total Games Played: {len(records)}")
    if not records:
        return 0

    print()
    print("Recent Games")
    for game in recent_games(records, cfg.recent_limit):
        row = game_row(game)
        winner = row.winner_name if row.winner_name is not None else NO_WINNER
        print(
            f"  {row.label}  {opponents_label(game)}  {winner}"
            f"  {format_completed_date(game.completed_at)}"
        )

    print()
    print("Players")
    for career in career_stats(records):
        checkout = (
            cfg.placeholder
            if career.highest_checkout is None
            else str(career.highest_checkout)
        )
        print(
            f"  {career.name}: {career.games_played} games, "
            f"{career.wins} wins ({career.win_rate():.0%}), "
            f"avg {round_half_away(career.average_per_turn)}, "
            f"best turn {career.highest_turn}, best checkout {checkout}"
        )
    return 0


def _import(store: RecordStore, paths: DataPaths, source: Path) -> int:
    """Append games from source into the archive."""
    if not source.exists():
        print(f"error: archive not found: {source}", file=sys.stderr)
        return 1
    before = len(store)
    try:
        rejected = import_records(source, store)
    except ValueError as exc:
        print(f"error: cannot read {source}: {exc}", file=sys.stderr)
        return 1
    _report_rejected(paths, source, rejected)
    imported = store.all()[before:]
    try:
        append_archive(paths.archive_toml, imported)
    except ValueError as exc:
        print(
            f"error: cannot write {paths.archive_toml}: {exc}", file=sys.stderr
        )
        return 1
    print(f"Imported {len(imported)} game(s), rejected {len(rejected)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint.

    Returns:
        Process exit code (0 for success).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config(args.config)
    paths = DataPaths.create(cfg.data_dir)
    store = _load_store(paths)
    if store is None:
        return 1

    if args.command == "list":
        return _list(store, args.game_type)
    if args.command == "show":
        return _show(store, paths, cfg, args.game_id)
    if args.command == "summary":
        return _summary(store, cfg)
    return _import(store, paths, args.source)


if __name__ == "__main__":
    raise SystemExit(main())
