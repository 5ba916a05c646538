"""CLI entrypoint and helper tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli import build_parser, main
from helpers import make_game, make_stats
from records.archive import load_archive, save_archive
from toml_io import load_toml, save_toml


def _write_config(tmp_path: Path, placeholder: str = "-") -> Path:
    """Write a config pointing the data dir into tmp_path.

    Returns:
        Path of the written config file.
    """
    config_path = tmp_path / "history.toml"
    save_toml(
        config_path,
        {
            "storage": {"data_dir": (tmp_path / "data").as_posix()},
            "display": {"placeholder": placeholder, "recent_limit": 2},
        },
    )
    return config_path


def _seed_archive(tmp_path: Path) -> Path:
    """Write a three-game archive into the configured data dir."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    archive = data_dir / "archive.toml"
    save_archive(
        archive,
        [
            make_game("g1", "501", completed_at="2025-01-03T12:00:00Z"),
            make_game(
                "g2",
                "cricket",
                winner_id="b",
                legs_won={"a": 0, "b": 2},
                best_of=3,
                completed_at="2025-01-05T12:00:00Z",
            ),
            make_game(
                "g3",
                "301",
                player_stats={
                    "a": make_stats(average_per_turn=45.1666666667),
                },
                completed_at="2025-01-04T18:30:00Z",
            ),
        ],
    )
    return archive


def test_build_parser_commands() -> None:
    """Parser recognizes each command and its arguments."""
    parser = build_parser()
    args = parser.parse_args(["list", "--type", "cricket"])
    assert args.command == "list"
    assert args.game_type == "cricket"
    assert args.config is None

    args = parser.parse_args(["show", "g1", "--config", "config/default.toml"])
    assert args.game_id == "g1"
    assert isinstance(args.config, Path)

    args = parser.parse_args(["import", "incoming.toml"])
    assert args.source == Path("incoming.toml")
    assert parser.parse_args(["list"]).game_type == "all"

    with pytest.raises(SystemExit):
        _ = parser.parse_args(["list", "--type", "darts-golf"])


def test_list_empty_history(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An empty archive prints the empty-history message."""
    config = _write_config(tmp_path)
    assert main(["list", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "No games found" in out
    assert (tmp_path / "data").is_dir()


def test_list_sorted_and_filtered(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """List prints most recent first and honors --type."""
    config = _write_config(tmp_path)
    _seed_archive(tmp_path)

    assert main(["list", "--config", str(config)]) == 0
    lines = [
        line for line in capsys.readouterr().out.splitlines() if line.startswith("[")
    ]
    assert [line.split("]")[0] for line in lines] == ["[g2", "[g3", "[g1"]
    assert "Cricket" in lines[0]
    assert "winner: Bo" in lines[0]
    assert "2 players • Best of 3" in lines[0]

    assert main(["list", "--type", "301", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "[g3]" in out
    assert "[g1]" not in out


def test_show_game(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Show prints standings and statistics with the placeholder."""
    config = _write_config(tmp_path, placeholder="n/a")
    _seed_archive(tmp_path)

    assert main(["show", "g3", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "301 Game" in out
    assert "Jan 4, 2025, 06:30 PM" in out
    assert "1. Ann (winner)  3 legs" in out
    assert "2. Bo  1 legs" in out
    assert "Average (3 darts): 45.2" in out
    assert "Highest Checkout: n/a" in out
    # Bo has no stats entry in g3 and is skipped.
    stats_block = out.split("Player Statistics", 1)[1]
    assert "Bo" not in stats_block


def test_show_unknown_game(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unknown id exits 1 with an error on stderr."""
    config = _write_config(tmp_path)
    assert main(["show", "missing", "--config", str(config)]) == 1
    assert "game not found: missing" in capsys.readouterr().err


def test_show_logs_ranking_inconsistency(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A winner who is not the legs leader is shown and logged."""
    config = _write_config(tmp_path)
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    save_archive(
        data_dir / "archive.toml",
        [make_game("odd", winner_id="b", legs_won={"a": 3, "b": 1})],
    )

    assert main(["show", "odd", "--config", str(config)]) == 0
    captured = capsys.readouterr()
    assert "1. Ann  3 legs" in captured.out
    assert "2. Bo (winner)  1 legs" in captured.out
    assert "sole legs-won leader" in captured.err

    events = load_toml(data_dir / "events.toml")
    event = events["event_0001"]
    assert isinstance(event, dict)
    assert event["event"] == "ranking_inconsistency"
    assert event["game_id"] == "odd"


def test_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Summary prints totals, the recent limit and player careers."""
    config = _write_config(tmp_path)
    _seed_archive(tmp_path)

    assert main(["summary", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "Total Games Played: 3" in out
    recent = out.split("Recent Games", 1)[1].split("Players", 1)[0]
    assert "Cricket  vs 1 player(s)  Bo  1/5/2025" in recent
    assert "301" in recent
    assert "501" not in recent
    assert "Ann: 3 games, 2 wins (67%)" in out
    assert "Bo: 3 games, 1 wins (33%)" in out


def test_summary_empty(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Summary with no games only prints the total."""
    config = _write_config(tmp_path)
    assert main(["summary", "--config", str(config)]) == 0
    out = capsys.readouterr().out
    assert "Total Games Played: 0" in out
    assert "Recent Games" not in out


def test_import_appends_and_logs_rejections(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Import appends new games, rejects duplicates and logs them."""
    config = _write_config(tmp_path)
    archive = _seed_archive(tmp_path)
    source = tmp_path / "incoming.toml"
    save_archive(
        source,
        [make_game("g1"), make_game("g4", completed_at="2025-01-06T09:00:00Z")],
    )

    assert main(["import", str(source), "--config", str(config)]) == 0
    captured = capsys.readouterr()
    assert "Imported 1 game(s), rejected 1" in captured.out
    assert "duplicate game id" in captured.err

    loaded = load_archive(archive)
    assert [g.id for g in loaded.store.all()] == ["g1", "g2", "g3", "g4"]
    events = load_toml(tmp_path / "data" / "events.toml")
    event = events["event_0001"]
    assert isinstance(event, dict)
    assert event["event"] == "rejected_record"
    assert event["index"] == 0


def test_import_missing_source(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Importing a missing file exits 1."""
    config = _write_config(tmp_path)
    missing = tmp_path / "nope.toml"
    assert main(["import", str(missing), "--config", str(config)]) == 1
    assert "archive not found" in capsys.readouterr().err


def test_corrupt_archive_entry_is_skipped(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A bad archive entry is reported while the rest still lists."""
    config = _write_config(tmp_path)
    archive = _seed_archive(tmp_path)
    data = load_toml(archive)
    games = data["games"]
    assert isinstance(games, list)
    first = games[0]
    assert isinstance(first, dict)
    first["completedAt"] = "not a time"
    save_toml(archive, data)

    assert main(["list", "--config", str(config)]) == 0
    captured = capsys.readouterr()
    assert "[g1]" not in captured.out
    assert "[g2]" in captured.out
    assert "skipped game #0" in captured.err
    events = load_toml(tmp_path / "data" / "events.toml")
    assert "event_0001" in events


def test_import_keeps_rejected_archive_entries(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Entries the archive could not load are written back on import."""
    config = _write_config(tmp_path)
    archive = _seed_archive(tmp_path)
    data = load_toml(archive)
    games = data["games"]
    assert isinstance(games, list)
    second = games[1]
    assert isinstance(second, dict)
    second["completedAt"] = "not-a-date"
    save_toml(archive, data)
    source = tmp_path / "incoming.toml"
    save_archive(source, [make_game("g4", completed_at="2025-01-06T09:00:00Z")])

    assert main(["import", str(source), "--config", str(config)]) == 0
    assert "Imported 1 game(s), rejected 0" in capsys.readouterr().out

    games = load_toml(archive)["games"]
    assert isinstance(games, list)
    ids = [game["id"] for game in games if isinstance(game, dict)]
    assert ids == ["g1", "g2", "g3", "g4"]
    kept = games[1]
    assert isinstance(kept, dict)
    assert kept["completedAt"] == "not-a-date"


def test_import_unreadable_source(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A source that is not a TOML archive exits 1 with an error."""
    config = _write_config(tmp_path)
    archive = _seed_archive(tmp_path)
    before = archive.read_text(encoding="utf-8")
    source = tmp_path / "garbage.toml"
    source.write_text("games = [[[ not toml\n", encoding="utf-8")

    assert main(["import", str(source), "--config", str(config)]) == 1
    assert "error: cannot read" in capsys.readouterr().err
    assert archive.read_text(encoding="utf-8") == before

    source.write_text('games = "nope"\n', encoding="utf-8")
    assert main(["import", str(source), "--config", str(config)]) == 1
    assert "must be an array" in capsys.readouterr().err


def test_unreadable_archive_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A corrupt archive file is reported instead of raising."""
    config = _write_config(tmp_path)
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "archive.toml").write_text("[[games]\n", encoding="utf-8")

    assert main(["list", "--config", str(config)]) == 1
    assert "error: cannot read" in capsys.readouterr().err
