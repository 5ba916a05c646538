"""
TOML configuration for the history CLI.

All keys are optional:

    [storage]
    data_dir = "data"

    [display]
    placeholder = "-"
    recent_limit = 3
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from paths import DATA_DIR
from stats.summary import NO_VALUE
from toml_io import TomlValue, load_toml

DEFAULT_RECENT_LIMIT = 3


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    """Resolved CLI configuration.

    Attributes:
        data_dir: Directory holding archive.toml and events.toml.
        placeholder: Text shown for absent statistics.
        recent_limit: Number of games in the recent activity list.
    """

    data_dir: Path = DATA_DIR
    placeholder: str = NO_VALUE
    recent_limit: int = DEFAULT_RECENT_LIMIT


def load_config(path: Path | None) -> HistoryConfig:
    """Load configuration from TOML, or defaults when path is None.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If a table or key has the wrong type.
    """
    if path is None:
        return HistoryConfig()
    return parse_config(load_toml(path))


def parse_config(data: dict[str, TomlValue]) -> HistoryConfig:
    """Build a HistoryConfig from parsed TOML, filling in defaults."""
    storage = _get_table_optional(data, "storage") or {}
    display = _get_table_optional(data, "display") or {}

    data_dir = _get_str_optional(storage, "data_dir")
    placeholder = _get_str_optional(display, "placeholder")
    recent_limit = _get_int_optional(display, "recent_limit")
    if recent_limit is not None and recent_limit < 0:
        raise ValueError("recent_limit must be non-negative")

    return HistoryConfig(
        data_dir=Path(data_dir) if data_dir is not None else DATA_DIR,
        placeholder=placeholder if placeholder is not None else NO_VALUE,
        recent_limit=(
            recent_limit if recent_limit is not None else DEFAULT_RECENT_LIMIT
        ),
    )


def _get_table_optional(
    data: dict[str, TomlValue], key: str
) -> dict[str, TomlValue] | None:
    """Fetch an optional TOML table.

    Raises:
        ValueError: If the key exists but is not a table.
    """
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"Invalid TOML table: {key}")
    return value


def _get_str_optional(table: dict[str, TomlValue], key: str) -> str | None:
    """Fetch an optional string.

    Raises:
        ValueError: If the key exists but is not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid string key: {key}")
    return value


def _get_int_optional(table: dict[str, TomlValue], key: str) -> int | None:
    """Fetch an optional integer.

    Raises:
        ValueError: If the key exists but is not an int.
    """
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid int key: {key}")
    return value
