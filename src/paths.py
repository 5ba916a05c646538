"""
Centralized path conventions for the history data directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

# Default base directory for the archive and event log.
DATA_DIR: Final[Path] = Path("data")


@dataclass(frozen=True, slots=True)
class DataPaths:
    """All filesystem paths used by the history CLI."""

    root: Path
    archive_toml: Path
    events_toml: Path

    @staticmethod
    def create(data_dir: Path = DATA_DIR) -> DataPaths:
        """Resolve paths under data_dir and ensure the directory exists."""
        root = data_dir.resolve()
        root.mkdir(parents=True, exist_ok=True)
        return DataPaths(
            root=root,
            archive_toml=root / "archive.toml",
            events_toml=root / "events.toml",
        )
