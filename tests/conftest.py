"""Pytest configuration and import path setup."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure src/ and the shared test helpers are importable from repo root.
tests_dir = Path(__file__).resolve().parent
for path in (tests_dir.parent / "src", tests_dir):
    if path.as_posix() not in sys.path:
        sys.path.insert(0, path.as_posix())
