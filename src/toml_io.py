"""
TOML-only IO with strict typing.

Constraints:
- Reading: use tomllib
- Writing: minimal TOML serializer covering tables, arrays of tables
  (`[[games]]`) and scalar arrays
- Deterministic output ordering; arrays keep their element order
- No Any / no untyped dicts
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import TypeAlias, TypeGuard, cast

TomlScalar: TypeAlias = str | int | float | bool
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlRawValue: TypeAlias = (
    str | int | float | bool | list["TomlRawValue"] | dict[str, "TomlRawValue"]
)
TomlRawTable: TypeAlias = dict[str, TomlRawValue]

_BARE_KEY = re.compile(r"[A-Za-z0-9_-]+")
_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def load_toml(path: Path) -> dict[str, TomlValue]:
    """Load a TOML file into a strictly-typed nested dictionary.

    Args:
        path: Path to TOML file.

    Returns:
        Parsed TOML as nested dict[str, TomlValue].

    Raises:
        FileNotFoundError: If path does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        ValueError: If parsed content contains unsupported types.
    """
    data = cast(TomlRawTable, tomllib.loads(path.read_text(encoding="utf-8")))
    if not _is_str_key_dict(data):
        raise ValueError("TOML root must be a table with string keys.")
    return _validate_toml_dict(data)


def dump_toml(data: dict[str, TomlValue]) -> str:
    """Serialize a TOML dictionary deterministically.

    Args:
        data: Nested dict with TomlValue leaves.

    Returns:
        TOML string with stable ordering.

    Raises:
        ValueError: If data contains unsupported types.
    """
    return _dumps_table(data, prefix="", header="")


def save_toml(path: Path, data: dict[str, TomlValue]) -> None:
    """Write TOML to disk with stable ordering."""
    path.write_text(dump_toml(data), encoding="utf-8")


def _is_str_key_dict(value: TomlRawValue) -> TypeGuard[TomlRawTable]:
    """Check whether a value is a dict with string keys."""
    return isinstance(value, dict) and all(
        isinstance(key, str) for key in value
    )


def _is_table_array(value: TomlValue) -> TypeGuard[list[dict[str, TomlValue]]]:
    """Check whether a value is a non-empty list made only of tables."""
    return (
        isinstance(value, list)
        and len(value) > 0
        and all(isinstance(item, dict) for item in value)
    )


def _validate_toml_dict(raw: TomlRawTable) -> dict[str, TomlValue]:
    """Validate TOML data without leaking `object` to callers."""
    validated: dict[str, TomlValue] = {}
    for key, value in raw.items():
        validated[key] = _validate_toml_value(value)
    return validated


def _validate_toml_value(value: TomlRawValue) -> TomlValue:
    """Validate a TOML value against allowed types.

    Args:
        value: Parsed TOML value.

    Returns:
        Validated TomlValue.

    Raises:
        ValueError: If the value is an unsupported type.
    """
    if isinstance(value, str | int | float | bool):
        return value

    if isinstance(value, dict):
        if not _is_str_key_dict(value):
            raise ValueError("TOML tables must have string keys.")
        return _validate_toml_dict(value)

    # Lists may hold scalars, nested lists, or tables (arrays of tables).
    if isinstance(value, list):
        return [_validate_toml_value(item) for item in value]

    raise ValueError(f"unsupported TOML value type: {type(value)}")


def _dumps_table(
    table: dict[str, TomlValue], prefix: str, header: str
) -> str:
    """Dump a TOML table, its subtables and arrays of tables.

    Args:
        table: Table contents.
        prefix: Dotted key path of this table ("" for the root).
        header: Header line to emit first ("" for the root).
    """
    scalar_items: dict[str, TomlValue] = {}
    table_items: dict[str, dict[str, TomlValue]] = {}
    array_items: dict[str, list[dict[str, TomlValue]]] = {}

    # Scalars must precede any subtable header to stay in this table.
    for key, value in table.items():
        if isinstance(value, dict):
            table_items[key] = value
        elif _is_table_array(value):
            array_items[key] = value
        elif isinstance(value, list) and any(
            isinstance(item, dict) for item in value
        ):
            raise ValueError("mixed arrays of tables are not supported")
        else:
            scalar_items[key] = value

    lines: list[str] = []
    if header:
        lines.append(header)

    for key in sorted(scalar_items):
        value = scalar_items[key]
        lines.append(f"{_format_key(key)} = {_format_value(value)}")

    for key in sorted(table_items):
        path = _join_key(prefix, key)
        if lines:
            lines.append("")
        rendered = _dumps_table(table_items[key], path, header=f"[{path}]")
        lines.append(rendered.rstrip("\n"))

    for key in sorted(array_items):
        path = _join_key(prefix, key)
        for item in array_items[key]:
            if lines:
                lines.append("")
            rendered = _dumps_table(item, path, header=f"[[{path}]]")
            lines.append(rendered.rstrip("\n"))

    return "\n".join(lines) + "\n"


def _join_key(prefix: str, key: str) -> str:
    """Append a key to a dotted path, quoting it when needed."""
    formatted = _format_key(key)
    return f"{prefix}.{formatted}" if prefix else formatted


def _format_key(key: str) -> str:
    """Return a bare key when allowed, otherwise a quoted key."""
    if _BARE_KEY.fullmatch(key):
        return key
    return _format_string(key)


def _format_string(value: str) -> str:
    """Format a basic TOML string with escapes."""
    escaped = "".join(_escape_char(char) for char in value)
    return f'"{escaped}"'


def _escape_char(char: str) -> str:
    """Escape one character for a basic string.

    TOML forbids raw control characters other than tab, so the rest are
    written as \\uXXXX.
    """
    if char in _ESCAPES:
        return _ESCAPES[char]
    code = ord(char)
    if code < 0x20 or code == 0x7F:
        return f"\\u{code:04X}"
    return char


def _format_value(value: TomlValue) -> str:
    """Format a TOML value into a string representation.

    Args:
        value: TomlValue to format.

    Returns:
        Serialized TOML literal.

    Raises:
        ValueError: If the value type is unsupported.
    """
    # Handle booleans first so ints don't swallow them.
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, int | float):
        return repr(value)

    if isinstance(value, str):
        return _format_string(value)

    if isinstance(value, list):
        rendered = ", ".join(_format_value(item) for item in value)
        return f"[{rendered}]"

    raise ValueError("unsupported TOML value type")
