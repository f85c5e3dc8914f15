"""CLI argument parsers and validators."""

from __future__ import annotations

import json

import typer


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_log_file(value: str) -> dict:
    """Parse a JSON log file rule."""
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise typer.BadParameter(f"Log file rule must be a JSON object, got: {value!r}")

    required_fields = ["filename", "tag", "statefile"]
    for field in required_fields:
        if field not in data:
            raise typer.BadParameter(f"Missing required field: {field}")

    return data
