"""Human/JSON output helpers.

The shell renders ServiceResult for humans or machines (--json). The
formatter layer adapts ServiceResult to the requested output mode.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from udpctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data as indented key-value pairs."""
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            lines.append(f"  {key}: {_json.dumps(value, separators=(',', ':'))}")
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The command result to format.
        settings: Output mode; JSON wins over quiet.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json()
    if result.ok:
        if settings.quiet:
            return f"OK: {result.op}"
        parts = [f"OK: {result.op}"]
        if result.data:
            parts.append(_format_data_human(result.data))
        return "\n".join(parts)
    if result.error is None:
        return f"ERROR: {result.op} — Unknown error"
    return f"ERROR: {result.op} — {result.error.code}: {result.error.message}"
