"""Unified CLI output formatting utilities.

Every command supports a text mode and a ``--json`` mode. JSON payloads follow
the same envelope as structured errors: ``{"success": true, "data": {...}}``.
"""
from __future__ import annotations

import json
from typing import Any, Dict


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str) -> None:
        """Output a success result (JSON envelope, or ``message`` in text mode)."""
        if self.json_mode:
            self.json_output({"success": True, "data": data})
        else:
            print(message)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        if not self.json_mode:
            print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


def print_success(message: str) -> None:
    """Print success message with checkmark."""
    print(f"✓ {message}")


__all__ = [
    "OutputFormatter",
    "print_success",
]
