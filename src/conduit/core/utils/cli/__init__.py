"""CLI helpers shared by command modules."""
from __future__ import annotations

from .errors import cli_error, json_output, run_cli

__all__ = ["cli_error", "json_output", "run_cli"]
