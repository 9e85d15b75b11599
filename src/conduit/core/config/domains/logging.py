"""Domain-specific configuration for Conduit's stdlib logging.

This config controls:
- Whether a log file handler is installed for CLI invocations
- Where the log file is written (relative paths resolve against the project root)
- The log level of that handler
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "INFO").upper()

    @cached_property
    def path(self) -> Path:
        raw = Path(str(self.section.get("path") or ".conduit/logs/conduit.log"))
        return raw if raw.is_absolute() else self.repo_root / raw


__all__ = ["LoggingConfig"]
