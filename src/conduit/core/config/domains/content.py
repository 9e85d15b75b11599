"""Domain-specific configuration for the installed content store."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class ContentConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "content"

    @cached_property
    def folder_name(self) -> str:
        """Directory name of the content store inside a project."""
        return str(self.section.get("folder_name") or "_conduit")

    @cached_property
    def core_module(self) -> str:
        """Module that is always installed, whatever the selection."""
        return str(self.section.get("core_module") or "core")


__all__ = ["ContentConfig"]
