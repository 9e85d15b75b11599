"""Domain-specific configuration accessors.

Available domain configs:
- IdeConfig: IDE profiles, install namespace and duplicate policy
- ContentConfig: Content store folder name and core module
- LoggingConfig: Log file handler settings

Usage:
    from conduit.core.config.domains import IdeConfig

    ide = IdeConfig(repo_root=Path("/path/to/project"))
    profile = ide.get_profile("cursor")
"""
from __future__ import annotations

from .content import ContentConfig
from .ide import IdeConfig, IdeProfile
from .logging import LoggingConfig

__all__: list[str] = [
    "ContentConfig",
    "IdeConfig",
    "IdeProfile",
    "LoggingConfig",
]
