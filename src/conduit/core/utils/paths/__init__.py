"""Path utilities for Conduit.

- Resolver: project root resolution
- Project: project config directory detection
"""
from __future__ import annotations

from .errors import ConduitPathError
from .project import DEFAULT_PROJECT_CONFIG_DIR, get_project_config_dir
from .resolver import PROJECT_ROOT_ENV, resolve_project_root

__all__ = [
    "ConduitPathError",
    "DEFAULT_PROJECT_CONFIG_DIR",
    "get_project_config_dir",
    "PROJECT_ROOT_ENV",
    "resolve_project_root",
]
