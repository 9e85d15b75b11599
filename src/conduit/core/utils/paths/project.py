"""Project configuration directory resolution.

Project overrides live in ``{repo_root}/.conduit/config/*.yaml``.
"""
from __future__ import annotations

from pathlib import Path

DEFAULT_PROJECT_CONFIG_DIR = ".conduit"


def get_project_config_dir(repo_root: Path, *, create: bool = False) -> Path:
    """Return ``{repo_root}/.conduit``, creating it when ``create`` is set."""
    path = Path(repo_root) / DEFAULT_PROJECT_CONFIG_DIR
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = ["DEFAULT_PROJECT_CONFIG_DIR", "get_project_config_dir"]
