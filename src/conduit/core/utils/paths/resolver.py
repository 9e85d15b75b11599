"""Project root resolution for Conduit.

Resolution priority:
1. ``CONDUIT_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the working directory holding a ``.conduit`` directory
3. Git repository root via ``git rev-parse --show-toplevel``
4. The current working directory
"""
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

from .errors import ConduitPathError
from .project import DEFAULT_PROJECT_CONFIG_DIR

PROJECT_ROOT_ENV = "CONDUIT_PROJECT_ROOT"


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode != 0:
        return None
    out = result.stdout.strip()
    return Path(out).resolve() if out else None


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root the installer writes into.

    Raises:
        ConduitPathError: If the environment override points at a missing
            path or at the ``.conduit`` directory itself.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise ConduitPathError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == DEFAULT_PROJECT_CONFIG_DIR:
            raise ConduitPathError(
                f"{PROJECT_ROOT_ENV} points to the {DEFAULT_PROJECT_CONFIG_DIR} directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = (start or Path.cwd()).resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / DEFAULT_PROJECT_CONFIG_DIR).is_dir():
            return candidate

    git_root = _git_toplevel(cwd)
    if git_root is not None:
        return git_root
    return cwd


__all__ = ["PROJECT_ROOT_ENV", "resolve_project_root"]
