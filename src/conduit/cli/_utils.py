"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Tuple

from conduit.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Repository root from ``--repo-root``, or auto-detected."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def get_content_root(args: argparse.Namespace, repo_root: Path, default: Path) -> Path:
    """Content store from ``--content`` (relative to the repo root), or ``default``."""
    raw = getattr(args, "content", None)
    if not raw:
        return default
    path = Path(raw).expanduser()
    return (path if path.is_absolute() else repo_root / path).resolve()


def parse_modules(raw: str | None) -> Tuple[str, ...]:
    """Split ``--modules a,b`` into a tuple, dropping blanks and repeats."""
    modules: List[str] = []
    for part in (raw or "").split(","):
        name = part.strip()
        if name and name not in modules:
            modules.append(name)
    return tuple(modules)


__all__ = ["get_repo_root", "get_content_root", "parse_modules"]
