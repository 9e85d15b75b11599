"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include the repository root, a fingerprint of
``CONDUIT_*`` environment variables and the mtimes of project config files,
so tests and long-running processes never observe stale config.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        from conduit.core.utils.paths import resolve_project_root

        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(directory: Path) -> list[tuple[str, int, int]]:
    from conduit.core.utils.io import iter_yaml_files

    files: list[tuple[str, int, int]] = []
    if not directory.is_dir():
        return files
    for p in iter_yaml_files(directory):
        try:
            st = p.stat()
        except OSError:
            files.append((p.name, 0, 0))
            continue
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path) -> str:
    from conduit.core.utils.paths import get_project_config_dir

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith("CONDUIT_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    cfg_dir = get_project_config_dir(repo_root, create=False) / "config"
    cfg_fp = hashlib.sha256(repr(_fingerprint_dir(cfg_dir)).encode("utf-8")).hexdigest()[:12]
    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = False) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same cache key, avoiding
    repeated file I/O.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the config dict cache (tests and long-running callers)."""
    _config_cache.clear()


__all__ = [
    "get_cached_config",
    "clear_all_caches",
]
