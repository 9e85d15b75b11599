"""YAML I/O utilities."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml``/``*.yml`` files directly inside ``directory`` in name order.

    When both ``x.yaml`` and ``x.yml`` exist, ``x.yaml`` comes first so the
    ``.yml`` variant overrides it during merges.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    files: Iterable[Path] = (
        p for p in directory.iterdir() if p.is_file() and p.suffix in {".yaml", ".yml"}
    )
    return sorted(files, key=lambda p: (p.stem, p.suffix != ".yaml"))


__all__ = [
    "read_yaml",
    "iter_yaml_files",
]
