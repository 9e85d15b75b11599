"""I/O utilities for Conduit.

This package provides safe file operations:
- Core: atomic writes, directory management, text I/O, recursive removal
- YAML: read/write helpers built on PyYAML
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    path_exists,
    read_text,
    remove_path,
    write_text,
)
from .yaml import (
    iter_yaml_files,
    read_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "path_exists",
    "remove_path",
    "atomic_write",
    "read_text",
    "write_text",
    # yaml
    "read_yaml",
    "iter_yaml_files",
]
