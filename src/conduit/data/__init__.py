"""
Conduit data resource helpers.

Provides access to bundled configuration files, schemas and Markdown
templates using importlib.resources.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("config", "ide.yaml")
        PosixPath('/path/to/conduit/data/config/ide.yaml')
    """
    pkg = resources.files("conduit.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


def read_text(subpackage: str, filename: str) -> str:
    """Read a text data file."""
    return get_data_path(subpackage, filename).read_text(encoding="utf-8")


__all__ = ["get_data_path", "read_text"]
