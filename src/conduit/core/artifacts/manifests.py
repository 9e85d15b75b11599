"""CSV manifests of an installed content store.

Manifests live in ``<content_root>/_config/`` and have a header row::

    workflow-manifest.csv   name,description,module,path
    task-manifest.csv       name,displayName,description,module,path,standalone
    tool-manifest.csv       name,displayName,description,module,path,standalone
"""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from conduit.core.exceptions import ModuleDataError
from conduit.core.utils.io import read_text

logger = logging.getLogger(__name__)

MANIFEST_DIR = "_config"
WORKFLOW_MANIFEST = "workflow-manifest.csv"
TASK_MANIFEST = "task-manifest.csv"
TOOL_MANIFEST = "tool-manifest.csv"

ManifestRow = Dict[str, str]


def manifest_path(content_root: Path, filename: str) -> Path:
    return Path(content_root) / MANIFEST_DIR / filename


def load_manifest(content_root: Path, filename: str) -> Optional[List[ManifestRow]]:
    """Parse a manifest into rows, or return ``None`` when it does not exist.

    Values are stripped and blank lines are skipped. A row without a ``name``
    raises :class:`ModuleDataError`.
    """
    path = manifest_path(content_root, filename)
    if not path.is_file():
        logger.debug("Manifest not found: %s", path)
        return None

    reader = csv.DictReader(io.StringIO(read_text(path)))
    rows: List[ManifestRow] = []
    for raw in reader:
        row = {str(k).strip(): (v or "").strip() for k, v in raw.items() if k is not None}
        if not any(row.values()):
            continue
        if not row.get("name"):
            raise ModuleDataError(
                f"{filename} line {reader.line_num} has no name",
                context={"manifest": str(path), "line": reader.line_num},
            )
        rows.append(row)
    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows


def is_true(value: Optional[str]) -> bool:
    return str(value or "").strip().lower() in {"true", "yes", "1"}


__all__ = [
    "MANIFEST_DIR",
    "WORKFLOW_MANIFEST",
    "TASK_MANIFEST",
    "TOOL_MANIFEST",
    "ManifestRow",
    "manifest_path",
    "load_manifest",
    "is_true",
]
