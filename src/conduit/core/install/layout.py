"""Target directory layout for installed commands.

Layout under an install root (``<config_dir>/<commands_dir>/<namespace>``)::

    index.md
    <module>/agents/<name>.md
    <module>/tasks/<name>.md
    <module>/tools/<name>.md
    <module>/workflows/<file-name>

Every module gets all four kind directories, even when a kind is empty.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from conduit.core.artifacts.models import Artifact, ArtifactKind, TaskRef, ToolRef
from conduit.core.exceptions import MaterializeError, SourceMissingError
from conduit.core.utils.io import ensure_directory, read_text, remove_path, write_text

from .partition import Partition

logger = logging.getLogger(__name__)

INDEX_FILE = "index.md"


@dataclass(frozen=True)
class LayoutPlan:
    """Deterministic paths for one install root."""

    install_root: Path

    @property
    def index_path(self) -> Path:
        return self.install_root / INDEX_FILE

    def module_dir(self, module: str) -> Path:
        return self.install_root / module

    def kind_dir(self, module: str, kind: ArtifactKind) -> Path:
        return self.module_dir(module) / kind.dir_name

    def target_path(self, artifact: Artifact) -> Path:
        return self.kind_dir(artifact.module, artifact.kind) / artifact.file_name


class LayoutMaterializer:
    """Owns the install root: cleanup, migration and writing artifacts."""

    def __init__(self, legacy_roots: Sequence[Path] = ()) -> None:
        self.legacy_roots = [Path(p) for p in legacy_roots]
        self.written: List[Path] = []

    def cleanup(self, install_root: Path) -> List[Path]:
        """Remove the previous install and every legacy layout.

        Missing paths are skipped. Returns the paths that were removed.
        """
        removed: List[Path] = []
        if remove_path(install_root):
            logger.info("Removed previous install at %s", install_root)
            removed.append(Path(install_root))
        for legacy in self.legacy_roots:
            if remove_path(legacy):
                logger.info("Migrated away from legacy layout %s", legacy)
                removed.append(legacy)
        return removed

    def materialize(self, install_root: Path, partition: Partition) -> Dict[str, int]:
        """Write every partitioned artifact below ``install_root``.

        Returns counts of written items keyed by kind directory name.

        Raises:
            SourceMissingError: A task or tool source file is missing, is not a file or cannot be read.
            MaterializeError: A directory or file could not be written.
        """
        plan = LayoutPlan(Path(install_root))
        counts = {kind.dir_name: 0 for kind in ArtifactKind.ordered()}
        self.written = []

        self._mkdir(plan.install_root)
        for module in sorted(partition.modules):
            for kind in ArtifactKind.ordered():
                self._mkdir(plan.kind_dir(module, kind))
            for kind in ArtifactKind.ordered():
                for artifact in partition.items(module, kind):
                    target = plan.target_path(artifact)
                    self._write(target, self._content(artifact))
                    counts[kind.dir_name] += 1
            logger.info("Installed module %s", module)
        return counts

    def write_index(self, install_root: Path, text: str) -> Path:
        target = LayoutPlan(Path(install_root)).index_path
        self._write(target, text)
        return target

    def _content(self, artifact: Artifact) -> str:
        if isinstance(artifact, (TaskRef, ToolRef)):
            try:
                return read_text(artifact.source_path)
            except OSError as exc:
                raise SourceMissingError(
                    artifact.source_path, module=artifact.module, name=artifact.name
                ) from exc
        return artifact.content

    def _mkdir(self, path: Path) -> None:
        try:
            ensure_directory(path)
        except OSError as exc:
            raise MaterializeError(path, exc) from exc

    def _write(self, target: Path, content: str) -> None:
        try:
            write_text(target, content)
        except OSError as exc:
            raise MaterializeError(target, exc) from exc
        logger.debug("Wrote %s", target)
        self.written.append(target)


def iter_installed_files(install_root: Path) -> Iterable[Path]:
    """Every Markdown file below ``install_root``, sorted."""
    root = Path(install_root)
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*.md") if p.is_file())


__all__ = ["INDEX_FILE", "LayoutPlan", "LayoutMaterializer", "iter_installed_files"]
