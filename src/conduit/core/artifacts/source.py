"""Artifact sources.

The install pipeline only depends on the :class:`ArtifactSource` protocol.
:class:`ContentStoreSource` implements it for an installed content store::

    <project>/_conduit/
        core/agents/*.md
        <module>/agents/**/*.md
        _config/workflow-manifest.csv
        _config/task-manifest.csv
        _config/tool-manifest.csv
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple, Type, TypeVar, Union

from .agents import AgentCommandGenerator
from .manifests import TASK_MANIFEST, TOOL_MANIFEST, is_true, load_manifest
from .models import AgentArtifact, TaskRef, ToolRef, WorkflowArtifact
from .workflows import PROJECT_ROOT_TOKEN, WorkflowCommandGenerator

logger = logging.getLogger(__name__)

RefT = TypeVar("RefT", TaskRef, ToolRef)


class ArtifactSource(Protocol):
    def collect_agent_artifacts(
        self, content_root: Path, selected_modules: Sequence[str]
    ) -> List[AgentArtifact]: ...

    def collect_workflow_artifacts(
        self, content_root: Path
    ) -> Tuple[List[WorkflowArtifact], Dict[str, int]]: ...

    def get_tasks(self, content_root: Path, standalone_only: bool = True) -> List[TaskRef]: ...

    def get_tools(self, content_root: Path, standalone_only: bool = True) -> List[ToolRef]: ...


class ContentStoreSource:
    """Reads agents and manifests from an installed content store on disk."""

    def __init__(
        self,
        *,
        content_dir: str = "_conduit",
        core_module: str = "core",
        frontmatter: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.core_module = core_module
        self.agents = AgentCommandGenerator(content_dir, frontmatter=frontmatter)
        self.workflows = WorkflowCommandGenerator(
            content_dir, core_module=core_module, frontmatter=frontmatter
        )

    def agent_modules(self, selected_modules: Iterable[str]) -> List[str]:
        """Core first, then the selection in order, without repeats."""
        modules: List[str] = [self.core_module]
        for module in selected_modules:
            if module and module not in modules:
                modules.append(module)
        return modules

    def collect_agent_artifacts(
        self, content_root: Path, selected_modules: Sequence[str]
    ) -> List[AgentArtifact]:
        artifacts = self.agents.collect(content_root, self.agent_modules(selected_modules))
        logger.debug("Collected %d agents from %s", len(artifacts), content_root)
        return artifacts

    def collect_workflow_artifacts(
        self, content_root: Path
    ) -> Tuple[List[WorkflowArtifact], Dict[str, int]]:
        return self.workflows.collect(content_root)

    def get_tasks(self, content_root: Path, standalone_only: bool = True) -> List[TaskRef]:
        return self._load_refs(content_root, TASK_MANIFEST, TaskRef, standalone_only)

    def get_tools(self, content_root: Path, standalone_only: bool = True) -> List[ToolRef]:
        return self._load_refs(content_root, TOOL_MANIFEST, ToolRef, standalone_only)

    def _load_refs(
        self,
        content_root: Path,
        manifest: str,
        ref_type: Type[RefT],
        standalone_only: bool,
    ) -> List[RefT]:
        rows = load_manifest(content_root, manifest)
        if rows is None:
            return []
        refs: List[RefT] = []
        for row in rows:
            standalone = is_true(row.get("standalone"))
            if standalone_only and not standalone:
                continue
            refs.append(
                ref_type(
                    module=row.get("module", ""),
                    name=row["name"],
                    source_path=resolve_source_path(row.get("path", ""), content_root),
                    description=row.get("description") or row.get("displayName") or None,
                    standalone=standalone,
                )
            )
        logger.debug("Loaded %d entries from %s", len(refs), manifest)
        return refs


def resolve_source_path(raw: Union[str, Path], content_root: Path) -> Path:
    """Resolve a manifest ``path`` column to a file on disk.

    Relative paths are relative to the content root's parent (they start with
    the content folder name); ``{project-root}`` stands for that same parent.
    """
    project_root = Path(content_root).parent
    text = str(raw)
    if PROJECT_ROOT_TOKEN in text:
        text = text.replace(PROJECT_ROOT_TOKEN, str(project_root))
    path = Path(text)
    return path if path.is_absolute() else project_root / path


__all__ = ["ArtifactSource", "ContentStoreSource", "resolve_source_path"]
