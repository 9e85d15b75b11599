"""Install pipeline: cleanup, collect, partition, materialize, index.

Usage:
    orchestrator = InstallOrchestrator(repo_root=project)
    result = orchestrator.install(project, project / "_conduit", InstallOptions(selected_modules=("bmm",)))
    print(result.counts_by_kind)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from conduit.core.artifacts.source import ArtifactSource, ContentStoreSource
from conduit.core.config.domains import ContentConfig, IdeConfig, IdeProfile
from conduit.core.config.manager import ConfigManager

from .index import IndexGenerator
from .launcher import LauncherResult, install_custom_launcher
from .layout import LayoutMaterializer, iter_installed_files
from .partition import Partition, partition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallOptions:
    selected_modules: Tuple[str, ...] = ()
    ide: Optional[str] = None
    dry_run: bool = False


@dataclass
class InstallResult:
    success: bool
    counts_by_kind: Dict[str, int]
    install_root: Path
    index_path: Optional[Path] = None
    modules: List[str] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    removed: List[Path] = field(default_factory=list)
    ide: str = ""
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "ide": self.ide,
            "dry_run": self.dry_run,
            "install_root": str(self.install_root),
            "index_path": str(self.index_path) if self.index_path else None,
            "modules": list(self.modules),
            "counts": dict(self.counts_by_kind),
            "written": [str(p) for p in self.written],
            "removed": [str(p) for p in self.removed],
        }


class InstallOrchestrator:
    """Public entry point for installing a content store into one IDE."""

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        source: Optional[ArtifactSource] = None,
        validate: bool = True,
    ) -> None:
        self.repo_root = repo_root
        if validate:
            ConfigManager(repo_root=repo_root).load_config(validate=True)
        self.ide_config = IdeConfig(repo_root=repo_root)
        self.content_config = ContentConfig(repo_root=repo_root)
        self._source = source

    @property
    def namespace(self) -> str:
        return self.ide_config.namespace

    def profile(self, ide: Optional[str] = None) -> IdeProfile:
        return self.ide_config.get_profile(ide)

    def install_root(self, project_root: Path, ide: Optional[str] = None) -> Path:
        return self.profile(ide).install_root(Path(project_root), self.namespace)

    def default_content_root(self, project_root: Path) -> Path:
        return Path(project_root) / self.content_config.folder_name

    def source_for(self, content_root: Path, profile: IdeProfile) -> ArtifactSource:
        if self._source is not None:
            return self._source
        return ContentStoreSource(
            content_dir=Path(content_root).name,
            core_module=self.content_config.core_module,
            frontmatter=profile.frontmatter,
        )

    def collect(
        self,
        content_root: Path,
        selected_modules: Sequence[str] = (),
        ide: Optional[str] = None,
    ) -> Partition:
        """Collect artifacts from ``content_root`` and partition them."""
        profile = self.profile(ide)
        source = self.source_for(content_root, profile)

        agents = source.collect_agent_artifacts(content_root, list(selected_modules))
        workflows, workflow_counts = source.collect_workflow_artifacts(content_root)
        tasks = source.get_tasks(content_root, True)
        tools = source.get_tools(content_root, True)
        logger.info(
            "Collected %d agents, %d tasks, %d tools, %d workflow commands",
            len(agents),
            len(tasks),
            len(tools),
            workflow_counts.get("commands", 0),
        )
        return partition(
            agents,
            tasks,
            tools,
            workflows,
            duplicates=self.ide_config.duplicates,
        )

    def install(
        self,
        project_root: Path,
        content_root: Path,
        options: Optional[InstallOptions] = None,
    ) -> InstallResult:
        """Install every artifact from ``content_root`` into the IDE layout.

        Any missing source or failed write aborts the run; the index is only
        written after every artifact was written.
        """
        opts = options or InstallOptions()
        profile = self.profile(opts.ide)
        project_root = Path(project_root)
        install_root = profile.install_root(project_root, self.namespace)
        materializer = LayoutMaterializer(profile.legacy_roots(project_root, self.namespace))

        logger.info("Installing %s commands into %s", profile.display_name, install_root)

        removed: List[Path] = []
        if opts.dry_run:
            logger.info("Dry run: skipping cleanup of %s", install_root)
        else:
            removed = materializer.cleanup(install_root)

        grouped = self.collect(content_root, opts.selected_modules, profile.name)
        modules = sorted(grouped.modules)
        logger.info("Partitioned %d artifacts into modules: %s", len(grouped), ", ".join(modules) or "-")

        if opts.dry_run:
            return InstallResult(
                success=True,
                counts_by_kind=grouped.counts_by_kind(),
                install_root=install_root,
                modules=modules,
                ide=profile.name,
                dry_run=True,
            )

        counts = materializer.materialize(install_root, grouped)

        index_text = self.index_generator(profile).generate(grouped)
        index_path = materializer.write_index(install_root, index_text)
        logger.info("Wrote index %s", index_path)

        return InstallResult(
            success=True,
            counts_by_kind=counts,
            install_root=install_root,
            index_path=index_path,
            modules=modules,
            written=list(materializer.written),
            removed=removed,
            ide=profile.name,
        )

    def index_generator(self, profile: IdeProfile) -> IndexGenerator:
        return IndexGenerator(
            namespace=self.namespace,
            display_name=profile.display_name,
            install_dir=profile.display_dir(self.namespace),
            frontmatter=profile.frontmatter,
        )

    def install_custom_launcher(
        self,
        project_root: Path,
        name: str,
        target_artifact_path: str,
        metadata: Optional[Mapping[str, Any]] = None,
        *,
        ide: Optional[str] = None,
    ) -> Optional[LauncherResult]:
        return install_custom_launcher(
            Path(project_root),
            self.profile(ide),
            self.namespace,
            name,
            target_artifact_path,
            metadata,
        )

    def detect(self, project_root: Path, ide: Optional[str] = None) -> bool:
        """True when a previous install with at least one command exists."""
        root = self.install_root(project_root, ide)
        return any(True for _ in iter_installed_files(root))


__all__ = ["InstallOptions", "InstallResult", "InstallOrchestrator"]
