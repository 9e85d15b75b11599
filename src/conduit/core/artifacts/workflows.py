"""Workflow command generation from ``workflow-manifest.csv``.

Every manifest row becomes a ``workflow-command`` artifact. Each module with
workflows also gets a ``workflow-launcher`` README that lists them; the
installer ignores launchers, but the source still reports them so other
consumers can write them.
"""
from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Mapping, Optional, Tuple

from conduit.core.utils.text import format_frontmatter, render_bundled_template

from .manifests import WORKFLOW_MANIFEST, ManifestRow, load_manifest
from .models import WORKFLOW_COMMAND, WORKFLOW_LAUNCHER, WorkflowArtifact

logger = logging.getLogger(__name__)

PROJECT_ROOT_TOKEN = "{project-root}"
COMMAND_TEMPLATE = "workflow-command.md"
COMMANDER_TEMPLATE = "workflow-commander.md"
LAUNCHER_TEMPLATE = "workflow-launcher.md"


def installed_path(raw: str, content_root: Path) -> str:
    """Express a manifest path the way installed commands reference it.

    Paths that already carry ``{project-root}`` are kept verbatim. Absolute
    paths inside the project become ``{project-root}/...``; relative paths are
    relative to the project root already.
    """
    if PROJECT_ROOT_TOKEN in raw:
        return raw
    path = Path(raw)
    if path.is_absolute():
        try:
            rel = path.relative_to(Path(content_root).parent)
        except ValueError:
            return path.as_posix()
        return f"{PROJECT_ROOT_TOKEN}/{rel.as_posix()}"
    posix = PurePosixPath(raw.replace("\\", "/")).as_posix()
    return f"{PROJECT_ROOT_TOKEN}/{posix}"


class WorkflowCommandGenerator:
    def __init__(
        self,
        content_dir: str,
        *,
        core_module: str = "core",
        frontmatter: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.content_dir = content_dir
        self.core_module = core_module
        self.frontmatter = dict(frontmatter or {})

    def collect(self, content_root: Path) -> Tuple[List[WorkflowArtifact], Dict[str, int]]:
        rows = load_manifest(content_root, WORKFLOW_MANIFEST)
        if rows is None:
            logger.info("Workflow manifest not found in %s; no workflows to install", content_root)
            return [], {"commands": 0, "launchers": 0}

        artifacts: List[WorkflowArtifact] = []
        grouped: Dict[str, List[ManifestRow]] = {}
        for row in rows:
            module = row.get("module", "")
            artifacts.append(
                WorkflowArtifact(
                    module=module,
                    content=self.render_command(row, content_root),
                    relative_path=f"{module}/workflows/{row['name']}.md",
                    source_path=row.get("path") or None,
                    type=WORKFLOW_COMMAND,
                    description=row.get("description") or None,
                )
            )
            grouped.setdefault(module, []).append(row)

        for module, module_rows in grouped.items():
            artifacts.append(
                WorkflowArtifact(
                    module=module,
                    content=self.render_launcher(module, module_rows, content_root),
                    relative_path=f"{module}/workflows/README.md",
                    source_path=None,
                    type=WORKFLOW_LAUNCHER,
                )
            )

        return artifacts, {"commands": len(rows), "launchers": len(grouped)}

    def render_command(self, row: ManifestRow, content_root: Path) -> str:
        raw_path = row.get("path", "")
        template = COMMANDER_TEMPLATE if raw_path.endswith("workflow.md") else COMMAND_TEMPLATE
        header: Dict[str, Any] = {"description": row.get("description") or row["name"]}
        header.update(self.frontmatter)
        return render_bundled_template(
            template,
            {
                "frontmatter": format_frontmatter(header),
                "content_dir": self.content_dir,
                "core_module": self.core_module,
                "workflow_path": installed_path(raw_path, content_root),
            },
        )

    def render_launcher(self, module: str, rows: List[ManifestRow], content_root: Path) -> str:
        workflows = [
            {
                "name": row["name"],
                "path": installed_path(row.get("path", ""), content_root),
                "description": row.get("description", ""),
            }
            for row in rows
        ]
        return render_bundled_template(
            LAUNCHER_TEMPLATE,
            {
                "module": module,
                "workflows": workflows,
                "content_dir": self.content_dir,
                "core_module": self.core_module,
            },
        )


__all__ = ["WorkflowCommandGenerator", "installed_path", "PROJECT_ROOT_TOKEN"]
