"""Agent launcher generation.

Each agent in the content store becomes a small command file that tells the
IDE to load the full agent definition from the content store.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from conduit.core.exceptions import ModuleDataError, SourceMissingError
from conduit.core.utils.io import read_text
from conduit.core.utils.text import format_frontmatter, parse_frontmatter, render_bundled_template

from .models import AgentArtifact

logger = logging.getLogger(__name__)

AGENT_TEMPLATE = "agent-command.md"


class AgentCommandGenerator:
    """Collects agents from a content store and renders their launchers."""

    def __init__(self, content_dir: str, *, frontmatter: Optional[Mapping[str, Any]] = None) -> None:
        self.content_dir = content_dir
        self.frontmatter = dict(frontmatter or {})

    def iter_agent_files(self, content_root: Path, modules: Iterable[str]) -> List[tuple[str, Path, Path]]:
        """Return ``(module, agents_dir, file)`` for every agent file, module by module."""
        found: List[tuple[str, Path, Path]] = []
        for module in modules:
            agents_dir = Path(content_root) / module / "agents"
            if not agents_dir.is_dir():
                continue
            for path in sorted(agents_dir.rglob("*.md")):
                if path.is_file():
                    found.append((module, agents_dir, path))
        return found

    def collect(self, content_root: Path, modules: Iterable[str]) -> List[AgentArtifact]:
        artifacts: List[AgentArtifact] = []
        for module, agents_dir, path in self.iter_agent_files(content_root, modules):
            try:
                doc = parse_frontmatter(read_text(path))
            except FileNotFoundError as exc:
                raise SourceMissingError(path, module=module, name=path.stem) from exc
            except ValueError as exc:
                raise ModuleDataError(
                    f"Agent {module}/{path.stem} has invalid front matter: {exc}",
                    context={"path": str(path), "module": module, "name": path.stem},
                ) from exc
            meta = doc.frontmatter
            if str(meta.get("localskip", "")).lower() == "true":
                logger.debug("Skipping local-only agent %s", path)
                continue

            relative = path.relative_to(agents_dir).as_posix()
            description = meta.get("description")
            artifact_fields: Dict[str, Any] = {
                "module": module,
                "name": path.stem,
                "relative_path": relative,
                "description": str(description) if description else None,
            }
            artifacts.append(
                AgentArtifact(
                    content=self.render(**artifact_fields),
                    source_path=path,
                    **artifact_fields,
                )
            )
        return artifacts

    def render(
        self,
        *,
        module: str,
        name: str,
        relative_path: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        header: Dict[str, Any] = {
            "name": name,
            "description": description or f"{name} agent",
        }
        header.update(self.frontmatter)
        return render_bundled_template(
            AGENT_TEMPLATE,
            {
                "frontmatter": format_frontmatter(header),
                "content_dir": self.content_dir,
                "module": module,
                "path": relative_path or f"{name}.md",
                "name": name,
            },
        )


__all__ = ["AgentCommandGenerator", "AGENT_TEMPLATE"]
