"""Custom agent launchers.

A custom launcher is a single command file for an agent that lives outside
the content store. It is written to
``<config_dir>/<commands_dir>/<namespace>/custom/agents/<name>.md``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from conduit.core.config.domains.ide import IdeProfile
from conduit.core.exceptions import MaterializeError
from conduit.core.utils.io import path_exists, write_text
from conduit.core.utils.text import format_frontmatter, render_bundled_template

logger = logging.getLogger(__name__)

LAUNCHER_TEMPLATE = "custom-launcher.md"


@dataclass(frozen=True)
class LauncherResult:
    path: Path
    command: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": str(self.path), "command": self.command}


def render_custom_launcher(
    name: str,
    agent_path: str,
    *,
    description: Optional[str] = None,
    frontmatter: Optional[Mapping[str, Any]] = None,
) -> str:
    header: Dict[str, Any] = {"name": name, "description": description or f"{name} agent"}
    header.update(frontmatter or {})
    return render_bundled_template(
        LAUNCHER_TEMPLATE,
        {"frontmatter": format_frontmatter(header), "name": name, "agent_path": agent_path},
    )


def install_custom_launcher(
    project_root: Path,
    profile: IdeProfile,
    namespace: str,
    name: str,
    agent_path: str,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Optional[LauncherResult]:
    """Write a launcher for ``agent_path``; ``None`` when the IDE is not set up.

    Raises:
        MaterializeError: If the launcher file cannot be written.
    """
    if not path_exists(profile.config_root(project_root)):
        logger.info(
            "%s is not configured in %s; skipping launcher for %s",
            profile.display_name,
            project_root,
            name,
        )
        return None

    meta = dict(metadata or {})
    content = render_custom_launcher(
        name,
        agent_path,
        description=meta.get("description"),
        frontmatter=profile.frontmatter,
    )
    target = profile.install_root(project_root, namespace) / "custom" / "agents" / f"{name}.md"
    try:
        write_text(target, content)
    except OSError as exc:
        raise MaterializeError(target, exc) from exc
    logger.info("Installed custom launcher %s", target)
    return LauncherResult(path=target, command=f"/{name}")


__all__ = ["LauncherResult", "install_custom_launcher", "render_custom_launcher", "LAUNCHER_TEMPLATE"]
