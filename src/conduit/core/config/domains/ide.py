"""Domain-specific configuration for IDE profiles.

Each profile names the IDE's configuration root (``.cursor``), the commands
directory inside it, and any legacy directories a previous installer wrote
into. The install root of a run is always
``<project>/<config_dir>/<commands_dir>/<namespace>``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from conduit.core.exceptions import ConfigError

from ..base import BaseDomainConfig

DUPLICATE_POLICIES = ("warn", "error")


@dataclass(frozen=True)
class IdeProfile:
    name: str
    display_name: str
    config_dir: str
    commands_dir: str = "commands"
    legacy_dirs: Tuple[str, ...] = ()
    frontmatter: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "IdeProfile":
        config_dir = data.get("config_dir")
        if not config_dir:
            raise ConfigError(
                f"IDE profile '{name}' is missing 'config_dir'",
                context={"ide": name},
            )
        return cls(
            name=name,
            display_name=str(data.get("display_name") or name),
            config_dir=str(config_dir),
            commands_dir=str(data.get("commands_dir") or "commands"),
            legacy_dirs=tuple(str(d) for d in (data.get("legacy_dirs") or [])),
            frontmatter=dict(data.get("frontmatter") or {}),
        )

    def config_root(self, project_root: Path) -> Path:
        return Path(project_root) / self.config_dir

    def install_root(self, project_root: Path, namespace: str) -> Path:
        return self.config_root(project_root) / self.commands_dir / namespace

    def legacy_roots(self, project_root: Path, namespace: str) -> List[Path]:
        root = self.config_root(project_root)
        return [root / legacy / namespace for legacy in self.legacy_dirs]

    def display_dir(self, namespace: str) -> str:
        """Install root relative to the project, as shown to users."""
        return f"{self.config_dir}/{self.commands_dir}/{namespace}/"


class IdeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "ide"

    @cached_property
    def default(self) -> str:
        return str(self.section.get("default") or "cursor")

    @cached_property
    def namespace(self) -> str:
        return str(self.section.get("namespace") or "conduit")

    @cached_property
    def duplicates(self) -> str:
        policy = str(self.section.get("duplicates") or "warn").lower()
        if policy not in DUPLICATE_POLICIES:
            raise ConfigError(
                f"Unknown duplicates policy '{policy}'",
                context={"allowed": list(DUPLICATE_POLICIES)},
            )
        return policy

    @cached_property
    def platforms(self) -> Dict[str, IdeProfile]:
        raw = self.section.get("platforms") or {}
        return {name: IdeProfile.from_dict(name, data or {}) for name, data in raw.items()}

    def get_profile(self, name: Optional[str] = None) -> IdeProfile:
        """Return the named profile, or the configured default.

        Raises:
            ConfigError: If no profile with that name is configured.
        """
        key = name or self.default
        try:
            return self.platforms[key]
        except KeyError:
            raise ConfigError(
                f"Unknown IDE profile '{key}'",
                context={"ide": key, "available": sorted(self.platforms)},
            ) from None


__all__ = ["IdeConfig", "IdeProfile", "DUPLICATE_POLICIES"]
