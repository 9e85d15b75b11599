"""Artifact data model.

An artifact is one installable command contributed by a module. Four kinds
exist and the set is closed:

- ``AgentArtifact``: rendered launcher content for an agent
- ``TaskRef`` / ``ToolRef``: references whose content is read from
  ``source_path`` only when the artifact is written
- ``WorkflowArtifact``: rendered workflow command (or module launcher README,
  distinguished by ``type``)

Identity is ``(module, kind, name)``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple, Union

WORKFLOW_COMMAND = "workflow-command"
WORKFLOW_LAUNCHER = "workflow-launcher"


class ArtifactKind(str, Enum):
    AGENT = "agent"
    TASK = "task"
    TOOL = "tool"
    WORKFLOW = "workflow"

    @property
    def dir_name(self) -> str:
        """Directory holding this kind under a module (``agents``, ``tasks``...)."""
        return f"{self.value}s"

    @property
    def label(self) -> str:
        """Section label in the install index."""
        return f"{self.value.capitalize()}s"

    @classmethod
    def ordered(cls) -> Tuple["ArtifactKind", ...]:
        return (cls.AGENT, cls.TASK, cls.TOOL, cls.WORKFLOW)


@dataclass(frozen=True)
class AgentArtifact:
    module: str
    name: str
    content: str
    source_path: Optional[Path] = None
    relative_path: Optional[str] = None
    description: Optional[str] = None

    kind = ArtifactKind.AGENT

    @property
    def file_name(self) -> str:
        return f"{self.name}.md"


@dataclass(frozen=True)
class TaskRef:
    module: str
    name: str
    source_path: Path
    description: Optional[str] = None
    standalone: bool = True

    kind = ArtifactKind.TASK

    @property
    def file_name(self) -> str:
        return f"{self.name}.md"


@dataclass(frozen=True)
class ToolRef:
    module: str
    name: str
    source_path: Path
    description: Optional[str] = None
    standalone: bool = True

    kind = ArtifactKind.TOOL

    @property
    def file_name(self) -> str:
        return f"{self.name}.md"


@dataclass(frozen=True)
class WorkflowArtifact:
    module: str
    content: str
    relative_path: str
    source_path: Optional[str] = None
    type: str = WORKFLOW_COMMAND
    description: Optional[str] = None

    kind = ArtifactKind.WORKFLOW

    @property
    def file_name(self) -> str:
        """Base name of ``relative_path``; workflow files keep it as-is."""
        return PurePosixPath(self.relative_path.replace("\\", "/")).name

    @property
    def name(self) -> str:
        file_name = self.file_name
        return file_name[: -len(".md")] if file_name.endswith(".md") else file_name

    @property
    def is_command(self) -> bool:
        return self.type == WORKFLOW_COMMAND


Artifact = Union[AgentArtifact, TaskRef, ToolRef, WorkflowArtifact]


__all__ = [
    "ArtifactKind",
    "AgentArtifact",
    "TaskRef",
    "ToolRef",
    "WorkflowArtifact",
    "Artifact",
    "WORKFLOW_COMMAND",
    "WORKFLOW_LAUNCHER",
]
