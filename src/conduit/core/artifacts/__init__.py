"""Artifact model and collection from an installed content store."""
from __future__ import annotations

from .models import (
    WORKFLOW_COMMAND,
    WORKFLOW_LAUNCHER,
    AgentArtifact,
    Artifact,
    ArtifactKind,
    TaskRef,
    ToolRef,
    WorkflowArtifact,
)
from .source import ArtifactSource, ContentStoreSource, resolve_source_path

__all__ = [
    "ArtifactKind",
    "AgentArtifact",
    "TaskRef",
    "ToolRef",
    "WorkflowArtifact",
    "Artifact",
    "WORKFLOW_COMMAND",
    "WORKFLOW_LAUNCHER",
    "ArtifactSource",
    "ContentStoreSource",
    "resolve_source_path",
]
