"""Grouping of collected artifacts by module and kind."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Sequence, Tuple

from conduit.core.artifacts.models import (
    AgentArtifact,
    Artifact,
    ArtifactKind,
    TaskRef,
    ToolRef,
    WorkflowArtifact,
)
from conduit.core.exceptions import DuplicateArtifactError, ModuleDataError

logger = logging.getLogger(__name__)

Grouped = Dict[str, Dict[ArtifactKind, Tuple[Artifact, ...]]]


@dataclass(frozen=True)
class Partition:
    """Artifacts grouped as ``module -> kind -> artifacts``.

    ``grouped`` keeps modules in first-encounter order and, inside each
    module, all four kinds in :meth:`ArtifactKind.ordered` order (empty
    tuples included).
    """

    modules: FrozenSet[str]
    grouped: Grouped

    def iter_modules(self) -> Iterator[str]:
        return iter(self.grouped)

    def items(self, module: str, kind: ArtifactKind) -> Tuple[Artifact, ...]:
        return self.grouped.get(module, {}).get(kind, ())

    def counts_by_kind(self) -> Dict[str, int]:
        counts = {kind.dir_name: 0 for kind in ArtifactKind.ordered()}
        for buckets in self.grouped.values():
            for kind, items in buckets.items():
                counts[kind.dir_name] += len(items)
        return counts

    def __len__(self) -> int:
        return sum(self.counts_by_kind().values())


def _is_path_segment(value: str) -> bool:
    """True when ``value`` names exactly one entry inside its parent directory."""
    return value not in {".", ".."} and "/" not in value and "\\" not in value


def _check_module(artifact: Artifact, kind: ArtifactKind) -> str:
    module = getattr(artifact, "module", None)
    name = getattr(artifact, "name", "?")
    if not isinstance(module, str) or not module.strip():
        raise ModuleDataError(
            f"{kind.value} artifact '{name}' has no module",
            context={"kind": kind.value, "name": name},
        )
    if not _is_path_segment(module):
        raise ModuleDataError(
            f"{kind.value} artifact '{name}' has invalid module '{module}'",
            context={"kind": kind.value, "name": name, "module": module},
        )
    return module


def _check_name(artifact: Artifact, kind: ArtifactKind, module: str) -> None:
    name = getattr(artifact, "name", None)
    if not isinstance(name, str) or not name.strip() or not _is_path_segment(name):
        raise ModuleDataError(
            f"{kind.value} artifact in module '{module}' has invalid name '{name}'",
            context={"kind": kind.value, "name": name, "module": module},
        )


def _check_kind(artifact: object, expected: ArtifactKind) -> None:
    actual = getattr(artifact, "kind", None)
    if actual is not expected:
        name = getattr(artifact, "name", "?")
        raise ModuleDataError(
            f"Artifact '{name}' of kind {getattr(actual, 'value', actual)} "
            f"was passed as {expected.value}",
            context={"expected": expected.value, "name": name},
        )


def partition(
    agents: Sequence[AgentArtifact],
    tasks: Sequence[TaskRef],
    tools: Sequence[ToolRef],
    workflows: Sequence[WorkflowArtifact],
    *,
    duplicates: str = "warn",
) -> Partition:
    """Group artifacts by ``(module, kind)``.

    Only ``workflow-command`` workflows take part; launcher READMEs are
    dropped. A module appears exactly when at least one artifact names it.

    Raises:
        ModuleDataError: An artifact has no module, sits in the wrong list,
            or has a module or name that is not a single path segment.
        DuplicateArtifactError: Two artifacts share ``(module, kind, name)``
            and ``duplicates`` is ``"error"``.
    """
    inputs: List[Tuple[ArtifactKind, Iterable[Artifact]]] = [
        (ArtifactKind.AGENT, agents),
        (ArtifactKind.TASK, tasks),
        (ArtifactKind.TOOL, tools),
        (ArtifactKind.WORKFLOW, workflows),
    ]

    buckets: Dict[str, Dict[ArtifactKind, List[Artifact]]] = {}
    for kind, artifacts in inputs:
        for artifact in artifacts:
            _check_kind(artifact, kind)
            if kind is ArtifactKind.WORKFLOW and not artifact.is_command:  # type: ignore[union-attr]
                continue
            module = _check_module(artifact, kind)
            _check_name(artifact, kind, module)
            module_buckets = buckets.setdefault(
                module, {k: [] for k in ArtifactKind.ordered()}
            )
            _add(module_buckets[kind], artifact, module, kind, duplicates)

    grouped: Grouped = {
        module: {kind: tuple(items) for kind, items in kinds.items()}
        for module, kinds in buckets.items()
    }
    return Partition(modules=frozenset(grouped), grouped=grouped)


def _add(
    bucket: List[Artifact],
    artifact: Artifact,
    module: str,
    kind: ArtifactKind,
    duplicates: str,
) -> None:
    for index, existing in enumerate(bucket):
        if existing.name != artifact.name:
            continue
        context = {"module": module, "kind": kind.value, "name": artifact.name}
        if duplicates == "error":
            raise DuplicateArtifactError(
                f"Duplicate {kind.value} '{artifact.name}' in module '{module}'",
                context=context,
            )
        logger.warning(
            "Duplicate %s '%s' in module '%s'; the later definition wins",
            kind.value,
            artifact.name,
            module,
        )
        bucket[index] = artifact
        return
    bucket.append(artifact)


__all__ = ["Partition", "partition"]
