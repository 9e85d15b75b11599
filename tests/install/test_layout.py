from __future__ import annotations

from pathlib import Path

import pytest

from conduit.core.artifacts import AgentArtifact, TaskRef, ToolRef, WorkflowArtifact
from conduit.core.exceptions import MaterializeError, SourceMissingError
from conduit.core.install import LayoutMaterializer, LayoutPlan, partition


@pytest.fixture
def roots(tmp_path: Path):
    config_root = tmp_path / ".cursor"
    install_root = config_root / "commands" / "conduit"
    legacy_root = config_root / "rules" / "conduit"
    return install_root, legacy_root


def _write(path: Path, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_cleanup_removes_install_root_and_legacy_layout(roots) -> None:
    install_root, legacy_root = roots
    _write(install_root / "core" / "agents" / "old.md")
    _write(legacy_root / "core" / "rule.mdc")

    removed = LayoutMaterializer([legacy_root]).cleanup(install_root)

    assert removed == [install_root, legacy_root]
    assert not install_root.exists()
    assert not legacy_root.exists()
    # The parent directories belong to the IDE and are kept.
    assert legacy_root.parent.is_dir()


def test_cleanup_with_nothing_to_remove(roots) -> None:
    install_root, legacy_root = roots

    assert LayoutMaterializer([legacy_root]).cleanup(install_root) == []


def test_materialize_creates_skeleton_and_writes_files(roots, tmp_path: Path) -> None:
    install_root, _ = roots
    task_src = _write(tmp_path / "src" / "review.md", "review task\n")
    grouped = partition(
        [AgentArtifact(module="core", name="pm", content="pm launcher\n")],
        [TaskRef(module="core", name="review", source_path=task_src)],
        [],
        [],
    )

    materializer = LayoutMaterializer()
    counts = materializer.materialize(install_root, grouped)

    assert counts == {"agents": 1, "tasks": 1, "tools": 0, "workflows": 0}
    assert (install_root / "core" / "agents" / "pm.md").read_text(encoding="utf-8") == "pm launcher\n"
    assert (install_root / "core" / "tasks" / "review.md").read_text(encoding="utf-8") == "review task\n"
    for kind_dir in ("tools", "workflows"):
        path = install_root / "core" / kind_dir
        assert path.is_dir() and not any(path.iterdir())
    assert sorted(materializer.written) == sorted(
        [install_root / "core" / "agents" / "pm.md", install_root / "core" / "tasks" / "review.md"]
    )


def test_workflow_file_keeps_relative_path_basename(roots) -> None:
    install_root, _ = roots
    workflow = WorkflowArtifact(
        module="bmm",
        content="wf\n",
        relative_path="bmm/workflows/nested/plan-project.md",
    )

    LayoutMaterializer().materialize(install_root, partition([], [], [], [workflow]))

    assert (install_root / "bmm" / "workflows" / "plan-project.md").read_text(encoding="utf-8") == "wf\n"


def test_existing_files_are_overwritten(roots) -> None:
    install_root, _ = roots
    _write(install_root / "core" / "agents" / "pm.md", "stale")

    LayoutMaterializer().materialize(
        install_root,
        partition([AgentArtifact(module="core", name="pm", content="fresh")], [], [], []),
    )

    assert (install_root / "core" / "agents" / "pm.md").read_text(encoding="utf-8") == "fresh"


def test_missing_tool_source_raises_source_missing_error(roots, tmp_path: Path) -> None:
    install_root, _ = roots
    missing = tmp_path / "src" / "gone.md"
    grouped = partition([], [], [ToolRef(module="cis", name="gone", source_path=missing)], [])

    with pytest.raises(SourceMissingError) as excinfo:
        LayoutMaterializer().materialize(install_root, grouped)

    err = excinfo.value
    assert err.path == missing
    assert err.context == {"path": str(missing), "module": "cis", "name": "gone"}
    assert str(missing) in str(err)


def test_write_failure_raises_materialize_error(roots) -> None:
    install_root, _ = roots
    # A file where the module directory should go makes the skeleton impossible.
    _write(install_root / "core", "not a directory")
    grouped = partition([AgentArtifact(module="core", name="pm", content="pm")], [], [], [])

    with pytest.raises(MaterializeError) as excinfo:
        LayoutMaterializer().materialize(install_root, grouped)

    assert excinfo.value.context["path"].startswith(str(install_root / "core"))
    assert isinstance(excinfo.value.__cause__, OSError)


def test_layout_plan_paths(tmp_path: Path) -> None:
    plan = LayoutPlan(tmp_path / "root")
    agent = AgentArtifact(module="core", name="pm", content="")

    assert plan.index_path == tmp_path / "root" / "index.md"
    assert plan.target_path(agent) == tmp_path / "root" / "core" / "agents" / "pm.md"


def test_tool_source_that_is_a_directory_raises_source_missing_error(roots, tmp_path: Path) -> None:
    install_root, _ = roots
    folder = tmp_path / "src" / "shard.md"
    folder.mkdir(parents=True)
    grouped = partition([], [], [ToolRef(module="core", name="shard", source_path=folder)], [])

    with pytest.raises(SourceMissingError) as excinfo:
        LayoutMaterializer().materialize(install_root, grouped)

    assert excinfo.value.context == {"path": str(folder), "module": "core", "name": "shard"}


def test_unreadable_task_source_raises_source_missing_error(roots, tmp_path: Path, monkeypatch) -> None:
    install_root, _ = roots
    source = _write(tmp_path / "src" / "review.md")
    grouped = partition([], [TaskRef(module="core", name="review", source_path=source)], [], [])

    def _denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr("conduit.core.install.layout.read_text", _denied)

    with pytest.raises(SourceMissingError) as excinfo:
        LayoutMaterializer().materialize(install_root, grouped)

    assert excinfo.value.context["name"] == "review"
    assert isinstance(excinfo.value.__cause__, PermissionError)
