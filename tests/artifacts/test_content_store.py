from __future__ import annotations

from pathlib import Path

import pytest

from conduit.core.artifacts import (
    WORKFLOW_COMMAND,
    WORKFLOW_LAUNCHER,
    ArtifactKind,
    ContentStoreSource,
    TaskRef,
    resolve_source_path,
)
from conduit.core.artifacts.manifests import TASK_MANIFEST, load_manifest
from conduit.core.artifacts.workflows import installed_path
from conduit.core.exceptions import ModuleDataError
from conduit.core.utils.text import parse_frontmatter


@pytest.fixture
def source() -> ContentStoreSource:
    return ContentStoreSource(frontmatter={"globs": [], "alwaysApply": False})


def test_agent_modules_core_first_without_repeats(source) -> None:
    assert source.agent_modules(["bmm", "core", "", "cis", "bmm"]) == ["core", "bmm", "cis"]


def test_collect_agents(store, source) -> None:
    store.agent("core", "pm", description="Product manager")
    store.agent("bmm", "dev", subdir="team")
    store.agent("bmm", "hidden", localskip=True)
    store.agent("cis", "unselected")
    content_root = store.build()

    agents = source.collect_agent_artifacts(content_root, ["bmm"])

    assert [(a.module, a.name) for a in agents] == [("core", "pm"), ("bmm", "dev")]
    pm, dev = agents
    assert pm.kind is ArtifactKind.AGENT
    assert pm.description == "Product manager"
    assert dev.relative_path == "team/dev.md"
    assert dev.source_path == content_root / "bmm" / "agents" / "team" / "dev.md"

    doc = parse_frontmatter(dev.content)
    assert doc.frontmatter == {
        "name": "dev",
        "description": "dev agent",
        "globs": [],
        "alwaysApply": False,
    }
    assert "@{project-root}/_conduit/bmm/agents/team/dev.md" in doc.content


def test_collect_agents_without_agents_dir(store, source) -> None:
    assert source.collect_agent_artifacts(store.build(), ["bmm"]) == []


def test_invalid_agent_front_matter(store, source) -> None:
    store.agent("core", "broken", body="---\nname: [unclosed\n---\n# broken\n")

    with pytest.raises(ModuleDataError) as exc_info:
        source.collect_agent_artifacts(store.build(), [])

    assert exc_info.value.context["name"] == "broken"


def test_collect_workflows(store, source) -> None:
    store.workflow("bmm", "plan", description="Plan a project")
    store.workflow("bmm", "party", path="{project-root}/_conduit/core/workflows/party/workflow.md")
    store.workflow("cis", "storm")
    content_root = store.build()

    workflows, counts = source.collect_workflow_artifacts(content_root)

    assert counts == {"commands": 3, "launchers": 2}
    commands = [w for w in workflows if w.type == WORKFLOW_COMMAND]
    launchers = [w for w in workflows if w.type == WORKFLOW_LAUNCHER]
    assert [(w.module, w.name) for w in commands] == [("bmm", "plan"), ("bmm", "party"), ("cis", "storm")]
    assert [w.relative_path for w in launchers] == ["bmm/workflows/README.md", "cis/workflows/README.md"]

    plan = commands[0]
    assert plan.file_name == "plan.md"
    assert plan.description == "Plan a project"
    assert "@{project-root}/_conduit/core/tasks/workflow.xml" in plan.content
    assert "{project-root}/_conduit/bmm/workflows/plan/workflow.yaml" in plan.content
    assert parse_frontmatter(plan.content).frontmatter["description"] == "Plan a project"

    party = commands[1]
    assert "LOAD the FULL @{project-root}/_conduit/core/workflows/party/workflow.md" in party.content
    assert "workflow.xml" not in party.content

    readme = launchers[0].content
    assert readme.startswith("# BMM Workflows\n")
    assert "**plan**\n- Path: `{project-root}/_conduit/bmm/workflows/plan/workflow.yaml`\n- Plan a project\n" in readme
    assert "**party**" in readme


def test_missing_workflow_manifest(store, source) -> None:
    assert source.collect_workflow_artifacts(store.build()) == ([], {"commands": 0, "launchers": 0})


def test_tasks_and_tools_from_manifests(store, source) -> None:
    store.task("core", "review", description="Review a change")
    store.task("bmm", "internal", standalone=False)
    store.task("bmm", "shard")
    store.tool("core", "index-docs")
    content_root = store.build()

    tasks = source.get_tasks(content_root)
    assert [(t.module, t.name) for t in tasks] == [("core", "review"), ("bmm", "shard")]
    assert tasks[0] == TaskRef(
        module="core",
        name="review",
        source_path=store.project_root / "_conduit" / "core" / "tasks" / "review.md",
        description="Review a change",
        standalone=True,
    )
    assert tasks[1].description == "Shard"
    assert len(source.get_tasks(content_root, standalone_only=False)) == 3

    tools = source.get_tools(content_root)
    assert [t.name for t in tools] == ["index-docs"]
    assert tools[0].kind is ArtifactKind.TOOL


def test_missing_task_manifest(store, source) -> None:
    content_root = store.build()

    assert source.get_tasks(content_root) == []
    assert load_manifest(content_root, TASK_MANIFEST) is None


def test_manifest_row_without_name(store) -> None:
    content_root = store.build()
    (content_root / "_config" / TASK_MANIFEST).write_text(
        "name,description,module,path,standalone\n"
        " review , Review , core , _conduit/core/tasks/review.md , true \n"
        "\n"
        ",orphan,core,x.md,true\n",
        encoding="utf-8",
    )

    with pytest.raises(ModuleDataError) as exc_info:
        load_manifest(content_root, TASK_MANIFEST)

    assert exc_info.value.context["line"] == 4


def test_manifest_values_are_stripped(store) -> None:
    content_root = store.build()
    (content_root / "_config" / TASK_MANIFEST).write_text(
        "name,module,path,standalone\n review , core , a.md , TRUE \n",
        encoding="utf-8",
    )

    assert load_manifest(content_root, TASK_MANIFEST) == [
        {"name": "review", "module": "core", "path": "a.md", "standalone": "TRUE"}
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("{project-root}/_conduit/x/workflow.yaml", "{project-root}/_conduit/x/workflow.yaml"),
        ("_conduit/x/workflow.yaml", "{project-root}/_conduit/x/workflow.yaml"),
        ("_conduit\\x\\workflow.yaml", "{project-root}/_conduit/x/workflow.yaml"),
    ],
)
def test_installed_path(tmp_path: Path, raw: str, expected: str) -> None:
    assert installed_path(raw, tmp_path / "_conduit") == expected


def test_installed_path_absolute(tmp_path: Path) -> None:
    content_root = tmp_path / "_conduit"
    inside = content_root / "bmm" / "workflows" / "plan" / "workflow.yaml"

    assert installed_path(str(inside), content_root) == "{project-root}/_conduit/bmm/workflows/plan/workflow.yaml"
    assert installed_path("/elsewhere/workflow.yaml", content_root) == "/elsewhere/workflow.yaml"


def test_resolve_source_path(tmp_path: Path) -> None:
    content_root = tmp_path / "_conduit"

    assert resolve_source_path("_conduit/core/tasks/a.md", content_root) == tmp_path / "_conduit/core/tasks/a.md"
    assert resolve_source_path("{project-root}/_conduit/core/tasks/a.md", content_root) == (
        tmp_path / "_conduit/core/tasks/a.md"
    )
    assert resolve_source_path("/abs/a.md", content_root) == Path("/abs/a.md")
