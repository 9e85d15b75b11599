from __future__ import annotations

import json

import pytest

from conduit.cli._dispatcher import build_parser, main
from conduit.cli._utils import parse_modules
from helpers.content_store import ContentStoreBuilder


def _json(capsys) -> dict:
    return json.loads(capsys.readouterr().out)


def test_parser_discovers_domains_and_commands() -> None:
    parser = build_parser()

    args = parser.parse_args(["ide", "install", "--modules", "bmm", "--json"])
    assert args.domain == "ide"
    assert args.command == "install"
    assert args.modules == "bmm"
    assert callable(args._func)

    assert parser.parse_args(["config", "show", "ide.namespace"]).key == "ide.namespace"


def test_no_domain_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: conduit" in capsys.readouterr().out


def test_parse_modules() -> None:
    assert parse_modules(" bmm, ,cis,bmm ") == ("bmm", "cis")
    assert parse_modules(None) == ()


def test_install_json(project, store, capsys) -> None:
    store.agent("core", "pm")
    store.agent("bmm", "dev")
    store.build()

    code = main(["ide", "install", "--modules", "bmm", "--json"])

    payload = _json(capsys)
    assert code == 0
    assert payload["success"] is True
    data = payload["data"]
    assert data["ide"] == "cursor"
    assert data["counts"] == {"agents": 2, "tasks": 0, "tools": 0, "workflows": 0}
    assert data["modules"] == ["bmm", "core"]
    assert (project / ".cursor" / "commands" / "conduit" / "bmm" / "agents" / "dev.md").is_file()


def test_install_text(project, store, capsys) -> None:
    store.agent("core", "pm")
    store.build()

    assert main(["ide", "install"]) == 0

    out = capsys.readouterr().out
    assert "cursor: installed into" in out
    assert "  - 1 agents" in out
    assert "  modules: core" in out


def test_install_dry_run_text(project, store, capsys) -> None:
    store.agent("core", "pm")
    store.build()

    assert main(["ide", "install", "--dry-run"]) == 0

    assert "would install" in capsys.readouterr().out
    assert not (project / ".cursor").exists()


def test_install_custom_content_dir(project, capsys) -> None:
    ContentStoreBuilder(project, folder="vendor_store").agent("core", "pm")

    code = main(["ide", "install", "--content", "vendor_store", "--json"])

    assert code == 0
    assert _json(capsys)["data"]["counts"]["agents"] == 1
    launcher = project / ".cursor" / "commands" / "conduit" / "core" / "agents" / "pm.md"
    assert "@{project-root}/vendor_store/core/agents/pm.md" in launcher.read_text(encoding="utf-8")


def test_install_missing_source_reports_structured_error(project, store, capsys) -> None:
    store.task("core", "review", content=None)
    store.build()

    code = main(["ide", "install", "--json"])

    payload = _json(capsys)
    assert code == 1
    assert payload["success"] is False
    assert payload["error"]["code"] == "SourceMissingError"
    assert payload["error"]["context"]["name"] == "review"


def test_install_unknown_ide(project, store, capsys) -> None:
    store.build()

    code = main(["ide", "install", "--ide", "notepad", "--json"])

    payload = _json(capsys)
    assert code == 1
    assert payload["error"]["code"] == "ConfigError"
    assert payload["error"]["context"]["ide"] == "notepad"


def test_install_error_text_mode(project, store, capsys) -> None:
    store.build()

    assert main(["ide", "install", "--ide", "notepad"]) == 1
    assert "ConfigError: Unknown IDE profile 'notepad'" in capsys.readouterr().err


def test_detect_exit_codes(project, store, capsys) -> None:
    store.agent("core", "pm")
    store.build()

    assert main(["ide", "detect", "--json"]) == 1
    assert _json(capsys)["data"]["detected"] is False

    main(["ide", "install", "--json"])
    capsys.readouterr()

    assert main(["ide", "detect", "--json"]) == 0
    data = _json(capsys)["data"]
    assert data == {
        "ide": "cursor",
        "detected": True,
        "install_root": str(project / ".cursor" / "commands" / "conduit"),
    }


def test_launcher_command(project, capsys) -> None:
    assert main(["ide", "launcher", "reviewer", "agents/reviewer.md", "--json"]) == 0
    assert _json(capsys)["data"] == {"installed": False, "ide": "cursor"}

    (project / ".cursor").mkdir()
    assert main(["ide", "launcher", "reviewer", "agents/reviewer.md", "--description", "Reviews", "--json"]) == 0

    data = _json(capsys)["data"]
    assert data["installed"] is True
    assert data["command"] == "/reviewer"
    assert "@agents/reviewer.md" in (project / ".cursor" / "commands" / "conduit" / "custom" / "agents" / "reviewer.md").read_text(
        encoding="utf-8"
    )


def test_list_json(project, store, capsys) -> None:
    store.agent("core", "pm")
    store.tool("core", "shard")
    store.workflow("bmm", "plan")
    store.build()

    assert main(["ide", "list", "--json"]) == 0

    data = _json(capsys)["data"]
    assert data["modules"] == {
        "core": {"agents": ["pm"], "tasks": [], "tools": ["shard"], "workflows": []},
        "bmm": {"agents": [], "tasks": [], "tools": [], "workflows": ["plan"]},
    }
    assert data["counts"] == {"agents": 1, "tasks": 0, "tools": 1, "workflows": 1}
    assert not (project / ".cursor").exists()


def test_list_text_empty(project, store, capsys) -> None:
    store.build()

    assert main(["ide", "list"]) == 0
    assert "No artifacts found" in capsys.readouterr().out


def test_config_show_key(project, capsys) -> None:
    assert main(["config", "show", "ide.namespace", "--json"]) == 0
    assert _json(capsys)["data"] == {"ide": {"namespace": "conduit"}}


def test_config_show_yaml(project, capsys) -> None:
    assert main(["config", "show", "content"]) == 0
    out = capsys.readouterr().out
    assert "content:\n  folder_name: _conduit\n  core_module: core" in out


def test_config_show_missing_key(project, capsys) -> None:
    assert main(["config", "show", "ide.nope", "--json"]) == 1
    payload = _json(capsys)
    assert payload["error"]["code"] == "KEY_NOT_FOUND"
    assert payload["error"]["context"] == {"key": "ide.nope"}


def test_logging_file_enabled_from_environment(project, store, monkeypatch, capsys) -> None:
    monkeypatch.setenv("CONDUIT_LOGGING__ENABLED", "true")
    store.agent("core", "pm")
    store.build()

    assert main(["ide", "install", "--json"]) == 0

    log_file = project / ".conduit" / "logs" / "conduit.log"
    assert log_file.is_file()
    assert "Installing Cursor commands" in log_file.read_text(encoding="utf-8")


@pytest.mark.parametrize("argv", [["--version"], ["ide", "install", "--help"]])
def test_argparse_exits(argv, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 0
