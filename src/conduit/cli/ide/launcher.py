"""
Conduit ide launcher command.

SUMMARY: Install a launcher command for a custom agent

The launcher is written to ``<namespace>/custom/agents/<name>.md`` inside the
IDE's commands directory and loads the agent file from ``@<agent-path>``.
Nothing is written when the project has no IDE config directory.
"""

from __future__ import annotations

import argparse
import sys

from conduit.cli import OutputFormatter, add_ide_flag, add_standard_flags, get_repo_root, print_success
from conduit.core.install import InstallOrchestrator

SUMMARY = "Install a launcher command for a custom agent"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Agent name; the command becomes /<name>")
    parser.add_argument("agent_path", help="Path of the agent file, relative to the project root")
    parser.add_argument("--description", help="Launcher description (default: '<name> agent')")
    add_ide_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    repo_root = get_repo_root(args)
    orchestrator = InstallOrchestrator(repo_root=repo_root)
    metadata = {"description": args.description} if args.description else {}
    result = orchestrator.install_custom_launcher(
        repo_root, args.name, args.agent_path, metadata, ide=args.ide
    )

    if result is None:
        profile = orchestrator.profile(args.ide)
        formatter.success(
            {"installed": False, "ide": profile.name},
            f"{profile.display_name} is not configured in {repo_root}; nothing written",
        )
        return 0

    if formatter.json_mode:
        formatter.success({"installed": True, **result.to_dict()}, "")
    else:
        print_success(f"{result.command} -> {result.path}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
