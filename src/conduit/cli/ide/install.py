"""
Conduit ide install command.

SUMMARY: Install content-store artifacts as IDE commands

Removes the previous install (and any legacy layout), writes every agent,
task, tool and workflow command of the selected modules, and regenerates
the index.
"""

from __future__ import annotations

import argparse
import sys

from conduit.cli import (
    OutputFormatter,
    add_content_flag,
    add_dry_run_flag,
    add_ide_flag,
    add_standard_flags,
    get_content_root,
    get_repo_root,
    parse_modules,
    print_success,
)
from conduit.core.install import InstallOptions, InstallOrchestrator

SUMMARY = "Install content-store artifacts as IDE commands"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_content_flag(parser)
    add_ide_flag(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    repo_root = get_repo_root(args)
    orchestrator = InstallOrchestrator(repo_root=repo_root)
    content_root = get_content_root(args, repo_root, orchestrator.default_content_root(repo_root))
    options = InstallOptions(
        selected_modules=parse_modules(args.modules),
        ide=args.ide,
        dry_run=bool(args.dry_run),
    )

    result = orchestrator.install(repo_root, content_root, options)

    if formatter.json_mode:
        formatter.success(result.to_dict(), "")
        return 0

    verb = "would install" if result.dry_run else "installed"
    print_success(f"{result.ide}: {verb} into {result.install_root}")
    for kind, count in result.counts_by_kind.items():
        formatter.text(f"  - {count} {kind}")
    formatter.text_kv("modules", ", ".join(result.modules) or "(none)")
    if result.index_path is not None:
        formatter.text_kv("index", result.index_path)
    for removed in result.removed:
        formatter.text_kv("removed", removed)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
