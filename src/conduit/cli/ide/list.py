"""
Conduit ide list command.

SUMMARY: List what an install would write, grouped by module and kind
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

from conduit.core.artifacts import ArtifactKind
from conduit.cli import (
    OutputFormatter,
    add_content_flag,
    add_ide_flag,
    add_standard_flags,
    get_content_root,
    get_repo_root,
    parse_modules,
)
from conduit.core.install import InstallOrchestrator

SUMMARY = "List what an install would write, grouped by module and kind"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_content_flag(parser)
    add_ide_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    repo_root = get_repo_root(args)
    orchestrator = InstallOrchestrator(repo_root=repo_root)
    content_root = get_content_root(args, repo_root, orchestrator.default_content_root(repo_root))
    grouped = orchestrator.collect(content_root, parse_modules(args.modules), args.ide)

    listing: Dict[str, Dict[str, Any]] = {}
    for module in grouped.iter_modules():
        listing[module] = {
            kind.dir_name: [a.name for a in grouped.items(module, kind)]
            for kind in ArtifactKind.ordered()
        }

    if formatter.json_mode:
        formatter.success({"modules": listing, "counts": grouped.counts_by_kind()}, "")
        return 0

    if not listing:
        formatter.text(f"No artifacts found in {content_root}")
        return 0
    for module, kinds in listing.items():
        formatter.text(f"[{module}]")
        for kind_dir, names in kinds.items():
            if names:
                formatter.text_kv(kind_dir, ", ".join(names))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
