"""
Conduit ide detect command.

SUMMARY: Check whether commands are already installed for an IDE
"""

from __future__ import annotations

import argparse
import sys

from conduit.cli import OutputFormatter, add_ide_flag, add_standard_flags, get_repo_root
from conduit.core.install import InstallOrchestrator

SUMMARY = "Check whether commands are already installed for an IDE"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_ide_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Exit 0 when an install was found, 1 otherwise."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    repo_root = get_repo_root(args)
    orchestrator = InstallOrchestrator(repo_root=repo_root)
    profile = orchestrator.profile(args.ide)
    install_root = orchestrator.install_root(repo_root, profile.name)
    detected = orchestrator.detect(repo_root, profile.name)

    state = "installed" if detected else "not installed"
    formatter.success(
        {"ide": profile.name, "detected": detected, "install_root": str(install_root)},
        f"{profile.display_name}: {state} ({install_root})",
    )
    return 0 if detected else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
