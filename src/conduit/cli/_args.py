"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (debug logging on stderr)",
    )


def add_ide_flag(parser: argparse.ArgumentParser) -> None:
    """Add --ide flag selecting a configured IDE profile."""
    parser.add_argument(
        "--ide",
        type=str,
        help="IDE profile to target (default: ide.default from config)",
    )


def add_content_flag(parser: argparse.ArgumentParser) -> None:
    """Add --content and --modules for commands that read a content store."""
    parser.add_argument(
        "--content",
        type=str,
        help="Content store directory (default: <repo-root>/<content.folder_name>)",
    )
    parser.add_argument(
        "--modules",
        type=str,
        default="",
        help="Comma-separated modules to install in addition to core",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use: --json, --repo-root."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_ide_flag",
    "add_content_flag",
    "add_standard_flags",
]
