"""
Auto-discovery CLI dispatcher for Conduit.

Scans subfolders for commands and automatically registers them.
Adding a new command means adding a .py file to the appropriate subfolder
that exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from conduit.cli._args import add_verbose_flag
from conduit.core.exceptions import ConduitError
from conduit.core.utils.cli import run_cli

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Discover CLI domain subfolders (ide, config, ...)."""
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.is_dir() and not item.name.startswith("_"):
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Discover every command module in a domain subfolder."""
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in domain_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        module = importlib.import_module(f"conduit.cli.{domain}.{cmd_name}")
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", f"{domain} {cmd_name}"),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    parser = argparse.ArgumentParser(
        prog="conduit",
        description="Conduit - install modular agent content as IDE commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    add_verbose_flag(parser)

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )

        for cmd_name, cmd_info in sorted(domain_commands.items()):
            primary_name = cmd_name.replace("_", "-")
            aliases = [cmd_name] if primary_name != cmd_name else []
            cmd_parser = cmd_subparsers.add_parser(
                primary_name,
                aliases=aliases,
                help=cmd_info["summary"],
            )
            if cmd_info["register_args"]:
                cmd_info["register_args"](cmd_parser)
            if cmd_info["main"]:
                cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from conduit import __version__

    return __version__


def _configure_logging(args: argparse.Namespace, json_mode: bool) -> None:
    from conduit.core.logging_setup import (
        add_stderr_handler,
        configure_stdlib_logging,
        suppress_lastresort_in_json_mode,
    )

    if getattr(args, "verbose", False):
        add_stderr_handler("DEBUG")

    try:
        from conduit.cli._utils import get_repo_root
        from conduit.core.config.domains import LoggingConfig

        cfg = LoggingConfig(repo_root=get_repo_root(args))
        if cfg.enabled:
            configure_stdlib_logging(log_path=cfg.path, level=cfg.level)
    except (ConduitError, OSError) as exc:
        # Configuration problems surface again, with context, when the command runs.
        logger.debug("Log file setup skipped: %s", exc)

    if json_mode:
        suppress_lastresort_in_json_mode()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Conduit CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    func = getattr(args, "_func", None)
    if func is None:
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)  # type: ignore[union-attr]
        if domain_parser:
            domain_parser.print_help()
        return 0

    json_mode = bool(getattr(args, "json", False))
    _configure_logging(args, json_mode)

    command_name = f"{args.domain} {args.command}"
    logger.debug("Running %s", command_name)
    return run_cli(func, args, json_errors=json_mode)


if __name__ == "__main__":
    sys.exit(main())
