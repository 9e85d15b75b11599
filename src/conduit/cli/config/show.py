"""
Conduit config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and CONDUIT_* environment variables.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from conduit.cli import OutputFormatter, add_standard_flags, get_repo_root
from conduit.core.config import ConfigManager
from conduit.core.utils.cli import cli_error

SUMMARY = "Show current configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'ide.namespace')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    add_standard_flags(parser)


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    out = value
    for part in reversed([p for p in key.split(".") if p]):
        out = {part: out}
    return out


def main(args: argparse.Namespace) -> int:
    json_mode = bool(getattr(args, "json", False)) or args.format == "json"
    formatter = OutputFormatter(json_mode=json_mode)

    manager = ConfigManager(get_repo_root(args))
    config_data = manager.load_config(validate=True)

    if args.key:
        value = manager.get(args.key)
        if value is None:
            return cli_error(
                f"Key not found: {args.key}",
                "KEY_NOT_FOUND",
                json_mode,
                context={"key": args.key},
            )
        payload = _nest_key(args.key, value)
    else:
        payload = config_data

    if json_mode:
        formatter.success(payload, "")
    else:
        formatter.text(
            yaml.safe_dump(payload, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip()
        )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
