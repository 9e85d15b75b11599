"""
Conduit CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (ide/, config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._args import (
    add_content_flag,
    add_dry_run_flag,
    add_ide_flag,
    add_json_flag,
    add_repo_root_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._output import OutputFormatter, print_success
from ._utils import get_content_root, get_repo_root, parse_modules

__all__ = [
    # Output formatting
    "OutputFormatter",
    "print_success",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_ide_flag",
    "add_content_flag",
    "add_standard_flags",
    # Utilities
    "get_repo_root",
    "get_content_root",
    "parse_modules",
]
