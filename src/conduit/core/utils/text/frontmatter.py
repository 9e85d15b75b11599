"""YAML frontmatter parsing utilities.

Agent sources and generated command files carry an optional YAML
frontmatter block delimited by '---' markers at the start of the file.

Example:
    ```yaml
    ---
    name: pm
    description: Product manager persona
    ---

    # Agent body
    ```
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict

import yaml


FRONTMATTER_PATTERN = re.compile(
    r"^---\s*\n(.*?)\n---\s*\n?",
    re.DOTALL | re.MULTILINE,
)


@dataclass
class ParsedDocument:
    """Result of parsing a document with YAML frontmatter."""

    frontmatter: Dict[str, Any]
    content: str
    raw_frontmatter: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Parse YAML frontmatter from markdown content.

    Returns an empty frontmatter and the full content when the document has
    no leading frontmatter block.

    Raises:
        ValueError: If frontmatter YAML is invalid or not a mapping

    Example:
        >>> doc = parse_frontmatter('''---
        ... name: pm
        ... ---
        ...
        ... # PM
        ... ''')
        >>> doc.frontmatter['name']
        'pm'
    """
    match = FRONTMATTER_PATTERN.match(content)

    if not match:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_yaml = match.group(1)
    remaining_content = content[match.end():]

    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(parsed).__name__}")

    return ParsedDocument(
        frontmatter=parsed,
        content=remaining_content,
        raw_frontmatter=raw_yaml,
    )


def format_frontmatter(data: Dict[str, Any], *, exclude_none: bool = True) -> str:
    """Format a dictionary as YAML frontmatter wrapped in '---' delimiters.

    Example:
        >>> print(format_frontmatter({'name': 'pm', 'globs': []}))
        ---
        name: pm
        globs: []
        ---
        <BLANKLINE>
    """
    if exclude_none:
        data = {k: v for k, v in data.items() if v is not None}

    yaml_content = yaml.safe_dump(
        data,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"---\n{yaml_content}---\n"


__all__ = ["ParsedDocument", "parse_frontmatter", "format_frontmatter"]
