"""Text helpers: YAML frontmatter and Markdown template rendering."""
from __future__ import annotations

from .frontmatter import ParsedDocument, format_frontmatter, parse_frontmatter
from .templates import render_bundled_template, render_template_text

__all__ = [
    "ParsedDocument",
    "parse_frontmatter",
    "format_frontmatter",
    "render_template_text",
    "render_bundled_template",
]
