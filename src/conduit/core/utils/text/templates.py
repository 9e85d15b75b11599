"""Markdown template rendering.

Command launchers, workflow commands and the install index are Markdown
templates bundled in ``conduit.data/templates`` and rendered with Jinja2.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from jinja2 import Environment, StrictUndefined

from conduit.data import read_text as read_data_text


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # Templates use control blocks on their own lines; trimming keeps those
    # tag-only lines from becoming blank lines in the output.
    return Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render Jinja2 template ``text`` with ``context``."""
    return _environment().from_string(text).render(**context)


def render_bundled_template(name: str, context: Dict[str, Any]) -> str:
    """Render the bundled template ``templates/<name>`` with ``context``."""
    return render_template_text(read_data_text("templates", name), context)


__all__ = ["render_template_text", "render_bundled_template"]
