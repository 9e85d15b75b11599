"""Merging of configuration layers.

Mappings merge key by key. A list in a later layer replaces the earlier
list, unless its first item is the marker ``"+"``: then the remaining items
are appended.
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND_MARKER = "+"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` overlaid with ``override``; neither input is modified.

    Example:
        >>> deep_merge({"ide": {"default": "cursor"}}, {"ide": {"namespace": "acme"}})
        {'ide': {'default': 'cursor', 'namespace': 'acme'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_lists(current, value)
        else:
            merged[key] = value
    return merged


def merge_lists(base: List[Any], override: List[Any]) -> List[Any]:
    """Replace ``base`` with ``override``, or extend it after a ``"+"`` marker.

    Example:
        >>> merge_lists(["rules"], ["+", "prompts"])
        ['rules', 'prompts']
    """
    if override and override[0] == APPEND_MARKER:
        return [*base, *override[1:]]
    return list(override)


__all__ = ["APPEND_MARKER", "deep_merge", "merge_lists"]
