"""Stable error types for the paths subsystem."""

from __future__ import annotations

from conduit.core.exceptions import ConduitError


class ConduitPathError(ConduitError, ValueError):
    """Raised when path resolution fails."""

    def __init__(self, message: str = "") -> None:
        ConduitError.__init__(self, message)
        ValueError.__init__(self, message)


__all__ = ["ConduitPathError"]
