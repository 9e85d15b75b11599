from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional


class ConduitError(Exception):
    """Base exception for Conduit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(ConduitError, ValueError):
    """Raised when configuration is invalid or names an unknown IDE profile."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConduitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ArtifactError(ConduitError):
    """Base class for errors raised while collecting or installing artifacts."""


class SourceMissingError(ArtifactError, FileNotFoundError):
    """Raised when a referenced agent, task or tool source file cannot be read."""

    def __init__(
        self,
        path: Path | str,
        *,
        module: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        ctx: Dict[str, Any] = {"path": str(path)}
        if module:
            ctx["module"] = module
        if name:
            ctx["name"] = name
        label = f"{module}/{name}" if module and name else (name or "artifact")
        message = f"Source file for {label} not found: {path}"
        ArtifactError.__init__(self, message, context=ctx)
        FileNotFoundError.__init__(self, message)
        self.path = Path(path)


class ModuleDataError(ArtifactError, ValueError):
    """Raised when an artifact lacks a module identifier or has the wrong kind.

    This is a contract violation by the artifact collector and always aborts
    the install.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ArtifactError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class DuplicateArtifactError(ArtifactError, ValueError):
    """Raised when two artifacts share ``(module, kind, name)`` and duplicates are errors."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ArtifactError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class MaterializeError(ArtifactError, OSError):
    """Raised when a directory or file under the install root cannot be written."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        message = f"Failed to write {path}: {cause.strerror or cause}"
        ArtifactError.__init__(
            self,
            message,
            context={"path": str(path), "errno": cause.errno},
        )
        OSError.__init__(self, message)
        self.path = Path(path)


__all__ = [
    "ConduitError",
    "ConfigError",
    "ArtifactError",
    "SourceMissingError",
    "ModuleDataError",
    "DuplicateArtifactError",
    "MaterializeError",
]
