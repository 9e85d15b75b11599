from __future__ import annotations

import logging
import sys
from pathlib import Path

from conduit.core.utils.io import ensure_directory

_CONFIGURED_LOG_PATH: str | None = None
_CONDUIT_FILE_HANDLER: logging.Handler | None = None
_CONDUIT_STDERR_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure stdlib logging to write to ``log_path`` (no stream handler).

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _CONDUIT_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _CONDUIT_FILE_HANDLER is not None:
        return

    ensure_directory(Path(resolved).parent)

    root = logging.getLogger()
    root.setLevel(min(root.level or logging.WARNING, _level_from_name(level)))

    if _CONDUIT_FILE_HANDLER is not None:
        root.removeHandler(_CONDUIT_FILE_HANDLER)
        _CONDUIT_FILE_HANDLER.close()
        _CONDUIT_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(fh)

    _CONDUIT_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def add_stderr_handler(level: str = "DEBUG") -> None:
    """Attach a stderr handler (``--verbose``). Safe to call repeatedly."""
    global _CONDUIT_STDERR_HANDLER

    if _CONDUIT_STDERR_HANDLER is not None:
        return
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    _CONDUIT_STDERR_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by this module."""
    global _CONFIGURED_LOG_PATH, _CONDUIT_FILE_HANDLER, _CONDUIT_STDERR_HANDLER
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    for h in (_CONDUIT_FILE_HANDLER, _CONDUIT_STDERR_HANDLER):
        if h is not None:
            root.removeHandler(h)
            h.close()
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    _CONFIGURED_LOG_PATH = None
    _CONDUIT_FILE_HANDLER = None
    _CONDUIT_STDERR_HANDLER = None
    _JSON_MODE_NULL_HANDLER_INSTALLED = False


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib logging's lastResort handler from polluting ``--json`` output.

    Python emits WARNING+ records to stderr through the implicit ``lastResort``
    handler when the root logger has no handlers. Installing a NullHandler when
    the root logger is otherwise bare keeps machine-readable output clean
    without changing logger levels.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = [
    "configure_stdlib_logging",
    "add_stderr_handler",
    "reset_stdlib_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
