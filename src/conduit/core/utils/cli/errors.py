"""CLI error handling and structured output.

Structured JSON output schema and the error-handling wrapper used by every
Conduit CLI command.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Dict, Mapping, Optional

from conduit.core.exceptions import ConduitError

logger = logging.getLogger(__name__)


def json_output(
    success: bool,
    data: Optional[Mapping[str, Any]] = None,
    error: Optional[Mapping[str, Any] | str | None] = None,
) -> str:
    """Return JSON string matching the standard Conduit CLI schema.

    Schema::

        {
          "success": bool,
          "data": {},
          "error": {"message": str, "code": str, "context": {}}
        }
    """
    data_obj: Dict[str, Any] = dict(data or {})

    if error is None:
        err_obj: Dict[str, Any] = {"message": "", "code": "", "context": {}}
    elif isinstance(error, str):
        err_obj = {"message": error, "code": "", "context": {}}
    else:
        err_obj = {
            "message": str(error.get("message", "")),
            "code": str(error.get("code", "")),
            "context": dict(error.get("context") or {}),
        }

    payload = {
        "success": bool(success),
        "data": data_obj,
        "error": err_obj,
    }
    return json.dumps(payload, default=str)


def cli_error(
    message: str,
    code: str = "ERROR",
    json_mode: bool = False,
    *,
    context: Optional[Mapping[str, Any]] = None,
    stream=None,
) -> int:
    """Emit a structured error and return a non-zero exit code.

    When ``json_mode`` is True, structured JSON is written to stdout; otherwise a
    human-readable message is written to ``stream`` (stderr by default).
    """
    if json_mode:
        payload = json_output(
            success=False,
            data={},
            error={"message": message, "code": code, "context": dict(context or {})},
        )
        print(payload, file=sys.stdout)
    else:
        print(f"{code}: {message}", file=stream or sys.stderr)
    return 1


def run_cli(
    main: Callable[..., Optional[int]],
    *args: Any,
    json_errors: bool = True,
    **kwargs: Any,
) -> int:
    """Execute a CLI ``main`` function with standardized error handling.

    On error:

    - :class:`ConduitError` is rendered via :func:`json_output` using
      ``.to_json_error()`` and exit code 1.
    - :class:`KeyboardInterrupt` is rendered as a ``CANCELLED`` error.
    - Any other Exception is rendered as ``INTERNAL_ERROR`` with type context.

    The helper does not call :func:`sys.exit`; callers wrap it.
    """
    try:
        result = main(*args, **kwargs)
        return 0 if result is None else int(result)
    except ConduitError as err:
        logger.debug("Command failed: %s", err, exc_info=True)
        if json_errors:
            print(json_output(success=False, data={}, error=err.to_json_error()))
        else:
            print(f"{err.__class__.__name__}: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        if json_errors:
            print(
                json_output(
                    success=False,
                    data={},
                    error={"message": "Operation cancelled", "code": "CANCELLED", "context": {}},
                )
            )
        else:
            print("Operation cancelled", file=sys.stderr)
        return 1
    except Exception as err:  # noqa: BLE001
        logger.exception("Unexpected error")
        if json_errors:
            print(
                json_output(
                    success=False,
                    data={},
                    error={
                        "message": f"Unexpected error: {err}",
                        "code": "INTERNAL_ERROR",
                        "context": {"type": type(err).__name__},
                    },
                )
            )
        else:
            print(f"Unexpected error: {err}", file=sys.stderr)
        return 1


__all__ = ["json_output", "cli_error", "run_cli"]
