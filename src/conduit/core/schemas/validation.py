"""Shared schema validation utilities.

Conduit validates its merged configuration using JSON Schema. Schemas are
stored as YAML files under ``conduit.data/schemas/`` and loaded in a single,
consistent way.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from conduit.core.exceptions import ConfigError
from conduit.core.utils.io import read_yaml
from conduit.data import get_data_path


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name} ({schema_path})")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def schema_errors(payload: Dict[str, Any], schema_name: str) -> List[str]:
    """Return readable validation errors (empty if valid), sorted by path."""
    schema = load_schema(schema_name)
    Draft202012Validator.check_schema(schema)
    validator = Draft202012Validator(schema)
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        ConfigError: If validation fails; ``context["errors"]`` lists every problem.
    """
    try:
        errors = schema_errors(payload, schema_name)
    except jsonschema.SchemaError as exc:
        raise ConfigError(
            f"Schema '{schema_name}' is invalid: {exc.message}",
            context={"schema": schema_name},
        ) from exc
    if errors:
        raise ConfigError(
            f"Configuration failed validation against '{schema_name}': {errors[0]}",
            context={"schema": schema_name, "errors": errors},
        )


__all__ = ["load_schema", "schema_errors", "validate_payload"]
