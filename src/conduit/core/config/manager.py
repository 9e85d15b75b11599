"""
Conduit configuration management (YAML layers plus environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from conduit.core.exceptions import ConfigError
from conduit.core.utils.io import iter_yaml_files, read_yaml
from conduit.core.utils.merge import deep_merge as _deep_merge
from conduit.data import get_data_path

from .cache import get_cached_config

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONDUIT_"
CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate Conduit configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: ``CONDUIT_<section>__<key>=value``
    2. Project config: ``<repo>/.conduit/config/*.yaml`` (alphabetical order)
    3. Bundled defaults: ``conduit.data/config/*.yaml`` (alphabetical order)

    Dicts deep-merge; lists replace unless the override list starts with ``"+"``.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = repo_root or self._find_repo_root()

        from conduit.core.utils.paths import get_project_config_dir

        self.core_config_dir = get_data_path("config")
        self.project_config_dir = get_project_config_dir(self.repo_root, create=False) / "config"

    def _find_repo_root(self) -> Path:
        from conduit.core.utils.paths import resolve_project_root

        return resolve_project_root()

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigError(
                f"Invalid YAML in config file {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a YAML mapping",
                context={"path": str(path), "type": type(data).__name__},
            )
        return data

    def validate_schema(self, config: Dict[str, Any], schema_name: str = CONFIG_SCHEMA) -> None:
        from conduit.core.schemas.validation import validate_payload

        validate_payload(config, schema_name)

    # ---------- environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'",
                context={"key": f"{ENV_PREFIX}{raw}"},
            )
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        # Only double-underscore keys are overrides; CONDUIT_PROJECT_ROOT and
        # friends are plain settings read elsewhere.
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(
                    f"Environment override path traverses a non-mapping value at '{part}'",
                    context={"path": ".".join(path)},
                )
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part, part)
            if not isinstance(cur.get(key), dict):
                cur[key] = {}
            cur = cur[key]
        if not isinstance(cur, dict):
            raise ConfigError(
                "Environment override target is not a mapping",
                context={"path": ".".join(path)},
            )
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying environment override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ---------- loading ----------

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        if not directory.is_dir():
            return cfg
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from every layer (uncached)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration using the centralized cache.

        The returned dict is shared between callers; treat it as immutable.
        """
        cfg = get_cached_config(repo_root=self.repo_root)
        if validate:
            self.validate_schema(cfg)
        return cfg

    def get_all(self) -> Dict[str, Any]:
        return self.load_config(validate=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get("ide.namespace")
            'conduit'
        """
        current: Union[Dict[str, Any], Any] = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_SCHEMA"]
