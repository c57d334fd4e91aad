"""
Config system - Layered typed configuration with validation.

Sources are merged with increasing precedence:
config files (YAML/JSON) < .env file < environment variables < overrides.
"""

from typing import Any, Dict, List, Optional, get_type_hints
from dataclasses import dataclass, fields, replace
from pathlib import Path
from glob import glob
import json
import logging
import os

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("atto.config")

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


@dataclass(frozen=True)
class AttoConfig:
    """Application settings."""
    root: Optional[str] = None
    view: Optional[str] = None
    layout: Optional[str] = None
    redirect_status: int = 301
    autoescape: bool = True
    debug: bool = False
    log_level: Optional[str] = None
    pattern_cache_size: int = 1000

    def __post_init__(self):
        if not 300 <= self.redirect_status <= 399:
            raise ConfigInvalidFault("redirect_status", f"{self.redirect_status} is not a 3xx status code")
        if self.pattern_cache_size < 0:
            raise ConfigInvalidFault("pattern_cache_size", "must not be negative")
        if self.log_level is not None and self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigInvalidFault("log_level", f"unknown level '{self.log_level}'")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttoConfig":
        """Build a config from a mapping, coercing values to the field types."""
        hints = get_type_hints(cls)
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            kwargs[key] = _coerce(key, value, hints[key])
        return cls(**kwargs)

    def with_overrides(self, **changes: Any) -> "AttoConfig":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(key: str, value: Any, target: Any) -> Any:
    """Convert a raw config value to the annotated type."""
    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE + _FALSE:
            return value.strip().lower() in _TRUE
        raise ConfigInvalidFault(key, f"expected a boolean, got {value!r}")

    if target is int:
        if isinstance(value, bool):
            raise ConfigInvalidFault(key, f"expected an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigInvalidFault(key, f"expected an integer, got {value!r}") from None

    if target is str:
        if not isinstance(value, str):
            raise ConfigInvalidFault(key, f"expected a string, got {value!r}")
        return value

    # Optional[str]
    if value is None or (isinstance(value, str) and value == ""):
        return None
    if not isinstance(value, str):
        raise ConfigInvalidFault(key, f"expected a string, got {value!r}")
    return value


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > .env file > config files > defaults
    """

    def __init__(self, env_prefix: str = "ATTO_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[List[str]] = None,
        env_prefix: str = "ATTO_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> AttoConfig:
        """
        Load configuration from multiple sources.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Raises:
            ConfigInvalidFault: A file is unreadable or a value is invalid
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return AttoConfig.from_dict(loader.config_data)

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        matches = sorted(glob(pattern)) or [pattern]
        for path_str in matches:
            path = Path(path_str)
            if not path.exists():
                raise ConfigInvalidFault(path_str, "file does not exist")

            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                raise ConfigInvalidFault(path_str, f"unsupported config format '{path.suffix}'")

    def _load_json_file(self, path: Path):
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigInvalidFault(str(path), str(exc)) from exc
        self._merge_section(path, data)

    def _load_yaml_file(self, path: Path):
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigInvalidFault(str(path), str(exc)) from exc
        self._merge_section(path, data)

    def _merge_section(self, path: Path, data: Any):
        """Merge a file's mapping; an ``atto`` section is used when present."""
        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigInvalidFault(str(path), "top level must be a mapping")
        section = data.get("atto", data)
        if not isinstance(section, dict):
            raise ConfigInvalidFault(f"{path}:atto", "section must be a mapping")
        logger.debug("Loaded config from %s", path)
        self._merge_dict(self.config_data, section)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        if not Path(path).exists():
            return
        for key, value in dotenv_values(path).items():
            if key.startswith(self.env_prefix) and value is not None:
                self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert ATTO_SECTION__KEY to nested dict entries."""
        key = key[len(self.env_prefix):]
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value
