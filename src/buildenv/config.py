#!/usr/bin/env python3
# config.py - Settings schema and loader

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, validator

from .exceptions import ConfigurationError
from .logging import LogLevel
from .platform import PlatformFamily, is_absolute_path
from .special_paths import SpecialPath

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

# --- Sub Schemas -------------------------------------------------

class LoggingConfig(BaseModel):
    level: str = Field(default=LogLevel.WARNING.value)
    show_time: bool = False
    show_level: bool = False

    @validator("level")
    def _validate_level(cls, v):
        upper = str(v).upper()
        if upper not in LogLevel.__members__:
            raise ValueError(f"Unknown log level '{v}'")
        return upper

class PlatformConfig(BaseModel):
    family: Optional[str] = Field(default=None, description="windows | linux | macos | freebsd; detected when unset")
    special_paths: Dict[str, str] = Field(default_factory=dict)

    @validator("family")
    def _validate_family(cls, v):
        if v is None:
            return v
        return PlatformFamily.parse(v).value

    @validator("special_paths")
    def _validate_special_paths(cls, v, values):
        family = PlatformFamily.parse(values.get("family") or PlatformFamily.UNKNOWN)
        result = {}
        for tag, path in v.items():
            name = SpecialPath.parse(tag).name
            if not is_absolute_path(path, family):
                raise ValueError(f"Special path '{name}' must be absolute, got '{path}'")
            result[name] = path
        return result

    def special_path_overrides(self) -> Dict[SpecialPath, str]:
        return {SpecialPath[name]: path for name, path in self.special_paths.items()}

# --- Root ---------------------------------------------------------

class EnvironmentSettings(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)

# --- Loader -------------------------------------------------------

def _replace_env(s: str) -> str:
    def repl(m):
        var = m.group(1)
        return os.getenv(var, f"${{{var}}}")
    return _ENV_PATTERN.sub(repl, s)


def _walk_replace(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _walk_replace(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_replace(x) for x in obj]
    if isinstance(obj, str):
        return _replace_env(obj)
    return obj


def load_settings(path: Union[str, Path]) -> EnvironmentSettings:
    """Load settings from a YAML file, expanding ${VAR} references.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the YAML or its values are invalid
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        raw = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {p}: {e}", path=str(p)) from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings root must be a mapping in {p}", path=str(p))
    try:
        return EnvironmentSettings(**_walk_replace(raw))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {p}: {e}", path=str(p)) from e


__all__ = ["EnvironmentSettings", "LoggingConfig", "PlatformConfig", "load_settings"]
