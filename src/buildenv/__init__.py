# buildenv
"""
buildenv - The environment a build-automation tool runs in: working directory,
application root, platform and runtime identity, special paths and
environment variables.
"""

__version__ = "0.1.0"

from .environment import EnvironmentProvider
from .special_paths import SpecialPath
from .platform import Platform, PlatformFamily, detect_platform
from .runtime import Runtime, detect_runtime
from .os_accessor import OsAccessor, SystemOsAccessor
from .config import EnvironmentSettings, load_settings
from .bootstrap import create_environment
from .logging import set_logging, LogLevel
from .exceptions import (
    BuildEnvError,
    InvalidArgumentError,
    UnsupportedError,
    EnvironmentInitializationError,
    ConfigurationError,
)

__all__ = [
    "EnvironmentProvider",
    "SpecialPath",
    "Platform",
    "PlatformFamily",
    "detect_platform",
    "Runtime",
    "detect_runtime",
    "OsAccessor",
    "SystemOsAccessor",
    "EnvironmentSettings",
    "load_settings",
    "create_environment",
    "set_logging",
    "LogLevel",
    "BuildEnvError",
    "InvalidArgumentError",
    "UnsupportedError",
    "EnvironmentInitializationError",
    "ConfigurationError",
]
