#!/usr/bin/env python3
# platform.py - Platform identity and special path resolution

"""
Platform collaborator.

A Platform knows which OS family the tool is running on and how that family
maps each SpecialPath to a directory. Each family is a subclass overriding
``_resolve``; callers only ever use ``resolve_special_path``.
"""

import os
import platform as _platform
import sys
from enum import Enum
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Dict, Mapping, Optional

from .exceptions import InvalidArgumentError, UnsupportedError
from .logging import get_logger
from .special_paths import SpecialPath

logger = get_logger("platform")


class PlatformFamily(str, Enum):
    """Operating system families."""
    UNKNOWN = "unknown"
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    FREEBSD = "freebsd"

    @classmethod
    def parse(cls, name: str) -> "PlatformFamily":
        if isinstance(name, PlatformFamily):
            return name
        key = str(name).strip().lower()
        key = _FAMILY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgumentError(f"Unknown platform family: {name!r}") from None


_FAMILY_ALIASES = {
    "win32": "windows",
    "win": "windows",
    "cygwin": "windows",
    "darwin": "macos",
    "osx": "macos",
    "mac": "macos",
}

# Path flavours whose notion of "absolute" applies to each family
_PURE_PATHS = {
    PlatformFamily.WINDOWS: (PureWindowsPath,),
    PlatformFamily.LINUX: (PurePosixPath,),
    PlatformFamily.MACOS: (PurePosixPath,),
    PlatformFamily.FREEBSD: (PurePosixPath,),
    PlatformFamily.UNKNOWN: (PurePosixPath, PureWindowsPath),
}


def is_absolute_path(path, family: PlatformFamily = PlatformFamily.UNKNOWN) -> bool:
    """Whether path is absolute under the rules of the given family."""
    return any(flavour(path).is_absolute() for flavour in _PURE_PATHS[family])


class Platform:
    """Base platform: identity plus special path resolution.

    Subclasses set ``family``.

    Args:
        is_64bit: Whether the operating system is 64-bit
        env: Variable table used for resolution (defaults to ``os.environ``)
        overrides: Explicit tag -> path mappings that win over built-in rules
    """

    family = PlatformFamily.UNKNOWN

    def __init__(
        self,
        is_64bit: bool = True,
        env: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[SpecialPath, str]] = None,
    ):
        self.is_64bit = is_64bit
        self._env = env if env is not None else os.environ
        self._overrides: Dict[SpecialPath, Path] = {}
        for tag, path in (overrides or {}).items():
            tag = SpecialPath.parse(tag)
            if not is_absolute_path(str(path), self.family):
                raise InvalidArgumentError(f"Special path '{tag.name}' must be absolute, got {str(path)!r}")
            self._overrides[tag] = Path(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(family={self.family.value!r}, is_64bit={self.is_64bit})"

    def is_unix(self) -> bool:
        return self.family in (PlatformFamily.LINUX, PlatformFamily.MACOS, PlatformFamily.FREEBSD)

    def resolve_special_path(self, tag: SpecialPath) -> Path:
        """Resolve a special path for this platform.

        Raises:
            InvalidArgumentError: If tag is not a SpecialPath
            UnsupportedError: If this platform has no mapping for tag
        """
        if not isinstance(tag, SpecialPath):
            raise InvalidArgumentError(f"Expected a SpecialPath, got {tag!r}")
        if tag in self._overrides:
            return self._overrides[tag]
        path = self._resolve(tag)
        if path is None:
            raise UnsupportedError(
                f"Special path '{tag.name}' is not supported on {self.family.value}",
                tag=tag,
                family=self.family,
            )
        return path

    def _resolve(self, tag: SpecialPath) -> Optional[Path]:
        return None

    def _env_path(self, *names: str) -> Optional[Path]:
        # Relative values are ignored so the fallback applies
        for name in names:
            value = self._env.get(name)
            if value and is_absolute_path(value, self.family):
                return Path(value)
        return None

    def _home(self) -> Path:
        return self._env_path("HOME") or Path.home()


class WindowsPlatform(Platform):
    family = PlatformFamily.WINDOWS

    _VARIABLES = {
        SpecialPath.TEMP: ("TEMP", "TMP"),
        SpecialPath.HOME: ("USERPROFILE",),
        SpecialPath.APPLICATION_DATA: ("APPDATA",),
        SpecialPath.LOCAL_APPLICATION_DATA: ("LOCALAPPDATA",),
        SpecialPath.COMMON_APPLICATION_DATA: ("ProgramData", "ALLUSERSPROFILE"),
        SpecialPath.PROGRAM_FILES: ("ProgramFiles",),
        SpecialPath.WINDOWS: ("SystemRoot", "windir"),
    }

    def _resolve(self, tag: SpecialPath) -> Optional[Path]:
        if tag is SpecialPath.PROGRAM_FILES_X86:
            # 32-bit Windows has a single program files directory
            if self.is_64bit:
                return self._env_path("ProgramFiles(x86)")
            return self._env_path("ProgramFiles")
        return self._env_path(*self._VARIABLES.get(tag, ()))

    def _env_path(self, *names: str) -> Optional[Path]:
        # Windows variable names are case-insensitive; the first spelling wins
        lowered: Dict[str, str] = {}
        for key, value in self._env.items():
            lowered.setdefault(key.lower(), value)
        for name in names:
            value = lowered.get(name.lower())
            if value and is_absolute_path(value, self.family):
                return Path(value)
        return None


class UnixPlatform(Platform):
    """Shared rules for Unix-like families."""

    def _resolve(self, tag: SpecialPath) -> Optional[Path]:
        if tag is SpecialPath.TEMP:
            return self._env_path("TMPDIR") or Path("/tmp")
        if tag is SpecialPath.HOME:
            return self._home()
        if tag is SpecialPath.APPLICATION_DATA:
            return self._env_path("XDG_CONFIG_HOME") or self._home() / ".config"
        if tag is SpecialPath.LOCAL_APPLICATION_DATA:
            return self._env_path("XDG_DATA_HOME") or self._home() / ".local" / "share"
        if tag is SpecialPath.COMMON_APPLICATION_DATA:
            return Path("/usr/share")
        return None


class LinuxPlatform(UnixPlatform):
    family = PlatformFamily.LINUX


class FreeBSDPlatform(UnixPlatform):
    family = PlatformFamily.FREEBSD


class MacOSPlatform(UnixPlatform):
    family = PlatformFamily.MACOS

    def _resolve(self, tag: SpecialPath) -> Optional[Path]:
        if tag in (SpecialPath.APPLICATION_DATA, SpecialPath.LOCAL_APPLICATION_DATA):
            return self._home() / "Library" / "Application Support"
        if tag is SpecialPath.COMMON_APPLICATION_DATA:
            return Path("/Library/Application Support")
        if tag is SpecialPath.PROGRAM_FILES:
            return Path("/Applications")
        return super()._resolve(tag)


_PLATFORM_CLASSES = {
    PlatformFamily.WINDOWS: WindowsPlatform,
    PlatformFamily.LINUX: LinuxPlatform,
    PlatformFamily.MACOS: MacOSPlatform,
    PlatformFamily.FREEBSD: FreeBSDPlatform,
    PlatformFamily.UNKNOWN: Platform,
}


def _detect_family() -> PlatformFamily:
    if sys.platform.startswith(("win32", "cygwin")):
        return PlatformFamily.WINDOWS
    if sys.platform == "darwin":
        return PlatformFamily.MACOS
    if sys.platform.startswith("linux"):
        return PlatformFamily.LINUX
    if sys.platform.startswith("freebsd"):
        return PlatformFamily.FREEBSD
    return PlatformFamily.UNKNOWN


def _detect_64bit_os() -> bool:
    machine = _platform.machine().lower()
    if machine in ("amd64", "x86_64", "arm64", "aarch64", "ppc64", "ppc64le", "s390x"):
        return True
    # 32-bit Python on 64-bit Windows still reports the OS architecture here
    return "PROGRAMFILES(X86)" in (key.upper() for key in os.environ)


def detect_platform(
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[SpecialPath, str]] = None,
    family: Optional[str] = None,
) -> Platform:
    """Create the Platform for the running host.

    Args:
        env: Variable table used for resolution (defaults to ``os.environ``)
        overrides: Explicit special path mappings
        family: Force a family instead of detecting it from ``sys.platform``
    """
    resolved = PlatformFamily.parse(family) if family else _detect_family()
    platform_cls = _PLATFORM_CLASSES[resolved]
    result = platform_cls(is_64bit=_detect_64bit_os(), env=env, overrides=overrides)
    logger.debug(f"Detected platform {result!r}")
    return result


__all__ = [
    "PlatformFamily", "Platform", "WindowsPlatform", "UnixPlatform", "LinuxPlatform",
    "FreeBSDPlatform", "MacOSPlatform", "detect_platform", "is_absolute_path",
]
