#!/usr/bin/env python3
# environment.py - The environment a build runs in

"""
EnvironmentProvider: working directory, application root, platform and
runtime identity, special paths and environment variables.

The working directory is process-wide state. Reads always go to the OS and
are never cached, because spawned processes or other threads may change it.
Nothing here is synchronized: callers that need an atomic read-modify-write
of the working directory must serialize the whole sequence themselves (for
example with a ``threading.Lock`` held around it).
"""

import re
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from requests.structures import CaseInsensitiveDict

from .exceptions import EnvironmentInitializationError, InvalidArgumentError
from .logging import get_logger
from .os_accessor import OsAccessor, SystemOsAccessor
from .platform import Platform
from .runtime import Runtime
from .special_paths import SpecialPath

logger = get_logger("environment")

_VARIABLE_PATTERN = re.compile(r"%([^%\s]+)%|\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def fold_environment_variables(pairs: Iterable[Tuple[str, str]]) -> CaseInsensitiveDict:
    """Build a case-insensitive mapping from raw (name, value) pairs.

    When names repeat with different case the first value seen is kept and
    later ones are dropped.
    """
    snapshot = CaseInsensitiveDict()
    for name, value in pairs:
        if name in snapshot:
            logger.debug(f"Ignoring duplicate environment variable '{name}'")
            continue
        snapshot[name] = value
    return snapshot


class EnvironmentProvider:
    """The environment the build tool operates in.

    Args:
        platform: Platform identity and special path resolver
        runtime: Runtime identity
        accessor: OS accessor, defaults to the real process

    Raises:
        InvalidArgumentError: If platform or runtime is missing
        EnvironmentInitializationError: If the executable location or the
            current directory cannot be read
    """

    def __init__(self, platform: Platform, runtime: Runtime, accessor: Optional[OsAccessor] = None):
        if platform is None:
            raise InvalidArgumentError("platform is required")
        if runtime is None:
            raise InvalidArgumentError("runtime is required")
        self._platform = platform
        self._runtime = runtime
        self._os = accessor or SystemOsAccessor()

        try:
            location = self._os.get_executable_location()
            self._application_root = Path(location).absolute().parent
            current = self._os.get_current_directory()
        except OSError as e:
            raise EnvironmentInitializationError(f"Failed to initialize environment: {e}") from e

        logger.debug(f"Application root: {self._application_root}")
        logger.debug(f"Working directory: {current}")

    @property
    def working_directory(self) -> Path:
        return Path(self._os.get_current_directory())

    @working_directory.setter
    def working_directory(self, path: Union[str, Path]) -> None:
        self.set_working_directory(path)

    def set_working_directory(self, path: Union[str, Path]) -> None:
        """Change the process working directory.

        Raises:
            InvalidArgumentError: If path is relative. Checked before the OS is touched.
        """
        if path is None:
            raise InvalidArgumentError("Working directory can not be empty.")
        target = Path(path)
        if not target.is_absolute():
            raise InvalidArgumentError("Working directory can not be set to a relative path.")
        self._os.set_current_directory(target)
        logger.info(f"Working directory changed to {target}")

    @property
    def application_root(self) -> Path:
        return self._application_root

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    def is_unix(self) -> bool:
        return self._platform.is_unix()

    def is_64bit_os(self) -> bool:
        return self._platform.is_64bit

    def get_special_path(self, path: SpecialPath) -> Path:
        """Resolve a special path using the current platform.

        Raises:
            UnsupportedError: If the platform has no mapping for the tag
        """
        resolved = self._platform.resolve_special_path(path)
        logger.debug(f"Resolved {path.name} to {resolved}")
        return resolved

    def get_environment_variable(self, variable: str) -> Optional[str]:
        """Return the value of an environment variable, or None when unset."""
        return self._os.get_environment_variable(variable)

    def get_environment_variables(self) -> CaseInsensitiveDict:
        """Return a fresh case-insensitive snapshot of all environment variables."""
        return fold_environment_variables(self._os.get_environment_variables())

    def expand_environment_variables(self, text: str) -> str:
        """Expand %NAME%, ${NAME} and $NAME references in text.

        Unknown variables are left as written.
        """
        variables = self.get_environment_variables()

        def repl(match):
            name = match.group(1) or match.group(2) or match.group(3)
            value = variables.get(name)
            return value if value is not None else match.group(0)

        return _VARIABLE_PATTERN.sub(repl, text)


__all__ = ["EnvironmentProvider", "fold_environment_variables"]
