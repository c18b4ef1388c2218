#!/usr/bin/env python3
# testing.py - In-memory fakes for unit tests

"""
Fakes for code that depends on EnvironmentProvider.

    accessor = FakeOsAccessor(cwd="/work", variables=[("PATH", "/bin")])
    environment = EnvironmentProvider(FakePlatform({SpecialPath.TEMP: "/tmp"}), fake_runtime(), accessor)
"""

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .os_accessor import OsAccessor
from .platform import Platform, PlatformFamily
from .runtime import Runtime
from .special_paths import SpecialPath


class FakeOsAccessor(OsAccessor):
    """OsAccessor over in-memory state.

    Directory changes are recorded in ``history``; ``fail_on_init`` makes the
    executable lookup raise, simulating a broken host.
    """

    def __init__(
        self,
        cwd: Union[str, Path] = "/work",
        variables: Optional[Iterable[Tuple[str, str]]] = None,
        executable: Union[str, Path] = "/opt/tool/bin/tool",
        fail_on_init: bool = False,
    ):
        self.cwd = Path(cwd)
        self.variables: List[Tuple[str, str]] = list(variables or [])
        self.executable = Path(executable)
        self.fail_on_init = fail_on_init
        self.history: List[Path] = []

    def get_current_directory(self) -> Path:
        return self.cwd

    def set_current_directory(self, path: Union[str, Path]) -> None:
        self.cwd = Path(path)
        self.history.append(self.cwd)

    def get_environment_variable(self, name: str) -> Optional[str]:
        for key, value in self.variables:
            if key == name:
                return value
        return None

    def get_environment_variables(self) -> Iterable[Tuple[str, str]]:
        return list(self.variables)

    def get_executable_location(self) -> Path:
        if self.fail_on_init:
            raise OSError("executable location unavailable")
        return self.executable


class FakePlatform(Platform):
    """Platform resolving special paths from a fixed mapping only."""

    def __init__(
        self,
        paths: Optional[Mapping[SpecialPath, str]] = None,
        family: PlatformFamily = PlatformFamily.LINUX,
        is_64bit: bool = True,
    ):
        super().__init__(is_64bit=is_64bit, env={}, overrides=paths)
        self.family = family


def fake_runtime(**overrides) -> Runtime:
    """Runtime with fixed, predictable values."""
    values = dict(
        implementation="CPython",
        version="3.12.0",
        tool_version="0.0.0",
        is_64bit=True,
        executable="/usr/bin/python3",
    )
    values.update(overrides)
    return Runtime(**values)


__all__ = ["FakeOsAccessor", "FakePlatform", "fake_runtime"]
