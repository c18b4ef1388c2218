#!/usr/bin/env python3
# os_accessor.py - OS-level directory and variable access

"""
The OsAccessor is the only place buildenv touches process-wide OS state.
EnvironmentProvider talks to it exclusively so tests can swap in a fake.
"""

import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union


class OsAccessor(ABC):
    """Contract for reading and mutating process-level OS state."""

    @abstractmethod
    def get_current_directory(self) -> Path:
        ...

    @abstractmethod
    def set_current_directory(self, path: Union[str, Path]) -> None:
        ...

    @abstractmethod
    def get_environment_variable(self, name: str) -> Optional[str]:
        ...

    @abstractmethod
    def get_environment_variables(self) -> Iterable[Tuple[str, str]]:
        """Return raw (name, value) pairs; names may repeat with different case."""

    @abstractmethod
    def get_executable_location(self) -> Path:
        """Return the file path of the running executable or main module."""


class SystemOsAccessor(OsAccessor):
    """OsAccessor backed by the real process."""

    def get_current_directory(self) -> Path:
        return Path(os.getcwd())

    def set_current_directory(self, path: Union[str, Path]) -> None:
        os.chdir(path)

    def get_environment_variable(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def get_environment_variables(self) -> Iterable[Tuple[str, str]]:
        return list(os.environ.items())

    def get_executable_location(self) -> Path:
        # Frozen bundles (PyInstaller and friends) run from the executable itself
        if getattr(sys, "frozen", False):
            return Path(sys.executable)
        main = sys.modules.get("__main__")
        main_file = getattr(main, "__file__", None)
        if main_file:
            return Path(main_file)
        if sys.executable:
            return Path(sys.executable)
        raise OSError("Unable to determine the location of the running executable")


__all__ = ["OsAccessor", "SystemOsAccessor"]
