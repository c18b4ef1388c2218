#!/usr/bin/env python3
# runtime.py - Runtime identity

import platform as _platform
import struct
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class Runtime:
    """Identity of the interpreter the tool runs in."""

    implementation: str  # e.g. CPython, PyPy
    version: str  # interpreter version, e.g. 3.12.1
    tool_version: str  # buildenv package version
    is_64bit: bool  # pointer size of the running process
    executable: str

    def describe(self) -> str:
        bits = "64-bit" if self.is_64bit else "32-bit"
        return f"{self.implementation} {self.version} ({bits}), buildenv {self.tool_version}"


def detect_runtime() -> Runtime:
    """Describe the running interpreter."""
    from . import __version__
    return Runtime(
        implementation=_platform.python_implementation(),
        version=_platform.python_version(),
        tool_version=__version__,
        is_64bit=struct.calcsize("P") * 8 == 64,
        executable=sys.executable or "",
    )


__all__ = ["Runtime", "detect_runtime"]
