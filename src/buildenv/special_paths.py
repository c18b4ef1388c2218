#!/usr/bin/env python3
# special_paths.py - Well-known filesystem locations

from enum import Enum

from .exceptions import InvalidArgumentError


class SpecialPath(Enum):
    """Well-known locations whose actual path depends on the platform."""
    TEMP = "temp"
    HOME = "home"
    APPLICATION_DATA = "application_data"
    LOCAL_APPLICATION_DATA = "local_application_data"
    COMMON_APPLICATION_DATA = "common_application_data"
    PROGRAM_FILES = "program_files"
    PROGRAM_FILES_X86 = "program_files_x86"
    WINDOWS = "windows"

    @classmethod
    def parse(cls, name: str) -> "SpecialPath":
        """Look up a tag by member name or value, ignoring case."""
        if isinstance(name, SpecialPath):
            return name
        key = str(name).strip().lower().replace("-", "_")
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise InvalidArgumentError(f"Unknown special path: {name!r}")
