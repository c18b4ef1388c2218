#!/usr/bin/env python3
# exceptions.py - Error taxonomy for buildenv

"""
Exceptions raised by the buildenv library.

Every error derives from BuildEnvError so callers can catch the whole family
with a single except clause.
"""

from typing import Optional


class BuildEnvError(Exception):
    """Base class for all buildenv errors."""


class InvalidArgumentError(BuildEnvError, ValueError):
    """An argument was rejected before any OS call was made."""


class UnsupportedError(BuildEnvError):
    """A special path has no resolution on the current platform."""

    def __init__(self, message: str, tag=None, family=None):
        super().__init__(message)
        self.tag = tag
        self.family = family


class EnvironmentInitializationError(BuildEnvError):
    """The environment could not determine its executable location or working directory."""


class ConfigurationError(BuildEnvError):
    """Settings file or values are invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
