#!/usr/bin/env python3
# logging.py - Logging module for the buildenv library

import logging
import sys
from enum import Enum
from typing import Optional, TextIO, Union


class LogLevel(str, Enum):
    """Logging level options for buildenv."""
    DEBUG = 'DEBUG'
    INFO = 'INFO'
    WARNING = 'WARNING'
    ERROR = 'ERROR'
    CRITICAL = 'CRITICAL'


# Library root logger with NullHandler
_root_logger = logging.getLogger('buildenv')
_root_logger.addHandler(logging.NullHandler())
_root_logger.setLevel(logging.DEBUG)

# Handler installed by set_logging (created on first use)
_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Args:
        name: Component name (e.g., 'environment', 'platform')

    Returns:
        Logger instance under the ``buildenv`` hierarchy
    """
    return logging.getLogger(f'buildenv.{name}')


def set_logging(
    level: Union[LogLevel, str] = LogLevel.WARNING,
    format: Optional[str] = None,
    stream: TextIO = sys.stderr,
    show_time: bool = False,
    show_level: bool = False,
) -> logging.Handler:
    """Configure logging output for buildenv.

    By default, the library uses WARNING level and stderr output with format:
    '[buildenv.component] message'

    Args:
        level: Log level (LogLevel enum or string)
        format: Custom format string (overrides other options)
        stream: Output stream (sys.stdout or sys.stderr)
        show_time: Add timestamp to output
        show_level: Add log level to output

    Returns:
        The handler that was installed on the library root logger

    Examples:
        set_logging()
        set_logging(LogLevel.DEBUG, show_time=True, show_level=True)
        set_logging('INFO', stream=sys.stdout)
    """
    global _handler

    if format is None:
        parts = []
        if show_time:
            parts.append('%(asctime)s')
        if show_level:
            parts.append('%(levelname)-8s')
        parts.append('[%(name)s]')
        parts.append('%(message)s')
        format = ' '.join(parts)

    if isinstance(level, LogLevel):
        level = level.value
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    # Only one configured handler at a time
    if _handler:
        _root_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream)
    _handler.setLevel(numeric_level)
    _handler.setFormatter(logging.Formatter(format))
    _root_logger.addHandler(_handler)
    return _handler
