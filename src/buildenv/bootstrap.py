#!/usr/bin/env python3
# bootstrap.py - Environment construction from settings

from pathlib import Path
from typing import Mapping, Optional, Union

from .config import EnvironmentSettings, load_settings
from .environment import EnvironmentProvider
from .logging import get_logger, set_logging
from .os_accessor import OsAccessor
from .platform import detect_platform
from .runtime import detect_runtime

logger = get_logger("bootstrap")


def create_environment(
    settings: Optional[Union[EnvironmentSettings, str, Path]] = None,
    accessor: Optional[OsAccessor] = None,
    env: Optional[Mapping[str, str]] = None,
    configure_logging: bool = True,
) -> EnvironmentProvider:
    """Build an EnvironmentProvider for the running host.

    Args:
        settings: Settings object, or a path to a YAML settings file
        accessor: OS accessor, defaults to the real process
        env: Variable table for special path resolution, defaults to ``os.environ``
        configure_logging: Apply ``settings.logging`` via set_logging
    """
    if settings is None:
        settings = EnvironmentSettings()
    elif not isinstance(settings, EnvironmentSettings):
        settings = load_settings(settings)

    if configure_logging:
        set_logging(
            settings.logging.level,
            show_time=settings.logging.show_time,
            show_level=settings.logging.show_level,
        )

    platform = detect_platform(
        env=env,
        overrides=settings.platform.special_path_overrides(),
        family=settings.platform.family,
    )
    runtime = detect_runtime()
    environment = EnvironmentProvider(platform, runtime, accessor)
    logger.info(f"Environment ready: {platform.family.value}, {runtime.describe()}")
    return environment


__all__ = ["create_environment"]
