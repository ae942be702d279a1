"""Configuration management for the runtime locator."""

from .parser import (
    CONFIG_FILE_NAME,
    LocatorConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "LocatorConfig",
    "load_config",
    "find_config_file",
]
