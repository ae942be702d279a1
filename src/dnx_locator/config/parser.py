"""Configuration file parser for the runtime locator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

from ..runtime.specs import DEFAULT_ALIAS

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".dnx-locator.toml"

PLATFORMS = ("auto", "mono", "clr")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RuntimeConfig:
    """Runtime selection settings."""

    alias: str = DEFAULT_ALIAS  # Used when global.json has no sdk.version
    platform: str = "auto"  # "auto", "mono" or "clr"


@dataclass
class LoggingConfig:
    """Logging settings for the server entry point."""

    level: str = "INFO"


@dataclass
class LocatorConfig:
    """Complete locator configuration."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Project directory the config was loaded for
    project_root: Path = field(default_factory=Path.cwd)

    def is_mono(self) -> bool:
        """Whether runtimes use the Mono folder naming.

        "auto" picks the CLR naming on Windows and Mono everywhere else.
        """
        if self.runtime.platform == "mono":
            return True
        if self.runtime.platform == "clr":
            return False
        return os.name != "nt"


def _section(data: Dict[str, Any], name: str, config_file: Path) -> Dict[str, Any]:
    """Return the ``[name]`` table, or an empty one if it is missing or not a table."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        logger.warning(
            f"Ignoring '{name}' in '{config_file}': expected a table, "
            f"got {type(section).__name__}."
        )
        return {}
    return section


def find_config_file(project_path: Path) -> Optional[Path]:
    """Find .dnx-locator.toml in the project directory.

    Args:
        project_path: Project directory

    Returns:
        Path to .dnx-locator.toml if found, None otherwise
    """
    config_file = Path(project_path) / CONFIG_FILE_NAME
    if config_file.exists():
        return config_file
    return None


def load_config(project_path: Path) -> LocatorConfig:
    """Load configuration from .dnx-locator.toml or use defaults.

    Args:
        project_path: Project directory

    Returns:
        LocatorConfig with loaded or default configuration
    """
    config = LocatorConfig(project_root=Path(project_path))

    config_file = find_config_file(project_path)
    if not config_file:
        return config

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # The file is optional tooling config, keep going with defaults
        logger.warning(f"Ignoring unreadable config '{config_file}': {e}")
        return config

    runtime_data = _section(data, "runtime", config_file)
    if runtime_data:
        alias = runtime_data.get("alias")
        if alias:
            config.runtime.alias = str(alias)

        platform = runtime_data.get("platform", "auto")
        if platform in PLATFORMS:
            config.runtime.platform = platform
        else:
            logger.warning(
                f"Unknown platform '{platform}' in '{config_file}', "
                f"expected one of: {', '.join(PLATFORMS)}. Using 'auto'."
            )

    logging_data = _section(data, "logging", config_file)
    if logging_data:
        level = str(logging_data.get("level", "INFO")).upper()
        if level in LOG_LEVELS:
            config.logging.level = level
        else:
            logger.warning(f"Unknown log level '{level}' in '{config_file}'. Using 'INFO'.")

    return config
