"""MCP Server for the DNX runtime locator.

Exposes runtime location as MCP tools using FastMCP.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server import FastMCP

from .config import find_config_file, load_config
from .events import CollectingEventEmitter, EventTypes
from .runtime import GlobalJsonError, RuntimeLocator
from .runtime.homes import get_runtime_homes

PROJECT_PATH_VARIABLE = "DNX_LOCATOR_PROJECT_PATH"

# Project path the server was started for
_project_path: Optional[str] = None

mcp = FastMCP("DNX Runtime Locator")


def set_project_path(path: str) -> None:
    """Set the project path for the server."""
    global _project_path
    _project_path = str(Path(path).resolve())


def get_project_path() -> str:
    """Get the current project path."""
    return _project_path or os.getenv(PROJECT_PATH_VARIABLE) or os.getcwd()


# ============================================================================
# Runtime Tools
# ============================================================================


@mcp.tool()
async def get_runtime_paths(project_path: str | None = None) -> Dict[str, Any]:
    """Locate the DNX runtime and its tools for a project.

    Looks for global.json from the project directory upwards, reads the
    requested runtime from ``sdk.version`` (falling back to the configured
    alias, then "default"), and searches DNX_HOME, KRE_HOME, ~/.dnx, ~/.k
    and ~/.kre for it.

    Args:
        project_path: Project to check. Defaults to the server's project.

    Returns:
        Runtime information including:
        - root_directory: Directory holding global.json (or the project itself)
        - global_json: Path to global.json (null if absent)
        - version: Requested version/alias, where it came from, and its
          position in global.json
        - runtime_path: Selected runtime directory (null if none exists)
        - dnx, dnu, klr, kpm, k: Tool binaries (null when missing)
        - searched_locations: Candidates that did not exist, in search order
        - diagnostics: Error events raised while locating
        - available: Whether a runtime was found

    Examples:
        >>> paths = get_runtime_paths("/src/WebApp")
        >>> if not paths["available"]:
        ...     print(paths["diagnostics"][0]["text"])
    """
    target = project_path or get_project_path()
    config = load_config(Path(target))
    emitter = CollectingEventEmitter()

    try:
        locator = RuntimeLocator(target, config=config, emitter=emitter)
        paths = locator.locate()
    except GlobalJsonError as e:
        return {
            "project_path": target,
            "available": False,
            "error": str(e),
            "diagnostics": [
                {"text": str(e), "file_name": e.path, "line": e.line, "column": e.column}
            ],
        }

    result = paths.to_dict()
    result["project_path"] = target
    result["diagnostics"] = [asdict(message) for message in emitter.of_kind(EventTypes.ERROR)]
    return result


@mcp.tool()
async def get_locator_config(project_path: str | None = None) -> Dict[str, Any]:
    """Show the settings the locator would use for a project.

    Returns:
        Configuration including:
        - project_path: Project being inspected
        - config_file: Path to .dnx-locator.toml (if exists)
        - alias: Alias used when global.json does not pin a version
        - platform: "auto", "mono" or "clr"
        - is_mono: Whether Mono runtime folder names are used
        - runtime_homes: Runtime homes in search order (null for unset overrides)
    """
    target = project_path or get_project_path()
    config = load_config(Path(target))
    config_file = find_config_file(config.project_root)

    return {
        "project_path": str(config.project_root),
        "config_file": str(config_file) if config_file else None,
        "alias": config.runtime.alias,
        "platform": config.runtime.platform,
        "is_mono": config.is_mono(),
        "runtime_homes": get_runtime_homes(),
    }


# ============================================================================
# Resources
# ============================================================================


@mcp.resource("project://info")
def get_project_info_resource() -> str:
    """Get information about the project served by this locator."""
    project_path = get_project_path()
    project_name = Path(project_path).name

    info = f"""# DNX Runtime Locator

**Project Name:** {project_name}
**Project Path:** {project_path}

Tools:
- get_runtime_paths: runtime directory and dnx/dnu/klr/kpm/k binaries
- get_locator_config: alias, platform and runtime homes in search order

The requested runtime comes from `sdk.version` in the nearest global.json,
then `[runtime].alias` in .dnx-locator.toml, then the "default" alias.
"""
    return info


# ============================================================================
# Entry Point
# ============================================================================


def main():
    """Run the MCP server.

    The project path can be set via:
    1. First command line argument
    2. DNX_LOCATOR_PROJECT_PATH environment variable
    3. Current working directory (default)

    Example:
        DNX_LOCATOR_PROJECT_PATH=/path/to/project python -m dnx_locator.mcp_server
    """
    # Allow setting project path from command line argument
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        set_project_path(sys.argv[1])
        # Remove the argument so FastMCP doesn't see it
        sys.argv = [sys.argv[0]] + sys.argv[2:]

    project_path = get_project_path()
    config = load_config(Path(project_path))

    # stdout is used for the MCP protocol
    logging.basicConfig(
        level=config.logging.level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("🚀 Starting DNX Runtime Locator MCP Server", file=sys.stderr)
    print(f"📁 Project: {Path(project_path).name}", file=sys.stderr)
    print(f"📂 Path: {project_path}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
