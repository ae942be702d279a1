"""DNX/KRE runtime locator."""

from .project import GlobalJsonError, read_sdk_version, resolve_root_directory
from .resolver import RuntimeLocator
from .specs import NAMING_EPOCHS, TOOL_BINARIES
from .types import ResolvedRuntime, RuntimePaths, SourcePosition, VersionSpec

__all__ = [
    "RuntimeLocator",
    "RuntimePaths",
    "ResolvedRuntime",
    "VersionSpec",
    "SourcePosition",
    "GlobalJsonError",
    "NAMING_EPOCHS",
    "TOOL_BINARIES",
    "read_sdk_version",
    "resolve_root_directory",
]
