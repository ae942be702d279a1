"""Declarative naming conventions for DNX/KRE runtime installations.

This is DATA, not code. The runtime was renamed twice (KRE -> K -> DNX) and
each rename changed the folder layout, so every convention is kept here.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class NamingEpoch:
    """Folder and file naming used by one generation of the runtime."""
    name: str
    sdk_folder: str  # Folder under the user home (e.g. ".dnx")
    mono_format: str  # Runtime folder name when running on Mono
    windows_format: str  # Runtime folder name for the CLR build
    runtime_folder: str  # Folder under a runtime home holding the runtimes

    def folder_name(self, version: str, is_mono: bool) -> str:
        """Format a version into this epoch's runtime folder name."""
        template = self.mono_format if is_mono else self.windows_format
        return template.format(version)


# Newest first. Resolution tries them in this order.
NAMING_EPOCHS: Tuple[NamingEpoch, ...] = (
    NamingEpoch(
        name="newer",
        sdk_folder=".dnx",
        mono_format="dnx-mono.{0}",
        windows_format="dnx-clr-win-x86.{0}",
        runtime_folder="runtimes",
    ),
    NamingEpoch(
        name="new",
        sdk_folder=".k",
        mono_format="kre-mono.{0}",
        windows_format="kre-clr-win-x86.{0}",
        runtime_folder="runtimes",
    ),
    NamingEpoch(
        name="old",
        sdk_folder=".kre",
        mono_format="KRE-Mono.{0}",
        windows_format="KRE-CLR-x86.{0}",
        runtime_folder="packages",
    ),
)

# Alias redirect files, checked in order inside <home>/alias/
ALIAS_FILE_FORMATS: Tuple[str, ...] = ("{0}.alias", "{0}.txt")

# Explicit runtime home overrides, highest priority first
RUNTIME_HOME_VARIABLES: Tuple[str, ...] = ("DNX_HOME", "KRE_HOME")

# Variables naming the user home, tried in order
USER_HOME_VARIABLES: Tuple[str, ...] = ("HOME", "USERPROFILE")

DEFAULT_ALIAS = "default"

GLOBAL_JSON = "global.json"

# Candidate file names inside <runtime>/bin for each tool. Order matters.
TOOL_BINARIES: Dict[str, Tuple[str, ...]] = {
    "dnx": ("dnx", "dnx.exe"),
    "dnu": ("dnu", "dnu.cmd"),
    "klr": ("klr", "klr.exe"),
    "kpm": ("kpm", "kpm.cmd"),
    "k": ("k", "k.cmd"),
}


def get_naming_epoch(name: str) -> NamingEpoch:
    """Get a naming epoch by name.

    Args:
        name: Epoch name ("newer", "new" or "old")

    Returns:
        The matching NamingEpoch

    Raises:
        ValueError: If no epoch has that name
    """
    for epoch in NAMING_EPOCHS:
        if epoch.name == name:
            return epoch

    supported = ", ".join(epoch.name for epoch in NAMING_EPOCHS)
    raise ValueError(
        f"Naming epoch '{name}' not supported. "
        f"Supported epochs: {supported}"
    )
