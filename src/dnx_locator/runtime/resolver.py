"""Locate the DNX/KRE runtime a project should use."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Mapping, Optional, Union

from ..events import EventEmitter, EventTypes, NullEventEmitter
from ..models.responses import ErrorMessage
from .homes import get_runtime_homes
from .project import find_global_json, read_sdk_version, resolve_root_directory
from .specs import (
    ALIAS_FILE_FORMATS,
    DEFAULT_ALIAS,
    NAMING_EPOCHS,
    TOOL_BINARIES,
    NamingEpoch,
)
from .types import ResolvedRuntime, RuntimePaths, VersionSpec

if TYPE_CHECKING:
    from ..config import LocatorConfig


def expand_version_or_alias(
    version_or_alias: str,
    runtime_home: Optional[str],
    epoch: NamingEpoch,
    is_mono: bool,
) -> Optional[str]:
    """Turn a version or alias into a candidate runtime directory.

    An alias file in ``<home>/alias/`` wins over the version naming
    templates. The returned path is not checked for existence.

    Args:
        version_or_alias: Requested version (e.g. "1.0.0-rc1") or alias
        runtime_home: Runtime home to look in (None/empty is skipped)
        epoch: Naming convention to apply
        is_mono: Use the Mono folder naming instead of the CLR one

    Returns:
        Candidate directory, or None if ``runtime_home`` is empty
    """
    if not runtime_home:
        return None

    alias_directory = os.path.join(runtime_home, "alias")

    for alias_format in ALIAS_FILE_FORMATS:
        alias_file = os.path.join(alias_directory, alias_format.format(version_or_alias))
        if os.path.isfile(alias_file):
            with open(alias_file, encoding="utf-8-sig", errors="replace") as f:
                full_name = f.read().strip()
            return os.path.join(runtime_home, epoch.runtime_folder, full_name)

    # No alias, treat the input as a version
    folder_name = epoch.folder_name(version_or_alias, is_mono)
    return os.path.join(runtime_home, epoch.runtime_folder, folder_name)


def first_path(runtime_path: Optional[str], *candidates: str) -> Optional[str]:
    """Return the first ``<runtime>/bin/<candidate>`` that is a file."""
    if runtime_path is None:
        return None

    for candidate in candidates:
        path = os.path.join(runtime_path, "bin", candidate)
        if os.path.isfile(path):
            return path
    return None


class RuntimeLocator:
    """Finds the runtime and tool binaries for a project.

    The project root is resolved once, when the locator is created. Each
    call to ``locate()`` re-reads global.json, the environment and the
    filesystem.
    """

    def __init__(
        self,
        project_path: Union[str, Path],
        config: Optional[LocatorConfig] = None,
        emitter: Optional[EventEmitter] = None,
        logger: Optional[logging.Logger] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize locator.

        Args:
            project_path: Directory of the project (global.json may be higher up)
            config: Locator settings; defaults apply when omitted
            emitter: Receives an error event when no runtime is found
            logger: Logger for progress messages (module logger by default)
            environ: Environment variables (os.environ by default)
        """
        if config is None:
            from ..config import LocatorConfig

            config = LocatorConfig(project_root=Path(project_path))

        self.project_path = Path(project_path)
        self.config = config
        self.emitter = emitter or NullEventEmitter()
        self.logger = logger or logging.getLogger(__name__)
        self.environ = os.environ if environ is None else environ
        self.root_directory = resolve_root_directory(self.project_path)

    @property
    def global_json(self) -> Optional[str]:
        """Path to global.json at the project root, None if absent."""
        path = find_global_json(self.root_directory)
        return str(path) if path else None

    def get_version_or_alias(self) -> VersionSpec:
        """Decide which version or alias to look for.

        Priority:
        1. ``sdk.version`` from global.json
        2. ``[runtime].alias`` from .dnx-locator.toml
        3. The "default" alias

        Raises:
            GlobalJsonError: If global.json is malformed
        """
        requested = read_sdk_version(self.root_directory)
        if requested is not None:
            return requested

        alias = self.config.runtime.alias
        origin = "default" if alias == DEFAULT_ALIAS else "config"
        return VersionSpec(value=alias, origin=origin)

    def get_runtime_homes(self) -> List[Optional[str]]:
        return get_runtime_homes(self.environ)

    def get_runtime_paths_from_version_or_alias(
        self,
        version_or_alias: str,
        runtime_home: Optional[str],
    ) -> List[Optional[str]]:
        """One candidate per naming epoch, newest first."""
        is_mono = self.config.is_mono()
        return [
            expand_version_or_alias(version_or_alias, runtime_home, epoch, is_mono)
            for epoch in NAMING_EPOCHS
        ]

    def get_candidate_paths(self, version_or_alias: str) -> List[str]:
        """Every candidate runtime directory in probe order.

        Runtime homes form the outer loop, naming epochs the inner one.
        Empty candidates (unset homes) are left out.
        """
        candidates = []
        for runtime_home in self.get_runtime_homes():
            for path in self.get_runtime_paths_from_version_or_alias(
                version_or_alias, runtime_home
            ):
                if path:
                    candidates.append(path)
        return candidates

    def select_runtime(self, version: VersionSpec) -> ResolvedRuntime:
        """Pick the first candidate directory that exists.

        When nothing exists a single error event listing every searched
        location is emitted, and the result has no path.
        """
        searched_locations: List[str] = []

        for path in self.get_candidate_paths(version.value):
            if os.path.isdir(path):
                self.logger.info(f"Using runtime '{path}'.")
                return ResolvedRuntime(path=path, searched_locations=searched_locations)

            searched_locations.append(path)

        locations = "\n".join(searched_locations)
        message = ErrorMessage(
            text=(
                f"The specified runtime path '{version.value}' does not exist. "
                f"Searched locations {locations}"
            )
        )
        if version.position is not None:
            message.file_name = version.position.file
            message.line = version.position.line
            message.column = version.position.column

        self.emitter.emit(EventTypes.ERROR, message)
        self.logger.error(message.text)
        return ResolvedRuntime(path=None, searched_locations=searched_locations)

    def locate(self) -> RuntimePaths:
        """Resolve the runtime and its tool binaries.

        Returns:
            RuntimePaths; runtime and tool paths are None when no runtime exists

        Raises:
            GlobalJsonError: If global.json is malformed
        """
        version = self.get_version_or_alias()
        runtime = self.select_runtime(version)

        tools = {
            name: first_path(runtime.path, *candidates)
            for name, candidates in TOOL_BINARIES.items()
        }

        return RuntimePaths(
            root_directory=str(self.root_directory),
            global_json=self.global_json,
            version=version,
            runtime_path=runtime.path,
            searched_locations=runtime.searched_locations,
            **tools,
        )
