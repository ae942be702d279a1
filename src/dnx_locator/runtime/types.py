"""Data types for runtime location."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

import semver


@dataclass(frozen=True)
class SourcePosition:
    """Location of a token in a source file (1-based line and column)."""

    file: str
    line: int
    column: int


@dataclass(frozen=True)
class VersionSpec:
    """A requested runtime version or alias.

    Attributes:
        value: Version string (e.g. "1.0.0-rc1") or alias name (e.g. "default")
        origin: Where the value came from
        position: Location of the value in global.json, if it came from there
    """

    value: str
    origin: Literal["global_json", "config", "default"]
    position: Optional[SourcePosition] = None

    @property
    def is_version(self) -> bool:
        """True if the value is a concrete semantic version rather than an alias."""
        return semver.Version.is_valid(self.value)

    def __repr__(self) -> str:
        kind = "version" if self.is_version else "alias"
        return f"<VersionSpec {kind} {self.value!r} ({self.origin})>"


@dataclass
class ResolvedRuntime:
    """Outcome of searching the runtime homes.

    Attributes:
        path: First existing runtime directory, or None if nothing matched
        searched_locations: Candidates probed and found missing, in probe order
    """

    path: Optional[str]
    searched_locations: List[str] = field(default_factory=list)


@dataclass
class RuntimePaths:
    """Everything the locator resolved for a project."""

    root_directory: str
    global_json: Optional[str]
    version: VersionSpec
    runtime_path: Optional[str]
    dnx: Optional[str] = None
    dnu: Optional[str] = None
    klr: Optional[str] = None
    kpm: Optional[str] = None
    k: Optional[str] = None
    searched_locations: List[str] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return self.runtime_path is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        result = asdict(self)
        result["version"] = {
            "value": self.version.value,
            "origin": self.version.origin,
            "is_version": self.version.is_version,
            "position": asdict(self.version.position) if self.version.position else None,
        }
        result["available"] = self.available
        return result

    def __repr__(self) -> str:
        runtime = self.runtime_path or "not found"
        return f"<RuntimePaths {self.version.value} @ {runtime} (root {self.root_directory})>"
