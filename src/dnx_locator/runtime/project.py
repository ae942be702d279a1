"""Project root discovery and global.json parsing."""

from __future__ import annotations

import json
import logging
from json.decoder import JSONObject
from json.scanner import py_make_scanner
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .specs import GLOBAL_JSON
from .types import SourcePosition, VersionSpec

logger = logging.getLogger(__name__)


class GlobalJsonError(ValueError):
    """global.json exists but cannot be used.

    Attributes:
        path: Path to the offending global.json
        line: 1-based line of the problem (if known)
        column: 1-based column of the problem (if known)
    """

    def __init__(
        self,
        message: str,
        path: Union[str, Path],
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.path = str(path)
        self.line = line
        self.column = column
        location = self.path
        if line is not None:
            location = f"{location}:{line}:{column}"
        super().__init__(f"{location}: {message}")


class _PositionedObject(dict):
    """JSON object that remembers where each value starts in the source text."""

    def __init__(self, pairs: List[Tuple[str, Any]], starts: List[int]) -> None:
        super().__init__(pairs)
        self.positions: Dict[str, int] = {
            key: start for (key, _), start in zip(pairs, starts)
        }


class _PositionDecoder(json.JSONDecoder):
    """JSON decoder that records the offset of every object value.

    Uses the pure-Python scanner because the C scanner does not call back
    into ``parse_object``.

    Relies on undocumented internals of the json package, unchanged from
    3.10 through 3.13: ``json.decoder.JSONObject``,
    ``json.scanner.py_make_scanner`` and the scanner reading
    ``parse_object`` off the decoder instance.
    """

    def __init__(self) -> None:
        super().__init__()
        self.parse_object = self._parse_object
        self.scan_once = py_make_scanner(self)

    @staticmethod
    def _parse_object(s_and_end, strict, scan_once, object_hook, object_pairs_hook, memo=None):
        starts: List[int] = []

        def scan_value(string: str, idx: int):
            # JSONObject calls this once per value, positioned on its first character
            starts.append(idx)
            return scan_once(string, idx)

        pairs, end = JSONObject(s_and_end, strict, scan_value, None, list, memo)
        return _PositionedObject(pairs, starts), end


def _offset_to_position(text: str, offset: int) -> Tuple[int, int]:
    """Convert a string offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, offset) + 1
    column = offset - text.rfind("\n", 0, offset)
    return line, column


def resolve_root_directory(project_path: Union[str, Path]) -> Path:
    """Find the project root for a path.

    Walks up from ``project_path`` to the filesystem root and returns the
    first directory containing global.json.

    Args:
        project_path: Directory to start from

    Returns:
        Directory holding global.json, or ``project_path`` itself (made
        absolute) if no ancestor has one
    """
    start = Path(project_path).absolute()

    for directory in (start, *start.parents):
        if (directory / GLOBAL_JSON).is_file():
            return directory

    # No global.json anywhere, the project folder is the root
    return start


def find_global_json(root_directory: Union[str, Path]) -> Optional[Path]:
    """Return ``<root>/global.json`` if it exists, None otherwise."""
    global_json = Path(root_directory) / GLOBAL_JSON
    if global_json.is_file():
        return global_json
    return None


def read_sdk_version(root_directory: Union[str, Path]) -> Optional[VersionSpec]:
    """Read the requested runtime from ``sdk.version`` in global.json.

    Args:
        root_directory: Resolved project root

    Returns:
        VersionSpec with the source position of the value, or None when there
        is no global.json or it does not request a version

    Raises:
        GlobalJsonError: If global.json is not valid JSON, is not an object,
            or ``sdk.version`` is not a scalar
        OSError: If global.json cannot be read
    """
    global_json = find_global_json(root_directory)
    if global_json is None:
        return None

    logger.info(f"Looking for sdk version in '{global_json}'.")

    text = global_json.read_text(encoding="utf-8-sig")
    try:
        document = _PositionDecoder().decode(text)
    except json.JSONDecodeError as e:
        raise GlobalJsonError(e.msg, global_json, e.lineno, e.colno) from e

    if not isinstance(document, _PositionedObject):
        raise GlobalJsonError("Expected a JSON object", global_json, 1, 1)

    sdk = document.get("sdk")
    if not isinstance(sdk, _PositionedObject):
        if sdk is not None:
            logger.debug(f"Ignoring non-object 'sdk' entry in '{global_json}'.")
        return None

    if "version" not in sdk or sdk["version"] is None:
        return None

    value = sdk["version"]
    line, column = _offset_to_position(text, sdk.positions["version"])

    if isinstance(value, (dict, list)):
        raise GlobalJsonError(
            "'sdk.version' must be a string", global_json, line, column
        )
    if not isinstance(value, str):
        # Numbers and booleans keep their JSON spelling
        value = json.dumps(value)

    return VersionSpec(
        value=value,
        origin="global_json",
        position=SourcePosition(file=str(global_json), line=line, column=column),
    )
