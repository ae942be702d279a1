"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Iterable

import pytest

from dnx_locator.config import LocatorConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory (resolved, so comparisons are stable on macOS)."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def workspace(temp_dir: Path) -> Path:
    """Create a solution layout without global.json.

    Creates:
        workspace/
            src/
                WebApp/
                    project.json
    """
    project = temp_dir / "workspace" / "src" / "WebApp"
    project.mkdir(parents=True)
    (project / "project.json").write_text('{"frameworks": {"dnx451": {}}}\n')
    return temp_dir / "workspace"


@pytest.fixture
def project_dir(workspace: Path) -> Path:
    """The WebApp project inside the workspace."""
    return workspace / "src" / "WebApp"


@pytest.fixture
def user_home(temp_dir: Path) -> Path:
    home = temp_dir / "home" / "dev"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def dnx_home(temp_dir: Path) -> Path:
    home = temp_dir / "opt" / "dnx"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def kre_home(temp_dir: Path) -> Path:
    home = temp_dir / "opt" / "kre"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def environ(user_home: Path) -> Dict[str, str]:
    """Environment with only HOME set, so the real user home is never searched."""
    return {"HOME": str(user_home)}


@pytest.fixture
def mono_config(project_dir: Path) -> LocatorConfig:
    """Config forcing Mono folder naming regardless of the host OS."""
    config = LocatorConfig(project_root=project_dir)
    config.runtime.platform = "mono"
    return config


@pytest.fixture
def make_runtime() -> Callable[..., Path]:
    """Factory creating ``<home>/<folder>/<name>/bin/<tools>``.

    Example:
        make_runtime(dnx_home, "dnx-mono.1.0.0-rc1", tools=["dnx", "dnu"])
    """

    def _make_runtime(
        home: Path,
        name: str,
        tools: Iterable[str] = (),
        folder: str = "runtimes",
    ) -> Path:
        runtime = home / folder / name
        bin_dir = runtime / "bin"
        bin_dir.mkdir(parents=True)
        for tool in tools:
            (bin_dir / tool).write_text("#!/bin/sh\n")
        return runtime

    return _make_runtime


@pytest.fixture
def write_alias() -> Callable[..., Path]:
    """Factory writing ``<home>/alias/<alias>.<extension>``."""

    def _write_alias(home: Path, alias: str, target: str, extension: str = "alias") -> Path:
        alias_dir = home / "alias"
        alias_dir.mkdir(parents=True, exist_ok=True)
        alias_file = alias_dir / f"{alias}.{extension}"
        alias_file.write_text(target)
        return alias_file

    return _write_alias
