"""Shared fixtures: fake home, config repository, resolver, registry, driver."""

from __future__ import annotations

from pathlib import Path

import pytest

from syncode.adapters.registry import AdapterRegistry, build_registry
from syncode.core.resolver import PathResolver
from syncode.core.schema import Platform
from syncode.sync.driver import SyncDriver


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    path = tmp_path / "agent-configs"
    (path / "configs").mkdir(parents=True)
    return path


@pytest.fixture
def resolver(tmp_path: Path, home: Path) -> PathResolver:
    cwd = tmp_path / "project"
    cwd.mkdir()
    return PathResolver(platform=Platform.linux, home=home, cwd=cwd)


@pytest.fixture
def registry(resolver: PathResolver) -> AdapterRegistry:
    return build_registry(resolver)


@pytest.fixture
def driver(registry: AdapterRegistry, repo_root: Path) -> SyncDriver:
    return SyncDriver(registry, repo_root)


def _write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def write():
    """Create a file (and its parents) with content."""
    return _write
