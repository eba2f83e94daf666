"""Path resolution: system-side and repository-side locations for a tool."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from syncode.core.schema import Platform, ToolDescriptor
from syncode.utils import fs
from syncode.utils.paths import expand_home
from syncode.utils.platform import current_platform

CONFIGS_DIRNAME = "configs"


def resolve_repo_path(tool_id: str, repo_root: Path) -> Path:
    """Return ``<repo_root>/configs/<tool_id>``. No per-tool override exists."""
    return repo_root / CONFIGS_DIRNAME / tool_id


@dataclass(frozen=True)
class PathResolver:
    """Expands a descriptor's path templates for one machine.

    Nothing is cached: the filesystem is checked on every call so that
    multi-root tools always pick the candidate that exists right now.
    """

    platform: Platform
    home: Path
    appdata: Path | None = None
    cwd: Path = field(default_factory=Path.cwd)

    @classmethod
    def for_current_machine(cls) -> PathResolver:
        appdata = os.environ.get("APPDATA")
        return cls(
            platform=current_platform(),
            home=Path.home(),
            appdata=Path(appdata) if appdata else None,
            cwd=Path.cwd(),
        )

    def expand(self, template: str) -> Path:
        if template.startswith("{appdata}"):
            base = self.appdata or self.home / "AppData" / "Roaming"
            return base / template[len("{appdata}"):].lstrip("/")
        if template.startswith("{cwd}"):
            return self.cwd / template[len("{cwd}"):].lstrip("/")
        return expand_home(template, home=self.home)

    def system_candidates(self, descriptor: ToolDescriptor) -> list[Path]:
        return [self.expand(t) for t in descriptor.candidates(self.platform)]

    def existing_system_paths(self, descriptor: ToolDescriptor) -> list[Path]:
        return [p for p in self.system_candidates(descriptor) if fs.exists(p)]

    def resolve_system_path(self, descriptor: ToolDescriptor) -> Path | None:
        """First existing candidate, else the primary one. None if unsupported here."""
        candidates = self.system_candidates(descriptor)
        if not candidates:
            return None
        for path in candidates:
            if fs.exists(path):
                return path
        return candidates[0]

    def detect_paths(self, descriptor: ToolDescriptor) -> list[Path]:
        markers = [self.expand(t) for t in descriptor.detect_markers]
        return self.system_candidates(descriptor) + markers

    def resolve_repo_path(self, tool_id: str, repo_root: Path) -> Path:
        return resolve_repo_path(tool_id, repo_root)
