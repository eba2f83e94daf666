"""AdapterProtocol: the contract every tool adapter implements."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from syncode.core.schema import (
    ExportResult,
    ImportResult,
    LinkState,
    ToolDescriptor,
    UnsyncResult,
)


@runtime_checkable
class AdapterProtocol(Protocol):
    """Interface that all adapters must implement."""

    descriptor: ToolDescriptor

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    def detect(self) -> bool:
        """Check if this adapter's tool is present on the machine."""
        ...

    def system_path(self) -> Path | None:
        """Where the tool keeps its configuration, or None if unsupported here."""
        ...

    def repo_path(self, repo_root: Path) -> Path:
        """Where the tool's configuration lives inside the repository."""
        ...

    def is_linked(self, system_path: Path, repo_path: Path) -> bool:
        """Check whether the system side is synced with the repository."""
        ...

    def link_state(self, system_path: Path | None, repo_path: Path) -> LinkState:
        ...

    def import_config(self, system_path: Path | None, repo_path: Path) -> ImportResult:
        """Copy configuration from the system into the repository."""
        ...

    def export_config(self, repo_path: Path, system_path: Path | None) -> ExportResult:
        """Install repository configuration onto the system."""
        ...

    def unsync(self, repo_path: Path, system_path: Path | None) -> UnsyncResult:
        """Replace system-side links with real copies of the repository content."""
        ...
