"""Pydantic v2 models: tool descriptors, operation results, batch summaries, config."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONFIG_VERSION = "1.0.0"
DEFAULT_REPO_PATH = "~/agent-configs"

_TOOL_ID_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")


class Platform(str, Enum):
    macos = "macos"
    linux = "linux"
    windows = "windows"


class SyncStrategy(str, Enum):
    symlink = "symlink"
    copy = "copy"


class LinkState(str, Enum):
    linked = "linked"
    synced = "synced"
    in_repo_only = "in-repo-only"
    on_system_only = "on-system-only"
    not_found = "not-found"


# -- Tool descriptors --


class ToolDescriptor(BaseModel):
    """Declarative description of one tool's sync policy.

    System paths are templates: a leading ``~/`` is the home directory,
    ``{appdata}`` the Windows roaming profile and ``{cwd}`` the current
    working directory. ``entries`` lists the names under the config root
    that are synced; an empty tuple means every child of the root.
    Import is copy-only; ``export_strategy`` picks symlink or copy.
    ``link_root`` makes symlink export link the whole root in one step.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    import_strategy: SyncStrategy = SyncStrategy.copy
    export_strategy: SyncStrategy = SyncStrategy.symlink
    entries: tuple[str, ...] = ()
    link_root: bool = False
    system_paths: dict[Platform, tuple[str, ...]] = Field(default_factory=dict)
    default_system_paths: tuple[str, ...] = ()
    detect_markers: tuple[str, ...] = ()
    skills_subpath: str | None = None
    shared_skills: bool = False

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not _TOOL_ID_RE.match(value):
            raise ValueError(f"Tool id must be a lowercase token: {value!r}")
        return value

    @model_validator(mode="after")
    def _check_policy(self) -> ToolDescriptor:
        if self.import_strategy != SyncStrategy.copy:
            raise ValueError(f"{self.id}: import always copies into the repository")
        if self.shared_skills and not self.skills_subpath:
            raise ValueError(f"{self.id}: shared skills require a skills_subpath")
        if self.link_root and self.export_strategy != SyncStrategy.symlink:
            raise ValueError(f"{self.id}: link_root only applies to symlink export")
        if not self.default_system_paths and not self.system_paths:
            raise ValueError(f"{self.id}: at least one system path is required")
        return self

    def candidates(self, platform: Platform) -> tuple[str, ...]:
        """System path templates for a platform, primary candidate first."""
        return self.system_paths.get(platform, self.default_system_paths)

    @property
    def symlink_export(self) -> bool:
        return self.export_strategy == SyncStrategy.symlink


# -- Operation results --


class OperationResult(BaseModel):
    success: bool
    message: str
    entries: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    skipped: bool = False


class ImportResult(OperationResult):
    pass


class ExportResult(OperationResult):
    backup: str | None = None
    backups: list[str] = Field(default_factory=list)
    linked_to: str | None = None


class UnsyncResult(OperationResult):
    pass


# -- Batch summaries --


class Operation(str, Enum):
    import_ = "import"
    export = "export"
    status = "status"
    unsync = "unsync"


class OutcomeStatus(str, Enum):
    succeeded = "succeeded"
    skipped = "skipped"
    failed = "failed"


class ToolOutcome(BaseModel):
    tool_id: str
    name: str
    status: OutcomeStatus
    message: str
    state: LinkState | None = None
    entries: list[str] = Field(default_factory=list)
    backup: str | None = None
    errors: list[str] = Field(default_factory=list)


class BatchSummary(BaseModel):
    operation: Operation
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    outcomes: list[ToolOutcome] = Field(default_factory=list)

    def record(self, outcome: ToolOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status == OutcomeStatus.succeeded:
            self.succeeded += 1
        elif outcome.status == OutcomeStatus.skipped:
            self.skipped += 1
        else:
            self.failed += 1

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def summary_line(self) -> str:
        return f"{self.succeeded} succeeded, {self.skipped} skipped, {self.failed} failed"


# -- Global configuration --


class GlobalConfig(BaseModel):
    version: str = CONFIG_VERSION
    repo_path: str = DEFAULT_REPO_PATH
    remote: str | None = None
    agents: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
