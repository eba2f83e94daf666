"""Sync driver: runs import/export/status/unsync over a list of tools.

Each tool is processed on its own. A missing adapter or an unexpected
error is recorded against that tool and the batch carries on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from syncode.adapters.base import AdapterProtocol
from syncode.adapters.registry import AdapterRegistry
from syncode.adapters.shared_skills import (
    SHARED_SKILLS_TOOL_ID,
    ensure_shared_skills_host,
    sort_shared_skills_first,
)
from syncode.core.schema import (
    BatchSummary,
    ExportResult,
    ImportResult,
    LinkState,
    Operation,
    OperationResult,
    OutcomeStatus,
    ToolOutcome,
    UnsyncResult,
)

logger = logging.getLogger(__name__)


class UnknownToolError(KeyError):
    pass


class SyncDriver:
    """Binds a registry to a repository root and runs per-tool operations."""

    def __init__(
        self,
        registry: AdapterRegistry,
        repo_root: Path,
        enabled_ids: list[str] | None = None,
    ) -> None:
        self.registry = registry
        self.repo_root = repo_root
        self.enabled_ids = enabled_ids

    def _adapter(self, tool_id: str) -> AdapterProtocol:
        adapter = self.registry.get(tool_id)
        if adapter is None:
            raise UnknownToolError(tool_id)
        return adapter

    # -- Single-tool operations --

    def detect(self, tool_id: str) -> bool:
        return self._adapter(tool_id).detect()

    def import_tool(self, tool_id: str) -> ImportResult:
        adapter = self._adapter(tool_id)
        return adapter.import_config(adapter.system_path(), adapter.repo_path(self.repo_root))

    def export_tool(self, tool_id: str) -> ExportResult:
        adapter = self._adapter(tool_id)
        return adapter.export_config(adapter.repo_path(self.repo_root), adapter.system_path())

    def link_state(self, tool_id: str) -> LinkState:
        adapter = self._adapter(tool_id)
        return adapter.link_state(adapter.system_path(), adapter.repo_path(self.repo_root))

    def unsync_tool(self, tool_id: str) -> UnsyncResult:
        adapter = self._adapter(tool_id)
        return adapter.unsync(adapter.repo_path(self.repo_root), adapter.system_path())

    # -- Batches --

    def plan(self, tool_ids: list[str], operation: Operation) -> list[str]:
        """Order a batch, pulling in the shared skills host where needed."""
        if operation == Operation.status or not self.registry.has(SHARED_SKILLS_TOOL_ID):
            return list(tool_ids)
        ids = ensure_shared_skills_host(list(tool_ids), self.registry.shared_skills_participants())
        return sort_shared_skills_first(ids)

    def run(self, operation: Operation, tool_ids: list[str] | None = None) -> BatchSummary:
        """Run operation for each tool and summarise.

        Without tool_ids the configured list runs in its stored order; with
        no configured list, every enabled adapter in the registry.
        """
        if tool_ids is None:
            if self.enabled_ids is not None:
                tool_ids = list(self.enabled_ids)
            else:
                tool_ids = [a.id for a in self.registry.enabled()]
        summary = BatchSummary(operation=operation)
        for tool_id in self.plan(tool_ids, operation):
            outcome = self._run_one(operation, tool_id)
            logger.info("%s %s: %s (%s)", operation.value, tool_id, outcome.status.value, outcome.message)
            summary.record(outcome)
        return summary

    def import_all(self, tool_ids: list[str] | None = None) -> BatchSummary:
        return self.run(Operation.import_, tool_ids)

    def export_all(self, tool_ids: list[str] | None = None) -> BatchSummary:
        return self.run(Operation.export, tool_ids)

    def status_all(self, tool_ids: list[str] | None = None) -> BatchSummary:
        return self.run(Operation.status, tool_ids)

    def unsync_all(self, tool_ids: list[str] | None = None) -> BatchSummary:
        return self.run(Operation.unsync, tool_ids)

    def _run_one(self, operation: Operation, tool_id: str) -> ToolOutcome:
        adapter = self.registry.get(tool_id)
        if adapter is None:
            return ToolOutcome(
                tool_id=tool_id,
                name=tool_id,
                status=OutcomeStatus.failed,
                message="Adapter not found",
            )

        try:
            if operation == Operation.status:
                state = self.link_state(tool_id)
                return ToolOutcome(
                    tool_id=tool_id,
                    name=adapter.name,
                    status=OutcomeStatus.succeeded,
                    message=state.value,
                    state=state,
                )
            if operation == Operation.import_:
                result: OperationResult = self.import_tool(tool_id)
            elif operation == Operation.export:
                result = self.export_tool(tool_id)
            else:
                result = self.unsync_tool(tool_id)
        except Exception as e:
            logger.debug("%s %s failed", operation.value, tool_id, exc_info=True)
            return ToolOutcome(
                tool_id=tool_id,
                name=adapter.name,
                status=OutcomeStatus.failed,
                message=str(e) or e.__class__.__name__,
            )

        return _outcome_from_result(tool_id, adapter.name, result)


def _outcome_from_result(tool_id: str, name: str, result: OperationResult) -> ToolOutcome:
    if not result.success:
        status = OutcomeStatus.failed
    elif result.skipped:
        status = OutcomeStatus.skipped
    else:
        status = OutcomeStatus.succeeded
    return ToolOutcome(
        tool_id=tool_id,
        name=name,
        status=status,
        message=result.message,
        entries=list(result.entries),
        backup=getattr(result, "backup", None),
        errors=list(result.errors),
    )
