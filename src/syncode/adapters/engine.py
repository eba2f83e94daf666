"""ToolAdapter: one generic sync engine driven by a ToolDescriptor.

Import copies system -> repository and never overwrites repository content.
Export either copies repository -> system (additive) or replaces system
entries with symlinks into the repository, backing up real content first.
Expected conditions come back as result objects; only unexpected I/O
errors raise.
"""

from __future__ import annotations

import logging
from pathlib import Path

from syncode.adapters import shared_skills
from syncode.core.resolver import PathResolver, resolve_repo_path
from syncode.core.schema import (
    ExportResult,
    ImportResult,
    LinkState,
    ToolDescriptor,
    UnsyncResult,
)
from syncode.utils import fs
from syncode.utils.paths import contract_home

logger = logging.getLogger(__name__)


class ToolAdapter:
    """Adapter for any tool described by a ToolDescriptor."""

    def __init__(self, descriptor: ToolDescriptor, resolver: PathResolver) -> None:
        self.descriptor = descriptor
        self.resolver = resolver

    def __repr__(self) -> str:
        return f"ToolAdapter({self.descriptor.id!r})"

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def is_shared_skills_host(self) -> bool:
        return self.descriptor.id == shared_skills.SHARED_SKILLS_TOOL_ID

    # -- Paths --

    def system_path(self) -> Path | None:
        return self.resolver.resolve_system_path(self.descriptor)

    def repo_path(self, repo_root: Path) -> Path:
        return resolve_repo_path(self.descriptor.id, repo_root)

    def _shared_entry(self) -> str | None:
        if self.descriptor.shared_skills:
            return self.descriptor.skills_subpath
        return None

    def _shared_system_path(self) -> Path:
        return shared_skills.shared_skills_system_path(self.resolver.home)

    @staticmethod
    def _shared_repo_path(repo_path: Path) -> Path:
        return shared_skills.shared_skills_repo_path(repo_path.parent.parent)

    def _scope(self, root: Path) -> list[str]:
        """Entry names under root that are subject to sync."""
        if self.descriptor.entries:
            names = list(self.descriptor.entries)
        elif fs.is_directory(root):
            names = sorted(
                p.name
                for p in root.iterdir()
                if p.name not in fs.SKIP_NAMES and not p.name.endswith(fs.BACKUP_SUFFIX)
            )
        else:
            names = []
        shared = self._shared_entry()
        return [n for n in names if n != shared]

    def _display(self, path: Path) -> str:
        return contract_home(path, home=self.resolver.home)

    def _ambiguous_roots(self) -> list[Path]:
        existing = self.resolver.existing_system_paths(self.descriptor)
        return existing if len(existing) > 1 else []

    def _ambiguity_message(self, roots: list[Path]) -> str:
        listed = " and ".join(self._display(p) for p in roots)
        return f"Multiple config paths exist ({listed}). Please manually delete one and retry."

    def _unsupported_message(self) -> str:
        return f"{self.name} is not supported on {self.resolver.platform.value}"

    # -- Detection and link state --

    def detect(self) -> bool:
        return any(fs.exists(p) for p in self.resolver.detect_paths(self.descriptor))

    def _linked_entries(self, system_path: Path, repo_path: Path) -> tuple[list[str], list[str]]:
        """Split repo-present entries into (linked, not linked)."""
        linked: list[str] = []
        unlinked: list[str] = []
        for name in self._scope(repo_path):
            if not fs.exists(repo_path / name):
                continue
            if fs.points_to(system_path / name, repo_path / name):
                linked.append(name)
            else:
                unlinked.append(name)
        return linked, unlinked

    def is_linked(self, system_path: Path, repo_path: Path) -> bool:
        d = self.descriptor
        if not d.symlink_export:
            # Copy strategy: both sides present counts as synced, content is not compared
            return fs.exists(system_path) and fs.exists(repo_path)
        if d.link_root:
            return fs.points_to(system_path, repo_path)
        if fs.is_symlink(system_path):
            return False
        linked, unlinked = self._linked_entries(system_path, repo_path)
        return bool(linked) and not unlinked

    def link_state(self, system_path: Path | None, repo_path: Path) -> LinkState:
        in_repo = fs.exists(repo_path)
        on_system = system_path is not None and fs.exists(system_path)
        if on_system and in_repo and self.is_linked(system_path, repo_path):
            return LinkState.linked
        if on_system and in_repo:
            return LinkState.synced
        if in_repo:
            return LinkState.in_repo_only
        if on_system:
            return LinkState.on_system_only
        return LinkState.not_found

    # -- Import --

    def import_config(self, system_path: Path | None, repo_path: Path) -> ImportResult:
        if system_path is None:
            return ImportResult(success=False, message=self._unsupported_message())
        roots = self._ambiguous_roots()
        if roots:
            return ImportResult(success=False, message=self._ambiguity_message(roots))
        if not fs.is_directory(system_path):
            if self.is_shared_skills_host:
                return ImportResult(
                    success=True,
                    skipped=True,
                    message=f"No shared skills at {self._display(system_path)} - skipped",
                )
            return ImportResult(success=False, message=f"{self.name} config not found on system")
        if self.descriptor.link_root and fs.points_to(system_path, repo_path):
            return ImportResult(success=True, message="Already linked to repo - no import needed")

        fs.ensure_dir(repo_path)
        imported: list[str] = []
        errors: list[str] = []
        scope = self._scope(system_path)

        for name in scope:
            src = system_path / name
            dest = repo_path / name
            if not fs.exists(src) or fs.is_symlink(src):
                continue
            if (
                self.is_shared_skills_host
                and name == shared_skills.SHARED_SKILLS_DIRNAME
                and fs.is_directory(src)
            ):
                # Participants may already have seeded the shared slot
                merged, merge_errors = shared_skills.merge_into_shared(src, dest)
                errors.extend(merge_errors)
                if merged:
                    imported.append(f"{name}/")
                continue
            if fs.exists(dest):
                continue
            if fs.is_directory(src):
                errors.extend(fs.copy_tree(src, dest))
                imported.append(f"{name}/")
            else:
                fs.copy_file(src, dest)
                imported.append(name)
            logger.debug("Imported %s/%s", self.id, name)

        shared = self._shared_entry()
        if shared:
            merged, merge_errors = self._import_shared_skills(system_path, repo_path, shared)
            errors.extend(merge_errors)
            if merged:
                imported.append(f"{shared}/")

        if not imported:
            wanted = ", ".join(self.descriptor.entries) or "config root"
            return ImportResult(
                success=True,
                message=f"Nothing to import for {self.name} ({wanted})",
                errors=errors,
            )
        return ImportResult(
            success=True,
            message=f"Imported {self.name} configs to repo",
            entries=imported,
            errors=errors,
        )

    def _import_shared_skills(
        self, system_path: Path, repo_path: Path, shared: str
    ) -> tuple[list[str], list[str]]:
        shared_repo = self._shared_repo_path(repo_path)
        merged: list[str] = []
        errors: list[str] = []
        src = system_path / shared
        if fs.is_directory(src) and not fs.is_symlink(src):
            merged, errors = shared_skills.merge_into_shared(src, shared_repo)
        shared_skills.link_in_repo(repo_path, shared_repo, shared)
        return merged, errors

    # -- Export --

    def export_config(self, repo_path: Path, system_path: Path | None) -> ExportResult:
        if system_path is None:
            return ExportResult(success=False, message=self._unsupported_message())
        roots = self._ambiguous_roots()
        if roots:
            return ExportResult(success=False, message=self._ambiguity_message(roots))
        if self.is_shared_skills_host:
            fs.ensure_dir(self._shared_repo_path(repo_path))
        if not fs.is_directory(repo_path):
            return ExportResult(success=False, message=f"{self.name} configs not found in repo")

        if not self.descriptor.symlink_export:
            return self._export_copy(repo_path, system_path)
        if self.descriptor.link_root:
            return self._export_root_link(repo_path, system_path)
        return self._export_entry_links(repo_path, system_path)

    def _export_copy(self, repo_path: Path, system_path: Path) -> ExportResult:
        fs.ensure_dir(system_path)
        exported: list[str] = []
        errors: list[str] = []
        for name in self._scope(repo_path):
            src = repo_path / name
            dest = system_path / name
            if not fs.exists(src) or fs.exists(dest):
                continue
            if fs.is_directory(src):
                errors.extend(fs.copy_tree(src, dest))
                exported.append(f"{name}/")
            else:
                fs.copy_file(src, dest)
                exported.append(name)

        backups = self._link_shared_on_system(system_path)
        if not exported:
            message = f"{self.name} configs already present at {self._display(system_path)}"
        else:
            message = f"Copied {self.name} configs to {self._display(system_path)}"
        return ExportResult(
            success=True,
            message=message,
            entries=exported,
            errors=errors,
            backup=backups[0] if backups else None,
            backups=backups,
            linked_to=", ".join(exported) or None,
        )

    def _export_root_link(self, repo_path: Path, system_path: Path) -> ExportResult:
        shared = self._shared_entry()
        if shared:
            shared_skills.link_in_repo(repo_path, self._shared_repo_path(repo_path), shared)

        if fs.points_to(system_path, repo_path):
            return ExportResult(
                success=True,
                message="Already linked to repo - no export needed",
                linked_to=self._display(repo_path),
            )

        backup = fs.backup_and_clear(system_path)
        fs.create_or_replace_symlink(repo_path, system_path)
        backups = [self._display(backup)] if backup else []
        return ExportResult(
            success=True,
            message=f"Linked {self._display(system_path)} -> repo",
            backup=backups[0] if backups else None,
            backups=backups,
            linked_to=self._display(repo_path),
        )

    def _export_entry_links(self, repo_path: Path, system_path: Path) -> ExportResult:
        linked, pending = self._linked_entries(system_path, repo_path)
        shared = self._shared_entry()
        shared_done = not shared or fs.points_to(system_path / shared, self._shared_system_path())
        if linked and not pending and shared_done and not fs.is_symlink(system_path):
            return ExportResult(
                success=True,
                message="Already linked to repo - no export needed",
                linked_to=self._display(repo_path),
            )

        if fs.is_symlink(system_path):
            # Whole-root link from an earlier layout
            system_path.unlink()
        fs.ensure_dir(system_path)

        backups: list[str] = []
        for name in pending:
            dest = system_path / name
            backup = fs.backup_and_clear(dest)
            if backup:
                backups.append(self._display(backup))
            fs.create_or_replace_symlink(repo_path / name, dest)
            logger.debug("Exported %s/%s", self.id, name)

        backups.extend(self._link_shared_on_system(system_path))
        return ExportResult(
            success=True,
            message=f"Linked {self.name} configs to {self._display(system_path)}",
            entries=pending,
            backup=backups[0] if backups else None,
            backups=backups,
            linked_to=self._display(repo_path),
        )

    def _link_shared_on_system(self, system_path: Path) -> list[str]:
        shared = self._shared_entry()
        if not shared:
            return []
        backup = shared_skills.link_on_system(system_path / shared, self._shared_system_path())
        return [self._display(backup)] if backup else []

    # -- Unsync --

    def unsync(self, repo_path: Path, system_path: Path | None) -> UnsyncResult:
        if system_path is None:
            return UnsyncResult(success=False, message=self._unsupported_message())
        if not self.descriptor.symlink_export:
            return UnsyncResult(
                success=True,
                skipped=True,
                message=f"{self.name} uses copy strategy - skipped",
            )
        if not fs.is_directory(repo_path):
            if self.is_shared_skills_host:
                return UnsyncResult(
                    success=True,
                    skipped=True,
                    message=f"{self.name} has no shared skills in repo - skipped",
                )
            return UnsyncResult(success=False, message=f"{self.name} configs not found in repo")

        if self.descriptor.link_root:
            linked = fs.points_to(system_path, repo_path)
            entries = self._scope(repo_path)
        else:
            # Partially linked tools still get their linked entries materialized
            entries, _ = self._linked_entries(system_path, repo_path)
            linked = bool(entries)
        if not linked:
            return UnsyncResult(
                success=True,
                skipped=True,
                message=f"{self.name} is not linked - skipped",
            )

        if self.descriptor.link_root:
            system_path.unlink()
            fs.materialize_tree(repo_path, system_path)
        else:
            for name in entries:
                src = repo_path / name
                dest = system_path / name
                dest.unlink()
                if fs.is_directory(src):
                    fs.materialize_tree(src, dest)
                else:
                    fs.copy_file(src, dest)

        logger.info("Materialized %s at %s", self.id, system_path)
        return UnsyncResult(
            success=True,
            message=f"Unsynced {self.name}",
            entries=entries,
        )
