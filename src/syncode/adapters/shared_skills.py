"""Shared skills: one skills directory linked into every participating tool.

On the system side each participating tool's skills path is a symlink to
``~/.agents/skills``. In the repository the slot owned by the ``agents``
tool (``configs/agents/skills``) holds the real content and each
participant's repository slot is a relative symlink to it, so a clone at a
different absolute path keeps working.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from syncode.core.resolver import resolve_repo_path
from syncode.utils import fs

logger = logging.getLogger(__name__)

SHARED_SKILLS_TOOL_ID = "agents"
SHARED_SKILLS_DIRNAME = "skills"


def shared_skills_system_path(home: Path) -> Path:
    return home / ".agents" / SHARED_SKILLS_DIRNAME


def shared_skills_repo_path(repo_root: Path) -> Path:
    return resolve_repo_path(SHARED_SKILLS_TOOL_ID, repo_root) / SHARED_SKILLS_DIRNAME


def link_on_system(tool_skills_path: Path, shared_system_path: Path) -> Path | None:
    """Make tool_skills_path a symlink to the shared system directory.

    Returns the backup of any real content that was in the way.
    """
    fs.ensure_dir(shared_system_path)
    if fs.points_to(tool_skills_path, shared_system_path):
        return None
    backup = fs.create_symlink_with_backup(shared_system_path, tool_skills_path)
    logger.info("Linked %s to shared skills", tool_skills_path)
    return backup


def link_in_repo(
    tool_repo_root: Path,
    shared_repo_path: Path,
    subdir_name: str = SHARED_SKILLS_DIRNAME,
) -> Path | None:
    """Make ``tool_repo_root/subdir_name`` a relative symlink to the shared repo directory."""
    fs.ensure_dir(shared_repo_path)
    link_path = tool_repo_root / subdir_name
    relative_target = os.path.relpath(shared_repo_path, link_path.parent)
    if fs.points_to(link_path, relative_target):
        return None
    backup = fs.create_symlink_with_backup(relative_target, link_path)
    logger.info("Linked %s to shared skills in repo", link_path)
    return backup


def merge_into_shared(source: Path, shared_repo_path: Path) -> tuple[list[str], list[str]]:
    """Copy skills from a tool's own directory into the shared repo directory.

    Additive only: a skill already present in the shared directory is kept.
    Returns (merged names, per-file errors).
    """
    fs.ensure_dir(shared_repo_path)
    merged: list[str] = []
    errors: list[str] = []
    for entry in sorted(source.iterdir()):
        if entry.name in fs.SKIP_NAMES or entry.is_symlink():
            continue
        dest = shared_repo_path / entry.name
        if fs.exists(dest):
            continue
        if entry.is_dir():
            errors.extend(fs.copy_tree(entry, dest))
        else:
            fs.copy_file(entry, dest)
        merged.append(entry.name)
    return merged, errors


def ensure_shared_skills_host(tool_ids: list[str], participants: set[str]) -> list[str]:
    """Add the shared skills host when any participant is in the batch."""
    if not any(tool_id in participants for tool_id in tool_ids):
        return tool_ids
    if SHARED_SKILLS_TOOL_ID in tool_ids:
        return tool_ids
    return [*tool_ids, SHARED_SKILLS_TOOL_ID]


def sort_shared_skills_first(tool_ids: list[str]) -> list[str]:
    if SHARED_SKILLS_TOOL_ID not in tool_ids:
        return tool_ids
    return [SHARED_SKILLS_TOOL_ID, *(t for t in tool_ids if t != SHARED_SKILLS_TOOL_ID)]
