"""Git plumbing for the config repository: init, status, commit and push."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import git

from syncode.utils.fs import BACKUP_SUFFIX

logger = logging.getLogger(__name__)

GITIGNORE_LINES = [f"*{BACKUP_SUFFIX}", ".DS_Store", "node_modules/", "__pycache__/"]


class GitRepoError(Exception):
    pass


def init_repo(root: Path, remote: str | None = None) -> GitRepo:
    """Create root as a git repository (no-op if it already is one)."""
    root.mkdir(parents=True, exist_ok=True)
    try:
        repo = git.Repo(root)
    except git.InvalidGitRepositoryError:
        repo = git.Repo.init(root)
        logger.info("Initialized git repository at %s", root)

    gitignore = root / ".gitignore"
    existing = gitignore.read_text().splitlines() if gitignore.is_file() else []
    missing = [line for line in GITIGNORE_LINES if line not in existing]
    if missing:
        gitignore.write_text("\n".join(existing + missing) + "\n")

    if remote and not repo.remotes:
        repo.create_remote("origin", remote)
    return GitRepo(root)


class GitRepo:
    """Git operations over the whole config repository."""

    def __init__(self, root: Path) -> None:
        self.root = root
        try:
            self.repo = git.Repo(self.root)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            raise GitRepoError(f"Not a git repository: {self.root}")

    def has_changes(self) -> bool:
        return self.repo.is_dirty(untracked_files=True)

    def status_lines(self) -> list[str]:
        """Short status, one ``XY path`` line per changed file."""
        output = self.repo.git.status("--short")
        return [line for line in output.splitlines() if line.strip()]

    def remote_url(self) -> str | None:
        if not self.repo.remotes:
            return None
        return self.repo.remotes.origin.url

    def _auto_message(self) -> str:
        tools: set[str] = set()
        paths = self.repo.untracked_files + [d.a_path or d.b_path for d in self.repo.index.diff(None)]
        for path in paths:
            parts = path.split("/")
            if len(parts) > 1 and parts[0] == "configs":
                tools.add(parts[1])
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M")
        if tools:
            return f"syncode: update {', '.join(sorted(tools))} ({stamp})"
        return f"syncode: update configs ({stamp})"

    def push(self, message: str | None = None) -> dict:
        """Stage everything, commit, and push to origin if configured."""
        if not self.has_changes():
            return {"status": "nothing_to_push"}

        commit_msg = message or self._auto_message()
        self.repo.git.add(A=True)
        self.repo.index.commit(commit_msg)

        if not self.repo.remotes:
            return {"status": "committed", "commit_message": commit_msg}

        try:
            self.repo.git.push("--set-upstream", "origin", self.repo.active_branch.name)
            return {"status": "pushed", "commit_message": commit_msg}
        except git.GitCommandError as e:
            return {
                "status": "committed",
                "commit_message": commit_msg,
                "push_error": str(e),
            }
