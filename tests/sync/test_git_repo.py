"""Tests for git operations on the config repository."""

from pathlib import Path

import git
import pytest

from syncode.sync.git_repo import GitRepo, GitRepoError, init_repo


@pytest.fixture
def config_repo(tmp_path: Path) -> GitRepo:
    return init_repo(tmp_path / "agent-configs")


class TestInit:
    def test_creates_repo_and_gitignore(self, tmp_path):
        root = tmp_path / "agent-configs"
        init_repo(root)
        assert (root / ".git").is_dir()
        assert "*.backup" in (root / ".gitignore").read_text().splitlines()

    def test_idempotent(self, tmp_path):
        root = tmp_path / "agent-configs"
        init_repo(root)
        (root / ".gitignore").write_text("custom/\n")
        init_repo(root)
        lines = (root / ".gitignore").read_text().splitlines()
        assert lines[0] == "custom/"
        assert lines.count("*.backup") == 1

    def test_adds_origin(self, tmp_path):
        repo = init_repo(tmp_path / "agent-configs", remote="git@example.com:me/configs.git")
        assert repo.remote_url() == "git@example.com:me/configs.git"

    def test_requires_git_repo(self, tmp_path):
        with pytest.raises(GitRepoError):
            GitRepo(tmp_path)


class TestPush:
    def test_commit_without_remote(self, config_repo):
        (config_repo.root / "configs" / "claude").mkdir(parents=True)
        (config_repo.root / "configs" / "claude" / "settings.json").write_text("{}")

        assert config_repo.has_changes()
        assert any("configs/" in line for line in config_repo.status_lines())

        result = config_repo.push()

        assert result["status"] == "committed"
        assert "claude" in result["commit_message"]
        assert not config_repo.has_changes()
        assert config_repo.push() == {"status": "nothing_to_push"}

    def test_custom_message(self, config_repo):
        result = config_repo.push("sync laptop")
        assert result["commit_message"] == "sync laptop"
        assert config_repo.repo.head.commit.message == "sync laptop"

    def test_backups_ignored(self, config_repo):
        config_repo.push()
        (config_repo.root / "settings.json.backup").write_text("old")
        assert not config_repo.has_changes()

    def test_push_to_remote(self, tmp_path):
        upstream = tmp_path / "upstream.git"
        git.Repo.init(upstream, bare=True)
        repo = init_repo(tmp_path / "agent-configs", remote=str(upstream))
        (repo.root / "configs").mkdir()
        (repo.root / "configs" / "notes.md").write_text("hi")

        result = repo.push()

        assert result["status"] == "pushed"
        assert git.Repo(upstream).heads

    def test_push_failure_keeps_commit(self, tmp_path):
        repo = init_repo(tmp_path / "agent-configs", remote=str(tmp_path / "missing.git"))
        result = repo.push()
        assert result["status"] == "committed"
        assert "push_error" in result
