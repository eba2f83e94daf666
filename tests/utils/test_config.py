"""Tests for the global config file."""

from __future__ import annotations

import json

import pytest

from syncode.core.schema import GlobalConfig
from syncode.utils import config as cfg


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    path = tmp_path / "config"
    path.mkdir()
    monkeypatch.setattr(cfg, "global_config_dir", lambda: path)
    return path


class TestLoadSave:
    def test_missing_file(self, config_dir):
        assert cfg.load_config() is None
        with pytest.raises(cfg.ConfigError, match="syncode init"):
            cfg.require_config()

    def test_round_trip_stamps_timestamps(self, config_dir):
        config = GlobalConfig(repo_path="~/dotfiles/agents", agents=["claude", "cursor"])
        path = cfg.save_config(config)
        assert path == config_dir / "config.json"

        loaded = cfg.load_config()
        assert loaded.repo_path == "~/dotfiles/agents"
        assert loaded.agents == ["claude", "cursor"]
        assert loaded.created_at is not None
        assert loaded.updated_at >= loaded.created_at

    def test_created_at_is_kept(self, config_dir):
        config = GlobalConfig()
        cfg.save_config(config)
        created = config.created_at
        cfg.save_config(config)
        assert cfg.load_config().created_at == created

    def test_invalid_json(self, config_dir):
        (config_dir / "config.json").write_text("{not json")
        with pytest.raises(cfg.ConfigError, match="Invalid config"):
            cfg.load_config()

    def test_defaults(self, config_dir):
        (config_dir / "config.json").write_text(json.dumps({}))
        loaded = cfg.load_config()
        assert loaded.repo_path == "~/agent-configs"
        assert loaded.remote is None
        assert loaded.agents == []


class TestValidate:
    def test_valid(self):
        config = GlobalConfig(agents=["claude"])
        assert cfg.validate_config(config, ["claude", "cursor"]) == []

    def test_problems(self):
        config = GlobalConfig(repo_path=" ", agents=["claude", "nope", "claude"])
        problems = cfg.validate_config(config, ["claude"])
        assert "repo_path is empty" in problems
        assert "Unknown agent: nope" in problems
        assert "Duplicate agent: claude" in problems


def test_repo_root_expands_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert cfg.repo_root(GlobalConfig()) == tmp_path / "agent-configs"
