"""Tests for the agents and config subcommands."""

import json

import pytest
from typer.testing import CliRunner

from syncode.cli.main import app

runner = CliRunner()


@pytest.fixture
def home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init", "--agents", "claude"])
    assert result.exit_code == 0, result.output
    return home


def _agents(home):
    return json.loads((home / ".config" / "syncode" / "config.json").read_text())["agents"]


class TestAgents:
    def test_list_json(self, home):
        (home / ".codex").mkdir()
        result = runner.invoke(app, ["agents", "list", "--format", "json"])
        assert result.exit_code == 0, result.output
        rows = {row["id"]: row for row in json.loads(result.output)}
        assert rows["claude"]["enabled"] == "yes"
        assert rows["cursor"]["enabled"] == ""
        assert rows["codex"]["detected"] == "yes"

    def test_enable_and_disable(self, home):
        result = runner.invoke(app, ["agents", "enable", "cursor,codex"])
        assert result.exit_code == 0, result.output
        assert _agents(home) == ["claude", "cursor", "codex"]

        result = runner.invoke(app, ["agents", "disable", "claude"])
        assert result.exit_code == 0, result.output
        assert _agents(home) == ["cursor", "codex"]

    def test_enable_twice(self, home):
        result = runner.invoke(app, ["agents", "enable", "claude"])
        assert "Already enabled" in result.output
        assert _agents(home) == ["claude"]

    def test_unknown_agent(self, home):
        result = runner.invoke(app, ["agents", "enable", "nope"])
        assert result.exit_code == 1
        assert "Unknown agent(s): nope" in result.output


class TestConfig:
    def test_get_default(self, home):
        result = runner.invoke(app, ["config", "get", "repo_path"])
        assert result.exit_code == 0
        assert "~/agent-configs" in result.output

    def test_set_and_get_remote(self, home):
        result = runner.invoke(app, ["config", "set", "remote", "git@example.com:me/cfg.git"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["config", "get", "remote", "--format", "json"])
        assert json.loads(result.output) == {"key": "remote", "value": "git@example.com:me/cfg.git"}

    def test_clear_remote(self, home):
        runner.invoke(app, ["config", "set", "remote", "x"])
        runner.invoke(app, ["config", "set", "remote", ""])
        result = runner.invoke(app, ["config", "get", "remote"])
        assert "(not set)" in result.output

    def test_unknown_key(self, home):
        result = runner.invoke(app, ["config", "get", "colour"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_empty_repo_path_rejected(self, home):
        result = runner.invoke(app, ["config", "set", "repo_path", " "])
        assert result.exit_code == 1

    def test_list(self, home):
        result = runner.invoke(app, ["config", "list", "--format", "json"])
        data = json.loads(result.output)
        assert data["agents"] == ["claude"]
        assert data["version"] == "1.0.0"
