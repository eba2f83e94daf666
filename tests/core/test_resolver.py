"""Tests for system and repository path resolution."""

from __future__ import annotations

from pathlib import Path

from syncode.adapters.tools import BUILTIN_TOOLS
from syncode.core.resolver import PathResolver, resolve_repo_path
from syncode.core.schema import Platform

TOOLS = {d.id: d for d in BUILTIN_TOOLS}


class TestRepoPath:
    def test_fixed_layout(self, tmp_path):
        assert resolve_repo_path("cursor", tmp_path) == tmp_path / "configs" / "cursor"

    def test_same_on_every_platform(self, tmp_path):
        paths = {
            PathResolver(platform=p, home=tmp_path).resolve_repo_path("claude", tmp_path / "repo")
            for p in Platform
        }
        assert paths == {tmp_path / "repo" / "configs" / "claude"}


class TestSystemPath:
    def test_linux_editor_path(self, resolver, home):
        assert resolver.resolve_system_path(TOOLS["cursor"]) == home / ".config" / "Cursor" / "User"

    def test_macos_editor_path(self, home):
        resolver = PathResolver(platform=Platform.macos, home=home)
        assert resolver.resolve_system_path(TOOLS["vscode"]) == (
            home / "Library" / "Application Support" / "Code" / "User"
        )

    def test_windows_uses_appdata(self, home, tmp_path):
        appdata = tmp_path / "Roaming"
        resolver = PathResolver(platform=Platform.windows, home=home, appdata=appdata)
        assert resolver.resolve_system_path(TOOLS["claude"]) == appdata / "claude"
        assert resolver.resolve_system_path(TOOLS["cursor"]) == appdata / "Cursor" / "User"

    def test_windows_appdata_fallback(self, home):
        resolver = PathResolver(platform=Platform.windows, home=home)
        assert resolver.resolve_system_path(TOOLS["opencode"]) == (
            home / "AppData" / "Roaming" / "opencode"
        )

    def test_default_paths_apply_everywhere(self, home):
        for platform in Platform:
            resolver = PathResolver(platform=platform, home=home)
            assert resolver.resolve_system_path(TOOLS["codex"]) == home / ".codex"

    def test_primary_candidate_when_none_exist(self, resolver, home):
        assert resolver.resolve_system_path(TOOLS["clawdbot"]) == home / ".clawd"

    def test_first_existing_candidate_wins(self, resolver, home):
        (home / ".clawdbot").mkdir()
        assert resolver.resolve_system_path(TOOLS["clawdbot"]) == home / ".clawdbot"

    def test_existing_paths_reports_all(self, resolver, home):
        (home / ".clawd").mkdir()
        (home / ".clawdbot").mkdir()
        assert resolver.existing_system_paths(TOOLS["clawdbot"]) == [
            home / ".clawd",
            home / ".clawdbot",
        ]

    def test_unsupported_platform(self, home):
        descriptor = TOOLS["amp"].model_copy(
            update={"default_system_paths": (), "system_paths": {Platform.linux: ("~/.amp",)}}
        )
        resolver = PathResolver(platform=Platform.macos, home=home)
        assert resolver.resolve_system_path(descriptor) is None


class TestDetectPaths:
    def test_includes_cwd_markers(self, resolver):
        paths = resolver.detect_paths(TOOLS["github-copilot"])
        assert resolver.cwd / ".github" in paths

    def test_expand_templates(self, resolver, home):
        assert resolver.expand("~/.kiro") == home / ".kiro"
        assert resolver.expand("{cwd}/.agent") == resolver.cwd / ".agent"
        assert resolver.expand("/abs/path") == Path("/abs/path")
