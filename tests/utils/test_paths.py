"""Tests for home-path helpers and platform naming."""

from __future__ import annotations

from pathlib import Path

from syncode.core.schema import Platform
from syncode.utils import platform as plat
from syncode.utils.paths import contract_home, expand_home


class TestHomePaths:
    def test_expand_tilde(self, tmp_path):
        assert expand_home("~/.claude", home=tmp_path) == tmp_path / ".claude"
        assert expand_home("~", home=tmp_path) == tmp_path

    def test_expand_leaves_absolute_paths(self, tmp_path):
        assert expand_home("/etc/hosts", home=tmp_path) == Path("/etc/hosts")

    def test_contract_home(self, tmp_path):
        assert contract_home(tmp_path / ".codex", home=tmp_path) == "~/.codex"
        assert contract_home(tmp_path, home=tmp_path) == "~"

    def test_contract_ignores_sibling_prefix(self, tmp_path):
        home = tmp_path / "me"
        assert contract_home(tmp_path / "meow" / "x", home=home) == str(tmp_path / "meow" / "x")


class TestPlatformName:
    def test_fixed_names(self):
        assert plat.platform_name(Platform.macos) == "macOS"
        assert plat.platform_name(Platform.windows) == "Windows"

    def test_linux_families(self, tmp_path, monkeypatch):
        release = tmp_path / "os-release"
        monkeypatch.setattr(plat, "OS_RELEASE", release)

        release.write_text('NAME="Arch Linux"\nID=arch\n')
        assert plat.platform_name(Platform.linux) == "Arch Linux"

        release.write_text("NAME=Ubuntu\nID=ubuntu\n")
        assert plat.platform_name(Platform.linux) == "Debian/Ubuntu"

        release.write_text("NAME=Fedora\nID=fedora\n")
        assert plat.platform_name(Platform.linux) == "Linux"

    def test_missing_os_release(self, tmp_path, monkeypatch):
        monkeypatch.setattr(plat, "OS_RELEASE", tmp_path / "missing")
        assert plat.platform_name(Platform.linux) == "Linux"

    def test_current_platform(self, monkeypatch):
        monkeypatch.setattr(plat.sys, "platform", "darwin")
        assert plat.current_platform() == Platform.macos
        monkeypatch.setattr(plat.sys, "platform", "win32")
        assert plat.current_platform() == Platform.windows
        monkeypatch.setattr(plat.sys, "platform", "linux")
        assert plat.current_platform() == Platform.linux
