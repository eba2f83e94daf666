"""Runtime platform detection."""

from __future__ import annotations

import sys
from pathlib import Path

from syncode.core.schema import Platform

OS_RELEASE = Path("/etc/os-release")


def current_platform() -> Platform:
    if sys.platform == "darwin":
        return Platform.macos
    if sys.platform == "win32":
        return Platform.windows
    return Platform.linux


def _os_release() -> str:
    try:
        return OS_RELEASE.read_text()
    except OSError:
        return ""


def platform_name(plat: Platform | None = None) -> str:
    """Human-readable platform name, distinguishing common Linux families."""
    plat = plat or current_platform()
    if plat == Platform.macos:
        return "macOS"
    if plat == Platform.windows:
        return "Windows"
    release = _os_release()
    if "Arch Linux" in release or "ID=arch" in release:
        return "Arch Linux"
    if any(marker in release for marker in ("ID=debian", "ID=ubuntu", "ID=pop")):
        return "Debian/Ubuntu"
    return "Linux"
