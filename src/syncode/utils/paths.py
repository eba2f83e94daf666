"""Path utilities: home expansion/contraction and machine identity."""

from __future__ import annotations

import os
import platform
from pathlib import Path


def home_dir() -> Path:
    return Path.home()


def expand_home(path: str | Path, home: Path | None = None) -> Path:
    """Expand a leading ~ to the home directory and make the path absolute.

    Symlinks are not resolved so that stored link targets stay stable.
    """
    text = str(path)
    base = home or home_dir()
    if text == "~":
        text = str(base)
    elif text.startswith("~/"):
        text = str(base / text[2:])
    return Path(os.path.abspath(text))


def contract_home(path: str | Path, home: Path | None = None) -> str:
    """Render path with the home prefix replaced by ~ for display."""
    text = str(path)
    base = str(home or home_dir())
    if text == base:
        return "~"
    if text.startswith(base + os.sep):
        return "~" + text[len(base):]
    return text


def get_machine_name() -> str:
    return platform.node() or "unknown"
