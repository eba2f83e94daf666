"""Global configuration: ~/.config/syncode/config.json."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from syncode.core.schema import GlobalConfig
from syncode.utils.paths import expand_home

CONFIG_FILENAME = "config.json"


class ConfigError(Exception):
    pass


def global_config_dir() -> Path:
    config = Path.home() / ".config" / "syncode"
    config.mkdir(parents=True, exist_ok=True)
    return config


def config_path() -> Path:
    return global_config_dir() / CONFIG_FILENAME


def load_config() -> GlobalConfig | None:
    """Read the config file. Returns None if syncode was never initialized."""
    path = config_path()
    if not path.exists():
        return None
    try:
        return GlobalConfig.model_validate(json.loads(path.read_text()))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def require_config() -> GlobalConfig:
    config = load_config()
    if config is None:
        raise ConfigError("syncode is not initialized. Run `syncode init` first.")
    return config


def save_config(config: GlobalConfig) -> Path:
    now = datetime.now(timezone.utc)
    if config.created_at is None:
        config.created_at = now
    config.updated_at = now
    path = config_path()
    path.write_text(config.model_dump_json(indent=2) + "\n")
    return path


def validate_config(config: GlobalConfig, known_ids: list[str]) -> list[str]:
    """Return a list of problems; empty means the config is usable."""
    problems: list[str] = []
    if not config.repo_path.strip():
        problems.append("repo_path is empty")
    known = set(known_ids)
    seen: set[str] = set()
    for tool_id in config.agents:
        if tool_id not in known:
            problems.append(f"Unknown agent: {tool_id}")
        if tool_id in seen:
            problems.append(f"Duplicate agent: {tool_id}")
        seen.add(tool_id)
    return problems


def repo_root(config: GlobalConfig) -> Path:
    return expand_home(config.repo_path)
