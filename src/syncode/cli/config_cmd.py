"""Config subcommands: get, set, list for global syncode settings."""

from __future__ import annotations

from typing import Optional

import typer

from syncode.cli._shared import FORMAT_OPTION, get_config
from syncode.utils.config import save_config
from syncode.utils.output import error, info, output, success

config_app = typer.Typer(no_args_is_help=True)

_VALID_KEYS = ("repo_path", "remote")


def _check_key(key: str) -> None:
    if key not in _VALID_KEYS:
        error(f"Unknown key: {key}. Valid keys: {', '.join(_VALID_KEYS)}")
        raise typer.Exit(1)


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help="Configuration key"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Get a configuration value."""
    _check_key(key)
    value = getattr(get_config(), key)
    if fmt == "json":
        output({"key": key, "value": value}, fmt="json")
    elif value is None:
        info(f"{key}: (not set)")
    else:
        info(f"{key}: {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key"),
    value: str = typer.Argument(..., help="Value to set (empty string clears remote)"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Set a configuration value."""
    _check_key(key)
    config = get_config()
    if key == "repo_path":
        if not value.strip():
            error("repo_path cannot be empty")
            raise typer.Exit(1)
        config.repo_path = value
    else:
        config.remote = value or None
    save_config(config)

    if fmt == "json":
        output({"key": key, "value": getattr(config, key)}, fmt="json")
    else:
        success(f"{key} = {getattr(config, key)}")


@config_app.command("list")
def config_list(
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List all configuration values."""
    config = get_config()
    if fmt == "json":
        output(config, fmt="json")
        return
    for k, v in config.model_dump(mode="json").items():
        info(f"{k}: {v}")
