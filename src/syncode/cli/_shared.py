"""Shared CLI utilities to avoid circular imports."""

from __future__ import annotations

from typing import Optional

import typer

from syncode.adapters.registry import build_registry
from syncode.core.resolver import PathResolver
from syncode.core.schema import GlobalConfig
from syncode.sync.driver import SyncDriver
from syncode.utils.config import ConfigError, repo_root, require_config
from syncode.utils.output import error

FORMAT_OPTION = typer.Option(None, "--format", "-F", help="Output format: json or text")
TOOLS_ARGUMENT = typer.Argument(None, help="Tool ids (default: every enabled agent)")


def get_config() -> GlobalConfig:
    try:
        return require_config()
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)


def get_driver(config: GlobalConfig | None = None) -> SyncDriver:
    """Build a driver over the built-in tools, enabling the configured agents."""
    config = config or get_config()
    resolver = PathResolver.for_current_machine()
    registry = build_registry(resolver, enabled_ids=config.agents)
    return SyncDriver(registry, repo_root(config), enabled_ids=config.agents)


def split_ids(values: Optional[list[str]]) -> list[str] | None:
    """Accept both ``a b`` and ``a,b`` spellings for tool lists."""
    if not values:
        return None
    ids: list[str] = []
    for value in values:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids
