"""Agent subcommands: list, enable, disable."""

from __future__ import annotations

from typing import Optional

import typer

from syncode.adapters.registry import detect_installed
from syncode.cli._shared import FORMAT_OPTION, get_config, get_driver, split_ids
from syncode.utils.config import save_config
from syncode.utils.output import error, info, output_table, success

agents_app = typer.Typer(no_args_is_help=True)


@agents_app.command("list")
def agents_list(
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """List every built-in agent with its enabled and detected flags."""
    config = get_config()
    driver = get_driver(config)
    detected = set(detect_installed(driver.registry))
    rows = [
        {
            "id": adapter.id,
            "name": adapter.name,
            "enabled": "yes" if driver.registry.is_enabled(adapter.id) else "",
            "detected": "yes" if adapter.id in detected else "",
        }
        for adapter in driver.registry.all()
    ]
    output_table(rows, ["id", "name", "enabled", "detected"], fmt=fmt)


def _checked_ids(tools: list[str]) -> list[str]:
    ids = split_ids(tools) or []
    known = set(get_driver().registry.ids())
    unknown = [t for t in ids if t not in known]
    if unknown:
        error(f"Unknown agent(s): {', '.join(unknown)}")
        raise typer.Exit(1)
    return ids


@agents_app.command("enable")
def agents_enable(
    tools: list[str] = typer.Argument(..., help="Agent ids to enable"),
) -> None:
    """Add agents to the enabled list."""
    config = get_config()
    ids = _checked_ids(tools)
    added = [t for t in ids if t not in config.agents]
    if not added:
        info("Already enabled")
        return
    config.agents.extend(added)
    save_config(config)
    success(f"Enabled: {', '.join(added)}")


@agents_app.command("disable")
def agents_disable(
    tools: list[str] = typer.Argument(..., help="Agent ids to disable"),
) -> None:
    """Remove agents from the enabled list. Nothing on disk is touched."""
    config = get_config()
    ids = _checked_ids(tools)
    removed = [t for t in ids if t in config.agents]
    if not removed:
        info("Not enabled")
        return
    config.agents = [t for t in config.agents if t not in removed]
    save_config(config)
    success(f"Disabled: {', '.join(removed)}")
