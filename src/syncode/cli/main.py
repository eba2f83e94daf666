"""Typer app: root commands (init, status, import, export, unsync, push)."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler
from rich.markup import escape

from syncode.adapters.registry import build_registry, detect_installed
from syncode.adapters.tools import builtin_tool_ids
from syncode.cli._shared import FORMAT_OPTION, TOOLS_ARGUMENT, get_config, get_driver, split_ids
from syncode.core.resolver import CONFIGS_DIRNAME, PathResolver
from syncode.core.schema import BatchSummary, GlobalConfig, Operation
from syncode.sync.git_repo import GitRepo, GitRepoError, init_repo
from syncode.utils.config import (
    ConfigError,
    load_config,
    repo_root,
    save_config,
    validate_config,
)
from syncode.utils.output import (
    console,
    error,
    error_console,
    info,
    output,
    output_summary,
    output_table,
    success,
    warning,
)
from syncode.utils.paths import contract_home, get_machine_name
from syncode.utils.platform import platform_name

app = typer.Typer(
    name="syncode",
    help="Syncode: keep AI coding agent configs in one git repository and link them back.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


@app.command()
def init(
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Config repository path"),
    remote: Optional[str] = typer.Option(None, "--remote", help="Git remote URL for origin"),
    agents: Optional[str] = typer.Option(None, "--agents", "-a", help="Comma-separated agent ids"),
    detect: bool = typer.Option(False, "--detect", help="Enable every agent found on this machine"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Create the config repository and the global config file."""
    try:
        config = load_config() or GlobalConfig()
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)

    if repo:
        config.repo_path = repo
    if remote:
        config.remote = remote
    if agents is not None:
        config.agents = split_ids([agents]) or []
    elif detect or not config.agents:
        config.agents = detect_installed(build_registry(PathResolver.for_current_machine()))

    problems = validate_config(config, builtin_tool_ids())
    if problems:
        for problem in problems:
            error(problem)
        raise typer.Exit(1)

    root = repo_root(config)
    init_repo(root, config.remote)
    (root / CONFIGS_DIRNAME).mkdir(exist_ok=True)
    path = save_config(config)

    if fmt == "json":
        output(config, fmt="json")
        return
    success(f"Initialized config repository at {contract_home(root)}")
    info(f"Config: {contract_home(path)}")
    info(f"Agents: {', '.join(config.agents) or '(none)'}")


@app.command()
def status(
    tools: Optional[list[str]] = TOOLS_ARGUMENT,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Show the link state of each agent and pending repository changes."""
    config = get_config()
    driver = get_driver(config)
    summary = driver.status_all(split_ids(tools))

    git_lines: list[str] = []
    try:
        git_lines = GitRepo(driver.repo_root).status_lines()
    except GitRepoError as e:
        warning(str(e))

    rows = [
        {"tool": o.tool_id, "name": o.name, "state": o.message}
        for o in summary.outcomes
    ]
    if fmt == "json":
        output(
            {
                "repo": str(driver.repo_root),
                "remote": config.remote,
                "tools": rows,
                "changes": git_lines,
            },
            fmt="json",
        )
        return

    console.print(f"[bold]Repository:[/bold] {contract_home(driver.repo_root)}")
    console.print(f"[bold]Machine:[/bold] {get_machine_name()} ({platform_name()})")
    if config.remote:
        console.print(f"[bold]Remote:[/bold] {config.remote}")
    if rows:
        output_table(rows, ["tool", "name", "state"], fmt="text")
    else:
        info("No agents enabled. Use `syncode agents enable <id>`.")
    if git_lines:
        console.print(f"\n{len(git_lines)} uncommitted change(s):")
        for line in git_lines:
            console.print(f"  {escape(line)}")


def _run_batch(operation: Operation, tools: Optional[list[str]], fmt: Optional[str]) -> None:
    driver = get_driver()
    summary: BatchSummary = driver.run(operation, split_ids(tools))
    if not summary.outcomes and fmt != "json":
        info("No agents enabled. Use `syncode agents enable <id>`.")
        return
    output_summary(summary, fmt=fmt)
    if not summary.ok:
        raise typer.Exit(1)


@app.command("import")
def import_cmd(
    tools: Optional[list[str]] = TOOLS_ARGUMENT,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Copy agent configs from this machine into the repository."""
    _run_batch(Operation.import_, tools, fmt)


@app.command("export")
def export_cmd(
    tools: Optional[list[str]] = TOOLS_ARGUMENT,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Link (or copy) repository configs onto this machine."""
    _run_batch(Operation.export, tools, fmt)


@app.command()
def unsync(
    tools: Optional[list[str]] = TOOLS_ARGUMENT,
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Replace links with real copies of the repository content."""
    _run_batch(Operation.unsync, tools, fmt)


@app.command()
def push(
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message"),
    fmt: Optional[str] = FORMAT_OPTION,
) -> None:
    """Commit all repository changes and push to origin."""
    config = get_config()
    try:
        result = GitRepo(repo_root(config)).push(message)
    except GitRepoError as e:
        error(str(e))
        raise typer.Exit(1)

    if fmt == "json":
        output(result, fmt="json")
        return
    if result["status"] == "nothing_to_push":
        info("Nothing to push")
    elif result["status"] == "pushed":
        success(f"Pushed: {result['commit_message']}")
    else:
        success(f"Committed: {result['commit_message']}")
        if "push_error" in result:
            warning(f"Push failed: {result['push_error']}")
        else:
            info("No remote configured; commit kept locally")


# Register subcommand groups
from syncode.cli.agents_cmd import agents_app
from syncode.cli.config_cmd import config_app

app.add_typer(agents_app, name="agents", help="List, enable and disable agents")
app.add_typer(config_app, name="config", help="Manage global configuration")
