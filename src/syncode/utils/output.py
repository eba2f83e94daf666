"""Output formatting utilities: text vs JSON, batch summaries."""

from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from syncode.core.schema import BatchSummary, OutcomeStatus, ToolOutcome

console = Console()
error_console = Console(stderr=True)

_STATUS_STYLE = {
    OutcomeStatus.succeeded: ("green", "ok"),
    OutcomeStatus.skipped: ("yellow", "skip"),
    OutcomeStatus.failed: ("red", "fail"),
}


def is_piped() -> bool:
    return not sys.stdout.isatty()


def _resolve_fmt(fmt: str | None) -> str:
    if fmt is None:
        return "json" if is_piped() else "text"
    return fmt


def output(data: Any, fmt: str | None = None) -> None:
    """Output data in the requested format.

    If fmt is None, auto-detect: json when piped, text for TTY.
    """
    fmt = _resolve_fmt(fmt)
    if fmt == "json":
        if isinstance(data, str):
            print(json.dumps({"value": data}))
        elif hasattr(data, "model_dump_json"):
            print(data.model_dump_json(indent=2))
        else:
            print(json.dumps(data, indent=2, default=str))
    elif isinstance(data, str):
        console.print(data)
    elif hasattr(data, "model_dump_json"):
        console.print_json(data.model_dump_json(indent=2))
    else:
        console.print_json(json.dumps(data, default=str))


def output_table(rows: list[dict[str, str]], columns: list[str], fmt: str | None = None) -> None:
    if _resolve_fmt(fmt) == "json":
        print(json.dumps(rows, indent=2, default=str))
        return
    table = Table()
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for row in rows:
        table.add_row(*[str(row.get(col, "")) for col in columns])
    console.print(table)


def outcome_line(outcome: ToolOutcome) -> str:
    style, label = _STATUS_STYLE[outcome.status]
    line = f"[{style}]{label:>4}[/{style}] {escape(outcome.name)}: {escape(outcome.message)}"
    if outcome.backup:
        line += f" [dim](backup: {escape(outcome.backup)})[/dim]"
    return line


def output_summary(summary: BatchSummary, fmt: str | None = None) -> None:
    """Per-tool lines followed by the ``N succeeded, M skipped, K failed`` line."""
    if _resolve_fmt(fmt) == "json":
        print(summary.model_dump_json(indent=2))
        return
    for outcome in summary.outcomes:
        console.print(outcome_line(outcome))
        for err in outcome.errors:
            console.print(f"       [dim]{escape(err)}[/dim]")
    console.print(f"\n{summary.summary_line()}")


def error(msg: str) -> None:
    error_console.print(f"[red]Error:[/red] {msg}")


def warning(msg: str) -> None:
    error_console.print(f"[yellow]Warning:[/yellow] {msg}")


def success(msg: str) -> None:
    console.print(f"[green]{msg}[/green]")


def info(msg: str) -> None:
    console.print(f"[dim]{msg}[/dim]")
