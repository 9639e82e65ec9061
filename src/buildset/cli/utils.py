"""
CLI utility helpers — consoles and output formatting.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from buildset.core.errors import BuildSetError

console = Console()
err_console = Console(stderr=True)


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def print_table(rows: list[dict[str, Any]], columns: list[str], *, title: str = "") -> None:
    """Render a list of dicts as a rich table, one column per key."""
    if not rows:
        console.print("[dim]No results.[/dim]")
        return

    table = Table(title=title or None)
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for row in rows:
        table.add_row(*(escape(str(row.get(col, ""))) for col in columns))
    console.print(table)


def fail(error: BuildSetError | str) -> typer.Exit:
    """Print *error* on stderr and return the ``Exit`` to raise."""
    message = error.message if isinstance(error, BuildSetError) else error
    label = type(error).__name__ if isinstance(error, BuildSetError) else "Error"
    err_console.print(f"[bold red]{label}[/bold red]: {escape(message)}")
    return typer.Exit(code=1)
