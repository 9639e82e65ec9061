"""
CLI: ``buildset config`` — configuration inspection.
"""

from __future__ import annotations

import typer

from buildset.cli.utils import console, fail
from buildset.core.errors import ConfigError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from buildset.core.config import discover_env_files, get_settings

    try:
        settings = get_settings(_force_reload=True)
    except ConfigError as exc:
        raise fail(exc) from exc

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            if value is not None:
                console.print(f"BUILDSET_{key.upper()}={value}", markup=False)
        return

    from rich.table import Table

    if settings.project_root:
        console.print(f"[bold]Project Root:[/bold] {settings.project_root}")
        env_files = discover_env_files(settings.project_root)
        if env_files:
            console.print("[bold]Env Files Loaded:[/bold]")
            for f in env_files:
                console.print(f"  • {f}")

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Builds directory", str(settings.resolve_builds_dir()))
    table.add_row("Document attribute", settings.document_attribute)
    table.add_row("Default channel", settings.default_channel)
    table.add_row("Asset suffix", settings.asset_suffix)
    table.add_row("Log level", settings.log_level)
    table.add_row("Log format", settings.log_format)
    console.print(table)
