"""
Root Typer application for the buildset CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="buildset",
    help="buildset — resolve firmware build documents into a concrete build set.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("buildset")
        except PackageNotFoundError:
            from buildset import __version__ as v
        typer.echo(f"buildset {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (default: BUILDSET_LOG_LEVEL)."
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines."),
) -> None:
    """buildset CLI — resolve, inspect and plan firmware builds."""
    from buildset.cli.utils import fail
    from buildset.core.config import get_settings
    from buildset.core.errors import ConfigError
    from buildset.core.logging import configure_logging

    try:
        settings = get_settings()
    except ConfigError as exc:
        raise fail(exc) from exc

    configure_logging(
        level=(log_level or settings.log_level).upper(),
        json_format=json_logs or settings.log_format == "json",
    )


# ── Sub-command registration ─────────────────────────────────────────────

from buildset.cli.builds import app as builds_app  # noqa: E402
from buildset.cli.config import app as config_app  # noqa: E402

app.add_typer(builds_app, name="builds", help="Resolve and inspect build documents.")
app.add_typer(config_app, name="config", help="Configuration inspection.")
