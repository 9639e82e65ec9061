"""
CLI: ``buildset builds`` — resolve, inspect and plan a build tree.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from buildset.cli.utils import console, fail, print_json, print_table
from buildset.core.config import get_settings
from buildset.core.errors import BuildSetError
from buildset.execution import Channel, DryRunExecutor, hand_off
from buildset.resolution import BuildSet, load_build_set

app = typer.Typer(no_args_is_help=True)

ROOT_ARGUMENT = typer.Argument(None, help="Builds directory (default: BUILDSET_BUILDS_DIR).")


def _load(root: Path | None) -> BuildSet:
    try:
        return asyncio.run(load_build_set(root))
    except BuildSetError as exc:
        raise fail(exc) from exc


@app.command("resolve")
def resolve(
    root: Path | None = ROOT_ARGUMENT,
    as_json: bool = typer.Option(False, "--json", help="Print resolved documents as JSON."),
) -> None:
    """Resolve every build under ROOT and list the result."""
    build_set = _load(root)

    if as_json:
        print_json(
            {
                name: build.model_dump(mode="json", exclude_none=True)
                for name, build in sorted(build_set.builds.items())
            }
        )
        return

    rows = [
        {
            "name": name,
            "board_env": build.board_env,
            "stable_name": build.meta.stable_name,
            "nightly_name": build.meta.nightly_name,
            "options": len(build.configuration.enable) + len(build.configuration_adv.enable),
        }
        for name, build in sorted(build_set.builds.items())
    ]
    print_table(rows, ["name", "board_env", "stable_name", "nightly_name", "options"], title="Builds")

    if build_set.conflicts:
        console.print(f"\n[yellow]{len(build_set.conflicts)} conflict(s) reconciled:[/yellow]")
        for conflict in build_set.conflicts:
            console.print(f"  • {conflict.describe()}", markup=False)


@app.command("show")
def show(
    name: str = typer.Argument(..., help="Build name, e.g. creality/ender3.yaml"),
    root: Path | None = ROOT_ARGUMENT,
) -> None:
    """Show one resolved build as JSON."""
    build_set = _load(root)
    build = build_set.builds.get(name)
    if build is None:
        raise fail(f"No build named {name}")
    print_json(build.model_dump(mode="json", exclude_none=True))


@app.command("plan")
def plan(
    root: Path | None = ROOT_ARGUMENT,
    version: str = typer.Option(..., "--version", "-v", help="Firmware version being released."),
    channel: Channel | None = typer.Option(None, "--channel", "-c", help="Release channel."),
    as_json: bool = typer.Option(False, "--json", help="Print planned assets as JSON."),
) -> None:
    """Dry-run the executor hand-off and list the artifacts it would produce."""
    settings = get_settings()
    channel = channel or Channel(settings.default_channel)
    build_set = _load(root)

    executor = DryRunExecutor(suffix=settings.asset_suffix)
    try:
        assets = asyncio.run(
            hand_off(executor, build_set.builds, version=version, channel=channel)
        )
    except BuildSetError as exc:
        raise fail(exc) from exc

    if as_json:
        print_json([asset.to_dict() for asset in assets])
        return
    print_table(
        [asset.to_dict() for asset in assets],
        ["build", "filename", "board_env", "branch"],
        title=f"{channel.value} {version}",
    )
