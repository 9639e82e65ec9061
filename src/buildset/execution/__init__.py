"""Build executor contract, channel selection and artifact naming."""

from .assets import render_asset_name, render_option_value
from .executor import (
    BuildExecutor,
    Channel,
    DryRunExecutor,
    PlannedAsset,
    hand_off,
    select_builds,
)

__all__ = [
    "BuildExecutor",
    "Channel",
    "DryRunExecutor",
    "PlannedAsset",
    "hand_off",
    "render_asset_name",
    "render_option_value",
    "select_builds",
]
