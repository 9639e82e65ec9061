"""Hand-off of a resolved build set to a build executor.

The resolver's output is consumed by an executor that fetches firmware
sources, runs the toolchain and publishes artifacts.  Those steps live
outside this package; here we only define the contract, the channel
selection rules every executor applies, and a dry-run executor that plans
artifacts without building anything.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol

from buildset.core.errors import BuildSetError, ExecutionError
from buildset.core.logging import get_logger
from buildset.execution.assets import render_asset_name
from buildset.resolution.models import BuildDocument

logger = get_logger(__name__)


class Channel(str, Enum):
    """Release channel a build set is produced for."""

    STABLE = "stable"
    NIGHTLY = "nightly"


@dataclass(frozen=True)
class PlannedAsset:
    """One artifact an executor will produce."""

    build: str
    filename: str
    board_env: str
    repo: str
    path: str
    branch: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class BuildExecutor(Protocol):
    """Consumes a resolved build set and produces artifacts."""

    async def execute(
        self,
        builds: Mapping[str, BuildDocument],
        *,
        version: str,
        channel: Channel,
    ) -> list[PlannedAsset]: ...


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", version))


def _is_older(version: str, minimum: str) -> bool:
    current, required = _version_key(version), _version_key(minimum)
    width = max(len(current), len(required))
    return current + (0,) * (width - len(current)) < required + (0,) * (width - len(required))


def select_builds(
    builds: Mapping[str, BuildDocument],
    channel: Channel,
    version: str | None = None,
) -> dict[str, BuildDocument]:
    """Return the builds that apply to *channel*.

    Skips builds with ``active: false``, builds whose ``only`` names the
    other channel and, on the stable channel, builds whose ``min_version``
    is newer than *version*.
    """
    selected: dict[str, BuildDocument] = {}
    for name, build in builds.items():
        if build.active is False:
            logger.debug("build_skipped", build=name, reason="inactive")
            continue
        if build.only is not None and build.only != channel.value:
            logger.debug("build_skipped", build=name, reason=f"only {build.only}")
            continue
        if (
            channel is Channel.STABLE
            and version
            and build.min_version
            and _is_older(version, build.min_version)
        ):
            logger.debug("build_skipped", build=name, reason=f"requires {build.min_version}")
            continue
        selected[name] = build
    return selected


class DryRunExecutor:
    """Plans the artifacts of a build set without building anything."""

    def __init__(
        self,
        *,
        suffix: str = ".bin",
        clock: Callable[[], datetime] | None = None,
        uid: int | None = None,
    ):
        self.suffix = suffix
        self._clock = clock or (lambda: datetime.now(UTC))
        self._uid = uid

    async def execute(
        self,
        builds: Mapping[str, BuildDocument],
        *,
        version: str,
        channel: Channel,
    ) -> list[PlannedAsset]:
        now = self._clock()
        assets: list[PlannedAsset] = []
        for name, build in select_builds(builds, channel, version).items():
            template = build.meta.stable_name if channel is Channel.STABLE else build.meta.nightly_name
            branch = (
                build.based_on.stable_branch
                if channel is Channel.STABLE
                else build.based_on.nightly_branch
            )
            asset = PlannedAsset(
                build=name,
                filename=render_asset_name(
                    template, version=version, now=now, uid=self._uid, suffix=self.suffix
                ),
                board_env=build.board_env,
                repo=build.based_on.repo,
                path=build.based_on.path,
                branch=branch,
            )
            logger.info("asset_planned", build=name, filename=asset.filename)
            assets.append(asset)
        return assets


async def hand_off(
    executor: BuildExecutor,
    builds: Mapping[str, BuildDocument],
    *,
    version: str,
    channel: Channel,
) -> list[PlannedAsset]:
    """Run *executor*, wrapping unexpected failures in :class:`ExecutionError`."""
    try:
        return await executor.execute(builds, version=version, channel=channel)
    except BuildSetError:
        raise
    except Exception as exc:
        raise ExecutionError(
            f"Executor {type(executor).__name__} failed for {channel.value} {version}: {exc}",
            cause=exc,
        ) from exc
