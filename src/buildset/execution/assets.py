"""Artifact naming and option value rendering.

Artifact names in ``meta.stable_name`` / ``meta.nightly_name`` are templates:

==========================  =============================================
Placeholder                 Replaced with
==========================  =============================================
``{{marlin_version}}``      release version (tag or commit)
``{{current_date}}``        build date, ``YYYYMMDD``
``{{timestamp}}``           unix seconds
``{{uid}}``                 six-digit random number
==========================  =============================================
"""

from __future__ import annotations

import random
from datetime import UTC, datetime
from typing import Any

from buildset.authoring import is_quoted, unquote


def render_asset_name(
    template: str,
    *,
    version: str,
    now: datetime | None = None,
    uid: int | None = None,
    suffix: str = ".bin",
) -> str:
    """Expand the placeholders in *template* and ensure it ends with *suffix*."""
    now = now or datetime.now(UTC)
    if uid is None:
        uid = random.randint(100000, 999999)

    filename = (
        template.replace("{{marlin_version}}", version)
        .replace("{{current_date}}", now.strftime("%Y%m%d"))
        .replace("{{timestamp}}", str(int(now.timestamp())))
        .replace("{{uid}}", str(uid))
    )
    if suffix and not filename.endswith(suffix):
        filename += suffix
    return filename


def render_option_value(value: Any) -> str:
    """Render an option parameter the way it is written into a header."""
    if is_quoted(value):
        escaped = unquote(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (list, tuple)):
        return "{ " + ", ".join(render_option_value(item) for item in value) + " }"
    return str(value)
