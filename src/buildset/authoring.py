"""Helpers for build document authors.

Option values are written into firmware headers verbatim, so a string that
must end up as a C string literal needs to be marked::

    from buildset import quote

    build = {
        ...
        "configuration": {
            "enable": [("CUSTOM_MACHINE_NAME", quote("Ender-3 BLTouch"))],
        },
    }

The marker survives resolution untouched; executors render it with
:func:`buildset.execution.render_option_value`.
"""

from __future__ import annotations

from typing import Any

QUOTE_PREFIX = "__quote__:"


def quote(value: Any) -> str:
    """Mark *value* to be emitted as a quoted string literal."""
    return f"{QUOTE_PREFIX}{value}"


def is_quoted(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(QUOTE_PREFIX)


def unquote(value: str) -> str:
    """Strip the quote marker, if present."""
    if is_quoted(value):
        return value[len(QUOTE_PREFIX):]
    return value
