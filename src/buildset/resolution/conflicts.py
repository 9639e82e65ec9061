"""Enable/disable conflict reconciliation.

Manifesto:
    An option that one side enables and the other disables must end up
    with exactly one opinion.  The rules are deterministic and asymmetric:

    - **Cross-document** (``A`` against another set ``B``): ``B`` is the
      authority.  ``A`` loses its enable when ``B`` disables the option and
      loses its disable when ``B`` enables it.
    - **Self-check** (``A`` against itself): only enables are dropped, so an
      option both enabled and disabled in one document ends up disabled.

    Conflicts are informational.  Each one is logged as an
    ``option_conflict`` warning and returned to the caller; none of them
    blocks resolution.

Architecture::

    reconcile(A, B)           → ReconcileResult(configuration=A', conflicts)
    reconcile_document(D, O)  → (D', conflicts) over both option sections

Both functions are pure: the returned sets are new objects produced by
filtering, the inputs are never modified.

Tags:
    buildset, conflict-resolution, merge, options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeVar

from buildset.core.logging import get_logger
from buildset.resolution.models import SECTIONS, Configuration, option_name

logger = get_logger(__name__)

DocumentT = TypeVar("DocumentT")


@dataclass(frozen=True)
class Conflict:
    """One option dropped from ``document`` because of ``other``."""

    document: str
    other: str
    section: str
    option: str
    self_conflict: bool
    outcome: Literal["disabled", "enabled"]

    def describe(self) -> str:
        if self.self_conflict:
            return (
                f'Build {self.document} enables AND disables {self.section} => '
                f'"{self.option}". It will be disabled'
            )
        if self.outcome == "disabled":
            return (
                f'Build {self.document} enables {self.section} => "{self.option}" '
                f"but {self.other} disables it. It will be disabled"
            )
        return (
            f'Build {self.document} disables {self.section} => "{self.option}" '
            f"but {self.other} enables it. It will be enabled"
        )


@dataclass
class ReconcileResult:
    configuration: Configuration
    conflicts: list[Conflict] = field(default_factory=list)


def reconcile(
    a: Configuration,
    b: Configuration,
    *,
    name_a: str,
    name_b: str,
    section: str = "configuration",
    self_check: bool | None = None,
) -> ReconcileResult:
    """Drop the entries of *a* that *b* contradicts.

    Args:
        a: The option set being filtered (belongs to ``name_a``).
        b: The authority (belongs to ``name_b``).
        section: Section label used in conflict reports.
        self_check: Defaults to ``a is b``.
    """
    if self_check is None:
        self_check = a is b

    conflicts: list[Conflict] = []

    b_disabled = set(b.disable)
    enable = []
    for entry in a.enable:
        name = option_name(entry)
        if name in b_disabled:
            conflicts.append(
                Conflict(name_a, name_b, section, name, self_check, "disabled")
            )
            continue
        enable.append(entry)

    disable = list(a.disable)
    if not self_check:
        b_enabled = set(b.enabled_names())
        disable = []
        for name in a.disable:
            if name in b_enabled:
                conflicts.append(
                    Conflict(name_a, name_b, section, name, False, "enabled")
                )
                continue
            disable.append(name)

    for conflict in conflicts:
        logger.warning(
            "option_conflict",
            document=conflict.document,
            other=conflict.other,
            section=conflict.section,
            option=conflict.option,
            kind="self" if conflict.self_conflict else "cross",
            outcome=conflict.outcome,
        )

    return ReconcileResult(
        configuration=Configuration(enable=enable, disable=disable),
        conflicts=conflicts,
    )


def reconcile_document(
    document: DocumentT,
    other: object,
    *,
    name: str,
    other_name: str,
    self_check: bool | None = None,
) -> tuple[DocumentT, list[Conflict]]:
    """Apply :func:`reconcile` to every option section of *document*.

    Returns a copy of *document* with the filtered sections.
    """
    if self_check is None:
        self_check = document is other

    update = {}
    conflicts: list[Conflict] = []
    for section in SECTIONS:
        own = getattr(document, section)
        result = reconcile(
            own,
            own if self_check else getattr(other, section),
            name_a=name,
            name_b=other_name,
            section=section,
            self_check=self_check,
        )
        update[section] = result.configuration
        conflicts.extend(result.conflicts)
    return document.model_copy(update=update), conflicts  # type: ignore[attr-defined]
