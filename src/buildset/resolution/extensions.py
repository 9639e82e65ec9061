"""Extension resolution.

An extended document inherits from one parent or an ordered list of
parents and overrides them selectively.  Resolution is a left fold:

::

    accumulator = copy(resolve(P1))
    for P in P2..Pn:  accumulator = override(accumulator, resolve(P))
    accumulator = override(accumulator, D)
    registry[D] = accumulator

so a later parent beats an earlier one, and the document's own settings beat
every parent.  ``override`` merges the core fields, reconciles conflicting
enable/disable entries with the overriding side as the authority, then merges
the option sets with *extension semantics*: an overriding entry replaces the
base entry of the same name, parameter value included.

Parents are resolved depth-first and memoized back into the registry under
their own name, so an ancestor shared by several builds is resolved once.  A
document revisited while it is still being resolved is a cycle and raises
:class:`~buildset.core.errors.CyclicReferenceError`.
"""

from __future__ import annotations

from buildset.core.errors import BuildReferenceError, BuildSetError, CyclicReferenceError
from buildset.core.logging import LogContext, get_logger
from buildset.resolution.conflicts import reconcile_document
from buildset.resolution.models import (
    SECTIONS,
    BasedOn,
    BuildDocument,
    ClassifiedDocument,
    Configuration,
    DocumentKind,
    ExtendedDocument,
    option_name,
    references,
)
from buildset.resolution.registry import BuildRegistry, ResolutionState

logger = get_logger(__name__)


def merge_extension_configuration(base: Configuration, override: Configuration) -> Configuration:
    """Merge *override* into *base*; entries of *override* win by name."""
    enable = list(base.enable)
    positions = {option_name(entry): index for index, entry in enumerate(enable)}
    for entry in override.enable:
        name = option_name(entry)
        if name in positions:
            enable[positions[name]] = entry
        else:
            positions[name] = len(enable)
            enable.append(entry)

    disable = list(base.disable)
    for name in override.disable:
        if name not in disable:
            disable.append(name)

    return Configuration(enable=enable, disable=disable)


def merge_core_fields(
    base: BuildDocument, override: BuildDocument | ExtendedDocument
) -> BuildDocument:
    """Overlay the scalar fields of *override* onto *base*.

    ``meta``, ``active``, ``only`` and ``include`` always come from
    *override*, even when unset there.  ``board_env``, ``min_version`` and
    each ``based_on`` field fall back to *base* when *override* leaves them
    unset.
    """
    theirs = override.based_on
    based_on = BasedOn(
        repo=(theirs and theirs.repo) or base.based_on.repo,
        path=(theirs and theirs.path) or base.based_on.path,
        stable_branch=(theirs and theirs.stable_branch) or base.based_on.stable_branch,
        nightly_branch=(theirs and theirs.nightly_branch) or base.based_on.nightly_branch,
    )
    return base.model_copy(
        update={
            "meta": override.meta.model_copy(),
            "active": override.active,
            "only": override.only,
            "include": override.include,
            "board_env": override.board_env or base.board_env,
            "min_version": override.min_version or base.min_version,
            "based_on": based_on,
        }
    )


def apply_override(
    base: BuildDocument,
    override: BuildDocument | ExtendedDocument,
    *,
    base_name: str,
    override_name: str,
    registry: BuildRegistry | None = None,
) -> BuildDocument:
    """Fold one overriding document into the accumulated *base*."""
    merged = merge_core_fields(base, override)
    merged, conflicts = reconcile_document(
        merged, override, name=base_name, other_name=override_name, self_check=False
    )
    if registry is not None:
        registry.record_conflicts(conflicts)
    return merged.model_copy(
        update={
            section: merge_extension_configuration(
                merged.section(section), override.section(section)
            )
            for section in SECTIONS
        }
    )


def resolve_extensions(registry: BuildRegistry) -> BuildRegistry:
    """Replace every extended entry with its fully merged build."""
    for classified in registry:
        if classified.kind is DocumentKind.EXTENDED:
            resolve_document(registry, classified.name)
    return registry


def resolve_document(
    registry: BuildRegistry, name: str, chain: list[str] | None = None
) -> BuildDocument:
    """Resolve *name* to a full build, memoizing the result in *registry*."""
    chain = chain or []
    state = registry.state(name)
    classified = registry[name]

    if state is ResolutionState.RESOLVED:
        if not isinstance(classified.document, BuildDocument):
            raise BuildSetError(f"Build {name} is marked resolved but is {classified.kind.value}")
        return classified.document
    if state is ResolutionState.RESOLVING:
        raise CyclicReferenceError(chain[chain.index(name):] + [name])

    extended = classified.document
    if not isinstance(extended, ExtendedDocument):
        raise BuildSetError(f"Build {name} cannot be resolved as an extension")

    parents = references(extended.extends)
    if not parents:
        raise BuildSetError(f"Invalid extension build {name}, extends names no build")
    for parent in parents:
        _check_parent(registry, name, parent)

    registry.set_state(name, ResolutionState.RESOLVING)
    with LogContext(document=name):
        first, *rest = parents
        accumulator = resolve_document(registry, first, [*chain, name]).model_copy(deep=True)
        for parent in rest:
            resolved = resolve_document(registry, parent, [*chain, name])
            accumulator = apply_override(
                accumulator,
                resolved.model_copy(deep=True),
                base_name=first,
                override_name=parent,
                registry=registry,
            )

        accumulator = apply_override(
            accumulator,
            extended,
            base_name=first,
            override_name=name,
            registry=registry,
        )
        logger.debug("extension_resolved", parents=parents)

    registry.replace(ClassifiedDocument(name=name, kind=DocumentKind.FULL, document=accumulator))
    registry.set_state(name, ResolutionState.RESOLVED)
    return accumulator


def _check_parent(registry: BuildRegistry, name: str, parent: str) -> None:
    kind = registry.kind_of(parent)
    if kind is DocumentKind.PARTIAL:
        raise BuildReferenceError(
            f"Invalid extension build {name}, extended {parent} is a partial"
        ).with_context(document=name)
    if parent not in registry:
        raise BuildReferenceError(
            f"Invalid extension build {name}, extended {parent} does not exist"
        ).with_context(document=name)
