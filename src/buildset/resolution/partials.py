"""Partial inclusion.

Every document that declares ``include`` receives the configuration of each
referenced partial, in order.  The including document is the authority:

1. the partial's option sets are reconciled against the includer's, so
   anything the includer already says about an option wins;
2. the remaining partial entries are appended when the includer has no
   entry of that name yet.  Nothing the includer declares is overwritten,
   not even a parameter value.

Partials may include other partials; those includes are resolved first
(depth-first, once per partial).  When every document has been processed
the consumed partials are removed from the registry.  A partial nothing
includes stays behind and is rejected by final validation.
"""

from __future__ import annotations

from buildset.core.errors import BuildReferenceError, CyclicReferenceError
from buildset.core.logging import LogContext, get_logger
from buildset.resolution.conflicts import reconcile
from buildset.resolution.models import (
    SECTIONS,
    ClassifiedDocument,
    Configuration,
    DocumentKind,
    option_name,
    references,
)
from buildset.resolution.registry import BuildRegistry, ResolutionState

logger = get_logger(__name__)


def merge_partial_configuration(base: Configuration, partial: Configuration) -> Configuration:
    """Append the entries of *partial* that *base* does not name yet."""
    enable = list(base.enable)
    seen = {option_name(entry) for entry in enable}
    for entry in partial.enable:
        name = option_name(entry)
        if name not in seen:
            enable.append(entry)
            seen.add(name)

    disable = list(base.disable)
    for name in partial.disable:
        if name not in disable:
            disable.append(name)

    return Configuration(enable=enable, disable=disable)


def resolve_partials(registry: BuildRegistry) -> BuildRegistry:
    """Merge partials into their includers, then drop the consumed partials."""
    consumed: set[str] = set()

    for classified in registry:
        if not references(classified.document.include):
            continue
        if classified.kind is DocumentKind.PARTIAL:
            _resolve_partial(registry, classified.name, [], consumed)
        else:
            _merge_includes(registry, classified.name, [], consumed)

    for partial in registry.of_kind(DocumentKind.PARTIAL):
        if partial.name in consumed:
            registry.remove(partial.name)

    logger.debug("partials_consumed", partials=sorted(consumed))
    return registry


def _resolve_partial(
    registry: BuildRegistry,
    name: str,
    chain: list[str],
    consumed: set[str],
) -> ClassifiedDocument:
    state = registry.state(name)
    if state is ResolutionState.RESOLVED:
        return registry[name]
    if state is ResolutionState.RESOLVING:
        raise CyclicReferenceError(chain[chain.index(name):] + [name], relation="include")

    registry.set_state(name, ResolutionState.RESOLVING)
    classified = _merge_includes(registry, name, chain, consumed)
    registry.set_state(name, ResolutionState.RESOLVED)
    return classified


def _merge_includes(
    registry: BuildRegistry,
    name: str,
    chain: list[str],
    consumed: set[str],
) -> ClassifiedDocument:
    classified = registry[name]
    document = classified.document

    with LogContext(document=name):
        for partial_name in references(document.include):
            if partial_name not in registry:
                raise BuildReferenceError(
                    f"Invalid build {name}, partial {partial_name} does not exist"
                ).with_context(document=name)
            if registry.kind_of(partial_name) is not DocumentKind.PARTIAL:
                raise BuildReferenceError(
                    f"Invalid build {name}, included {partial_name} is not a partial"
                ).with_context(document=name)

            partial = _resolve_partial(registry, partial_name, [*chain, name], consumed).document

            update = {}
            for section in SECTIONS:
                result = reconcile(
                    partial.section(section),
                    document.section(section),
                    name_a=partial_name,
                    name_b=name,
                    section=section,
                    self_check=False,
                )
                registry.record_conflicts(result.conflicts)
                update[section] = merge_partial_configuration(
                    document.section(section), result.configuration
                )
            document = document.model_copy(update=update)
            consumed.add(partial_name)
            logger.debug("partial_included", partial=partial_name)

    classified = ClassifiedDocument(name=name, kind=classified.kind, document=document)
    registry.replace(classified)
    return classified
