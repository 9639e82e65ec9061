"""
buildset - resolve declarative firmware build documents into a concrete build set.

Build documents are full definitions, reusable partials merged via
``include``, or definitions that ``extends`` other builds.  ``buildset``
resolves them into ``{name: BuildDocument}``, validated and with unique
artifact names, ready for a build executor.

Quick start::

    from buildset import resolve_builds

    builds = resolve_builds("builds")
    for name, build in builds.items():
        print(name, build.board_env, build.meta.stable_name)
"""

__version__ = "0.1.0"

from buildset.authoring import quote
from buildset.core.errors import (
    BuildReferenceError,
    BuildSetError,
    CyclicReferenceError,
    DocumentLoadError,
    SchemaError,
    UniquenessError,
)
from buildset.resolution import (
    BuildDocument,
    BuildSet,
    load_build_set,
    load_builds,
    resolve_builds,
    resolve_documents,
)

__all__ = [
    "__version__",
    "quote",
    "BuildDocument",
    "BuildSet",
    "BuildSetError",
    "BuildReferenceError",
    "CyclicReferenceError",
    "DocumentLoadError",
    "SchemaError",
    "UniquenessError",
    "load_build_set",
    "load_builds",
    "resolve_builds",
    "resolve_documents",
]
