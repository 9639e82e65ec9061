"""
Structured error types for buildset.

Every fatal condition raised while resolving a build set is a
:class:`BuildSetError` subclass carrying a category, a structured
:class:`ErrorContext` (document, field path, section, option) and an
optional chained cause. Resolution is fail-fast: the first error aborts the
whole pipeline and nothing is handed downstream.

Manifesto:
    - **Typed Error Hierarchy:** Reference, schema and uniqueness failures are
      distinct types, so callers and tests can tell them apart
    - **Rich Context:** Errors name the offending document and field path
    - **Error Chaining:** Loader and pydantic failures are preserved as cause

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       BuildSetError                              │
        │  (category, context, cause)                                     │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  DocumentLoadError   BuildReferenceError    ValidationError     │
        │  (SOURCE)            (REFERENCE)            (VALIDATION)        │
        │                          │                      │                │
        │                 CyclicReferenceError      SchemaError           │
        │                                           UniquenessError       │
        │                                                                  │
        │  ConfigError         ExecutionError                             │
        │  (CONFIG)            (EXECUTION)                                │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = BuildReferenceError("Invalid build a.yaml, partial b.yaml does not exist")
    >>> error.category
    <ErrorCategory.REFERENCE: 'REFERENCE'>
    >>> error.with_context(document="a.yaml").context.document
    'a.yaml'

Tags:
    error-handling, exception-hierarchy, error-context, buildset

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        SOURCE: Document storage, read or import failures
        REFERENCE: include/extends pointing at a missing or wrong-kind document
        VALIDATION: Schema and uniqueness violations
        CONFIG: Invalid buildset settings
        EXECUTION: Failures reported by a build executor
        INTERNAL: Bugs, unexpected state
    """

    SOURCE = "SOURCE"
    REFERENCE = "REFERENCE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    EXECUTION = "EXECUTION"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Only fields that are set end up in :meth:`to_dict`, so the context can be
    logged directly.

    Attributes:
        document: Identity of the offending document
        field_path: Dotted path of the first failing field
        section: ``configuration`` or ``configuration_adv``
        option: Option name involved
        metadata: Additional key-value pairs
    """

    document: str | None = None
    field_path: str | None = None
    section: str | None = None
    option: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["document", "field_path", "section", "option"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BuildSetError(Exception):
    """
    Base exception for all buildset errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = BuildSetError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'BuildSetError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BuildSetError:
        """
        Add context to this error (fluent API).

        Usage:
            raise BuildReferenceError("...").with_context(document="alpha.yaml")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class DocumentLoadError(BuildSetError):
    """A build document could not be read, imported or produced."""

    default_category = ErrorCategory.SOURCE

    def __init__(self, document: str, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.document = document
        self.context.document = document


# =============================================================================
# REFERENCE ERRORS
# =============================================================================


class BuildReferenceError(BuildSetError):
    """An ``include`` or ``extends`` reference is missing or of the wrong kind."""

    default_category = ErrorCategory.REFERENCE


class CyclicReferenceError(BuildReferenceError):
    """A chain of ``include`` or ``extends`` references loops back on itself."""

    def __init__(self, chain: list[str], relation: str = "extends", **kwargs: Any):
        self.chain = list(chain)
        self.relation = relation
        super().__init__(f"Circular {relation} chain: {' -> '.join(self.chain)}", **kwargs)


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(BuildSetError):
    """
    Build document validation error.

    Never recoverable inside the resolver: the document must be fixed.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class SchemaError(ValidationError):
    """A document does not match the schema for its kind."""

    def __init__(self, document: str, field: str | None, constraint: str, **kwargs: Any):
        location = f" -> {field}" if field else ""
        super().__init__(
            f"Invalid build {document}{location} -> {constraint}",
            field=field,
            constraint=constraint,
            **kwargs,
        )
        self.document = document
        self.context.document = document
        self.context.field_path = field


class UniquenessError(ValidationError):
    """Two resolved builds share an artifact name."""

    def __init__(self, value: str, documents: list[str], *, field: str | None = None, **kwargs: Any):
        super().__init__(
            f"Asset name {value} is used by more than 1 build ({', '.join(documents)})",
            field=field,
            value=value,
            **kwargs,
        )
        self.documents = list(documents)


# =============================================================================
# CONFIGURATION / EXECUTION ERRORS
# =============================================================================


class ConfigError(BuildSetError):
    """buildset settings are missing or invalid."""

    default_category = ErrorCategory.CONFIG


class ExecutionError(BuildSetError):
    """A build executor failed to consume the resolved build set."""

    default_category = ErrorCategory.EXECUTION


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "BuildSetError",
    "DocumentLoadError",
    "BuildReferenceError",
    "CyclicReferenceError",
    "ValidationError",
    "SchemaError",
    "UniquenessError",
    "ConfigError",
    "ExecutionError",
]
