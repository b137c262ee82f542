"""
Structured error types for apidoc.

Every failure the catalog core can report is a subclass of ApiDocError.
Errors carry a category, a retryable flag, a context with the entity ids
involved, and an optional chained cause, so the operation layer can turn
them into result envelopes without string matching.

Manifesto:
    - **Absent is not an error:** ``get_*`` lookups return ``None``
    - **Missing relationship is an error:** NotFoundError
    - **Missing edge is a precondition:** PreconditionFailedError
    - **Busy is retryable:** BusyError is the only retryable core error

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                         ApiDocError                           │
        │         (category, retryable, context, cause)                 │
        ├──────────────────────────────────────────────────────────────┤
        │  NotFoundError       PreconditionFailedError    BusyError    │
        │  (NOT_FOUND)         (PRECONDITION)             (BUSY, retry)│
        │                                                              │
        │  ValidationError     StorageError               ConfigError  │
        │  (VALIDATION)        (STORAGE)                  (CONFIG)     │
        │                           │                                  │
        │                      TreeIntegrityError                      │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = NotFoundError("module", "abc")
    >>> err.entity_id
    'abc'
    >>> BusyError("abc").retryable
    True

Tags:
    error-handling, exception-hierarchy, apidoc-core
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Categories used for routing errors to result codes."""

    NOT_FOUND = "NOT_FOUND"
    PRECONDITION = "PRECONDITION"
    BUSY = "BUSY"
    VALIDATION = "VALIDATION"
    STORAGE = "STORAGE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Entity metadata attached to an error.

    Attributes:
        entity_kind: ``"module"`` or ``"endpoint"``
        entity_id: Identifier of the entity the error is about
        parent_id: Parent module id for tree operations
        path: Slash-delimited module path, when one was involved
        metadata: Additional key-value pairs
    """

    entity_kind: str | None = None
    entity_id: str | None = None
    parent_id: str | None = None
    path: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for name in ("entity_kind", "entity_id", "parent_id", "path"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        result.update(self.metadata)
        return result


class ApiDocError(Exception):
    """
    Base class for all apidoc errors.

    Subclasses set ``default_category`` and ``default_retryable``; callers
    may override either per instance.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ApiDocError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("write failed").with_context(entity_id=module_id)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
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
            "retryable": self.retryable,
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
# LOOKUP / TREE ERRORS
# =============================================================================


class NotFoundError(ApiDocError):
    """A required id does not resolve to an existing record."""

    default_category = ErrorCategory.NOT_FOUND

    def __init__(self, kind: str, entity_id: str, message: str | None = None, **kwargs: Any):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(message or f"{kind} not found: {entity_id}", **kwargs)
        self.context.entity_kind = kind
        self.context.entity_id = entity_id


class PreconditionFailedError(ApiDocError):
    """The addressed parent/child edge does not exist, or a move is invalid."""

    default_category = ErrorCategory.PRECONDITION


class BusyError(ApiDocError):
    """A sync call targets an entity id that is already in flight."""

    default_category = ErrorCategory.BUSY
    default_retryable = True

    def __init__(self, entity_id: str, message: str | None = None, **kwargs: Any):
        self.entity_id = entity_id
        super().__init__(message or f"sync already in progress: {entity_id}", **kwargs)
        self.context.entity_id = entity_id


# =============================================================================
# VALIDATION / CONFIG
# =============================================================================


class ValidationError(ApiDocError):
    """Invalid input: bad names, unknown patch fields."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class ConfigError(ApiDocError):
    """Settings are missing or invalid."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# STORAGE
# =============================================================================


class StorageError(ApiDocError):
    """A record backend failed to read or write."""

    default_category = ErrorCategory.STORAGE


class TreeIntegrityError(StorageError):
    """Persisted parent pointers form a cycle."""


def is_retryable(error: BaseException) -> bool:
    """Return True when the caller may retry the failed call."""
    if isinstance(error, ApiDocError):
        return error.retryable
    return False


__all__ = [
    "ApiDocError",
    "BusyError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "NotFoundError",
    "PreconditionFailedError",
    "StorageError",
    "TreeIntegrityError",
    "ValidationError",
    "is_retryable",
]
