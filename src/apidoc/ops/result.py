"""
Operation result envelope.

Provides :class:`OperationResult`, the typed success/failure envelope that
every operation function returns. Unlike the exceptions raised by the
catalog and sync layers, ``OperationResult`` is designed for CLI and tool
consumers and carries *warnings*, *elapsed_ms*, and *metadata* alongside
the payload.

:func:`from_error` is the single place where the exception hierarchy in
:mod:`apidoc.core.errors` is mapped to machine-readable codes.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Generic, TypeVar

from apidoc.core.errors import (
    ApiDocError,
    BusyError,
    ErrorCategory,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)

NOT_FOUND = "NOT_FOUND"
PRECONDITION_FAILED = "PRECONDITION_FAILED"
BUSY = "BUSY"
VALIDATION_FAILED = "VALIDATION_FAILED"
INTERNAL = "INTERNAL"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """Structured error detail for failed operations.

    Attributes:
        code: Machine-readable code (``NOT_FOUND``, ``BUSY``, …).
        message: Human-readable description of the error.
        category: Optional :class:`ErrorCategory` of the underlying error.
        details: Extra key/value context (entity ids, field names, etc.).
        retryable: Whether the caller may retry the operation unchanged.
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Envelope returned by every operation function.

    Factory methods :meth:`ok` and :meth:`fail` should be used instead of
    the constructor directly.

    Attributes:
        success: ``True`` when the operation completed without error.
        data: The typed payload (``None`` on failure).
        error: Structured error (``None`` on success).
        warnings: Non-fatal messages collected during the operation.
        elapsed_ms: Wall-clock time the operation took.
        metadata: Additional key/value pairs for debugging or tracing.
    """

    success: bool
    data: T | None = None
    error: OperationError | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------ #
    # Factory helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def ok(
        cls,
        data: T,
        *,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a successful result."""
        return cls(
            success=True,
            data=data,
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        warnings: list[str] | None = None,
        elapsed_ms: float = 0.0,
        metadata: dict[str, Any] | None = None,
    ) -> OperationResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=OperationError(
                code=code,
                message=message,
                category=category,
                details=details or {},
                retryable=retryable,
            ),
            warnings=warnings or [],
            elapsed_ms=elapsed_ms,
            metadata=metadata or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (for JSON output)."""
        d: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            d["data"] = _plain(self.data)
        if self.error is not None:
            d["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
            }
            if self.error.details:
                d["error"]["details"] = self.error.details
        if self.warnings:
            d["warnings"] = self.warnings
        if self.elapsed_ms:
            d["elapsed_ms"] = round(self.elapsed_ms, 2)
        if self.metadata:
            d["metadata"] = self.metadata
        return d


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def error_code(exc: BaseException) -> str:
    """Map an exception to its operation error code."""
    if isinstance(exc, NotFoundError):
        return NOT_FOUND
    if isinstance(exc, PreconditionFailedError):
        return PRECONDITION_FAILED
    if isinstance(exc, BusyError):
        return BUSY
    if isinstance(exc, ValidationError):
        return VALIDATION_FAILED
    return INTERNAL


def from_error(exc: BaseException, *, elapsed_ms: float = 0.0) -> OperationResult[Any]:
    """Build a failed result from a raised exception."""
    if isinstance(exc, ApiDocError):
        details = exc.context.to_dict()
        if isinstance(exc, ValidationError) and exc.field:
            details["field"] = exc.field
        return OperationResult.fail(
            error_code(exc),
            exc.message,
            category=exc.category,
            details=details,
            retryable=exc.retryable,
            elapsed_ms=elapsed_ms,
        )
    return OperationResult.fail(INTERNAL, str(exc) or type(exc).__name__, elapsed_ms=elapsed_ms)


# ------------------------------------------------------------------ #
# Timing helper
# ------------------------------------------------------------------ #


class _Timer:
    """Minimal stopwatch for timing operations."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Return a lightweight timer.  Use ``timer.elapsed_ms`` when done."""
    return _Timer()
