"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument. The context carries the catalog container, caller identity,
dry-run flag, and arbitrary metadata.
"""

from __future__ import annotations

import functools
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from apidoc.catalog.container import Catalog
from apidoc.core.errors import ApiDocError
from apidoc.core.logging import LogContext, get_logger
from apidoc.ops.result import OperationResult, error_code, from_error, start_timer

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[OperationResult[Any]]])


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        catalog: Lazy container giving access to the store, resolver,
            tree mutator and sync engine.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request, ``"cli"`` or ``"sdk"``.
        user: Optional user identifier.
        dry_run: When ``True``, operations validate their inputs and return
            without writing records or documents.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    catalog: Catalog
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    user: str | None = None
    dry_run: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def log_context(self) -> dict[str, Any]:
        """Key/value pairs bound to every log line of the operation."""
        return {"request_id": self.request_id, "caller": self.caller, **self.metadata}


def operation(func: F) -> F:
    """Wrap an async operation function with timing, log context and error mapping.

    Catalog errors become failed results with their mapped code; anything
    else is logged with its traceback and reported as ``INTERNAL``.
    """

    @functools.wraps(func)
    async def wrapper(ctx: OperationContext, *args: Any, **kwargs: Any) -> OperationResult[Any]:
        timer = start_timer()
        async with LogContext(op=func.__name__, **ctx.log_context()):
            try:
                result = await func(ctx, *args, **kwargs)
            except ApiDocError as exc:
                logger.info("op.failed", code=error_code(exc), error=exc.message)
                return from_error(exc, elapsed_ms=timer.elapsed_ms)
            except Exception as exc:
                logger.exception("op.internal_error", error=str(exc))
                return from_error(exc, elapsed_ms=timer.elapsed_ms)
            result.elapsed_ms = timer.elapsed_ms
            logger.debug("op.done", success=result.success, elapsed_ms=round(result.elapsed_ms, 2))
            return result

    return wrapper  # type: ignore[return-value]
