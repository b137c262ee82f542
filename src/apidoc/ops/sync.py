"""
Document sync operations.

Wraps :class:`~apidoc.sync.engine.SyncEngine`. A dry-run context renders
into a throwaway :class:`~apidoc.docs.sink.MemorySink` so callers see the
documents that would be written without touching the docs directory.
"""

from __future__ import annotations

from apidoc.core.errors import ApiDocError, NotFoundError, ValidationError
from apidoc.core.logging import get_logger
from apidoc.docs.sink import MemorySink
from apidoc.ops.context import OperationContext, operation
from apidoc.ops.requests import ModuleSelector
from apidoc.ops.responses import SyncSummary
from apidoc.ops.result import OperationResult
from apidoc.sync.engine import SyncEngine

logger = get_logger(__name__)


def _engine(ctx: OperationContext) -> SyncEngine:
    catalog = ctx.catalog
    if not ctx.dry_run:
        return catalog.engine
    return SyncEngine(
        catalog.store,
        catalog.resolver,
        catalog.renderer,
        MemorySink(),
        catalog.engine.inflight,
    )


async def resolve_module(ctx: OperationContext, selector: ModuleSelector) -> str:
    """Turn an id-or-path selector into a module id.

    Raises:
        ValidationError: Neither an id nor a path was given
        NotFoundError: The id or path does not resolve
    """
    catalog = ctx.catalog
    if selector.module_id:
        await catalog.store.require_module(selector.module_id)
        return selector.module_id
    if selector.path:
        module_id = await catalog.resolver.resolve_path(selector.path)
        if module_id is None:
            raise NotFoundError(
                "module", selector.path, f"module path not found: {selector.path}"
            ).with_context(path=selector.path)
        return module_id
    raise ValidationError("a module id or path is required", field="module_id")


async def resync_module(ctx: OperationContext, module_id: str) -> list[str]:
    """Regenerate a module's documents after a mutation.

    The mutation has already been persisted, so catalog errors here are
    reported as warnings rather than failing the operation.
    """
    try:
        await ctx.catalog.engine.sync_module(module_id)
    except ApiDocError as exc:
        logger.warning("op.resync_failed", module_id=module_id, error=exc.message)
        return [f"documents for module {module_id} were not regenerated: {exc.message}"]
    return []


async def resync_endpoint(ctx: OperationContext, endpoint_id: str) -> list[str]:
    try:
        await ctx.catalog.engine.sync_endpoint(endpoint_id)
    except ApiDocError as exc:
        logger.warning("op.resync_failed", endpoint_id=endpoint_id, error=exc.message)
        return [f"document for endpoint {endpoint_id} was not regenerated: {exc.message}"]
    return []


@operation
async def sync_module(ctx: OperationContext, selector: ModuleSelector) -> OperationResult[SyncSummary]:
    """Regenerate a module's document, its endpoints and its subtree."""
    module_id = await resolve_module(ctx, selector)
    report = await _engine(ctx).sync_module(module_id)
    return OperationResult.ok(SyncSummary.from_report(report), metadata={"dry_run": ctx.dry_run})


@operation
async def sync_endpoint(ctx: OperationContext, endpoint_id: str) -> OperationResult[SyncSummary]:
    """Regenerate one endpoint document."""
    if not endpoint_id:
        raise ValidationError("endpoint_id is required", field="endpoint_id")
    report = await _engine(ctx).sync_endpoint(endpoint_id)
    return OperationResult.ok(SyncSummary.from_report(report), metadata={"dry_run": ctx.dry_run})


@operation
async def sync_all(ctx: OperationContext) -> OperationResult[SyncSummary]:
    """Regenerate every root module subtree and the index page."""
    report = await _engine(ctx).sync_all()
    return OperationResult.ok(SyncSummary.from_report(report), metadata={"dry_run": ctx.dry_run})
