"""
Endpoint operations.

Endpoints are created inside an existing module and re-synced through it,
so the module document's endpoint list stays current.
"""

from __future__ import annotations

from apidoc.catalog.models import validate_name
from apidoc.core.errors import NotFoundError, ValidationError
from apidoc.core.logging import get_logger
from apidoc.ops.context import OperationContext, operation
from apidoc.ops.requests import AddEndpointRequest, ListEndpointsRequest, UpdateEndpointRequest
from apidoc.ops.responses import Created, EndpointDetail, RefSummary, Updated
from apidoc.ops.result import OperationResult
from apidoc.ops.sync import resync_endpoint, resync_module

logger = get_logger(__name__)


@operation
async def add_endpoint(ctx: OperationContext, request: AddEndpointRequest) -> OperationResult[Created]:
    """Create an endpoint in ``request.module_id`` and regenerate that module."""
    if not request.module_id:
        raise ValidationError("module_id is required", field="module_id")
    validate_name(request.name)
    catalog = ctx.catalog

    await catalog.store.require_module(request.module_id)
    module_path = await catalog.resolver.path_of(request.module_id)
    if ctx.dry_run:
        return OperationResult.ok(Created(id="", path=module_path, dry_run=True))

    endpoint_id = await catalog.store.create_endpoint(
        {
            "module_id": request.module_id,
            "name": request.name,
            "declaration": request.declaration,
            "description": request.description,
        }
    )
    warnings = await resync_module(ctx, request.module_id)

    logger.info("ops.endpoint_added", endpoint_id=endpoint_id, module_id=request.module_id)
    return OperationResult.ok(Created(id=endpoint_id, path=module_path), warnings=warnings)


@operation
async def update_endpoint(
    ctx: OperationContext, request: UpdateEndpointRequest
) -> OperationResult[Updated]:
    """Apply name / declaration / description changes.

    A rename re-syncs the owning module, since its endpoint list changes;
    other edits only regenerate the endpoint document.
    """
    catalog = ctx.catalog
    endpoint = await catalog.store.get_endpoint(request.endpoint_id)
    if endpoint is None:
        raise NotFoundError("endpoint", request.endpoint_id)

    patch = {
        key: value
        for key, value in (
            ("name", request.name),
            ("declaration", request.declaration),
            ("description", request.description),
        )
        if value is not None
    }
    if "name" in patch:
        validate_name(patch["name"])
    if not patch:
        return OperationResult.ok(
            Updated(id=endpoint.id, dry_run=ctx.dry_run), warnings=["no fields to update"]
        )
    if ctx.dry_run:
        return OperationResult.ok(Updated(id=endpoint.id, changed=sorted(patch), dry_run=True))

    await catalog.store.update_endpoint(endpoint.id, patch)
    if "name" in patch and patch["name"] != endpoint.name:
        warnings = await resync_module(ctx, endpoint.module_id)
    else:
        warnings = await resync_endpoint(ctx, endpoint.id)
    return OperationResult.ok(Updated(id=endpoint.id, changed=sorted(patch)), warnings=warnings)


@operation
async def list_endpoints(
    ctx: OperationContext, request: ListEndpointsRequest
) -> OperationResult[list[RefSummary]]:
    """List a module's endpoints in stored order."""
    refs = await ctx.catalog.store.list_endpoints(
        request.module_id, {"name": request.name} if request.name else None
    )
    return OperationResult.ok([RefSummary.from_ref(r) for r in refs])


@operation
async def get_endpoint_details(
    ctx: OperationContext, endpoint_id: str
) -> OperationResult[EndpointDetail]:
    """Full endpoint record plus its owning module's path."""
    endpoint = await ctx.catalog.store.get_endpoint(endpoint_id)
    if endpoint is None:
        raise NotFoundError("endpoint", endpoint_id)
    module_path = await ctx.catalog.resolver.path_of(endpoint.module_id)
    return OperationResult.ok(EndpointDetail.from_endpoint(endpoint, module_path))
