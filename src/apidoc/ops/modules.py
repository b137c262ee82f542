"""
Module operations.

Create, update, relocate and inspect modules. Every mutation re-syncs the
module whose document content changed: the new module itself for a root,
otherwise the parent (whose child list changed) together with its subtree.
Document regeneration failures after a successful write are returned as
warnings.
"""

from __future__ import annotations

from apidoc.catalog.models import validate_name
from apidoc.catalog.paths import split_path
from apidoc.core.errors import NotFoundError, PreconditionFailedError
from apidoc.core.logging import get_logger
from apidoc.docs.layout import child_path
from apidoc.ops.context import OperationContext, operation
from apidoc.ops.requests import (
    AddModuleRequest,
    DetachModuleRequest,
    ModuleSelector,
    MoveModuleRequest,
    UpdateModuleRequest,
)
from apidoc.ops.responses import Created, ModuleDetail, RefSummary, Updated
from apidoc.ops.result import OperationResult
from apidoc.ops.sync import resolve_module, resync_module

logger = get_logger(__name__)


@operation
async def add_module(ctx: OperationContext, request: AddModuleRequest) -> OperationResult[Created]:
    """Create a root module, or a child of ``request.parent_path``."""
    validate_name(request.name)
    catalog = ctx.catalog

    parent_id: str | None = None
    parent_path = "/".join(split_path(request.parent_path or ""))
    if parent_path:
        parent_id = await resolve_module(ctx, ModuleSelector(path=parent_path))

    path = child_path(parent_path, request.name) if parent_path else request.name
    if ctx.dry_run:
        return OperationResult.ok(Created(id="", path=path, dry_run=True))

    data = {"name": request.name, "description": request.description}
    if parent_id is None:
        module_id = await catalog.store.create_module(data)
        warnings = await resync_module(ctx, module_id)
    else:
        module_id = await catalog.mutator.create_sub_module(parent_id, data)
        warnings = await resync_module(ctx, parent_id)

    logger.info("ops.module_added", module_id=module_id, path=path)
    return OperationResult.ok(Created(id=module_id, path=path), warnings=warnings)


@operation
async def update_module(ctx: OperationContext, request: UpdateModuleRequest) -> OperationResult[Updated]:
    """Rename a module and/or change its description, addressed by id or path."""
    catalog = ctx.catalog
    module_id = await resolve_module(ctx, request.target)

    changed = []
    if request.name is not None:
        validate_name(request.name)
        changed.append("name")
    if request.description is not None:
        changed.append("description")

    if not changed:
        return OperationResult.ok(
            Updated(id=module_id, dry_run=ctx.dry_run), warnings=["no fields to update"]
        )
    if ctx.dry_run:
        return OperationResult.ok(Updated(id=module_id, changed=changed, dry_run=True))

    if request.name is not None:
        await catalog.mutator.rename_module(module_id, request.name)
    if request.description is not None:
        await catalog.store.update_module(module_id, {"description": request.description})

    module = await catalog.store.require_module(module_id)
    renamed_child = request.name is not None and module.parent_id is not None
    warnings = await resync_module(ctx, module.parent_id if renamed_child else module_id)
    return OperationResult.ok(Updated(id=module_id, changed=changed), warnings=warnings)


@operation
async def move_module(ctx: OperationContext, request: MoveModuleRequest) -> OperationResult[Updated]:
    """Relocate a module (and its subtree) under a new parent.

    Moving a root module removes it from the root index.
    """
    catalog = ctx.catalog
    module = await catalog.store.require_module(request.module_id)
    await catalog.store.require_module(request.new_parent_id)
    if request.module_id == request.new_parent_id:
        raise PreconditionFailedError(
            "Cannot move a module under itself"
        ).with_context(entity_id=request.module_id)
    if ctx.dry_run:
        return OperationResult.ok(Updated(id=module.id, changed=["parent_id"], dry_run=True))

    old_parent_id = module.parent_id
    await catalog.mutator.move_sub_module(request.module_id, request.new_parent_id)
    if old_parent_id is None:
        await catalog.store.remove_root_entry(request.module_id)

    warnings = await resync_module(ctx, request.new_parent_id)
    if old_parent_id is not None:
        warnings += await resync_module(ctx, old_parent_id)
    return OperationResult.ok(Updated(id=module.id, changed=["parent_id"]), warnings=warnings)


@operation
async def detach_module(ctx: OperationContext, request: DetachModuleRequest) -> OperationResult[Updated]:
    """Remove a child from its parent.

    The detached module keeps its records but is neither reachable by path
    nor listed in the root index until ``rebuild_root_index`` runs.
    """
    catalog = ctx.catalog
    parent = await catalog.store.require_module(request.parent_id)
    await catalog.store.require_module(request.module_id)
    if parent.find_child(request.module_id) is None:
        raise PreconditionFailedError(
            f"Module {request.module_id} is not a child of {request.parent_id}"
        ).with_context(entity_id=request.module_id, parent_id=request.parent_id)
    if ctx.dry_run:
        return OperationResult.ok(Updated(id=request.module_id, changed=["parent_id"], dry_run=True))

    await catalog.mutator.remove_sub_module(request.parent_id, request.module_id)
    warnings = await resync_module(ctx, request.parent_id)
    return OperationResult.ok(Updated(id=request.module_id, changed=["parent_id"]), warnings=warnings)


@operation
async def list_modules(ctx: OperationContext, name: str | None = None) -> OperationResult[list[RefSummary]]:
    """List root modules in index order, optionally filtered by name substring."""
    refs = await ctx.catalog.store.list_modules({"name": name} if name else None)
    return OperationResult.ok([RefSummary.from_ref(r) for r in refs])


@operation
async def get_module_details(
    ctx: OperationContext, selector: ModuleSelector
) -> OperationResult[ModuleDetail]:
    """Full module record plus its resolved path."""
    module_id = await resolve_module(ctx, selector)
    module = await ctx.catalog.store.get_module(module_id)
    if module is None:
        raise NotFoundError("module", module_id)
    path = await ctx.catalog.resolver.path_of(module_id)
    return OperationResult.ok(ModuleDetail.from_module(module, path))


@operation
async def rebuild_root_index(ctx: OperationContext) -> OperationResult[list[RefSummary]]:
    """Rewrite the root index from the set of parentless modules."""
    if ctx.dry_run:
        refs = await ctx.catalog.store.list_modules()
        return OperationResult.ok([RefSummary.from_ref(r) for r in refs], metadata={"dry_run": True})
    refs = await ctx.catalog.store.rebuild_root_index()
    return OperationResult.ok([RefSummary.from_ref(r) for r in refs])
