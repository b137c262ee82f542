"""
Sample catalog data.

Seeds two root modules with a handful of endpoints each and regenerates
the documentation tree, so a fresh data directory has something to browse.
"""

from __future__ import annotations

from apidoc.core.errors import ApiDocError
from apidoc.core.logging import get_logger
from apidoc.ops.context import OperationContext, operation
from apidoc.ops.responses import RefSummary, SampleLoaded
from apidoc.ops.result import OperationResult

logger = get_logger(__name__)

# Module name -> (description, [(endpoint name, declaration, description), ...])
SAMPLE_MODULES: dict[str, tuple[str, list[tuple[str, str, str]]]] = {
    "user": (
        "User management: registration, login and profile lookup.",
        [
            (
                "register",
                "async function register(username, password, email)",
                "Registers a user from a username, password and email; returns the new user id.",
            ),
            (
                "login",
                "async function login(username, password)",
                "Verifies credentials and returns the user profile with an access token.",
            ),
            (
                "getUserInfo",
                "async function getUserInfo(userId)",
                "Returns the full profile of one user.",
            ),
        ],
    ),
    "product": (
        "Product management: create, query and update products.",
        [
            (
                "createProduct",
                "async function createProduct(name, description, price, category)",
                "Creates a product and returns its id.",
            ),
            (
                "getProductList",
                "async function getProductList(category, page, pageSize)",
                "Lists products with optional category filter and paging; returns items and total.",
            ),
            (
                "updateProduct",
                "async function updateProduct(productId, updateData)",
                "Applies a partial update to one product.",
            ),
        ],
    ),
}


@operation
async def load_sample_data(ctx: OperationContext) -> OperationResult[SampleLoaded]:
    """Create the sample modules and endpoints, then sync every document."""
    endpoint_count = sum(len(endpoints) for _, endpoints in SAMPLE_MODULES.values())
    if ctx.dry_run:
        return OperationResult.ok(
            SampleLoaded(
                modules=[RefSummary(id="", name=name) for name in SAMPLE_MODULES],
                endpoints=endpoint_count,
                dry_run=True,
            )
        )

    store = ctx.catalog.store
    modules: list[RefSummary] = []
    for name, (description, endpoints) in SAMPLE_MODULES.items():
        module_id = await store.create_module({"name": name, "description": description})
        for endpoint_name, declaration, endpoint_description in endpoints:
            await store.create_endpoint(
                {
                    "module_id": module_id,
                    "name": endpoint_name,
                    "declaration": declaration,
                    "description": endpoint_description,
                }
            )
        modules.append(RefSummary(id=module_id, name=name))

    warnings: list[str] = []
    documents: list[str] = []
    try:
        report = await ctx.catalog.engine.sync_all()
        documents = report.documents
    except ApiDocError as exc:
        logger.warning("op.resync_failed", error=exc.message)
        warnings.append(f"documents were not regenerated: {exc.message}")

    logger.info("ops.sample_loaded", modules=len(modules), endpoints=endpoint_count)
    return OperationResult.ok(
        SampleLoaded(modules=modules, endpoints=endpoint_count, documents=documents),
        warnings=warnings,
    )
