"""
Sync engine: regenerates derived documents from catalog state.

Manifesto:
    Documents are derived data. The engine reads the current records,
    renders them, and writes them to a sink; it never mutates the catalog.
    At most one regeneration per entity id runs at a time.

Architecture:
    ::

        SyncEngine(store, resolver, renderer, sink, inflight)
          ├── sync_module(id)    ─ self, endpoints (stored order),
          │                        children (stored order, recursive)
          ├── sync_endpoint(id)  ─ one endpoint document
          └── sync_all()         ─ roots in index order, then index page

        Every call: inflight.hold(id) ─ BusyError if held
                    ... work ...
                    release in finally

Guardrails:
    - A failure anywhere aborts the remaining steps of that call and
      propagates after the in-flight marker is released.
    - ``sync_all`` stops at the first failing root; later roots are not
      attempted.
    - Recursion re-enters the guard per child, so a corrupted tree that
      cycles back to an in-flight module fails with BusyError instead of
      recursing forever.

Tags:
    sync, documents, reentrancy, asyncio
"""

from __future__ import annotations

from dataclasses import dataclass, field

from apidoc.catalog.paths import PathResolver
from apidoc.catalog.store import EntityStore
from apidoc.core.errors import NotFoundError
from apidoc.core.logging import get_logger
from apidoc.docs import layout
from apidoc.docs.renderer import DocumentRenderer
from apidoc.docs.sink import DocumentSink
from apidoc.sync.inflight import InFlightRegistry

logger = get_logger(__name__)


@dataclass
class SyncReport:
    """Documents written by one sync call, in write order."""

    documents: list[str] = field(default_factory=list)
    modules: int = 0
    endpoints: int = 0

    def to_dict(self) -> dict:
        return {
            "documents": list(self.documents),
            "modules": self.modules,
            "endpoints": self.endpoints,
        }


class SyncEngine:
    """Drives recursive document regeneration, one call per entity at a time."""

    def __init__(
        self,
        store: EntityStore,
        resolver: PathResolver,
        renderer: DocumentRenderer,
        sink: DocumentSink,
        inflight: InFlightRegistry | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._renderer = renderer
        self._sink = sink
        self._inflight = inflight if inflight is not None else InFlightRegistry()

    @property
    def inflight(self) -> InFlightRegistry:
        return self._inflight

    async def sync_module(self, module_id: str) -> SyncReport:
        """Regenerate a module's document, its endpoints, and its whole subtree.

        Raises:
            BusyError: ``module_id`` (or a descendant) is already in flight
            NotFoundError: The module or a referenced record is missing
        """
        report = SyncReport()
        await self._sync_module(module_id, report)
        logger.info("sync.module_done", module_id=module_id, **report.to_dict())
        return report

    async def sync_endpoint(self, endpoint_id: str) -> SyncReport:
        """Regenerate a single endpoint document.

        Raises:
            BusyError: ``endpoint_id`` is already in flight
            NotFoundError: The endpoint or its owning module is missing
        """
        report = SyncReport()
        await self._sync_endpoint(endpoint_id, report)
        return report

    async def sync_all(self) -> SyncReport:
        """Sync every root module in index order, then the index page."""
        report = SyncReport()
        roots = await self._store.list_modules()
        logger.info("sync.all_started", roots=len(roots))

        for ref in roots:
            await self._sync_module(ref.id, report)

        text = await self._renderer.render_index(roots)
        await self._write(layout.INDEX_DOCUMENT, text, report)

        logger.info("sync.all_done", **report.to_dict())
        return report

    # ── Internals ────────────────────────────────────────────────

    async def _sync_module(self, module_id: str, report: SyncReport) -> None:
        with self._inflight.hold(module_id):
            module = await self._store.require_module(module_id)
            path = await self._resolver.path_of(module_id)
            logger.debug("sync.module_started", module_id=module_id, path=path)

            text = await self._renderer.render_module(module, path)
            await self._write(layout.module_document(path), text, report)
            report.modules += 1

            for ref in module.endpoints:
                await self._sync_endpoint(ref.id, report, module_path=path)

            for ref in module.children:
                await self._sync_module(ref.id, report)

    async def _sync_endpoint(
        self,
        endpoint_id: str,
        report: SyncReport,
        module_path: str | None = None,
    ) -> None:
        with self._inflight.hold(endpoint_id):
            endpoint = await self._store.get_endpoint(endpoint_id)
            if endpoint is None:
                raise NotFoundError("endpoint", endpoint_id)
            if module_path is None:
                module_path = await self._resolver.path_of(endpoint.module_id)

            text = await self._renderer.render_endpoint(endpoint, module_path)
            await self._write(layout.endpoint_document(module_path, endpoint.name), text, report)
            report.endpoints += 1

    async def _write(self, relative_path: str, text: str, report: SyncReport) -> None:
        await self._sink.write(relative_path, text)
        report.documents.append(relative_path)
