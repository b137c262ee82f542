"""
Lazy-initialised catalog container.

:class:`Catalog` holds references to the record backend, the entity store,
the path resolver, the tree mutator and the sync engine, and creates them
on first access from :class:`~apidoc.core.settings.ApiDocSettings`.

Usage::

    from apidoc.catalog.container import Catalog

    catalog = Catalog()
    module = await catalog.get_by_path("billing/invoices")
    await catalog.engine.sync_all()

    # Tests inject components explicitly:
    catalog = Catalog(settings, backend=MemoryRecordBackend(), sink=MemorySink())

    # As an async context manager for automatic cleanup:
    async with Catalog() as c:
        await c.list_modules()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apidoc.catalog.backends import RecordBackend, create_backend
from apidoc.catalog.models import EntityRef, Endpoint, Module
from apidoc.catalog.paths import PathResolver
from apidoc.catalog.store import EntityStore
from apidoc.catalog.tree import TreeMutator
from apidoc.core.logging import get_logger
from apidoc.core.settings import ApiDocSettings, get_settings
from apidoc.docs.renderer import DocumentRenderer, MarkdownRenderer
from apidoc.docs.sink import DirectorySink, DocumentSink
from apidoc.sync.engine import SyncEngine

logger = get_logger(__name__)


class Catalog:
    """Lazy-initialised dependency container.

    Components are created on first property access and released via
    :meth:`close` (or the async context-manager protocol).
    """

    def __init__(
        self,
        settings: ApiDocSettings | None = None,
        *,
        backend: RecordBackend | None = None,
        renderer: DocumentRenderer | None = None,
        sink: DocumentSink | None = None,
    ) -> None:
        self._settings = settings
        self._backend = backend
        self._renderer = renderer
        self._sink = sink
        self._store: EntityStore | None = None
        self._resolver: PathResolver | None = None
        self._mutator: TreeMutator | None = None
        self._engine: SyncEngine | None = None

    # ── Properties (lazy) ────────────────────────────────────────

    @property
    def settings(self) -> ApiDocSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def backend(self) -> RecordBackend:
        if self._backend is None:
            self._backend = create_backend(self.settings)
            logger.debug("catalog.backend_created", backend=self.settings.storage_backend.value)
        return self._backend

    @property
    def store(self) -> EntityStore:
        if self._store is None:
            self._store = EntityStore(self.backend)
        return self._store

    @property
    def resolver(self) -> PathResolver:
        if self._resolver is None:
            self._resolver = PathResolver(self.store)
        return self._resolver

    @property
    def mutator(self) -> TreeMutator:
        if self._mutator is None:
            self._mutator = TreeMutator(self.store)
        return self._mutator

    @property
    def renderer(self) -> DocumentRenderer:
        if self._renderer is None:
            self._renderer = MarkdownRenderer()
        return self._renderer

    @property
    def sink(self) -> DocumentSink:
        if self._sink is None:
            self._sink = DirectorySink(self.settings.docs_dir)
        return self._sink

    @property
    def engine(self) -> SyncEngine:
        if self._engine is None:
            self._engine = SyncEngine(self.store, self.resolver, self.renderer, self.sink)
        return self._engine

    # ── Browsing (no sync) ───────────────────────────────────────

    async def get_module(self, module_id: str) -> Module | None:
        return await self.store.get_module(module_id)

    async def get_by_path(self, path: str) -> Module | None:
        return await self.resolver.get_by_path(path)

    async def list_modules(self, filter: Mapping[str, Any] | None = None) -> list[EntityRef]:
        return await self.store.list_modules(filter)

    async def list_endpoints(
        self, module_id: str, filter: Mapping[str, Any] | None = None
    ) -> list[EntityRef]:
        return await self.store.list_endpoints(module_id, filter)

    async def get_endpoint(self, endpoint_id: str) -> Endpoint | None:
        return await self.store.get_endpoint(endpoint_id)

    # ── Lifecycle ────────────────────────────────────────────────

    async def close(self) -> None:
        """Release the record backend, if one was created."""
        if self._backend is not None:
            await self._backend.close()
            self._backend = None
            self._store = None
            self._resolver = None
            self._mutator = None
            self._engine = None

    async def __aenter__(self) -> Catalog:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
