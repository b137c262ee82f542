"""Hierarchical path resolution.

Translates slash-delimited module paths (``"billing/invoices"``) to module
ids and back. Resolution is fail-soft: a path that does not resolve gives
``None``. When siblings share a name the first entry in stored order wins.
"""

from __future__ import annotations

from apidoc.catalog.models import PATH_SEPARATOR, Module
from apidoc.catalog.store import EntityStore
from apidoc.core.errors import NotFoundError, TreeIntegrityError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)


def split_path(path: str) -> list[str]:
    """Split on ``/`` and drop empty segments."""
    return [segment for segment in (path or "").split(PATH_SEPARATOR) if segment]


class PathResolver:
    """Resolves module paths against the root index and child lists."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def resolve_path(self, path: str) -> str | None:
        """Return the module id at ``path``, or None if any segment misses."""
        segments = split_path(path)
        if not segments:
            return None

        roots = await self._store.list_modules()
        current_id = next((r.id for r in roots if r.name == segments[0]), None)
        if current_id is None:
            return None

        for segment in segments[1:]:
            module = await self._store.get_module(current_id)
            if module is None:
                return None
            current_id = next((c.id for c in module.children if c.name == segment), None)
            if current_id is None:
                return None

        return current_id

    async def path_of(self, module_id: str) -> str:
        """Build the path of a module by walking parent pointers upward.

        Raises:
            NotFoundError: ``module_id`` or an ancestor does not exist
            TreeIntegrityError: Parent pointers form a cycle
        """
        names: list[str] = []
        seen: set[str] = set()
        current: str | None = module_id

        while current is not None:
            if current in seen:
                raise TreeIntegrityError(
                    f"Parent cycle detected while resolving path of {module_id}"
                ).with_context(entity_id=module_id, cycle_at=current)
            seen.add(current)
            module = await self._store.get_module(current)
            if module is None:
                raise NotFoundError("module", current)
            names.append(module.name)
            current = module.parent_id

        return PATH_SEPARATOR.join(reversed(names))

    async def get_by_path(self, path: str) -> Module | None:
        module_id = await self.resolve_path(path)
        if module_id is None:
            return None
        return await self._store.get_module(module_id)
