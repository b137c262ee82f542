"""
Entity store for modules, endpoints, and the root index.

Durable key-addressed records on top of a :class:`RecordBackend`. The store
owns record content; the parent/child overlay is maintained by
:class:`~apidoc.catalog.tree.TreeMutator`, which writes through
:meth:`EntityStore.save_module`.

Manifesto:
    - **Absent is a value:** ``get_module`` / ``get_endpoint`` return None
    - **Updates need a target:** ``update_*`` on a missing id raise NotFoundError
    - **Every write stamps updated_at**
    - **No multi-record transactions:** each backend write stands alone

Architecture:
    ::

        EntityStore(backend)
          ├── create_module / get_module / update_module / list_modules
          ├── create_endpoint / get_endpoint / update_endpoint / list_endpoints
          ├── save_module          ─ raw write used by the tree mutator
          ├── all_modules          ─ every module record
          └── rebuild_root_index   ─ derive index from parentless modules

        backend namespaces:  modules/<id>   endpoints/<id>   index/roots

Examples:
    >>> store = EntityStore(MemoryRecordBackend())
    >>> module_id = await store.create_module({"name": "billing"})
    >>> await store.list_modules({"name": "BILL"})
    [EntityRef(id='...', name='billing')]

Tags:
    apidoc, entity-store, catalog, storage
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apidoc.catalog.backends import ENDPOINTS, INDEX, MODULES, RecordBackend
from apidoc.catalog.models import (
    EntityRef,
    Endpoint,
    Module,
    index_from_dict,
    index_to_dict,
    validate_name,
)
from apidoc.core.errors import NotFoundError, ValidationError
from apidoc.core.logging import get_logger
from apidoc.core.timestamps import new_entity_id, utc_now_iso

logger = get_logger(__name__)

ROOT_INDEX_KEY = "roots"

MODULE_PATCH_FIELDS = frozenset({"name", "description"})
ENDPOINT_PATCH_FIELDS = frozenset({"name", "declaration", "description"})


def _name_filter(refs: list[EntityRef], filter: Mapping[str, Any] | None) -> list[EntityRef]:
    """Case-insensitive substring match on ``filter["name"]``."""
    needle = (filter or {}).get("name")
    if not needle:
        return refs
    needle = str(needle).lower()
    return [r for r in refs if needle in r.name.lower()]


def _warn_duplicate_endpoint(module: Module, endpoint_id: str, name: str) -> None:
    """Endpoints sharing a name in one module share a document path."""
    if any(ref.name == name and ref.id != endpoint_id for ref in module.endpoints):
        logger.warning(
            "store.duplicate_endpoint_name",
            module_id=module.id,
            endpoint_id=endpoint_id,
            name=name,
        )


def _check_patch(patch: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(patch) - allowed)
    if unknown:
        raise ValidationError(
            f"Unsupported update fields: {', '.join(unknown)}",
            field=unknown[0],
        )
    if "name" in patch:
        validate_name(patch["name"])


class EntityStore:
    """Module and endpoint records plus the root index."""

    def __init__(self, backend: RecordBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> RecordBackend:
        return self._backend

    # ── Root index ───────────────────────────────────────────────

    async def _load_index(self) -> list[EntityRef]:
        return index_from_dict(await self._backend.get(INDEX, ROOT_INDEX_KEY))

    async def _save_index(self, refs: list[EntityRef]) -> None:
        await self._backend.put(INDEX, ROOT_INDEX_KEY, index_to_dict(refs))

    # ── Modules ──────────────────────────────────────────────────

    def new_module(self, data: Mapping[str, Any], *, parent_id: str | None = None) -> Module:
        """Allocate (but do not persist) a module record."""
        name = validate_name(data.get("name"))
        now = utc_now_iso()
        return Module(
            id=new_entity_id(),
            name=name,
            description=data.get("description") or "",
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )

    async def create_module(self, data: Mapping[str, Any]) -> str:
        """Create a root module and record it in the root index.

        Args:
            data: Mapping with ``name`` and optional ``description``

        Returns:
            The new module id
        """
        module = self.new_module(data)
        await self._backend.put(MODULES, module.id, module.to_dict())

        index = await self._load_index()
        index.append(module.ref())
        await self._save_index(index)

        logger.info("store.module_created", module_id=module.id, name=module.name)
        return module.id

    async def get_module(self, module_id: str) -> Module | None:
        record = await self._backend.get(MODULES, module_id)
        return Module.from_dict(record) if record is not None else None

    async def require_module(self, module_id: str) -> Module:
        """Like :meth:`get_module` but a missing id raises NotFoundError."""
        module = await self.get_module(module_id)
        if module is None:
            raise NotFoundError("module", module_id)
        return module

    async def save_module(self, module: Module) -> None:
        """Persist a full module record, stamping ``updated_at``."""
        module.updated_at = utc_now_iso()
        await self._backend.put(MODULES, module.id, module.to_dict())

    async def update_module(self, module_id: str, patch: Mapping[str, Any]) -> str:
        """Apply ``name`` / ``description`` changes to a module.

        A name change is mirrored into the root index. The parent's child
        entry is left alone; use :meth:`TreeMutator.rename_module` to keep
        path resolution in step.

        Raises:
            NotFoundError: No module with ``module_id``
            ValidationError: Patch contains unsupported fields or a bad name
        """
        _check_patch(patch, MODULE_PATCH_FIELDS)
        module = await self.require_module(module_id)
        old_name = module.name

        if "name" in patch:
            module.name = patch["name"]
        if "description" in patch:
            module.description = patch["description"] or ""
        await self.save_module(module)

        if module.name != old_name:
            index = await self._load_index()
            for ref in index:
                if ref.id == module_id:
                    ref.name = module.name
                    await self._save_index(index)
                    break

        logger.info("store.module_updated", module_id=module_id, fields=sorted(patch))
        return module_id

    async def list_modules(self, filter: Mapping[str, Any] | None = None) -> list[EntityRef]:
        """List root-index entries in index order, optionally filtered by name."""
        return _name_filter(await self._load_index(), filter)

    async def all_modules(self) -> list[Module]:
        """Every module record in the backend, roots and children alike."""
        modules = []
        for key in await self._backend.keys(MODULES):
            module = await self.get_module(key)
            if module is not None:
                modules.append(module)
        return modules

    async def rebuild_root_index(self) -> list[EntityRef]:
        """Rewrite the root index as the set of modules with no parent.

        Existing entries keep their order; parentless modules missing from
        the index (for example detached ones) are appended by creation time.
        Entries for modules that now have a parent, or no longer exist, are
        dropped.
        """
        modules = {m.id: m for m in await self.all_modules()}
        current = await self._load_index()

        rebuilt: list[EntityRef] = []
        seen: set[str] = set()
        for ref in current:
            module = modules.get(ref.id)
            if module is not None and module.is_root and ref.id not in seen:
                rebuilt.append(module.ref())
                seen.add(ref.id)

        missing = sorted(
            (m for m in modules.values() if m.is_root and m.id not in seen),
            key=lambda m: m.created_at,
        )
        rebuilt.extend(m.ref() for m in missing)

        await self._save_index(rebuilt)
        logger.info(
            "store.root_index_rebuilt",
            roots=len(rebuilt),
            added=len(missing),
            dropped=len(current) - (len(rebuilt) - len(missing)),
        )
        return rebuilt

    async def remove_root_entry(self, module_id: str) -> bool:
        """Drop ``module_id`` from the root index, leaving every other entry untouched.

        Returns:
            True when an entry was removed
        """
        index = await self._load_index()
        kept = [ref for ref in index if ref.id != module_id]
        if len(kept) == len(index):
            return False
        await self._save_index(kept)
        logger.info("store.root_entry_removed", module_id=module_id)
        return True

    # ── Endpoints ────────────────────────────────────────────────

    async def create_endpoint(self, data: Mapping[str, Any]) -> str:
        """Create an endpoint and append it to its module's endpoint list.

        The endpoint record is written first. If the owning module cannot
        be loaded or saved the endpoint record is deleted again before the
        error propagates.

        Args:
            data: Mapping with ``module_id``, ``name`` and optional
                ``declaration`` / ``description``

        Raises:
            NotFoundError: The owning module does not exist
        """
        module_id = data.get("module_id")
        if not module_id:
            raise ValidationError("module_id is required", field="module_id")
        now = utc_now_iso()
        endpoint = Endpoint(
            id=new_entity_id(),
            module_id=module_id,
            name=validate_name(data.get("name")),
            declaration=data.get("declaration") or "",
            description=data.get("description") or "",
            created_at=now,
            updated_at=now,
        )
        await self._backend.put(ENDPOINTS, endpoint.id, endpoint.to_dict())

        try:
            module = await self.require_module(module_id)
            _warn_duplicate_endpoint(module, endpoint.id, endpoint.name)
            module.endpoints.append(endpoint.ref())
            await self.save_module(module)
        except Exception:
            await self._backend.delete(ENDPOINTS, endpoint.id)
            logger.warning("store.endpoint_rolled_back", endpoint_id=endpoint.id, module_id=module_id)
            raise

        logger.info("store.endpoint_created", endpoint_id=endpoint.id, module_id=module_id)
        return endpoint.id

    async def get_endpoint(self, endpoint_id: str) -> Endpoint | None:
        record = await self._backend.get(ENDPOINTS, endpoint_id)
        return Endpoint.from_dict(record) if record is not None else None

    async def update_endpoint(self, endpoint_id: str, patch: Mapping[str, Any]) -> str:
        """Apply ``name`` / ``declaration`` / ``description`` changes.

        A name change is mirrored into the owning module's endpoint list.

        Raises:
            NotFoundError: No endpoint with ``endpoint_id``
            ValidationError: Patch contains unsupported fields or a bad name
        """
        _check_patch(patch, ENDPOINT_PATCH_FIELDS)
        endpoint = await self.get_endpoint(endpoint_id)
        if endpoint is None:
            raise NotFoundError("endpoint", endpoint_id)
        old_name = endpoint.name

        for key in ENDPOINT_PATCH_FIELDS & set(patch):
            setattr(endpoint, key, patch[key] or "")
        endpoint.updated_at = utc_now_iso()
        await self._backend.put(ENDPOINTS, endpoint.id, endpoint.to_dict())

        if endpoint.name != old_name:
            module = await self.get_module(endpoint.module_id)
            if module is not None:
                for ref in module.endpoints:
                    if ref.id == endpoint_id:
                        ref.name = endpoint.name
                _warn_duplicate_endpoint(module, endpoint_id, endpoint.name)
                await self.save_module(module)

        logger.info("store.endpoint_updated", endpoint_id=endpoint_id, fields=sorted(patch))
        return endpoint_id

    async def list_endpoints(
        self,
        module_id: str,
        filter: Mapping[str, Any] | None = None,
    ) -> list[EntityRef]:
        """List a module's endpoints in stored order, optionally filtered by name.

        Raises:
            NotFoundError: No module with ``module_id``
        """
        module = await self.require_module(module_id)
        return _name_filter(module.endpoints, filter)
