"""Tree mutations over the entity store.

The parent pointer on a child and the ``{id, name}`` entry in its parent's
child list are two independently stored fields. This module is the only
writer of both; nothing derives one from the other.

Writes are ordered and not atomic:

- create: child record first, then parent's child list. A crash in between
  leaves a module reachable by id but not by path.
- move: detach from the old parent, then attach to the new one. A crash in
  between leaves the child parentless.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apidoc.catalog.models import EntityRef, Module, validate_name
from apidoc.catalog.store import EntityStore
from apidoc.core.errors import PreconditionFailedError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)


class TreeMutator:
    """Creates, detaches, relocates and renames child modules."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    async def create_sub_module(self, parent_id: str, data: Mapping[str, Any]) -> str:
        """Create a module under ``parent_id``. It is not added to the root index.

        Raises:
            NotFoundError: Parent does not exist
        """
        parent = await self._store.require_module(parent_id)
        child = self._store.new_module(data, parent_id=parent_id)

        await self._store.save_module(child)
        await self._attach(parent, child)

        logger.info("tree.sub_module_created", module_id=child.id, parent_id=parent_id, name=child.name)
        return child.id

    async def remove_sub_module(self, parent_id: str, child_id: str) -> None:
        """Remove the parent/child edge and clear the child's parent pointer.

        Raises:
            NotFoundError: Parent or child does not exist
            PreconditionFailedError: Parent has no child entry for ``child_id``
        """
        parent = await self._store.require_module(parent_id)
        child = await self._store.require_module(child_id)

        position = parent.find_child(child_id)
        if position is None:
            raise PreconditionFailedError(
                f"Module {child_id} is not a child of {parent_id}"
            ).with_context(entity_id=child_id, parent_id=parent_id)

        del parent.children[position]
        await self._store.save_module(parent)

        child.parent_id = None
        await self._store.save_module(child)

        logger.info("tree.sub_module_removed", module_id=child_id, parent_id=parent_id)

    async def move_sub_module(self, child_id: str, new_parent_id: str) -> None:
        """Detach ``child_id`` from its current parent and attach it under ``new_parent_id``.

        Raises:
            NotFoundError: Child or new parent does not exist
            PreconditionFailedError: The move would create a cycle, or the
                current parent has no entry for the child
        """
        child = await self._store.require_module(child_id)
        new_parent = await self._store.require_module(new_parent_id)
        await self._check_not_descendant(child_id, new_parent)

        old_parent_id = child.parent_id
        if old_parent_id is not None:
            await self.remove_sub_module(old_parent_id, child_id)
            child = await self._store.require_module(child_id)
            new_parent = await self._store.require_module(new_parent_id)

        child.parent_id = new_parent_id
        await self._store.save_module(child)
        await self._attach(new_parent, child)

        logger.info(
            "tree.sub_module_moved",
            module_id=child_id,
            old_parent_id=old_parent_id,
            new_parent_id=new_parent_id,
        )

    async def rename_module(self, module_id: str, name: str) -> None:
        """Rename a module and the matching entry in its parent's child list.

        Raises:
            NotFoundError: Module does not exist
            ValidationError: Name is empty or contains ``/``
        """
        validate_name(name)
        await self._store.update_module(module_id, {"name": name})
        module = await self._store.require_module(module_id)
        if module.parent_id is None:
            return

        parent = await self._store.get_module(module.parent_id)
        if parent is None:
            return
        position = parent.find_child(module_id)
        if position is not None:
            parent.children[position].name = name
            await self._store.save_module(parent)
            self._warn_duplicate_sibling(parent, module_id, name)

    # ── Helpers ──────────────────────────────────────────────────

    async def _attach(self, parent: Module, child: Module) -> None:
        self._warn_duplicate_sibling(parent, child.id, child.name)
        parent.children.append(EntityRef(id=child.id, name=child.name))
        await self._store.save_module(parent)

    async def _check_not_descendant(self, child_id: str, new_parent: Module) -> None:
        """Refuse a move that would put a module under itself or its own subtree."""
        seen: set[str] = set()
        current: Module | None = new_parent
        while current is not None and current.id not in seen:
            if current.id == child_id:
                raise PreconditionFailedError(
                    f"Cannot move module {child_id} under its own subtree"
                ).with_context(entity_id=child_id, parent_id=new_parent.id)
            seen.add(current.id)
            if current.parent_id is None:
                return
            current = await self._store.get_module(current.parent_id)

    @staticmethod
    def _warn_duplicate_sibling(parent: Module, module_id: str, name: str) -> None:
        if any(c.name == name and c.id != module_id for c in parent.children):
            logger.warning(
                "tree.duplicate_sibling_name",
                parent_id=parent.id,
                module_id=module_id,
                name=name,
            )
