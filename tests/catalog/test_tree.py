"""Tests for apidoc.catalog.tree: creating, detaching, moving and renaming children."""

import pytest

from apidoc.catalog.backends import MODULES
from apidoc.core.errors import NotFoundError, PreconditionFailedError


class TestCreateSubModule:
    @pytest.mark.asyncio
    async def test_links_both_sides(self, store, mutator):
        root = await store.create_module({"name": "root"})
        mid = await mutator.create_sub_module(root, {"name": "mid", "description": "d"})
        leaf = await mutator.create_sub_module(mid, {"name": "leaf"})

        root_rec = await store.get_module(root)
        mid_rec = await store.get_module(mid)
        leaf_rec = await store.get_module(leaf)

        assert [(c.id, c.name) for c in root_rec.children] == [(mid, "mid")]
        assert [(c.id, c.name) for c in mid_rec.children] == [(leaf, "leaf")]
        assert mid_rec.parent_id == root
        assert leaf_rec.parent_id == mid
        assert mid_rec.description == "d"

    @pytest.mark.asyncio
    async def test_not_added_to_root_index(self, store, mutator):
        root = await store.create_module({"name": "root"})
        await mutator.create_sub_module(root, {"name": "child"})
        assert [r.id for r in await store.list_modules()] == [root]

    @pytest.mark.asyncio
    async def test_missing_parent(self, mutator):
        with pytest.raises(NotFoundError):
            await mutator.create_sub_module("missing", {"name": "x"})

    @pytest.mark.asyncio
    async def test_duplicate_sibling_allowed(self, store, mutator):
        root = await store.create_module({"name": "root"})
        await mutator.create_sub_module(root, {"name": "x"})
        await mutator.create_sub_module(root, {"name": "x"})
        assert [c.name for c in (await store.get_module(root)).children] == ["x", "x"]


class TestRemoveSubModule:
    @pytest.mark.asyncio
    async def test_detaches_but_keeps_record(self, store, mutator, resolver):
        root = await store.create_module({"name": "root"})
        child = await mutator.create_sub_module(root, {"name": "child"})

        await mutator.remove_sub_module(root, child)

        assert await resolver.get_by_path("root/child") is None
        record = await store.get_module(child)
        assert record is not None
        assert record.parent_id is None
        assert (await store.get_module(root)).children == []

    @pytest.mark.asyncio
    async def test_not_re_added_to_root_index(self, store, mutator):
        root = await store.create_module({"name": "root"})
        child = await mutator.create_sub_module(root, {"name": "child"})
        await mutator.remove_sub_module(root, child)
        assert [r.id for r in await store.list_modules()] == [root]

    @pytest.mark.asyncio
    async def test_missing_edge_is_precondition_failure(self, store, mutator):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        with pytest.raises(PreconditionFailedError):
            await mutator.remove_sub_module(a, b)

    @pytest.mark.asyncio
    async def test_missing_records(self, store, mutator):
        a = await store.create_module({"name": "a"})
        with pytest.raises(NotFoundError):
            await mutator.remove_sub_module("missing", a)
        with pytest.raises(NotFoundError):
            await mutator.remove_sub_module(a, "missing")


class TestMoveSubModule:
    @pytest.mark.asyncio
    async def test_moves_edge_and_path(self, store, mutator, resolver):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        child = await mutator.create_sub_module(a, {"name": "child"})
        grandchild = await mutator.create_sub_module(child, {"name": "gc"})

        await mutator.move_sub_module(child, b)

        assert (await store.get_module(a)).find_child(child) is None
        assert (await store.get_module(b)).find_child(child) == 0
        assert (await store.get_module(child)).parent_id == b
        assert await resolver.path_of(child) == "b/child"
        assert await resolver.path_of(grandchild) == "b/child/gc"
        assert await resolver.resolve_path("b/child/gc") == grandchild
        assert await resolver.resolve_path("a/child") is None

    @pytest.mark.asyncio
    async def test_move_parentless_module(self, store, mutator, resolver):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        await mutator.move_sub_module(b, a)
        assert await resolver.path_of(b) == "a/b"

    @pytest.mark.asyncio
    async def test_refuses_cycles(self, store, mutator):
        a = await store.create_module({"name": "a"})
        child = await mutator.create_sub_module(a, {"name": "child"})
        with pytest.raises(PreconditionFailedError):
            await mutator.move_sub_module(a, child)
        with pytest.raises(PreconditionFailedError):
            await mutator.move_sub_module(a, a)
        assert (await store.get_module(a)).parent_id is None

    @pytest.mark.asyncio
    async def test_missing_new_parent(self, store, mutator):
        a = await store.create_module({"name": "a"})
        with pytest.raises(NotFoundError):
            await mutator.move_sub_module(a, "missing")

    @pytest.mark.asyncio
    async def test_inherits_remove_precondition(self, store, mutator, backend):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        c = await store.create_module({"name": "c"})
        # child claims a parent that does not list it
        record = await backend.get(MODULES, c)
        record["parentModuleId"] = a
        await backend.put(MODULES, c, record)

        with pytest.raises(PreconditionFailedError):
            await mutator.move_sub_module(c, b)


class TestRenameModule:
    @pytest.mark.asyncio
    async def test_updates_parent_entry(self, store, mutator, resolver):
        root = await store.create_module({"name": "root"})
        child = await mutator.create_sub_module(root, {"name": "old"})

        await mutator.rename_module(child, "new")

        assert (await store.get_module(child)).name == "new"
        assert [c.name for c in (await store.get_module(root)).children] == ["new"]
        assert await resolver.resolve_path("root/new") == child
        assert await resolver.resolve_path("root/old") is None

    @pytest.mark.asyncio
    async def test_root_rename_updates_index(self, store, mutator, resolver):
        root = await store.create_module({"name": "old"})
        await mutator.rename_module(root, "new")
        assert await resolver.resolve_path("new") == root
