"""Tests for apidoc.catalog.store: EntityStore records, root index, filters."""

import asyncio

import pytest
from structlog.testing import capture_logs

from apidoc.catalog.backends import ENDPOINTS, INDEX, MODULES
from apidoc.catalog.store import ROOT_INDEX_KEY
from apidoc.core.errors import NotFoundError, ValidationError
from apidoc.core.logging import configure_logging


class TestModules:
    @pytest.mark.asyncio
    async def test_create_then_get(self, store):
        module_id = await store.create_module({"name": "billing", "description": "Money"})
        module = await store.get_module(module_id)

        assert module is not None
        assert module.id == module_id
        assert module.name == "billing"
        assert module.description == "Money"
        assert module.endpoints == []
        assert module.children == []
        assert module.parent_id is None
        assert module.created_at and module.updated_at

    @pytest.mark.asyncio
    async def test_create_records_root_index(self, store, backend):
        first = await store.create_module({"name": "billing"})
        second = await store.create_module({"name": "users"})

        index = await backend.get(INDEX, ROOT_INDEX_KEY)
        assert index == {
            "modules": [
                {"moduleId": first, "moduleName": "billing"},
                {"moduleId": second, "moduleName": "users"},
            ]
        }

    @pytest.mark.asyncio
    async def test_serialized_field_names(self, store, backend):
        module_id = await store.create_module({"name": "billing"})
        record = await backend.get(MODULES, module_id)
        assert set(record) == {
            "moduleId",
            "moduleName",
            "description",
            "apis",
            "subModules",
            "parentModuleId",
            "createdAt",
            "updatedAt",
        }

    @pytest.mark.asyncio
    async def test_get_missing_is_absent(self, store):
        assert await store.get_module("missing") is None

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update_module("missing", {"description": "x"})

    @pytest.mark.asyncio
    async def test_update_refreshes_timestamp_and_index_name(self, store):
        module_id = await store.create_module({"name": "billing"})
        before = await store.get_module(module_id)
        await asyncio.sleep(0.001)

        await store.update_module(module_id, {"name": "payments", "description": "new"})
        after = await store.get_module(module_id)

        assert after.name == "payments"
        assert after.description == "new"
        assert after.updated_at > before.updated_at
        assert after.created_at == before.created_at
        assert [r.name for r in await store.list_modules()] == ["payments"]

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_fields(self, store):
        module_id = await store.create_module({"name": "billing"})
        with pytest.raises(ValidationError) as exc_info:
            await store.update_module(module_id, {"parent_id": "x"})
        assert exc_info.value.field == "parent_id"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "a/b", None])
    async def test_invalid_names(self, store, name):
        with pytest.raises(ValidationError):
            await store.create_module({"name": name})

    @pytest.mark.asyncio
    async def test_list_filter_case_insensitive_substring(self, store):
        await store.create_module({"name": "Billing"})
        await store.create_module({"name": "users"})
        await store.create_module({"name": "billing-admin"})

        names = [r.name for r in await store.list_modules({"name": "BILL"})]
        assert names == ["Billing", "billing-admin"]
        assert len(await store.list_modules({})) == 3


class TestEndpoints:
    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, store):
        module_id = await store.create_module({"name": "m"})
        ids = [
            await store.create_endpoint({"module_id": module_id, "name": name})
            for name in ("a", "b", "c")
        ]
        refs = await store.list_endpoints(module_id, {})
        assert [r.id for r in refs] == ids
        assert [r.name for r in refs] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_create_and_get(self, store):
        module_id = await store.create_module({"name": "m"})
        endpoint_id = await store.create_endpoint(
            {
                "module_id": module_id,
                "name": "create",
                "declaration": "def create(x)",
                "description": "Creates",
            }
        )
        endpoint = await store.get_endpoint(endpoint_id)
        assert endpoint.module_id == module_id
        assert endpoint.declaration == "def create(x)"
        assert endpoint.description == "Creates"

    @pytest.mark.asyncio
    async def test_create_under_missing_module_rolls_back(self, store, backend):
        with pytest.raises(NotFoundError):
            await store.create_endpoint({"module_id": "missing", "name": "x"})
        assert await backend.keys(ENDPOINTS) == []

    @pytest.mark.asyncio
    async def test_create_requires_module_id(self, store):
        with pytest.raises(ValidationError):
            await store.create_endpoint({"name": "x"})

    @pytest.mark.asyncio
    async def test_ids_unique_across_kinds(self, store):
        module_id = await store.create_module({"name": "m"})
        endpoint_id = await store.create_endpoint({"module_id": module_id, "name": "e"})
        assert module_id != endpoint_id

    @pytest.mark.asyncio
    async def test_update_renames_module_ref(self, store):
        module_id = await store.create_module({"name": "m"})
        endpoint_id = await store.create_endpoint({"module_id": module_id, "name": "old"})

        await store.update_endpoint(endpoint_id, {"name": "new", "declaration": "f()"})

        endpoint = await store.get_endpoint(endpoint_id)
        assert endpoint.name == "new"
        assert endpoint.declaration == "f()"
        assert [r.name for r in await store.list_endpoints(module_id)] == ["new"]

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update_endpoint("missing", {"name": "x"})

    @pytest.mark.asyncio
    async def test_get_missing_is_absent(self, store):
        assert await store.get_endpoint("missing") is None

    @pytest.mark.asyncio
    async def test_list_for_missing_module_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.list_endpoints("missing")

    @pytest.mark.asyncio
    async def test_list_filter(self, store):
        module_id = await store.create_module({"name": "m"})
        for name in ("getUser", "createUser", "deleteOrder"):
            await store.create_endpoint({"module_id": module_id, "name": name})
        names = [r.name for r in await store.list_endpoints(module_id, {"name": "user"})]
        assert names == ["getUser", "createUser"]


class TestRootIndexRebuild:
    @pytest.mark.asyncio
    async def test_adds_detached_and_drops_moved(self, store, mutator):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        child = await mutator.create_sub_module(a, {"name": "child"})

        await mutator.move_sub_module(b, a)
        await mutator.remove_sub_module(a, child)

        refs = await store.rebuild_root_index()
        assert [r.id for r in refs] == [a, child]
        assert [r.id for r in await store.list_modules()] == [a, child]

    @pytest.mark.asyncio
    async def test_idempotent(self, store):
        a = await store.create_module({"name": "a"})
        await store.rebuild_root_index()
        assert [r.id for r in await store.rebuild_root_index()] == [a]


class TestRemoveRootEntry:
    @pytest.mark.asyncio
    async def test_removes_only_that_entry(self, store, mutator):
        a = await store.create_module({"name": "a"})
        b = await store.create_module({"name": "b"})
        child = await mutator.create_sub_module(a, {"name": "child"})
        await mutator.remove_sub_module(a, child)

        assert await store.remove_root_entry(b) is True
        assert [r.id for r in await store.list_modules()] == [a]

    @pytest.mark.asyncio
    async def test_absent_entry(self, store):
        a = await store.create_module({"name": "a"})
        assert await store.remove_root_entry("missing") is False
        assert [r.id for r in await store.list_modules()] == [a]


class TestDuplicateEndpointNames:
    @pytest.mark.asyncio
    async def test_create_logs_warning(self, store):
        configure_logging(level="DEBUG", json_format=True, force=True)
        module_id = await store.create_module({"name": "m"})
        await store.create_endpoint({"module_id": module_id, "name": "get"})

        with capture_logs() as logs:
            second = await store.create_endpoint({"module_id": module_id, "name": "get"})

        warnings = [e for e in logs if e["event"] == "store.duplicate_endpoint_name"]
        assert len(warnings) == 1
        assert warnings[0]["endpoint_id"] == second
        assert warnings[0]["log_level"] == "warning"
        assert [r.name for r in await store.list_endpoints(module_id)] == ["get", "get"]

    @pytest.mark.asyncio
    async def test_distinct_names_do_not_warn(self, store):
        configure_logging(level="DEBUG", json_format=True, force=True)
        module_id = await store.create_module({"name": "m"})
        await store.create_endpoint({"module_id": module_id, "name": "get"})

        with capture_logs() as logs:
            await store.create_endpoint({"module_id": module_id, "name": "put"})

        assert not [e for e in logs if e["event"] == "store.duplicate_endpoint_name"]
