"""Tests for apidoc.ops.samples: seeding the example catalog."""

import pytest

from apidoc.ops.samples import SAMPLE_MODULES, load_sample_data


class TestLoadSampleData:
    @pytest.mark.asyncio
    async def test_creates_modules_and_documents(self, ctx, catalog, sink):
        result = await load_sample_data(ctx)

        assert result.success, result.error
        assert [m.name for m in result.data.modules] == ["user", "product"]
        assert result.data.endpoints == 6
        assert [r.name for r in await catalog.list_modules()] == ["user", "product"]

        user = await catalog.get_by_path("user")
        assert [r.name for r in await catalog.list_endpoints(user.id)] == [
            "register",
            "login",
            "getUserInfo",
        ]
        assert "apis/product/updateProduct.md" in sink.documents
        assert result.data.documents[-1] == "index.md"

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, dry_ctx, catalog, sink):
        result = await load_sample_data(dry_ctx)

        assert result.data.dry_run is True
        assert [m.name for m in result.data.modules] == list(SAMPLE_MODULES)
        assert await catalog.list_modules() == []
        assert sink.documents == {}
