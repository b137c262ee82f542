"""Tests for apidoc.docs.renderer: markdown content and link relativity."""

import pytest

from apidoc.catalog.models import Endpoint, EntityRef, Module
from apidoc.docs.renderer import DocumentRenderer, MarkdownRenderer


@pytest.fixture
def renderer():
    return MarkdownRenderer()


def _module(name="b", parent_id="p", endpoints=(), children=()):
    return Module(
        id="m1",
        name=name,
        description="Handles billing.",
        endpoints=[EntityRef(id=f"e-{n}", name=n) for n in endpoints],
        children=[EntityRef(id=f"c-{n}", name=n) for n in children],
        parent_id=parent_id,
    )


class TestMarkdownRenderer:
    def test_satisfies_protocol(self, renderer):
        assert isinstance(renderer, DocumentRenderer)

    @pytest.mark.asyncio
    async def test_module_links_at_depth(self, renderer):
        module = _module(endpoints=["pay", "refund"], children=["inv"])

        text = await renderer.render_module(module, "a/b")

        assert text.startswith("# b\n")
        assert "Handles billing." in text
        assert "- [pay](../../apis/a/b/pay.md)" in text
        assert "- [refund](../../apis/a/b/refund.md)" in text
        assert "- [inv](b/inv.md)" in text
        assert "**Parent module:** [a](../a.md)" in text

    @pytest.mark.asyncio
    async def test_root_module_has_no_parent_link(self, renderer):
        text = await renderer.render_module(_module(name="a", parent_id=None), "a")
        assert "Parent module" not in text
        assert "_No endpoints._" in text
        assert "_No submodules._" in text

    @pytest.mark.asyncio
    async def test_root_module_links(self, renderer):
        module = _module(name="a", parent_id=None, endpoints=["e"], children=["b"])
        text = await renderer.render_module(module, "a")
        assert "- [e](../apis/a/e.md)" in text
        assert "- [b](a/b.md)" in text

    @pytest.mark.asyncio
    async def test_endpoint(self, renderer):
        endpoint = Endpoint(
            id="e1",
            module_id="m1",
            name="pay",
            declaration="async def pay(invoice_id: str) -> Receipt",
            description="Settles an invoice.",
        )

        text = await renderer.render_endpoint(endpoint, "a/b")

        assert text.startswith("# pay\n")
        assert "**Module:** [b](../../../modules/a/b.md)" in text
        assert "```\nasync def pay(invoice_id: str) -> Receipt\n```" in text
        assert "Settles an invoice." in text

    @pytest.mark.asyncio
    async def test_index(self, renderer):
        text = await renderer.render_index([EntityRef("1", "billing"), EntityRef("2", "users")])
        assert text.startswith("# API Documentation\n")
        assert "- [billing](modules/billing.md)\n- [users](modules/users.md)" in text

    @pytest.mark.asyncio
    async def test_custom_template_dir(self, tmp_path):
        (tmp_path / "index.md.j2").write_text("{{ title }}: {{ modules | length }}\n")
        renderer = MarkdownRenderer(template_dir=tmp_path, title="Docs")
        assert await renderer.render_index([EntityRef("1", "x")]) == "Docs: 1\n"
