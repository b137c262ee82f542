"""Tests for apidoc.docs.layout: mirrored document paths and relative links."""

import pytest

from apidoc.docs import layout


class TestDocumentPaths:
    def test_module_document(self):
        assert layout.module_document("billing") == "modules/billing.md"
        assert layout.module_document("billing/invoices") == "modules/billing/invoices.md"

    def test_endpoint_document(self):
        assert layout.endpoint_document("billing", "pay") == "apis/billing/pay.md"
        assert layout.endpoint_document("a/b/c", "e") == "apis/a/b/c/e.md"

    def test_child_path(self):
        assert layout.child_path("a/b", "c") == "a/b/c"


class TestRelativeLink:
    @pytest.mark.parametrize(
        ("source", "target", "expected"),
        [
            ("index.md", "modules/a.md", "modules/a.md"),
            ("modules/a.md", "modules/a/b.md", "a/b.md"),
            ("modules/a.md", "apis/a/e.md", "../apis/a/e.md"),
            ("modules/a/b.md", "apis/a/b/e.md", "../../apis/a/b/e.md"),
            ("modules/a/b.md", "modules/a.md", "../a.md"),
            ("apis/a/b/e.md", "modules/a/b.md", "../../../modules/a/b.md"),
            ("modules/a/b/c.md", "modules/a/b/c/d.md", "c/d.md"),
        ],
    )
    def test_links_account_for_depth(self, source, target, expected):
        assert layout.relative_link(source, target) == expected
