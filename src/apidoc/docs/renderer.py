"""
Document renderers.

A renderer turns one catalog record plus its resolved path into document
text. The sync engine is the only consumer.

Manifesto:
    Renderers know nothing about storage. They receive records and paths,
    compute links through :mod:`apidoc.docs.layout`, and hand the data to
    a Jinja2 template. Templates handle formatting; renderers handle link
    assembly.

Architecture:
    ::

        Module + path ──► MarkdownRenderer.render_module()
                               │  layout.relative_link(...)
                               ▼
                         module.md.j2 ──► markdown text

Tags:
    renderer, template, jinja2, markdown
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from apidoc.catalog.models import EntityRef, Endpoint, Module
from apidoc.docs import layout


@runtime_checkable
class DocumentRenderer(Protocol):
    """Turns records into document text."""

    async def render_module(self, module: Module, path: str) -> str:
        """Render a module document; ``path`` is the module's resolved path."""
        ...

    async def render_endpoint(self, endpoint: Endpoint, module_path: str) -> str:
        """Render an endpoint document; ``module_path`` is the owning module's path."""
        ...

    async def render_index(self, roots: list[EntityRef]) -> str:
        """Render the top-level index of root modules."""
        ...


class MarkdownRenderer:
    """Jinja2-backed markdown renderer.

    Args:
        template_dir: Directory containing ``module.md.j2``,
            ``endpoint.md.j2`` and ``index.md.j2`` (defaults to the
            templates shipped with the package)
        title: Heading used on the index page
    """

    module_template = "module.md.j2"
    endpoint_template = "endpoint.md.j2"
    index_template = "index.md.j2"

    def __init__(self, template_dir: Path | None = None, title: str = "API Documentation") -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self.template_dir = Path(template_dir)
        self.title = title
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _render(self, template_name: str, **context: Any) -> str:
        return self.env.get_template(template_name).render(**context)

    async def render_module(self, module: Module, path: str) -> str:
        source = layout.module_document(path)

        parent = None
        parent_path = posixpath.dirname(path)
        if parent_path:
            parent = {
                "name": posixpath.basename(parent_path),
                "link": layout.relative_link(source, layout.module_document(parent_path)),
            }

        endpoints = [
            {"name": ref.name, "link": layout.relative_link(source, layout.endpoint_document(path, ref.name))}
            for ref in module.endpoints
        ]
        children = [
            {
                "name": ref.name,
                "link": layout.relative_link(
                    source, layout.module_document(layout.child_path(path, ref.name))
                ),
            }
            for ref in module.children
        ]
        return self._render(
            self.module_template,
            module=module,
            path=path,
            parent=parent,
            endpoints=endpoints,
            children=children,
        )

    async def render_endpoint(self, endpoint: Endpoint, module_path: str) -> str:
        source = layout.endpoint_document(module_path, endpoint.name)
        return self._render(
            self.endpoint_template,
            endpoint=endpoint,
            module_name=posixpath.basename(module_path),
            module_path=module_path,
            module_link=layout.relative_link(source, layout.module_document(module_path)),
        )

    async def render_index(self, roots: list[EntityRef]) -> str:
        modules = [
            {
                "name": ref.name,
                "link": layout.relative_link(layout.INDEX_DOCUMENT, layout.module_document(ref.name)),
            }
            for ref in roots
        ]
        return self._render(self.index_template, title=self.title, modules=modules)
