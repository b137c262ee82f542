"""
Mirrored document layout.

Module documents mirror the module tree; endpoint documents live in a
parallel tree keyed by the owning module's path::

    index.md
    modules/billing.md
    modules/billing/invoices.md
    apis/billing/invoices/create.md

All links are computed relative to the directory of the document that
contains them, so a link is correct at any tree depth.
"""

from __future__ import annotations

import posixpath

INDEX_DOCUMENT = "index.md"
MODULES_DIR = "modules"
APIS_DIR = "apis"


def module_document(module_path: str) -> str:
    """Document path for the module at ``module_path`` (``a/b`` -> ``modules/a/b.md``)."""
    return posixpath.join(MODULES_DIR, f"{module_path}.md")


def endpoint_document(module_path: str, endpoint_name: str) -> str:
    """Document path for an endpoint of the module at ``module_path``."""
    return posixpath.join(APIS_DIR, module_path, f"{endpoint_name}.md")


def relative_link(source: str, target: str) -> str:
    """Link from document ``source`` to document ``target``, relative to source's directory."""
    start = posixpath.dirname(source) or "."
    return posixpath.relpath(target, start=start)


def child_path(module_path: str, child_name: str) -> str:
    return posixpath.join(module_path, child_name)
