"""Module/endpoint catalog: records, tree overlay, path resolution.

The lazy :class:`~apidoc.catalog.container.Catalog` container lives in
``apidoc.catalog.container`` and is not re-exported here, since it pulls in
the docs and sync packages.
"""

from apidoc.catalog.models import Endpoint, EntityRef, Module
from apidoc.catalog.paths import PathResolver
from apidoc.catalog.store import EntityStore
from apidoc.catalog.tree import TreeMutator

__all__ = [
    "Endpoint",
    "EntityRef",
    "EntityStore",
    "Module",
    "PathResolver",
    "TreeMutator",
]
