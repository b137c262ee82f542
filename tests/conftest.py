"""
Shared pytest fixtures for apidoc tests.

This module provides:
- An in-memory entity store with its resolver and tree mutator
- A sync engine rendering into a MemorySink
- Settings isolation (no env leakage between tests)

Async tests use ``@pytest.mark.asyncio``; fixtures here are synchronous so
they work in strict mode.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from apidoc.catalog.backends import MemoryRecordBackend
from apidoc.catalog.container import Catalog
from apidoc.catalog.paths import PathResolver
from apidoc.catalog.store import EntityStore
from apidoc.catalog.tree import TreeMutator
from apidoc.core.settings import ApiDocSettings, StorageBackend, clear_settings_cache
from apidoc.docs.renderer import MarkdownRenderer
from apidoc.docs.sink import MemorySink
from apidoc.sync.engine import SyncEngine


# =============================================================================
# Settings isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Drop APIDOC_* variables and the settings cache around every test."""
    for key in list(os.environ):
        if key.startswith("APIDOC_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Catalog components
# =============================================================================


@pytest.fixture
def backend() -> MemoryRecordBackend:
    return MemoryRecordBackend()


@pytest.fixture
def store(backend: MemoryRecordBackend) -> EntityStore:
    return EntityStore(backend)


@pytest.fixture
def resolver(store: EntityStore) -> PathResolver:
    return PathResolver(store)


@pytest.fixture
def mutator(store: EntityStore) -> TreeMutator:
    return TreeMutator(store)


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def engine(store: EntityStore, resolver: PathResolver, sink: MemorySink) -> SyncEngine:
    return SyncEngine(store, resolver, MarkdownRenderer(), sink)


@pytest.fixture
def settings(tmp_path: Path) -> ApiDocSettings:
    return ApiDocSettings(
        data_dir=tmp_path / "data",
        docs_dir=tmp_path / "docs",
        storage_backend=StorageBackend.MEMORY,
        log_level="ERROR",
    )


@pytest.fixture
def catalog(settings: ApiDocSettings, sink: MemorySink) -> Catalog:
    return Catalog(settings, backend=MemoryRecordBackend(), sink=sink)
