"""
Record backends for the entity store.

- memory: process-local, for tests and dry runs
- file: one JSON file per record (default)
- sqlite: single database file
"""

from __future__ import annotations

from apidoc.catalog.backends.base import ENDPOINTS, INDEX, MODULES, Record, RecordBackend
from apidoc.catalog.backends.file import FileRecordBackend
from apidoc.catalog.backends.memory import MemoryRecordBackend
from apidoc.catalog.backends.sqlite import SqliteRecordBackend
from apidoc.core.settings import ApiDocSettings, StorageBackend


def create_backend(settings: ApiDocSettings) -> RecordBackend:
    """Build the record backend selected by ``settings.storage_backend``."""
    backend = settings.storage_backend
    if backend == StorageBackend.FILE:
        return FileRecordBackend(settings.data_dir)
    if backend == StorageBackend.SQLITE:
        return SqliteRecordBackend(settings.resolved_sqlite_path)
    return MemoryRecordBackend()


__all__ = [
    "ENDPOINTS",
    "INDEX",
    "MODULES",
    "FileRecordBackend",
    "MemoryRecordBackend",
    "Record",
    "RecordBackend",
    "SqliteRecordBackend",
    "create_backend",
]
