"""In-memory record backend for tests and dry runs."""

import copy

from apidoc.catalog.backends.base import NAMESPACES, Record, RecordBackend


class MemoryRecordBackend(RecordBackend):
    """
    Process-local record backend.

    Records are deep-copied on the way in and out so callers can never
    mutate persisted state through a returned dict, matching the
    behavior of the durable backends.
    """

    name = "memory"

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Record]] = {ns: {} for ns in NAMESPACES}

    async def get(self, namespace: str, key: str) -> Record | None:
        self._check_namespace(namespace)
        record = self._data[namespace].get(key)
        return copy.deepcopy(record) if record is not None else None

    async def put(self, namespace: str, key: str, record: Record) -> None:
        self._check_namespace(namespace)
        self._data[namespace][key] = copy.deepcopy(record)

    async def delete(self, namespace: str, key: str) -> bool:
        self._check_namespace(namespace)
        return self._data[namespace].pop(key, None) is not None

    async def keys(self, namespace: str) -> list[str]:
        self._check_namespace(namespace)
        return list(self._data[namespace])
