"""Base record backend interface."""

from abc import ABC, abstractmethod
from typing import Any

MODULES = "modules"
ENDPOINTS = "endpoints"
INDEX = "index"

NAMESPACES = (MODULES, ENDPOINTS, INDEX)

Record = dict[str, Any]


class RecordBackend(ABC):
    """Abstract base class for keyed record persistence.

    Records are opaque JSON-compatible dicts addressed by
    ``(namespace, key)``. Backends provide no locking and no
    multi-record transactions; each call is one independent write.
    """

    name: str = ""

    @abstractmethod
    async def get(self, namespace: str, key: str) -> Record | None:
        """
        Read one record.

        Returns:
            The stored record, or None if no record exists under ``key``
        """
        ...

    @abstractmethod
    async def put(self, namespace: str, key: str, record: Record) -> None:
        """
        Create or replace one record.

        Args:
            namespace: One of MODULES, ENDPOINTS, INDEX
            key: Record key (entity id, or index name)
            record: JSON-compatible dict
        """
        ...

    @abstractmethod
    async def delete(self, namespace: str, key: str) -> bool:
        """
        Delete one record.

        Returns:
            True if deleted, False if it didn't exist
        """
        ...

    @abstractmethod
    async def keys(self, namespace: str) -> list[str]:
        """List every key in a namespace."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None

    @staticmethod
    def _check_namespace(namespace: str) -> None:
        if namespace not in NAMESPACES:
            raise ValueError(f"Unknown namespace: {namespace}")
