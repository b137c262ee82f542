"""Document sinks: where rendered documents are written."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

from apidoc.core.errors import StorageError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class DocumentSink(Protocol):
    """Destination for rendered documents, addressed by layout path."""

    async def write(self, relative_path: str, text: str) -> None:
        ...


class DirectorySink:
    """Writes documents under a base directory, creating parents as needed."""

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _resolve_path(self, relative_path: str) -> Path:
        full_path = self.base_path / Path(relative_path).as_posix().lstrip("/")
        try:
            full_path.resolve().relative_to(self.base_path)
        except ValueError:
            raise StorageError(f"Invalid document path: {relative_path} (outside docs directory)")
        return full_path

    def _write(self, full_path: Path, text: str) -> None:
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to write document {full_path}", cause=exc) from exc

    async def write(self, relative_path: str, text: str) -> None:
        full_path = self._resolve_path(relative_path)
        await asyncio.to_thread(self._write, full_path, text)
        logger.debug("docs.written", path=relative_path, size=len(text))


class MemorySink:
    """Collects documents in a dict; used by tests and dry runs."""

    def __init__(self) -> None:
        self.documents: dict[str, str] = {}

    async def write(self, relative_path: str, text: str) -> None:
        self.documents[relative_path] = text
