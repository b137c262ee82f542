"""JSON file record backend.

Directory layout (compatible with existing api-doc data directories)::

    <data_dir>/
      modules.json          root index
      modules/<id>.json     module records
      apis/<id>.json        endpoint records
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path

from apidoc.catalog.backends.base import ENDPOINTS, INDEX, MODULES, Record, RecordBackend
from apidoc.core.errors import StorageError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)

_NAMESPACE_DIRS = {MODULES: "modules", ENDPOINTS: "apis"}
_INDEX_FILES = {"roots": "modules.json"}


class FileRecordBackend(RecordBackend):
    """
    Local filesystem record backend.

    One JSON file per record. Writes go to a temporary file in the same
    directory and are moved into place with ``os.replace`` so a crash
    never leaves a half-written record. Blocking I/O runs in a worker
    thread to keep the event loop responsive.
    """

    name = "file"

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir).resolve()
        for sub in _NAMESPACE_DIRS.values():
            (self.data_dir / sub).mkdir(parents=True, exist_ok=True)
        logger.debug("file_backend.initialized", data_dir=str(self.data_dir))

    def _resolve_path(self, namespace: str, key: str) -> Path:
        """Resolve a record key to its file, refusing keys that escape the data dir."""
        self._check_namespace(namespace)
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise StorageError(f"Invalid record key: {key!r}").with_context(namespace=namespace)
        if namespace == INDEX:
            return self.data_dir / _INDEX_FILES.get(key, f"{key}.json")
        return self.data_dir / _NAMESPACE_DIRS[namespace] / f"{key}.json"

    # -- sync helpers (run in a thread) ------------------------------------

    def _read(self, path: Path) -> Record | None:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Failed to read {path.name}", cause=exc) from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt record file: {path.name}", cause=exc) from exc

    def _write(self, path: Path, record: Record) -> None:
        payload = json.dumps(record, indent=2, ensure_ascii=False)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {path.name}", cause=exc) from exc

    def _unlink(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Failed to delete {path.name}", cause=exc) from exc
        return True

    def _list(self, namespace: str) -> list[str]:
        if namespace == INDEX:
            names = {v: k for k, v in _INDEX_FILES.items()}
            return [
                names.get(p.name, p.stem)
                for p in sorted(self.data_dir.glob("*.json"))
            ]
        directory = self.data_dir / _NAMESPACE_DIRS[namespace]
        files = sorted(directory.glob("*.json"), key=lambda p: p.stat().st_mtime_ns)
        return [p.stem for p in files]

    # -- RecordBackend -----------------------------------------------------

    async def get(self, namespace: str, key: str) -> Record | None:
        path = self._resolve_path(namespace, key)
        return await asyncio.to_thread(self._read, path)

    async def put(self, namespace: str, key: str, record: Record) -> None:
        path = self._resolve_path(namespace, key)
        await asyncio.to_thread(self._write, path, record)
        logger.debug("file_backend.written", namespace=namespace, key=key)

    async def delete(self, namespace: str, key: str) -> bool:
        path = self._resolve_path(namespace, key)
        deleted = await asyncio.to_thread(self._unlink, path)
        if deleted:
            logger.debug("file_backend.deleted", namespace=namespace, key=key)
        return deleted

    async def keys(self, namespace: str) -> list[str]:
        self._check_namespace(namespace)
        return await asyncio.to_thread(self._list, namespace)
