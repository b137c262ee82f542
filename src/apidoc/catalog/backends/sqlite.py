"""SQLite record backend.

Stores every record as a JSON body in a single table keyed by
``(namespace, key)``. Insertion order is preserved through ``rowid``.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
from pathlib import Path
from typing import Any

from apidoc.catalog.backends.base import Record, RecordBackend
from apidoc.core.errors import StorageError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS apidoc_records (
    namespace TEXT NOT NULL,
    key       TEXT NOT NULL,
    body      TEXT NOT NULL,
    PRIMARY KEY (namespace, key)
)
"""


class SqliteRecordBackend(RecordBackend):
    """Record backend on a single SQLite database file.

    The connection is shared across worker threads (``check_same_thread``
    disabled) and serialized with a lock; each call commits on its own.
    """

    name = "sqlite"

    def __init__(self, path: str | Path = ":memory:") -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._lock = threading.Lock()
        self._run(_SCHEMA)
        logger.debug("sqlite_backend.initialized", path=self.path)

    def _run(self, sql: str, params: tuple = (), *, fetch: bool = False) -> Any:
        """Execute one statement and commit.

        Returns:
            All result rows when ``fetch`` is set, otherwise the rowcount
        """
        with self._lock:
            try:
                cursor = self._conn.execute(sql, params)
                rows = cursor.fetchall() if fetch else None
                self._conn.commit()
            except sqlite3.Error as exc:
                self._conn.rollback()
                raise StorageError(f"SQLite operation failed: {exc}", cause=exc) from exc
            return rows if fetch else cursor.rowcount

    async def get(self, namespace: str, key: str) -> Record | None:
        self._check_namespace(namespace)
        rows = await asyncio.to_thread(
            self._run,
            "SELECT body FROM apidoc_records WHERE namespace = ? AND key = ?",
            (namespace, key),
            fetch=True,
        )
        if not rows:
            return None
        try:
            return json.loads(rows[0][0])
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt record: {namespace}/{key}", cause=exc) from exc

    async def put(self, namespace: str, key: str, record: Record) -> None:
        self._check_namespace(namespace)
        body = json.dumps(record, ensure_ascii=False)
        await asyncio.to_thread(
            self._run,
            """
            INSERT INTO apidoc_records (namespace, key, body) VALUES (?, ?, ?)
            ON CONFLICT (namespace, key) DO UPDATE SET body = excluded.body
            """,
            (namespace, key, body),
        )

    async def delete(self, namespace: str, key: str) -> bool:
        self._check_namespace(namespace)
        rowcount = await asyncio.to_thread(
            self._run,
            "DELETE FROM apidoc_records WHERE namespace = ? AND key = ?",
            (namespace, key),
        )
        return rowcount > 0

    async def keys(self, namespace: str) -> list[str]:
        self._check_namespace(namespace)
        rows = await asyncio.to_thread(
            self._run,
            "SELECT key FROM apidoc_records WHERE namespace = ? ORDER BY rowid",
            (namespace,),
            fetch=True,
        )
        return [row[0] for row in rows]

    async def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __repr__(self) -> str:
        return f"SqliteRecordBackend({self.path!r})"
