"""In-flight registry: per-entity reentrancy guard for document sync.

WHY
───
Two overlapping regenerations of the same entity would race on the same
output documents. The registry records which entity ids are currently
being synced; a second claim on a held id fails immediately with
:class:`~apidoc.core.errors.BusyError` instead of waiting.

ARCHITECTURE
────────────
::

    InFlightRegistry()
      ├── .acquire(entity_id)   ─ try-claim, False if already held
      ├── .release(entity_id)   ─ drop the claim
      ├── .hold(entity_id)      ─ context manager: claim or BusyError,
      │                           release in ``finally``
      ├── .is_in_flight(id)     ─ check without claiming
      └── .active()             ─ snapshot of held ids

A marker lives only for the duration of one call. There is no expiry: a
call stuck on I/O keeps its marker until it returns or is cancelled.

Example::

    registry = InFlightRegistry()
    with registry.hold(module_id):
        await regenerate(module_id)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from apidoc.core.errors import BusyError
from apidoc.core.logging import get_logger

logger = get_logger(__name__)


class InFlightRegistry:
    """Set of entity ids with an active sync, guarded by a lock.

    Owned by one :class:`~apidoc.sync.engine.SyncEngine`; inject a shared
    instance only when several engines must exclude each other.
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()
        self._lock = threading.Lock()

    def acquire(self, entity_id: str) -> bool:
        """Claim ``entity_id``.

        Returns:
            True if claimed, False if it was already in flight
        """
        with self._lock:
            if entity_id in self._ids:
                return False
            self._ids.add(entity_id)
            return True

    def release(self, entity_id: str) -> None:
        with self._lock:
            self._ids.discard(entity_id)

    @contextmanager
    def hold(self, entity_id: str) -> Iterator[None]:
        """Claim ``entity_id`` for the body of a ``with`` block.

        Raises:
            BusyError: The id is already in flight
        """
        if not self.acquire(entity_id):
            logger.info("sync.busy", entity_id=entity_id)
            raise BusyError(entity_id)
        try:
            yield
        finally:
            self.release(entity_id)

    def is_in_flight(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._ids

    def active(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
