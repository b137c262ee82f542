"""Document synchronization engine and its in-flight guard."""

from apidoc.sync.engine import SyncEngine, SyncReport
from apidoc.sync.inflight import InFlightRegistry

__all__ = ["InFlightRegistry", "SyncEngine", "SyncReport"]
