"""
Identifier and timestamp utilities.

Modules and endpoints draw ids from the same generator so ids are unique
across both entity kinds. Timestamps are stored as ISO-8601 UTC strings.
"""

import uuid
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return utc_now().isoformat()


def new_entity_id() -> str:
    """Generate a globally unique entity id (uuid4, canonical form)."""
    return str(uuid.uuid4())


def from_iso8601(s: str | None) -> datetime | None:
    """Parse ISO 8601 string to datetime."""
    if s is None:
        return None
    return datetime.fromisoformat(s)
