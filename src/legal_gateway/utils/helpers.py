"""General helper functions used across the application."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO 8601 string with a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_session_id() -> str:
    """Return a new random session identifier."""
    return f"session_{uuid.uuid4().hex}"
