"""Campaign event log records."""
from __future__ import annotations

from dataclasses import dataclass

from divegm.core.types import LogCategory


@dataclass(slots=True)
class LogEntry:
    """One narrated line in the campaign log."""

    id: str
    timestamp: int  # milliseconds since the epoch
    category: LogCategory
    content: str
    related_entity_id: str | None = None
