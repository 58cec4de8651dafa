"""Source adapters: ESI over HTTP and an in-memory fixture source."""

from hangar_ingestion.adapters.base import EventSourceAdapter, filter_since
from hangar_ingestion.adapters.esi_adapter import EsiSourceAdapter
from hangar_ingestion.adapters.memory_adapter import InMemorySourceAdapter

__all__ = [
    "EventSourceAdapter",
    "EsiSourceAdapter",
    "InMemorySourceAdapter",
    "filter_since",
]
