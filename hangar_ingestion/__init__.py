"""
hangar_ingestion -- the event source boundary.

Adapters fetch corporation assets and container logs and map upstream
payloads onto kernel value objects.  This is the only package that talks
to the network.
"""

from hangar_ingestion.adapters import (
    EsiSourceAdapter,
    EventSourceAdapter,
    InMemorySourceAdapter,
)

__all__ = ["EsiSourceAdapter", "EventSourceAdapter", "InMemorySourceAdapter"]
