"""
Event source adapter protocol.

Contract:
    The adapter is the one impure boundary of the reconciliation core.  It
    fetches the current asset snapshot and the container movement log for a
    corporation, resolves type names, and reads hangar division names.

    Fetch methods never raise: every failure (network, HTTP status, bad
    payload, missing credentials, a naive ``since``) comes back as
    ``FetchResult.failed`` with a reason, and is logged by the adapter.  Results are all-or-nothing;
    a partially read paginated log is reported as a failure.

Architecture: hangar_ingestion/adapters.  No engine or service imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol, runtime_checkable

from hangar_kernel.domain.results import FetchResult
from hangar_kernel.domain.values import HangarDivision, InventoryItem, MovementLogEntry, require_aware


@runtime_checkable
class EventSourceAdapter(Protocol):
    """Protocol for reading corporation assets and container logs."""

    def fetch_asset_snapshot(self, corporation_id: int | None) -> FetchResult[InventoryItem]:
        """Current asset records for the corporation."""
        ...

    def fetch_movement_log(
        self,
        corporation_id: int | None,
        since: datetime | None = None,
    ) -> FetchResult[MovementLogEntry]:
        """Container log entries, with ``logged_at >= since`` when given."""
        ...

    def resolve_type_names(self, type_ids: Iterable[int]) -> dict[int, str]:
        """Best-effort display names; IDs that cannot be resolved are absent."""
        ...

    def fetch_hangar_divisions(self, corporation_id: int | None) -> FetchResult[HangarDivision]:
        """Configured hangar division names."""
        ...


def filter_since(
    entries: Iterable[MovementLogEntry],
    since: datetime | None,
) -> tuple[MovementLogEntry, ...]:
    """Apply the inclusive ``since`` lower bound.

    Raises NaiveTimestampError when ``since`` has no timezone.
    """
    if since is None:
        return tuple(entries)
    require_aware(since, "since")
    return tuple(entry for entry in entries if entry.logged_at >= since)
