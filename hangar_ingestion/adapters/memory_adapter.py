"""
In-memory source adapter.

Serves fixed assets, log entries, names and divisions.  Used by tests and
local demos; can be told to fail every fetch with a given reason to
exercise the degradation paths.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from hangar_ingestion.adapters.base import filter_since
from hangar_kernel.domain.results import FetchFailureReason, FetchResult
from hangar_kernel.domain.values import HangarDivision, InventoryItem, MovementLogEntry
from hangar_kernel.exceptions import NaiveTimestampError


class InMemorySourceAdapter:
    """Event source adapter over in-memory tuples."""

    def __init__(
        self,
        *,
        corporation_id: int | None = None,
        assets: Iterable[InventoryItem] = (),
        logs: Iterable[MovementLogEntry] = (),
        type_names: dict[int, str] | None = None,
        divisions: Iterable[HangarDivision] = (),
        fail_with: FetchFailureReason | None = None,
    ):
        self.corporation_id = corporation_id
        self.assets = tuple(assets)
        self.logs = tuple(logs)
        self.type_names = dict(type_names or {})
        self.divisions = tuple(divisions)
        self.fail_with = fail_with
        self.log_requests: list[datetime | None] = []

    def _check(self, corporation_id: int | None) -> FetchResult | None:
        if self.fail_with is not None:
            return FetchResult.failed(self.fail_with, f"configured to fail: {self.fail_with.value}")
        if corporation_id is None:
            return FetchResult.failed(FetchFailureReason.MISSING_CONTEXT, "Missing source context: corporation_id")
        if self.corporation_id is not None and corporation_id != self.corporation_id:
            return FetchResult.success(())
        return None

    def fetch_asset_snapshot(self, corporation_id: int | None) -> FetchResult[InventoryItem]:
        return self._check(corporation_id) or FetchResult.success(self.assets)

    def fetch_movement_log(
        self,
        corporation_id: int | None,
        since: datetime | None = None,
    ) -> FetchResult[MovementLogEntry]:
        self.log_requests.append(since)
        failed = self._check(corporation_id)
        if failed is not None:
            return failed
        try:
            return FetchResult.success(filter_since(self.logs, since))
        except NaiveTimestampError as exc:
            return FetchResult.failed(FetchFailureReason.INVALID_REQUEST, str(exc))

    def fetch_hangar_divisions(self, corporation_id: int | None) -> FetchResult[HangarDivision]:
        return self._check(corporation_id) or FetchResult.success(self.divisions)

    def resolve_type_names(self, type_ids: Iterable[int]) -> dict[int, str]:
        if self.fail_with is not None:
            return {}
        return {tid: self.type_names[tid] for tid in set(type_ids) if tid in self.type_names}
