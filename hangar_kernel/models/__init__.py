"""ORM models."""

from hangar_kernel.models.sync_status import SyncHistoryRecord, SyncState, SyncStatusRecord

__all__ = ["SyncHistoryRecord", "SyncState", "SyncStatusRecord"]
