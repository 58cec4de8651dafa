"""Shared builders for container log entries, assets and notifier spies."""

from datetime import datetime, timezone

from hangar_kernel.domain.values import InventoryItem, LogAction, MovementLogEntry

CORPORATION_ID = 98000001
T0 = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_log(
    type_id: int = 34,
    quantity: int = 100,
    character_id: int = 123,
    location_flag: str = "CorpSAG2",
    action: LogAction | str = LogAction.ADD,
    logged_at: datetime = T0,
    location_id: int = 60003760,
) -> MovementLogEntry:
    return MovementLogEntry(
        logged_at=logged_at,
        character_id=character_id,
        location_id=location_id,
        location_flag=location_flag,
        action=LogAction(action),
        type_id=type_id,
        quantity=quantity,
    )


def make_asset(
    type_id: int = 34,
    quantity: int = 100,
    location_flag: str = "CorpSAG2",
    item_id: int = 1,
) -> InventoryItem:
    return InventoryItem(
        item_id=item_id,
        type_id=type_id,
        location_id=60003760,
        location_flag=location_flag,
        quantity=quantity,
    )


class RecordingNotifier:
    """SyncNotifier that records every callback as a tuple."""

    def __init__(self):
        self.calls: list[tuple] = []

    def on_sync_start(self, process_id):
        self.calls.append(("start", process_id))

    def on_sync_progress(self, process_id, percent, step_label):
        self.calls.append(("progress", process_id, percent, step_label))

    def on_sync_complete(self, process_id, duration_ms, items_processed=None):
        self.calls.append(("complete", process_id, items_processed))

    def on_sync_error(self, process_id, message):
        self.calls.append(("error", process_id, message))

    @property
    def kinds(self) -> list[str]:
        return [call[0] for call in self.calls]
