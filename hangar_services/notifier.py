"""
Sync progress notification.

The delivery service reports its progress through a ``SyncNotifier``; it
owns none of the persistence or fan-out behind it.  Notifier failures are
logged and swallowed so that status tracking can never break a
reconciliation call.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from hangar_kernel.logging_config import get_logger

logger = get_logger("services.notifier")


@runtime_checkable
class SyncNotifier(Protocol):
    """Receiver of sync lifecycle callbacks."""

    def on_sync_start(self, process_id: str) -> None: ...

    def on_sync_progress(self, process_id: str, percent: int, step_label: str) -> None: ...

    def on_sync_complete(
        self,
        process_id: str,
        duration_ms: int,
        items_processed: int | None = None,
    ) -> None: ...

    def on_sync_error(self, process_id: str, message: str) -> None: ...


class NullSyncNotifier:
    """Notifier that ignores every callback."""

    def on_sync_start(self, process_id: str) -> None:
        pass

    def on_sync_progress(self, process_id: str, percent: int, step_label: str) -> None:
        pass

    def on_sync_complete(self, process_id: str, duration_ms: int, items_processed: int | None = None) -> None:
        pass

    def on_sync_error(self, process_id: str, message: str) -> None:
        pass


class LoggingSyncNotifier:
    """Notifier that writes each callback as a structured log record."""

    def on_sync_start(self, process_id: str) -> None:
        logger.info("sync_started", extra={"sync_process": process_id})

    def on_sync_progress(self, process_id: str, percent: int, step_label: str) -> None:
        logger.info(
            "sync_progress",
            extra={"sync_process": process_id, "percent": percent, "step": step_label},
        )

    def on_sync_complete(self, process_id: str, duration_ms: int, items_processed: int | None = None) -> None:
        logger.info(
            "sync_completed",
            extra={
                "sync_process": process_id,
                "duration_ms": duration_ms,
                "items_processed": items_processed,
            },
        )

    def on_sync_error(self, process_id: str, message: str) -> None:
        logger.warning("sync_failed", extra={"sync_process": process_id, "error": message})


class CompositeSyncNotifier:
    """Forward every callback to several notifiers in order."""

    def __init__(self, notifiers: Iterable[SyncNotifier]):
        self._notifiers = tuple(notifiers)

    def on_sync_start(self, process_id: str) -> None:
        for notifier in self._notifiers:
            notifier.on_sync_start(process_id)

    def on_sync_progress(self, process_id: str, percent: int, step_label: str) -> None:
        for notifier in self._notifiers:
            notifier.on_sync_progress(process_id, percent, step_label)

    def on_sync_complete(self, process_id: str, duration_ms: int, items_processed: int | None = None) -> None:
        for notifier in self._notifiers:
            notifier.on_sync_complete(process_id, duration_ms, items_processed)

    def on_sync_error(self, process_id: str, message: str) -> None:
        for notifier in self._notifiers:
            notifier.on_sync_error(process_id, message)
