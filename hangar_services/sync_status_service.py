"""
hangar_services.sync_status_service -- Persistent sync-status tracking.

Responsibility:
    Implements ``SyncNotifier`` on top of the SyncStatusRecord /
    SyncHistoryRecord tables so that the progress of background scans
    survives process restarts and can be shown by a status page.

Architecture position:
    Services -- owns its own short transactions through
    ``hangar_kernel.db.engine.session_scope``.

Invariants enforced:
    - One status row per process; a start resets progress and step.
    - Progress is clamped to 0..100.
    - History keeps only the newest ``history_limit`` rows (default 100).
    - Timestamps come from the injected Clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from hangar_kernel.db.engine import session_scope
from hangar_kernel.domain.clock import Clock, SystemClock
from hangar_kernel.logging_config import get_logger
from hangar_kernel.models.sync_status import SyncHistoryRecord, SyncState, SyncStatusRecord

logger = get_logger("services.sync_status")

DEFAULT_HISTORY_LIMIT = 100


@dataclass(frozen=True)
class SyncStatusView:
    """Detached snapshot of one process's status."""

    process_id: str
    status: SyncState
    progress: int
    current_step: str
    last_run_at: datetime | None = None
    last_success_at: datetime | None = None
    error_count: int = 0
    last_error: str | None = None
    items_processed: int | None = None

    @classmethod
    def idle(cls, process_id: str) -> SyncStatusView:
        return cls(process_id=process_id, status=SyncState.IDLE, progress=0, current_step="Not started")

    @classmethod
    def from_record(cls, record: SyncStatusRecord) -> SyncStatusView:
        return cls(
            process_id=record.process_id,
            status=SyncState(record.status),
            progress=record.progress,
            current_step=record.current_step,
            last_run_at=record.last_run_at,
            last_success_at=record.last_success_at,
            error_count=record.error_count,
            last_error=record.last_error,
            items_processed=record.items_processed,
        )


@dataclass(frozen=True)
class SyncHistoryView:
    process_id: str
    recorded_at: datetime
    status: SyncState
    duration_ms: int
    items_processed: int | None = None
    error_message: str | None = None


class SyncStatusRecorder:
    """SyncNotifier that persists status and run history."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._history_limit = history_limit

    # ------------------------------------------------------------------
    # SyncNotifier
    # ------------------------------------------------------------------

    def on_sync_start(self, process_id: str) -> None:
        with session_scope(self._session_factory) as session:
            record = self._get_or_create(session, process_id)
            record.status = SyncState.RUNNING.value
            record.progress = 0
            record.current_step = "Initializing..."
            record.last_run_at = self._clock.now()
            record.last_error = None
        logger.info("sync_status_started", extra={"sync_process": process_id})

    def on_sync_progress(self, process_id: str, percent: int, step_label: str) -> None:
        with session_scope(self._session_factory) as session:
            record = self._get_or_create(session, process_id)
            record.progress = max(0, min(100, int(percent)))
            record.current_step = step_label[:200]

    def on_sync_complete(self, process_id: str, duration_ms: int, items_processed: int | None = None) -> None:
        now = self._clock.now()
        with session_scope(self._session_factory) as session:
            record = self._get_or_create(session, process_id)
            record.status = SyncState.SUCCESS.value
            record.progress = 100
            record.current_step = "Completed"
            record.last_success_at = now
            record.items_processed = items_processed
            self._append_history(session, SyncHistoryRecord(
                process_id=process_id,
                recorded_at=now,
                status=SyncState.SUCCESS.value,
                duration_ms=duration_ms,
                items_processed=items_processed,
            ))
        logger.info(
            "sync_status_completed",
            extra={"sync_process": process_id, "duration_ms": duration_ms, "items_processed": items_processed},
        )

    def on_sync_error(self, process_id: str, message: str) -> None:
        now = self._clock.now()
        with session_scope(self._session_factory) as session:
            record = self._get_or_create(session, process_id)
            started = record.last_run_at
            record.status = SyncState.ERROR.value
            record.current_step = "Failed"
            record.error_count = (record.error_count or 0) + 1
            record.last_error = message
            duration_ms = int((now - started).total_seconds() * 1000) if started else 0
            self._append_history(session, SyncHistoryRecord(
                process_id=process_id,
                recorded_at=now,
                status=SyncState.ERROR.value,
                duration_ms=max(0, duration_ms),
                error_message=message,
            ))
        logger.warning("sync_status_failed", extra={"sync_process": process_id, "error": message})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_status(self, process_id: str) -> SyncStatusView:
        """Current status, or an idle placeholder for unknown processes."""
        with session_scope(self._session_factory) as session:
            record = self._find(session, process_id)
            if record is None:
                return SyncStatusView.idle(process_id)
            return SyncStatusView.from_record(record)

    def is_running(self, process_id: str) -> bool:
        return self.get_status(process_id).status is SyncState.RUNNING

    def history(self, process_id: str | None = None, limit: int = 20) -> tuple[SyncHistoryView, ...]:
        """Most recent runs first."""
        stmt = (
            select(SyncHistoryRecord)
            .order_by(SyncHistoryRecord.recorded_at.desc(), SyncHistoryRecord.sequence.desc())
            .limit(limit)
        )
        if process_id is not None:
            stmt = stmt.where(SyncHistoryRecord.process_id == process_id)
        with session_scope(self._session_factory) as session:
            return tuple(
                SyncHistoryView(
                    process_id=row.process_id,
                    recorded_at=row.recorded_at,
                    status=SyncState(row.status),
                    duration_ms=row.duration_ms,
                    items_processed=row.items_processed,
                    error_message=row.error_message,
                )
                for row in session.scalars(stmt)
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(self, session: Session, process_id: str) -> SyncStatusRecord | None:
        return session.scalars(
            select(SyncStatusRecord).where(SyncStatusRecord.process_id == process_id)
        ).first()

    def _get_or_create(self, session: Session, process_id: str) -> SyncStatusRecord:
        record = self._find(session, process_id)
        if record is None:
            record = SyncStatusRecord(
                process_id=process_id,
                status=SyncState.IDLE.value,
                progress=0,
                current_step="Not started",
                error_count=0,
            )
            session.add(record)
        return record

    def _append_history(self, session: Session, entry: SyncHistoryRecord) -> None:
        last = session.scalar(select(func.max(SyncHistoryRecord.sequence)))
        entry.sequence = (last or 0) + 1
        session.add(entry)
        session.flush()

        count = session.scalar(select(func.count()).select_from(SyncHistoryRecord))
        excess = (count or 0) - self._history_limit
        if excess > 0:
            oldest = session.scalars(
                select(SyncHistoryRecord)
                .order_by(SyncHistoryRecord.recorded_at.asc(), SyncHistoryRecord.sequence.asc())
                .limit(excess)
            ).all()
            for row in oldest:
                session.delete(row)
