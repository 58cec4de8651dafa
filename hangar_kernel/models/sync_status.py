"""
Module: hangar_kernel.models.sync_status
Responsibility: ORM persistence for background sync process state -- the
    current status of each named process and a bounded run history.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - One SyncStatusRecord per process_id (uq_sync_status_process).
    - progress is an integer percentage in 0..100 (clamped by the recorder).
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hangar_kernel.db.base import Base


class SyncState(str, Enum):
    """Lifecycle of a sync process: IDLE -> RUNNING -> SUCCESS | ERROR."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class SyncStatusRecord(Base):
    """Latest known state of one sync process."""

    __tablename__ = "sync_statuses"

    __table_args__ = (
        UniqueConstraint("process_id", name="uq_sync_status_process"),
    )

    process_id: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=SyncState.IDLE.value)
    progress: Mapped[int] = mapped_column(nullable=False, default=0)
    current_step: Mapped[str] = mapped_column(String(200), nullable=False, default="Not started")
    last_run_at: Mapped[datetime | None] = mapped_column(nullable=True)
    last_success_at: Mapped[datetime | None] = mapped_column(nullable=True)
    error_count: Mapped[int] = mapped_column(nullable=False, default=0)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    items_processed: Mapped[int | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<SyncStatusRecord {self.process_id}: {self.status} {self.progress}%>"


class SyncHistoryRecord(Base):
    """One finished sync run (success or error)."""

    __tablename__ = "sync_history"

    __table_args__ = (
        Index("idx_sync_history_process", "process_id"),
        Index("idx_sync_history_recorded", "recorded_at", "sequence"),
    )

    process_id: Mapped[str] = mapped_column(String(100), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(nullable=False)
    # Insertion order; breaks ties between runs recorded at the same instant.
    sequence: Mapped[int] = mapped_column(nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    duration_ms: Mapped[int] = mapped_column(nullable=False, default=0)
    items_processed: Mapped[int | None] = mapped_column(nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<SyncHistoryRecord {self.process_id}: {self.status} at {self.recorded_at}>"
