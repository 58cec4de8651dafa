"""
Tests for the database-backed sync-status recorder.

Runs against SQLite in memory; time comes from a DeterministicClock that
is advanced between runs so history ordering is unambiguous.
"""

from datetime import timedelta

import pytest

from builders import CORPORATION_ID
from hangar_kernel.models.sync_status import SyncState
from hangar_services.delivery_service import HangarDeliveryService
from hangar_services.sync_status_service import SyncStatusRecorder

PROCESS = "hangar_delivery_scan"


@pytest.fixture
def recorder(session_factory, clock):
    return SyncStatusRecorder(session_factory, clock=clock)


class TestStatusLifecycle:

    def test_unknown_process_is_idle(self, recorder):
        status = recorder.get_status("never_ran")
        assert status.status is SyncState.IDLE
        assert status.progress == 0
        assert not recorder.is_running("never_ran")

    def test_start_marks_running(self, recorder, t0):
        recorder.on_sync_start(PROCESS)

        status = recorder.get_status(PROCESS)
        assert status.status is SyncState.RUNNING
        assert status.current_step == "Initializing..."
        assert status.last_run_at == t0
        assert recorder.is_running(PROCESS)

    def test_progress_clamped(self, recorder):
        recorder.on_sync_start(PROCESS)
        recorder.on_sync_progress(PROCESS, 140, "Aggregating")
        assert recorder.get_status(PROCESS).progress == 100

        recorder.on_sync_progress(PROCESS, -5, "Rewinding")
        status = recorder.get_status(PROCESS)
        assert status.progress == 0
        assert status.current_step == "Rewinding"

    def test_complete(self, recorder, clock):
        recorder.on_sync_start(PROCESS)
        clock.advance(3)
        recorder.on_sync_complete(PROCESS, 3000, items_processed=2)

        status = recorder.get_status(PROCESS)
        assert status.status is SyncState.SUCCESS
        assert status.progress == 100
        assert status.current_step == "Completed"
        assert status.items_processed == 2
        assert status.last_success_at == clock.now()

    def test_error_counts_and_duration(self, recorder, clock):
        recorder.on_sync_start(PROCESS)
        clock.advance(2)
        recorder.on_sync_error(PROCESS, "source down")

        status = recorder.get_status(PROCESS)
        assert status.status is SyncState.ERROR
        assert status.error_count == 1
        assert status.last_error == "source down"

        (entry,) = recorder.history(PROCESS)
        assert entry.status is SyncState.ERROR
        assert entry.duration_ms == 2000
        assert entry.error_message == "source down"

    def test_restart_clears_last_error(self, recorder, clock):
        recorder.on_sync_start(PROCESS)
        recorder.on_sync_error(PROCESS, "boom")
        clock.advance(60)
        recorder.on_sync_start(PROCESS)

        status = recorder.get_status(PROCESS)
        assert status.last_error is None
        assert status.error_count == 1


class TestHistory:

    def test_newest_first_and_filtered(self, recorder, clock):
        for process in ("a", "b", "a"):
            recorder.on_sync_start(process)
            recorder.on_sync_complete(process, 10, items_processed=1)
            clock.advance(60)

        assert len(recorder.history()) == 3
        entries = recorder.history("a")
        assert len(entries) == 2
        assert entries[0].recorded_at > entries[1].recorded_at

    def test_limit_applies(self, recorder, clock):
        for _ in range(5):
            recorder.on_sync_complete(PROCESS, 1)
            clock.advance(1)
        assert len(recorder.history(limit=2)) == 2

    def test_pruned_to_history_limit(self, session_factory, clock):
        recorder = SyncStatusRecorder(session_factory, clock=clock, history_limit=3)
        for n in range(5):
            recorder.on_sync_complete(PROCESS, n)
            clock.advance(1)

        entries = recorder.history(limit=10)
        assert [e.duration_ms for e in entries] == [4, 3, 2]

    def test_same_instant_runs_pruned_oldest_first(self, session_factory, clock):
        """Runs recorded within one clock tick keep insertion order."""
        recorder = SyncStatusRecorder(session_factory, clock=clock, history_limit=3)
        for n in range(5):
            recorder.on_sync_complete(PROCESS, n)

        entries = recorder.history(limit=10)
        assert [e.duration_ms for e in entries] == [4, 3, 2]
        assert len({e.recorded_at for e in entries}) == 1


class TestRecorderAsServiceNotifier:

    def test_scan_recorded(self, recorder, source):
        service = HangarDeliveryService(source, CORPORATION_ID, notifier=recorder)
        service.scan_for_deliveries(2, [34])

        status = recorder.get_status("hangar_delivery_scan")
        assert status.status is SyncState.SUCCESS
        assert status.items_processed == 2
        assert recorder.history()[0].status is SyncState.SUCCESS

    def test_recorded_times_are_utc(self, recorder, t0):
        recorder.on_sync_start(PROCESS)
        assert recorder.get_status(PROCESS).last_run_at.utcoffset() == timedelta(0)
