"""
Pytest fixtures for the hangar delivery reconciliation test suite.

Provides:
- The end-to-end container log scenario (two adds, one removal)
- In-memory source adapters and a recording notifier
- A SQLite in-memory database for the sync-status recorder
- Clean logging state between tests
"""

from datetime import datetime, timedelta
from typing import Generator

import pytest

from builders import CORPORATION_ID, T0, RecordingNotifier, make_asset, make_log
from hangar_ingestion.adapters.memory_adapter import InMemorySourceAdapter
from hangar_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
)
from hangar_kernel.domain.clock import DeterministicClock
from hangar_kernel.domain.values import LogAction, MovementLogEntry
from hangar_kernel.logging_config import LogContext, reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(T0)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def scenario_logs() -> tuple[MovementLogEntry, ...]:
    """Two adds of type 34 into division 2 plus one removal."""
    return (
        make_log(type_id=34, quantity=200, logged_at=T0),
        make_log(type_id=34, quantity=150, logged_at=T0 + timedelta(minutes=30)),
        make_log(type_id=34, quantity=50, action=LogAction.REMOVE, logged_at=T0 + timedelta(hours=1)),
    )


@pytest.fixture
def source(scenario_logs) -> InMemorySourceAdapter:
    return InMemorySourceAdapter(
        corporation_id=CORPORATION_ID,
        logs=scenario_logs,
        assets=(
            make_asset(type_id=34, quantity=300, location_flag="CorpSAG2", item_id=1),
            make_asset(type_id=34, quantity=50, location_flag="CorpDeliveries", item_id=2),
            make_asset(type_id=35, quantity=10, location_flag="CorpSAG3", item_id=3),
        ),
        type_names={34: "Tritanium", 35: "Pyerite"},
    )


@pytest.fixture
def session_factory() -> Generator:
    """Fresh SQLite in-memory database per test."""
    init_engine_from_url("sqlite://")
    create_tables()
    yield get_session_factory()
    drop_tables()
    reset_engine()
