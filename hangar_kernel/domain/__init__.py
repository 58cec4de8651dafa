"""
Pure domain layer.

Immutable value objects, fetch results and the clock abstraction, with no
dependencies on the ORM, the network or the system clock.
"""

from hangar_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from hangar_kernel.domain.results import FetchFailure, FetchFailureReason, FetchResult
from hangar_kernel.domain.values import (
    DELIVERIES_FLAG,
    HANGAR_DIVISIONS,
    HANGAR_FLAG_PREFIX,
    DeliveryRecord,
    HangarDivision,
    InventoryItem,
    LogAction,
    MovementLogEntry,
    Requirement,
    TimeWindow,
    hangar_flag,
    require_aware,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "FetchFailure",
    "FetchFailureReason",
    "FetchResult",
    "DELIVERIES_FLAG",
    "HANGAR_DIVISIONS",
    "HANGAR_FLAG_PREFIX",
    "DeliveryRecord",
    "HangarDivision",
    "InventoryItem",
    "LogAction",
    "MovementLogEntry",
    "Requirement",
    "TimeWindow",
    "hangar_flag",
    "require_aware",
]
