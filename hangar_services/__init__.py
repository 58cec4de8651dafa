"""
hangar_services -- imperative shell over the pure delivery engines.

Public surface:
    HangarDeliveryService   -- scan, match, reconcile, verify, read contents
    SyncNotifier & friends  -- progress callbacks
    SyncStatusRecorder      -- database-backed SyncNotifier
    DemoDeliveryScanner     -- simulated scans (demo/test only)
"""

from hangar_services.delivery_service import HangarDeliveryService
from hangar_services.delivery_types import (
    DeliveryScan,
    DeliveryVerification,
    HangarContents,
    ReconciliationReport,
    RequirementMatch,
)
from hangar_services.demo_scanner import DemoDeliveryScanner
from hangar_services.notifier import (
    CompositeSyncNotifier,
    LoggingSyncNotifier,
    NullSyncNotifier,
    SyncNotifier,
)
from hangar_services.sync_status_service import (
    SyncHistoryView,
    SyncStatusRecorder,
    SyncStatusView,
)

__all__ = [
    "HangarDeliveryService",
    "DeliveryScan",
    "DeliveryVerification",
    "HangarContents",
    "ReconciliationReport",
    "RequirementMatch",
    "DemoDeliveryScanner",
    "CompositeSyncNotifier",
    "LoggingSyncNotifier",
    "NullSyncNotifier",
    "SyncNotifier",
    "SyncHistoryView",
    "SyncStatusRecorder",
    "SyncStatusView",
]
