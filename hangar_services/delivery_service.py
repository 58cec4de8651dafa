"""
hangar_services.delivery_service -- Hangar delivery reconciliation service.

Responsibility:
    Imperative shell around the pure delivery engines.  Fetches container
    logs and asset snapshots through an ``EventSourceAdapter``, runs the
    extractor, aggregator, verifier and snapshot reader over them, folds
    totals into project requirements, and reports progress to a
    ``SyncNotifier``.

Architecture position:
    Services -- orchestration over engines + ingestion.  One instance is
    an explicit handle built once with its adapter and corporation (see
    ``hangar_services.bootstrap``); there is no module-level singleton.

Invariants enforced:
    - Total functions: no public method raises.  Fetch failures and caller
      misuse (bad division, inverted window, naive ``since``) come back as a result whose
      ``failure`` is set and whose data is empty / false, and are logged.
    - At most one adapter fetch per call; no state shared between calls.
    - ``verify_delivery`` fetches the log with ``since=window.start``.
    - Simulated deliveries never enter this service's results.

Failure modes (all returned, never raised):
    - SOURCE_UNAVAILABLE / MALFORMED_RESPONSE / MISSING_CONTEXT from the adapter.
    - INVALID_REQUEST when engines reject the arguments.

Usage:
    service = HangarDeliveryService(adapter, corporation_id=98000001)
    match = service.match_deliveries_to_requirements(2, requirements)
    if match.ok:
        print(match.totals)
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from datetime import datetime

from hangar_engines import (
    aggregate_deliveries,
    apply_delivery_totals,
    extract_deliveries,
    find_matching_delivery,
    project_completion_percent,
    requirement_progress,
    summarize_hangar_contents,
)
from hangar_ingestion.adapters.base import EventSourceAdapter
from hangar_kernel.domain.results import FetchFailure, FetchFailureReason
from hangar_kernel.domain.values import (
    HangarDivision,
    MovementLogEntry,
    Requirement,
    TimeWindow,
    hangar_flag,
    require_aware,
)
from hangar_kernel.exceptions import HangarKernelError
from hangar_kernel.logging_config import LogContext, get_logger
from hangar_services.delivery_types import (
    DeliveryScan,
    DeliveryVerification,
    HangarContents,
    ReconciliationReport,
    RequirementMatch,
)
from hangar_services.notifier import NullSyncNotifier, SyncNotifier

logger = get_logger("services.delivery")

DEFAULT_PROCESS_ID = "hangar_delivery_scan"


def _invalid_request(exc: HangarKernelError) -> FetchFailure:
    return FetchFailure(reason=FetchFailureReason.INVALID_REQUEST, message=str(exc))


class HangarDeliveryService:
    """
    Reconciles hangar deliveries for one corporation.

    Contract:
        Given a hangar division and the required items, find deliveries in
        the container log, total them per item, verify individual claims,
        and read current hangar contents.

    Non-goals:
        - Does NOT persist deliveries or requirements; callers fold the
          returned totals into their own state.
        - Does NOT retry fetches; that is the adapter's concern.
    """

    def __init__(
        self,
        source: EventSourceAdapter,
        corporation_id: int | None,
        *,
        notifier: SyncNotifier | None = None,
        process_id: str = DEFAULT_PROCESS_ID,
    ):
        self._source = source
        self._corporation_id = corporation_id
        self._notifier = notifier or NullSyncNotifier()
        self._process_id = process_id

    @property
    def corporation_id(self) -> int | None:
        return self._corporation_id

    # ------------------------------------------------------------------
    # Deliveries
    # ------------------------------------------------------------------

    def scan_for_deliveries(
        self,
        subdivision: int,
        required_type_ids: Iterable[int],
        since: datetime | None = None,
    ) -> DeliveryScan:
        """Deliveries of the required types into ``subdivision``."""
        match = self.match_deliveries_to_requirements_by_type(subdivision, required_type_ids, since)
        return DeliveryScan(subdivision=subdivision, deliveries=match.deliveries, failure=match.failure)

    def match_deliveries_to_requirements(
        self,
        subdivision: int,
        requirements: Iterable[Requirement],
        since: datetime | None = None,
    ) -> RequirementMatch:
        """Delivered totals for each requirement's type ID."""
        return self.match_deliveries_to_requirements_by_type(
            subdivision, [req.type_id for req in requirements], since,
        )

    def match_deliveries_to_requirements_by_type(
        self,
        subdivision: int,
        required_type_ids: Iterable[int],
        since: datetime | None = None,
    ) -> RequirementMatch:
        """Scan, extract and aggregate, reporting progress along the way."""
        required = frozenset(required_type_ids)
        started = time.monotonic()

        with LogContext.bind(process_id=self._process_id, corporation_id=self._corporation_id):
            self._notify("on_sync_start", self._process_id)

            try:
                hangar_flag(subdivision)
                if since is not None:
                    require_aware(since, "since")
            except HangarKernelError as exc:
                return self._failed_match(subdivision, _invalid_request(exc))

            self._notify("on_sync_progress", self._process_id, 10, "Fetching container logs")
            fetched = self._source.fetch_movement_log(self._corporation_id, since)
            if not fetched.ok:
                return self._failed_match(subdivision, fetched.failure)

            deliveries = extract_deliveries(fetched.items, subdivision, required)
            self._notify(
                "on_sync_progress", self._process_id, 60,
                f"Extracted {len(deliveries)} deliveries",
            )

            totals = aggregate_deliveries(deliveries)
            self._notify(
                "on_sync_progress", self._process_id, 90,
                f"Aggregated {len(totals)} item types",
            )

            duration_ms = int((time.monotonic() - started) * 1000)
            self._notify("on_sync_complete", self._process_id, duration_ms, len(deliveries))
            logger.info(
                "hangar_deliveries_matched",
                extra={
                    "subdivision": subdivision,
                    "log_entries": len(fetched.items),
                    "delivery_count": len(deliveries),
                    "type_count": len(totals),
                    "duration_ms": duration_ms,
                },
            )
            return RequirementMatch(subdivision=subdivision, totals=totals, deliveries=deliveries)

    def reconcile_requirements(
        self,
        subdivision: int,
        requirements: Iterable[Requirement],
        since: datetime | None = None,
    ) -> ReconciliationReport:
        """Match deliveries and fold the totals into the requirements.

        On failure the requirements come back unchanged.
        """
        requirements = tuple(requirements)
        match = self.match_deliveries_to_requirements(subdivision, requirements, since)
        updated = apply_delivery_totals(requirements, match.totals) if match.ok else requirements
        return ReconciliationReport(
            subdivision=subdivision,
            requirements=updated,
            progress=requirement_progress(updated, match.totals),
            totals=match.totals,
            completion_percent=project_completion_percent(updated),
            failure=match.failure,
        )

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def check_delivery(
        self,
        type_id: int,
        quantity: int,
        character_id: int,
        subdivision: int,
        window: TimeWindow,
    ) -> DeliveryVerification:
        """Look for one log line proving the claimed delivery."""
        try:
            hangar_flag(subdivision)
        except HangarKernelError as exc:
            logger.warning("delivery_check_rejected", extra={"error_code": exc.code, "error": str(exc)})
            return DeliveryVerification(failure=_invalid_request(exc))

        fetched = self._source.fetch_movement_log(self._corporation_id, window.start)
        if not fetched.ok:
            logger.warning(
                "delivery_check_unavailable",
                extra={"reason": fetched.failure.reason.value, "error": fetched.failure.message},
            )
            return DeliveryVerification(failure=fetched.failure)

        entry: MovementLogEntry | None = find_matching_delivery(
            fetched.items, type_id, quantity, character_id, subdivision, window,
        )
        logger.info(
            "delivery_checked",
            extra={
                "type_id": type_id,
                "quantity": quantity,
                "claimed_by": character_id,
                "subdivision": subdivision,
                "verified": entry is not None,
            },
        )
        return DeliveryVerification(verified=entry is not None, matched_entry=entry)

    def verify_delivery(
        self,
        type_id: int,
        quantity: int,
        character_id: int,
        subdivision: int,
        window: TimeWindow,
    ) -> bool:
        """True iff a single matching ``add`` line exists in the window. Never raises."""
        return self.check_delivery(type_id, quantity, character_id, subdivision, window).verified

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def read_hangar_contents(self, subdivision: int) -> HangarContents:
        """On-hand quantities for ``subdivision``, including corporation deliveries."""
        try:
            hangar_flag(subdivision)
        except HangarKernelError as exc:
            logger.warning("hangar_read_rejected", extra={"error_code": exc.code, "error": str(exc)})
            return HangarContents(subdivision=subdivision, failure=_invalid_request(exc))

        fetched = self._source.fetch_asset_snapshot(self._corporation_id)
        if not fetched.ok:
            logger.warning(
                "hangar_read_unavailable",
                extra={"reason": fetched.failure.reason.value, "error": fetched.failure.message},
            )
            return HangarContents(subdivision=subdivision, failure=fetched.failure)

        return HangarContents(
            subdivision=subdivision,
            contents=summarize_hangar_contents(fetched.items, subdivision),
        )

    def current_hangar_contents(self, subdivision: int) -> dict[int, int]:
        """On-hand quantity per type ID; empty when the snapshot is unavailable."""
        return dict(self.read_hangar_contents(subdivision).contents)

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def hangar_divisions(self) -> dict[int, str]:
        """Division number -> configured name; empty when unavailable."""
        fetched = self._source.fetch_hangar_divisions(self._corporation_id)
        if not fetched.ok:
            logger.warning(
                "hangar_divisions_unavailable",
                extra={
                    "reason": fetched.failure.reason.value,
                    "error": fetched.failure.message,
                },
            )
        divisions: tuple[HangarDivision, ...] = fetched.items
        return {d.division: d.name for d in divisions}

    def item_names(self, type_ids: Iterable[int]) -> dict[int, str]:
        """Best-effort display names for type IDs."""
        return self._source.resolve_type_names(type_ids)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _failed_match(self, subdivision: int, failure: FetchFailure) -> RequirementMatch:
        logger.warning(
            "hangar_delivery_scan_failed",
            extra={"subdivision": subdivision, "reason": failure.reason.value, "error": failure.message},
        )
        self._notify("on_sync_error", self._process_id, failure.message)
        return RequirementMatch(subdivision=subdivision, failure=failure)

    def _notify(self, callback: str, *args: object) -> None:
        try:
            getattr(self._notifier, callback)(*args)
        except Exception:
            logger.exception("sync_notifier_failed", extra={"callback": callback})
