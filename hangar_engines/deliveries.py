"""
hangar_engines.deliveries -- Delivery extraction, aggregation and verification.

Responsibility:
    Turn container movement log entries into delivery records for one
    corporation hangar division, sum delivered quantity per item type, and
    answer whether one specific delivery claim appears in the log.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import hangar_kernel.domain and sibling engine modules.
    Callers (services) fetch the log and pass it in.

Invariants enforced:
    - Only ``add`` entries whose flag equals ``hangar_flag(subdivision)``
      exactly and whose type is required become deliveries.  The inbound
      ``CorpDeliveries`` flag is never a subdivision match here.
    - Extraction preserves input order and never grows the input.
    - Aggregation is order-independent and additive; absent keys mean zero.
    - Verification matches ONE log line exactly (type, quantity, character,
      flag, action) inside a closed time window.  A delivery split across
      several smaller log lines does not verify, even if the parts sum up.

Failure modes:
    - InvalidSubdivisionError when ``subdivision`` is outside 1..7.

Usage:
    from hangar_engines.deliveries import extract_deliveries, aggregate_deliveries

    deliveries = extract_deliveries(logs, 2, {34, 35})
    totals = aggregate_deliveries(deliveries)   # {34: 350}
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from hangar_engines.tracer import traced_engine
from hangar_kernel.domain.values import (
    DeliveryRecord,
    LogAction,
    MovementLogEntry,
    TimeWindow,
    hangar_flag,
)


def is_delivery_entry(
    entry: MovementLogEntry,
    location_flag: str,
    required_type_ids: frozenset[int],
) -> bool:
    """Selection predicate shared by extraction and the property tests."""
    return (
        entry.action is LogAction.ADD
        and entry.location_flag == location_flag
        and entry.type_id in required_type_ids
    )


@traced_engine(
    "delivery_extractor", "1.0",
    fingerprint_fields=("subdivision", "required_type_ids"),
)
def extract_deliveries(
    logs: Iterable[MovementLogEntry],
    subdivision: int,
    required_type_ids: Iterable[int],
) -> tuple[DeliveryRecord, ...]:
    """Filter container log entries down to deliveries into ``subdivision``.

    Quantity is not a gate: a zero-quantity ``add`` still yields a record
    and simply contributes nothing when aggregated.
    """
    flag = hangar_flag(subdivision)
    wanted = frozenset(required_type_ids)
    if not wanted:
        return ()

    return tuple(
        DeliveryRecord.from_log_entry(entry)
        for entry in logs
        if is_delivery_entry(entry, flag, wanted)
    )


@traced_engine("delivery_aggregator", "1.0")
def aggregate_deliveries(deliveries: Iterable[DeliveryRecord]) -> dict[int, int]:
    """Sum delivered quantity per type ID. Over-delivery is kept as-is."""
    totals: dict[int, int] = defaultdict(int)
    for delivery in deliveries:
        totals[delivery.type_id] += delivery.quantity
    return dict(totals)


def merge_totals(*parts: Mapping[int, int]) -> dict[int, int]:
    """Key-wise sum of several aggregation results."""
    merged: dict[int, int] = defaultdict(int)
    for part in parts:
        for type_id, quantity in part.items():
            merged[type_id] += quantity
    return dict(merged)


@traced_engine(
    "delivery_verifier", "1.0",
    fingerprint_fields=("type_id", "quantity", "character_id", "subdivision", "window"),
)
def find_matching_delivery(
    logs: Iterable[MovementLogEntry],
    type_id: int,
    quantity: int,
    character_id: int,
    subdivision: int,
    window: TimeWindow,
) -> MovementLogEntry | None:
    """Return the first log line proving the claimed delivery, or None."""
    flag = hangar_flag(subdivision)
    for entry in logs:
        if (
            entry.type_id == type_id
            and entry.quantity == quantity
            and entry.character_id == character_id
            and entry.location_flag == flag
            and entry.action is LogAction.ADD
            and window.contains(entry.logged_at)
        ):
            return entry
    return None
