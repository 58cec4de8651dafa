"""
Module: hangar_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    reconciliation engines.  This is the import surface for
    hangar_services.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import hangar_kernel (and sibling engine modules).
    MUST NOT import hangar_services or hangar_ingestion.

Invariants enforced:
    - Purity: engines never read the clock; timestamps arrive as parameters.
    - Determinism: identical inputs always produce identical outputs.

The simulation generator (``hangar_engines.simulation``) is
not re-exported: it fabricates data shaped like real deliveries and is
reached only through ``hangar_services.demo_scanner``.

Usage:
    from hangar_engines import extract_deliveries, aggregate_deliveries
    from hangar_engines import find_matching_delivery, summarize_hangar_contents
"""

from hangar_engines.deliveries import (
    aggregate_deliveries,
    extract_deliveries,
    find_matching_delivery,
    is_delivery_entry,
    merge_totals,
)
from hangar_engines.requirements import (
    RequirementProgress,
    apply_delivery_totals,
    fold_deliveries,
    project_completion_percent,
    requirement_progress,
)
from hangar_engines.snapshot import filter_hangar_items, summarize_hangar_contents
from hangar_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "aggregate_deliveries",
    "extract_deliveries",
    "find_matching_delivery",
    "is_delivery_entry",
    "merge_totals",
    "RequirementProgress",
    "apply_delivery_totals",
    "fold_deliveries",
    "project_completion_percent",
    "requirement_progress",
    "filter_hangar_items",
    "summarize_hangar_contents",
    "compute_input_fingerprint",
    "traced_engine",
]
