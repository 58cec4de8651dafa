"""
hangar_engines.requirements -- Fold delivery totals into project requirements.

Responsibility:
    Reconcile aggregated delivery totals against a project's bill of
    materials: propose new running totals, and report per-requirement and
    whole-project completion.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Folding only touches requirements whose type_id has a total; the
      input requirements are never mutated (new instances are returned).
    - Over-delivery is preserved: ``quantity_delivered`` may exceed
      ``quantity_required`` and ``over_delivered`` reports the surplus.
    - Completion percentages round half up, like a progress bar would.

Failure modes:
    - Simulated deliveries are rejected by ``fold_deliveries`` unless the
      caller opts in with ``allow_simulated=True``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from hangar_engines.deliveries import aggregate_deliveries
from hangar_engines.tracer import traced_engine
from hangar_kernel.domain.values import DeliveryRecord, Requirement


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    ratio = Decimal(part) * 100 / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class RequirementProgress:
    """Completion view of one requirement."""

    requirement: Requirement
    delivered_this_scan: int = 0

    @property
    def type_id(self) -> int:
        return self.requirement.type_id

    @property
    def remaining(self) -> int:
        return self.requirement.remaining

    @property
    def over_delivered(self) -> int:
        return max(0, self.requirement.quantity_delivered - self.requirement.quantity_required)

    @property
    def completion_percent(self) -> int:
        return _percent(self.requirement.quantity_delivered, self.requirement.quantity_required)

    @property
    def is_complete(self) -> bool:
        return self.requirement.is_fulfilled


@traced_engine("requirement_folder", "1.0", fingerprint_fields=("totals",))
def apply_delivery_totals(
    requirements: Iterable[Requirement],
    totals: Mapping[int, int],
) -> tuple[Requirement, ...]:
    """Add each type's delivered total to the matching requirement's running total."""
    return tuple(
        req.with_delivered(req.quantity_delivered + totals[req.type_id])
        if totals.get(req.type_id)
        else req
        for req in requirements
    )


def fold_deliveries(
    requirements: Iterable[Requirement],
    deliveries: Iterable[DeliveryRecord],
    *,
    allow_simulated: bool = False,
) -> tuple[Requirement, ...]:
    """Aggregate ``deliveries`` and fold them into ``requirements``."""
    deliveries = tuple(deliveries)
    if not allow_simulated and any(d.simulated for d in deliveries):
        raise ValueError("Simulated deliveries cannot be folded into real requirements")
    return apply_delivery_totals(requirements, aggregate_deliveries(deliveries))


def requirement_progress(
    requirements: Iterable[Requirement],
    totals: Mapping[int, int] | None = None,
) -> tuple[RequirementProgress, ...]:
    """Progress for each requirement, noting what this scan contributed."""
    totals = totals or {}
    return tuple(
        RequirementProgress(requirement=req, delivered_this_scan=totals.get(req.type_id, 0))
        for req in requirements
    )


def project_completion_percent(requirements: Iterable[Requirement]) -> int:
    """Total delivered over total required, as a rounded percentage.

    A project with no requirements is 0% complete.
    """
    requirements = tuple(requirements)
    total_required = sum(r.quantity_required for r in requirements)
    total_delivered = sum(r.quantity_delivered for r in requirements)
    return _percent(total_delivered, total_required)
