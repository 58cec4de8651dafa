"""
Tests for folding delivery totals into requirements.

Covers:
- Running totals updated only for types with deliveries
- Over-delivery preserved and reported
- Half-up completion percentages
- Refusal to fold simulated deliveries
"""

import pytest

from builders import T0
from hangar_engines.requirements import (
    RequirementProgress,
    apply_delivery_totals,
    fold_deliveries,
    project_completion_percent,
    requirement_progress,
)
from hangar_kernel.domain.values import DeliveryRecord, Requirement


def _delivery(type_id: int, quantity: int, simulated: bool = False) -> DeliveryRecord:
    return DeliveryRecord(
        type_id=type_id,
        quantity=quantity,
        character_id=1,
        timestamp=T0,
        location_id=60003760,
        location_flag="CorpSAG2",
        simulated=simulated,
    )


class TestApplyDeliveryTotals:
    """Totals -> new requirement instances."""

    def test_adds_to_running_total(self):
        reqs = [Requirement(34, 1000, 100), Requirement(35, 50)]
        updated = apply_delivery_totals(reqs, {34: 350})

        assert updated[0].quantity_delivered == 450
        assert updated[1] is reqs[1]

    def test_inputs_not_mutated(self):
        req = Requirement(34, 100)
        apply_delivery_totals([req], {34: 10})
        assert req.quantity_delivered == 0

    def test_over_delivery_kept(self):
        (updated,) = apply_delivery_totals([Requirement(34, 100, 90)], {34: 50})
        assert updated.quantity_delivered == 140
        assert updated.is_fulfilled

    def test_unrelated_totals_ignored(self):
        reqs = (Requirement(34, 100),)
        assert apply_delivery_totals(reqs, {99: 5}) == reqs


class TestFoldDeliveries:
    """Deliveries -> requirements in one step."""

    def test_fold_real_deliveries(self):
        updated = fold_deliveries([Requirement(34, 500)], [_delivery(34, 200), _delivery(34, 150)])
        assert updated[0].quantity_delivered == 350

    def test_simulated_deliveries_rejected(self):
        with pytest.raises(ValueError, match="Simulated"):
            fold_deliveries([Requirement(34, 500)], [_delivery(34, 5, simulated=True)])

    def test_simulated_allowed_when_opted_in(self):
        updated = fold_deliveries(
            [Requirement(34, 500)], [_delivery(34, 5, simulated=True)], allow_simulated=True,
        )
        assert updated[0].quantity_delivered == 5


class TestRequirementProgress:
    """Per-requirement and project completion."""

    def test_progress_fields(self):
        (progress,) = requirement_progress([Requirement(34, 3, 2)], {34: 2})
        assert isinstance(progress, RequirementProgress)
        assert progress.type_id == 34
        assert progress.remaining == 1
        assert progress.delivered_this_scan == 2
        assert progress.completion_percent == 67
        assert not progress.is_complete

    def test_half_rounds_up(self):
        (progress,) = requirement_progress([Requirement(34, 200, 1)])
        assert progress.completion_percent == 1

    def test_over_delivered_surplus(self):
        (progress,) = requirement_progress([Requirement(34, 100, 130)])
        assert progress.over_delivered == 30
        assert progress.completion_percent == 130
        assert progress.is_complete

    def test_missing_totals_mean_zero_this_scan(self):
        (progress,) = requirement_progress([Requirement(34, 100, 10)])
        assert progress.delivered_this_scan == 0

    def test_project_completion(self):
        reqs = [Requirement(34, 100, 50), Requirement(35, 100, 100)]
        assert project_completion_percent(reqs) == 75

    def test_empty_project_is_zero(self):
        assert project_completion_percent([]) == 0
