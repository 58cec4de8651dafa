"""
Result types returned by ``HangarDeliveryService``.

Every result carries an optional ``failure``.  On failure the data fields
hold their vacuous value (no deliveries, empty totals, not verified), so
callers that only want the data keep working, and callers that need to
tell "nothing delivered" from "could not look" check ``ok``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from hangar_engines.requirements import RequirementProgress
from hangar_kernel.domain.results import FetchFailure
from hangar_kernel.domain.values import DeliveryRecord, MovementLogEntry, Requirement


@dataclass(frozen=True)
class DeliveryScan:
    """Deliveries found in one hangar division."""

    subdivision: int
    deliveries: tuple[DeliveryRecord, ...] = ()
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class RequirementMatch:
    """Delivered totals per required type ID."""

    subdivision: int
    totals: Mapping[int, int] = field(default_factory=dict)
    deliveries: tuple[DeliveryRecord, ...] = ()
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class ReconciliationReport:
    """Requirements with this scan's totals folded in."""

    subdivision: int
    requirements: tuple[Requirement, ...] = ()
    progress: tuple[RequirementProgress, ...] = ()
    totals: Mapping[int, int] = field(default_factory=dict)
    completion_percent: int = 0
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def outstanding(self) -> tuple[Requirement, ...]:
        return tuple(req for req in self.requirements if not req.is_fulfilled)


@dataclass(frozen=True)
class DeliveryVerification:
    """Outcome of checking one delivery claim against the container log."""

    verified: bool = False
    matched_entry: MovementLogEntry | None = None
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class HangarContents:
    """On-hand quantity per type ID for one hangar division."""

    subdivision: int
    contents: Mapping[int, int] = field(default_factory=dict)
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None
