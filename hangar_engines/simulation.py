"""
hangar_engines.simulation -- Synthetic deliveries for demos and tests.

Responsibility:
    Fabricate plausible deliveries for requirements that are not yet met,
    so the reconciliation flow can be exercised without a live source.

Architecture position:
    Engines -- pure given its inputs: randomness comes from an explicit
    ``random.Random`` and time from an explicit ``now``.  NOT
    re-exported from ``hangar_engines``; the only service entry point is
    ``hangar_services.demo_scanner``.

Invariants enforced:
    - Every emitted record has ``simulated=True``.
    - Emitted quantity lies in ``[1, max(1, remaining // 2)]``.
    - Fulfilled requirements never produce a record.
    - Same seed, same requirements, same ``now`` -> same output.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from hangar_kernel.domain.values import DeliveryRecord, Requirement, hangar_flag
from hangar_kernel.logging_config import get_logger

logger = get_logger("engines.simulation")


@dataclass(frozen=True)
class SimulationSettings:
    """Knobs for the synthetic delivery generator."""

    proceed_probability: float = 0.7
    character_id_floor: int = 91_000_000
    character_id_span: int = 1_000_000
    location_id: int = 60003760  # Jita IV - Moon 4 - Caldari Navy Assembly Plant

    def __post_init__(self) -> None:
        if not 0.0 <= self.proceed_probability <= 1.0:
            raise ValueError(f"proceed_probability must be within [0, 1], got {self.proceed_probability}")
        if self.character_id_span < 1:
            raise ValueError("character_id_span must be positive")


def max_simulated_quantity(remaining: int) -> int:
    """Upper bound of a synthetic delivery: half of what is left, at least one."""
    return max(1, remaining // 2)


def simulate_deliveries(
    requirements: Iterable[Requirement],
    subdivision: int,
    *,
    rng: random.Random,
    now: datetime,
    settings: SimulationSettings | None = None,
) -> tuple[DeliveryRecord, ...]:
    """Emit at most one synthetic delivery per unmet requirement."""
    settings = settings or SimulationSettings()
    flag = hangar_flag(subdivision)
    deliveries: list[DeliveryRecord] = []

    for req in requirements:
        if req.quantity_delivered >= req.quantity_required:
            continue
        if rng.random() >= settings.proceed_probability:
            continue

        quantity = rng.randint(1, max_simulated_quantity(req.remaining))
        deliveries.append(DeliveryRecord(
            type_id=req.type_id,
            quantity=quantity,
            character_id=settings.character_id_floor + rng.randrange(settings.character_id_span),
            timestamp=now,
            location_id=settings.location_id,
            location_flag=flag,
            verified=True,
            simulated=True,
        ))

    logger.info(
        "deliveries_simulated",
        extra={"subdivision": subdivision, "delivery_count": len(deliveries)},
    )
    return tuple(deliveries)
