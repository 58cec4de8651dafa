"""
hangar_services.demo_scanner -- Simulated hangar scans for demos and tests.

The only entry point to ``hangar_engines.simulation``.  Records produced
here carry ``simulated=True`` and every scan logs a warning, so fabricated
deliveries are always visible as such.  ``fold_deliveries`` refuses them
unless explicitly allowed.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from hangar_engines.simulation import SimulationSettings, simulate_deliveries
from hangar_kernel.domain.clock import Clock, SystemClock
from hangar_kernel.domain.values import DeliveryRecord, Requirement
from hangar_kernel.logging_config import get_logger

logger = get_logger("services.demo_scanner")


class DemoDeliveryScanner:
    """Generates synthetic deliveries in place of a live container log."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Clock | None = None,
        settings: SimulationSettings | None = None,
    ):
        self._rng = rng or random.Random()
        self._clock = clock or SystemClock()
        self._settings = settings or SimulationSettings()

    def simulate_delivery_scan(
        self,
        requirements: Iterable[Requirement],
        subdivision: int,
    ) -> tuple[DeliveryRecord, ...]:
        deliveries = simulate_deliveries(
            requirements,
            subdivision,
            rng=self._rng,
            now=self._clock.now(),
            settings=self._settings,
        )
        logger.warning(
            "simulated_delivery_scan",
            extra={"subdivision": subdivision, "delivery_count": len(deliveries)},
        )
        return deliveries
