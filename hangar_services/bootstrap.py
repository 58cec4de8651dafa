"""
Wire services from configuration.

Build the delivery service handle once at process start and pass it to
call sites.  Tests construct ``HangarDeliveryService`` directly with an
``InMemorySourceAdapter`` instead.
"""

from __future__ import annotations

import logging
import random

import requests

from hangar_config.schema import HangarConfig
from hangar_engines.simulation import SimulationSettings
from hangar_ingestion.adapters.esi_adapter import EsiSourceAdapter
from hangar_kernel.db.engine import create_tables, get_session_factory, init_engine_from_url
from hangar_kernel.domain.clock import Clock, SystemClock
from hangar_kernel.exceptions import ConfigurationError
from hangar_kernel.logging_config import configure_logging
from hangar_services.delivery_service import HangarDeliveryService
from hangar_services.demo_scanner import DemoDeliveryScanner
from hangar_services.notifier import CompositeSyncNotifier, LoggingSyncNotifier, SyncNotifier
from hangar_services.sync_status_service import SyncStatusRecorder


def build_sync_recorder(config: HangarConfig, clock: Clock | None = None) -> SyncStatusRecorder | None:
    """Sync-status recorder for the configured database, if one is configured."""
    if not config.database.url:
        return None
    init_engine_from_url(config.database.url, echo=config.database.echo)
    create_tables()
    return SyncStatusRecorder(get_session_factory(), clock=clock)


def build_delivery_service(
    config: HangarConfig,
    *,
    session: requests.Session | None = None,
    clock: Clock | None = None,
) -> HangarDeliveryService:
    """Delivery service reading ESI with the configured token and corporation."""
    configure_logging(level=getattr(logging, config.logging.level))

    adapter = EsiSourceAdapter(
        config.esi.access_token,
        base_url=config.esi.base_url,
        session=session,
        timeout_seconds=config.esi.timeout_seconds,
        user_agent=config.esi.user_agent,
        max_pages=config.esi.max_pages,
    )

    notifiers: list[SyncNotifier] = [LoggingSyncNotifier()]
    recorder = build_sync_recorder(config, clock or SystemClock())
    if recorder is not None:
        notifiers.append(recorder)

    return HangarDeliveryService(
        adapter,
        config.corporation.corporation_id,
        notifier=CompositeSyncNotifier(notifiers),
        process_id=config.corporation.process_id,
    )


def build_demo_scanner(config: HangarConfig, clock: Clock | None = None) -> DemoDeliveryScanner:
    """Demo scanner seeded and tuned from the ``simulation`` section."""
    sim = config.simulation
    if not sim.enabled:
        raise ConfigurationError("simulation.enabled", "simulation is disabled")
    return DemoDeliveryScanner(
        rng=random.Random(sim.seed),
        clock=clock,
        settings=SimulationSettings(
            proceed_probability=sim.proceed_probability,
            character_id_floor=sim.character_id_floor,
            character_id_span=sim.character_id_span,
            location_id=sim.location_id,
        ),
    )
