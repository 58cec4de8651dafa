"""
Configuration schema (``hangar_config.schema``).

Frozen dataclasses describing one deployment: how to reach ESI, which
corporation to read, where the sync-status database lives, how to log,
and the knobs of the demo delivery generator.  Instances are produced by
``hangar_config.loader`` only.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EsiSettings:
    base_url: str = "https://esi.evetech.net/latest"
    timeout_seconds: float = 30.0
    user_agent: str = "hangar-ledger"
    max_pages: int = 100
    access_token_env: str = "HANGAR_ESI_ACCESS_TOKEN"
    # Resolved from the environment at load time, never read from YAML.
    access_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class CorporationSettings:
    corporation_id: int | None = None
    process_id: str = "hangar_delivery_scan"


@dataclass(frozen=True)
class SimulationConfig:
    enabled: bool = False
    seed: int | None = None
    proceed_probability: float = 0.7
    character_id_floor: int = 91_000_000
    character_id_span: int = 1_000_000
    location_id: int = 60003760


@dataclass(frozen=True)
class DatabaseSettings:
    url: str | None = None
    echo: bool = False


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class HangarConfig:
    """Complete configuration for one deployment."""

    esi: EsiSettings = field(default_factory=EsiSettings)
    corporation: CorporationSettings = field(default_factory=CorporationSettings)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    checksum: str = ""
