"""
Configuration Loader (``hangar_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen dataclasses
of ``hangar_config.schema``.  Runtime code goes through
``hangar_config.get_active_config()`` rather than calling this directly.

Invariants enforced
-------------------
* Every parse error raises ``ConfigurationError`` naming the offending key.
* Unknown top-level sections are rejected, so typos do not silently fall
  back to defaults.
* Secrets are never read from YAML: the ESI access token comes from the
  environment variable named by ``esi.access_token_env``.
* ``compute_checksum`` gives a deterministic SHA-256 of the parsed file.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from hangar_config.schema import (
    CorporationSettings,
    DatabaseSettings,
    EsiSettings,
    HangarConfig,
    LoggingSettings,
    SimulationConfig,
)
from hangar_kernel.exceptions import ConfigurationError

_SECTIONS = frozenset({"esi", "corporation", "simulation", "database", "logging"})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict (empty if the file is empty)."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(str(path), f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def compute_checksum(data: Mapping[str, Any]) -> str:
    """Deterministic SHA-256 of a parsed configuration mapping."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _section(data: Mapping[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(name, "section must be a mapping")
    return value


def _typed(section: str, data: Mapping[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    if key not in data or data[key] is None:
        return default
    value = data[key]
    if isinstance(value, bool) and bool not in (kind if isinstance(kind, tuple) else (kind,)):
        raise ConfigurationError(f"{section}.{key}", f"expected {kind}, got a boolean")
    if not isinstance(value, kind):
        raise ConfigurationError(f"{section}.{key}", f"expected {kind}, got {type(value).__name__}")
    return value


def parse_esi(data: Mapping[str, Any], environ: Mapping[str, str]) -> EsiSettings:
    defaults = EsiSettings()
    token_env = _typed("esi", data, "access_token_env", str, defaults.access_token_env)
    if "access_token" in data:
        raise ConfigurationError("esi.access_token", "tokens must come from the environment, not the file")
    max_pages = _typed("esi", data, "max_pages", int, defaults.max_pages)
    if max_pages < 1:
        raise ConfigurationError("esi.max_pages", "must be at least 1")
    return EsiSettings(
        base_url=_typed("esi", data, "base_url", str, defaults.base_url),
        timeout_seconds=float(_typed("esi", data, "timeout_seconds", (int, float), defaults.timeout_seconds)),
        user_agent=_typed("esi", data, "user_agent", str, defaults.user_agent),
        max_pages=max_pages,
        access_token_env=token_env,
        access_token=environ.get(token_env) or None,
    )


def parse_corporation(data: Mapping[str, Any]) -> CorporationSettings:
    defaults = CorporationSettings()
    return CorporationSettings(
        corporation_id=_typed("corporation", data, "corporation_id", int, None),
        process_id=_typed("corporation", data, "process_id", str, defaults.process_id),
    )


def parse_simulation(data: Mapping[str, Any]) -> SimulationConfig:
    defaults = SimulationConfig()
    probability = float(
        _typed("simulation", data, "proceed_probability", (int, float), defaults.proceed_probability)
    )
    if not 0.0 <= probability <= 1.0:
        raise ConfigurationError("simulation.proceed_probability", "must be within [0, 1]")
    return SimulationConfig(
        enabled=_typed("simulation", data, "enabled", bool, defaults.enabled),
        seed=_typed("simulation", data, "seed", int, None),
        proceed_probability=probability,
        character_id_floor=_typed("simulation", data, "character_id_floor", int, defaults.character_id_floor),
        character_id_span=_typed("simulation", data, "character_id_span", int, defaults.character_id_span),
        location_id=_typed("simulation", data, "location_id", int, defaults.location_id),
    )


def parse_database(data: Mapping[str, Any]) -> DatabaseSettings:
    return DatabaseSettings(
        url=_typed("database", data, "url", str, None),
        echo=_typed("database", data, "echo", bool, False),
    )


def parse_logging(data: Mapping[str, Any]) -> LoggingSettings:
    level = _typed("logging", data, "level", str, "INFO").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError("logging.level", f"unknown level {level!r}")
    return LoggingSettings(level=level)


def parse_config(data: Mapping[str, Any], environ: Mapping[str, str]) -> HangarConfig:
    """Parse a whole configuration mapping."""
    unknown = set(data) - _SECTIONS
    if unknown:
        raise ConfigurationError(", ".join(sorted(unknown)), "unknown configuration section")
    return HangarConfig(
        esi=parse_esi(_section(data, "esi"), environ),
        corporation=parse_corporation(_section(data, "corporation")),
        simulation=parse_simulation(_section(data, "simulation")),
        database=parse_database(_section(data, "database")),
        logging=parse_logging(_section(data, "logging")),
        checksum=compute_checksum(data),
    )


def load_config(path: Path, environ: Mapping[str, str]) -> HangarConfig:
    """Load and parse one YAML configuration file."""
    return parse_config(load_yaml_file(path), environ)
