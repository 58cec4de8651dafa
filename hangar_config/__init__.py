"""
hangar_config -- single public entrypoint for deployment configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains
    configuration.  It reads one YAML file (the packaged default unless a
    path is given) and resolves secrets from the environment.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigurationError`` -- invalid YAML, unknown sections or values.

Audit relevance:
    Every successful call emits a ``HANGAR_CONFIG_TRACE`` log entry with the
    file path and checksum (never the token).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from hangar_config.loader import load_config
from hangar_config.schema import (
    CorporationSettings,
    DatabaseSettings,
    EsiSettings,
    HangarConfig,
    LoggingSettings,
    SimulationConfig,
)
from hangar_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> HangarConfig:
    """Load the active configuration.

    Args:
        path: YAML file to load; defaults to the packaged ``sets/default.yaml``.
        environ: Environment mapping for secrets; defaults to ``os.environ``.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = load_config(config_path, os.environ if environ is None else environ)

    _logger.info(
        "HANGAR_CONFIG_TRACE",
        extra={
            "trace_type": "HANGAR_CONFIG_TRACE",
            "config_path": str(config_path),
            "checksum": config.checksum,
            "corporation_id": config.corporation.corporation_id,
            "has_access_token": config.esi.access_token is not None,
        },
    )
    return config


__all__ = [
    "CorporationSettings",
    "DatabaseSettings",
    "DEFAULT_CONFIG_PATH",
    "EsiSettings",
    "HangarConfig",
    "LoggingSettings",
    "SimulationConfig",
    "get_active_config",
]
