"""
Map upstream JSON payloads onto kernel value objects.

The asset and container-log endpoints answer with lists of snake_case
objects.  Each mapper converts one object; any missing key or wrong type
raises ``MalformedSourceDataError``, which the adapter treats as fatal for
the whole fetch.

No I/O, no HTTP imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from hangar_kernel.domain.values import (
    HangarDivision,
    InventoryItem,
    LogAction,
    MovementLogEntry,
)
from hangar_kernel.exceptions import HangarKernelError, MalformedSourceDataError


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp such as ``2024-05-01T12:00:00Z``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"Cannot parse timestamp from {value!r}")
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp {value!r} has no timezone")
    return parsed


def _int(row: dict[str, Any], key: str) -> int:
    value = row[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}' must be an integer, got {value!r}")
    return value


def _optional_int(row: dict[str, Any], key: str) -> int | None:
    if row.get(key) is None:
        return None
    return _int(row, key)


def _str(row: dict[str, Any], key: str) -> str:
    value = row[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {value!r}")
    return value


def _require_object(row: Any, record_kind: str) -> dict[str, Any]:
    if not isinstance(row, dict):
        raise MalformedSourceDataError(record_kind, f"expected an object, got {type(row).__name__}")
    return row


def map_asset(row: Any) -> InventoryItem:
    """One asset object -> InventoryItem."""
    row = _require_object(row, "asset")
    try:
        return InventoryItem(
            item_id=_int(row, "item_id"),
            type_id=_int(row, "type_id"),
            location_id=_int(row, "location_id"),
            location_flag=_str(row, "location_flag"),
            quantity=_int(row, "quantity"),
            is_singleton=bool(row.get("is_singleton", False)),
            is_blueprint_copy=row.get("is_blueprint_copy"),
            location_type=row.get("location_type"),
        )
    except (KeyError, TypeError, ValueError, HangarKernelError) as exc:
        raise MalformedSourceDataError("asset", str(exc)) from exc


def map_container_log(row: Any) -> MovementLogEntry:
    """One container log object -> MovementLogEntry.

    ``quantity`` is only present on item movements; it defaults to 0.
    Actions this module does not know map to ``LogAction.OTHER`` so that a
    new upstream action never fails the whole log.
    """
    row = _require_object(row, "container_log")
    try:
        return MovementLogEntry(
            logged_at=parse_timestamp(row["logged_at"]),
            character_id=_int(row, "character_id"),
            location_id=_int(row, "location_id"),
            location_flag=_str(row, "location_flag"),
            action=LogAction.from_source(_str(row, "action")),
            type_id=_int(row, "type_id"),
            quantity=_optional_int(row, "quantity") or 0,
            new_configuration=_optional_int(row, "new_config_bitmask"),
            old_configuration=_optional_int(row, "old_config_bitmask"),
            password_type=row.get("password_type"),
        )
    except (KeyError, TypeError, ValueError, HangarKernelError) as exc:
        raise MalformedSourceDataError("container_log", str(exc)) from exc


def map_divisions(payload: Any) -> tuple[HangarDivision, ...]:
    """Divisions object -> hangar divisions (wallet divisions are ignored)."""
    payload = _require_object(payload, "divisions")
    hangars = payload.get("hangar") or []
    if not isinstance(hangars, list):
        raise MalformedSourceDataError("divisions", "'hangar' must be a list")
    divisions: list[HangarDivision] = []
    for row in hangars:
        row = _require_object(row, "divisions")
        try:
            number = _int(row, "division")
        except (KeyError, TypeError) as exc:
            raise MalformedSourceDataError("divisions", str(exc)) from exc
        divisions.append(HangarDivision(division=number, name=row.get("name") or f"Division {number}"))
    return tuple(sorted(divisions, key=lambda d: d.division))


def map_type_names(rows: Iterable[Any]) -> dict[int, str]:
    """Name rows -> {type_id: name}.  Rows that do not fit are skipped."""
    names: dict[int, str] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        type_id, name = row.get("id"), row.get("name")
        if isinstance(type_id, int) and isinstance(name, str):
            names[type_id] = name
    return names
