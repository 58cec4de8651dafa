"""
Value objects for hangar delivery reconciliation.

Responsibility:
    Immutable, validated representations of the records the core reasons
    about: current asset snapshots, container movement log entries, derived
    delivery records, project requirements and verification time windows.
    Also owns the fixed corporation hangar flag naming contract.

Architecture position:
    Kernel > Domain -- pure, zero I/O.  Engines and services import from
    here; this module imports only ``hangar_kernel.exceptions``.

Invariants enforced:
    - ``hangar_flag(n) == "CorpSAG" + str(n)`` for n in 1..7, bit-exact.
    - Timestamps are timezone-aware.
    - ``TimeWindow.start <= TimeWindow.end``.
    - ``Requirement.quantity_required >= 1`` and
      ``Requirement.quantity_delivered >= 0``.
    - ``InventoryItem.quantity >= 1``.

Failure modes:
    - InvalidSubdivisionError from ``hangar_flag`` for divisions outside 1..7.
    - InvalidTimeWindowError, InvalidRequirementError, InvalidQuantityError,
      NaiveTimestampError from ``__post_init__`` validation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from hangar_kernel.exceptions import (
    InvalidQuantityError,
    InvalidRequirementError,
    InvalidSubdivisionError,
    InvalidTimeWindowError,
    NaiveTimestampError,
)

# Corporation hangar flags as published by the upstream asset API.
HANGAR_FLAG_PREFIX = "CorpSAG"
DELIVERIES_FLAG = "CorpDeliveries"
HANGAR_DIVISIONS = range(1, 8)


def hangar_flag(division: int) -> str:
    """Location flag for corporation hangar ``division`` (1..7)."""
    if isinstance(division, bool) or not isinstance(division, int):
        raise InvalidSubdivisionError(division)
    if division not in HANGAR_DIVISIONS:
        raise InvalidSubdivisionError(division)
    return f"{HANGAR_FLAG_PREFIX}{division}"


def require_aware(value: datetime, field_name: str) -> datetime:
    """Return ``value`` unchanged, or raise NaiveTimestampError if it has no timezone."""
    if not isinstance(value, datetime) or value.tzinfo is None:
        raise NaiveTimestampError(field_name, value)
    return value


class LogAction(str, Enum):
    """
    Container log action.

    ``OTHER`` stands in for actions the upstream log adds later; only
    ``ADD`` is ever a delivery.
    """

    ADD = "add"
    REMOVE = "remove"
    MOVE = "move"
    ASSEMBLE = "assemble"
    REPACKAGE = "repackage"
    CONFIGURE = "configure"
    SET_NAME = "set_name"
    LOCK = "lock"
    UNLOCK = "unlock"
    SET_PASSWORD = "set_password"
    ENTER_PASSWORD = "enter_password"
    PASSWORD_CONFIGURE = "password_configure"
    PASSWORD_CHECK = "password_check"
    OTHER = "other"

    @classmethod
    def from_source(cls, value: str) -> LogAction:
        """Map an upstream action string, folding unknown ones into ``OTHER``."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class InventoryItem:
    """
    One asset record from the current-state snapshot.

    Supplied entirely by the event source; the core never mutates it.
    """

    item_id: int
    type_id: int
    location_id: int
    location_flag: str
    quantity: int
    is_singleton: bool = False
    is_blueprint_copy: bool | None = None
    location_type: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidQuantityError(self.quantity, "asset quantity must be an integer")
        if self.quantity < 1:
            raise InvalidQuantityError(self.quantity, "asset quantity must be positive")


@dataclass(frozen=True)
class MovementLogEntry:
    """
    One immutable container log line.

    Entries arrive ordered by ``logged_at`` by convention, but nothing in
    the core relies on that ordering.
    """

    logged_at: datetime
    character_id: int
    location_id: int
    location_flag: str
    action: LogAction
    type_id: int
    quantity: int = 0
    new_configuration: int | None = None
    old_configuration: int | None = None
    password_type: str | None = None

    def __post_init__(self) -> None:
        require_aware(self.logged_at, "logged_at")
        if not isinstance(self.action, LogAction):
            object.__setattr__(self, "action", LogAction(self.action))

    @property
    def is_add(self) -> bool:
        return self.action is LogAction.ADD


@dataclass(frozen=True)
class DeliveryRecord:
    """
    A container log ``add`` accepted as a delivery into a hangar division.

    Derived per reconciliation call and never persisted by the core.
    ``simulated`` is True only for records fabricated by the simulation
    generator; real reconciliation state must reject those.
    """

    type_id: int
    quantity: int
    character_id: int
    timestamp: datetime
    location_id: int
    location_flag: str
    verified: bool = True
    simulated: bool = False

    @classmethod
    def from_log_entry(cls, entry: MovementLogEntry) -> DeliveryRecord:
        return cls(
            type_id=entry.type_id,
            quantity=entry.quantity,
            character_id=entry.character_id,
            timestamp=entry.logged_at,
            location_id=entry.location_id,
            location_flag=entry.location_flag,
            verified=True,
        )


@dataclass(frozen=True)
class Requirement:
    """
    One bill-of-materials line for a project.

    ``quantity_delivered`` is the caller's running total; the core only
    proposes new totals via ``with_delivered``.
    """

    type_id: int
    quantity_required: int
    quantity_delivered: int = 0

    def __post_init__(self) -> None:
        if self.quantity_required < 1:
            raise InvalidRequirementError(self.type_id, "quantity_required must be at least 1")
        if self.quantity_delivered < 0:
            raise InvalidRequirementError(self.type_id, "quantity_delivered cannot be negative")

    @property
    def remaining(self) -> int:
        return max(0, self.quantity_required - self.quantity_delivered)

    @property
    def is_fulfilled(self) -> bool:
        return self.quantity_delivered >= self.quantity_required

    def with_delivered(self, quantity_delivered: int) -> Requirement:
        return replace(self, quantity_delivered=quantity_delivered)


@dataclass(frozen=True)
class TimeWindow:
    """Closed time interval ``[start, end]`` used for delivery verification."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise InvalidTimeWindowError(self.start, self.end, "timestamps must be timezone-aware")
        if self.start > self.end:
            raise InvalidTimeWindowError(self.start, self.end, "start is after end")

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class HangarDivision:
    """Corporation hangar division and its configured display name."""

    division: int
    name: str

    @property
    def location_flag(self) -> str:
        return hangar_flag(self.division)
