"""
Typed exception hierarchy for the hangar kernel.

Every error carries a machine-readable ``code`` class attribute and stores
its context as attributes, so callers catch by type and log structured
fields instead of parsing messages.

    HangarKernelError (base)
    |
    +-- SubdivisionError
    |   +-- InvalidSubdivisionError
    |
    +-- ValueObjectError
    |   +-- InvalidTimeWindowError
    |   +-- InvalidRequirementError
    |   +-- InvalidQuantityError
    |   +-- NaiveTimestampError
    |
    +-- SourceError
    |   +-- SourceUnavailableError
    |   +-- MalformedSourceDataError
    |   +-- MissingSourceContextError
    |
    +-- ConfigurationError

Engines and value constructors raise these on caller misuse.  The service
layer never lets them escape: reconciliation calls convert them into an
explicit failed result and log the code.
"""

from datetime import datetime


class HangarKernelError(Exception):
    """
    Base exception for all hangar kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "HANGAR_KERNEL_ERROR"


# Subdivision exceptions


class SubdivisionError(HangarKernelError):
    """Base exception for hangar subdivision errors."""

    code: str = "SUBDIVISION_ERROR"


class InvalidSubdivisionError(SubdivisionError):
    """Division number does not map to a corporation hangar flag."""

    code: str = "INVALID_SUBDIVISION"

    def __init__(self, division: object):
        self.division = division
        super().__init__(f"Invalid hangar division: {division!r} (expected 1..7)")


# Value object exceptions


class ValueObjectError(HangarKernelError):
    """Base exception for value objects that fail construction checks."""

    code: str = "VALUE_OBJECT_ERROR"


class InvalidTimeWindowError(ValueObjectError):
    """Time window has start after end, or a naive timestamp."""

    code: str = "INVALID_TIME_WINDOW"

    def __init__(self, start: datetime, end: datetime, reason: str):
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Invalid time window [{start}, {end}]: {reason}")


class InvalidRequirementError(ValueObjectError):
    """Requirement quantities are out of range."""

    code: str = "INVALID_REQUIREMENT"

    def __init__(self, type_id: int, reason: str):
        self.type_id = type_id
        self.reason = reason
        super().__init__(f"Invalid requirement for type {type_id}: {reason}")


class InvalidQuantityError(ValueObjectError):
    """Quantity is not a valid integer for the record it belongs to."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: object, reason: str):
        self.quantity = quantity
        self.reason = reason
        super().__init__(f"Invalid quantity {quantity!r}: {reason}")


class NaiveTimestampError(ValueObjectError):
    """A timestamp argument carries no timezone."""

    code: str = "NAIVE_TIMESTAMP"

    def __init__(self, field_name: str, value: object):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name} must be a timezone-aware datetime, got {value!r}")


# Source exceptions


class SourceError(HangarKernelError):
    """Base exception for event source adapter errors."""

    code: str = "SOURCE_ERROR"


class SourceUnavailableError(SourceError):
    """The upstream source could not be reached or answered with an error."""

    code: str = "SOURCE_UNAVAILABLE"

    def __init__(self, endpoint: str, detail: str):
        self.endpoint = endpoint
        self.detail = detail
        super().__init__(f"Source unavailable for {endpoint}: {detail}")


class MalformedSourceDataError(SourceError):
    """A source payload did not have the expected shape."""

    code: str = "MALFORMED_SOURCE_DATA"

    def __init__(self, record_kind: str, detail: str):
        self.record_kind = record_kind
        self.detail = detail
        super().__init__(f"Malformed {record_kind} payload: {detail}")


class MissingSourceContextError(SourceError):
    """Credentials or corporation context required for a fetch are missing."""

    code: str = "MISSING_SOURCE_CONTEXT"

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"Missing source context: {missing}")


# Configuration exceptions


class ConfigurationError(HangarKernelError):
    """Configuration file is missing required keys or holds invalid values."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration at '{key}': {reason}")
