"""
Explicit fetch results for the event source boundary.

A fetch either succeeds with a (possibly empty) tuple of records or fails
with a reason.  Both outcomes expose ``items`` so reconciliation code can
keep degrading to vacuous results, while callers that care can tell
"legitimately nothing" from "the fetch failed".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FetchFailureReason(str, Enum):
    """Why a fetch produced no data."""

    SOURCE_UNAVAILABLE = "source_unavailable"  # Network / HTTP error
    MALFORMED_RESPONSE = "malformed_response"  # Unexpected payload shape
    MISSING_CONTEXT = "missing_context"  # No token or corporation configured
    INVALID_REQUEST = "invalid_request"  # Caller passed unusable arguments


@dataclass(frozen=True)
class FetchFailure:
    reason: FetchFailureReason
    message: str

    @property
    def code(self) -> str:
        return self.reason.value.upper()


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Success-with-collection or failure-with-reason."""

    items: tuple[T, ...] = ()
    failure: FetchFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, items) -> FetchResult[T]:
        return cls(items=tuple(items))

    @classmethod
    def failed(cls, reason: FetchFailureReason, message: str) -> FetchResult[T]:
        return cls(items=(), failure=FetchFailure(reason=reason, message=message))
