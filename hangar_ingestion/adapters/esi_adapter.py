"""
ESI HTTP source adapter.

Reads corporation assets, container logs, hangar divisions and type names
from the EVE Swagger Interface with a ``requests.Session``.

Contract:
    - Authenticated endpoints send ``Authorization: Bearer <token>``; without
      a token or corporation ID the fetch fails with MISSING_CONTEXT and no
      request is made.
    - Paginated endpoints are read page by page following the ``X-Pages``
      response header.  Any failing page fails the whole fetch.
    - ``since`` is applied to container logs after the fetch (the endpoint
      has no server-side filter), inclusive.
    - Nothing raises to the caller: failures are returned and logged.

Non-goals:
    Retry, back-off and error-limit handling.  One attempt per page.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, TypeVar

import requests

from hangar_ingestion.adapters.base import filter_since
from hangar_ingestion.mapping import (
    map_asset,
    map_container_log,
    map_divisions,
    map_type_names,
)
from hangar_kernel.domain.results import FetchFailureReason, FetchResult
from hangar_kernel.domain.values import HangarDivision, InventoryItem, MovementLogEntry
from hangar_kernel.exceptions import (
    HangarKernelError,
    MalformedSourceDataError,
    MissingSourceContextError,
    SourceError,
    SourceUnavailableError,
)
from hangar_kernel.logging_config import get_logger

logger = get_logger("ingestion.esi")

T = TypeVar("T")

DEFAULT_BASE_URL = "https://esi.evetech.net/latest"
NAMES_CHUNK_SIZE = 1000

_FAILURE_REASONS: dict[type[SourceError], FetchFailureReason] = {
    SourceUnavailableError: FetchFailureReason.SOURCE_UNAVAILABLE,
    MalformedSourceDataError: FetchFailureReason.MALFORMED_RESPONSE,
    MissingSourceContextError: FetchFailureReason.MISSING_CONTEXT,
}


def _failure_reason(exc: HangarKernelError) -> FetchFailureReason:
    """Source errors map by type; anything else is a bad argument from the caller."""
    if isinstance(exc, SourceError):
        return _FAILURE_REASONS.get(type(exc), FetchFailureReason.SOURCE_UNAVAILABLE)
    return FetchFailureReason.INVALID_REQUEST


class EsiSourceAdapter:
    """Event source adapter backed by the ESI REST API."""

    def __init__(
        self,
        access_token: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout_seconds: float = 30.0,
        user_agent: str = "hangar-ledger",
        max_pages: int = 100,
    ):
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout_seconds
        self._user_agent = user_agent
        self._max_pages = max_pages

    def set_access_token(self, access_token: str | None) -> None:
        """Swap the bearer token, e.g. after an upstream refresh."""
        self._access_token = access_token

    # ------------------------------------------------------------------
    # EventSourceAdapter
    # ------------------------------------------------------------------

    def fetch_asset_snapshot(self, corporation_id: int | None) -> FetchResult[InventoryItem]:
        return self._fetch(
            "asset",
            corporation_id,
            "/corporations/{corporation_id}/assets/",
            lambda rows: tuple(map_asset(row) for row in rows),
        )

    def fetch_movement_log(
        self,
        corporation_id: int | None,
        since: datetime | None = None,
    ) -> FetchResult[MovementLogEntry]:
        return self._fetch(
            "container_log",
            corporation_id,
            "/corporations/{corporation_id}/containers/logs/",
            lambda rows: filter_since((map_container_log(row) for row in rows), since),
        )

    def fetch_hangar_divisions(self, corporation_id: int | None) -> FetchResult[HangarDivision]:
        return self._fetch(
            "divisions",
            corporation_id,
            "/corporations/{corporation_id}/divisions/",
            map_divisions,
            paginated=False,
        )

    def resolve_type_names(self, type_ids: Iterable[int]) -> dict[int, str]:
        ids = sorted(set(type_ids))
        names: dict[int, str] = {}
        for start in range(0, len(ids), NAMES_CHUNK_SIZE):
            chunk = ids[start:start + NAMES_CHUNK_SIZE]
            try:
                response = self._session.post(
                    f"{self._base_url}/universe/names/",
                    json=chunk,
                    headers=self._headers(authenticated=False),
                    timeout=self._timeout,
                )
                response.raise_for_status()
                payload = response.json()
            except (requests.RequestException, ValueError) as exc:
                logger.warning(
                    "type_name_resolution_failed",
                    extra={"chunk_size": len(chunk), "error": str(exc)},
                )
                continue
            if isinstance(payload, list):
                names.update(map_type_names(payload))
        return names

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def _headers(self, *, authenticated: bool = True) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        if authenticated and self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def _fetch(
        self,
        record_kind: str,
        corporation_id: int | None,
        path_template: str,
        mapper: Callable[[Any], Iterable[T]],
        *,
        paginated: bool = True,
    ) -> FetchResult[T]:
        try:
            if not self._access_token:
                raise MissingSourceContextError("access_token")
            if corporation_id is None:
                raise MissingSourceContextError("corporation_id")
            path = path_template.format(corporation_id=corporation_id)
            payload = self._get_pages(record_kind, path) if paginated else self._get_json(record_kind, path)
            items = tuple(mapper(payload))
        except HangarKernelError as exc:
            logger.warning(
                "source_fetch_failed",
                extra={
                    "record_kind": record_kind,
                    "corporation_id": corporation_id,
                    "error_code": exc.code,
                    "error": str(exc),
                },
            )
            return FetchResult.failed(_failure_reason(exc), str(exc))

        logger.info(
            "source_fetch_completed",
            extra={
                "record_kind": record_kind,
                "corporation_id": corporation_id,
                "record_count": len(items),
            },
        )
        return FetchResult.success(items)

    def _request(self, path: str, page: int | None = None) -> requests.Response:
        params = {"page": page} if page is not None else None
        try:
            response = self._session.get(
                f"{self._base_url}{path}",
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceUnavailableError(path, str(exc)) from exc
        return response

    def _decode(self, record_kind: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedSourceDataError(record_kind, f"response is not JSON: {exc}") from exc

    def _get_json(self, record_kind: str, path: str) -> Any:
        return self._decode(record_kind, self._request(path))

    def _get_pages(self, record_kind: str, path: str) -> list[Any]:
        rows: list[Any] = []
        page = 1
        while True:
            response = self._request(path, page)
            payload = self._decode(record_kind, response)
            if not isinstance(payload, list):
                raise MalformedSourceDataError(record_kind, f"expected a list on page {page}")
            rows.extend(payload)

            try:
                total_pages = int(response.headers.get("X-Pages", 1))
            except (TypeError, ValueError) as exc:
                raise MalformedSourceDataError(record_kind, f"bad X-Pages header: {exc}") from exc
            if page >= min(total_pages, self._max_pages):
                return rows
            page += 1
