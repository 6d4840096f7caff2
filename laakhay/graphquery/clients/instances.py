"""HTTP executor for composite instances queries.

This module provides InstancesQueryClient, a remote executor that submits a
PageRequest to an instances-query endpoint and parses the response into a
RoundResult. Its ``execute`` method is a drop-in ``fetch_page`` for
sessions. Retries and backoff are left to the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from ..core.exceptions import ExecutorError, RateLimitError
from ..runtime.pagination import PageRequest, RoundResult
from ..utils.http import HTTPClient
from .config import (
    DEFAULT_RETRY_AFTER,
    DEFAULT_TIMEOUT,
    REQUEST_ID_HEADER,
    RETRY_AFTER_HEADER,
    query_path,
)


def build_query_body(request: PageRequest) -> dict[str, Any]:
    """Serialize a PageRequest into the wire format.

    Args:
        request: Request composed for one round

    Returns:
        Body with ``with``, ``select`` and ``cursors`` maps, plus ``parameters``
        when the query has any
    """
    body: dict[str, Any] = {
        "with": {
            query_id: query.sub_query.definition for query_id, query in request.queries.items()
        },
        "select": {
            query_id: query.sub_query.select for query_id, query in request.queries.items()
        },
        "cursors": request.cursors,
    }
    if request.parameters:
        body["parameters"] = dict(request.parameters)
    return body


def parse_query_response(data: Any) -> RoundResult:
    """Parse a query response into a RoundResult.

    Raises:
        ExecutorError: If the response is not a JSON object
    """
    if not isinstance(data, Mapping):
        raise ExecutorError(f"Unexpected query response type: {type(data).__name__}")

    items = {query_id: list(values or []) for query_id, values in (data.get("items") or {}).items()}
    # Exhausted sub-queries may come back with a null cursor
    next_cursors = {
        query_id: cursor
        for query_id, cursor in (data.get("nextCursor") or {}).items()
        if cursor is not None
    }
    return RoundResult(items=items, next_cursors=next_cursors)


class InstancesQueryClient:
    """Remote executor posting composite queries over HTTP."""

    def __init__(
        self,
        base_url: str,
        project: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service base URL
            project: Project the query runs in
            headers: Extra headers sent with every request (e.g. authorization)
            timeout: Total request timeout in seconds
            http: Preconfigured HTTP client (built from the other arguments when omitted)
        """
        self._path = query_path(project)
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout, headers=headers)

    async def execute(self, request: PageRequest) -> RoundResult:
        """Submit one round's request.

        Args:
            request: Request composed for one round

        Returns:
            Parsed items and continuation cursors

        Raises:
            RateLimitError: If the service answers 429
            ExecutorError: On any other HTTP or transport failure
        """
        body = build_query_body(request)
        try:
            data = await self._http.post(self._path, json_body=body)
        except aiohttp.ClientResponseError as e:
            headers = e.headers or {}
            request_id = headers.get(REQUEST_ID_HEADER)
            if e.status == 429:
                raise RateLimitError(
                    f"Query rate limited: {e.message}",
                    retry_after=_parse_retry_after(headers.get(RETRY_AFTER_HEADER)),
                    request_id=request_id,
                ) from e
            raise ExecutorError(
                f"Query failed with status {e.status}: {e.message}",
                status_code=e.status,
                request_id=request_id,
            ) from e
        except asyncio.TimeoutError as e:
            raise ExecutorError("Query timed out") from e
        except aiohttp.ClientError as e:
            raise ExecutorError(f"Query transport error: {e}") from e

        return parse_query_response(data)

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> InstancesQueryClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _parse_retry_after(value: str | None) -> int:
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return max(0, int(float(value)))
    except ValueError:
        return DEFAULT_RETRY_AFTER
