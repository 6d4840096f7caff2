"""Custom exception hierarchy."""

from __future__ import annotations

from collections.abc import Iterable


class GraphQueryError(Exception):
    """Base exception for all library errors."""

    pass


class ShapeError(GraphQueryError):
    """Query shape cannot be turned into a dependency forest.

    Raised when a sub-query continues from an id that is not part of the
    query, or when the "from" relations form a cycle.
    """

    def __init__(self, message: str, query_ids: Iterable[str] | None = None) -> None:
        super().__init__(message)
        self.query_ids = sorted(query_ids or [])


class ExecutorError(GraphQueryError):
    """Error from the remote query executor."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.request_id = request_id


class RateLimitError(ExecutorError):
    """Executor rate limit exceeded."""

    def __init__(
        self, message: str, retry_after: int = 60, request_id: str | None = None
    ) -> None:
        super().__init__(message, status_code=429, request_id=request_id)
        self.retry_after = retry_after


class UseAfterFinishedError(GraphQueryError):
    """A finished pagination session was asked for another page."""

    pass
