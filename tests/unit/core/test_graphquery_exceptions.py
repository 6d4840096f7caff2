"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from laakhay.graphquery.core import (
    ExecutorError,
    GraphQueryError,
    RateLimitError,
    ShapeError,
    UseAfterFinishedError,
)


def test_rate_limit_error_with_retry_after():
    """Test RateLimitError with retry_after (meaningful behavior)."""
    error = RateLimitError("rate limit", retry_after=120, request_id="req-1")
    assert error.status_code == 429
    assert error.retry_after == 120
    assert error.request_id == "req-1"
    assert isinstance(error, ExecutorError)
    assert isinstance(error, GraphQueryError)


def test_executor_error_with_status_code():
    """Test ExecutorError with status_code (meaningful behavior)."""
    error = ExecutorError("error", status_code=400)
    assert str(error) == "error"
    assert error.status_code == 400
    assert error.request_id is None
    assert isinstance(error, GraphQueryError)


def test_shape_error_sorts_query_ids():
    """Test ShapeError keeps the offending ids in sorted order."""
    error = ShapeError("cycle", {"b", "a"})
    assert error.query_ids == ["a", "b"]
    assert ShapeError("bad").query_ids == []
    assert isinstance(error, GraphQueryError)


def test_use_after_finished_is_library_error():
    """Test UseAfterFinishedError is catchable as GraphQueryError."""
    assert issubclass(UseAfterFinishedError, GraphQueryError)
    assert not issubclass(UseAfterFinishedError, ExecutorError)
