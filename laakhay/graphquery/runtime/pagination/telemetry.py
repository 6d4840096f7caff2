"""Structured logging for pagination rounds.

This module provides telemetry hooks for the pagination engine, emitting
structured logs for observability. The library never configures handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def log_forest_built(*, total_queries: int, roots: Iterable[str]) -> None:
    """Log dependency forest construction.

    Args:
        total_queries: Number of sub-queries in the forest
        roots: Ids of the root sub-queries
    """
    logger.debug(
        "forest_built",
        extra={
            "total_queries": total_queries,
            "roots": list(roots),
        },
    )


def log_round_planned(
    *,
    round_index: int,
    leaves: Iterable[str],
    query_ids: Iterable[str],
    cursor_ids: Iterable[str],
) -> None:
    """Log the request composed for a round.

    Args:
        round_index: Zero-based round index
        leaves: Sub-queries whose cursor is being advanced
        query_ids: Every sub-query included in the request
        cursor_ids: Sub-queries submitted with a cursor
    """
    logger.debug(
        "round_planned",
        extra={
            "round_index": round_index,
            "leaves": list(leaves),
            "query_ids": list(query_ids),
            "cursor_ids": list(cursor_ids),
        },
    )


def log_round_completed(
    *,
    round_index: int,
    items_returned: int,
    cursors_returned: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single round.

    Args:
        round_index: Zero-based round index
        items_returned: Number of items across all sub-queries
        cursors_returned: Number of continuation cursors returned
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "round_completed",
        extra={
            "round_index": round_index,
            "items_returned": items_returned,
            "cursors_returned": cursors_returned,
            "latency_ms": latency_ms,
        },
    )


def log_round_error(
    *,
    round_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log an executor failure.

    Args:
        round_index: Zero-based round index
        error_type: Exception class name
        error_message: Exception message
    """
    logger.warning(
        "round_error",
        extra={
            "round_index": round_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_cursor_dropped(*, query_ids: Iterable[str]) -> None:
    """Log cursors returned for sub-queries outside the working set."""
    logger.warning(
        "cursor_dropped",
        extra={"query_ids": sorted(query_ids)},
    )


def log_pagination_finished(*, rounds: int, excluded_cursors: Iterable[str] = ()) -> None:
    """Log that a session has no more rounds to run.

    Args:
        rounds: Number of rounds run, including a final round that made no request
        excluded_cursors: Outstanding cursors left behind because they are excluded
    """
    logger.info(
        "pagination_finished",
        extra={
            "rounds": rounds,
            "excluded_cursors": sorted(excluded_cursors),
        },
    )
