"""High-level pagination API."""

from .session import PaginationSession, query_all, start_session

__all__ = [
    "PaginationSession",
    "query_all",
    "start_session",
]
