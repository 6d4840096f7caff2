"""Data models for composite graph queries.

Architecture:
    User-facing inputs are Pydantic v2 models frozen after construction, so a
    query shape can be shared across sessions without copying.
"""

from .query import QueryShape, SubQuery

__all__ = [
    "QueryShape",
    "SubQuery",
]
