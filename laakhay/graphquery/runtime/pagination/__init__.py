"""Hierarchical cursor pagination for composite queries.

Architecture:
    The pagination layer consists of:
    - definitions.py: Forest, cursor round and request/result structures
    - forest.py: Dependency forest construction from "from" relations
    - selectors.py: Leaf selection and request composition
    - executors.py: Round execution against the remote executor
    - telemetry.py: Structured logging

Usage:
    A RoundExecutor takes a CursorRound and returns the page for that round
    together with the next CursorRound. Sessions in ``api.session`` keep the
    current round between calls.
"""

from __future__ import annotations

from .definitions import (
    CursorRound,
    DependencyForest,
    PageRequest,
    PageResult,
    RequestedQuery,
    RoundResult,
    SubQueryNode,
)
from .executors import FetchPage, RoundExecutor
from .forest import build_forest
from .selectors import LeafSelector

__all__ = [
    "CursorRound",
    "DependencyForest",
    "FetchPage",
    "LeafSelector",
    "PageRequest",
    "PageResult",
    "RequestedQuery",
    "RoundExecutor",
    "RoundResult",
    "SubQueryNode",
    "build_forest",
]
