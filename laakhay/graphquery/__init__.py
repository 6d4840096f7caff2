"""Laakhay GraphQuery - Hierarchical cursor pagination for composite graph queries."""

from .api import PaginationSession, query_all, start_session
from .clients import InstancesQueryClient
from .core import (
    ExecutorError,
    GraphQueryError,
    RateLimitError,
    SessionState,
    ShapeError,
    UseAfterFinishedError,
)
from .models import QueryShape, SubQuery
from .runtime import (
    CursorRound,
    DependencyForest,
    LeafSelector,
    PageRequest,
    PageResult,
    RoundExecutor,
    RoundResult,
    build_forest,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "QueryShape",
    "SubQuery",
    # Pagination engine
    "CursorRound",
    "DependencyForest",
    "LeafSelector",
    "PageRequest",
    "PageResult",
    "RoundExecutor",
    "RoundResult",
    "build_forest",
    # Sessions
    "PaginationSession",
    "SessionState",
    "start_session",
    "query_all",
    # Clients
    "InstancesQueryClient",
    # Exceptions
    "GraphQueryError",
    "ShapeError",
    "ExecutorError",
    "RateLimitError",
    "UseAfterFinishedError",
]
