"""Runtime orchestration components."""

from .pagination import (
    CursorRound,
    DependencyForest,
    LeafSelector,
    PageRequest,
    PageResult,
    RoundExecutor,
    RoundResult,
    build_forest,
)

__all__ = [
    "CursorRound",
    "DependencyForest",
    "LeafSelector",
    "PageRequest",
    "PageResult",
    "RoundExecutor",
    "RoundResult",
    "build_forest",
]
