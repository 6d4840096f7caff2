"""Core components."""

from .enums import SessionState
from .exceptions import (
    ExecutorError,
    GraphQueryError,
    RateLimitError,
    ShapeError,
    UseAfterFinishedError,
)

__all__ = [
    "SessionState",
    "GraphQueryError",
    "ShapeError",
    "ExecutorError",
    "RateLimitError",
    "UseAfterFinishedError",
]
