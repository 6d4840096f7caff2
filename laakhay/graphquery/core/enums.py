"""Core enumerations."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle state of a pagination session.

    NEW sessions have not fetched anything yet. ACTIVE sessions hold at least
    one outstanding cursor. FINISHED sessions have no cursors left and refuse
    further pages.
    """

    NEW = "new"
    ACTIVE = "active"
    FINISHED = "finished"
