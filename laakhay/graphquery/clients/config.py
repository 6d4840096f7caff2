"""Shared instances-query client constants.

This module centralizes the endpoint path and header names used by the
instances-query client so the client itself can stay small and focused.
"""

from __future__ import annotations

# Composite query endpoint, relative to the service base URL
QUERY_PATH = "/api/v1/projects/{project}/models/instances/query"

DEFAULT_TIMEOUT = 30.0

# Seconds to wait after a 429 when the service sends no Retry-After header
DEFAULT_RETRY_AFTER = 60

REQUEST_ID_HEADER = "X-Request-Id"
RETRY_AFTER_HEADER = "Retry-After"


def query_path(project: str) -> str:
    """Get the query endpoint path for a project.

    Raises:
        ValueError: If project is empty
    """
    if not project:
        raise ValueError("project must be non-empty")
    return QUERY_PATH.format(project=project)
