"""Remote query executors."""

from .instances import InstancesQueryClient, build_query_body, parse_query_response

__all__ = [
    "InstancesQueryClient",
    "build_query_body",
    "parse_query_response",
]
