"""Dependency forest construction.

Sub-queries arrive as a flat map of id to the id they continue from. Entries
may appear before their parent does, so parents are created as placeholders
and filled in once their own entry is reached.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ...core.exceptions import ShapeError
from .definitions import DependencyForest, SubQueryNode
from .telemetry import log_forest_built


def build_forest(dependencies: Mapping[str, str | None]) -> DependencyForest:
    """Link a flat id -> "from" id map into a dependency forest.

    Args:
        dependencies: Sub-query id mapped to the id it continues from (or None)

    Returns:
        DependencyForest with roots and children in input order

    Raises:
        ShapeError: If a "from" id is not part of the input, or the relations
            contain a cycle
    """
    parents: dict[str, str | None] = {}
    children: dict[str, list[str]] = {}
    roots: list[str] = []

    for query_id, parent_id in dependencies.items():
        if parent_id is not None:
            # Placeholder until the parent's own entry is reached
            children.setdefault(parent_id, []).append(query_id)
        children.setdefault(query_id, [])
        parents[query_id] = parent_id
        if parent_id is None:
            roots.append(query_id)

    dangling = [query_id for query_id in children if query_id not in parents]
    if dangling:
        referrers = sorted(
            query_id for query_id, parent_id in parents.items() if parent_id in dangling
        )
        raise ShapeError(
            f"Sub-queries {referrers} continue from unknown sub-queries {sorted(dangling)}",
            dangling,
        )

    reachable: set[str] = set()
    stack = list(roots)
    while stack:
        current = stack.pop()
        reachable.add(current)
        stack.extend(children[current])

    cyclic = [query_id for query_id in parents if query_id not in reachable]
    if cyclic:
        raise ShapeError(f"Sub-queries {sorted(cyclic)} form a cycle", cyclic)

    nodes = {
        query_id: SubQueryNode(
            id=query_id,
            parent=parents[query_id],
            children=tuple(children[query_id]),
        )
        for query_id in parents
    }
    forest = DependencyForest(nodes=MappingProxyType(nodes), roots=tuple(roots))

    log_forest_built(total_queries=len(forest), roots=forest.roots)

    return forest
