"""Leaf selection for hierarchical cursor pagination.

Cursors are per sub-query, but sub-queries depend on each other. Resubmitting
every outstanding cursor at once would page a child against an already
advanced parent, so instead each round steps only the "leaf" cursors forward.

Take four sub-queries [A, B, C, D] where C continues from B, B from A, and A
and D stand alone. The first round returns cursors [A1, B1, C1, D1]. The next
request advances the leaves only: [-, -, C1, D1]. Once D and C are exhausted,
B becomes a leaf and is advanced while C is resubmitted without a cursor,
because C's result set depends on which page of B is in view. Ancestors of a
leaf are replayed with the cursors they held one round earlier.

Only "from" relations are handled. Every sub-query has at most one parent,
so the query is a forest rather than a general graph.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ...core.exceptions import UseAfterFinishedError
from ...models.query import QueryShape
from .definitions import CursorRound, DependencyForest, PageRequest, RequestedQuery


class LeafSelector:
    """Selects which cursors to advance in the next round.

    A sub-query is a leaf when it is still in the working set, none of its
    descendants is a leaf, it is not excluded from pagination, and the round
    holds a cursor for it. Each independent branch contributes at most one leaf.
    """

    def __init__(self, forest: DependencyForest) -> None:
        """Initialize leaf selector.

        Args:
            forest: Dependency forest of the query shape
        """
        self._forest = forest

    @property
    def forest(self) -> DependencyForest:
        return self._forest

    def collect_leaves(
        self,
        cursor_round: CursorRound,
        working_set: Iterable[str] | None = None,
    ) -> list[str]:
        """Find the pagination leaves for a round.

        Args:
            cursor_round: Current pagination state
            working_set: Sub-queries still part of the query (default: all)

        Returns:
            Leaf ids in depth-first order. Empty when every outstanding cursor
            belongs to an excluded sub-query.

        Raises:
            UseAfterFinishedError: If the round is already finished
        """
        if cursor_round.finished:
            raise UseAfterFinishedError("Attempted to select leaves from a finished round")

        remaining = set(working_set) if working_set is not None else set(self._forest)
        leaves: list[str] = []
        for root in self._forest.roots:
            self._find_leaves(root, cursor_round, remaining, leaves)
        return leaves

    def _find_leaves(
        self,
        query_id: str,
        cursor_round: CursorRound,
        remaining: set[str],
        leaves: list[str],
    ) -> bool:
        if query_id not in remaining:
            return False

        # Every child is visited so that sibling branches can each yield a leaf
        handled = False
        for child in self._forest.children(query_id):
            handled |= self._find_leaves(child, cursor_round, remaining, leaves)

        if handled:
            return True

        if not cursor_round.is_excluded(query_id) and query_id in cursor_round.cursors:
            leaves.append(query_id)
            return True

        return False

    def compose(
        self,
        shape: QueryShape,
        cursor_round: CursorRound,
        leaves: Sequence[str],
    ) -> PageRequest:
        """Build the request that advances the given leaves.

        Args:
            shape: Query shape the forest was built from
            cursor_round: Current pagination state
            leaves: Leaves returned by ``collect_leaves``

        Returns:
            PageRequest with each leaf at its current cursor, its descendants
            without a cursor, and its ancestors at their previous-round cursor
        """
        cursors: dict[str, str | None] = {}
        for leaf in leaves:
            cursors[leaf] = cursor_round.cursors[leaf]

            for child in self._forest.descendants(leaf):
                cursors[child] = None

            for parent in self._forest.ancestors(leaf):
                if cursor_round.is_excluded(parent):
                    cursors[parent] = None
                else:
                    cursors[parent] = cursor_round.last_cursors.get(parent)

        queries = {
            query_id: RequestedQuery(
                query_id=query_id,
                sub_query=sub_query,
                cursor=cursors[query_id],
            )
            for query_id, sub_query in shape.subset(cursors).items()
        }
        return PageRequest(queries=queries, parameters=dict(shape.parameters))

    def full_request(self, shape: QueryShape) -> PageRequest:
        """Build the first-round request: every sub-query, no cursors."""
        queries = {
            query_id: RequestedQuery(query_id=query_id, sub_query=sub_query)
            for query_id, sub_query in shape.queries.items()
        }
        return PageRequest(queries=queries, parameters=dict(shape.parameters))
