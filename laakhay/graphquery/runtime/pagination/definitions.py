"""Pagination state definitions and request structures.

This module defines the data structures shared by the forest builder, the
leaf selector and the round executor: the dependency forest itself, the
per-round cursor snapshot, and the request/result envelopes exchanged with
the remote executor.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ...core.enums import SessionState
from ...models.query import SubQuery


@dataclass(frozen=True)
class SubQueryNode:
    """One sub-query in the dependency forest.

    Attributes:
        id: Sub-query id
        parent: Id of the sub-query this one continues from (None for roots)
        children: Ids of sub-queries continuing from this one, in input order
    """

    id: str
    parent: str | None = None
    children: tuple[str, ...] = ()


@dataclass(frozen=True)
class DependencyForest:
    """Id-indexed forest of sub-queries linked by their "from" relation.

    Built once per query shape and shared read-only by every session using
    that shape.

    Attributes:
        nodes: Node table keyed by sub-query id, in input order
        roots: Ids of nodes without a parent, in input order
    """

    nodes: Mapping[str, SubQueryNode]
    roots: tuple[str, ...]

    def __contains__(self, query_id: object) -> bool:
        return query_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def node(self, query_id: str) -> SubQueryNode:
        return self.nodes[query_id]

    def children(self, query_id: str) -> tuple[str, ...]:
        return self.nodes[query_id].children

    def ancestors(self, query_id: str) -> list[str]:
        """Return the ids above ``query_id``, nearest parent first."""
        result: list[str] = []
        parent = self.nodes[query_id].parent
        while parent is not None:
            result.append(parent)
            parent = self.nodes[parent].parent
        return result

    def descendants(self, query_id: str) -> list[str]:
        """Return every id below ``query_id``, depth-first in child order."""
        result: list[str] = []
        stack = list(reversed(self.nodes[query_id].children))
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self.nodes[current].children))
        return result

    def root_of(self, query_id: str) -> str:
        ancestors = self.ancestors(query_id)
        return ancestors[-1] if ancestors else query_id


@dataclass(frozen=True)
class CursorRound:
    """Snapshot of pagination progress between two rounds.

    A round is never modified: each executor call derives a brand-new round
    from the cursors it got back, so a failed call leaves the previous round
    intact and safe to retry.

    Attributes:
        is_new: True until the first round has been fetched
        cursors: Cursors returned by the most recent round
        last_cursors: Cursors returned by the round before that
        never_paginate: Sub-query ids never selected for cursor advancement
    """

    is_new: bool = True
    cursors: Mapping[str, str] = field(default_factory=dict)
    last_cursors: Mapping[str, str] = field(default_factory=dict)
    never_paginate: frozenset[str] = frozenset()

    @classmethod
    def initial(cls, never_paginate: Iterable[str] | None = None) -> CursorRound:
        """Create the round a new session starts from."""
        return cls(is_new=True, never_paginate=frozenset(never_paginate or ()))

    @property
    def finished(self) -> bool:
        return not self.is_new and not self.cursors

    @property
    def state(self) -> SessionState:
        if self.is_new:
            return SessionState.NEW
        if self.cursors:
            return SessionState.ACTIVE
        return SessionState.FINISHED

    def is_excluded(self, query_id: str) -> bool:
        return query_id in self.never_paginate

    def advance(
        self,
        next_cursors: Mapping[str, str | None],
        working_set: Iterable[str] | None = None,
    ) -> CursorRound:
        """Derive the round that follows a successful executor call.

        Args:
            next_cursors: Cursors returned by the executor
            working_set: Ids that belong to the query; other cursors are dropped

        Returns:
            New round with ``cursors`` set to the returned cursors and
            ``last_cursors`` set to this round's cursors
        """
        allowed = set(working_set) if working_set is not None else None
        cursors = {
            query_id: cursor
            for query_id, cursor in next_cursors.items()
            if cursor is not None and (allowed is None or query_id in allowed)
        }
        return CursorRound(
            is_new=False,
            cursors=cursors,
            last_cursors=dict(self.cursors),
            never_paginate=self.never_paginate,
        )

    def finish(self) -> CursorRound:
        """Derive a finished round without contacting the executor."""
        return CursorRound(is_new=False, never_paginate=self.never_paginate)


@dataclass(frozen=True)
class RequestedQuery:
    """A sub-query as submitted in one round, with its optional cursor."""

    query_id: str
    sub_query: SubQuery
    cursor: str | None = None


@dataclass(frozen=True)
class PageRequest:
    """Request for one round, keyed by sub-query id in shape order.

    Attributes:
        queries: Sub-queries to submit, each with its cursor (if any)
        parameters: Query parameters forwarded verbatim
    """

    queries: Mapping[str, RequestedQuery]
    parameters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def ids(self) -> list[str]:
        return list(self.queries)

    @property
    def cursors(self) -> dict[str, str]:
        return {
            query_id: query.cursor
            for query_id, query in self.queries.items()
            if query.cursor is not None
        }

    def __len__(self) -> int:
        return len(self.queries)


@dataclass
class RoundResult:
    """Response from the remote executor for one round.

    Attributes:
        items: Items returned, grouped by sub-query id
        next_cursors: Continuation cursors; an id present here has more pages
    """

    items: dict[str, list[Any]] = field(default_factory=dict)
    next_cursors: dict[str, str] = field(default_factory=dict)


@dataclass
class PageResult:
    """Result of one pagination round as seen by the caller.

    Attributes:
        items: Items returned by this round, grouped by sub-query id.
            May be empty if there was no valid request left to make.
        finished: True once no further rounds are possible
        round_index: Zero-based index of the round that produced this page
        leaves: Sub-queries whose cursor was advanced (empty on the first round)
    """

    items: dict[str, list[Any]]
    finished: bool
    round_index: int = 0
    leaves: tuple[str, ...] = ()

    @property
    def total_items(self) -> int:
        return sum(len(items) for items in self.items.values())
