"""Round execution for hierarchical cursor pagination.

This module provides the RoundExecutor class that turns a cursor round into
a request, submits it to the remote executor and folds the response into the
next cursor round.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter

from ...core.exceptions import UseAfterFinishedError
from ...models.query import QueryShape
from .definitions import (
    CursorRound,
    DependencyForest,
    PageRequest,
    PageResult,
    RoundResult,
)
from .forest import build_forest
from .selectors import LeafSelector
from .telemetry import (
    log_cursor_dropped,
    log_pagination_finished,
    log_round_completed,
    log_round_error,
    log_round_planned,
)

FetchPage = Callable[[PageRequest], Awaitable[RoundResult]]


class RoundExecutor:
    """Runs one request/response cycle per call.

    The executor holds no pagination state of its own: every call takes the
    current CursorRound and returns the next one, so a session is free to
    discard the result of a failed or cancelled call.
    """

    def __init__(
        self,
        shape: QueryShape,
        *,
        fetch_page: FetchPage,
        forest: DependencyForest | None = None,
    ) -> None:
        """Initialize round executor.

        Args:
            shape: Query shape to paginate
            fetch_page: Async function submitting a PageRequest to the remote executor
            forest: Prebuilt forest for ``shape`` (built from it when omitted)

        Raises:
            ShapeError: If the forest has to be built and the shape is malformed
        """
        self._shape = shape
        self._forest = forest if forest is not None else build_forest(shape.dependencies())
        self._selector = LeafSelector(self._forest)
        self._fetch_page = fetch_page
        self._working_set = frozenset(shape.queries)

    @property
    def forest(self) -> DependencyForest:
        return self._forest

    @property
    def shape(self) -> QueryShape:
        return self._shape

    def plan(self, cursor_round: CursorRound) -> tuple[list[str], PageRequest | None]:
        """Compose the request for a round without submitting it.

        Args:
            cursor_round: Current pagination state

        Returns:
            Selected leaves and the request to submit. The request is None when
            no leaf is left, which ends pagination.
        """
        if cursor_round.is_new:
            return [], self._selector.full_request(self._shape)

        leaves = self._selector.collect_leaves(cursor_round, self._working_set)
        if not leaves:
            return [], None
        return leaves, self._selector.compose(self._shape, cursor_round, leaves)

    async def execute(
        self, cursor_round: CursorRound, *, round_index: int = 0
    ) -> tuple[PageResult, CursorRound]:
        """Run one round.

        Args:
            cursor_round: Current pagination state
            round_index: Zero-based index of this round, for telemetry

        Returns:
            Page of items for this round and the round to continue from

        Raises:
            UseAfterFinishedError: If ``cursor_round`` is already finished
            Exception: Whatever ``fetch_page`` raises, unchanged
        """
        if cursor_round.finished:
            raise UseAfterFinishedError("Attempted to query using a finished cursor round")

        leaves, request = self.plan(cursor_round)

        # Remaining cursors all belong to excluded sub-queries
        if request is None:
            log_pagination_finished(
                rounds=round_index + 1, excluded_cursors=cursor_round.cursors
            )
            return (
                PageResult(items={}, finished=True, round_index=round_index),
                cursor_round.finish(),
            )

        log_round_planned(
            round_index=round_index,
            leaves=leaves,
            query_ids=request.ids,
            cursor_ids=request.cursors,
        )

        round_start = perf_counter()
        try:
            result = await self._fetch_page(request)
        except Exception as e:
            log_round_error(
                round_index=round_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        latency_ms = (perf_counter() - round_start) * 1000.0

        dropped = set(result.next_cursors) - self._working_set
        if dropped:
            log_cursor_dropped(query_ids=dropped)

        next_round = cursor_round.advance(result.next_cursors, self._working_set)
        items = {query_id: list(values) for query_id, values in result.items.items()}

        log_round_completed(
            round_index=round_index,
            items_returned=sum(len(values) for values in items.values()),
            cursors_returned=len(next_round.cursors),
            latency_ms=latency_ms,
        )
        if next_round.finished:
            log_pagination_finished(rounds=round_index + 1)

        page = PageResult(
            items=items,
            finished=next_round.finished,
            round_index=round_index,
            leaves=tuple(leaves),
        )
        return page, next_round
