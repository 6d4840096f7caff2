"""Pagination sessions over composite graph queries.

A session owns the current CursorRound of one pagination run. Each call to
``next_page`` performs exactly one round and only replaces the stored round
once that round has fully succeeded, so a failed or cancelled call can be
retried without skipping or repeating data.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Hashable, Iterable
from typing import Any

from ..core.enums import SessionState
from ..core.exceptions import GraphQueryError, UseAfterFinishedError
from ..models.query import QueryShape
from ..runtime.pagination import (
    CursorRound,
    DependencyForest,
    FetchPage,
    PageResult,
    RoundExecutor,
)


class PaginationSession:
    """Stateful handle for paginating one query shape."""

    def __init__(
        self,
        executor: RoundExecutor,
        never_paginate: Iterable[str] | None = None,
    ) -> None:
        self._executor = executor
        self._round = CursorRound.initial(never_paginate)
        self._rounds_run = 0

    @property
    def round(self) -> CursorRound:
        """Last successfully completed round."""
        return self._round

    @property
    def state(self) -> SessionState:
        return self._round.state

    @property
    def is_finished(self) -> bool:
        return self._round.finished

    @property
    def rounds_run(self) -> int:
        return self._rounds_run

    @property
    def forest(self) -> DependencyForest:
        return self._executor.forest

    async def next_page(self) -> PageResult:
        """Run one round and return its items.

        Raises:
            UseAfterFinishedError: If the session is already finished
            Exception: Executor errors, unchanged; the session keeps its round
        """
        if self._round.finished:
            raise UseAfterFinishedError("Attempted to fetch a page from a finished session")

        page, next_round = await self._executor.execute(
            self._round, round_index=self._rounds_run
        )
        self._round = next_round
        self._rounds_run += 1
        return page

    async def pages(self) -> AsyncIterator[PageResult]:
        """Yield pages until the session is finished."""
        while not self.is_finished:
            yield await self.next_page()


def start_session(
    shape: QueryShape,
    never_paginate: Iterable[str] | None = None,
    *,
    fetch_page: FetchPage,
    forest: DependencyForest | None = None,
) -> PaginationSession:
    """Start a pagination session.

    Args:
        shape: Query shape to paginate
        never_paginate: Sub-query ids whose cursors are never followed, for
            sub-queries known to fit in one page even though the executor
            still returns a cursor for them
        fetch_page: Async function submitting a PageRequest to the remote executor
        forest: Prebuilt forest to reuse across sessions of the same shape

    Returns:
        PaginationSession in the NEW state

    Raises:
        ShapeError: If the shape has dangling or cyclic "from" relations
    """
    executor = RoundExecutor(shape, fetch_page=fetch_page, forest=forest)
    return PaginationSession(executor, never_paginate)


async def query_all(
    shape: QueryShape,
    never_paginate: Iterable[str] | None = None,
    *,
    fetch_page: FetchPage,
    dedupe_key: Callable[[Any], Hashable] | None = None,
    max_rounds: int | None = None,
) -> dict[str, list[Any]]:
    """Follow every cursor until exhausted and aggregate the items.

    Ancestors are replayed while their descendants are paged, so the same
    item may be returned several times. Pass ``dedupe_key`` to keep only the
    first occurrence of each key per sub-query.

    Args:
        shape: Query shape to paginate
        never_paginate: Sub-query ids whose cursors are never followed
        fetch_page: Async function submitting a PageRequest to the remote executor
        dedupe_key: Optional function returning an identity key for an item
        max_rounds: Optional upper bound on the number of rounds

    Returns:
        Items grouped by sub-query id

    Raises:
        ShapeError: If the shape is malformed
        GraphQueryError: If ``max_rounds`` is exceeded
    """
    if max_rounds is not None and max_rounds < 1:
        raise ValueError("max_rounds must be at least 1")

    session = start_session(shape, never_paginate, fetch_page=fetch_page)
    aggregated: dict[str, list[Any]] = {}
    seen: dict[str, set[Hashable]] = {}

    async for page in session.pages():
        for query_id, items in page.items.items():
            bucket = aggregated.setdefault(query_id, [])
            if dedupe_key is None:
                bucket.extend(items)
                continue
            keys = seen.setdefault(query_id, set())
            for item in items:
                key = dedupe_key(item)
                if key not in keys:
                    keys.add(key)
                    bucket.append(item)

        if max_rounds is not None and not session.is_finished and session.rounds_run >= max_rounds:
            raise GraphQueryError(f"Pagination did not finish within {max_rounds} rounds")

    return aggregated
