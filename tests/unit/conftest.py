"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from laakhay.graphquery.models import QueryShape, SubQuery
from laakhay.graphquery.runtime.pagination import PageRequest, RoundResult


class PagedBackend:
    """In-memory executor serving a fixed number of pages per sub-query.

    Cursors are page numbers as strings. A sub-query without a cursor gets its
    first page; the last page comes back without a cursor.
    """

    def __init__(self, pages: dict[str, int], page_size: int = 2) -> None:
        self.pages = pages
        self.page_size = page_size
        self.requests: list[PageRequest] = []

    async def execute(self, request: PageRequest) -> RoundResult:
        self.requests.append(request)
        items = {}
        next_cursors = {}
        for query_id, query in request.queries.items():
            page = int(query.cursor) if query.cursor is not None else 0
            items[query_id] = [f"{query_id}-{page}-{i}" for i in range(self.page_size)]
            if page + 1 < self.pages[query_id]:
                next_cursors[query_id] = str(page + 1)
        return RoundResult(items=items, next_cursors=next_cursors)


def make_shape(dependencies: dict[str, str | None]) -> QueryShape:
    """Build a shape whose definitions just echo the "from" relation."""
    queries = {}
    for query_id, parent in dependencies.items():
        definition = {"nodes": {"from": parent}} if parent else {"nodes": {}}
        queries[query_id] = SubQuery(from_=parent, definition=definition)
    return QueryShape(queries=queries)


@pytest.fixture
def chain_shape() -> QueryShape:
    """A <- B <- C."""
    return make_shape({"A": None, "B": "A", "C": "B"})


@pytest.fixture
def branch_shape() -> QueryShape:
    """A <- B, plus independent root D."""
    return make_shape({"A": None, "B": "A", "D": None})


@pytest.fixture
def shape_factory():
    """Factory building shapes from an id -> "from" id map."""
    return make_shape


@pytest.fixture
def backend_factory():
    """Factory building PagedBackend instances."""
    return PagedBackend
