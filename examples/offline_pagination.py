#!/usr/bin/env python3
"""Walk a chained query against an in-memory executor and print each round."""

from __future__ import annotations

import argparse
import asyncio

from laakhay.graphquery import PageRequest, QueryShape, RoundResult, SubQuery, start_session


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Simulate hierarchical cursor pagination")
    p.add_argument("pages", nargs="?", type=int, default=2, help="Pages per sub-query")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    shape = QueryShape(
        queries={
            "startNodes": SubQuery(definition={"nodes": {}}),
            "edges": SubQuery(from_="startNodes", definition={"edges": {"from": "startNodes"}}),
            "endNodes": SubQuery(from_="edges", definition={"nodes": {"from": "edges"}}),
            "other": SubQuery(definition={"nodes": {}}),
        }
    )

    async def fetch_page(request: PageRequest) -> RoundResult:
        items = {}
        cursors = {}
        for query_id, query in request.queries.items():
            page = int(query.cursor or 0)
            items[query_id] = [f"{query_id}[{page}]"]
            if page + 1 < args.pages:
                cursors[query_id] = str(page + 1)
        return RoundResult(items=items, next_cursors=cursors)

    session = start_session(shape, fetch_page=fetch_page)
    async for page in session.pages():
        leaves = ", ".join(page.leaves) or "(first round)"
        fetched = " ".join(item for items in page.items.values() for item in items)
        print(f"round {page.round_index:>2}  advance: {leaves:22} fetched: {fetched}")


if __name__ == "__main__":
    asyncio.run(main())
