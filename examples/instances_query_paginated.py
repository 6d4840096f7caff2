#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os

from laakhay.graphquery import InstancesQueryClient, QueryShape, start_session


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Page through a composite instances query")
    p.add_argument("query_file", help="JSON file holding the query body (with/select/parameters)")
    p.add_argument("--base-url", default=os.environ.get("GRAPHQUERY_BASE_URL", ""))
    p.add_argument("--project", default=os.environ.get("GRAPHQUERY_PROJECT", ""))
    p.add_argument("--token", default=os.environ.get("GRAPHQUERY_TOKEN"))
    p.add_argument("--never-paginate", nargs="*", default=[])
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with open(args.query_file) as f:
        shape = QueryShape.from_query_body(json.load(f))

    headers = {"Authorization": f"Bearer {args.token}"} if args.token else None
    async with InstancesQueryClient(args.base_url, args.project, headers=headers) as client:
        session = start_session(shape, args.never_paginate, fetch_page=client.execute)
        print("=" * 65)
        print(f"{'Round':>5} | {'Leaves':30} | {'Items':>8} | {'State':10}")
        print("-" * 65)
        async for page in session.pages():
            leaves = ", ".join(page.leaves) or "-"
            print(
                f"{page.round_index:>5} | {leaves:30} | {page.total_items:>8} | {session.state.value:10}"
            )
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
