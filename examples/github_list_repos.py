#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from octoloop.github import GithubClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List repositories of the authenticated GitHub user")
    p.add_argument("limit", nargs="?", type=int, default=20)
    p.add_argument("--per-page", type=int, default=100)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        raise SystemExit("Set GITHUB_TOKEN to run this example")

    async with GithubClient(token=token) as gh:
        user = await gh.current_user()
        print(f"Repositories for {user.login} (up to {args.limit}):")
        print(f"{'Name':40} | {'Private':>7} | {'Updated':25}")
        print("-" * 78)
        count = 0
        async with gh.repos(per_page=args.per_page) as stream:
            async for repo in stream:
                updated = repo.updated_at.isoformat() if repo.updated_at else "-"
                print(f"{repo.full_name or repo.name:40} | {str(repo.private):>7} | {updated:25}")
                count += 1
                if count >= args.limit:
                    break
        limit = gh.core_rate_limit.snapshot()
        print(f"Rate limit: {limit.remaining}/{limit.limit} remaining")


if __name__ == "__main__":
    asyncio.run(main())
