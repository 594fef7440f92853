#!/usr/bin/env python3
"""
Sync GitHub Project items with dashboard todos. GitHub is the source of truth.

Usage:
    agent-dashboard-sync [--project NUMBER] [--owner OWNER] [--push]
"""

import argparse
import asyncio
import logging
import sys

from app.core.config import settings
from app.core.logging import configure_logging
from app.database import AsyncSessionLocal, engine, init_db
from app.domains.sync.github import GitHubProjectClient
from app.domains.sync.service import GitHubSyncService
from app.exceptions.upstream import GitHubCLIError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync a GitHub Project board with the dashboard todos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  agent-dashboard-sync                     # Pull from the configured project
  agent-dashboard-sync --project 3 --push  # Pull project 3, then push local todos
        """,
    )
    parser.add_argument(
        "--project", default=settings.github_project_number, help="GitHub Project number"
    )
    parser.add_argument("--owner", default=settings.github_owner, help="GitHub Project owner")
    parser.add_argument(
        "--push", action="store_true", help="Also create board items for local-only todos"
    )
    return parser


async def run_sync(project: str, owner: str, push: bool) -> int:
    """Pull (and optionally push); returns the process exit code."""
    await init_db()
    client = GitHubProjectClient(project, owner)

    logger.info("GitHub Project #%s (owner: %s)", project, owner)
    try:
        async with AsyncSessionLocal() as session:
            service = GitHubSyncService(session, client, settings.default_assignee)

            logger.info("Pulling from GitHub...")
            try:
                items = await service.fetch_remote()
            except GitHubCLIError as e:
                logger.error("Failed to fetch GitHub items: %s", e)
                return 1
            logger.info("Found %d items", len(items))

            stats = await service.pull(items)
            logger.info(
                "Created: %d, Updated: %d, Removed: %d", stats.created, stats.updated, stats.removed
            )

            if push:
                logger.info("Pushing local items to GitHub...")
                push_stats = await service.push()
                logger.info("Pushed: %d items (%d failed)", push_stats.pushed, push_stats.failed)
    finally:
        await engine.dispose()

    logger.info("Sync complete!")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    return asyncio.run(run_sync(str(args.project), args.owner, args.push))


if __name__ == "__main__":
    sys.exit(main())
