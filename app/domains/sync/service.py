"""Reconciliation of local todos against a GitHub Project board.

The board is authoritative. A pull upserts every remote item into ``todos``
keyed on the unique ``github_id`` and completes linked todos that disappeared
from the board. A push creates board items for open, unlinked todos.
"""

import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy import asc, func, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.sync.github import GitHubProjectClient, RemoteItem
from app.domains.todo.service import TodoService
from app.exceptions.base import BaseAppException
from app.exceptions.upstream import GitHubCLIError
from models.base import generate_id, utcnow
from models.todo import Todo

logger = logging.getLogger(__name__)

SYNC_CREATOR = "github-sync"


@dataclass
class SyncStats:
    created: int = 0
    updated: int = 0
    removed: int = 0


@dataclass
class PushStats:
    pushed: int = 0
    failed: int = 0


class GitHubSyncService:
    def __init__(
        self, db: AsyncSession, client: GitHubProjectClient, default_assignee: str = "coby"
    ):
        self.db = db
        self.client = client
        self.default_assignee = default_assignee

    async def fetch_remote(self) -> list[RemoteItem]:
        """Fetch the board items; raises ``GitHubCLIError`` on any failure."""
        return await asyncio.to_thread(self.client.list_items)

    async def pull(self, items: list[RemoteItem]) -> SyncStats:
        """Upsert ``items`` and complete linked todos missing from them.

        Everything is committed in one transaction.
        """
        stats = SyncStats()
        now = utcnow()

        result = await self.db.execute(select(Todo.github_id).where(Todo.github_id.is_not(None)))
        linked = set(result.scalars().all())
        remote_ids = {item.id for item in items}

        try:
            for item in items:
                await self._upsert(item, now)
                if item.id in linked:
                    stats.updated += 1
                else:
                    stats.created += 1
                    linked.add(item.id)

            missing = linked - remote_ids
            if missing:
                await self.db.execute(
                    update(Todo)
                    .where(Todo.github_id.in_(missing))
                    .values(completed=True, completed_at=func.coalesce(Todo.completed_at, now))
                    .execution_options(synchronize_session=False)
                )
            stats.removed = len(missing)

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Pull complete: created=%d updated=%d removed=%d",
            stats.created,
            stats.updated,
            stats.removed,
        )
        return stats

    async def push(self) -> PushStats:
        """Create board items for open todos without a ``github_id``.

        A failure on one todo is logged and does not stop the others.
        """
        stats = PushStats()

        result = await self.db.execute(
            select(Todo.id, Todo.title)
            .where(Todo.github_id.is_(None), Todo.completed.is_(False))
            .order_by(asc(Todo.created_at))
        )
        pending = result.all()
        todos = TodoService(self.db)

        for todo_id, title in pending:
            try:
                remote_id = await asyncio.to_thread(self.client.create_item, title)
                await todos.link_github(todo_id, remote_id)
            except (GitHubCLIError, BaseAppException) as e:
                stats.failed += 1
                logger.error('Failed to push "%s": %s', title, e)
                continue
            stats.pushed += 1
            logger.info('Pushed "%s"', title)

        return stats

    async def _upsert(self, item: RemoteItem, now) -> None:
        done = item.is_done
        stmt = insert(Todo).values(
            id=generate_id(),
            title=item.title,
            github_id=item.id,
            assignee=item.assignees[0] if item.assignees else self.default_assignee,
            completed=done,
            completed_at=now if done else None,
            created_by=SYNC_CREATOR,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Todo.github_id],
            set_={
                "title": stmt.excluded.title,
                "completed": stmt.excluded.completed,
                "completed_at": func.coalesce(Todo.completed_at, now) if done else None,
            },
        )
        await self.db.execute(stmt)
