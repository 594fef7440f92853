# python
"""Database engine and session utilities.

This module sets up the asynchronous SQLite engine and session factory, applies
the schema (table creation plus additive column/index migrations) and provides
a utility for fetching an asynchronous database session.
"""
import json
import logging
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from models import Base

logger = logging.getLogger(__name__)

# Additive migrations for databases created by older releases. Each statement is
# safe to re-run: re-adding an existing column fails with "duplicate column name"
# and only that failure is ignored.
DUPLICATE_COLUMN = "duplicate column name"

ADDITIVE_MIGRATIONS = [
    "ALTER TABLE tiles ADD COLUMN pinned BOOLEAN NOT NULL DEFAULT 0",
    "ALTER TABLE tiles ADD COLUMN saved_for_later BOOLEAN NOT NULL DEFAULT 0",
    "ALTER TABLE tiles ADD COLUMN reactions JSON NOT NULL DEFAULT '[]'",
    "CREATE INDEX IF NOT EXISTS idx_tiles_pinned ON tiles(pinned)",
    "ALTER TABLE todos ADD COLUMN due_date DATE",
    "CREATE INDEX IF NOT EXISTS idx_todos_due_date ON todos(due_date)",
    "ALTER TABLE todos ADD COLUMN project_item_id VARCHAR(64)",
    "CREATE INDEX IF NOT EXISTS idx_todos_project_item ON todos(project_item_id)",
    "ALTER TABLE todos ADD COLUMN github_id VARCHAR(255)",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_todos_github_id ON todos(github_id)",
]


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys enabled."""
    db_url = make_url(url)
    if db_url.get_backend_name() == "sqlite" and db_url.database not in (None, "", ":memory:"):
        Path(db_url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    # Keep non-ASCII text as-is in JSON columns so LIKE searches can match it.
    new_engine = create_async_engine(
        url, echo=echo, json_serializer=lambda obj: json.dumps(obj, ensure_ascii=False)
    )

    if db_url.get_backend_name() == "sqlite":

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def init_db(target: AsyncEngine | None = None) -> None:
    """Create missing tables, then apply the additive migrations."""
    target = target or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    applied = 0
    for statement in ADDITIVE_MIGRATIONS:
        try:
            async with target.begin() as conn:
                await conn.execute(text(statement))
            applied += 1
        except OperationalError as e:
            if DUPLICATE_COLUMN not in str(e.orig).lower():
                logger.error("Migration failed: %s (%s)", statement, e.orig)
                raise
    logger.debug("Schema ready (%d migration statements applied)", applied)


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSessionLocal() as session:
        yield session
