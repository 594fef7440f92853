"""Tile service layer with business logic."""

import base64
import binascii
import logging
import time
from pathlib import Path

from sqlalchemy import Text, cast, desc, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.base import ValidationError
from app.exceptions.tile import DuplicateTileError, TileNotFoundError
from app.schemas.tile import FeedbackCreate, FilterMode, TileCreate, TileFilter, TileUpdate
from models.tile import Tile

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50
PNG_DATA_URL_PREFIX = "data:image/png;base64,"


class TileService:
    """Service class for tile business logic."""

    def __init__(self, db: AsyncSession, screenshots_dir: Path | None = None):
        self.db = db
        self.screenshots_dir = screenshots_dir

    async def create_tile(self, tile_data: TileCreate) -> Tile:
        """Create a tile, keeping a caller-supplied id when one is given."""
        tile = Tile(
            type=tile_data.type,
            content=tile_data.content,
            source=tile_data.source,
            tags=list(tile_data.tags),
            reactions=[],
        )
        if tile_data.id:
            tile.id = tile_data.id

        try:
            self.db.add(tile)
            await self.db.commit()
            await self.db.refresh(tile)
            return tile
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateTileError() from e

    async def get_tile_by_id(self, tile_id: str) -> Tile:
        tile = await self.db.get(Tile, tile_id)
        if not tile:
            raise TileNotFoundError()
        return tile

    async def get_tiles_list(self, filters: TileFilter) -> list[Tile]:
        """List tiles for a filter mode, optionally narrowed by type or a search term.

        ``new`` hides archived and saved-for-later tiles, ``saved`` shows
        saved-for-later tiles that are not archived and ``all`` shows
        everything. A search term ignores the mode and looks through every
        non-archived tile.
        """
        if filters.search:
            return await self.search_tiles(filters.search, filters.type)

        query = select(Tile)

        if filters.type:
            query = query.where(Tile.type == filters.type)

        if filters.mode == FilterMode.new:
            query = query.where(Tile.archived.is_(False), Tile.saved_for_later.is_(False))
        elif filters.mode == FilterMode.saved:
            query = query.where(Tile.saved_for_later.is_(True), Tile.archived.is_(False))

        query = query.order_by(desc(Tile.pinned), desc(Tile.created_at))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def search_tiles(self, term: str, tile_type: str | None = None) -> list[Tile]:
        pattern = f"%{term}%"
        query = select(Tile).where(
            Tile.archived.is_(False),
            or_(
                cast(Tile.content, Text).like(pattern),
                cast(Tile.tags, Text).like(pattern),
                Tile.type.like(pattern),
            ),
        )
        if tile_type:
            query = query.where(Tile.type == tile_type)
        query = query.order_by(desc(Tile.pinned), desc(Tile.created_at)).limit(SEARCH_LIMIT)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_tile(self, tile_id: str, tile_data: TileUpdate) -> Tile:
        """Apply only the fields present in the payload."""
        tile = await self.get_tile_by_id(tile_id)

        update_data = tile_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None:
                continue
            setattr(tile, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(tile)
            return tile
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationError(f"Failed to update tile: {str(e)}")

    async def delete_tile(self, tile_id: str) -> bool:
        tile = await self.get_tile_by_id(tile_id)
        await self.db.delete(tile)
        await self.db.commit()
        return True

    async def create_feedback(self, feedback: FeedbackCreate) -> Tile:
        """Store an optional screenshot and record the feedback as a tile."""
        screenshot_path = None
        if feedback.screenshot:
            screenshot_path = self._save_screenshot(feedback.screenshot)

        return await self.create_tile(
            TileCreate(
                type="feedback",
                content={
                    "text": feedback.text,
                    "screenshot": str(screenshot_path) if screenshot_path else None,
                    "url": feedback.url,
                    "userAgent": feedback.user_agent,
                },
                source="dashboard",
                tags=["feedback"],
            )
        )

    def _save_screenshot(self, data: str) -> Path:
        if self.screenshots_dir is None:
            raise ValidationError("Screenshot storage is not configured")

        if data.startswith(PNG_DATA_URL_PREFIX):
            data = data[len(PNG_DATA_URL_PREFIX):]
        try:
            png = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError(
                "Screenshot is not valid base64", details={"field": "screenshot"}
            ) from e

        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshots_dir / f"feedback-{int(time.time() * 1000)}.png"
        path.write_bytes(png)
        logger.info("Saved feedback screenshot to %s", path)
        return path
