"""Tile API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.dependencies import get_db, get_settings
from app.domains.tile.service import TileService
from app.schemas.base import ResponseSchema
from app.schemas.tile import (
    FeedbackCreate,
    FilterMode,
    TileCreate,
    TileFilter,
    TileResponse,
    TileUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tiles", tags=["tiles"])
feedback_router = APIRouter(prefix="/api/feedback", tags=["tiles"])


@router.post("", response_model=ResponseSchema, status_code=201)
async def create_tile(
    _request: Request,
    tile_data: TileCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new tile."""
    service = TileService(db)
    tile = await service.create_tile(tile_data)

    return ResponseSchema(
        status="success",
        message="Tile created successfully",
        data=TileResponse.model_validate(tile).model_dump(mode="json"),
    )


@router.get("", response_model=ResponseSchema)
async def get_tiles(
    _request: Request,
    type: str | None = Query(None, description="Only tiles of this type"),
    mode: FilterMode = Query(FilterMode.new),
    search: str | None = Query(None, min_length=1),
    archived: bool = Query(False, description="Shorthand for mode=all"),
    db: AsyncSession = Depends(get_db),
):
    """List tiles by filter mode, type or search term."""
    filters = TileFilter(type=type, mode=FilterMode.all if archived else mode, search=search)

    service = TileService(db)
    tiles = await service.get_tiles_list(filters)

    return ResponseSchema(
        status="success",
        message="Tiles retrieved successfully",
        data=[TileResponse.model_validate(t).model_dump(mode="json") for t in tiles],
    )


@router.get("/{tile_id}", response_model=ResponseSchema)
async def get_tile(
    _request: Request,
    tile_id: str = Path(..., description="Tile ID"),
    db: AsyncSession = Depends(get_db),
):
    service = TileService(db)
    tile = await service.get_tile_by_id(tile_id)

    return ResponseSchema(
        status="success",
        message="Tile retrieved successfully",
        data=TileResponse.model_validate(tile).model_dump(mode="json"),
    )


@router.patch("/{tile_id}", response_model=ResponseSchema)
async def update_tile(
    _request: Request,
    tile_id: str = Path(..., description="Tile ID"),
    tile_data: TileUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update flags, tags, reactions or content of a tile."""
    service = TileService(db)
    tile = await service.update_tile(tile_id, tile_data)

    return ResponseSchema(
        status="success",
        message="Tile updated successfully",
        data=TileResponse.model_validate(tile).model_dump(mode="json"),
    )


@router.delete("/{tile_id}", response_model=ResponseSchema)
async def delete_tile(
    _request: Request,
    tile_id: str = Path(..., description="Tile ID"),
    db: AsyncSession = Depends(get_db),
):
    service = TileService(db)
    await service.delete_tile(tile_id)

    return ResponseSchema(status="success", message="Tile deleted successfully", data=None)


@feedback_router.post("", response_model=ResponseSchema, status_code=201)
async def submit_feedback(
    _request: Request,
    feedback: FeedbackCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Record UI feedback (with an optional screenshot) as a feedback tile."""
    service = TileService(db, screenshots_dir=settings.screenshots_dir)
    tile = await service.create_feedback(feedback)

    return ResponseSchema(
        status="success", message="Feedback received", data={"id": tile.id}
    )
