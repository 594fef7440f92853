"""Tile-related exceptions."""

from .base import ConflictError, NotFoundError


class TileNotFoundError(NotFoundError):
    def __init__(self, message: str = "Tile not found"):
        super().__init__(message=message, error_code="TILE_NOT_FOUND")


class DuplicateTileError(ConflictError):
    """Raised when a tile is created with an id that already exists."""

    def __init__(self, message: str = "A tile with this id already exists"):
        super().__init__(message=message, error_code="DUPLICATE_TILE")
