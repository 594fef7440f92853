"""Tile schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .base import BaseModelSchema, BaseSchema


class FilterMode(str, Enum):
    """Which tiles a listing returns, based on the archived/saved-for-later flags."""

    new = "new"
    saved = "saved"
    all = "all"


class TileCreate(BaseSchema):
    """Schema for creating a tile."""

    id: str | None = Field(None, min_length=1, max_length=64)
    type: str = Field(..., min_length=1, max_length=64)
    content: Any = Field(...)
    source: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Tile content is required")
        return v


class TileUpdate(BaseSchema):
    """Schema for updating a tile. Only fields present in the payload are applied."""

    content: Any = None
    tags: list[str] | None = None
    read: bool | None = None
    starred: bool | None = None
    archived: bool | None = None
    pinned: bool | None = None
    saved_for_later: bool | None = Field(
        None, validation_alias=AliasChoices("saved_for_later", "savedForLater")
    )
    reactions: list[str] | None = None


class TileResponse(BaseModelSchema):
    """Schema for tile response."""

    type: str
    content: Any
    source: str | None = None
    tags: list[str]
    read: bool
    starred: bool
    archived: bool
    pinned: bool
    saved_for_later: bool
    reactions: list[str]
    updated_at: datetime


class TileFilter(BaseSchema):
    """Schema for filtering tiles."""

    type: str | None = None
    mode: FilterMode = FilterMode.new
    search: str | None = None


class FeedbackCreate(BaseSchema):
    """Feedback submitted from the dashboard UI."""

    text: str = Field(..., min_length=1)
    screenshot: str | None = None  # data URL or bare base64 PNG
    url: str | None = None
    user_agent: str | None = Field(None, validation_alias=AliasChoices("user_agent", "userAgent"))
