"""Schemas for the "now" snapshot (weather, image, quote) and the quotes list.

Both are stored as JSON files; older files written by the dashboard UI use
camelCase timestamps (``updatedAt``, ``createdAt``), which are accepted on read.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, ConfigDict, Field

from .base import BaseSchema


class Weather(BaseSchema):
    model_config = ConfigDict(extra="allow")

    temp: str | float
    condition: str
    high: str | float | None = None
    low: str | float | None = None
    location: str
    updated_at: datetime | None = Field(
        None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )


class NowImage(BaseSchema):
    model_config = ConfigDict(extra="allow")

    url: str
    description: str
    updated_at: datetime | None = Field(
        None, validation_alias=AliasChoices("updated_at", "updatedAt")
    )


class Quote(BaseSchema):
    id: str | None = None
    text: str
    author: str
    source: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(
        None, validation_alias=AliasChoices("created_at", "createdAt")
    )


class QuoteCreate(BaseSchema):
    text: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    source: str | None = None
    tags: list[str] = Field(default_factory=list)


class NowSnapshot(BaseSchema):
    """Persisted part of the snapshot."""

    weather: Weather | None = None
    image: NowImage | None = None


class NowUpdate(BaseSchema):
    weather: Weather | None = None
    image: NowImage | None = None


class NowResponse(NowSnapshot):
    quote: Quote | None = None
