"""
Tile model: a generic content card with a type tag and a free-form JSON payload.

The boolean flags are independent dimensions. ``archived`` and
``saved_for_later`` together drive the ``new``/``saved``/``all`` filter modes.
"""

from sqlalchemy import JSON, Boolean, Column, Index, String, Text

from .base import TimestampedModel


class Tile(TimestampedModel):
    __tablename__ = "tiles"

    type = Column(String(64), nullable=False)
    content = Column(JSON, nullable=False)
    source = Column(Text)
    tags = Column(JSON, default=list, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    starred = Column(Boolean, default=False, nullable=False)
    archived = Column(Boolean, default=False, nullable=False)
    pinned = Column(Boolean, default=False, nullable=False)
    saved_for_later = Column(Boolean, default=False, nullable=False)
    reactions = Column(JSON, default=list, nullable=False)

    __table_args__ = (
        Index("idx_tiles_type", "type"),
        Index("idx_tiles_created", "created_at"),
        Index("idx_tiles_archived", "archived"),
        Index("idx_tiles_pinned", "pinned"),
    )
