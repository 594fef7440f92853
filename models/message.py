"""
Chat message model: the append-only conversation log used as chat context.
"""

import enum

from sqlalchemy import Column, Index, String, Text

from .base import BaseModel


class MessageRole(str, enum.Enum):
    """Message role enumeration."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    __tablename__ = "messages"

    role = Column(String(16), nullable=False)
    content = Column(Text, nullable=False)

    __table_args__ = (Index("idx_messages_created", "created_at"),)
