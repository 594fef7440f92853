"""
Models package initialization.
"""

from .base import Base, BaseModel, TimestampedModel, generate_id, utcnow
from .message import Message, MessageRole
from .project import Project, ProjectDoc, ProjectItem
from .tile import Tile
from .todo import Todo

__all__ = [
    "Base",
    "BaseModel",
    "TimestampedModel",
    "generate_id",
    "utcnow",
    "Todo",
    "Tile",
    "Project",
    "ProjectItem",
    "ProjectDoc",
    "Message",
    "MessageRole",
]
