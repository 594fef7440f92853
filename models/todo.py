"""
A module defining the ``Todo`` ORM model representing a to-do item.

Todos are created through the API, the smart-todo parser or the GitHub sync
job. ``completed_at`` is set iff ``completed`` is true. ``github_id`` links a
todo to a GitHub Project item and is unique across the table; the sync job
relies on that constraint for its upserts.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, Index, String, Text

from .base import BaseModel


class Todo(BaseModel):
    __tablename__ = "todos"

    title = Column(Text, nullable=False)
    assignee = Column(String(64), default="coby", nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime)
    created_by = Column(String(64), default="coby", nullable=False)
    due_date = Column(Date)
    project_item_id = Column(String(64))
    github_id = Column(String(255))

    __table_args__ = (
        Index("idx_todos_completed", "completed"),
        Index("idx_todos_assignee", "assignee"),
        Index("idx_todos_due_date", "due_date"),
        Index("idx_todos_project_item", "project_item_id"),
        Index("idx_todos_github_id", "github_id", unique=True),
    )
