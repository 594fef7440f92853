"""
Project tracking models: projects, their work items and their documents.
"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import TimestampedModel


class Project(TimestampedModel):
    """
    Represents a project entity in the application.
    """

    __tablename__ = "projects"

    name = Column(Text, nullable=False)
    description = Column(Text)
    status = Column(String(20), default="active", nullable=False)  # active, archived

    # Relationships
    items = relationship(
        "ProjectItem",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    docs = relationship(
        "ProjectDoc",
        back_populates="project",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_projects_status", "status"),)


class ProjectItem(TimestampedModel):
    """A unit of work inside a project (backlog -> in-progress -> complete)."""

    __tablename__ = "project_items"

    project_id = Column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(Text, nullable=False)
    description = Column(Text)
    acceptance_criteria = Column(JSON, default=list, nullable=False)
    status = Column(String(20), default="backlog", nullable=False)
    priority = Column(Integer, default=3, nullable=False)  # lower = more urgent
    assignee = Column(String(64), default="coby", nullable=False)
    started_at = Column(DateTime)
    completed_at = Column(DateTime)

    project = relationship("Project", back_populates="items")

    __table_args__ = (
        Index("idx_project_items_project", "project_id"),
        Index("idx_project_items_status", "status"),
    )


class ProjectDoc(TimestampedModel):
    """A free-text document attached to a project (features, technical, progress...)."""

    __tablename__ = "project_docs"

    project_id = Column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    doc_type = Column(String(32), nullable=False)
    title = Column(Text, nullable=False)
    content = Column(Text, default="", nullable=False)

    project = relationship("Project", back_populates="docs")

    __table_args__ = (
        Index("idx_project_docs_project", "project_id"),
        Index("idx_project_docs_type", "doc_type"),
    )
