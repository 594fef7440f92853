"""Project schemas for request/response serialization."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from .base import BaseModelSchema, BaseSchema

PROJECT_STATUS_PATTERN = "^(active|archived)$"
ITEM_STATUS_PATTERN = "^(backlog|in-progress|complete)$"


class ProjectCreate(BaseSchema):
    """Schema for creating a new project."""

    name: str = Field(..., min_length=1)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or only whitespace")
        return v


class ProjectUpdate(BaseSchema):
    """Schema for updating a project."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    status: str | None = Field(None, pattern=PROJECT_STATUS_PATTERN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Validate and clean the project name."""
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or only whitespace")
        return v


class ProjectResponse(BaseModelSchema):
    """Schema for project response."""

    name: str
    description: str | None = None
    status: str
    updated_at: datetime


class ProjectItemCreate(BaseSchema):
    """Schema for creating a project item."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    acceptance_criteria: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("acceptance_criteria", "acceptanceCriteria"),
    )
    priority: int = Field(default=3, ge=0)
    assignee: str = Field(default="coby", min_length=1, max_length=64)


class ProjectItemUpdate(BaseSchema):
    """Schema for updating a project item. Only fields present in the payload are applied."""

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    acceptance_criteria: list[str] | None = Field(
        None, validation_alias=AliasChoices("acceptance_criteria", "acceptanceCriteria")
    )
    status: str | None = Field(None, pattern=ITEM_STATUS_PATTERN)
    priority: int | None = Field(None, ge=0)
    assignee: str | None = Field(None, min_length=1, max_length=64)


class ProjectItemResponse(BaseModelSchema):
    """Schema for project item response."""

    project_id: str
    title: str
    description: str | None = None
    acceptance_criteria: list[str]
    status: str
    priority: int
    assignee: str
    updated_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None


class ProjectDocUpdate(BaseSchema):
    """Replace a document's title/content, or append to its content."""

    title: str | None = Field(None, min_length=1)
    content: str | None = None
    append: str | None = None


class ProjectDocResponse(BaseModelSchema):
    """Schema for project document response."""

    project_id: str
    doc_type: str
    title: str
    content: str
    updated_at: datetime


class ProjectDetail(ProjectResponse):
    """Schema for a project with its items and documents."""

    items: list[ProjectItemResponse] = []
    docs: list[ProjectDocResponse] = []
