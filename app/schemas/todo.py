"""Todo schemas for request/response serialization."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, Field, field_validator

from .base import BaseModelSchema, BaseSchema


class TodoCreate(BaseSchema):
    """Schema for creating a new todo."""

    title: str = Field(..., min_length=1)
    assignee: str = Field(default="coby", min_length=1, max_length=64)
    created_by: str = Field(
        default="coby", max_length=64, validation_alias=AliasChoices("created_by", "createdBy")
    )
    due_date: date | None = Field(default=None, validation_alias=AliasChoices("due_date", "dueDate"))
    project_item_id: str | None = Field(
        default=None, validation_alias=AliasChoices("project_item_id", "projectItemId")
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title is required")
        return v


class TodoUpdate(BaseSchema):
    """Schema for updating a todo. Only fields present in the payload are applied."""

    title: str | None = Field(None, min_length=1)
    assignee: str | None = Field(None, min_length=1, max_length=64)
    due_date: date | None = Field(None, validation_alias=AliasChoices("due_date", "dueDate"))
    project_item_id: str | None = Field(
        None, validation_alias=AliasChoices("project_item_id", "projectItemId")
    )
    completed: bool | None = None


class TodoResponse(BaseModelSchema):
    """Schema for todo response."""

    title: str
    assignee: str
    completed: bool
    completed_at: datetime | None = None
    created_by: str
    due_date: date | None = None
    project_item_id: str | None = None
    github_id: str | None = None


class TodoFilter(BaseSchema):
    """Schema for filtering todos."""

    assignee: str | None = None
    include_completed: bool = False
    project_item_id: str | None = None


class SmartTodoRequest(BaseSchema):
    """Free-text input for the smart todo endpoint."""

    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text is required")
        return v


class SmartTodoResult(BaseSchema):
    """Outcome of a smart todo request after the action was applied."""

    action: str  # created, completed, updated, unclear
    todo: TodoResponse | None = None
