"""Todo API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Path, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.todo.intent import IntentAction
from app.domains.todo.service import TodoService
from app.schemas.base import ResponseSchema
from app.schemas.todo import (
    SmartTodoRequest,
    SmartTodoResult,
    TodoCreate,
    TodoFilter,
    TodoResponse,
    TodoUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/todos", tags=["todos"])

# Past-tense labels reported back to the caller for each applied action.
SMART_ACTION_LABELS = {
    IntentAction.CREATE: "created",
    IntentAction.COMPLETE: "completed",
    IntentAction.UPDATE: "updated",
    IntentAction.UNCLEAR: "unclear",
}


@router.post("", response_model=ResponseSchema, status_code=201)
async def create_todo(
    _request: Request,
    todo_data: TodoCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new todo."""
    service = TodoService(db)
    todo = await service.create_todo(todo_data)

    return ResponseSchema(
        status="success",
        message="Todo created successfully",
        data=TodoResponse.model_validate(todo).model_dump(mode="json"),
    )


@router.get("", response_model=ResponseSchema)
async def get_todos(
    _request: Request,
    assignee: str | None = Query(None),
    completed: bool = Query(False, description="Include completed todos"),
    project_item_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List todos with optional filters."""
    filters = TodoFilter(
        assignee=assignee, include_completed=completed, project_item_id=project_item_id
    )

    service = TodoService(db)
    todos = await service.get_todos_list(filters)

    return ResponseSchema(
        status="success",
        message="Todos retrieved successfully",
        data=[TodoResponse.model_validate(t).model_dump(mode="json") for t in todos],
    )


@router.get("/due-soon", response_model=ResponseSchema)
async def get_due_soon(
    _request: Request,
    within_days: int = Query(2, ge=0, le=365),
    db: AsyncSession = Depends(get_db),
):
    """Open todos due within the next few days."""
    service = TodoService(db)
    todos = await service.get_due_soon(within_days)

    return ResponseSchema(
        status="success",
        message="Due todos retrieved successfully",
        data=[TodoResponse.model_validate(t).model_dump(mode="json") for t in todos],
    )


@router.post("/smart", response_model=ResponseSchema)
async def smart_todo(
    _request: Request,
    payload: SmartTodoRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create, complete or reschedule a todo from a line of free text."""
    service = TodoService(db)
    intent, todo, message = await service.smart_todo(payload.text)

    result = SmartTodoResult(
        action=SMART_ACTION_LABELS[intent.action],
        todo=TodoResponse.model_validate(todo) if todo else None,
    )

    if intent.action is IntentAction.UNCLEAR:
        body = ResponseSchema(status="unclear", message=message, data=result.model_dump(mode="json"))
        return JSONResponse(status_code=400, content=body.model_dump(mode="json"))

    return ResponseSchema(status="success", message=message, data=result.model_dump(mode="json"))


@router.get("/{todo_id}", response_model=ResponseSchema)
async def get_todo(
    _request: Request,
    todo_id: str = Path(..., description="Todo ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a specific todo by ID."""
    service = TodoService(db)
    todo = await service.get_todo_by_id(todo_id)

    return ResponseSchema(
        status="success",
        message="Todo retrieved successfully",
        data=TodoResponse.model_validate(todo).model_dump(mode="json"),
    )


@router.patch("/{todo_id}", response_model=ResponseSchema)
async def update_todo(
    _request: Request,
    todo_id: str = Path(..., description="Todo ID"),
    todo_data: TodoUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update a specific todo."""
    service = TodoService(db)
    todo = await service.update_todo(todo_id, todo_data)

    return ResponseSchema(
        status="success",
        message="Todo updated successfully",
        data=TodoResponse.model_validate(todo).model_dump(mode="json"),
    )


@router.delete("/{todo_id}", response_model=ResponseSchema)
async def delete_todo(
    _request: Request,
    todo_id: str = Path(..., description="Todo ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a specific todo."""
    service = TodoService(db)
    success = await service.delete_todo(todo_id)

    return ResponseSchema(
        status="success" if success else "error",
        message="Todo deleted successfully" if success else "Failed to delete todo",
        data=None,
    )
