"""Todo service layer with business logic."""

import logging
from datetime import date, timedelta

from sqlalchemy import asc, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.domains.todo.intent import IntentAction, ParsedIntent, TodoRef, parse_intent
from app.exceptions.todo import (
    DuplicateGithubLinkError,
    InvalidTodoOperationError,
    TodoNotFoundError,
)
from app.schemas.todo import TodoCreate, TodoFilter, TodoUpdate
from models.base import utcnow
from models.todo import Todo

logger = logging.getLogger(__name__)

UNCLEAR_COMPLETE_MESSAGE = "Couldn't find a matching todo to complete"


class TodoService:
    """Service class for todo business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_todo(self, todo_data: TodoCreate) -> Todo:
        """Create a new todo."""
        todo = Todo(
            title=todo_data.title,
            assignee=todo_data.assignee,
            created_by=todo_data.created_by,
            due_date=todo_data.due_date,
            project_item_id=todo_data.project_item_id,
        )

        try:
            self.db.add(todo)
            await self.db.commit()
            await self.db.refresh(todo)
            return todo
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise InvalidTodoOperationError(f"Failed to create todo: {str(e)}")

    async def get_todo_by_id(self, todo_id: str) -> Todo:
        """Get a todo by ID, raising when it does not exist."""
        todo = await self.db.get(Todo, todo_id)
        if not todo:
            raise TodoNotFoundError()
        return todo

    async def get_todos_list(self, filters: TodoFilter) -> list[Todo]:
        """List todos, open ones only unless completed are requested.

        With completed todos included, open ones come first; within each group
        the newest todo is first.
        """
        query = select(Todo)

        if filters.assignee:
            query = query.where(Todo.assignee == filters.assignee)

        if filters.project_item_id:
            query = query.where(Todo.project_item_id == filters.project_item_id)

        if filters.include_completed:
            query = query.order_by(asc(Todo.completed), desc(Todo.created_at))
        else:
            query = query.where(Todo.completed.is_(False)).order_by(desc(Todo.created_at))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_due_soon(self, within_days: int = 2, today: date | None = None) -> list[Todo]:
        """Open todos due on or before ``today + within_days``, earliest first."""
        cutoff = (today or date.today()) + timedelta(days=within_days)
        query = (
            select(Todo)
            .where(Todo.completed.is_(False))
            .where(Todo.due_date.is_not(None))
            .where(Todo.due_date <= cutoff)
            .order_by(asc(Todo.due_date))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_todo(self, todo_id: str, todo_data: TodoUpdate) -> Todo:
        """Apply the fields present in the payload; ``completed`` toggles the timestamp."""
        todo = await self.get_todo_by_id(todo_id)

        update_data = todo_data.model_dump(exclude_unset=True)
        completed = update_data.pop("completed", None)

        for field, value in update_data.items():
            if field in ("title", "assignee") and value is None:
                continue
            setattr(todo, field, value)

        if completed is not None:
            self._set_completed(todo, completed)

        return await self._commit(todo, "update")

    async def complete_todo(self, todo_id: str) -> Todo:
        todo = await self.get_todo_by_id(todo_id)
        self._set_completed(todo, True)
        return await self._commit(todo, "complete")

    async def delete_todo(self, todo_id: str) -> bool:
        """Hard-delete a todo."""
        todo = await self.get_todo_by_id(todo_id)

        try:
            await self.db.delete(todo)
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise InvalidTodoOperationError(f"Failed to delete todo: {str(e)}")

    async def smart_todo(
        self, text: str, today: date | None = None
    ) -> tuple[ParsedIntent, Todo | None, str]:
        """Parse free text against the open todos and apply the resulting action.

        Returns the parsed intent, the affected todo (None when unclear) and a
        confirmation or disambiguation message.
        """
        open_todos = await self.get_todos_list(TodoFilter())
        intent = parse_intent(text, [TodoRef(id=t.id, title=t.title) for t in open_todos], today)
        logger.debug("Smart todo %r parsed as %s", text, intent.action.value)

        if intent.action is IntentAction.COMPLETE:
            todo = await self.complete_todo(intent.match_todo_id)
            return intent, todo, f'Marked "{todo.title}" as done'

        if intent.action is IntentAction.UPDATE:
            if intent.due_date is not None:
                todo = await self.update_todo(
                    intent.match_todo_id, TodoUpdate(due_date=intent.due_date)
                )
            else:
                todo = await self.get_todo_by_id(intent.match_todo_id)
            return intent, todo, f'Updated "{todo.title}"{self._due_suffix(intent.due_date)}'

        if intent.action is IntentAction.CREATE:
            todo = await self.create_todo(
                TodoCreate(
                    title=intent.title,
                    assignee=intent.assignee,
                    created_by="rodion",
                    due_date=intent.due_date,
                )
            )
            message = f'Created "{todo.title}" for {todo.assignee}{self._due_suffix(todo.due_date)}'
            return intent, todo, message

        # only a completion phrase with no matching open todo is unclear
        return intent, None, UNCLEAR_COMPLETE_MESSAGE

    async def link_github(self, todo_id: str, github_id: str) -> Todo:
        """Record the remote item id for a todo; a remote id links at most one todo."""
        todo = await self.get_todo_by_id(todo_id)
        todo.github_id = github_id
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateGithubLinkError(details={"github_id": github_id}) from e
        await self.db.refresh(todo)
        return todo

    # Private helper methods

    @staticmethod
    def _set_completed(todo: Todo, completed: bool) -> None:
        todo.completed = completed
        todo.completed_at = utcnow() if completed else None

    @staticmethod
    def _due_suffix(due_date: date | None) -> str:
        return f" - due {due_date.isoformat()}" if due_date else ""

    async def _commit(self, todo: Todo, operation: str) -> Todo:
        try:
            await self.db.commit()
            await self.db.refresh(todo)
            return todo
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise InvalidTodoOperationError(f"Failed to {operation} todo: {str(e)}")

