"""Todo-related exceptions."""

from typing import Any

from .base import BaseAppException, ConflictError, NotFoundError


class TodoNotFoundError(NotFoundError):
    """Raised when a todo is not found."""

    def __init__(self, message: str = "Todo not found"):
        super().__init__(message=message, error_code="TODO_NOT_FOUND")


class InvalidTodoOperationError(BaseAppException):
    """Raised when an invalid operation is performed on a todo."""

    def __init__(self, message: str = "Invalid todo operation"):
        super().__init__(message=message, status_code=400, error_code="INVALID_TODO_OPERATION")


class DuplicateGithubLinkError(ConflictError):
    """Raised when a GitHub item id is already linked to another todo."""

    def __init__(
        self,
        message: str = "GitHub item is already linked to a todo",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message=message, error_code="DUPLICATE_GITHUB_LINK", details=details)
