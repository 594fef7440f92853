"""Project-related exceptions."""

from .base import NotFoundError


class ProjectNotFoundError(NotFoundError):
    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, error_code="PROJECT_NOT_FOUND")


class ProjectItemNotFoundError(NotFoundError):
    """Raised for an unknown item, or an item that belongs to another project."""

    def __init__(self, message: str = "Item not found"):
        super().__init__(message=message, error_code="PROJECT_ITEM_NOT_FOUND")


class ProjectDocNotFoundError(NotFoundError):
    def __init__(self, message: str = "Document not found"):
        super().__init__(message=message, error_code="PROJECT_DOC_NOT_FOUND")
