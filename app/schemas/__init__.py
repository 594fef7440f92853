# ruff: noqa: F403, F401
"""Schemas package initialization."""

# Import all schemas to ensure they're registered
from .base import *
from .chat import *
from .now import *
from .project import *
from .project import ProjectDetail
from .tile import *
from .todo import *
from .todo import SmartTodoResult

# Rebuild models after all schemas are loaded
ProjectDetail.model_rebuild()
SmartTodoResult.model_rebuild()
