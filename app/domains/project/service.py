"""Project service layer with business logic."""

import logging
from typing import Any

from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from app.exceptions.base import ValidationError
from app.exceptions.project import (
    ProjectDocNotFoundError,
    ProjectItemNotFoundError,
    ProjectNotFoundError,
)
from app.schemas.project import (
    ProjectCreate,
    ProjectDocUpdate,
    ProjectItemCreate,
    ProjectItemUpdate,
    ProjectUpdate,
)
from models.base import utcnow
from models.project import Project, ProjectDoc, ProjectItem

logger = logging.getLogger(__name__)

# (doc_type, title) created with every new project
DEFAULT_DOCS = [
    ("features", "Features Design"),
    ("technical", "Technical Design"),
    ("progress", "Progress Notes"),
]


class ProjectService:
    """Service class for project business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # Projects

    async def create_project(self, project_data: ProjectCreate) -> Project:
        """Create a new project together with its default documents."""
        project = Project(name=project_data.name, description=project_data.description)
        project.docs = [
            ProjectDoc(doc_type=doc_type, title=title, content="")
            for doc_type, title in DEFAULT_DOCS
        ]

        try:
            self.db.add(project)
            await self.db.commit()
            await self.db.refresh(project)
            return project
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationError(f"Failed to create project: {str(e)}")

    async def get_project_by_id(self, project_id: str) -> Project:
        project = await self.db.get(Project, project_id)
        if not project:
            raise ProjectNotFoundError()
        return project

    async def get_project_detail(self, project_id: str) -> Project:
        """Get a project with its items and documents loaded."""
        stmt = (
            select(Project)
            .options(selectinload(Project.items), selectinload(Project.docs))
            .where(Project.id == project_id)
        )
        result = await self.db.execute(stmt)
        project = result.scalar_one_or_none()
        if not project:
            raise ProjectNotFoundError()

        project.items.sort(key=lambda item: (item.priority, item.created_at))
        project.docs.sort(key=lambda doc: doc.doc_type)
        return project

    async def get_projects_list(self, include_archived: bool = False) -> list[Project]:
        """Active projects (or all of them), newest first."""
        stmt = select(Project)
        if not include_archived:
            stmt = stmt.where(Project.status == "active")
        stmt = stmt.order_by(desc(Project.created_at))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update_project(self, project_id: str, project_data: ProjectUpdate) -> Project:
        project = await self.get_project_by_id(project_id)

        update_data = project_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(project, field, value)

        return await self._commit(project, "update project")

    async def delete_project(self, project_id: str) -> bool:
        """Delete a project; its items and documents go with it."""
        project = await self.get_project_detail(project_id)

        try:
            await self.db.delete(project)
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationError(f"Failed to delete project: {str(e)}")

    # Items

    async def get_items(self, project_id: str, status: str | None = None) -> list[ProjectItem]:
        """Items of a project, most urgent first, then oldest first."""
        await self.get_project_by_id(project_id)

        stmt = select(ProjectItem).where(ProjectItem.project_id == project_id)
        if status:
            stmt = stmt.where(ProjectItem.status == status)
        stmt = stmt.order_by(asc(ProjectItem.priority), asc(ProjectItem.created_at))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_item(self, project_id: str, item_id: str) -> ProjectItem:
        item = await self.db.get(ProjectItem, item_id)
        if not item or item.project_id != project_id:
            raise ProjectItemNotFoundError()
        return item

    async def create_item(self, project_id: str, item_data: ProjectItemCreate) -> ProjectItem:
        await self.get_project_by_id(project_id)

        item = ProjectItem(
            project_id=project_id,
            title=item_data.title,
            description=item_data.description,
            acceptance_criteria=list(item_data.acceptance_criteria),
            priority=item_data.priority,
            assignee=item_data.assignee,
        )
        self.db.add(item)
        return await self._commit(item, "create item")

    async def update_item(
        self, project_id: str, item_id: str, item_data: ProjectItemUpdate
    ) -> ProjectItem:
        """Apply present fields and stamp status transitions.

        Entering ``in-progress`` from ``backlog`` sets ``started_at`` (again,
        if the item went back to the backlog in between). Entering
        ``complete`` from any other status sets ``completed_at``.
        """
        item = await self.get_item(project_id, item_id)
        previous_status = item.status

        update_data = item_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(item, field, value)

        new_status = update_data.get("status")
        if new_status == "in-progress" and previous_status == "backlog":
            item.started_at = utcnow()
        elif new_status == "complete" and previous_status != "complete":
            item.completed_at = utcnow()

        return await self._commit(item, "update item")

    async def delete_item(self, project_id: str, item_id: str) -> bool:
        item = await self.get_item(project_id, item_id)
        await self.db.delete(item)
        await self.db.commit()
        return True

    # Docs

    async def get_docs(self, project_id: str, doc_type: str | None = None) -> list[ProjectDoc]:
        await self.get_project_by_id(project_id)

        stmt = select(ProjectDoc).where(ProjectDoc.project_id == project_id)
        if doc_type:
            stmt = stmt.where(ProjectDoc.doc_type == doc_type)
        stmt = stmt.order_by(asc(ProjectDoc.doc_type))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_doc(self, project_id: str, doc_id: str) -> ProjectDoc:
        doc = await self.db.get(ProjectDoc, doc_id)
        if not doc or doc.project_id != project_id:
            raise ProjectDocNotFoundError()
        return doc

    async def update_doc(
        self, project_id: str, doc_id: str, doc_data: ProjectDocUpdate
    ) -> ProjectDoc:
        """Replace title/content, or append to the content when ``append`` is given."""
        doc = await self.get_doc(project_id, doc_id)

        if doc_data.append:
            doc.content = f"{doc.content}\n\n{doc_data.append}" if doc.content else doc_data.append
        else:
            if doc_data.title is not None:
                doc.title = doc_data.title
            if doc_data.content is not None:
                doc.content = doc_data.content

        return await self._commit(doc, "update document")

    async def _commit(self, instance: Any, operation: str) -> Any:
        try:
            await self.db.commit()
            await self.db.refresh(instance)
            return instance
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise ValidationError(f"Failed to {operation}: {str(e)}")
