"""Project API controller with FastAPI endpoints."""

import logging

from fastapi import APIRouter, Body, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.domains.project.service import ProjectService
from app.schemas.base import ResponseSchema
from app.schemas.project import (
    ITEM_STATUS_PATTERN,
    ProjectCreate,
    ProjectDetail,
    ProjectDocResponse,
    ProjectDocUpdate,
    ProjectItemCreate,
    ProjectItemResponse,
    ProjectItemUpdate,
    ProjectResponse,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ResponseSchema, status_code=201)
async def create_project(
    _request: Request,
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new project with its default documents."""
    service = ProjectService(db)
    project = await service.create_project(project_data)

    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=ProjectResponse.model_validate(project).model_dump(mode="json"),
    )


@router.get("", response_model=ResponseSchema)
async def get_projects(
    _request: Request,
    archived: bool = Query(False, description="Include archived projects"),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    projects = await service.get_projects_list(include_archived=archived)

    return ResponseSchema(
        status="success",
        message="Projects retrieved successfully",
        data=[ProjectResponse.model_validate(p).model_dump(mode="json") for p in projects],
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Get a project with its items and documents."""
    service = ProjectService(db)
    project = await service.get_project_detail(project_id)

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=ProjectDetail.model_validate(project).model_dump(mode="json"),
    )


@router.patch("/{project_id}", response_model=ResponseSchema)
async def update_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    project = await service.update_project(project_id, project_data)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=ProjectResponse.model_validate(project).model_dump(mode="json"),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project with its items and documents."""
    service = ProjectService(db)
    await service.delete_project(project_id)

    return ResponseSchema(status="success", message="Project deleted successfully", data=None)


# Items


@router.get("/{project_id}/items", response_model=ResponseSchema)
async def get_project_items(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    status: str | None = Query(None, pattern=ITEM_STATUS_PATTERN),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    items = await service.get_items(project_id, status)

    return ResponseSchema(
        status="success",
        message="Items retrieved successfully",
        data=[ProjectItemResponse.model_validate(i).model_dump(mode="json") for i in items],
    )


@router.post("/{project_id}/items", response_model=ResponseSchema, status_code=201)
async def create_project_item(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    item_data: ProjectItemCreate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    item = await service.create_item(project_id, item_data)

    return ResponseSchema(
        status="success",
        message="Item created successfully",
        data=ProjectItemResponse.model_validate(item).model_dump(mode="json"),
    )


@router.get("/{project_id}/items/{item_id}", response_model=ResponseSchema)
async def get_project_item(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    item_id: str = Path(..., description="Item ID"),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    item = await service.get_item(project_id, item_id)

    return ResponseSchema(
        status="success",
        message="Item retrieved successfully",
        data=ProjectItemResponse.model_validate(item).model_dump(mode="json"),
    )


@router.patch("/{project_id}/items/{item_id}", response_model=ResponseSchema)
async def update_project_item(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    item_id: str = Path(..., description="Item ID"),
    item_data: ProjectItemUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Update an item; status changes stamp started_at/completed_at."""
    service = ProjectService(db)
    item = await service.update_item(project_id, item_id, item_data)

    return ResponseSchema(
        status="success",
        message="Item updated successfully",
        data=ProjectItemResponse.model_validate(item).model_dump(mode="json"),
    )


@router.delete("/{project_id}/items/{item_id}", response_model=ResponseSchema)
async def delete_project_item(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    item_id: str = Path(..., description="Item ID"),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    await service.delete_item(project_id, item_id)

    return ResponseSchema(status="success", message="Item deleted successfully", data=None)


# Docs


@router.get("/{project_id}/docs", response_model=ResponseSchema)
async def get_project_docs(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    type: str | None = Query(None, description="Only documents of this type"),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    docs = await service.get_docs(project_id, type)

    return ResponseSchema(
        status="success",
        message="Documents retrieved successfully",
        data=[ProjectDocResponse.model_validate(d).model_dump(mode="json") for d in docs],
    )


@router.get("/{project_id}/docs/{doc_id}", response_model=ResponseSchema)
async def get_project_doc(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    doc_id: str = Path(..., description="Document ID"),
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    doc = await service.get_doc(project_id, doc_id)

    return ResponseSchema(
        status="success",
        message="Document retrieved successfully",
        data=ProjectDocResponse.model_validate(doc).model_dump(mode="json"),
    )


@router.patch("/{project_id}/docs/{doc_id}", response_model=ResponseSchema)
async def update_project_doc(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    doc_id: str = Path(..., description="Document ID"),
    doc_data: ProjectDocUpdate = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """Replace or append to a project document."""
    service = ProjectService(db)
    doc = await service.update_doc(project_id, doc_id, doc_data)

    return ResponseSchema(
        status="success",
        message="Document updated successfully",
        data=ProjectDocResponse.model_validate(doc).model_dump(mode="json"),
    )
