# flyer_backend/routers/projects.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from flyer_backend.core.config import get_settings
from flyer_backend.core.errors import NotFoundError
from flyer_backend.database import get_session
from flyer_backend.repositories.project_repo import ProjectRepository
from flyer_backend.schemas.project import (
    PagedProjects,
    ProjectPayload,
    ProjectRead,
    ProjectSummary,
)
from flyer_backend.services.project_service import ProjectService

settings = get_settings()

router = APIRouter(prefix="/projects", tags=["Projects"])

repo = ProjectRepository()
service = ProjectService(repo)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
)
def save_project(
    payload: ProjectPayload,
    session: Session = Depends(get_session),
):
    """
    Create a project with its config, groups and products.

    - Every group needs at least one product.
    - Group images default to `imagens_produtos/<first product code>.png`.
    """
    return service.save_project(session, payload)


@router.get("", response_model=PagedProjects)
def list_projects(
    session: Session = Depends(get_session),
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """
    Paginated project summaries, most recently updated first.
    """
    return service.list_projects(session, page=page, size=size)


@router.get("/all", response_model=list[ProjectSummary])
def list_all_projects(session: Session = Depends(get_session)):
    """
    Every project summary, most recently updated first.
    """
    return service.list_all_projects(session)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    project = service.get_project(session, project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: uuid.UUID,
    payload: ProjectPayload,
    session: Session = Depends(get_session),
):
    """
    Replace a project's name, config and groups.

    Groups are replaced wholesale; nothing is merged with the old ones.
    """
    project = service.update_project(session, project_id, payload)
    if project is None:
        raise NotFoundError("Project not found")
    return project


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_project(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a project with its config, groups and products.
    """
    if not service.delete_project(session, project_id):
        raise NotFoundError("Project not found")
    return None
