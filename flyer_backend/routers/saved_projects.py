# flyer_backend/routers/saved_projects.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from flyer_backend.database import get_session
from flyer_backend.repositories.product_repo import ProductRepository
from flyer_backend.repositories.saved_project_repo import SavedProjectRepository
from flyer_backend.schemas.saved_project import SavedProjectPayload, SavedProjectRead
from flyer_backend.services.saved_project_service import SavedProjectService

router = APIRouter(prefix="/saved-projects", tags=["Saved projects"])

service = SavedProjectService(SavedProjectRepository(), ProductRepository())


@router.post(
    "",
    response_model=SavedProjectRead,
    status_code=status.HTTP_201_CREATED,
)
def save_catalog_project(
    payload: SavedProjectPayload,
    session: Session = Depends(get_session),
):
    """
    Save a project against the shared product catalog.

    - Products are reused by code or created once.
    - Standalone products already listed in a group are not linked twice.
    """
    return service.save(session, payload)


@router.get("", response_model=list[SavedProjectRead])
def list_catalog_projects(session: Session = Depends(get_session)):
    return service.list_saved(session)
