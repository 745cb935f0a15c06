# flyer_backend/routers/products.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlmodel import Session

from flyer_backend.core.config import get_settings
from flyer_backend.core.errors import NotFoundError
from flyer_backend.database import get_session
from flyer_backend.repositories.product_repo import ProductRepository
from flyer_backend.schemas.product import CatalogProductRead, ImportSummary
from flyer_backend.services.product_service import ProductService

settings = get_settings()

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=list[CatalogProductRead])
def list_products(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List catalog products ordered by code.
    """
    return service.list_products(session, skip=skip, limit=limit)


@router.get("/{code}", response_model=CatalogProductRead)
def get_product(
    code: str,
    session: Session = Depends(get_session),
):
    product = service.get_by_code(session, code)
    if product is None:
        raise NotFoundError("Product not found")
    return product


@router.post(
    "/upload",
    response_model=ImportSummary,
    summary="Import products from a spreadsheet",
)
def upload_products(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Import catalog products from an .xlsx file.

    - First sheet only; row 1 is the header.
    - Columns: code, title, price.
    - Incomplete rows are skipped and counted.
    """
    file_bytes = file.file.read()
    return service.import_spreadsheet(
        session=session,
        file_bytes=file_bytes,
        filename=file.filename,
        max_bytes=settings.IMPORT_MAX_BYTES,
    )
