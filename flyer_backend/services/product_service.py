# flyer_backend/services/product_service.py
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from io import BytesIO
from typing import Any
from zipfile import BadZipFile

from fastapi import HTTPException, status
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from sqlmodel import Session

from flyer_backend.core.errors import ValidationError
from flyer_backend.database import unit_of_work
from flyer_backend.models.product import Product
from flyer_backend.repositories.product_repo import ProductRepository
from flyer_backend.schemas.common import quantize_price
from flyer_backend.schemas.product import ImportSummary
from flyer_backend.schemas.project import ProductPayload

logger = logging.getLogger(__name__)

# --- Spreadsheet config ---

ALLOWED_SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")

# Column layout of the import template (header on the first row)
CODE_COL, TITLE_COL, PRICE_COL = 0, 1, 2


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_code(value: Any) -> str | None:
    """
    Text cells are trimmed; numeric cells become an integer string
    (7.0 -> "7", never "7.0" or scientific notation).
    """
    if isinstance(value, str):
        return value.strip() or None
    if _is_number(value):
        return str(int(value))
    return None


def parse_title(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def parse_price(value: Any) -> Decimal | None:
    """
    Read a numeric cell as a float and store it as cents.
    Non-numeric or negative prices are rejected (None).
    """
    if not _is_number(value):
        return None
    try:
        price = quantize_price(Decimal(str(float(value))))
    except InvalidOperation:
        return None
    if price < 0:
        return None
    return price


class ProductLookup:
    """
    Per-call code -> Product table used for upsert-by-code.

    Guarantees at most one row per code within one save/import, even when
    the same code shows up several times. Discard it after the call.
    """

    def __init__(self, repo: ProductRepository, session: Session):
        self.repo = repo
        self.session = session
        self._by_code: dict[str, Product] = {}

    def find(self, code: str) -> Product | None:
        product = self._by_code.get(code)
        if product is None:
            product = self.repo.get_by_code(self.session, code)
            if product is not None:
                self._by_code[code] = product
        return product

    def get_or_create(self, payload: ProductPayload) -> Product:
        """
        Reuse the product with this code, or insert one from the payload.
        """
        product = self.find(payload.code)
        if product is None:
            product = Product(
                code=payload.code,
                description=payload.description or "",
                price=quantize_price(payload.price),
                category=payload.category,
                specifications=payload.specifications,
            )
            self.add(product)
        return product

    def add(self, product: Product) -> Product:
        self.repo.add(self.session, product)
        self._by_code[product.code] = product
        return product


class ProductService:
    """
    Business logic for the shared product catalog.

    Responsibilities:
      - listing / lookup by code
      - spreadsheet import (upsert by code, single commit)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Queries -----

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        return self.repo.list(session, skip=skip, limit=limit)

    def get_by_code(self, session: Session, code: str) -> Product | None:
        return self.repo.get_by_code(session, code.strip())

    # ----- Import -----

    @staticmethod
    def _validate_upload(filename: str | None, file_bytes: bytes, max_bytes: int) -> None:
        if filename and not filename.lower().endswith(ALLOWED_SPREADSHEET_EXTENSIONS):
            raise ValidationError("Unsupported file type. Allowed: .xlsx, .xlsm")

        if not file_bytes:
            raise ValidationError("Uploaded file is empty")

        if len(file_bytes) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Spreadsheet too large (max {max_bytes // (1024 * 1024)}MB).",
            )

    @staticmethod
    def _read_rows(file_bytes: bytes) -> list[tuple]:
        """
        Values of columns A..C for every row of the first sheet,
        header row excluded.
        """
        try:
            workbook = load_workbook(BytesIO(file_bytes), data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
            raise ValidationError("File is not a readable spreadsheet") from exc

        try:
            sheet = workbook.worksheets[0]
            return [
                tuple(row)
                for row in sheet.iter_rows(min_row=2, max_col=PRICE_COL + 1, values_only=True)
            ]
        finally:
            workbook.close()

    def import_spreadsheet(
        self,
        session: Session,
        file_bytes: bytes,
        filename: str | None = None,
        max_bytes: int = 10 * 1024 * 1024,
    ) -> ImportSummary:
        """
        Upsert catalog products from the first sheet of an .xlsx file.

        Layout: code | title | price, header on row 1.

        - Rows missing any of the three values are skipped and counted.
        - Existing codes get title and price overwritten; new codes are inserted.
        - The whole file is committed at once.
        """
        self._validate_upload(filename, file_bytes, max_bytes)
        rows = self._read_rows(file_bytes)

        summary = ImportSummary()
        lookup = ProductLookup(self.repo, session)
        now = datetime.now(timezone.utc)

        with unit_of_work(session, "import products"):
            for row in rows:
                cells = (list(row) + [None, None, None])[:3]
                if all(c is None for c in cells):
                    continue

                code = parse_code(cells[CODE_COL])
                title = parse_title(cells[TITLE_COL])
                price = parse_price(cells[PRICE_COL])
                if code is None or title is None or price is None:
                    summary.skipped += 1
                    continue

                product = lookup.find(code)
                if product is not None:
                    product.description = title
                    product.price = price
                    product.updated_at = now
                    session.add(product)
                    summary.updated += 1
                else:
                    lookup.add(
                        Product(
                            code=code,
                            description=title,
                            price=price,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    summary.created += 1

        logger.info(
            "Imported spreadsheet %s: %d created, %d updated, %d skipped",
            filename or "<upload>",
            summary.created,
            summary.updated,
            summary.skipped,
        )
        return summary
