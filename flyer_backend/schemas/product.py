# flyer_backend/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import field_serializer, field_validator

from flyer_backend.schemas.common import CamelSchema, as_utc


class CatalogProductRead(CamelSchema):
    """
    Catalog product representation for clients.
    """

    id: uuid.UUID
    code: str
    description: str
    price: Decimal
    category: str | None = None
    specifications: str | None = None
    updated_at: datetime

    @field_validator("updated_at")
    @classmethod
    def updated_at_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_serializer("price")
    def serialize_price(self, v: Decimal) -> float:
        return float(v)


class ImportSummary(CamelSchema):
    """
    Outcome of a spreadsheet import.

    - created: rows that inserted a new product
    - updated: rows that overwrote an existing product
    - skipped: rows missing code, title or price
    """

    created: int = 0
    updated: int = 0
    skipped: int = 0
