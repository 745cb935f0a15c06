# flyer_backend/models/product.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Shared catalog product.

    `code` is the natural key: spreadsheet imports and saved projects
    upsert by code, so there is at most one row per code.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    code: str = Field(
        unique=True,
        index=True,
        description="Stable external identifier",
    )

    description: str = Field(
        default="",
        description="Title / description shown on the flyer",
    )

    price: Decimal = Field(
        default=Decimal("0"),
        max_digits=12,
        decimal_places=2,
        ge=0,
    )

    category: str | None = None

    specifications: str | None = Field(
        default=None,
        description="JSON stored as text",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Last import / upsert timestamp (UTC)",
    )
