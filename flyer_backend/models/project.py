# flyer_backend/models/project.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class FlyerProject(SQLModel, table=True):
    """
    Aggregate root of a flyer.

    Owns exactly one FlyerConfig and an ordered list of FlyerGroup rows.
    Children point back through stored foreign keys; the repository
    removes them explicitly when the project is deleted.
    """

    __tablename__ = "flyer_projects"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        min_length=1,
        description="Human name of the project",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Creation timestamp (UTC), never changed afterwards",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
        description="Refreshed on every mutation (UTC)",
    )


class FlyerConfig(SQLModel, table=True):
    """
    Presentation settings of a project (one per project).

    Colors are free-form strings and are not validated.
    """

    __tablename__ = "flyer_configs"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    project_id: uuid.UUID = Field(
        foreign_key="flyer_projects.id",
        unique=True,
        index=True,
    )

    title: str | None = Field(default=None, max_length=500)
    header_text: str | None = Field(default=None, max_length=1000)
    footer_text: str | None = Field(default=None, max_length=1000)
    header_image_url: str | None = None
    footer_image_url: str | None = None
    background_color: str | None = Field(default=None, max_length=50)
    primary_color: str | None = Field(default=None, max_length=50)
    secondary_color: str | None = Field(default=None, max_length=50)


class FlyerGroup(SQLModel, table=True):
    """
    Ordered block of products rendered together on a flyer.
    """

    __tablename__ = "flyer_groups"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    project_id: uuid.UUID = Field(
        foreign_key="flyer_projects.id",
        index=True,
    )

    # single | same-price | different-price
    group_type: str = Field(
        description="Presentation type of the group",
    )

    title: str | None = None

    image: str | None = Field(
        default=None,
        description="Display image path (derived from the first product code if omitted)",
    )

    position: int = Field(
        default=0,
        description="Render order within the project",
    )

    flyer_page: int | None = Field(
        default=None,
        description="Optional flyer page number",
    )


class FlyerProduct(SQLModel, table=True):
    """
    Line item of a group. Belongs to exactly one FlyerGroup.
    """

    __tablename__ = "flyer_products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    group_id: uuid.UUID = Field(
        foreign_key="flyer_groups.id",
        index=True,
    )

    sort_order: int = Field(
        default=0,
        ge=0,
        description="Index within the group's product list",
    )

    code: str = Field(index=True)

    description: str | None = None

    specifications: str | None = Field(
        default=None,
        description="Free text or JSON stored as text",
    )

    price: Decimal = Field(
        default=Decimal("0"),
        max_digits=12,
        decimal_places=2,
        ge=0,
    )

    category: str | None = None
