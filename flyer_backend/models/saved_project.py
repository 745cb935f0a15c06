# flyer_backend/models/saved_project.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class CatalogConfig(SQLModel, table=True):
    """
    Presentation settings referenced by a SavedProject.
    """

    __tablename__ = "catalog_configs"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str | None = None
    header_text: str | None = None
    footer_text: str | None = None
    header_image_url: str | None = None
    footer_image_url: str | None = None
    background_color: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class CatalogGroup(SQLModel, table=True):
    """
    Group of shared catalog products. Created anew on every save.
    """

    __tablename__ = "catalog_groups"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # single | same-price | different-price
    group_type: str

    title: str | None = None
    image: str | None = None
    position: int = 0
    flyer_page: int | None = None


class CatalogGroupMember(SQLModel, table=True):
    """
    Link: catalog_groups <-> products, ordered by sort_order.

    Has its own id because a group may list the same product twice.
    """

    __tablename__ = "catalog_group_members"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )
    group_id: uuid.UUID = Field(
        foreign_key="catalog_groups.id",
        index=True,
    )
    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
    )
    sort_order: int = Field(default=0, ge=0)


class SavedProject(SQLModel, table=True):
    """
    Project whose groups and products are shared catalog entities.
    """

    __tablename__ = "saved_projects"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str

    config_id: uuid.UUID = Field(
        foreign_key="catalog_configs.id",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class SavedProjectGroup(SQLModel, table=True):
    """
    Link: saved_projects <-> catalog_groups.
    """

    __tablename__ = "saved_project_groups"

    project_id: uuid.UUID = Field(
        foreign_key="saved_projects.id",
        primary_key=True,
    )
    group_id: uuid.UUID = Field(
        foreign_key="catalog_groups.id",
        primary_key=True,
    )
    sort_order: int = Field(default=0, ge=0)


class SavedProjectProduct(SQLModel, table=True):
    """
    Link: saved_projects <-> products (deduplicated union).
    """

    __tablename__ = "saved_project_products"

    project_id: uuid.UUID = Field(
        foreign_key="saved_projects.id",
        primary_key=True,
    )
    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        primary_key=True,
    )
    sort_order: int = Field(default=0, ge=0)
