# flyer_backend/schemas/project.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from sqlmodel import Field

from flyer_backend.schemas.common import (
    CamelSchema,
    GroupType,
    as_utc,
    specifications_to_text,
    strip_or_none,
)


class ProductPayload(CamelSchema):
    """
    Product line inside a group (or standalone, for saved projects).

    `id` is accepted because the editor sends its own client ids,
    but it is ignored: the server always generates identifiers.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    id: str | None = None
    code: str
    description: str | None = None
    specifications: str | None = None
    price: Decimal = Field(default=Decimal("0"), ge=0)
    category: str | None = None

    @field_validator("code")
    @classmethod
    def code_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("code cannot be empty")
        return v

    @field_validator("specifications", mode="before")
    @classmethod
    def normalize_specifications(cls, v):
        return specifications_to_text(v)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class GroupPayload(CamelSchema):
    """
    Group payload. When `image` is omitted the server derives it from
    the first product code.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    id: str | None = None
    type: GroupType
    title: str | None = None
    image: str | None = None
    position: int = 0
    flyer_page: int | None = None
    products: list[ProductPayload] = []

    @field_validator("image")
    @classmethod
    def normalize_image(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class FlyerConfigPayload(CamelSchema):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    title: str | None = None
    header_text: str | None = None
    footer_text: str | None = None
    header_image_url: str | None = None
    footer_image_url: str | None = None
    background_color: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None


class ProjectPayload(CamelSchema):
    """
    Payload for creating or replacing a flyer project.

    Name emptiness and empty groups are business rules checked by the
    service, so they are reported the same way for API and direct calls.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: str = ""
    config: FlyerConfigPayload = Field(default_factory=FlyerConfigPayload)
    groups: list[GroupPayload] = []

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


# ----- Read models -----


class ProductRead(CamelSchema):
    id: uuid.UUID
    code: str
    description: str | None
    specifications: str | None
    price: Decimal
    category: str | None

    @field_serializer("price")
    def serialize_price(self, v: Decimal) -> float:
        return float(v)


class GroupRead(CamelSchema):
    id: uuid.UUID
    type: GroupType
    title: str | None
    image: str | None
    position: int
    flyer_page: int | None = None
    products: list[ProductRead]


class FlyerConfigRead(CamelSchema):
    id: uuid.UUID
    title: str | None
    header_text: str | None
    footer_text: str | None
    header_image_url: str | None
    footer_image_url: str | None
    background_color: str | None
    primary_color: str | None
    secondary_color: str | None


class ProjectRead(CamelSchema):
    """
    Full project aggregate: groups sorted by position, products in list order.
    """

    id: uuid.UUID
    name: str
    config: FlyerConfigRead | None
    groups: list[GroupRead]
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ProjectSummary(CamelSchema):
    """
    Lightweight listing entry.
    """

    id: uuid.UUID
    name: str
    updated_at: datetime

    @field_validator("updated_at")
    @classmethod
    def updated_at_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class PagedProjects(CamelSchema):
    projects: list[ProjectSummary]
    current_page: int
    total_pages: int
    total_elements: int
    size: int
    has_next: bool
    has_previous: bool
