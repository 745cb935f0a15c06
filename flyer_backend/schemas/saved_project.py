# flyer_backend/schemas/saved_project.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from flyer_backend.schemas.common import CamelSchema, as_utc
from flyer_backend.schemas.project import (
    FlyerConfigRead,
    GroupRead,
    ProductPayload,
    ProductRead,
    ProjectPayload,
)


class SavedProjectPayload(ProjectPayload):
    """
    Project payload for the shared catalog: groups plus an optional list
    of standalone products.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    products: list[ProductPayload] = []


class SavedProjectRead(CamelSchema):
    """
    Saved project with every referenced entity expanded.
    """

    id: uuid.UUID
    name: str
    config: FlyerConfigRead
    groups: list[GroupRead]
    products: list[ProductRead]
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
