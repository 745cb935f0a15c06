# flyer_backend/schemas/common.py
import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Literal

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

GroupType = Literal["single", "same-price", "different-price"]

PRICE_QUANTUM = Decimal("0.01")


class CamelSchema(SQLModel):
    """
    Base for wire models: camelCase JSON, snake_case attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def strip_or_none(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


def specifications_to_text(v: Any) -> str | None:
    """
    Specifications arrive as free text or structured JSON; both are
    stored as text.
    """
    if v is None or isinstance(v, str):
        return v
    return json.dumps(v, ensure_ascii=False)


def quantize_price(v: Decimal) -> Decimal:
    return v.quantize(PRICE_QUANTUM)


def as_utc(v: datetime) -> datetime:
    """
    Timestamps are stored as UTC; backends that drop the offset
    (SQLite) hand them back naive.
    """
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)
