from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

UTC = timezone.utc

T = TypeVar("T")


def format_utc(dt: Optional[datetime]) -> Optional[str]:
    """
    Standard: UTC, no timezone conversion, 'YYYY-MM-DDTHH:MM:SS'
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S")


def blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiInput(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# -------- v2 list envelope --------
class PagedOut(ApiModel, Generic[T]):
    data: List[T]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int


class MessageOut(BaseModel):
    message: str
