"""
Base Pydantic schemas.

Every schema exchanges camelCase JSON (stateId, createdAt, ...) while the
Python attributes stay snake_case.
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema with camelCase aliases, also accepting field names on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PagedResult(CamelModel, Generic[T]):
    """One page of a list endpoint plus the total number of matching rows."""

    items: List[T]
    total_count: int
    page: int
    page_size: int
