import math
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PageRequest(BaseModel):
    """Query params for list endpoints.

    The default ordering is insertion order (oldest first, newest last).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    page_size: int = Field(default=20, ge=1, le=100, description="Items per page")
    order: SortOrder = Field(default=SortOrder.ASC, description="Creation-time ordering")

    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def limit(self) -> int:
        return self.page_size


class Page(BaseModel, Generic[T]):
    """Offset-paginated response."""

    items: list[T]
    total: int = Field(description="Total number of matching records.")
    page: int = Field(description="Current page number (1-indexed).")
    page_size: int = Field(description="Number of items per page.")
    pages: int = Field(description="Total number of pages.")

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total

    @classmethod
    def build(cls, items: list[T], total: int, request: PageRequest) -> "Page[T]":
        pages = max(1, math.ceil(total / request.page_size)) if total else 1
        return cls(
            items=items,
            total=total,
            page=request.page,
            page_size=request.page_size,
            pages=pages,
        )
