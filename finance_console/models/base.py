"""
Base models and utilities for Pydantic v2.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Generic, List, Optional, TypeVar

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, PlainSerializer

# Type variable for generic page items
T = TypeVar("T")

# Amounts travel as decimal strings ("1250000.00") and counts as integer
# strings ("12"); both are decoded at the boundary and written back as strings.
DecimalString = Annotated[
    Decimal, PlainSerializer(lambda v: str(v), return_type=str, when_used="json")
]
CountString = Annotated[
    int, PlainSerializer(lambda v: str(v), return_type=str, when_used="json")
]


class BaseModel(PydanticBaseModel):
    """Base model with common configuration and methods."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class EntityModel(BaseModel):
    """Base for records owned by the finance backend."""

    # Fields that never go back to the server in a create/update body
    payload_exclude: ClassVar[FrozenSet[str]] = frozenset()

    id: Optional[int] = Field(default=None, description="Backend identifier")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire body for create/update requests."""
        exclude = {"id", "created_at", "updated_at"} | set(self.payload_exclude)
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


class Pagination(BaseModel):
    """Pagination block of a list response."""
    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_items: int = Field(default=0, alias="totalItems")
    items_per_page: int = Field(default=10, alias="itemsPerPage")

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @classmethod
    def single_page(cls, count: int) -> "Pagination":
        """Pagination for a response that did not include one."""
        return cls(currentPage=1, totalPages=1, totalItems=count, itemsPerPage=max(count, 1))


class PaginatedResult(BaseModel, Generic[T]):
    """One page of a resource collection."""
    items: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @property
    def total(self) -> int:
        return self.pagination.total_items
