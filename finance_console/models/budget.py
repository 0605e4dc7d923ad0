"""
Budget and budget type entities.
"""

from typing import ClassVar, FrozenSet, Optional

from .base import EntityModel, Field


class BudgetType(EntityModel):
    """Classification for budgets (e.g. operating, investment)."""

    name: str = Field(default="", max_length=255)


class Budget(EntityModel):
    """Budget line that transactions are booked against."""

    payload_exclude: ClassVar[FrozenSet[str]] = frozenset({"budget_type"})

    name: str = Field(default="")
    code: str = Field(default="")
    budget_type_id: Optional[int] = Field(default=None)
    budget_type: Optional[BudgetType] = Field(default=None, alias="BudgetType")

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})" if self.code else self.name
