"""
Cash flow type hierarchy and cash flow entities.
"""

from typing import ClassVar, FrozenSet, List, Optional

from .base import EntityModel, Field
from .department import Department


class CashFlowType(EntityModel):
    """Self-referencing cash flow category.

    ``parent_id`` points at another CashFlowType; a record without one is a
    root. ``children`` is only populated by the hierarchy builder and is never
    sent back to the server.
    """

    payload_exclude: ClassVar[FrozenSet[str]] = frozenset({"parent", "children"})

    name: str = Field(default="")
    code: str = Field(default="")
    parent_id: Optional[int] = Field(default=None, alias="parentId")
    parent: Optional["CashFlowType"] = Field(default=None, alias="Parent")
    children: List["CashFlowType"] = Field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def parent_name(self) -> Optional[str]:
        return self.parent.name if self.parent else None


class CashFlow(EntityModel):
    """Cash flow owned by a department and classified by a cash flow type."""

    payload_exclude: ClassVar[FrozenSet[str]] = frozenset({"department", "cash_flow_type"})

    name: str = Field(default="")
    code: str = Field(default="")
    # The backend spells this column "deparment_id"
    department_id: Optional[int] = Field(default=None, alias="deparment_id")
    cash_flow_type_id: Optional[int] = Field(default=None)
    department: Optional[Department] = Field(default=None, alias="Department")
    cash_flow_type: Optional[CashFlowType] = Field(default=None, alias="CashFlowType")

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})" if self.code else self.name


CashFlowType.model_rebuild()
