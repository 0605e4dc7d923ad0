"""
Dashboard aggregate models.

The dashboard endpoints return pre-aggregated figures; amounts arrive as
decimal strings and counts as integer strings so no precision is lost in
transport.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from .base import BaseModel, CountString, DecimalString


def _zero_when_blank(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value


class OverviewTotals(BaseModel):
    """Headline totals for the selected range."""
    total_transactions: CountString = Field(default=0, alias="totalTransactions")
    total_amount: DecimalString = Field(default=Decimal("0"), alias="totalAmount")

    @field_validator("total_transactions", "total_amount", mode="before")
    @classmethod
    def zero_when_blank(cls, v):
        """Sums over zero rows come back as null."""
        return _zero_when_blank(v)


class DepartmentStat(BaseModel):
    """Transaction volume booked by one department."""
    total_amount: DecimalString = Field(default=Decimal("0"), alias="totalAmount")
    transaction_count: CountString = Field(default=0, alias="transactionCount")
    department_id: Optional[int] = Field(default=None, alias="CashFlow.Department.id")
    department_name: Optional[str] = Field(default="", alias="CashFlow.Department.name")
    department_code: Optional[str] = Field(default="", alias="CashFlow.Department.code_department")

    @field_validator("total_amount", "transaction_count", mode="before")
    @classmethod
    def zero_when_blank(cls, v):
        return _zero_when_blank(v)


class BudgetTypeStat(BaseModel):
    """Transaction volume booked against one budget type."""
    total_amount: DecimalString = Field(default=Decimal("0"), alias="totalAmount")
    transaction_count: CountString = Field(default=0, alias="transactionCount")
    budget_type_id: Optional[int] = Field(default=None, alias="Budget.BudgetType.id")
    budget_type_name: Optional[str] = Field(default="", alias="Budget.BudgetType.name")

    @field_validator("total_amount", "transaction_count", mode="before")
    @classmethod
    def zero_when_blank(cls, v):
        return _zero_when_blank(v)


class DashboardOverview(BaseModel):
    """Response of ``GET /api/dashboard/overview``."""
    overview: OverviewTotals = Field(default_factory=OverviewTotals)
    department_stats: List[DepartmentStat] = Field(default_factory=list, alias="departmentStats")
    budget_type_stats: List[BudgetTypeStat] = Field(default_factory=list, alias="budgetTypeStats")

    @field_validator("overview", "department_stats", "budget_type_stats", mode="before")
    @classmethod
    def empty_when_null(cls, v, info):
        if v is None:
            return {} if info.field_name == "overview" else []
        return v

    @property
    def active_departments(self) -> int:
        return len(self.department_stats)

    @property
    def budget_types_used(self) -> int:
        return len(self.budget_type_stats)

    def top_departments(self, limit: int = 5) -> List[DepartmentStat]:
        """Departments in server ranking order, truncated to ``limit``."""
        return self.department_stats[:limit]


class TrendPoint(BaseModel):
    """Aggregate for one period (``YYYY-MM`` for monthly trends)."""
    period: str
    total_amount: DecimalString = Field(default=Decimal("0"), alias="totalAmount")
    transaction_count: CountString = Field(default=0, alias="transactionCount")

    @field_validator("total_amount", "transaction_count", mode="before")
    @classmethod
    def zero_when_blank(cls, v):
        return _zero_when_blank(v)


class TrendSeries(BaseModel):
    """Response of ``GET /api/dashboard/trends``; points stay in server order."""
    trends: List[TrendPoint] = Field(default_factory=list)
    period: str = "month"
    summary: Optional[Dict[str, Any]] = None

    @field_validator("trends", mode="before")
    @classmethod
    def empty_when_null(cls, v):
        return [] if v is None else v
