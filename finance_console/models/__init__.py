"""
Domain Models

This module contains the records exchanged with the finance REST API
and the dashboard aggregates.
"""

# Base models
from .base import (
    BaseModel,
    EntityModel,
    Pagination,
    PaginatedResult,
    DecimalString,
    CountString,
)

# Entity models
from .department import Department
from .budget import Budget, BudgetType
from .cash_flow import CashFlow, CashFlowType
from .transaction import Transaction
from .user import User, UserRole

# Dashboard models
from .dashboard import (
    DashboardOverview,
    OverviewTotals,
    DepartmentStat,
    BudgetTypeStat,
    TrendPoint,
    TrendSeries,
)

__all__ = [
    # Base models
    "BaseModel",
    "EntityModel",
    "Pagination",
    "PaginatedResult",
    "DecimalString",
    "CountString",

    # Entity models
    "Department",
    "Budget",
    "BudgetType",
    "CashFlow",
    "CashFlowType",
    "Transaction",
    "User",
    "UserRole",

    # Dashboard models
    "DashboardOverview",
    "OverviewTotals",
    "DepartmentStat",
    "BudgetTypeStat",
    "TrendPoint",
    "TrendSeries",
]
