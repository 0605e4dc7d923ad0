"""
Services package initialization.

This module provides access to all service classes used in the application.
"""

from .auth_service import AuthService
from .dashboard_service import DashboardService, TREND_PERIODS
from .error_handler import ErrorHandler, get_error_handler
from .resource_service import (
    ResourceService,
    DepartmentService,
    BudgetTypeService,
    BudgetService,
    CashFlowTypeService,
    CashFlowService,
    TransactionService,
)
from .validators import ValidationError

__all__ = [
    "AuthService",
    "DashboardService",
    "TREND_PERIODS",
    "ErrorHandler",
    "get_error_handler",
    "ResourceService",
    "DepartmentService",
    "BudgetTypeService",
    "BudgetService",
    "CashFlowTypeService",
    "CashFlowService",
    "TransactionService",
    "ValidationError",
]
