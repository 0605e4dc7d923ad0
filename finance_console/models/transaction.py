"""
Transaction entity.
"""

from datetime import date
from decimal import Decimal
from typing import ClassVar, FrozenSet, Optional

from .base import DecimalString, EntityModel, Field
from .budget import Budget
from .cash_flow import CashFlow


class Transaction(EntityModel):
    """Single booking of an amount against a cash flow and a budget."""

    payload_exclude: ClassVar[FrozenSet[str]] = frozenset({"cash_flow", "budget"})

    cash_flow_id: Optional[int] = Field(default=None)
    budget_id: Optional[int] = Field(default=None)
    description: str = Field(default="")
    amount: DecimalString = Field(default=Decimal("0"))
    transaction_day: Optional[date] = Field(default=None)
    cash_flow: Optional[CashFlow] = Field(default=None, alias="CashFlow")
    budget: Optional[Budget] = Field(default=None, alias="Budget")
