"""
Validation functions for console forms, run before anything is submitted.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..analytics.hierarchy import would_create_cycle
from ..models.cash_flow import CashFlowType

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors"""

    def __init__(self, message: str, field: str = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value
        self.message = message


def validate_required(
    payload: Mapping[str, Any],
    fields: Sequence[str],
    labels: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Check that every required field carries a value

    Args:
        payload: Form values keyed by wire field name
        fields: Required field names
        labels: Optional human labels used in the error message

    Returns:
        True if valid

    Raises:
        ValidationError: On the first missing field
    """
    labels = labels or {}
    for field in fields:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            label = labels.get(field, field.replace("_", " ").capitalize())
            raise ValidationError(f"{label} is required", field, value)
    return True


def validate_amount(amount: Union[int, str, Decimal, None], field: str = "amount") -> Decimal:
    """
    Parse and validate a transaction amount

    Returns:
        The amount as a Decimal

    Raises:
        ValidationError: If the amount is missing or not a finite number
    """
    if amount is None:
        raise ValidationError("Amount cannot be None", field, amount)

    try:
        if isinstance(amount, str):
            cleaned_amount = amount.replace(',', '').strip()
            if not cleaned_amount:
                raise ValidationError("Invalid amount format", field, amount)
            value = Decimal(cleaned_amount)
        elif isinstance(amount, Decimal):
            value = amount
        else:
            value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError("Invalid amount format", field, amount)

    if not value.is_finite():
        raise ValidationError("Invalid amount format", field, amount)

    return value


def validate_date(date_value: Union[datetime, date, str, None], field: str = "date") -> date:
    """
    Validate date value

    Returns:
        The value as a date

    Raises:
        ValidationError: If date is missing or malformed
    """
    if date_value is None or date_value == "":
        raise ValidationError("Date cannot be empty", field, date_value)

    if isinstance(date_value, datetime):
        return date_value.date()
    if isinstance(date_value, date):
        return date_value
    if isinstance(date_value, str):
        try:
            return datetime.strptime(date_value.strip(), '%Y-%m-%d').date()
        except ValueError:
            raise ValidationError("Invalid date format", field, date_value)

    raise ValidationError("Invalid date type", field, date_value)


def validate_date_range(start: Optional[date], end: Optional[date]) -> bool:
    """Start must not be after end when both are set."""
    if start and end and start > end:
        raise ValidationError("Start date must be on or before end date", "start_date", start)
    return True


def validate_email(email: str) -> bool:
    """
    Validate email address

    Raises:
        ValidationError: If email is invalid
    """
    if not email:
        raise ValidationError("Email is required", "email", email)

    email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

    if not re.match(email_pattern, email):
        raise ValidationError("Invalid email format", "email", email)

    return True


def validate_parent_assignment(
    records: Iterable[CashFlowType],
    node_id: Optional[int],
    parent_id: Optional[int],
) -> bool:
    """
    Check a cash flow type's new parent before it is written

    Args:
        records: Complete list of cash flow types
        node_id: Record being edited (None when creating)
        parent_id: Requested parent (None for a root)

    Raises:
        ValidationError: If the parent does not exist or is the record itself
                         or one of its descendants
    """
    if parent_id is None:
        return True

    records = list(records)
    if not any(record.id == parent_id for record in records):
        raise ValidationError("Selected parent type does not exist", "parentId", parent_id)

    if would_create_cycle(records, node_id, parent_id):
        logger.warning(
            "Rejected parent assignment that would create a cycle",
            extra={'extra_fields': {'node_id': node_id, 'parent_id': parent_id}},
        )
        raise ValidationError(
            "A cash flow type cannot be moved under itself or one of its children",
            "parentId",
            parent_id,
        )

    return True
