"""
Form components for creating and editing finance records.

Each form returns the wire payload when submitted, or None. Payloads are
checked with ``prepare_payload`` before anything is sent.
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence

import streamlit as st

from ..models import Budget, BudgetType, CashFlow, CashFlowType, Department, Transaction
from ..services.validators import validate_amount, validate_date, validate_required
from ..utils.currency_utils import CurrencyUtils

# Required wire fields per entity, with the labels used in error messages
REQUIRED_FIELDS: Dict[str, Dict[str, str]] = {
    "department": {
        "name": "Department name",
        "code_department": "Department code",
        "composite_code": "Composite code",
        "address": "Address",
        "address_code": "Address code",
    },
    "budget_type": {"name": "Budget type name"},
    "budget": {"name": "Budget name", "code": "Budget code", "budget_type_id": "Budget type"},
    "cash_flow_type": {"name": "Cash flow type name", "code": "Cash flow type code"},
    "cash_flow": {
        "name": "Cash flow name",
        "code": "Cash flow code",
        "deparment_id": "Department",
        "cash_flow_type_id": "Cash flow type",
    },
    "transaction": {
        "cash_flow_id": "Cash flow",
        "budget_id": "Budget",
        "amount": "Amount",
        "transaction_day": "Transaction day",
    },
}


def prepare_payload(entity: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a submitted form and normalise it for the wire.

    Raises:
        ValidationError: For the first missing or malformed field
    """
    labels = REQUIRED_FIELDS[entity]
    validate_required(payload, list(labels), labels)

    prepared = dict(payload)
    for key, value in prepared.items():
        if isinstance(value, str):
            prepared[key] = value.strip()

    if entity == "transaction":
        # Amounts travel as decimal strings
        prepared["amount"] = str(validate_amount(prepared["amount"]))
        prepared["transaction_day"] = validate_date(prepared["transaction_day"], "transaction_day").isoformat()

    return prepared


def _select_id(label: str, options: Sequence[Any], current: Optional[int], key: str, allow_none: bool = False) -> Optional[int]:
    """Selectbox over record ids, labelled by each record's ``label``/``name``."""
    labels = {o.id: getattr(o, "label", None) or o.name for o in options}
    ids = list(labels)
    if allow_none:
        ids.insert(0, None)
        labels[None] = "None (root type)"
    if not ids:
        st.selectbox(label, options=["No options available"], key=key, disabled=True)
        return None

    index = ids.index(current) if current in ids else (0 if allow_none else None)
    return st.selectbox(
        label,
        options=ids,
        index=index,
        format_func=lambda value: labels.get(value, str(value)),
        key=key,
        placeholder=f"Select {label.lower()}",
    )


class FormComponents:
    """Create/update forms for each entity."""

    @staticmethod
    def department_form(record: Optional[Department] = None, key: str = "department_form") -> Optional[Dict[str, Any]]:
        record = record or Department()
        with st.form(key, clear_on_submit=record.id is None):
            col1, col2 = st.columns(2)
            name = col1.text_input("Department name *", value=record.name)
            code = col2.text_input("Department code *", value=record.code_department)
            composite = col1.text_input("Composite code *", value=record.composite_code)
            address_code = col2.text_input("Address code *", value=record.address_code)
            address = st.text_area("Address *", value=record.address)
            submitted = st.form_submit_button("Save", type="primary")

        if not submitted:
            return None
        return {
            "name": name,
            "code_department": code,
            "composite_code": composite,
            "address": address,
            "address_code": address_code,
        }

    @staticmethod
    def budget_type_form(record: Optional[BudgetType] = None, key: str = "budget_type_form") -> Optional[Dict[str, Any]]:
        record = record or BudgetType()
        with st.form(key, clear_on_submit=record.id is None):
            name = st.text_input("Budget type name *", value=record.name)
            submitted = st.form_submit_button("Save", type="primary")
        return {"name": name} if submitted else None

    @staticmethod
    def budget_form(
        budget_types: Sequence[BudgetType],
        record: Optional[Budget] = None,
        key: str = "budget_form",
    ) -> Optional[Dict[str, Any]]:
        record = record or Budget()
        with st.form(key, clear_on_submit=record.id is None):
            col1, col2 = st.columns(2)
            name = col1.text_input("Budget name *", value=record.name)
            code = col2.text_input("Budget code *", value=record.code)
            budget_type_id = _select_id("Budget type *", budget_types, record.budget_type_id, f"{key}_type")
            submitted = st.form_submit_button("Save", type="primary")

        if not submitted:
            return None
        return {"name": name, "code": code, "budget_type_id": budget_type_id}

    @staticmethod
    def cash_flow_type_form(
        parent_options: Sequence[CashFlowType],
        record: Optional[CashFlowType] = None,
        key: str = "cash_flow_type_form",
    ) -> Optional[Dict[str, Any]]:
        """``parent_options`` should already exclude the record and its descendants."""
        record = record or CashFlowType()
        with st.form(key, clear_on_submit=record.id is None):
            col1, col2 = st.columns(2)
            name = col1.text_input("Cash flow type name *", value=record.name)
            code = col2.text_input("Cash flow type code *", value=record.code)
            parent_id = _select_id("Parent type", parent_options, record.parent_id, f"{key}_parent", allow_none=True)
            submitted = st.form_submit_button("Save", type="primary")

        if not submitted:
            return None
        # parentId is always sent so a type can be moved back to the root
        return {"name": name, "code": code, "parentId": parent_id}

    @staticmethod
    def cash_flow_form(
        departments: Sequence[Department],
        cash_flow_types: Sequence[CashFlowType],
        record: Optional[CashFlow] = None,
        key: str = "cash_flow_form",
    ) -> Optional[Dict[str, Any]]:
        record = record or CashFlow()
        with st.form(key, clear_on_submit=record.id is None):
            col1, col2 = st.columns(2)
            name = col1.text_input("Cash flow name *", value=record.name)
            code = col2.text_input("Cash flow code *", value=record.code)
            department_id = _select_id("Department *", departments, record.department_id, f"{key}_department")
            type_id = _select_id("Cash flow type *", cash_flow_types, record.cash_flow_type_id, f"{key}_type")
            submitted = st.form_submit_button("Save", type="primary")

        if not submitted:
            return None
        return {
            "name": name,
            "code": code,
            "deparment_id": department_id,
            "cash_flow_type_id": type_id,
        }

    @staticmethod
    def transaction_form(
        cash_flows: Sequence[CashFlow],
        budgets: Sequence[Budget],
        record: Optional[Transaction] = None,
        currency: str = "VND",
        key: str = "transaction_form",
    ) -> Optional[Dict[str, Any]]:
        record = record or Transaction()
        symbol = CurrencyUtils.CURRENCY_SYMBOLS.get(currency, currency)

        with st.form(key, clear_on_submit=record.id is None):
            col1, col2 = st.columns(2)
            with col1:
                cash_flow_id = _select_id("Cash flow *", cash_flows, record.cash_flow_id, f"{key}_cash_flow")
                amount = st.text_input(
                    f"Amount ({symbol}) *",
                    value=str(record.amount) if record.id is not None else "",
                    placeholder="0",
                )
            with col2:
                budget_id = _select_id("Budget *", budgets, record.budget_id, f"{key}_budget")
                day = st.date_input("Transaction day *", value=record.transaction_day or date.today())
            description = st.text_area("Description", value=record.description or "")
            submitted = st.form_submit_button("Save", type="primary")

        if not submitted:
            return None
        return {
            "cash_flow_id": cash_flow_id,
            "budget_id": budget_id,
            "description": description,
            "amount": amount,
            "transaction_day": day,
        }
