"""
Unit tests for the API models
"""

from datetime import date
from decimal import Decimal

from finance_console.models import (
    Budget,
    CashFlow,
    CashFlowType,
    DashboardOverview,
    Department,
    Pagination,
    Transaction,
    TrendSeries,
    User,
)


class TestEntityModels:

    def test_department_from_wire(self):
        department = Department.model_validate({
            "id": 1,
            "name": " Finance ",
            "code_department": "PB-TC",
            "composite_code": "HN-PB-TC",
            "address": "Hanoi",
            "address_code": "HN",
            "createdAt": "2024-01-15T08:30:00.000Z",
            "unknownField": "ignored",
        })

        assert department.name == "Finance"
        assert department.created_at.year == 2024
        assert department.label == "Finance (PB-TC)"

    def test_payload_excludes_server_fields(self):
        department = Department(id=1, name="Finance", code_department="PB-TC")

        payload = department.to_payload()

        assert "id" not in payload
        assert "createdAt" not in payload
        assert payload["name"] == "Finance"

    def test_cash_flow_keeps_backend_spelling(self):
        cash_flow = CashFlow.model_validate({
            "id": 3,
            "name": "Office rent",
            "code": "RENT",
            "deparment_id": 7,
            "cash_flow_type_id": 2,
            "Department": {"id": 7, "name": "Admin"},
            "CashFlowType": {"id": 2, "name": "Expenses"},
        })

        assert cash_flow.department_id == 7
        assert cash_flow.department.name == "Admin"
        assert cash_flow.cash_flow_type.name == "Expenses"

        payload = cash_flow.to_payload()
        assert payload == {"name": "Office rent", "code": "RENT", "deparment_id": 7, "cash_flow_type_id": 2}

    def test_cash_flow_type_parent(self):
        node = CashFlowType.model_validate({
            "id": 2,
            "name": "Revenue",
            "code": "REV",
            "parentId": 1,
            "Parent": {"id": 1, "name": "Operating"},
        })

        assert node.parent_id == 1
        assert node.parent_name == "Operating"
        assert not node.is_root
        assert node.to_payload() == {"name": "Revenue", "code": "REV", "parentId": 1}

    def test_root_cash_flow_type_sends_null_parent(self):
        node = CashFlowType(id=1, name="Operating", code="OP")

        assert node.is_root
        assert node.to_payload()["parentId"] is None

    def test_budget_nested_type(self):
        budget = Budget.model_validate({
            "id": 1, "name": "Marketing", "code": "MKT", "budget_type_id": 2,
            "BudgetType": {"id": 2, "name": "Operating"},
        })

        assert budget.budget_type.name == "Operating"
        assert "BudgetType" not in budget.to_payload()


class TestDecimalTransport:

    def test_transaction_amount_is_decimal(self):
        transaction = Transaction.model_validate({
            "id": 1,
            "cash_flow_id": 3,
            "budget_id": 4,
            "description": "Rent",
            "amount": "1250000.10",
            "transaction_day": "2024-02-01",
        })

        assert transaction.amount == Decimal("1250000.10")
        assert transaction.transaction_day == date(2024, 2, 1)

    def test_amount_serialized_as_string(self):
        transaction = Transaction(cash_flow_id=3, budget_id=4, amount=Decimal("0.10"))

        payload = transaction.to_payload()

        assert payload["amount"] == "0.10"
        assert payload["transaction_day"] is None

    def test_overview_aggregates(self):
        overview = DashboardOverview.model_validate({
            "overview": {"totalTransactions": "12", "totalAmount": "1500000.00"},
            "departmentStats": [
                {"totalAmount": "900000", "transactionCount": "7",
                 "CashFlow.Department.id": 1, "CashFlow.Department.name": "Sales",
                 "CashFlow.Department.code_department": "SAL"},
                {"totalAmount": "600000", "transactionCount": "5",
                 "CashFlow.Department.id": 2, "CashFlow.Department.name": "Admin"},
            ],
            "budgetTypeStats": [
                {"totalAmount": "1500000.00", "transactionCount": "12",
                 "Budget.BudgetType.id": 1, "Budget.BudgetType.name": "Operating"},
            ],
        })

        assert overview.overview.total_transactions == 12
        assert overview.overview.total_amount == Decimal("1500000.00")
        assert overview.active_departments == 2
        assert overview.budget_types_used == 1
        assert overview.department_stats[0].department_name == "Sales"
        assert [s.department_name for s in overview.top_departments(1)] == ["Sales"]

        dumped = overview.model_dump(mode="json", by_alias=True)
        assert dumped["overview"] == {"totalTransactions": "12", "totalAmount": "1500000.00"}

    def test_trend_series(self):
        series = TrendSeries.model_validate({
            "trends": [{"period": "2024-01", "totalAmount": "10.5", "transactionCount": "2"}],
            "period": "month",
        })

        assert series.trends[0].total_amount == Decimal("10.5")
        assert series.trends[0].transaction_count == 2


class TestSupportModels:

    def test_pagination(self):
        pagination = Pagination.model_validate(
            {"currentPage": 2, "totalPages": 3, "totalItems": 25, "itemsPerPage": 10}
        )

        assert pagination.has_next
        assert pagination.has_previous

    def test_single_page(self):
        pagination = Pagination.single_page(4)

        assert not pagination.has_next
        assert pagination.total_items == 4

    def test_user_display_name(self):
        assert User(fullName="Nguyen Van A", email="a@example.com").display_name == "Nguyen Van A"
        assert User(email="a@example.com").display_name == "a@example.com"
