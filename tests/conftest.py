"""
Pytest configuration and fixtures for the finance console test suite
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from finance_console.api.client import ApiClient
from finance_console.config.settings import AuthConfig
from finance_console.models import CashFlowType, TrendPoint


@pytest.fixture
def make_response():
    """Factory for fake ``requests.Response`` objects"""

    def _make(status_code=200, body=None, invalid_json=False):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        if invalid_json:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = body
        return response

    return _make


@pytest.fixture
def mock_session():
    """Session whose ``request`` is a mock; set ``return_value`` per test"""
    return Mock(spec=requests.Session)


@pytest.fixture
def api_client(mock_session):
    return ApiClient("http://api.test/", session=mock_session)


@pytest.fixture
def storage():
    """Stand-in for Streamlit's session state"""
    return {}


@pytest.fixture
def auth_config():
    return AuthConfig()


def list_body(key, records, page=1, total_pages=1, per_page=10):
    """Paginated ``{success, data}`` envelope as the backend returns it"""
    return {
        "success": True,
        "data": {
            key: records,
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages,
                "totalItems": len(records) if total_pages == 1 else per_page * total_pages,
                "itemsPerPage": per_page,
            },
        },
    }


@pytest.fixture
def list_envelope():
    return list_body


@pytest.fixture
def cash_flow_types():
    """
    Flat list as returned by the API:

        1 Operating
          2 Revenue
            4 Sales
          3 Expenses
        5 Investing
    """
    return [
        CashFlowType(id=1, name="Operating", code="OP"),
        CashFlowType(id=2, name="Revenue", code="REV", parentId=1),
        CashFlowType(id=3, name="Expenses", code="EXP", parentId=1),
        CashFlowType(id=4, name="Sales", code="SAL", parentId=2),
        CashFlowType(id=5, name="Investing", code="INV"),
    ]


@pytest.fixture
def trend_points():
    return [
        TrendPoint(period="2024-01", totalAmount=Decimal("100"), transactionCount=3),
        TrendPoint(period="2024-02", totalAmount=Decimal("110"), transactionCount=4),
        TrendPoint(period="2024-03", totalAmount=Decimal("99"), transactionCount=2),
    ]
