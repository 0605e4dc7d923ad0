"""
Dashboard service for the server-side aggregates.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError

from ..api.client import ApiClient, ApiError, unwrap_data
from ..models.base import BaseModel
from ..models.dashboard import DashboardOverview, TrendSeries
from .validators import validate_date_range

logger = logging.getLogger(__name__)

TREND_PERIODS = ("day", "week", "month", "year")

DateLike = Union[date, str, None]

M = TypeVar("M", bound=BaseModel)


class DashboardService:
    """Service for the ``/api/dashboard`` endpoints."""

    endpoint = "/api/dashboard"

    def __init__(self, client: ApiClient):
        self.client = client

    def get_overview(
        self,
        start_date: DateLike = None,
        end_date: DateLike = None,
        department_id: Optional[int] = None,
    ) -> DashboardOverview:
        """Headline totals plus per-department and per-budget-type stats."""
        data = self._get("overview", self._range(start_date, end_date, department_id))
        return self._parse(DashboardOverview, data or {}, "overview")

    def get_trends(
        self,
        period: str = "month",
        start_date: DateLike = None,
        end_date: DateLike = None,
        department_id: Optional[int] = None,
    ) -> TrendSeries:
        """Per-period totals in the order the server returns them."""
        if period not in TREND_PERIODS:
            raise ValueError(f"Trend period must be one of: {list(TREND_PERIODS)}")

        params = self._range(start_date, end_date, department_id)
        params["period"] = period
        data = self._get("trends", params) or {}
        if isinstance(data, list):
            data = {"trends": data}
        if isinstance(data, dict):
            data.setdefault("period", period)
        series = self._parse(TrendSeries, data, "trends")
        logger.debug("Loaded %d trend points", len(series.trends))
        return series

    def get_cash_flow_stats(
        self,
        start_date: DateLike = None,
        end_date: DateLike = None,
        department_id: Optional[int] = None,
    ) -> Any:
        return self._get("cashflow-stats", self._range(start_date, end_date, department_id))

    def get_top_departments(
        self,
        limit: int = 5,
        start_date: DateLike = None,
        end_date: DateLike = None,
    ) -> Any:
        params = self._range(start_date, end_date)
        params["limit"] = limit
        return self._get("top-departments", params)

    def get_budget_utilization(
        self,
        start_date: DateLike = None,
        end_date: DateLike = None,
        budget_type_id: Optional[int] = None,
    ) -> Any:
        params = self._range(start_date, end_date)
        params["budget_type_id"] = budget_type_id
        return self._get("budget-utilization", params)

    def _get(self, path: str, params: Dict[str, Any]) -> Any:
        body = self.client.get(f"{self.endpoint}/{path}", params)
        return unwrap_data(body)

    @staticmethod
    def _parse(model: Type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.error("Malformed dashboard %s data from server: %s", path, e)
            raise ApiError(f"Malformed dashboard {path} data received from server", payload=data) from e

    @staticmethod
    def _range(start_date: DateLike, end_date: DateLike, department_id: Optional[int] = None) -> Dict[str, Any]:
        if isinstance(start_date, date) and isinstance(end_date, date):
            validate_date_range(start_date, end_date)
        return {
            "start_date": start_date.isoformat() if isinstance(start_date, date) else start_date,
            "end_date": end_date.isoformat() if isinstance(end_date, date) else end_date,
            # Backend spelling
            "deparment_id": department_id,
        }
