"""
CRUD services for the finance API resources.

Every resource follows the same contract:
``GET /api/<resource>`` returns ``{success, data: {<plural>: [...], pagination}}``,
``GET/PUT /api/<resource>/<id>`` and ``POST /api/<resource>`` return
``{success, data: record}`` and ``DELETE`` returns ``{success}``.
"""

import logging
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..api.client import ApiClient, ApiError, unwrap_data
from ..models.base import EntityModel, PaginatedResult, Pagination
from ..models.budget import Budget, BudgetType
from ..models.cash_flow import CashFlow, CashFlowType
from ..models.department import Department
from ..models.transaction import Transaction
from .validators import validate_parent_assignment

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=EntityModel)


class ResourceService(Generic[T]):
    """Base service for one REST resource."""

    resource: ClassVar[str] = ""
    model: ClassVar[Type[EntityModel]] = EntityModel
    # Keys the list payload may use for the records (plural first)
    collection_keys: ClassVar[Tuple[str, ...]] = ()
    # Python filter name -> query parameter name
    filter_params: ClassVar[Dict[str, str]] = {}

    def __init__(self, client: ApiClient, lookup_page_size: int = 100):
        self.client = client
        self.lookup_page_size = lookup_page_size

    @property
    def endpoint(self) -> str:
        return f"/api/{self.resource}"

    def list(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        **filters: Any,
    ) -> PaginatedResult[T]:
        """Fetch one page of records."""
        params: Dict[str, Any] = {"page": page, "limit": limit, "search": search or None}
        params.update(self._filter_query(filters))

        body = self.client.get(self.endpoint, params)
        data = unwrap_data(body) or {}

        records = self._extract_records(data)
        pagination_raw = data.get("pagination") if isinstance(data, dict) else None
        pagination = (
            Pagination.model_validate(pagination_raw)
            if isinstance(pagination_raw, dict)
            else Pagination.single_page(len(records))
        )
        return PaginatedResult(items=[self._parse(item) for item in records], pagination=pagination)

    def list_all(self, search: Optional[str] = None, **filters: Any) -> List[T]:
        """Fetch the whole collection, page by page."""
        items: List[T] = []
        page = 1
        while True:
            result = self.list(page=page, limit=self.lookup_page_size, search=search, **filters)
            items.extend(result.items)
            if not result.items or not result.pagination.has_next:
                break
            page += 1
        logger.debug("Loaded %d %s records", len(items), self.resource)
        return items

    def get(self, record_id: int) -> Optional[T]:
        body = self.client.get(f"{self.endpoint}/{record_id}")
        data = unwrap_data(body)
        return self._parse(data) if data else None

    def create(self, payload: Mapping[str, Any]) -> Optional[T]:
        body = self.client.post(self.endpoint, dict(payload))
        data = unwrap_data(body)
        logger.info("Created %s", self.resource)
        return self._parse(data) if data else None

    def update(self, record_id: int, payload: Mapping[str, Any]) -> Optional[T]:
        body = self.client.put(f"{self.endpoint}/{record_id}", dict(payload))
        data = unwrap_data(body)
        logger.info("Updated %s %s", self.resource, record_id)
        return self._parse(data) if data else None

    def delete(self, record_id: int) -> None:
        body = self.client.delete(f"{self.endpoint}/{record_id}")
        unwrap_data(body)
        logger.info("Deleted %s %s", self.resource, record_id)

    def _filter_query(self, filters: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(filters) - set(self.filter_params)
        if unknown:
            raise TypeError(f"Unsupported filters for {self.resource}: {sorted(unknown)}")
        return {self.filter_params[name]: value for name, value in filters.items()}

    def _extract_records(self, data: Any) -> List[Dict[str, Any]]:
        if not isinstance(data, dict):
            return []
        for key in self.collection_keys:
            records = data.get(key)
            if isinstance(records, list):
                return records
        return []

    def _parse(self, raw: Any) -> T:
        try:
            return self.model.model_validate(raw)
        except PydanticValidationError as e:
            logger.error("Malformed %s record from server: %s", self.resource, e)
            raise ApiError(f"Malformed {self.resource} data received from server", payload=raw) from e


class DepartmentService(ResourceService[Department]):
    resource = "department"
    model = Department
    collection_keys = ("departments", "department")


class BudgetTypeService(ResourceService[BudgetType]):
    resource = "budget-type"
    model = BudgetType
    collection_keys = ("budgetTypes", "budgetType")


class BudgetService(ResourceService[Budget]):
    resource = "budget"
    model = Budget
    collection_keys = ("budgets", "budget")
    filter_params = {"budget_type_id": "budget_type_id"}


class CashFlowTypeService(ResourceService[CashFlowType]):
    resource = "cash-flow-type"
    model = CashFlowType
    collection_keys = ("cashFlowTypes", "cashFlowType")
    filter_params = {"parent_id": "parentId"}

    def create(self, payload: Mapping[str, Any], known_types: Optional[List[CashFlowType]] = None) -> Optional[CashFlowType]:
        """Create a type after checking its parent exists."""
        parent_id = payload.get("parentId")
        if parent_id is not None:
            records = known_types if known_types is not None else self.list_all()
            validate_parent_assignment(records, None, parent_id)
        return super().create(payload)

    def update(self, record_id: int, payload: Mapping[str, Any], known_types: Optional[List[CashFlowType]] = None) -> Optional[CashFlowType]:
        """Update a type, refusing parents that would make it its own ancestor."""
        parent_id = payload.get("parentId")
        if parent_id is not None:
            records = known_types if known_types is not None else self.list_all()
            validate_parent_assignment(records, record_id, parent_id)
        return super().update(record_id, payload)


class CashFlowService(ResourceService[CashFlow]):
    resource = "cash-flow"
    model = CashFlow
    collection_keys = ("cashFlows", "cashFlow")
    filter_params = {
        "department_id": "deparment_id",
        "cash_flow_type_id": "cash_flow_type_id",
    }


class TransactionService(ResourceService[Transaction]):
    resource = "transaction"
    model = Transaction
    collection_keys = ("transactions", "transaction")
    filter_params = {
        "cash_flow_id": "cash_flow_id",
        "budget_id": "budget_id",
        "start_date": "start_date",
        "end_date": "end_date",
    }

    def _filter_query(self, filters: Mapping[str, Any]) -> Dict[str, Any]:
        query = super()._filter_query(filters)
        # Dates go over the wire as YYYY-MM-DD
        for key in ("start_date", "end_date"):
            if query.get(key) is not None and hasattr(query[key], "isoformat"):
                query[key] = query[key].isoformat()
        return query
