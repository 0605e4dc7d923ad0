"""
Dependency Injection Container

This module provides a centralized container for managing dependencies
and service instantiation throughout the application. Each browser
session gets its own container because the bearer token is per session.
"""

from typing import Any, Dict, MutableMapping, Optional

import requests
import streamlit as st

from .api.client import ApiClient
from .config.settings import Settings
from .services.auth_service import AuthService
from .services.dashboard_service import DashboardService
from .services.resource_service import (
    BudgetService,
    BudgetTypeService,
    CashFlowService,
    CashFlowTypeService,
    DepartmentService,
    TransactionService,
)

CONTAINER_KEY = "_finance_console_container"


class Container:
    """Dependency injection container for managing application services."""

    def __init__(self):
        self._singletons: Dict[str, Any] = {}
        self._settings: Optional[Settings] = None

    def configure(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[MutableMapping[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Configure the container with settings and the credential store."""
        self._settings = settings or Settings()
        storage = st.session_state if storage is None else storage

        client = ApiClient(
            self._settings.api.base_url,
            timeout=self._settings.api.timeout,
            session=session,
        )
        auth = AuthService(client, storage, self._settings.auth)
        client.token_provider = auth.get_token
        client.on_unauthorized = auth.handle_unauthorized

        self._singletons['api_client'] = client
        self._singletons['auth_service'] = auth
        self._register_services(client)

    def _register_services(self, client: ApiClient) -> None:
        """Register service instances."""
        lookup = self.get_settings().api.lookup_page_size

        self._singletons['department_service'] = DepartmentService(client, lookup)
        self._singletons['budget_type_service'] = BudgetTypeService(client, lookup)
        self._singletons['budget_service'] = BudgetService(client, lookup)
        self._singletons['cash_flow_type_service'] = CashFlowTypeService(client, lookup)
        self._singletons['cash_flow_service'] = CashFlowService(client, lookup)
        self._singletons['transaction_service'] = TransactionService(client, lookup)
        self._singletons['dashboard_service'] = DashboardService(client)

    def get_settings(self) -> Settings:
        """Get application settings."""
        if not self._settings:
            self._settings = Settings()
        return self._settings

    def get_api_client(self) -> ApiClient:
        return self._singletons['api_client']

    def get_auth_service(self) -> AuthService:
        return self._singletons['auth_service']

    def get_department_service(self) -> DepartmentService:
        return self._singletons['department_service']

    def get_budget_type_service(self) -> BudgetTypeService:
        return self._singletons['budget_type_service']

    def get_budget_service(self) -> BudgetService:
        return self._singletons['budget_service']

    def get_cash_flow_type_service(self) -> CashFlowTypeService:
        return self._singletons['cash_flow_type_service']

    def get_cash_flow_service(self) -> CashFlowService:
        return self._singletons['cash_flow_service']

    def get_transaction_service(self) -> TransactionService:
        return self._singletons['transaction_service']

    def get_dashboard_service(self) -> DashboardService:
        return self._singletons['dashboard_service']

    def cleanup(self) -> None:
        """Cleanup container resources."""
        client = self._singletons.get('api_client')
        if client is not None:
            client.session.close()
        self._singletons.clear()


def get_container() -> Container:
    """Get the container of the current Streamlit session."""
    container = st.session_state.get(CONTAINER_KEY)
    if container is None:
        container = Container()
        container.configure()
        st.session_state[CONTAINER_KEY] = container
    return container
