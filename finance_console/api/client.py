"""
HTTP client for the finance REST API.
"""

import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from ..utils.logger import log_api_call

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unknown error occurred"


class ApiError(Exception):
    """Request to the finance API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class TransportError(ApiError):
    """The server could not be reached or did not answer in time."""


class AuthenticationError(ApiError):
    """The server rejected the bearer token."""


TokenProvider = Callable[[], Optional[str]]
UnauthorizedHook = Callable[[], None]


class ApiClient:
    """Thin JSON client that attaches the bearer token to every request."""

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        on_unauthorized: Optional[UnauthorizedHook] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.on_unauthorized = on_unauthorized
        self.timeout = timeout
        self.session = session or requests.Session()

    def auth_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any = None) -> Dict[str, Any]:
        return self.request("POST", endpoint, json=data)

    def put(self, endpoint: str, data: Any = None) -> Dict[str, Any]:
        return self.request("PUT", endpoint, json=data)

    def delete(self, endpoint: str) -> Dict[str, Any]:
        return self.request("DELETE", endpoint)

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Raises:
            TransportError: network failure or timeout
            AuthenticationError: the server answered 401
            ApiError: any other non-2xx answer, with the server's message
        """
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json", **self.auth_headers()}
        logger.debug("Sending %s %s", method, url)
        started = time.monotonic()

        try:
            response = self.session.request(
                method,
                url,
                params=self._clean_params(params),
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log_api_call(method, endpoint, response_time=time.monotonic() - started, error=str(e))
            raise TransportError(f"Unable to reach the server: {e}") from e

        elapsed = time.monotonic() - started

        if not response.ok:
            error = self._error_from_response(response)
            log_api_call(method, endpoint, response.status_code, elapsed, error=error.message)
            if isinstance(error, AuthenticationError) and self.on_unauthorized:
                self.on_unauthorized()
            raise error

        log_api_call(method, endpoint, response.status_code, elapsed)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(GENERIC_ERROR_MESSAGE, response.status_code) from e

    @staticmethod
    def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """Drop unset query parameters."""
        if not params:
            return None
        return {key: value for key, value in params.items() if value is not None and value != ""}

    @staticmethod
    def _error_from_response(response: requests.Response) -> ApiError:
        status = response.status_code
        error_cls = AuthenticationError if status == 401 else ApiError
        try:
            body = response.json()
        except ValueError:
            return error_cls(GENERIC_ERROR_MESSAGE, status)

        message = body.get("message") if isinstance(body, dict) else None
        return error_cls(message or f"HTTP error! status: {status}", status, body)


def unwrap_data(body: Any) -> Any:
    """Return ``data`` from a ``{success, data}`` envelope.

    Raises:
        ApiError: when the body is not an envelope or reports ``success: false``
    """
    if not isinstance(body, dict):
        raise ApiError(GENERIC_ERROR_MESSAGE, payload=body)
    if not body.get("success", False):
        raise ApiError(body.get("message") or GENERIC_ERROR_MESSAGE, payload=body)
    return body.get("data")
