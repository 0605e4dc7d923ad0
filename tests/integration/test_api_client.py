"""
Integration tests for the API client with a mocked HTTP session
"""

from unittest.mock import Mock

import pytest
import requests

from finance_console.api.client import (
    GENERIC_ERROR_MESSAGE,
    ApiClient,
    ApiError,
    AuthenticationError,
    TransportError,
    unwrap_data,
)


@pytest.mark.integration
class TestApiClient:

    def test_get_builds_url_and_drops_empty_params(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(body={"success": True, "data": []})

        api_client.get("/api/budget", {"page": 1, "limit": 10, "search": None, "budget_type_id": ""})

        args, kwargs = mock_session.request.call_args
        assert args == ("GET", "http://api.test/api/budget")
        assert kwargs["params"] == {"page": 1, "limit": 10}
        assert kwargs["timeout"] == 10.0

    def test_bearer_token_attached(self, mock_session, make_response):
        mock_session.request.return_value = make_response(body={"success": True})
        client = ApiClient("http://api.test", token_provider=lambda: "tok-123", session=mock_session)

        client.post("/api/department", {"name": "Finance"})

        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer tok-123"
        assert kwargs["json"] == {"name": "Finance"}

    def test_no_token_no_header(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(body={"success": True})

        api_client.delete("/api/department/1")

        assert "Authorization" not in mock_session.request.call_args.kwargs["headers"]

    def test_server_message_is_kept(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(409, {"success": False, "message": "Code already exists"})

        with pytest.raises(ApiError) as exc_info:
            api_client.post("/api/budget", {})

        assert exc_info.value.message == "Code already exists"
        assert exc_info.value.status_code == 409

    def test_body_without_message(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(500, {"success": False})

        with pytest.raises(ApiError, match="HTTP error! status: 500"):
            api_client.get("/api/budget")

    def test_unparseable_error_body(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(502, invalid_json=True)

        with pytest.raises(ApiError) as exc_info:
            api_client.get("/api/budget")

        assert exc_info.value.message == GENERIC_ERROR_MESSAGE
        assert not isinstance(exc_info.value, TransportError)

    def test_network_failure(self, api_client, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError, match="Unable to reach the server"):
            api_client.get("/api/budget")

    def test_timeout(self, api_client, mock_session):
        mock_session.request.side_effect = requests.Timeout("slow")

        with pytest.raises(TransportError):
            api_client.get("/api/budget")

    def test_unauthorized_calls_hook(self, mock_session, make_response):
        hook = Mock()
        mock_session.request.return_value = make_response(401, {"message": "Invalid token"})
        client = ApiClient("http://api.test", session=mock_session, on_unauthorized=hook)

        with pytest.raises(AuthenticationError, match="Invalid token"):
            client.get("/api/department")

        hook.assert_called_once_with()

    def test_other_errors_do_not_call_hook(self, mock_session, make_response):
        hook = Mock()
        mock_session.request.return_value = make_response(403, {"message": "Forbidden"})
        client = ApiClient("http://api.test", session=mock_session, on_unauthorized=hook)

        with pytest.raises(ApiError):
            client.get("/api/department")

        hook.assert_not_called()

    def test_invalid_json_on_success(self, api_client, mock_session, make_response):
        mock_session.request.return_value = make_response(200, invalid_json=True)

        with pytest.raises(ApiError, match=GENERIC_ERROR_MESSAGE):
            api_client.get("/api/budget")


@pytest.mark.integration
class TestUnwrapData:

    def test_success(self):
        assert unwrap_data({"success": True, "data": {"id": 1}}) == {"id": 1}

    def test_success_false(self):
        with pytest.raises(ApiError, match="Not allowed"):
            unwrap_data({"success": False, "message": "Not allowed"})

    def test_not_an_envelope(self):
        with pytest.raises(ApiError, match=GENERIC_ERROR_MESSAGE):
            unwrap_data(["unexpected"])
