"""
Authentication service for the finance console.

Credentials live in a per-session key/value store (Streamlit's session
state in the app, a plain dict in tests) under the configured token and
user keys.
"""

import logging
from typing import Any, Dict, MutableMapping, Optional

from ..api.client import ApiClient, ApiError, TransportError
from ..config.settings import AuthConfig
from ..models.user import User, UserRole
from ..utils.logger import log_user_action
from .validators import validate_email, validate_required

logger = logging.getLogger(__name__)


class AuthService:
    """Login, registration and token storage."""

    def __init__(
        self,
        client: ApiClient,
        storage: MutableMapping[str, Any],
        config: Optional[AuthConfig] = None,
    ):
        self.client = client
        self.storage = storage
        self.config = config or AuthConfig()

    def login(self, email: str, password: str) -> User:
        """
        Authenticate against the backend and remember the session.

        Raises:
            ValidationError: If email or password is missing
            ApiError: With the server's message, or "Login failed"
        """
        validate_required({"email": email, "password": password}, ["email", "password"])
        email = email.strip().lower()

        body = self._post_credentials("/api/user/login", {"email": email, "password": password}, "Login failed")
        data = body.get("data") or {}
        token = data.get("token")
        if not body.get("success") or not token:
            raise ApiError(body.get("message") or "Login failed", payload=body)

        user = User.model_validate(data.get("user") or {"email": email})
        self.storage[self.config.token_key] = token
        self.storage[self.config.user_key] = user.model_dump(mode="json", by_alias=True)

        log_user_action("login", {"email": email}, user_id=str(user.id) if user.id is not None else None)
        logger.info("User logged in")
        return user

    def register(self, full_name: str, email: str, password: str, role: str = UserRole.USER.value) -> Dict[str, Any]:
        """Create an account; the user still has to log in afterwards."""
        validate_required(
            {"fullName": full_name, "email": email, "password": password},
            ["fullName", "email", "password"],
            labels={"fullName": "Full name", "email": "Email", "password": "Password"},
        )
        validate_email(email.strip())

        payload = {
            "fullName": full_name.strip(),
            "email": email.strip().lower(),
            "password": password,
            "role": role,
        }
        body = self._post_credentials("/api/user/register", payload, "Registration failed")
        if body.get("success") is False:
            raise ApiError(body.get("message") or "Registration failed", payload=body)

        log_user_action("register", {"email": payload["email"], "role": role})
        return body

    def logout(self) -> None:
        user = self.get_user()
        self.clear()
        log_user_action("logout", user_id=str(user.id) if user and user.id is not None else None)

    def clear(self) -> None:
        """Forget the stored token and user."""
        self.storage.pop(self.config.token_key, None)
        self.storage.pop(self.config.user_key, None)

    def handle_unauthorized(self) -> None:
        """Called by the API client when the server rejects the token."""
        if self.get_token():
            logger.warning("Session token rejected by server, clearing credentials")
        self.clear()

    def get_token(self) -> Optional[str]:
        return self.storage.get(self.config.token_key) or None

    def get_user(self) -> Optional[User]:
        raw = self.storage.get(self.config.user_key)
        if not raw:
            return None
        return User.model_validate(raw)

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def _post_credentials(self, endpoint: str, payload: Dict[str, Any], fallback: str) -> Dict[str, Any]:
        try:
            body = self.client.post(endpoint, payload)
        except TransportError:
            raise
        except ApiError as e:
            # Only a message the server actually sent is shown verbatim
            message = e.payload.get("message") if isinstance(e.payload, dict) else None
            raise ApiError(message or fallback, e.status_code, e.payload) from e

        if not isinstance(body, dict):
            raise ApiError(fallback, payload=body)
        return body
