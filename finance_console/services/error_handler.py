"""
Error handling service for user-facing failures.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from ..api.client import ApiError, AuthenticationError, GENERIC_ERROR_MESSAGE, TransportError
from .validators import ValidationError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling service."""

    def __init__(self):
        self.logger = logger

    def handle_exception(
        self,
        exception: Exception,
        context: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Log the exception and build the notification shown to the user."""
        error_id = self._generate_error_id()
        fields = {
            "error_id": error_id,
            "error_type": type(exception).__name__,
            "context": context or "unknown context",
            "user_id": user_id,
        }

        if isinstance(exception, ValidationError):
            fields["field"] = exception.field
            self.logger.warning("Validation error", extra={"extra_fields": fields})
        elif isinstance(exception, ApiError):
            fields["status_code"] = exception.status_code
            self.logger.error("API error", extra={"extra_fields": fields})
        else:
            self.logger.exception("Unexpected error", extra={"extra_fields": fields})

        return {
            "success": False,
            "error_id": error_id,
            "message": self.get_user_message(exception),
            "type": type(exception).__name__,
            "timestamp": datetime.now().isoformat(),
        }

    @staticmethod
    def get_user_message(exception: Exception) -> str:
        """Server and validation messages are shown verbatim."""
        if isinstance(exception, ValidationError):
            return exception.message
        if isinstance(exception, TransportError):
            return "Unable to reach the server. Please check your connection and try again."
        if isinstance(exception, AuthenticationError):
            return exception.message or "Your session has expired. Please log in again."
        if isinstance(exception, ApiError):
            return exception.message or GENERIC_ERROR_MESSAGE
        return GENERIC_ERROR_MESSAGE

    def _generate_error_id(self) -> str:
        """Generate unique error ID for tracking."""
        return str(uuid.uuid4())[:8]


_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the process-wide error handler."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler
