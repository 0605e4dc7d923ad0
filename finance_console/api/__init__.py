"""
Finance REST API client.
"""

from .client import (
    ApiClient,
    ApiError,
    TransportError,
    AuthenticationError,
    GENERIC_ERROR_MESSAGE,
    unwrap_data,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "TransportError",
    "AuthenticationError",
    "GENERIC_ERROR_MESSAGE",
    "unwrap_data",
]
