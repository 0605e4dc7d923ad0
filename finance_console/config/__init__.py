"""
Configuration Management

This module provides centralized configuration management
for the cash flow management console.
"""

from .settings import Settings, ApiConfig, AuthConfig, AppConfig, Environment

__all__ = [
    "Settings",
    "ApiConfig",
    "AuthConfig",
    "AppConfig",
    "Environment",
]
