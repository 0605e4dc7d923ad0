"""
Application settings and configuration management using Pydantic BaseSettings.
"""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Environment enumeration"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class ApiConfig(BaseSettings):
    """Finance REST API connection settings."""
    base_url: str = Field(default="http://localhost:8080")
    timeout: float = Field(default=10.0, gt=0)
    page_size: int = Field(default=10, ge=1, le=100)
    lookup_page_size: int = Field(default=100, ge=1, le=500)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_prefix="API_", extra="ignore")


class AuthConfig(BaseSettings):
    """Keys used to keep credentials in client-side session storage."""
    token_key: str = Field(default="finance_app_token")
    user_key: str = Field(default="finance_app_user")

    model_config = SettingsConfigDict(env_prefix="AUTH_", extra="ignore")


class AppConfig(BaseSettings):
    """Application configuration settings."""
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_dir: str = Field(default="logs")
    page_title: str = Field(default="Cash Flow Management")
    page_icon: str = Field(default="💰")
    currency: str = Field(default="VND")
    top_departments: int = Field(default=5, ge=1)
    trend_period: str = Field(default="month")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a 3-letter ISO 4217 code")
        return v.upper()

    @field_validator("trend_period")
    @classmethod
    def validate_trend_period(cls, v: str) -> str:
        valid_periods = ["day", "week", "month", "year"]
        if v.lower() not in valid_periods:
            raise ValueError(f"Trend period must be one of: {valid_periods}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")


class Settings(BaseSettings):
    """Centralized application settings manager using Pydantic BaseSettings."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    def __init__(self, **kwargs):
        self._load_env_file()
        super().__init__(**kwargs)

    @staticmethod
    def _load_env_file() -> None:
        """Load environment variables from .env file."""
        env_file = Path(".env")
        if env_file.exists():
            from dotenv import load_dotenv
            load_dotenv(env_file)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
