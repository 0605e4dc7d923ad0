"""
User returned by the authentication endpoints.
"""

from enum import Enum
from typing import Optional

from .base import EntityModel, Field


class UserRole(str, Enum):
    """Roles known to the backend."""

    ADMIN = "admin"
    USER = "user"


class User(EntityModel):
    """Authenticated console user."""

    full_name: str = Field(default="", alias="fullName")
    email: str = Field(default="")
    role: Optional[str] = Field(default=UserRole.USER.value)

    @property
    def display_name(self) -> str:
        return self.full_name or self.email
