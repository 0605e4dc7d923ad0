"""
Department entity.
"""

from .base import EntityModel, Field


class Department(EntityModel):
    """Organisational unit that owns cash flows."""

    name: str = Field(default="", max_length=255)
    code_department: str = Field(default="", description="Department code, e.g. PB-KT")
    composite_code: str = Field(default="")
    address: str = Field(default="")
    address_code: str = Field(default="")

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code_department})" if self.code_department else self.name
