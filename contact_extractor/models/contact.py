"""
Contact data models

Contacts are produced by the extraction service and never modified afterwards
"""

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Contact(BaseModel):
    """A single person extracted from pasted email text"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Full name of the person")
    email: str = Field(default="", description="Email address")
    title: str = Field(default="", description="Job title or role")
    phone: str = Field(default="", description="Phone number")

    @field_validator("name", "email", "title", "phone", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        # Unknown fields are always "", never None
        return "" if value is None else value


class ExtractionResult(BaseModel):
    """Ordered contacts as returned by the extraction service"""

    contacts: List[Contact] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls(contacts=[])


class DetailFormat(str, Enum):
    """Entry decoration for the labeled detail view"""

    SIMPLE = "simple"
    BULLET = "bullet"
    NUMBER = "number"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
