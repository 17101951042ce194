"""Application settings schemas."""
from datetime import datetime
from typing import Literal
from pydantic import Field, field_validator
from visitdesk.schemas.common import CamelModel

Theme = Literal["light", "dark"]
Language = Literal["en", "fr"]


class SettingsUpdate(CamelModel):
    app_name: str = Field(..., min_length=1, max_length=255)
    header_app_name: str | None = Field(None, max_length=255)
    footer_app_name: str | None = Field(None, max_length=255)
    logo_url: str | None = None
    country_code: str = "243"
    theme: Theme | None = None
    admin_theme: Theme | None = None
    visitor_theme: Theme | None = None
    default_language: Language | None = None

    @field_validator("country_code")
    @classmethod
    def country_code_digits(cls, v: str) -> str:
        v = (v or "").strip().lstrip("+")
        if not v:
            raise ValueError("Country code must not be empty")
        if not v.isdigit() or len(v) > 5:
            raise ValueError("Country code should be up to 5 digits")
        return v


class SettingsResponse(CamelModel):
    id: int
    app_name: str
    header_app_name: str | None = None
    footer_app_name: str | None = None
    logo_url: str | None = None
    country_code: str
    theme: str
    admin_theme: str
    visitor_theme: str
    default_language: str
    updated_at: datetime | None = None
