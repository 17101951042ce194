"""Admin login schemas."""
from datetime import datetime
from typing import Literal
from visitdesk.schemas.common import CamelModel


class AdminLogin(CamelModel):
    username: str
    password: str


class AdminResponse(CamelModel):
    id: int
    username: str
    preferred_language: str
    created_at: datetime | None = None


class AdminLoginResponse(AdminResponse):
    access_token: str
    token_type: str = "bearer"


class UpdateLanguageRequest(CamelModel):
    preferred_language: Literal["en", "fr"]
