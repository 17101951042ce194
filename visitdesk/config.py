"""Settings for the visitor desk, read from the environment and an optional .env file.

Every field maps to the upper-cased env var of the same name (DATABASE_URL, SESSION_SECRET, ...).
"""
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ENV_FILE), extra="ignore")

    app_name: str = "Visitor Management System"
    app_env: str = "development"
    debug: bool = True

    database_url: str = "sqlite:///./visitdesk.db"

    # Admin session cookie (signed, 24h)
    session_secret: str = "visitor-management-system-secret"
    session_cookie: str = "vmsid"
    session_max_age_seconds: int = 24 * 60 * 60

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 24 * 60

    @field_validator("session_secret", "jwt_secret_key")
    @classmethod
    def strip_secret(cls, v: str) -> str:
        return (v or "").strip()

    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"

    # Used by the phone normalizer until an admin saves the settings row
    default_country_code: str = "243"

    auto_checkout_enabled: bool = True
    auto_checkout_hour: int = 0
    auto_checkout_minute: int = 0

    # Browser origins allowed to call the API with the session cookie; empty means same-origin only
    cors_origins: list[str] = []

    @property
    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
