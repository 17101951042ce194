"""Singleton settings row: lazy creation, upsert, country code lookup."""
import logging

from sqlalchemy.orm import Session

from visitdesk.config import get_settings
from visitdesk.models.app_settings import AppSettings, DEFAULT_APP_NAME
from visitdesk.schemas.settings import SettingsUpdate

log = logging.getLogger("uvicorn.error")


def get_app_settings(db: Session) -> AppSettings | None:
    return db.query(AppSettings).order_by(AppSettings.id).first()


def create_default_settings(db: Session, data: SettingsUpdate | None = None) -> AppSettings:
    theme = (data.theme if data else None) or "light"
    app_name = (data.app_name if data else None) or DEFAULT_APP_NAME
    row = AppSettings(
        app_name=app_name,
        header_app_name=(data.header_app_name if data else None) or app_name,
        footer_app_name=(data.footer_app_name if data else None) or app_name,
        logo_url=data.logo_url if data else None,
        country_code=(data.country_code if data else None) or get_settings().default_country_code,
        theme=theme,
        admin_theme=(data.admin_theme if data else None) or theme,
        visitor_theme=(data.visitor_theme if data else None) or theme,
        default_language=(data.default_language if data else None) or "en",
    )
    db.add(row)
    db.flush()
    log.info("Default settings created (id=%s)", row.id)
    return row


def get_or_create_settings(db: Session) -> AppSettings:
    return get_app_settings(db) or create_default_settings(db)


def update_settings(db: Session, data: SettingsUpdate) -> AppSettings:
    """Upsert the settings row. Header/footer names fall back to app_name, surface themes to theme."""
    row = get_app_settings(db)
    if row is None:
        return create_default_settings(db, data)
    theme = data.theme or data.admin_theme or row.theme
    row.app_name = data.app_name
    row.header_app_name = data.header_app_name or data.app_name
    row.footer_app_name = data.footer_app_name or data.app_name
    row.logo_url = data.logo_url
    row.country_code = data.country_code
    row.theme = theme
    row.admin_theme = data.admin_theme or data.theme or row.admin_theme
    row.visitor_theme = data.visitor_theme or data.theme or row.visitor_theme
    row.default_language = data.default_language or row.default_language
    db.add(row)
    db.flush()
    return row


def country_code(db: Session) -> str:
    """Country code used for phone matching; does not create the settings row."""
    row = get_app_settings(db)
    if row and row.country_code:
        return row.country_code
    return get_settings().default_country_code
