"""Process-wide application settings (single row, created lazily)."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from visitdesk.database import Base

DEFAULT_APP_NAME = "Visitor Management System"


class AppSettings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    app_name = Column(String(255), nullable=False, default=DEFAULT_APP_NAME)
    header_app_name = Column(String(255), nullable=True)
    footer_app_name = Column(String(255), nullable=True)
    logo_url = Column(Text, nullable=True)  # data URL
    country_code = Column(String(10), nullable=False, default="243")

    theme = Column(String(10), nullable=False, default="light")
    admin_theme = Column(String(10), nullable=False, default="light")
    visitor_theme = Column(String(10), nullable=False, default="light")
    default_language = Column(String(10), nullable=False, default="en")

    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)
