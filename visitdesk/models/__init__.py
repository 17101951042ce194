"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from visitdesk.models.admin import Admin
from visitdesk.models.visitor import Visitor, Visit, Sex
from visitdesk.models.app_settings import AppSettings
from visitdesk.models.visitor_report import VisitorReport, ReportSeverity, ReportStatus
from visitdesk.models.system_log import SystemLog

__all__ = [
    "Admin",
    "Visitor",
    "Visit",
    "Sex",
    "AppSettings",
    "VisitorReport",
    "ReportSeverity",
    "ReportStatus",
    "SystemLog",
]
