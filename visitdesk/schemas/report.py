"""Visitor report schemas."""
from datetime import datetime
from pydantic import Field
from visitdesk.models.visitor_report import ReportSeverity, ReportStatus
from visitdesk.schemas.common import CamelModel


class VisitorReportCreate(CamelModel):
    visitor_id: int
    report_type: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=10)
    severity_level: ReportSeverity = ReportSeverity.low
    status: ReportStatus = ReportStatus.open


class VisitorReportUpdate(CamelModel):
    status: ReportStatus | None = None
    resolution_notes: str | None = None
    resolution_date: datetime | None = None


class VisitorReportResponse(CamelModel):
    id: int
    visitor_id: int
    created_by: int | None = None
    report_type: str
    description: str
    severity_level: ReportSeverity
    status: ReportStatus
    resolution_notes: str | None = None
    resolution_date: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None
