"""Incident / behaviour notes that staff attach to a visitor."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Enum as SQLEnum
from visitdesk.database import Base
import enum


class ReportSeverity(str, enum.Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class ReportStatus(str, enum.Enum):
    open = "Open"
    under_review = "Under Review"
    resolved = "Resolved"


class VisitorReport(Base):
    __tablename__ = "visitor_reports"

    id = Column(Integer, primary_key=True, index=True)
    visitor_id = Column(Integer, ForeignKey("visitors.id"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)

    report_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    severity_level = Column(SQLEnum(ReportSeverity), nullable=False, default=ReportSeverity.low)
    status = Column(SQLEnum(ReportStatus), nullable=False, default=ReportStatus.open)
    resolution_notes = Column(Text, nullable=True)
    resolution_date = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)
