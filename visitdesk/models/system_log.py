"""Append-only system log for automated and bulk actions.
No updates or deletes - every record is permanent."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from visitdesk.database import Base


class SystemLog(Base):
    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, index=True)

    # e.g. AUTO_CHECKOUT, MANUAL_CHECKOUT, RETURNING_VISITOR
    action = Column(String(64), nullable=False, index=True)
    details = Column(Text, nullable=False)

    # Acting admin; NULL for scheduled jobs and kiosk self check-in
    user_id = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)
    affected_records = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)
