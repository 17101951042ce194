"""Append-only system log service. Never update or delete - immutable audit trail."""
from __future__ import annotations

from sqlalchemy.orm import Session

from visitdesk.models.system_log import SystemLog

ACTION_AUTO_CHECKOUT = "AUTO_CHECKOUT"
ACTION_MANUAL_CHECKOUT = "MANUAL_CHECKOUT"
ACTION_AUTO_CHECKOUT_ERROR = "AUTO_CHECKOUT_ERROR"
ACTION_RETURNING_VISITOR = "RETURNING_VISITOR"
ACTION_RETURNING_VISITOR_DIRECT = "RETURNING_VISITOR_DIRECT"
ACTION_RETURNING_VISITOR_LOOKUP = "RETURNING_VISITOR_LOOKUP"
ACTION_VISITOR_RESTORED_ON_CHECK_IN = "VISITOR_RESTORED_ON_CHECK_IN"
ACTION_VISITOR_DELETED = "VISITOR_DELETED"
ACTION_VISITOR_RESTORED = "VISITOR_RESTORED"
ACTION_VISITOR_PERMANENTLY_DELETED = "VISITOR_PERMANENTLY_DELETED"
ACTION_RECYCLE_BIN_EMPTIED = "RECYCLE_BIN_EMPTIED"

# Column limits (match model)
_ACTION_LEN = 64
_DETAILS_LEN = 100_000


def create_log(
    db: Session,
    action: str,
    details: str,
    *,
    user_id: int | None = None,
    affected_records: int = 0,
) -> SystemLog:
    """Append one system log record. Commit remains with caller."""
    act = (action or "")[:_ACTION_LEN].strip() or "UNKNOWN"
    det = (details or "")[:_DETAILS_LEN].strip() or "-"
    entry = SystemLog(
        action=act,
        details=det,
        user_id=user_id,
        affected_records=max(int(affected_records or 0), 0),
    )
    db.add(entry)
    db.flush()
    return entry


def list_logs(db: Session, limit: int = 100) -> list[SystemLog]:
    return (
        db.query(SystemLog)
        .order_by(SystemLog.created_at.desc(), SystemLog.id.desc())
        .limit(limit)
        .all()
    )
