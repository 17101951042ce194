"""Dashboard analytics over a date range."""
from datetime import datetime, time, timedelta
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.schemas.dashboard import AnalyticsResponse
from visitdesk.services.stats import compute_analytics

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

DEFAULT_RANGE_DAYS = 30


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")


@router.get("/data", response_model=AnalyticsResponse)
def analytics_data(
    from_date: str | None = Query(None, alias="fromDate"),
    to_date: str | None = Query(None, alias="toDate"),
    interval: str = Query("day", pattern="^(hour|day|week|month)$"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """fromDate defaults to 30 days ago; toDate (default today) includes the whole day."""
    end = _parse_date(to_date) if to_date else datetime.now()
    end = datetime.combine(end.date(), time.max)
    start = _parse_date(from_date) if from_date else datetime.now() - timedelta(days=DEFAULT_RANGE_DAYS)
    start = start.replace(tzinfo=None)
    if start > end:
        raise HTTPException(status_code=400, detail="fromDate must not be after toDate")
    return AnalyticsResponse(**compute_analytics(db, start, end, interval))
