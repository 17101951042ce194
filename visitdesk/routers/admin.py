"""Admin dashboard: visitor and visit management, stats, export, system logs."""
import csv
import io
from datetime import date, datetime, time, timedelta
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import or_
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.models.visitor import Visitor, Visit, BADGE_PREFIX
from visitdesk.schemas.dashboard import DashboardStats, SystemLogEntry
from visitdesk.schemas.visit import (
    AutoCheckoutResponse,
    CheckOutRequest,
    SetVisitPartnerRequest,
    UpdateVisitPurposeRequest,
    VisitorDetail,
    VisitPartnerResponse,
    VisitResponse,
    VisitWithVisitor,
)
from visitdesk.schemas.visitor import VerifyVisitorRequest, VisitorResponse, VisitorUpdate
from visitdesk.services import visits as visit_service
from visitdesk.services.auto_checkout import run_auto_checkout
from visitdesk.services.stats import compute_stats, export_rows, EXPORT_COLUMNS
from visitdesk.services.system_log import list_logs
from visitdesk.services.trash import get_visitor

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _visit_rows(rows) -> list[VisitWithVisitor]:
    return [
        VisitWithVisitor(visit=VisitResponse.model_validate(v), visitor=VisitorResponse.model_validate(p))
        for v, p in rows
    ]


@router.get("/current-visitors", response_model=list[VisitWithVisitor])
def current_visitors(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return _visit_rows(visit_service.list_active_with_visitors(db))


@router.get("/visit-history", response_model=list[VisitWithVisitor])
def visit_history(
    limit: int = Query(100, ge=1, le=5000),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return _visit_rows(visit_service.list_history_with_visitors(db, limit))


@router.get("/visitors", response_model=list[VisitorResponse])
@router.get("/all-visitors", response_model=list[VisitorResponse], include_in_schema=False)
def list_visitors(
    search: str | None = Query(None, description="Name, email, phone or badge id"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    q = db.query(Visitor).filter(Visitor.deleted.is_(False))
    term = (search or "").strip()
    if term:
        like = f"%{term}%"
        conditions = [
            Visitor.full_name.ilike(like),
            Visitor.email.ilike(like),
            Visitor.phone_number.ilike(like),
        ]
        badge = term.upper()
        if badge.startswith(BADGE_PREFIX):
            badge = badge[len(BADGE_PREFIX):]
        if badge.isdigit():
            conditions.append(Visitor.id == int(badge))
        q = q.filter(or_(*conditions))
    return [VisitorResponse.model_validate(v) for v in q.order_by(Visitor.id.desc()).all()]


@router.get("/visitors/{visitor_id}", response_model=VisitorDetail)
def visitor_detail(
    visitor_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visitor = get_visitor(db, visitor_id)
    visits = (
        db.query(Visit)
        .filter(Visit.visitor_id == visitor.id)
        .order_by(Visit.check_in_time.desc())
        .all()
    )
    return VisitorDetail(
        visitor=VisitorResponse.model_validate(visitor),
        visits=[VisitResponse.model_validate(v) for v in visits],
    )


@router.post("/check-out-visitor", response_model=VisitResponse)
def admin_check_out(
    data: CheckOutRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visit = visit_service.check_out(db, data.visit_id)
    db.commit()
    db.refresh(visit)
    return VisitResponse.model_validate(visit)


@router.post("/auto-checkout", response_model=AutoCheckoutResponse)
def admin_auto_checkout(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    count = run_auto_checkout(db, admin_id=current_admin.id)
    return AutoCheckoutResponse(message=f"Successfully checked out {count} visitors", count=count)


@router.post("/update-visit-purpose", response_model=VisitResponse)
def update_visit_purpose(
    data: UpdateVisitPurposeRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visit = visit_service.update_purpose(db, data.visit_id, data.purpose)
    db.commit()
    db.refresh(visit)
    return VisitResponse.model_validate(visit)


@router.post("/set-visit-partner", response_model=VisitPartnerResponse)
def set_visit_partner(
    data: SetVisitPartnerRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Link (or unlink with partnerId=null) two visits. Both sides commit together."""
    visit, partner = visit_service.set_partner(db, data.visit_id, data.partner_id)
    db.commit()
    db.refresh(visit)
    if partner is not None:
        db.refresh(partner)
    return VisitPartnerResponse(
        visit=VisitResponse.model_validate(visit),
        partner=VisitResponse.model_validate(partner) if partner is not None else None,
    )


@router.post("/verify-visitor", response_model=VisitorResponse)
def verify_visitor(
    data: VerifyVisitorRequest,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visitor = get_visitor(db, data.visitor_id)
    visitor.verified = data.verified
    db.add(visitor)
    db.commit()
    db.refresh(visitor)
    return VisitorResponse.model_validate(visitor)


@router.put("/update-visitor", response_model=VisitorResponse)
def update_visitor(
    data: VisitorUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visitor = get_visitor(db, data.id)
    for field, value in data.model_dump(exclude_unset=True, exclude={"id"}).items():
        if field in ("full_name", "year_of_birth", "phone_number") and value is None:
            raise HTTPException(status_code=400, detail=f"{field} cannot be empty")
        setattr(visitor, field, value)
    db.add(visitor)
    db.commit()
    db.refresh(visitor)
    return VisitorResponse.model_validate(visitor)


@router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return DashboardStats(**compute_stats(db))


@router.get("/export")
def export_visits(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    format: str = Query("json", pattern="^(json|csv)$"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Visits checked in within [startDate, endDate] (default: last 30 days)."""
    end = datetime.combine(end_date or date.today(), time.max)
    start = datetime.combine(start_date or (date.today() - timedelta(days=30)), time.min)
    if start > end:
        raise HTTPException(status_code=400, detail="startDate must not be after endDate")
    rows = export_rows(db, start, end)
    if format == "json":
        return rows
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    filename = f"visits_{start.date().isoformat()}_{end.date().isoformat()}.csv"
    return StreamingResponse(
        iter([buf.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/system-logs", response_model=list[SystemLogEntry])
def system_logs(
    limit: int = Query(100),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    if limit <= 0:
        raise HTTPException(status_code=400, detail="Invalid limit parameter")
    return [SystemLogEntry.model_validate(e) for e in list_logs(db, limit)]
