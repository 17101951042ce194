"""Visitor reports (incident / behaviour notes)."""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.models.visitor_report import VisitorReport, ReportStatus
from visitdesk.schemas.report import VisitorReportCreate, VisitorReportUpdate, VisitorReportResponse
from visitdesk.services.trash import get_visitor

router = APIRouter(prefix="/api/admin", tags=["reports"])


@router.get("/visitor-reports", response_model=list[VisitorReportResponse])
def list_reports(
    status_filter: ReportStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    q = db.query(VisitorReport)
    if status_filter:
        q = q.filter(VisitorReport.status == status_filter)
    reports = q.order_by(VisitorReport.created_at.desc(), VisitorReport.id.desc()).all()
    return [VisitorReportResponse.model_validate(r) for r in reports]


@router.get("/visitors/{visitor_id}/reports", response_model=list[VisitorReportResponse])
def visitor_reports(
    visitor_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    get_visitor(db, visitor_id)
    reports = (
        db.query(VisitorReport)
        .filter(VisitorReport.visitor_id == visitor_id)
        .order_by(VisitorReport.created_at.desc(), VisitorReport.id.desc())
        .all()
    )
    return [VisitorReportResponse.model_validate(r) for r in reports]


@router.post("/visitor-reports", response_model=VisitorReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    data: VisitorReportCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    get_visitor(db, data.visitor_id)
    report = VisitorReport(
        visitor_id=data.visitor_id,
        created_by=current_admin.id,
        report_type=data.report_type.strip(),
        description=data.description.strip(),
        severity_level=data.severity_level,
        status=data.status,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return VisitorReportResponse.model_validate(report)


@router.patch("/visitor-reports/{report_id}", response_model=VisitorReportResponse)
def update_report(
    report_id: int,
    data: VisitorReportUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    report = db.query(VisitorReport).filter(VisitorReport.id == report_id).first()
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    if data.status is not None:
        report.status = data.status
    if data.resolution_notes is not None:
        report.resolution_notes = data.resolution_notes
    if data.resolution_date is not None:
        report.resolution_date = data.resolution_date
    elif report.status == ReportStatus.resolved and report.resolution_date is None:
        report.resolution_date = datetime.now()
    db.add(report)
    db.commit()
    db.refresh(report)
    return VisitorReportResponse.model_validate(report)
