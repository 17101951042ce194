"""Read-only visitor API for external systems (bearer token or admin session)."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.dependencies import get_current_admin
from visitdesk.models.admin import Admin
from visitdesk.models.visitor import Visitor, Visit
from visitdesk.schemas.visit import VisitResponse
from visitdesk.schemas.visitor import VisitorResponse
from visitdesk.services.trash import get_visitor

router = APIRouter(prefix="/api/integration", tags=["integration"])


def _visitor_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid visitor ID")


@router.get("/visitors", response_model=list[VisitorResponse])
def integration_visitors(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    visitors = db.query(Visitor).filter(Visitor.deleted.is_(False)).order_by(Visitor.id.desc()).all()
    return [VisitorResponse.model_validate(v) for v in visitors]


@router.get("/visitors/{visitor_id}", response_model=VisitorResponse)
def integration_visitor(
    visitor_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return VisitorResponse.model_validate(get_visitor(db, _visitor_id(visitor_id)))


@router.get("/visitors/{visitor_id}/visits", response_model=list[VisitResponse])
def integration_visitor_visits(
    visitor_id: str,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    visitor = get_visitor(db, _visitor_id(visitor_id))
    visits = (
        db.query(Visit)
        .filter(Visit.visitor_id == visitor.id)
        .order_by(Visit.check_in_time.desc(), Visit.id.desc())
        .all()
    )
    return [VisitResponse.model_validate(v) for v in visits]
