"""Kiosk endpoints: check-in, check-out, returning visitor lookup. No admin login required."""
from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from visitdesk.database import get_db
from visitdesk.models.visitor import Visitor
from visitdesk.schemas.visit import CheckInResponse, CheckOutRequest, VisitResponse, VisitWithVisitor
from visitdesk.schemas.visitor import (
    CheckInRequest,
    ReturningCheckInRequest,
    VisitorLookupRequest,
    VisitorLookupResponse,
    VisitorResponse,
)
from visitdesk.services import identity, visits as visit_service
from visitdesk.services.app_settings import country_code
from visitdesk.services.errors import NotFoundError
from visitdesk.services.notifications import hub, check_in_payload
from visitdesk.services.phone import normalize_phone
from visitdesk.services.system_log import create_log, ACTION_RETURNING_VISITOR_LOOKUP

router = APIRouter(prefix="/api/visitors", tags=["visitors"])


def _check_in_response(result: identity.CheckInResult) -> CheckInResponse:
    return CheckInResponse(
        visitor=VisitorResponse.model_validate(result.visitor),
        visit=VisitResponse.model_validate(result.visit),
        is_returning_visitor=result.is_returning,
    )


@router.post("/check-in", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED)
def check_in(
    data: CheckInRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    result = identity.check_in(db, data)
    db.commit()
    db.refresh(result.visitor)
    db.refresh(result.visit)
    background_tasks.add_task(hub.broadcast_check_in, check_in_payload(result.visitor), data.purpose)
    return _check_in_response(result)


@router.post("/check-in/returning", response_model=CheckInResponse, status_code=status.HTTP_201_CREATED)
def check_in_returning(
    data: ReturningCheckInRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    result = identity.check_in_returning(db, data.visitor_id)
    db.commit()
    db.refresh(result.visitor)
    db.refresh(result.visit)
    background_tasks.add_task(hub.broadcast_check_in, check_in_payload(result.visitor), None)
    return _check_in_response(result)


@router.post("/check-out", response_model=VisitResponse)
def check_out(data: CheckOutRequest, db: Session = Depends(get_db)):
    visit = visit_service.check_out(db, data.visit_id)
    db.commit()
    db.refresh(visit)
    return VisitResponse.model_validate(visit)


@router.post("/lookup", response_model=VisitorLookupResponse)
def lookup(data: VisitorLookupRequest, db: Session = Depends(get_db)):
    """Find a returning visitor by phone (exact, then normalized) with optional year-of-birth check."""
    code = country_code(db)
    if normalize_phone(data.phone_number, code) is None:
        return JSONResponse(
            status_code=400,
            content={"found": False, "message": "Phone number is too short to look up"},
        )
    visitor = identity.find_visitor(
        db,
        email=None,
        phone_number=data.phone_number.strip(),
        country_code=code,
        include_deleted=False,
    )
    if not visitor:
        return JSONResponse(
            status_code=404,
            content={"found": False, "message": "No visitor found with this phone number"},
        )
    if data.year_of_birth and visitor.year_of_birth != data.year_of_birth:
        return JSONResponse(
            status_code=400,
            content={"found": False, "message": "Year of birth does not match our records"},
        )
    create_log(
        db,
        ACTION_RETURNING_VISITOR_LOOKUP,
        f'Returning visitor "{visitor.full_name}" (ID: {visitor.id}) looked up via phone number.',
    )
    db.commit()
    return VisitorLookupResponse(found=True, visitor=VisitorResponse.model_validate(visitor))


@router.get("/{visitor_id}/active-visit", response_model=VisitWithVisitor)
def active_visit(visitor_id: int, db: Session = Depends(get_db)):
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    visit = visit_service.get_active_visit(db, visitor_id) if visitor else None
    if not visit:
        raise NotFoundError("No active visit found for this visitor")
    return VisitWithVisitor(
        visit=VisitResponse.model_validate(visit),
        visitor=VisitorResponse.model_validate(visitor),
    )
