"""Visitor identity resolution on check-in.

Order (first match wins): exact email, exact phone string, normalized phone.
A matched visitor's profile is refreshed with the newly submitted values; when
nothing matches a new visitor is created. Both kiosk check-in flows end in
start_visit().
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from visitdesk.models.visitor import Visitor, Visit
from visitdesk.schemas.visitor import CheckInRequest
from visitdesk.services import visits as visit_service
from visitdesk.services.app_settings import country_code as current_country_code
from visitdesk.services.errors import NotFoundError
from visitdesk.services.phone import normalize_phone
from visitdesk.services.system_log import (
    create_log,
    ACTION_RETURNING_VISITOR,
    ACTION_RETURNING_VISITOR_DIRECT,
    ACTION_VISITOR_RESTORED_ON_CHECK_IN,
)

log = logging.getLogger("uvicorn.error")

# Fields refreshed from the kiosk form on a returning visit
_PROFILE_FIELDS = ("full_name", "year_of_birth", "email", "phone_number", "sex", "municipality")


@dataclass
class CheckInResult:
    visitor: Visitor
    visit: Visit
    is_returning: bool


def _visitor_query(db: Session, include_deleted: bool):
    q = db.query(Visitor)
    if not include_deleted:
        q = q.filter(Visitor.deleted.is_(False))
    # Prefer visitors that are not in the trash, then the oldest record
    return q.order_by(Visitor.deleted, Visitor.id)


def find_by_normalized_phone(
    db: Session,
    phone_number: str,
    country_code: str,
    include_deleted: bool = True,
) -> Visitor | None:
    """Linear scan; there is no normalized-phone index."""
    target = normalize_phone(phone_number, country_code)
    if target is None:
        return None
    for candidate in _visitor_query(db, include_deleted):
        if normalize_phone(candidate.phone_number, country_code) == target:
            return candidate
    return None


def find_visitor(
    db: Session,
    *,
    email: str | None,
    phone_number: str | None,
    country_code: str,
    include_deleted: bool = True,
) -> Visitor | None:
    visitor = None
    if email:
        visitor = _visitor_query(db, include_deleted).filter(Visitor.email == email).first()
    if visitor is None and phone_number:
        visitor = _visitor_query(db, include_deleted).filter(Visitor.phone_number == phone_number).first()
    if visitor is None and phone_number:
        visitor = find_by_normalized_phone(db, phone_number, country_code, include_deleted)
    return visitor


def _refresh_profile(visitor: Visitor, form: CheckInRequest) -> list[str]:
    """Overwrite stored values with non-empty submitted ones. Returns changed field names."""
    changed = []
    for field in _PROFILE_FIELDS:
        new = getattr(form, field)
        if new is None or new == "":
            continue
        if getattr(visitor, field) != new:
            setattr(visitor, field, new)
            changed.append(field)
    return changed


def resolve_visitor(db: Session, form: CheckInRequest) -> tuple[Visitor, bool]:
    """Find or create the visitor for a check-in. Returns (visitor, is_returning)."""
    code = current_country_code(db)
    visitor = find_visitor(
        db,
        email=form.email,
        phone_number=form.phone_number,
        country_code=code,
    )
    if visitor is None:
        visitor = Visitor(
            full_name=form.full_name,
            year_of_birth=form.year_of_birth,
            sex=form.sex,
            municipality=form.municipality,
            email=form.email,
            phone_number=form.phone_number,
            verified=False,
            deleted=False,
            visit_count=0,
        )
        db.add(visitor)
        db.flush()
        log.info("Created new visitor %s (id=%s)", visitor.full_name, visitor.id)
        return visitor, False

    if visitor.deleted:
        visitor.deleted = False
        create_log(
            db,
            ACTION_VISITOR_RESTORED_ON_CHECK_IN,
            f'Visitor "{visitor.full_name}" (ID: {visitor.id}) was in the trash and checked in again; restored.',
            affected_records=1,
        )
    changed = _refresh_profile(visitor, form)
    if changed:
        log.info("Returning visitor id=%s: updated %s", visitor.id, ", ".join(changed))
    db.add(visitor)
    db.flush()
    create_log(
        db,
        ACTION_RETURNING_VISITOR,
        f'Returning visitor "{visitor.full_name}" (ID: {visitor.id}) checked in.',
    )
    return visitor, True


def check_in(db: Session, form: CheckInRequest) -> CheckInResult:
    visitor, is_returning = resolve_visitor(db, form)
    visit = visit_service.start_visit(db, visitor, form.purpose)
    return CheckInResult(visitor=visitor, visit=visit, is_returning=is_returning)


def check_in_returning(db: Session, visitor_id: int) -> CheckInResult:
    """Direct check-in by badge/visitor id; no profile refresh and no purpose."""
    visitor = db.query(Visitor).filter(Visitor.id == visitor_id).first()
    if not visitor:
        raise NotFoundError("Visitor not found")
    if visitor.deleted:
        visitor.deleted = False
        create_log(
            db,
            ACTION_VISITOR_RESTORED_ON_CHECK_IN,
            f'Visitor "{visitor.full_name}" (ID: {visitor.id}) was in the trash and checked in again; restored.',
            affected_records=1,
        )
    create_log(
        db,
        ACTION_RETURNING_VISITOR_DIRECT,
        f'Returning visitor "{visitor.full_name}" (ID: {visitor.id}) directly checked in.',
    )
    visit = visit_service.start_visit(db, visitor, None)
    return CheckInResult(visitor=visitor, visit=visit, is_returning=True)
