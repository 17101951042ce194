"""Visit lifecycle (Active -> Completed) and the mutual partner link between visits.

Services flush but never commit; the router (or the scheduler job) owns the transaction.
"""
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from visitdesk.models.visitor import Visit, Visitor
from visitdesk.services.errors import NotFoundError, StateConflictError

log = logging.getLogger("uvicorn.error")


def get_visit(db: Session, visit_id: int) -> Visit:
    visit = db.query(Visit).filter(Visit.id == visit_id).first()
    if not visit:
        raise NotFoundError("Visit not found")
    return visit


def start_visit(db: Session, visitor: Visitor, purpose: str | None = None) -> Visit:
    """Open a new Active visit and bump the visitor's visit counter."""
    visit = Visit(
        visitor_id=visitor.id,
        purpose=purpose or None,
        check_in_time=datetime.now(),
        active=True,
    )
    visitor.visit_count = (visitor.visit_count or 0) + 1
    db.add(visit)
    db.add(visitor)
    db.flush()
    return visit


def check_out(db: Session, visit_id: int, now: datetime | None = None) -> Visit:
    """Active -> Completed. A completed visit keeps its first check-out time."""
    visit = get_visit(db, visit_id)
    if not visit.active:
        raise StateConflictError("Visit is already checked out")
    visit.check_out_time = now or datetime.now()
    visit.active = False
    db.add(visit)
    db.flush()
    return visit


def check_out_all(db: Session, now: datetime | None = None) -> int:
    """Complete every Active visit with the same timestamp. Returns how many were closed."""
    now = now or datetime.now()
    active = db.query(Visit).filter(Visit.active.is_(True)).all()
    for visit in active:
        visit.check_out_time = now
        visit.active = False
        db.add(visit)
    db.flush()
    return len(active)


def get_active_visit(db: Session, visitor_id: int) -> Visit | None:
    return (
        db.query(Visit)
        .filter(Visit.visitor_id == visitor_id, Visit.active.is_(True))
        .order_by(Visit.check_in_time.desc())
        .first()
    )


def has_active_visit(db: Session, visitor_id: int) -> bool:
    return get_active_visit(db, visitor_id) is not None


def update_purpose(db: Session, visit_id: int, purpose: str) -> Visit:
    visit = get_visit(db, visit_id)
    visit.purpose = purpose
    db.add(visit)
    db.flush()
    return visit


def _detach_partner(db: Session, visit: Visit) -> None:
    """Clear visit's own pointer and every pointer that refers back to it."""
    pointing_back = db.query(Visit).filter(Visit.partner_id == visit.id, Visit.id != visit.id).all()
    for other in pointing_back:
        other.partner_id = None
        db.add(other)
    if visit.partner_id is not None:
        old = db.query(Visit).filter(Visit.id == visit.partner_id).first()
        if old is not None and old.partner_id == visit.id:
            old.partner_id = None
            db.add(old)
        visit.partner_id = None
        db.add(visit)
    db.flush()


def set_partner(db: Session, visit_id: int, partner_id: int | None) -> tuple[Visit, Visit | None]:
    """Link two visits both ways, or unlink when partner_id is None.

    Both sides are written in the caller's transaction so the link is never one-sided
    once committed. Existing links of either visit are dropped first.
    """
    visit = get_visit(db, visit_id)
    if partner_id is not None and partner_id == visit_id:
        raise StateConflictError("A visit cannot be its own partner")
    partner = get_visit(db, partner_id) if partner_id is not None else None

    _detach_partner(db, visit)
    if partner is None:
        return visit, None

    _detach_partner(db, partner)
    visit.partner_id = partner.id
    partner.partner_id = visit.id
    db.add(visit)
    db.add(partner)
    db.flush()
    log.info("Visits %s and %s linked as partners", visit.id, partner.id)
    return visit, partner


def clear_partner_links_to(db: Session, visit_ids: list[int]) -> int:
    """Null every partner pointer that references one of visit_ids (used before hard deletes)."""
    if not visit_ids:
        return 0
    cleared = (
        db.query(Visit)
        .filter(Visit.partner_id.in_(visit_ids))
        .update({Visit.partner_id: None}, synchronize_session="fetch")
    )
    db.flush()
    return cleared


def list_active_with_visitors(db: Session) -> list[tuple[Visit, Visitor]]:
    return (
        db.query(Visit, Visitor)
        .join(Visitor, Visitor.id == Visit.visitor_id)
        .filter(Visit.active.is_(True))
        .order_by(Visit.check_in_time.desc(), Visit.id.desc())
        .all()
    )


def list_history_with_visitors(db: Session, limit: int = 100) -> list[tuple[Visit, Visitor]]:
    return (
        db.query(Visit, Visitor)
        .join(Visitor, Visitor.id == Visit.visitor_id)
        .filter(Visit.active.is_(False))
        .order_by(Visit.check_in_time.desc(), Visit.id.desc())
        .limit(limit)
        .all()
    )
